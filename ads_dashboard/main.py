from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

import uvicorn

from adinsights import build_report
from ads_dashboard.config import AppConfig, load_config
from ads_dashboard.intake import IntakeError, parse_api_response
from ads_dashboard.logging import configure_logging
from ads_dashboard.web.app import create_app

logger = logging.getLogger("ads_dashboard")


def _load(config_path: str | None) -> AppConfig:
    return load_config(Path(config_path).expanduser() if config_path else None)


def _apply_cli_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    updates: dict[str, Any] = {}
    if getattr(args, "host", None) is not None:
        updates["web_host"] = str(args.host)
    if getattr(args, "port", None) is not None:
        updates["web_port"] = int(args.port)
    if not updates:
        return config
    merged = config.model_dump()
    merged.update(updates)
    return AppConfig.model_validate(merged)


def cmd_report(args: argparse.Namespace) -> int:
    source = Path(args.input).expanduser()
    try:
        records = parse_api_response(source.read_bytes())
    except (OSError, IntakeError) as exc:
        logger.error("cannot read report input: %s", exc)
        return 1

    report = build_report(records)
    rendered = report.model_dump_json(indent=2)
    if args.output:
        Path(args.output).expanduser().write_text(rendered + "\n", encoding="utf-8")
        logger.info("report written to %s", args.output, extra={"records": len(records)})
    else:
        sys.stdout.write(rendered + "\n")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    config = _apply_cli_overrides(args.app_config, args)
    app = create_app(config)
    uvicorn.run(
        app,
        host=config.web_host,
        port=config.web_port,
        log_level="debug" if args.verbose else "info",
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ads-dashboard")
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("--config", type=str, default=None, help="path to config.toml")
    subparsers = parser.add_subparsers(dest="command", required=True)

    report_parser = subparsers.add_parser("report", help="compute KPIs and insights from a JSON export")
    report_parser.add_argument("input", type=str, help="API envelope or list of daily rows")
    report_parser.add_argument("--output", type=str, default=None, help="write JSON here instead of stdout")
    report_parser.set_defaults(func=cmd_report)

    serve_parser = subparsers.add_parser("serve", help="serve the local JSON API")
    serve_parser.add_argument("--host", type=str, default=None, help="bind host override")
    serve_parser.add_argument("--port", type=int, default=None, help="bind port override")
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _load(args.config)
    except ValueError as exc:
        parser.error(str(exc))
    args.app_config = config
    configure_logging(bool(args.verbose), config.log_format)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
