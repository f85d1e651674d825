from __future__ import annotations

import ipaddress
import os
import tomllib
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

DEFAULT_DATA_DIR = Path.home() / ".ads_dashboard"
DEFAULT_CONFIG_PATH = DEFAULT_DATA_DIR / "config.toml"


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    web_host: str = "127.0.0.1"
    web_port: int = Field(default=8766, ge=1, le=65535)
    dev_enable_docs: bool = False
    log_format: Literal["json", "text"] = "json"
    max_records: int = Field(default=50_000, ge=1, le=1_000_000)

    @field_validator("web_host")
    @classmethod
    def validate_loopback(cls, value: str) -> str:
        host = value.strip()
        if host == "localhost":
            return host
        try:
            ip = ipaddress.ip_address(host)
        except ValueError as exc:
            raise ValueError("web_host must be localhost or a loopback IP") from exc
        if not ip.is_loopback:
            raise ValueError("web_host must be a loopback address")
        return host


def _parse_bool(raw: str) -> bool:
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"invalid boolean: {raw}")


_ENV_FIELDS: dict[str, tuple[str, str]] = {
    "ADS_DASHBOARD_HOST": ("web_host", "str"),
    "ADS_DASHBOARD_PORT": ("web_port", "int"),
    "ADS_DASHBOARD_DEV_ENABLE_DOCS": ("dev_enable_docs", "bool"),
    "ADS_DASHBOARD_LOG_FORMAT": ("log_format", "lower"),
    "ADS_DASHBOARD_MAX_RECORDS": ("max_records", "int"),
}


def _env_overrides() -> dict[str, Any]:
    out: dict[str, Any] = {}
    for env_name, (field_name, kind) in _ENV_FIELDS.items():
        raw = os.getenv(env_name)
        if raw is None:
            continue
        if kind == "int":
            out[field_name] = int(raw)
        elif kind == "bool":
            out[field_name] = _parse_bool(raw)
        elif kind == "lower":
            out[field_name] = raw.strip().lower()
        else:
            out[field_name] = raw.strip()
    return out


def default_config_toml() -> str:
    return """web_host = \"127.0.0.1\"
web_port = 8766
dev_enable_docs = false
log_format = \"json\"
max_records = 50000
"""


def load_config(config_path: Path | None = None) -> AppConfig:
    """Read TOML config when present, then apply ``ADS_DASHBOARD_*`` overrides."""
    path = (config_path or DEFAULT_CONFIG_PATH).expanduser().resolve(strict=False)
    parsed: dict[str, Any] = {}
    if path.is_file():
        with path.open("rb") as handle:
            parsed = tomllib.load(handle)
    try:
        parsed.update(_env_overrides())
        return AppConfig.model_validate(parsed)
    except (ValidationError, ValueError) as exc:
        raise ValueError(f"invalid config at {path}: {exc}") from exc
