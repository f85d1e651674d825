from __future__ import annotations

from fastapi import FastAPI

from ads_dashboard.config import AppConfig
from ads_dashboard.service import ReportService
from ads_dashboard.web.middleware import SecurityHeadersMiddleware
from ads_dashboard.web.routes import router


def create_app(config: AppConfig, service: ReportService | None = None) -> FastAPI:
    docs_enabled = bool(config.dev_enable_docs)

    app = FastAPI(
        title="Ads Insights Dashboard",
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )

    app.state.config = config
    app.state.report_service = service or ReportService(max_records=config.max_records)

    app.add_middleware(SecurityHeadersMiddleware)
    app.include_router(router)

    return app
