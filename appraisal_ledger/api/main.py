"""FastAPI application factory"""

import uvicorn
from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from appraisal_ledger.api.middleware import RequestIDMiddleware, MetricsMiddleware
from appraisal_ledger.api.v1 import banks, loans, dashboard, reports
from appraisal_ledger.infrastructure.observability.logging import setup_logging
from appraisal_ledger.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Appraisal Ledger",
        description="Gold-loan appraisal register, earnings dashboard and reports",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(banks.router, prefix="/v1", tags=["banks"])
    app.include_router(loans.router, prefix="/v1", tags=["loans"])
    app.include_router(dashboard.router, prefix="/v1", tags=["dashboard"])
    app.include_router(reports.router, prefix="/v1", tags=["reports"])

    return app


app = create_app()


def run() -> None:
    """Serve the API with uvicorn (``appraisal-ledger`` console script)"""
    uvicorn.run(
        "appraisal_ledger.api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
