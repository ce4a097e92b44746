"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from venue_ledger.api.middleware import RequestIDMiddleware, MetricsMiddleware
from venue_ledger.api.v1 import accounts, promotions, sessions
from venue_ledger.infrastructure.observability.logging import setup_logging
from venue_ledger.config import settings

# Setup structured logging
setup_logging(settings.log_level, settings.service_name)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Venue Ledger",
        description="Deposited and promotional balances with payment authorization",
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
    app.include_router(sessions.router, prefix="/v1", tags=["sessions"])
    app.include_router(accounts.router, prefix="/v1", tags=["accounts"])
    app.include_router(promotions.router, prefix="/v1", tags=["promotions"])

    return app


app = create_app()
