"""FastAPI application factory"""

import uvicorn
from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from gpay_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from gpay_gateway.api.routes import subscriptions
from gpay_gateway.infrastructure.clients.processor import StripeClient
from gpay_gateway.infrastructure.observability.logging import setup_logging
from gpay_gateway.config import Settings, settings as default_settings

# Setup structured logging
setup_logging(default_settings.log_level)


def create_app(settings: Settings | None = None, processor_client: StripeClient | None = None) -> FastAPI:
    """Create and configure FastAPI application"""
    settings = settings or default_settings
    app = FastAPI(
        title="Google Pay Subscription Gateway",
        description="Turns wallet payment tokens into processor subscriptions",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Collaborators live on app state; endpoints reach them through dependencies
    app.state.settings = settings
    app.state.processor_client = processor_client or StripeClient(
        secret_key=settings.stripe_secret_key,
        base_url=settings.stripe_api_base,
        timeout=settings.http_timeout_seconds,
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

    app.include_router(subscriptions.router, tags=["subscriptions"])

    return app


def serve() -> None:
    """Run the gateway under uvicorn on the configured host and port"""
    uvicorn.run(create_app(), host=default_settings.host, port=default_settings.port)


app = create_app()
