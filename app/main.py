import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.swpshop.api import api_router
from app.swpshop.core import config
from app.swpshop.core.deps import build_products_client
from app.swpshop.core.errors import setup_exception_handlers
from app.swpshop.core.logging import configure_logging
from app.swpshop.middleware.observability import ObservabilityMiddleware
from app.swpshop.middleware.trace import TraceIdMiddleware
from swpshop_client_sdk.transport import Transport


def create_app(settings: config.Settings | None = None, transport: Transport | None = None) -> FastAPI:
    settings = settings or config.settings
    configure_logging(settings.LOG_LEVEL)
    app = FastAPI(title=settings.APP_NAME)
    app.state.settings = settings
    app.state.products_client = build_products_client(settings, transport)
    app.add_middleware(TraceIdMiddleware)
    app.add_middleware(ObservabilityMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        expose_headers=["X-Trace-ID"],
    )
    setup_exception_handlers(app)
    app.include_router(api_router)
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=config.settings.PORT)
