"""FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.errors import register_error_handlers
from .clock import Clock, epoch_ms
from .config import AppConfig, load_config
from .dependencies import include_routers
from .logging import configure_logging
from .storage.object_store import ObjectStore


def create_app(
    config: AppConfig | None = None,
    *,
    object_store: ObjectStore | None = None,
    clock: Clock = epoch_ms,
) -> FastAPI:
    """Build FastAPI instance with configured dependencies."""
    configure_logging()
    cfg = config or load_config()
    app = FastAPI(title="LocalVision Signage")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_allow_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["content-type"],
    )
    register_error_handlers(app)
    include_routers(app, cfg, object_store=object_store, clock=clock)
    return app


app = create_app()
