"""FastAPI application entry point."""

import os
from typing import Any

import uvicorn
from fastapi import FastAPI

from .config import AppConfig, load_config
from .dependencies import include_routers
from .logging import configure_logging


def create_app(config: AppConfig | None = None, *, s3_client: Any | None = None) -> FastAPI:
    """Build FastAPI instance with configured dependencies."""
    configure_logging()
    cfg = config or load_config()
    app = FastAPI(title="Tubely")
    include_routers(app, cfg, s3_client=s3_client)
    return app


def run() -> None:
    """Serve the app with uvicorn (``tubely-serve`` console script)."""
    uvicorn.run(
        "tubely.main:create_app",
        factory=True,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", 8091)),
    )
