import logging
from datetime import datetime, timezone
from typing import Union

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import Config
from .core.middleware import install_exception_handlers, log_requests
from .core.routing import Middleware, endpoint


logger = logging.getLogger(__name__)


def create_app(title: str = "Service") -> FastAPI:
    """FastAPI app with CORS, request logging, error envelopes and ``/health``."""
    Config.validate()
    app = FastAPI(title=title)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=Config.allowed_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def _log_requests(request, call_next):
        return await log_requests(request, call_next)

    install_exception_handlers(app)

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "service": Config.SERVICE_NAME,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    return app


def add_route(target: Union[FastAPI, APIRouter], method: str, path: str, *middlewares: Middleware) -> None:
    """Mount a middleware chain at ``method path``."""
    target.add_api_route(path, endpoint(*middlewares), methods=[method.upper()])
    logger.debug(f"Mounted {method.upper()} {path} with {len(middlewares)} step(s)")
