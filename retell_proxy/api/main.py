# retell_proxy/api/main.py
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from retell_proxy.api.middleware.auth_middleware import ApiKeyGate
from retell_proxy.api.middleware.logging_middleware import logging_middleware
from retell_proxy.api.routes.form_echo import router as form_router
from retell_proxy.api.routes.health_check import router as health_router
from retell_proxy.api.routes.outbound_routes import register_outbound_routes
from retell_proxy.config.settings import ConfigurationError, Settings, load_settings
from retell_proxy.utils.logger import get_logger, setup_logging
from retell_proxy.utils.retell_client import RetellClient

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Собирает приложение. Без ключа или номера Retell
    выбрасывает ConfigurationError, и сервер не стартует.
    """
    settings = settings or load_settings()
    setup_logging(settings.log_level)

    retell_client = RetellClient(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await retell_client.connect()
        try:
            yield
        finally:
            await retell_client.close()

    app = FastAPI(title="Retell Outbound Proxy", lifespan=lifespan)
    app.state.settings = settings
    app.state.retell_client = retell_client

    # Порядок важен: последний добавленный middleware — внешний.
    # CORS отвечает на preflight до проверки ключа.
    app.middleware("http")(ApiKeyGate(settings))
    app.middleware("http")(logging_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["POST", "GET", "OPTIONS"],
        allow_headers=["*"],
        allow_credentials=True,
    )

    app.include_router(form_router)
    app.include_router(health_router)
    register_outbound_routes(app, settings)

    return app


def run() -> None:
    """Точка входа `retell-proxy`: запускает uvicorn на settings.host:settings.port."""
    settings = load_settings()
    setup_logging(settings.log_level)
    try:
        settings.require_retell()
    except ConfigurationError as e:
        logger.error(f"❌ {e}")
        raise SystemExit(1)

    logger.info(f"🚀 Server running on port {settings.port}")
    uvicorn.run(
        "retell_proxy.api.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    run()
