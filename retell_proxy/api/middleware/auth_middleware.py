from typing import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse

from retell_proxy.config.settings import Settings
from retell_proxy.utils.logger import get_logger

logger = get_logger(__name__)

API_KEY_HEADER = "x-api-key"


class ApiKeyGate:
    """
    Проверка общего секрета в заголовке x-api-key для всех путей,
    кроме публичных (settings.public_routes).

    Сравнение обычное (==), не constant-time.
    Если API_KEY не задан, закрыты все непубличные пути.
    """

    def __init__(self, settings: Settings):
        self.api_key = settings.api_key
        self.public_routes = set(settings.public_routes)

    def is_authorized(self, request: Request) -> bool:
        if request.url.path in self.public_routes:
            return True
        header = request.headers.get(API_KEY_HEADER)
        return bool(header) and self.api_key is not None and header == self.api_key

    async def __call__(self, request: Request, call_next: Callable) -> Response:
        if not self.is_authorized(request):
            logger.warning(f"⛔ Unauthorized: {request.method} {request.url.path}")
            return JSONResponse(status_code=401, content={"error": "Unauthorized"})
        return await call_next(request)
