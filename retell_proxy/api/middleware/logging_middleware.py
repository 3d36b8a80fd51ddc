import time
from typing import Callable

from fastapi import Request, Response

from retell_proxy.utils.logger import get_logger

logger = get_logger(__name__)

# Значения этих заголовков не попадают в лог
REDACTED_HEADERS = {"x-api-key", "authorization", "cookie"}


def redact_headers(headers) -> dict:
    return {
        key: ("***" if key.lower() in REDACTED_HEADERS else value)
        for key, value in headers.items()
    }


async def logging_middleware(request: Request, call_next: Callable) -> Response:
    """
    Логирует каждый запрос (метод, путь, клиент, заголовки без секретов)
    и ответ (статус, время обработки). Исключение логируется со стеком
    и пробрасывается дальше.
    """
    started = time.perf_counter()
    client_host = request.client.host if request.client else "unknown"
    logger.info(
        f"➡️ {request.method} {request.url.path} | "
        f"client={client_host} | headers={redact_headers(request.headers)}"
    )

    try:
        response = await call_next(request)
    except Exception as e:
        logger.error(
            f"💥 {request.method} {request.url.path} | {e} | "
            f"{time.perf_counter() - started:.3f}s",
            exc_info=True,
        )
        raise

    logger.info(
        f"⬅️ {response.status_code} {request.method} {request.url.path} | "
        f"{time.perf_counter() - started:.3f}s"
    )
    return response
