import asyncio
import json
from dataclasses import dataclass
from typing import Any, Optional

import aiohttp

from retell_proxy.config.settings import Settings
from retell_proxy.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class UpstreamError:
    """Ошибка Retell API: не-2xx статус (status задан) или сбой сети (status=None)."""

    status: Optional[int]
    body: Any
    message: str


@dataclass
class UpstreamResult:
    """Результат одного запроса к Retell: либо data, либо error."""

    data: Any = None
    error: Optional[UpstreamError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class RetellClient:
    """
    Асинхронный клиент для Retell API (REST).

    Единственная точка контакта с Retell: подставляет base_url и
    Bearer-ключ, сериализует JSON-тело и разбирает JSON-ответ.
    Повторов нет, таймауты — по умолчанию aiohttp.
    Ошибки не выбрасываются, а возвращаются в UpstreamResult.
    """

    def __init__(self, settings: Settings):
        self.base_url = settings.retell_base_url.rstrip("/")
        self._api_key = settings.retell_api_key
        self.session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def connect(self):
        """Создаёт aiohttp-сессию, если её ещё нет."""
        if self.session is None:
            self.session = aiohttp.ClientSession(
                headers={
                    "Authorization": f"Bearer {self._api_key}",
                    "Content-Type": "application/json",
                },
            )
            logger.info("✅ Retell: сессия инициализирована (%s)", self.base_url)

    async def close(self):
        """Закрывает сессию."""
        if self.session is not None:
            await self.session.close()
            self.session = None
            logger.info("🔌 Retell: сессия закрыта")

    async def get(self, path: str) -> UpstreamResult:
        """GET {base_url}{path} с авторизацией."""
        return await self._request("GET", path)

    async def post(self, path: str, body: Any) -> UpstreamResult:
        """POST {base_url}{path} с JSON-телом и авторизацией."""
        return await self._request("POST", path, body)

    async def _request(self, method: str, path: str, body: Any = None) -> UpstreamResult:
        if self.session is None:
            await self.connect()

        url = f"{self.base_url}{path}"
        data = json.dumps(body) if body is not None else None

        try:
            async with self.session.request(method, url, data=data) as resp:
                text = _decode(await resp.read(), resp.charset)
                if not 200 <= resp.status < 300:
                    logger.error(f"❌ Retell: {method} {path} {resp.status}: {text}")
                    return UpstreamResult(
                        error=UpstreamError(
                            status=resp.status,
                            body=_parse_json(text, default=text),
                            message=f"Retell API error {resp.status}: {text}",
                        )
                    )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"❌ Retell: сетевая ошибка {method} {path}: {e}")
            return UpstreamResult(
                error=UpstreamError(status=None, body=None, message=str(e) or type(e).__name__)
            )

        if not text:
            return UpstreamResult(data={})

        try:
            return UpstreamResult(data=json.loads(text))
        except ValueError:
            logger.error(f"❌ Retell: {method} {path} вернул не-JSON: {text[:200]}")
            return UpstreamResult(
                error=UpstreamError(
                    status=resp.status,
                    body=text,
                    message="Invalid JSON from Retell API",
                )
            )


def _decode(raw: bytes, charset: Optional[str]) -> str:
    """Байты ответа → str; некорректные последовательности заменяются на U+FFFD."""
    try:
        return raw.decode(charset or "utf-8", errors="replace")
    except LookupError:
        return raw.decode("utf-8", errors="replace")


def _parse_json(text: str, default: Any = None) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        return default
