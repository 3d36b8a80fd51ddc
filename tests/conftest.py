import pytest
from fastapi.testclient import TestClient

from retell_proxy.api.main import create_app
from retell_proxy.api.routes.outbound_routes import get_retell_client
from retell_proxy.config.settings import Settings
from retell_proxy.utils.retell_client import UpstreamResult

API_KEY = "test-secret"
AUTH = {"x-api-key": API_KEY}


class FakeRetell:
    """Подменяет RetellClient: запоминает запросы и отдаёт заданный результат."""

    def __init__(self, result=None, raises=None):
        self.result = result if result is not None else UpstreamResult(data={})
        self.raises = raises
        self.calls = []

    async def _answer(self, method, path, body=None):
        self.calls.append((method, path, body))
        if self.raises is not None:
            raise self.raises
        return self.result

    async def get(self, path):
        return await self._answer("GET", path)

    async def post(self, path, body):
        return await self._answer("POST", path, body)


@pytest.fixture
def settings():
    return Settings(
        retell_api_key="key_retell_test",
        retell_phone_number="+15550001111",
        retell_base_url="http://retell.invalid",
        api_key=API_KEY,
    )


@pytest.fixture
def fake_retell():
    return FakeRetell()


@pytest.fixture
def app(settings, fake_retell):
    app = create_app(settings)
    app.dependency_overrides[get_retell_client] = lambda: fake_retell
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def auth_headers():
    return dict(AUTH)
