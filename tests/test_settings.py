import pytest

from retell_proxy.api.main import create_app
from retell_proxy.config.settings import ConfigurationError, Settings, load_settings

ENV_VARS = (
    "RETELL_API_KEY",
    "RETELL_PHONE_NUMBER",
    "RETELL_BASE_URL",
    "API_KEY",
    "HOST",
    "PORT",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_from_bundled_yaml():
    settings = load_settings()

    assert settings.retell_base_url == "https://api.retellai.com"
    assert settings.port == 3000
    assert settings.host == "0.0.0.0"
    assert settings.public_routes == ["/test-form"]
    assert settings.retell_api_key is None


def test_env_overrides_yaml(monkeypatch, tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text(
        "retell:\n  base_url: http://from-yaml\nserver:\n  port: 8000\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("RETELL_API_KEY", "key_1")
    monkeypatch.setenv("RETELL_PHONE_NUMBER", "+15550001111")
    monkeypatch.setenv("API_KEY", "secret")
    monkeypatch.setenv("PORT", "9090")

    settings = load_settings(str(config))

    assert settings.retell_base_url == "http://from-yaml"
    assert settings.port == 9090
    assert settings.retell_api_key == "key_1"
    assert settings.retell_phone_number == "+15550001111"
    assert settings.api_key == "secret"


def test_missing_config_file_uses_defaults(tmp_path):
    settings = load_settings(str(tmp_path / "absent.yaml"))

    assert settings.port == 3000
    assert settings.public_routes == ["/test-form"]


def test_blank_env_values_are_unset(monkeypatch, tmp_path):
    monkeypatch.setenv("RETELL_API_KEY", "   ")

    settings = load_settings(str(tmp_path / "absent.yaml"))

    assert settings.retell_api_key is None


def test_invalid_port(monkeypatch):
    monkeypatch.setenv("PORT", "eighty")

    with pytest.raises(ConfigurationError):
        load_settings()


def test_require_retell_names_missing_values():
    with pytest.raises(ConfigurationError, match="RETELL_PHONE_NUMBER"):
        Settings(retell_api_key="key_1").require_retell()

    with pytest.raises(ConfigurationError, match="RETELL_API_KEY"):
        Settings(retell_phone_number="+15550001111").require_retell()


def test_repr_hides_secrets():
    settings = Settings(retell_api_key="key_very_secret", api_key="shared_secret")

    assert "key_very_secret" not in repr(settings)
    assert "shared_secret" not in repr(settings)


def test_app_refuses_to_start_without_retell_config():
    with pytest.raises(ConfigurationError):
        create_app(Settings(api_key="secret"))
