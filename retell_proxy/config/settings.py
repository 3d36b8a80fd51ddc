"""
Настройки прокси-сервиса Retell.

Секреты приходят только из окружения (.env), несекретные значения по
умолчанию лежат в retell_config.yaml рядом с этим модулем. Объект Settings
создаётся один раз при старте и явно передаётся в клиент Retell,
проверку ключа и регистрацию маршрутов.
"""

import os
from typing import List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "retell_config.yaml")


class ConfigurationError(Exception):
    """Обязательная настройка отсутствует или некорректна. Фатально при старте."""


class Settings(BaseModel):
    retell_api_key: Optional[str] = Field(default=None, repr=False)
    retell_phone_number: Optional[str] = None
    retell_base_url: str = "https://api.retellai.com"

    # Общий секрет для заголовка x-api-key
    api_key: Optional[str] = Field(default=None, repr=False)

    host: str = "0.0.0.0"
    port: int = 3000
    public_routes: List[str] = Field(default_factory=lambda: ["/test-form"])
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    def require_retell(self) -> None:
        """Без ключа и номера Retell исходящие маршруты не регистрируются."""
        missing = []
        if not self.retell_api_key:
            missing.append("RETELL_API_KEY")
        if not self.retell_phone_number:
            missing.append("RETELL_PHONE_NUMBER")
        if missing:
            raise ConfigurationError(
                f"Missing {' or '.join(missing)} in env. Please set them in your .env file"
            )


def _env(name: str) -> Optional[str]:
    # Пустая строка в .env считается неустановленным значением
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _read_yaml(config_path: str) -> dict:
    if not os.path.exists(config_path):
        return {}
    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_settings(config_path: Optional[str] = None) -> Settings:
    """
    Собирает Settings: .env → переменные окружения, YAML → значения по умолчанию.

    Переменные окружения имеют приоритет над файлом.
    """
    load_dotenv()

    raw_cfg = _read_yaml(config_path or DEFAULT_CONFIG_PATH)
    retell_cfg = raw_cfg.get("retell") or {}
    server_cfg = raw_cfg.get("server") or {}
    cors_cfg = server_cfg.get("cors") or {}

    values = {
        "retell_api_key": _env("RETELL_API_KEY"),
        "retell_phone_number": _env("RETELL_PHONE_NUMBER"),
        "api_key": _env("API_KEY"),
        "log_level": (_env("LOG_LEVEL") or "INFO").upper(),
    }

    base_url = _env("RETELL_BASE_URL") or retell_cfg.get("base_url")
    if base_url:
        values["retell_base_url"] = base_url.rstrip("/")

    host = _env("HOST") or server_cfg.get("host")
    if host:
        values["host"] = host

    port = _env("PORT") or server_cfg.get("port")
    if port is not None:
        try:
            values["port"] = int(port)
        except (TypeError, ValueError):
            raise ConfigurationError(f"Invalid PORT value: {port!r}")

    if "public_routes" in server_cfg:
        values["public_routes"] = list(server_cfg["public_routes"] or [])
    if cors_cfg.get("origins"):
        values["cors_origins"] = list(cors_cfg["origins"])

    return Settings(**values)
