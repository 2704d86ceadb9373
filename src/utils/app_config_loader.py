"""
Application configuration loader (server, Telegram, completion API, channel search).

Fixed tunables live in config/app_config.yml; credentials and endpoints come from
the environment (.env is loaded by the API entry point).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)


class ServerConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = Field(default=4000, ge=1, le=65535)
    cors_origins: List[str] = Field(default_factory=lambda: ["http://localhost:3000", "http://localhost:3001"])
    cors_methods: List[str] = Field(default_factory=lambda: ["GET", "POST", "PUT", "DELETE", "PATCH"])
    cors_headers: List[str] = Field(default_factory=lambda: ["Content-Type", "Authorization"])


class TelegramConfig(BaseModel):
    api_id: int = 0
    api_hash: str = ""
    phone: str = ""
    session: str = ""
    connection_retries: int = Field(default=5, ge=0)


class LLMConfig(BaseModel):
    url: str = ""
    api_key: str = ""
    model: str = "mistralai/mistral-7b-instruct:free"
    max_tokens: int = Field(default=1000, ge=1)
    temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    timeout_seconds: float = Field(default=60.0, gt=0)


class SearchConfig(BaseModel):
    fetch_limit: int = Field(default=300, ge=1)
    max_matches: int = Field(default=20, ge=1)


class AppConfig(BaseModel):
    server: ServerConfig = Field(default_factory=ServerConfig)
    telegram: TelegramConfig = Field(default_factory=TelegramConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    database_url: Optional[str] = None


def _apply_env(data: dict) -> dict:
    """Overlay credentials and endpoints from the environment onto the YAML data."""
    server = data.setdefault("server", {})
    telegram = data.setdefault("telegram", {})
    llm = data.setdefault("llm", {})

    env_map = [
        (server, "host", "SERVER_HOST"),
        (server, "port", "SERVER_PORT"),
        (telegram, "api_id", "TELEGRAM_API_ID"),
        (telegram, "api_hash", "TELEGRAM_API_HASH"),
        (telegram, "phone", "TELEGRAM_PHONE"),
        (telegram, "session", "TELEGRAM_SESSION"),
        (llm, "url", "OPENROUTER_URL"),
        (llm, "api_key", "OPENROUTER_API_KEY"),
    ]
    for section, key, env_name in env_map:
        value = os.getenv(env_name)
        if value:
            section[key] = value

    if os.getenv("DATABASE_URL"):
        data["database_url"] = os.environ["DATABASE_URL"]
    return data


def load_app_config(config_path: Optional[Path] = None) -> AppConfig:
    if config_path is None:
        env_path = os.getenv("APP_CONFIG_PATH")
        config_path = Path(env_path) if env_path else Path(__file__).parent.parent.parent / "config" / "app_config.yml"

    data: dict = {}
    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    else:
        logger.warning("App config file not found: %s; using defaults", config_path)

    try:
        cfg = AppConfig(**_apply_env(data))
        logger.info("Loaded app config (model=%s, port=%s)", cfg.llm.model, cfg.server.port)
        return cfg
    except ValidationError as e:
        logger.error("App config validation failed: %s", e)
        raise
