"""
Process-wide singletons and FastAPI dependency getters.

The document store is chosen once per process: SQLAlchemy when DATABASE_URL is
set, else the in-memory stub. The Telegram reader is built lazily because the
Telethon client refuses empty credentials and must be created inside the
running event loop. Tests replace any getter through ``app.dependency_overrides``.
"""

import logging
from typing import Optional

from fastapi import Depends

from src.integrations.clients.real_http.completions import CompletionClient
from src.integrations.telegram.channel_reader import TelegramChannelReader
from src.services.channel_search import ChannelSearchService
from src.utils.app_config_loader import load_app_config

logger = logging.getLogger(__name__)

app_config = load_app_config()

if app_config.database_url:
    from src.database.store_real import DocumentStore

    document_store = DocumentStore(connection_string=app_config.database_url)
else:
    from src.database.store import DocumentStore

    document_store = DocumentStore()

_channel_reader: Optional[TelegramChannelReader] = None
_completion_client: Optional[CompletionClient] = None


def get_db():
    return document_store


def get_channel_reader() -> TelegramChannelReader:
    global _channel_reader
    if _channel_reader is None:
        _channel_reader = TelegramChannelReader.from_config(app_config.telegram, fetch_limit=app_config.search.fetch_limit)
    return _channel_reader


def current_channel_reader() -> Optional[TelegramChannelReader]:
    """The reader if one has been built, without building it."""
    return _channel_reader


def get_completion_client() -> CompletionClient:
    global _completion_client
    if _completion_client is None:
        llm = app_config.llm
        _completion_client = CompletionClient(
            url=llm.url,
            api_key=llm.api_key,
            model=llm.model,
            max_tokens=llm.max_tokens,
            temperature=llm.temperature,
            timeout_seconds=llm.timeout_seconds,
        )
    return _completion_client


def get_search_service(
    reader=Depends(get_channel_reader),
    analyzer=Depends(get_completion_client),
) -> ChannelSearchService:
    return ChannelSearchService(reader, analyzer, max_matches=app_config.search.max_matches)
