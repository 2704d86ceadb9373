"""Pytest fixtures: document stores, fake channel reader / analyzer, API client."""

from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from src.database.store import DocumentStore
from src.integrations.contracts.channels import ChannelInfo, ChannelPost

SAMPLE_ANALYSIS = {
    "summary": "Glove offers",
    "trends": "Nitrile demand",
    "contacts": ["+251911000000"],
    "companies": [],
    "discounts": ["10% off"],
}


class FakeChannelReader:
    """Stands in for TelegramChannelReader; records calls."""

    def __init__(self, posts: Optional[List[ChannelPost]] = None, error: Optional[Exception] = None):
        self.channel = ChannelInfo(id=1001, title="Med Supplies", participants=42)
        self.posts = posts or []
        self.error = error
        self.resolved: List[str] = []

    async def resolve_channel(self, handle_or_link: str):
        self.resolved.append(handle_or_link)
        if self.error is not None:
            raise self.error
        return self.channel, "entity"

    async def fetch_recent_messages(self, entity: Any, limit: Optional[int] = None):
        return list(self.posts)

    def is_connected(self) -> bool:
        return True


class FakeAnalyzer:
    def __init__(self, result: Optional[Dict[str, Any]] = None):
        self.result = result if result is not None else dict(SAMPLE_ANALYSIS)
        self.prompts: List[str] = []

    async def analyze(self, prompt: str) -> Dict[str, Any]:
        self.prompts.append(prompt)
        return self.result


@pytest.fixture
def db():
    """In-memory DocumentStore stub for tests."""
    return DocumentStore()


@pytest.fixture
def fake_reader():
    return FakeChannelReader()


@pytest.fixture
def fake_analyzer():
    return FakeAnalyzer()


@pytest.fixture
def client(db, fake_reader, fake_analyzer):
    from src.api.main import app
    from src.api.dependencies import get_channel_reader, get_completion_client, get_db

    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_channel_reader] = lambda: fake_reader
    app.dependency_overrides[get_completion_client] = lambda: fake_analyzer
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
