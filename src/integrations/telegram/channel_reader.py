"""
Telegram channel reader.

Wraps a single Telethon client shared by every request: resolves a channel
handle or invite link, fetches the most recent posts and filters them by
keyword. Upstream RPC failures are translated into the channel error family so
the HTTP layer can answer with a user-facing message.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, List, Optional

from telethon import TelegramClient, errors
from telethon.sessions import StringSession
from telethon.tl.types import Channel

from src.errors import AccessError, InvalidChannelError, InvalidLinkError
from src.integrations.contracts.channels import ChannelInfo, ChannelPost
from src.utils.app_config_loader import TelegramConfig

logger = logging.getLogger(__name__)

DEFAULT_FETCH_LIMIT = 300
DEFAULT_MAX_MATCHES = 20

_INVALID_LINK_TYPES = (errors.InviteHashInvalidError, errors.InviteHashExpiredError)
_INVALID_LINK_MARKERS = ("INVITE_HASH_INVALID", "INVITE_HASH_EXPIRED")
_PRIVATE_TYPES = (errors.ChannelPrivateError,)
_PRIVATE_MARKERS = ("CHANNEL_PRIVATE", "not part of")


def translate_channel_error(exc: Exception) -> Exception:
    """Map an upstream failure onto InvalidLinkError / AccessError.

    Anything unrecognised is returned unchanged so callers can re-raise it.
    """
    message = str(exc)
    if isinstance(exc, _INVALID_LINK_TYPES) or any(m in message for m in _INVALID_LINK_MARKERS):
        return InvalidLinkError(details=message)
    if isinstance(exc, _PRIVATE_TYPES) or any(m in message for m in _PRIVATE_MARKERS):
        return AccessError(details=message)
    return exc


def _post_text(message: Any) -> str:
    text = getattr(message, "message", None) or ""
    if not text:
        text = getattr(getattr(message, "media", None), "caption", None) or ""
    return text


def filter_posts(posts: Iterable[ChannelPost], keyword: str, max_matches: int = DEFAULT_MAX_MATCHES) -> List[ChannelPost]:
    """Case-insensitive substring match, truncated to the first matches in fetch order."""
    needle = (keyword or "").lower()
    matched = [p for p in posts if needle in p.text.lower()]
    return matched[:max_matches]


def _prompt_code() -> str:
    return input("Enter the code you received: ")


def _prompt_password() -> str:
    return input("Enter password (if any): ")


class TelegramChannelReader:
    def __init__(self, client: Any, phone: str = "", fetch_limit: int = DEFAULT_FETCH_LIMIT, has_saved_session: bool = False):
        self.client = client
        self.phone = phone
        self.fetch_limit = fetch_limit
        self.has_saved_session = has_saved_session

    @classmethod
    def from_config(cls, cfg: TelegramConfig, fetch_limit: int = DEFAULT_FETCH_LIMIT) -> "TelegramChannelReader":
        client = TelegramClient(
            StringSession(cfg.session or None),
            cfg.api_id,
            cfg.api_hash,
            connection_retries=cfg.connection_retries,
            receive_updates=False,
        )
        return cls(client, phone=cfg.phone, fetch_limit=fetch_limit, has_saved_session=bool(cfg.session))

    # ------------------------------------------------------------------ #
    # Session lifecycle
    # ------------------------------------------------------------------ #
    async def login(
        self,
        code_callback: Optional[Callable[[], str]] = None,
        password_callback: Optional[Callable[[], str]] = None,
    ) -> None:
        """Connect and authorise, prompting on the terminal on first run."""
        await self.client.start(
            phone=self.phone,
            code_callback=code_callback or _prompt_code,
            password=password_callback or _prompt_password,
        )
        logger.info("Telegram logged in")
        if not self.has_saved_session:
            logger.info("Save this session as TELEGRAM_SESSION: %s", self.client.session.save())

    async def disconnect(self) -> None:
        await self.client.disconnect()

    def is_connected(self) -> bool:
        return bool(self.client.is_connected())

    # ------------------------------------------------------------------ #
    # Reading
    # ------------------------------------------------------------------ #
    async def resolve_channel(self, handle_or_link: str) -> tuple[ChannelInfo, Any]:
        """Return the channel summary and the raw entity used for fetching."""
        try:
            entity = await self.client.get_entity(handle_or_link)
        except Exception as e:
            translated = translate_channel_error(e)
            if translated is e:
                raise
            raise translated from e

        if not isinstance(entity, Channel):
            logger.info("Entity for %s is %s, not a channel", handle_or_link, type(entity).__name__)
            raise InvalidChannelError()

        info = ChannelInfo(
            id=entity.id,
            title=entity.title or "",
            participants=getattr(entity, "participants_count", None) or 0,
        )
        return info, entity

    async def fetch_recent_messages(self, entity: Any, limit: Optional[int] = None) -> List[ChannelPost]:
        """Most-recent-first posts, capped at ``limit`` (default fetch limit)."""
        try:
            messages = await self.client.get_messages(entity, limit=limit or self.fetch_limit)
        except Exception as e:
            translated = translate_channel_error(e)
            if translated is e:
                raise
            raise translated from e

        return [
            ChannelPost(
                id=m.id,
                text=_post_text(m),
                date=getattr(m, "date", None),
                views=getattr(m, "views", None) or 0,
            )
            for m in messages
        ]
