"""
Telegram integration.

Channel resolution, recent-post fetching and keyword filtering on top of a
single shared Telethon client.
"""

from .channel_reader import TelegramChannelReader, filter_posts, translate_channel_error

__all__ = ["TelegramChannelReader", "filter_posts", "translate_channel_error"]
