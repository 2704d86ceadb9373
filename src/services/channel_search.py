"""Composite channel search: read a channel, filter by keyword, analyse the matches.

One pass per request and no retries. The channel fetch strictly precedes the
completion call. Channel failures propagate to the caller; completion failures
come back embedded in ``analysis``.
"""
import logging
from typing import Any, Dict

from src.integrations.clients.real_http.completions import build_analysis_prompt
from src.integrations.telegram.channel_reader import DEFAULT_MAX_MATCHES, filter_posts

logger = logging.getLogger(__name__)


class ChannelSearchService:
    def __init__(self, reader, analyzer, max_matches: int = DEFAULT_MAX_MATCHES):
        self.reader = reader
        self.analyzer = analyzer
        self.max_matches = max_matches

    async def search(self, keyword: str, invite_link: str) -> Dict[str, Any]:
        channel, entity = await self.reader.resolve_channel(invite_link)
        posts = await self.reader.fetch_recent_messages(entity)
        matches = filter_posts(posts, keyword, max_matches=self.max_matches)
        logger.info(
            "Channel %s: %d posts fetched, %d matched %r",
            channel.id,
            len(posts),
            len(matches),
            keyword,
        )

        analysis = await self.analyzer.analyze(build_analysis_prompt(matches))
        if "error" in analysis:
            logger.warning("Analysis for channel %s failed: %s", channel.id, analysis.get("details"))

        return {
            "channelInfo": channel.to_dict(),
            "matches": [p.to_dict() for p in matches],
            "analysis": analysis,
        }
