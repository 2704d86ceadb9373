"""
Integrations layer.
This package contains all code used to communicate with external systems such as:
- Telegram (channel resolution and recent posts, via Telethon)
- The OpenRouter-compatible completion API (structured analysis of posts)

Key rule:
- Routes MUST NOT call external APIs directly.
- Routes go through src/services, which call the clients under src/integrations.

Switching implementations:
- Client construction happens in ONE place (src/api/dependencies.py); tests
  swap in fakes through FastAPI dependency overrides.
"""

from .contracts.analysis import AnalysisError, AnalysisResult, CompanyMention, ContactInformation
from .contracts.channels import ChannelInfo, ChannelPost

__all__ = [
    # channels
    "ChannelInfo", "ChannelPost",
    # analysis
    "AnalysisError", "AnalysisResult", "CompanyMention", "ContactInformation",
]
