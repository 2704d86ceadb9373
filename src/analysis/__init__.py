"""
Structured analysis of channel posts.

Exposes the completion extractor used by the language-model client.
"""

from .extractor import extract_analysis, parse_completion

__all__ = ["extract_analysis", "parse_completion"]
