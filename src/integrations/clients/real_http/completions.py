"""
Real completion API client (OpenRouter-compatible chat completions).

Sends the channel posts with a fixed JSON schema instruction and returns the
extracted analysis. Transport and status failures are returned as an error
payload instead of raised, so the search endpoint can still answer.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional

import httpx

from src.analysis.extractor import extract_analysis
from src.errors import LanguageModelError
from src.integrations.contracts.analysis import AnalysisError
from src.integrations.contracts.channels import ChannelPost

logger = logging.getLogger(__name__)

MODEL_NAME = "mistralai/mistral-7b-instruct:free"

SYSTEM_INSTRUCTION = """
You are a medical product analysis assistant. Your response must ONLY be valid JSON, not markdown or natural language.

Here is the required schema:
{
  "summary": "string",
  "trends": "string",
  "contacts": ["..."],
  "companies": [
    {
      "name": "string",
      "contact_information": {
        "phone_number": "string",
        "social_media_handles": ["..."]
      },
      "special_offers": "string"
    }
  ],
  "discounts": ["..."]
}

Do NOT return markdown-style JSON (e.g., no ```json). Do NOT include comments. Keep it strictly valid JSON.
""".strip()

ANALYSIS_HEADER = """Analyze this medical products list and extract:
1. Contact information (phone numbers, social media handles)
2. Company/organization names
3. Price discounts and special offers
4. Key product trends"""

ANALYSIS_FAILED = "AI analysis failed"


def build_analysis_prompt(posts: Iterable[ChannelPost]) -> str:
    texts = "\n\n".join(post.text for post in posts)
    return f"{ANALYSIS_HEADER}\n\nText: {texts}"


class CompletionClient:
    def __init__(
        self,
        url: Optional[str] = None,
        api_key: Optional[str] = None,
        model: str = MODEL_NAME,
        max_tokens: int = 1000,
        temperature: float = 0.3,
        timeout_seconds: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.url = url or ""
        self.api_key = api_key or ""
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.timeout_seconds = timeout_seconds
        self._transport = transport
        if not self.url:
            logger.warning("Completion API URL is not set.")

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def build_payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_INSTRUCTION},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }

    async def complete(self, prompt: str) -> Dict[str, Any]:
        """POST the conversation and return the decoded response body.

        Raises LanguageModelError on transport failure or a non-2xx status.
        """
        if not self.url:
            raise LanguageModelError("Completion API URL is not configured.")
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
                response = await client.post(self.url, json=self.build_payload(prompt), headers=self._headers())
                response.raise_for_status()
                logger.info("Received completion response: status=%s", response.status_code)
                return response.json() if response.content else {}
        except httpx.HTTPStatusError as e:
            logger.error("HTTP error from completion API: %s %s", e.response.status_code, e.response.text)
            raise LanguageModelError(str(e), details=e.response.text) from e
        except httpx.RequestError as e:
            logger.error("Request error connecting to completion API: %s", e)
            raise LanguageModelError(str(e)) from e
        except ValueError as e:
            logger.error("Completion API returned a non-JSON body: %s", e)
            raise LanguageModelError(str(e)) from e

    async def analyze(self, prompt: str) -> Dict[str, Any]:
        try:
            data = await self.complete(prompt)
        except LanguageModelError as e:
            return AnalysisError(error=ANALYSIS_FAILED, details=str(e)).model_dump(exclude={"raw"})
        return extract_analysis(_completion_text(data))


def _completion_text(data: Any) -> Any:
    # Providers may send content parts or other non-text values; the extractor rejects those.
    try:
        return data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
