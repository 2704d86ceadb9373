import json

import httpx
import pytest

from src.integrations.clients.real_http.completions import (
    ANALYSIS_FAILED,
    ANALYSIS_HEADER,
    SYSTEM_INSTRUCTION,
    CompletionClient,
    build_analysis_prompt,
)
from src.integrations.contracts.channels import ChannelPost

URL = "https://llm.test/api/v1/chat/completions"


def _completion(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def _client(handler, **kwargs):
    return CompletionClient(url=URL, api_key="secret", transport=httpx.MockTransport(handler), **kwargs)


def test_build_analysis_prompt_joins_posts():
    posts = [ChannelPost(id=1, text="gloves 5 birr"), ChannelPost(id=2, text="masks 2 birr")]
    prompt = build_analysis_prompt(posts)
    assert prompt.startswith(ANALYSIS_HEADER)
    assert prompt.endswith("Text: gloves 5 birr\n\nmasks 2 birr")


@pytest.mark.asyncio
async def test_analyze_sends_system_and_user_messages():
    seen = {}

    def handler(request: httpx.Request):
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_completion('{"summary": "ok"}'))

    result = await _client(handler).analyze("PROMPT")

    assert result["summary"] == "ok"
    assert seen["auth"] == "Bearer secret"
    body = seen["body"]
    assert body["model"] == "mistralai/mistral-7b-instruct:free"
    assert body["max_tokens"] == 1000
    assert body["temperature"] == 0.3
    assert body["messages"] == [
        {"role": "system", "content": SYSTEM_INSTRUCTION},
        {"role": "user", "content": "PROMPT"},
    ]


@pytest.mark.asyncio
async def test_fenced_completion_is_extracted():
    def handler(request):
        return httpx.Response(200, json=_completion('```json\n{"discounts": ["20%"]}\n```'))

    result = await _client(handler).analyze("p")
    assert result["discounts"] == ["20%"]


@pytest.mark.asyncio
async def test_http_error_is_embedded_not_raised():
    def handler(request):
        return httpx.Response(429, text="rate limited")

    result = await _client(handler).analyze("p")
    assert result["error"] == ANALYSIS_FAILED
    assert "429" in result["details"]
    assert "raw" not in result


@pytest.mark.asyncio
async def test_transport_error_is_embedded():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    result = await _client(handler).analyze("p")
    assert result == {"error": ANALYSIS_FAILED, "details": "connection refused"}


@pytest.mark.asyncio
async def test_missing_url_reports_error():
    result = await CompletionClient(url="", api_key="k").analyze("p")
    assert result["error"] == ANALYSIS_FAILED


@pytest.mark.asyncio
async def test_empty_choices_yield_parse_error():
    def handler(request):
        return httpx.Response(200, json={"choices": []})

    result = await _client(handler).analyze("p")
    assert result["error"] == "Failed to parse AI output"
    assert result["raw"] == "No response content"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "content",
    [123, {"summary": "dict"}, [{"type": "text", "text": '{"summary": "parts"}'}]],
)
async def test_non_text_content_is_embedded_parse_error(content):
    def handler(request):
        return httpx.Response(200, json=_completion(content))

    result = await _client(handler).analyze("p")

    assert result["error"] == "Failed to parse AI output"
    assert result["details"] == "AI content is not text"
    assert result["raw"] == str(content)
