"""Best-effort extraction of the structured analysis from a completion.

Models are told to answer with bare JSON but regularly wrap it in a fenced
```json block or surround it with prose. The extractor takes the fenced block
when there is one, otherwise the span from the first ``{`` to the last ``}``,
and parses it strictly. Missing or mistyped fields fall back to defaults; a
completion with no parseable object yields an error payload that keeps the raw
text for diagnostics.
"""
import json
import logging
import re
from typing import Any, Dict, List, Optional

from src.integrations.contracts.analysis import AnalysisError, AnalysisResult

logger = logging.getLogger(__name__)

JSON_CANDIDATE_RE = re.compile(r"```json\s*([\s\S]*?)\s*```|\{[\s\S]*\}")

PARSE_ERROR_MESSAGE = "Failed to parse AI output"
NO_CONTENT = "No response content"


class ExtractionError(ValueError):
    pass


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return "; ".join(_as_str(v) for v in value if v is not None)
    return str(value)


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, list):
        return [_as_str(v) for v in value if v is not None]
    return [_as_str(value)]


def _project_company(entry: Any) -> Dict[str, Any]:
    if not isinstance(entry, dict):
        return {"name": _as_str(entry)}
    contact = entry.get("contact_information")
    if not isinstance(contact, dict):
        contact = {}
    return {
        "name": _as_str(entry.get("name")),
        "contact_information": {
            "phone_number": _as_str(contact.get("phone_number")),
            "social_media_handles": _as_str_list(contact.get("social_media_handles")),
        },
        "special_offers": _as_str(entry.get("special_offers")),
    }


def _raw_text(content: Any) -> str:
    if content is None or content == "":
        return NO_CONTENT
    return content if isinstance(content, str) else str(content)


def find_json_candidate(content: str) -> Optional[str]:
    match = JSON_CANDIDATE_RE.search(content)
    if not match:
        return None
    return match.group(1) if match.group(1) is not None else match.group(0)


def parse_completion(content: Any) -> Dict[str, Any]:
    """Parse ``content`` into the analysis shape; raise ExtractionError on failure."""
    if content is not None and not isinstance(content, str):
        raise ExtractionError("AI content is not text")
    if not content or not content.strip():
        raise ExtractionError("Empty AI content")

    candidate = find_json_candidate(content)
    if not candidate:
        raise ExtractionError("No valid JSON structure found")

    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as e:
        raise ExtractionError(str(e)) from e

    if not isinstance(parsed, dict):
        raise ExtractionError("AI output is not a JSON object")

    companies = parsed.get("companies")
    result = AnalysisResult(
        summary=_as_str(parsed.get("summary")),
        trends=_as_str(parsed.get("trends")),
        contacts=_as_str_list(parsed.get("contacts")),
        companies=[_project_company(c) for c in companies] if isinstance(companies, list) else [],
        discounts=_as_str_list(parsed.get("discounts")),
    )
    return result.model_dump()


def extract_analysis(content: Any) -> Dict[str, Any]:
    """Return the parsed analysis, or an error payload carrying the raw completion."""
    logger.debug("AI raw content: %s", content)
    try:
        return parse_completion(content)
    except ExtractionError as e:
        logger.error("JSON parsing error: %s", e)
        return AnalysisError(error=PARSE_ERROR_MESSAGE, details=str(e), raw=_raw_text(content)).model_dump()
