"""Error handling helpers for the HTTP layer."""
from typing import Any, Dict, List
import logging

from src.errors import ServiceError

logger = logging.getLogger(__name__)


def _validation_field(loc) -> str:
    return ".".join(str(part) for part in loc if part != "body")


class ErrorHandler:
    def handle_exception(self, exc: Exception, context: Dict[str, Any] = None) -> Dict[str, Any]:
        if isinstance(exc, ServiceError):
            logger.warning("Request failed (%s): %s", type(exc).__name__, exc)
            return exc.to_payload()
        logger.error("Unhandled exception while serving %s: %s", (context or {}).get("path", "?"), exc, exc_info=True)
        return {"error": "Internal server error"}

    def handle_validation_errors(self, errors: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Collapse pydantic errors into one message naming the offending fields."""
        fields = []
        for err in errors:
            name = _validation_field(err.get("loc", ()))
            if name and name not in fields:
                fields.append(name)
        message = f"Valid {', '.join(fields)} required" if fields else "Invalid request body"
        details = [{"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")} for err in errors]
        return {"error": message, "details": details}
