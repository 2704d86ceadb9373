"""Exception taxonomy shared by the stores, integrations and HTTP layer.

Every error carries the HTTP status it maps to so route handlers and the
app-level exception handlers can translate it without a lookup table.
"""
from typing import Any, Dict, Optional


class ServiceError(Exception):
    status_code: int = 500
    public_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, *, details: Optional[Any] = None) -> None:
        super().__init__(message or self.public_message)
        self.details = details

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": str(self)}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ChannelError(ServiceError):
    """Base class for channel resolution and access failures."""

    status_code = 400
    public_message = "Something went wrong"


class InvalidChannelError(ChannelError):
    public_message = "Invite link does not point to a channel"


class InvalidLinkError(ChannelError):
    public_message = "Invalid or expired invite link"


class AccessError(ChannelError):
    public_message = "Join the channel first to access content"


class StorageError(ServiceError):
    status_code = 500
    public_message = "Server error"


class LanguageModelError(ServiceError):
    """Completion API transport or status failure.

    Never surfaces as an HTTP error: the LLM client converts it into the
    embedded analysis error object.
    """

    status_code = 502
    public_message = "AI analysis failed"
