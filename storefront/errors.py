import httpx
from pydantic import ValidationError

from storefront.schemas import ApiError


class ClientValidationError(ValueError):
    """Input rejected locally; no request was sent."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def error_message(exc: Exception, fallback: str) -> str:
    """Human-readable message from a failed call.

    Uses the ``message`` field of the backend's JSON error body when there is
    one, the fallback otherwise (network failures, HTML error pages, empty
    bodies).
    """
    if isinstance(exc, ClientValidationError):
        return exc.message
    if not isinstance(exc, httpx.HTTPStatusError):
        return fallback
    try:
        body = ApiError.model_validate(exc.response.json())
    except (ValueError, ValidationError):
        return fallback
    return body.message or fallback
