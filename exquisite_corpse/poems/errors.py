"""
Error taxonomy for the poem lifecycle.

Every failure the lifecycle reports is a PoemError subclass carrying a stable
``code`` and the HTTP status the API answers with.
"""

from typing import Any, Dict, Optional


class PoemError(Exception):
    """Base class for poem lifecycle errors."""

    code = "POEM_ERROR"
    http_status = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        }


class InvalidArgument(PoemError):
    """A creation parameter is outside its allowed set."""

    code = "INVALID_ARGUMENT"
    http_status = 400


class InvalidInput(PoemError):
    """Submitted content is unusable (e.g. an empty line)."""

    code = "INVALID_INPUT"
    http_status = 400


class NotFound(PoemError):
    code = "NOT_FOUND"
    http_status = 404

    def __init__(self, poem_id: str):
        super().__init__("Poem not found", {"poem_id": poem_id})


class InvalidState(PoemError):
    """The operation is not legal in the poem's current lifecycle state."""

    code = "INVALID_STATE"
    http_status = 409

    def __init__(self, message: str, status: str):
        super().__init__(message, {"status": status})


class Conflict(PoemError):
    """The caller's expected_version is stale; re-fetch and resubmit."""

    code = "VERSION_CONFLICT"
    http_status = 409

    def __init__(
        self,
        poem_id: str,
        expected_version: int,
        current_version: Optional[int] = None,
    ):
        details: Dict[str, Any] = {
            "poem_id": poem_id,
            "expected_version": expected_version,
        }
        if current_version is not None:
            details["current_version"] = current_version
        super().__init__(
            "Poem was modified by another writer. Fetch the latest version and retry.",
            details,
        )


class StorageFailure(PoemError):
    """The underlying store raised; its message is passed through."""

    code = "STORAGE_FAILURE"
    http_status = 500
