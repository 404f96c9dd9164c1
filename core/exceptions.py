# core/exceptions.py
"""
Exceptions that the API layer knows how to turn into JSON error payloads.

Only :class:`DocumentLoadError` is raised by the extraction pipeline itself;
everything else in the pipeline degrades to "fewer records".
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


class ScraperException(Exception):
    """Base class – carries the HTTP status and the user-facing message."""

    status_code: int = 500
    message: str = "Failed to fetch news data"

    def __init__(
        self,
        error: str,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(error)
        self.error = error
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": "error",
            "message": self.message,
            "error": self.error,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }


class DocumentLoadError(ScraperException):
    """The HTML text is missing, empty or cannot be parsed at all."""

    status_code = 500
    message = "Failed to parse news data"


class FetchError(ScraperException):
    """The homepage could not be fetched."""

    status_code = 502


class ValidationError(ScraperException):
    """Request parameters failed validation."""

    status_code = 422
    message = "Invalid request parameters"

    def __init__(self, errors: List[Dict[str, Any]]):
        super().__init__(f"{len(errors)} validation error(s)")
        self.errors = errors

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["details"] = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
            for err in self.errors
        ]
        return payload
