"""
Application exception hierarchy.

Each error carries the HTTP status it maps to. The handlers registered in
main.py turn them into the JSON error body:

    {"error": {"message": <str or list of str>, "status": <int>}}
"""

from typing import Any, Dict, List, Optional, Sequence, Union


class JobBoardError(Exception):
    """Base application error."""

    status_code: int = 500
    default_message: str = "Internal Server Error"

    def __init__(self, message: Optional[Union[str, List[str]]] = None):
        self.message = message if message is not None else self.default_message
        super().__init__(self.message)


class BadRequestError(JobBoardError):
    """Raised when the client sends data that cannot be processed (400)."""
    status_code = 400
    default_message = "Bad Request"


class UnauthorizedError(JobBoardError):
    """Raised when a route requires a logged-in user (401)."""
    status_code = 401
    default_message = "Unauthorized"


class ForbiddenError(JobBoardError):
    """Raised when the logged-in user lacks the required role (403)."""
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(JobBoardError):
    """Raised when a keyed row does not exist (404)."""
    status_code = 404
    default_message = "Not Found"


def validation_messages(errors: Sequence[Dict[str, Any]]) -> List[str]:
    """
    Flatten pydantic error dicts into "<field>: <message>" strings.

    The request part of the location (body, query, path) is dropped.
    """
    messages = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc)
        messages.append(f"{field}: {error['msg']}" if field else error["msg"])
    return messages


__all__ = [
    "BadRequestError",
    "ForbiddenError",
    "JobBoardError",
    "NotFoundError",
    "UnauthorizedError",
    "validation_messages",
]
