"""
Errors raised deliberately by the data-access layer.

Storage failures (constraint violations, connectivity) are not wrapped;
they reach the caller as the SQLAlchemy exception that was raised.
"""

from typing import Any, List, Optional


class JobBoardError(Exception):
    """Base error carrying the status a routing layer should respond with."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class BadRequestError(JobBoardError):
    """Caller supplied unusable input (e.g. nothing to update)."""

    status_code = 400

    def __init__(self, message: str = "Bad Request", errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []


class NotFoundError(JobBoardError):
    """Referenced record does not exist."""

    status_code = 404

    def __init__(self, message: str = "Not Found", identifier: Any = None):
        super().__init__(message)
        self.identifier = identifier
