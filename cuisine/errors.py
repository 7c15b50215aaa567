"""Application errors and how they map onto HTTP responses."""

from __future__ import annotations


class AppError(Exception):
    """Base class for errors that end a request with a JSON error body."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def body_message(self) -> str:
        """The text sent to the client in the ``error`` field."""
        return self.message

    def to_dict(self) -> dict[str, str]:
        return {"error": self.body_message}


class NotFound(AppError):
    """The requested row does not exist."""

    status_code = 404

    def __init__(self) -> None:
        super().__init__("not found")


class BadRequest(AppError):
    """The request body or query could not be understood."""

    status_code = 400

    def __init__(self, detail: str) -> None:
        super().__init__(f"bad request: {detail}")
        self.detail = detail

    @property
    def body_message(self) -> str:
        return self.detail


class DatabaseError(AppError):
    """The database rejected or failed a statement."""

    status_code = 500

    def __init__(self, detail: str) -> None:
        super().__init__(f"database error: {detail}")
        self.detail = detail