from __future__ import annotations

from fastapi import status


class VisorError(Exception):
    """
    Base error carrying the HTTP status it maps to.

    Rendered by the application as ``{"error": message}``.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(VisorError):
    """A required field is missing or empty."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(VisorError):
    """A referenced entity id does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(VisorError):
    """A project with the requested slug already exists."""

    status_code = status.HTTP_409_CONFLICT


class StorageError(VisorError):
    """The document could not be written (or, for raw access, read)."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
