"""Errors raised by the storage layer, each carrying an HTTP status."""

from __future__ import annotations

from http import HTTPStatus


class StorageError(Exception):
    """Base class of storage failures; answered as an internal server error."""

    prefix = ""

    def __init__(self, message: str = "") -> None:
        self.message = message
        super().__init__(f"{self.prefix}{message}")

    def status(self) -> int:
        return HTTPStatus.INTERNAL_SERVER_ERROR

    @property
    def detail(self) -> str:
        """The text sent back as the response body."""
        return str(self)


class DatabaseError(StorageError):
    """The database could not be opened, queried or migrated."""

    prefix = "Database Error: "


class NotFoundError(StorageError):
    """The requested record does not exist."""

    prefix = "Not Found: "

    def status(self) -> int:
        return HTTPStatus.NOT_FOUND

    @property
    def detail(self) -> str:
        return self.message


class ContentKindError(StorageError):
    """A content kind other than ``post`` or ``page`` was given."""

    def __init__(self) -> None:
        super().__init__("Wrong content kind literal")