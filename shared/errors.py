# shared/errors.py
from fastapi import status


class SchoolRecordsError(Exception):
    """Base class for errors raised by the class-management services."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, msg: str):
        super().__init__(msg)
        self.msg = msg


class ValidationError(SchoolRecordsError):
    """Malformed or incomplete request."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(SchoolRecordsError):
    """A referenced class, teacher or student does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(SchoolRecordsError):
    """A uniqueness or referential rule would be broken."""

    status_code = status.HTTP_409_CONFLICT


class StorageError(SchoolRecordsError):
    """The database failed in a way the caller cannot fix."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
