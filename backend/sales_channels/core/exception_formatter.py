"""
Storage exception formatter

Normalizes driver-specific errors (psycopg2 on PostgreSQL, sqlite3 locally)
into domain errors with a uniform message shape.
"""
import re
from typing import Optional

from sqlalchemy.exc import DBAPIError

from .errors import ConflictError, DuplicateError, InvalidDataError, NotFoundError


class PostgresError:
    """SQLSTATE codes the service layer reacts to"""
    DUPLICATE_ERROR = "23505"
    FOREIGN_KEY_ERROR = "23503"
    NULL_VIOLATION = "23502"
    SERIALIZATION_FAILURE = "40001"


# SQLite reports constraint failures only through the message text
SQLITE_MESSAGE_CODES = {
    "FOREIGN KEY constraint failed": PostgresError.FOREIGN_KEY_ERROR,
    "UNIQUE constraint failed": PostgresError.DUPLICATE_ERROR,
    "NOT NULL constraint failed": PostgresError.NULL_VIOLATION,
}

# "Key (product_id)=(prod_123) is not present in table "product"."
KEY_DETAIL_PATTERN = re.compile(r"Key \((?P<column>[^)]*)\)=\((?P<value>[^)]*)\)")


def get_error_code(error: BaseException) -> Optional[str]:
    """
    Get the SQLSTATE code for a storage error

    Args:
        error: Exception raised by SQLAlchemy or the DB driver

    Returns:
        SQLSTATE code, or None when the error is not a recognized storage error
    """
    original = error.orig if isinstance(error, DBAPIError) else error

    pgcode = getattr(original, "pgcode", None)
    if pgcode:
        return pgcode

    message = str(original)
    for fragment, code in SQLITE_MESSAGE_CODES.items():
        if fragment in message:
            return code

    return None


def _error_detail(error: BaseException) -> Optional[str]:
    original = error.orig if isinstance(error, DBAPIError) else error
    diag = getattr(original, "diag", None)
    return getattr(diag, "message_detail", None)


def _error_table(error: BaseException) -> Optional[str]:
    original = error.orig if isinstance(error, DBAPIError) else error
    diag = getattr(original, "diag", None)
    return getattr(diag, "table_name", None)


def _describe_key(detail: Optional[str]) -> Optional[str]:
    if not detail:
        return None
    match = KEY_DETAIL_PATTERN.search(detail)
    if not match:
        return None
    return f"{match.group('column')} {match.group('value')}"


def format_exception(error: BaseException) -> BaseException:
    """
    Convert a storage error into a domain error

    Errors that are not recognized storage errors (including domain errors
    raised by the service itself) are returned unchanged.

    Args:
        error: Exception to format

    Returns:
        Exception to raise
    """
    code = get_error_code(error)
    if code is None:
        return error

    detail = _error_detail(error)
    key = _describe_key(detail)

    if code == PostgresError.DUPLICATE_ERROR:
        table = (_error_table(error) or "entity").capitalize()
        if key:
            return DuplicateError(f"{table} with {key} already exists.")
        return DuplicateError(f"{table} already exists.")

    if code == PostgresError.FOREIGN_KEY_ERROR:
        if key:
            return NotFoundError(f"{key} does not exist.")
        return NotFoundError("A referenced entity does not exist.")

    if code == PostgresError.NULL_VIOLATION:
        original = error.orig if isinstance(error, DBAPIError) else error
        column = getattr(getattr(original, "diag", None), "column_name", None)
        if column:
            return InvalidDataError(f"Cannot set required field {column} to null.")
        return InvalidDataError("Cannot set a required field to null.")

    if code == PostgresError.SERIALIZATION_FAILURE:
        return ConflictError(
            "Unable to complete the operation because of concurrent updates. Please try again."
        )

    return error
