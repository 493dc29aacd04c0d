"""
Domain errors

Raised by the service layer. The API layer translates them into HTTP
responses through a single exception handler (see main.py).
"""


class DomainError(Exception):
    """Base error for business rule violations"""

    code = "unexpected_state"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(DomainError):
    """Entity does not exist or has been soft-deleted"""

    code = "not_found"


class InvalidDataError(DomainError):
    code = "invalid_data"


class DuplicateError(DomainError):
    code = "duplicate_error"


class ConflictError(DomainError):
    """Concurrent transactions touched the same rows"""

    code = "conflict"


class DatabaseError(DomainError):
    code = "database_error"
