# exceptions.py
# Error taxonomy shared by the repository, the service layer and the shell.

import enum


class ErrorKind(str, enum.Enum):
    CONNECTIVITY = "connectivity"
    OPERATION = "operation"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"


class RecipeError(Exception):
    """
    Base class for every error raised by this package.
    The underlying driver error, if any, is available as __cause__.
    """
    kind = ErrorKind.OPERATION

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return f"{self.kind.value}: {self.message}"


class OperationError(RecipeError):
    """A statement or transaction failed and was rolled back."""
    kind = ErrorKind.OPERATION


class ConnectivityError(OperationError):
    """No connection could be obtained from the database."""
    kind = ErrorKind.CONNECTIVITY


class NotFoundError(RecipeError):
    kind = ErrorKind.NOT_FOUND


class InputValidationError(RecipeError):
    """Malformed console input. Raised and handled by the shell only."""
    kind = ErrorKind.VALIDATION
