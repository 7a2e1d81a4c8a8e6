import enum
from typing import Optional


class ErrorKind(enum.Enum):
    """Failure categories, each carrying the HTTP status it maps to"""
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    CONFLICT = 409
    SERVER_ERROR = 500

    @property
    def status_code(self) -> int:
        return self.value


class AppError(Exception):
    """Domain error tagged with an ErrorKind"""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def to_dict(self) -> dict:
        return {"error": {"message": self.message, "status": self.status_code}}

    def __repr__(self) -> str:
        return f"AppError(kind={self.kind.name}, message={self.message!r})"


def not_found(message: str) -> AppError:
    return AppError(ErrorKind.NOT_FOUND, message)


def forbidden(message: str) -> AppError:
    return AppError(ErrorKind.FORBIDDEN, message)


def bad_request(message: str) -> AppError:
    return AppError(ErrorKind.BAD_REQUEST, message)


# Illegal argument combinations are reported as bad requests
argument_error = bad_request


def server_error(message: Optional[str] = None) -> AppError:
    return AppError(ErrorKind.SERVER_ERROR, message or "Internal server error.")
