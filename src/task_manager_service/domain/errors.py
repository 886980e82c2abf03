"""Error taxonomy shared by repositories, use cases and the REST layer."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    BAD_REQUEST = "bad_request"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    INTERNAL = "internal"


class AppError(Exception):
    """An error of a known kind whose message is safe to show to the client."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"AppError({self.kind.value!r}, {self.message!r})"

    @classmethod
    def bad_request(cls, message: str) -> AppError:
        return cls(ErrorKind.BAD_REQUEST, message)

    @classmethod
    def not_found(cls, message: str) -> AppError:
        return cls(ErrorKind.NOT_FOUND, message)

    @classmethod
    def unauthorized(cls, message: str) -> AppError:
        return cls(ErrorKind.UNAUTHORIZED, message)

    @classmethod
    def forbidden(cls, message: str) -> AppError:
        return cls(ErrorKind.FORBIDDEN, message)

    @classmethod
    def internal(cls, message: str) -> AppError:
        return cls(ErrorKind.INTERNAL, message)
