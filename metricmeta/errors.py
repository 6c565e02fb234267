"""Request-level error taxonomy and failure classification."""

from __future__ import annotations

from dataclasses import dataclass


class DomainError(Exception):
    """Base exception for expected, client-attributable request failures.

    Carries the HTTP status ``code``, a category ``name`` and a human-readable
    ``message``. The three fields are read-only once constructed.
    """

    _fields = ("code", "name", "message")

    def __init__(self, code: int, name: str, message: str = "") -> None:
        if isinstance(code, bool) or not isinstance(code, int):
            raise TypeError(f"code must be an int, got {type(code).__name__}")
        if not 100 <= code <= 599:
            raise ValueError(f"code must be an HTTP status, got {code}")
        if not isinstance(name, str) or not name:
            raise ValueError("name must be a non-empty string")
        if not isinstance(message, str):
            raise TypeError(f"message must be a str, got {type(message).__name__}")
        super().__init__(message)
        self.code = code
        self.name = name
        self.message = message
        self._init_args = (code, name, message)

    def __setattr__(self, key, value):
        if key in self._fields and key in self.__dict__:
            raise AttributeError(f"{type(self).__name__}.{key} is read-only")
        super().__setattr__(key, value)

    def __reduce__(self):
        # Rebuild through __init__; restoring __dict__ would hit the read-only guard
        return (type(self), self._init_args)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, name={self.name!r}, message={self.message!r})"


class BadRequestError(DomainError):
    """Raised when a request is malformed or violates input rules."""

    def __init__(self, message: str = "") -> None:
        super().__init__(400, "Bad Request", message)
        self._init_args = (message,)


class NotFoundError(DomainError):
    """Raised when a requested resource does not exist."""

    def __init__(self, message: str = "") -> None:
        super().__init__(404, "Not Found", message)
        self._init_args = (message,)


@dataclass(frozen=True, slots=True)
class ClientFailure:
    """A failure whose status, name and message are surfaced to the caller."""

    code: int
    name: str
    message: str


@dataclass(frozen=True, slots=True)
class InternalFailure:
    """A failure that must be recorded and never surfaced to the caller."""

    underlying: BaseException


Failure = ClientFailure | InternalFailure


def classify(error: BaseException) -> Failure:
    if isinstance(error, DomainError):
        return ClientFailure(code=error.code, name=error.name, message=error.message)
    return InternalFailure(underlying=error)
