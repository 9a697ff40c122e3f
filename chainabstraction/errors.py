"""Error taxonomy. Every failure raised by the client carries an ErrorKind."""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of failure kinds surfaced by the client."""

    INVALID_PROVIDER = "INVALID_PROVIDER"
    DUPLICATE_PROVIDER = "DUPLICATE_PROVIDER"
    NO_PROVIDER = "NO_PROVIDER"
    UNIMPLEMENTED_METHOD = "UNIMPLEMENTED_METHOD"
    UNSUPPORTED_METHOD = "UNSUPPORTED_METHOD"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    INVALID_PROVIDER_RESPONSE = "INVALID_PROVIDER_RESPONSE"


class ChainAbstractionError(Exception):
    """Base exception for the chain abstraction client."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.message}"


class InvalidProviderError(ChainAbstractionError):
    """Provider does not satisfy the provider contract."""

    kind = ErrorKind.INVALID_PROVIDER


class DuplicateProviderError(ChainAbstractionError):
    """A provider of the same kind is already registered."""

    kind = ErrorKind.DUPLICATE_PROVIDER


class NoProviderError(ChainAbstractionError):
    """The provider stack is empty."""

    kind = ErrorKind.NO_PROVIDER


class UnimplementedMethodError(ChainAbstractionError):
    """No provider in the search window implements the method."""

    kind = ErrorKind.UNIMPLEMENTED_METHOD

    def __init__(self, method: str) -> None:
        super().__init__(f'Unimplemented method "{method}"')
        self.method = method


class UnsupportedMethodError(ChainAbstractionError):
    """The matching provider rejects the method for the target version."""

    kind = ErrorKind.UNSUPPORTED_METHOD

    def __init__(self, method: str, version: str | None) -> None:
        super().__init__(
            f'Method "{method}" is not supported by version "{version}"'
        )
        self.method = method
        self.version = version


class InvalidArgumentError(ChainAbstractionError, TypeError):
    """Caller input failed a type or format contract."""

    kind = ErrorKind.INVALID_ARGUMENT


class InvalidProviderResponseError(ChainAbstractionError):
    """Provider result failed its output contract."""

    kind = ErrorKind.INVALID_PROVIDER_RESPONSE

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path
