"""One call surface over pluggable chain providers."""
from .client import Client
from .errors import (
    ChainAbstractionError,
    DuplicateProviderError,
    ErrorKind,
    InvalidArgumentError,
    InvalidProviderError,
    InvalidProviderResponseError,
    NoProviderError,
    UnimplementedMethodError,
    UnsupportedMethodError,
)
from .models import (
    Address,
    CollateralParameters,
    CollateralState,
    CollateralValues,
    SwapParameters,
    SwapState,
)
from .providers import BaseProvider

__all__ = [
    "Address",
    "BaseProvider",
    "ChainAbstractionError",
    "Client",
    "CollateralParameters",
    "CollateralState",
    "CollateralValues",
    "DuplicateProviderError",
    "ErrorKind",
    "InvalidArgumentError",
    "InvalidProviderError",
    "InvalidProviderResponseError",
    "NoProviderError",
    "SwapParameters",
    "SwapState",
    "UnimplementedMethodError",
    "UnsupportedMethodError",
]
