"""Input checks that raise InvalidArgumentError before any dispatch."""
from __future__ import annotations

import re
from typing import Any

from .errors import InvalidArgumentError

HEX_RE = re.compile(r"^[A-Fa-f0-9]+$")


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_hex(value: Any) -> bool:
    return isinstance(value, str) and HEX_RE.match(value) is not None


def ensure_number(value: Any, name: str) -> None:
    if not is_number(value):
        raise InvalidArgumentError(f"{name} should be a number")


def ensure_bool(value: Any, name: str) -> None:
    if not isinstance(value, bool):
        raise InvalidArgumentError(f"{name} should be a boolean")


def ensure_string(value: Any, name: str) -> None:
    if not isinstance(value, str):
        raise InvalidArgumentError(f"{name} should be a string")


def ensure_hex(value: Any, name: str) -> None:
    """Require a non-empty hexadecimal string (``^[A-Fa-f0-9]+$``)."""
    ensure_string(value, name)
    if not is_hex(value):
        raise InvalidArgumentError(f"{name} should be a valid hex string")
