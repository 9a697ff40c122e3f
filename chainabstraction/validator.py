"""Structural validation of provider responses against JSON schemas."""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from jsonschema import Draft7Validator
from jsonschema.exceptions import ValidationError

from . import schema


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation; path and message describe the first violation."""

    valid: bool
    path: str = ""
    message: str = ""


def format_path(parts: Iterable[Any]) -> str:
    """Render a jsonschema path deque as ``.field[0].child``."""
    rendered = ""
    for part in parts:
        if isinstance(part, int):
            rendered += f"[{part}]"
        else:
            rendered += f".{part}"
    return rendered


def _error_path(error: ValidationError) -> str:
    parts = list(error.absolute_path)
    # "required" errors are reported on the parent object; point at the missing field
    if error.validator == "required" and isinstance(error.instance, dict):
        missing = [p for p in error.validator_value if p not in error.instance]
        if missing:
            parts.append(missing[0])
    return format_path(parts)


class ResponseValidator:
    """Compiled Block and Transaction validators."""

    def __init__(
        self,
        block_schema: dict[str, Any] | None = None,
        transaction_schema: dict[str, Any] | None = None,
    ) -> None:
        block_schema = block_schema if block_schema is not None else schema.BLOCK
        transaction_schema = (
            transaction_schema if transaction_schema is not None else schema.TRANSACTION
        )
        Draft7Validator.check_schema(block_schema)
        Draft7Validator.check_schema(transaction_schema)
        self._block = Draft7Validator(block_schema)
        self._transaction = Draft7Validator(transaction_schema)

    @staticmethod
    def _first_violation(validator: Draft7Validator, value: Any) -> ValidationResult:
        error = next(iter(validator.iter_errors(value)), None)
        if error is None:
            return ValidationResult(valid=True)
        return ValidationResult(
            valid=False, path=_error_path(error), message=error.message
        )

    def validate_block(self, value: Any) -> ValidationResult:
        return self._first_violation(self._block, value)

    def validate_transaction(self, value: Any) -> ValidationResult:
        return self._first_violation(self._transaction, value)
