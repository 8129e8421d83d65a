"""Run a form schema over raw request fields and flatten its errors."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Type

from marshmallow import Schema
from marshmallow import ValidationError as SchemaValidationError

from ors.exceptions import ValidationError


@dataclass
class ValidationResult:
    passed: bool
    errors: Dict[str, str] = field(default_factory=dict)

    def raise_for_errors(self) -> None:
        if not self.passed:
            raise ValidationError(self.errors)


def _first_message(messages: Any) -> str:
    if isinstance(messages, (list, tuple)):
        return _first_message(messages[0]) if messages else ""
    if isinstance(messages, dict):
        return _first_message(next(iter(messages.values()), ""))
    return str(messages)


def flatten_errors(messages: Mapping[str, Any]) -> Dict[str, str]:
    """Keep one message per field, the first one reported."""
    return {name: _first_message(value) for name, value in messages.items()}


def validate(schema_cls: Type[Schema], fields: Mapping[str, Any]) -> ValidationResult:
    try:
        schema_cls().load(dict(fields))
    except SchemaValidationError as err:
        return ValidationResult(False, flatten_errors(err.messages))
    return ValidationResult(True)
