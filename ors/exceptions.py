"""
Error taxonomy shared by the store and the request dispatcher.

Validation and duplicate errors are resolved at the dispatcher; storage errors
travel up to the Flask error handler.
"""

from __future__ import annotations

from typing import Dict, Optional


class ORSError(Exception):
    """Base for every error raised by the records backend."""


class ValidationError(ORSError):
    """One or more submitted fields failed validation."""

    def __init__(self, errors: Dict[str, str]):
        super().__init__("validation failed for: " + ", ".join(sorted(errors)))
        self.errors = dict(errors)


class DuplicateKeyError(ORSError):
    """Another record already holds the uniqueness key."""

    def __init__(self, entity: str, key_field: str, key_value, message: Optional[str] = None):
        super().__init__(message or f"{entity} already exists")
        self.entity = entity
        self.key_field = key_field
        self.key_value = key_value

    @property
    def message(self) -> str:
        return str(self.args[0])


class RollbackFailure(ORSError):
    """Rolling back a failed transaction raised its own error."""

    def __init__(self, action: str, cause: BaseException):
        super().__init__(f"rollback failed during {action}: {cause}")
        self.action = action
        self.cause = cause


class StorageError(ORSError):
    """A transaction or connection failure inside the store."""

    def __init__(
        self,
        message: str,
        *,
        cause: Optional[BaseException] = None,
        rollback_failure: Optional[RollbackFailure] = None,
    ):
        super().__init__(message)
        self.cause = cause
        self.rollback_failure = rollback_failure
