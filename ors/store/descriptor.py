from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Type, Union

EQUALS = "equals"
PREFIX = "prefix"
CONTAINS = "contains"
DATE = "date"

MATCH_MODES = (EQUALS, PREFIX, CONTAINS, DATE)


@dataclass(frozen=True)
class FilterField:
    """One searchable attribute and how a filter value is matched against it."""

    name: str
    match: str = EQUALS

    def __post_init__(self):
        if self.match not in MATCH_MODES:
            raise ValueError(f"unsupported match mode {self.match!r} for {self.name}")


@dataclass(frozen=True)
class EntityDescriptor:
    """
    Everything the generic store, populator and controllers need to know about
    one entity: its model, uniqueness key, searchable fields, raw field types
    and user-facing wording.
    """

    name: str
    model: Type[Any]
    # one field name, or a tuple of names unique together
    unique_key: Union[str, Tuple[str, ...]]
    label: str
    field_types: Dict[str, str]
    filter_fields: Tuple[FilterField, ...] = ()
    duplicate_message: Optional[str] = None

    @property
    def duplicate_text(self) -> str:
        return self.duplicate_message or f"{self.label} already exists"

    @property
    def key_fields(self) -> Tuple[str, ...]:
        if isinstance(self.unique_key, str):
            return (self.unique_key,)
        return tuple(self.unique_key)

    def key_of(self, record) -> Any:
        values = tuple(getattr(record, name, None) for name in self.key_fields)
        return values[0] if len(values) == 1 else values

    def key_clauses(self, key) -> List[Any]:
        """Equality clauses locating the record holding ``key``."""
        values = key if len(self.key_fields) > 1 else (key,)
        return [self.column(name) == value for name, value in zip(self.key_fields, values)]

    def column(self, name: str):
        return getattr(self.model, name)

    def new_record(self, **values):
        record = self.model()
        for key, value in values.items():
            setattr(record, key, value)
        return record
