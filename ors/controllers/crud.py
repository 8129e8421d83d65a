from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence, Type

from marshmallow import Schema

from ors.exceptions import DuplicateKeyError
from ors.models.enumerations import Operation
from ors.services.pagination import fetch_page, resolve_page
from ors.services.populator import populate_bean, populate_dto
from ors.store import EntityDescriptor, get_store
from ors.utils.data_utility import get_int, get_long

from .base import NO_RECORD_FOUND, BaseController, Handler, InboundRequest, Outcome, config_value, option_list

SAVED = "Data is successfully saved"
UPDATED = "Data is successfully updated"
DELETED = "Data is deleted successfully"
SELECT_ONE = "Select at least one record"


def _name(record) -> str:
    return record.name


def person_name(record) -> str:
    return f"{record.first_name or ''} {record.last_name or ''}".strip()


@dataclass(frozen=True)
class Reference:
    """A plain integer reference whose display name is copied onto the record."""

    id_field: str
    entity: str
    name_field: Optional[str] = None
    label: Callable[[Any], str] = _name

    @property
    def preload_key(self) -> str:
        return f"{self.entity}_list"


class EntityController(BaseController):
    """Shared wiring for the screens of one entity."""

    def __init__(
        self,
        descriptor: EntityDescriptor,
        *,
        form_screen: str,
        list_screen: str,
        schema: Optional[Type[Schema]] = None,
        record_schema: Optional[Type[Schema]] = None,
        references: Sequence[Reference] = (),
    ):
        self.descriptor = descriptor
        self.form_screen = form_screen
        self.list_screen = list_screen
        self.schema = schema
        self.record_schema = record_schema
        self.references = tuple(references)
        super().__init__()

    @property
    def store(self):
        return get_store(self.descriptor.name)

    def preload(self, request: InboundRequest) -> Dict[str, Any]:
        return {
            ref.preload_key: option_list(get_store(ref.entity).list(), ref.label)
            for ref in self.references
        }

    def populate(self, request: InboundRequest):
        return populate_bean(self.descriptor, request.fields)


class FormController(EntityController):
    """Add/edit screen: load by id, Save, Update, Cancel, Reset."""

    def __init__(self, descriptor: EntityDescriptor, **kwargs):
        kwargs.setdefault("form_screen", descriptor.name)
        kwargs.setdefault("list_screen", f"{descriptor.name}_list")
        super().__init__(descriptor, **kwargs)
        self.screen = self.form_screen
        self.view = f"{descriptor.name}_form"

    def build_handlers(self) -> Dict[Operation, Handler]:
        return {
            Operation.SAVE: self.save,
            Operation.UPDATE: self.update,
            Operation.CANCEL: self.cancel,
            Operation.RESET: self.reset,
        }

    def populate_record(self, request: InboundRequest):
        record = self.populate(request)
        populate_dto(record, request.fields, request.identity, config_value("SYSTEM_IDENTITY", "root"))
        for ref in self.references:
            if ref.name_field is None:
                continue
            ref_id = getattr(record, ref.id_field) or 0
            target = get_store(ref.entity).find_by_pk(ref_id) if ref_id > 0 else None
            if target is not None:
                setattr(record, ref.name_field, ref.label(target))
        return record

    def display(self, request: InboundRequest, outcome: Outcome) -> Outcome:
        pk = get_long(request.fields.get("id"))
        if pk > 0:
            record = self.store.find_by_pk(pk)
            if record is None:
                return outcome.error(NO_RECORD_FOUND)
            outcome.record = record
        return outcome

    def save(self, request: InboundRequest, outcome: Outcome) -> Outcome:
        record = self.populate_record(request)
        outcome.record = record
        try:
            self.store.add(record)
        except DuplicateKeyError as exc:
            return outcome.error(exc.message)
        return outcome.success(SAVED)

    def update(self, request: InboundRequest, outcome: Outcome) -> Outcome:
        record = self.populate_record(request)
        outcome.record = record
        if not record.id or record.id <= 0:
            return outcome
        try:
            self.store.update(record)
        except DuplicateKeyError as exc:
            return outcome.error(exc.message)
        return outcome.success(UPDATED)

    def cancel(self, request: InboundRequest, outcome: Outcome) -> Outcome:
        return outcome.redirect_to(self.list_screen)

    def reset(self, request: InboundRequest, outcome: Outcome) -> Outcome:
        return outcome.redirect_to(self.form_screen)


class ListController(EntityController):
    """Search/list screen with look-ahead pagination and bulk delete."""

    def __init__(self, descriptor: EntityDescriptor, **kwargs):
        kwargs.setdefault("form_screen", descriptor.name)
        kwargs.setdefault("list_screen", f"{descriptor.name}_list")
        super().__init__(descriptor, **kwargs)
        self.screen = self.list_screen
        self.view = f"{descriptor.name}_list"

    def build_handlers(self) -> Dict[Operation, Handler]:
        return {
            Operation.SEARCH: self.show_page,
            Operation.NEXT: self.show_page,
            Operation.PREVIOUS: self.show_page,
            Operation.NEW: self.new,
            Operation.DELETE: self.delete,
            Operation.RESET: self.back_to_list,
            Operation.BACK: self.back_to_list,
        }

    def search(self, criteria, page_no: int, page_size: int):
        return self.store.search(criteria, page_no, page_size)

    def show_page(self, request: InboundRequest, outcome: Outcome) -> Outcome:
        page_no, page_size = resolve_page(
            request.operation,
            1 if request.is_display else get_int(request.fields.get("page_no")),
            get_int(request.fields.get("page_size")),
            config_value("PAGE_SIZE", 10),
        )
        page = fetch_page(self.search, self.populate(request), page_no, page_size)
        outcome.items = page.items
        outcome.page_no = page.page_no
        outcome.page_size = page.page_size
        outcome.next_list_size = page.next_list_size
        if not page.items and outcome.message is None:
            outcome.error(NO_RECORD_FOUND)
        return outcome

    def display(self, request: InboundRequest, outcome: Outcome) -> Outcome:
        return self.show_page(request, outcome)

    def fallback(self, request: InboundRequest, outcome: Outcome) -> Outcome:
        return self.show_page(request, outcome)

    def new(self, request: InboundRequest, outcome: Outcome) -> Outcome:
        return outcome.redirect_to(self.form_screen)

    def delete(self, request: InboundRequest, outcome: Outcome) -> Outcome:
        ids = [pk for pk in request.ids if pk > 0]
        if ids:
            for pk in ids:
                self.store.delete(pk)
            outcome.success(DELETED)
        else:
            outcome.error(SELECT_ONE)
        return self.show_page(request, outcome)

    def back_to_list(self, request: InboundRequest, outcome: Outcome) -> Outcome:
        return outcome.redirect_to(self.list_screen)
