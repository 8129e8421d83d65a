from __future__ import annotations

from typing import Dict

from ors.models.enumerations import Operation
from ors.schemas import GetMarksheetFormSchema, MarksheetSchema
from ors.services.pagination import fetch_page, resolve_page
from ors.services.populator import populate_bean
from ors.store import get_descriptor, get_store
from ors.utils.data_utility import get_int, get_string

from .base import NO_RECORD_FOUND, BaseController, Handler, InboundRequest, Outcome, config_value

ROLL_NO_MISSING = "RollNo Does Not exists"


class GetMarksheetController(BaseController):
    screen = "get_marksheet"
    view = "get_marksheet_view"
    schema = GetMarksheetFormSchema
    record_schema = MarksheetSchema

    def build_handlers(self) -> Dict[Operation, Handler]:
        return {Operation.GO: self.go}

    def populate(self, request: InboundRequest):
        return populate_bean(get_descriptor("marksheet"), request.fields)

    def go(self, request: InboundRequest, outcome: Outcome) -> Outcome:
        roll_no = get_string(request.fields.get("roll_no"))
        record = get_store("marksheet").find_by_roll_no(roll_no)
        if record is None:
            outcome.record = self.populate(request)
            return outcome.error(ROLL_NO_MISSING)
        outcome.record = record
        return outcome


class MeritListController(BaseController):
    """Marksheets passing every subject, ranked by total."""

    screen = "marksheet_merit_list"
    view = "marksheet_merit_list_view"
    record_schema = MarksheetSchema

    def build_handlers(self) -> Dict[Operation, Handler]:
        return {
            Operation.NEXT: self.show_page,
            Operation.PREVIOUS: self.show_page,
            Operation.BACK: self.back,
        }

    def merit_list(self, criteria, page_no: int, page_size: int):
        return get_store("marksheet").merit_list(page_no, page_size)

    def show_page(self, request: InboundRequest, outcome: Outcome) -> Outcome:
        page_no, page_size = resolve_page(
            request.operation,
            1 if request.is_display else get_int(request.fields.get("page_no")),
            get_int(request.fields.get("page_size")),
            config_value("PAGE_SIZE", 10),
        )
        page = fetch_page(self.merit_list, None, page_no, page_size)
        outcome.items = page.items
        outcome.page_no = page.page_no
        outcome.page_size = page.page_size
        outcome.next_list_size = page.next_list_size
        if not page.items:
            outcome.error(NO_RECORD_FOUND)
        return outcome

    def display(self, request: InboundRequest, outcome: Outcome) -> Outcome:
        return self.show_page(request, outcome)

    def fallback(self, request: InboundRequest, outcome: Outcome) -> Outcome:
        return self.show_page(request, outcome)

    def back(self, request: InboundRequest, outcome: Outcome) -> Outcome:
        return outcome.redirect_to("welcome")
