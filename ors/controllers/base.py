from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Type

from flask import current_app
from marshmallow import Schema

from ors.exceptions import StorageError, ValidationError
from ors.models.enumerations import UNVALIDATED_OPERATIONS, MessageType, Operation
from ors.services.validator import ValidationResult, validate
from ors.utils.logging_utils import get_logger, log_context

NO_RECORD_FOUND = "No record found"


@dataclass
class InboundRequest:
    """What the dispatcher needs from one request, independent of the web layer."""

    method: str = "GET"
    operation: Optional[Operation] = None
    fields: Dict[str, Any] = field(default_factory=dict)
    ids: List[int] = field(default_factory=list)
    identity: Optional[str] = None

    @property
    def is_display(self) -> bool:
        return self.method.upper() == "GET" or self.operation is None


@dataclass
class Outcome:
    view: Optional[str] = None
    redirect: Optional[str] = None
    record: Any = None
    items: List[Any] = field(default_factory=list)
    errors: Dict[str, str] = field(default_factory=dict)
    message: Optional[str] = None
    message_type: Optional[MessageType] = None
    page_no: Optional[int] = None
    page_size: Optional[int] = None
    next_list_size: Optional[int] = None
    preload: Dict[str, Any] = field(default_factory=dict)
    # login id to issue an access token for
    session_identity: Optional[str] = None
    end_session: bool = False

    def success(self, text: str) -> "Outcome":
        self.message = text
        self.message_type = MessageType.SUCCESS
        return self

    def error(self, text: str) -> "Outcome":
        self.message = text
        self.message_type = MessageType.ERROR
        return self

    def redirect_to(self, screen: str) -> "Outcome":
        self.redirect = screen
        self.view = None
        return self


Handler = Callable[[InboundRequest, Outcome], Outcome]


def option_list(records, label: Callable[[Any], str] = lambda r: r.name) -> List[Dict[str, Any]]:
    """Reference records reduced to ``{id, name}`` pairs for selection lists."""
    return [{"id": r.id, "name": label(r)} for r in records]


class BaseController:
    """
    Orchestrates one screen: preload, conditional validation, then the
    handler registered for the inbound operation.
    """

    screen: str = ""
    view: str = ""
    schema: Optional[Type[Schema]] = None
    record_schema: Optional[Type[Schema]] = None
    # operations this screen never validates, on top of the shared set
    skip_validation: FrozenSet[Operation] = frozenset()
    requires_identity: bool = False

    def __init__(self):
        self.handlers: Dict[Operation, Handler] = self.build_handlers()

    def build_handlers(self) -> Dict[Operation, Handler]:
        return {}

    @property
    def logger(self):
        return get_logger("dispatch")

    # hooks ------------------------------------------------------------
    def preload(self, request: InboundRequest) -> Dict[str, Any]:
        return {}

    def populate(self, request: InboundRequest) -> Any:
        return None

    def display(self, request: InboundRequest, outcome: Outcome) -> Outcome:
        return outcome

    def fallback(self, request: InboundRequest, outcome: Outcome) -> Outcome:
        return outcome

    # dispatch ---------------------------------------------------------
    def needs_validation(self, op: Optional[Operation]) -> bool:
        return op not in UNVALIDATED_OPERATIONS and op not in self.skip_validation

    def validate(self, request: InboundRequest) -> ValidationResult:
        if self.schema is None:
            return ValidationResult(True)
        return validate(self.schema, request.fields)

    def run_preload(self, request: InboundRequest) -> Dict[str, Any]:
        try:
            return self.preload(request)
        except StorageError:
            self.logger.exception("Preload failed for screen %s", self.screen)
            return {}

    def dispatch(self, request: InboundRequest) -> Outcome:
        op = request.operation
        with log_context(screen=self.screen, operation=op.value if op else None, actor_id=request.identity):
            outcome = Outcome(view=self.view)

            if self.requires_identity and not request.identity:
                self.logger.info("Screen %s requires a signed-in user", self.screen)
                return outcome.redirect_to("login")

            outcome.preload = self.run_preload(request)

            if request.is_display:
                self.logger.debug("Displaying %s", self.screen)
                return self.display(request, outcome)

            if self.needs_validation(op):
                try:
                    self.validate(request).raise_for_errors()
                except ValidationError as exc:
                    self.logger.info("Validation failed on %s fields=%s", self.screen, sorted(exc.errors))
                    outcome.errors = exc.errors
                    outcome.record = self.populate(request)
                    return outcome

            handler = self.handlers.get(op)
            if handler is None:
                self.logger.debug("No handler for %s on %s", op.value, self.screen)
                return self.fallback(request, outcome)
            self.logger.info("Handling %s on %s", op.value, self.screen)
            return handler(request, outcome)


def config_value(key: str, default: Any = None) -> Any:
    return current_app.config.get(key, default)

