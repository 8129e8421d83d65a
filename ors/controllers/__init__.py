from .base import BaseController, InboundRequest, Outcome
from .crud import FormController, ListController, Reference
from .registry import CONTROLLERS, get_controller

__all__ = [
    "BaseController",
    "InboundRequest",
    "Outcome",
    "FormController",
    "ListController",
    "Reference",
    "CONTROLLERS",
    "get_controller",
]
