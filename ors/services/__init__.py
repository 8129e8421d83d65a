from .validator import ValidationResult, validate
from .populator import populate_bean, populate_dto
from .pagination import Page, fetch_page, resolve_page
from .accounts import default_role_id, register_user

__all__ = [
    "ValidationResult",
    "validate",
    "populate_bean",
    "populate_dto",
    "Page",
    "fetch_page",
    "resolve_page",
    "default_role_id",
    "register_user",
]
