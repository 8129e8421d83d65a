from .descriptor import CONTAINS, DATE, EQUALS, PREFIX, EntityDescriptor, FilterField
from .engine import EntityStore
from .marksheets import MarksheetStore
from .registry import DESCRIPTORS, STORES, get_descriptor, get_store
from .users import UserStore

__all__ = [
    "CONTAINS",
    "DATE",
    "EQUALS",
    "PREFIX",
    "EntityDescriptor",
    "FilterField",
    "EntityStore",
    "MarksheetStore",
    "UserStore",
    "DESCRIPTORS",
    "STORES",
    "get_descriptor",
    "get_store",
]
