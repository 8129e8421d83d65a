from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from ors.models.enumerations import Operation


@dataclass
class Page:
    items: List[Any] = field(default_factory=list)
    page_no: int = 1
    page_size: int = 10
    next_list_size: int = 0

    @property
    def has_next(self) -> bool:
        return self.next_list_size > 0


def resolve_page(op: Optional[Operation], page_no: int, page_size: int, default_size: int):
    """Apply list-navigation bookkeeping and return ``(page_no, page_size)``."""

    page_no = page_no if page_no and page_no > 0 else 1
    page_size = page_size if page_size and page_size > 0 else default_size

    if op in (Operation.SEARCH, Operation.DELETE):
        page_no = 1
    elif op == Operation.NEXT:
        page_no += 1
    elif op == Operation.PREVIOUS and page_no > 1:
        page_no -= 1
    return page_no, page_size


def fetch_page(search: Callable[..., List[Any]], criteria, page_no: int, page_size: int) -> Page:
    """Load one page and the size of the page after it."""

    items = search(criteria, page_no, page_size)
    following = search(criteria, page_no + 1, page_size)
    return Page(items=items, page_no=page_no, page_size=page_size, next_list_size=len(following))
