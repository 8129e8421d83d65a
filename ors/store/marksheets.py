from __future__ import annotations

from typing import List

from sqlalchemy import select

from ors.models import Marksheet

from .engine import EntityStore
from .query import page_window

PASS_MARK = 33


class MarksheetStore(EntityStore):

    def find_by_roll_no(self, roll_no: str):
        return self.find_by_unique_key(roll_no)

    def merit_list(self, page_no: int = 0, page_size: int = 0) -> List[Marksheet]:
        """Marksheets passing every subject, best total first."""

        total = Marksheet.physics + Marksheet.chemistry + Marksheet.maths
        stmt = (
            select(Marksheet)
            .where(
                Marksheet.physics >= PASS_MARK,
                Marksheet.chemistry >= PASS_MARK,
                Marksheet.maths >= PASS_MARK,
            )
            .order_by(total.desc(), Marksheet.id)
        )
        window = page_window(page_no, page_size)
        if window is not None:
            offset, limit = window
            stmt = stmt.offset(offset).limit(limit)

        with self._reading("merit_list") as session:
            items = list(session.scalars(stmt))
        self.logger.debug("Merit list page_no=%s page_size=%s found=%s", page_no, page_size, len(items))
        return items
