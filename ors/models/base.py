from sqlalchemy.orm import mapped_column

from ..extensions import db


class AuditMixin:
    """Last-writer audit columns carried by every record table, always last."""

    created_by = mapped_column(db.String(100), nullable=True, sort_order=1000)
    modified_by = mapped_column(db.String(100), nullable=True, sort_order=1001)
    created_datetime = mapped_column(db.DateTime, nullable=True, sort_order=1002)
    modified_datetime = mapped_column(db.DateTime, nullable=True, sort_order=1003)

    def __repr__(self):
        return f"<{self.__class__.__name__} id={getattr(self, 'id', None)}>"


class IdSequence(db.Model):
    """Highest identifier ever issued per entity, so deleted ids are never reissued."""

    __tablename__ = "st_id_sequence"

    entity = db.Column(db.String(50), primary_key=True)
    last_id = db.Column(db.Integer, nullable=False, default=0)
