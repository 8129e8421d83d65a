from ..extensions import db
from .base import AuditMixin


class Patient(AuditMixin, db.Model):
    __tablename__ = "st_patient"

    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    name = db.Column(db.String(100), nullable=False, unique=True)
    date_of_visit = db.Column(db.Date)
    mobile = db.Column(db.String(15))
    disease = db.Column(db.String(100))
