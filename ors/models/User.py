# models/User.py

import bcrypt

from ..extensions import db
from .base import AuditMixin


class Role(AuditMixin, db.Model):
    __tablename__ = "st_role"

    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    name = db.Column(db.String(100), nullable=False, unique=True)
    description = db.Column(db.String(255))


class User(AuditMixin, db.Model):
    __tablename__ = "st_user"

    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    first_name = db.Column(db.String(50))
    last_name = db.Column(db.String(50))
    login = db.Column(db.String(120), nullable=False, unique=True)
    password = db.Column(db.String(255))
    dob = db.Column(db.Date)
    mobile_no = db.Column(db.String(15))
    role_id = db.Column(db.Integer, default=0)
    gender = db.Column(db.String(10))

    def set_password(self, password):
        self.password = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")

    def check_password(self, password):
        if not self.password or not password:
            return False
        try:
            return bcrypt.checkpw(password.encode("utf-8"), self.password.encode("utf-8"))
        except ValueError:
            # stored value is not a bcrypt hash
            return False
