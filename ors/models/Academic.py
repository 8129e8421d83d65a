from ..extensions import db
from .base import AuditMixin


class College(AuditMixin, db.Model):
    __tablename__ = "st_college"

    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    name = db.Column(db.String(100), nullable=False, unique=True)
    address = db.Column(db.String(255))
    state = db.Column(db.String(50))
    city = db.Column(db.String(50))
    phone_no = db.Column(db.String(15))


class Course(AuditMixin, db.Model):
    __tablename__ = "st_course"

    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    name = db.Column(db.String(100), nullable=False, unique=True)
    duration = db.Column(db.String(50))
    description = db.Column(db.String(255))


class Subject(AuditMixin, db.Model):
    __tablename__ = "st_subject"

    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    name = db.Column(db.String(100), nullable=False, unique=True)
    course_id = db.Column(db.Integer, default=0)
    course_name = db.Column(db.String(100))
    description = db.Column(db.String(255))


class Student(AuditMixin, db.Model):
    __tablename__ = "st_student"

    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    first_name = db.Column(db.String(50))
    last_name = db.Column(db.String(50))
    dob = db.Column(db.Date)
    mobile_no = db.Column(db.String(15))
    email = db.Column(db.String(120), nullable=False, unique=True)
    college_id = db.Column(db.Integer, default=0)
    college_name = db.Column(db.String(100))


class Faculty(AuditMixin, db.Model):
    __tablename__ = "st_faculty"

    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    first_name = db.Column(db.String(50))
    last_name = db.Column(db.String(50))
    gender = db.Column(db.String(10))
    dob = db.Column(db.Date)
    email = db.Column(db.String(120), nullable=False, unique=True)
    mobile_no = db.Column(db.String(15))
    college_id = db.Column(db.Integer, default=0)
    college_name = db.Column(db.String(100))
    course_id = db.Column(db.Integer, default=0)
    course_name = db.Column(db.String(100))
    subject_id = db.Column(db.Integer, default=0)
    subject_name = db.Column(db.String(100))


class Marksheet(AuditMixin, db.Model):
    __tablename__ = "st_marksheet"

    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    roll_no = db.Column(db.String(20), nullable=False, unique=True)
    student_id = db.Column(db.Integer, default=0)
    name = db.Column(db.String(100))
    physics = db.Column(db.Integer)
    chemistry = db.Column(db.Integer)
    maths = db.Column(db.Integer)

    @property
    def total(self):
        return (self.physics or 0) + (self.chemistry or 0) + (self.maths or 0)


class Timetable(AuditMixin, db.Model):
    __tablename__ = "st_timetable"
    __table_args__ = (
        db.UniqueConstraint("course_id", "subject_id", "exam_date", name="uq_timetable_exam"),
    )

    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    semester = db.Column(db.String(20))
    description = db.Column(db.String(255))
    exam_date = db.Column(db.Date, nullable=False)
    exam_time = db.Column(db.String(40))
    course_id = db.Column(db.Integer, nullable=False, default=0)
    course_name = db.Column(db.String(100))
    subject_id = db.Column(db.Integer, nullable=False, default=0)
    subject_name = db.Column(db.String(100))
