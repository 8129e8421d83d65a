"""Descriptors and store instances for every managed entity."""

from __future__ import annotations

from typing import Dict

from ors.models import College, Course, Faculty, Marksheet, Patient, Role, Student, Subject, Timetable, User

from .descriptor import CONTAINS, DATE, EQUALS, PREFIX, EntityDescriptor, FilterField
from .engine import EntityStore
from .marksheets import MarksheetStore
from .users import UserStore

ROLE = EntityDescriptor(
    name="role",
    model=Role,
    unique_key="name",
    label="Role",
    field_types={"id": "long", "name": "string", "description": "string"},
    filter_fields=(
        FilterField("id", EQUALS),
        FilterField("name", CONTAINS),
        FilterField("description", CONTAINS),
    ),
    duplicate_message="Role already exists",
)

COLLEGE = EntityDescriptor(
    name="college",
    model=College,
    unique_key="name",
    label="College",
    field_types={
        "id": "long",
        "name": "string",
        "address": "string",
        "state": "string",
        "city": "string",
        "phone_no": "string",
    },
    filter_fields=(
        FilterField("id", EQUALS),
        FilterField("name", PREFIX),
        FilterField("city", PREFIX),
    ),
    duplicate_message="College Name already exists",
)

COURSE = EntityDescriptor(
    name="course",
    model=Course,
    unique_key="name",
    label="Course",
    field_types={"id": "long", "name": "string", "duration": "string", "description": "string"},
    filter_fields=(
        FilterField("id", EQUALS),
        FilterField("name", CONTAINS),
        FilterField("duration", CONTAINS),
        FilterField("description", CONTAINS),
    ),
    duplicate_message="Course Name already exists",
)

SUBJECT = EntityDescriptor(
    name="subject",
    model=Subject,
    unique_key="name",
    label="Subject",
    field_types={
        "id": "long",
        "name": "string",
        "course_id": "long",
        "course_name": "string",
        "description": "string",
    },
    filter_fields=(
        FilterField("id", EQUALS),
        FilterField("name", PREFIX),
        FilterField("course_id", EQUALS),
    ),
    duplicate_message="Subject Name already exists",
)

STUDENT = EntityDescriptor(
    name="student",
    model=Student,
    unique_key="email",
    label="Student",
    field_types={
        "id": "long",
        "first_name": "string",
        "last_name": "string",
        "dob": "date",
        "mobile_no": "string",
        "email": "string",
        "college_id": "long",
        "college_name": "string",
    },
    filter_fields=(
        FilterField("id", EQUALS),
        FilterField("first_name", PREFIX),
        FilterField("last_name", PREFIX),
        FilterField("email", PREFIX),
        FilterField("college_id", EQUALS),
        FilterField("dob", DATE),
    ),
    duplicate_message="Email already exists",
)

FACULTY = EntityDescriptor(
    name="faculty",
    model=Faculty,
    unique_key="email",
    label="Faculty",
    field_types={
        "id": "long",
        "first_name": "string",
        "last_name": "string",
        "gender": "string",
        "dob": "date",
        "email": "string",
        "mobile_no": "string",
        "college_id": "long",
        "college_name": "string",
        "course_id": "long",
        "course_name": "string",
        "subject_id": "long",
        "subject_name": "string",
    },
    filter_fields=(
        FilterField("id", EQUALS),
        FilterField("college_id", EQUALS),
        FilterField("course_id", EQUALS),
        FilterField("subject_id", EQUALS),
        FilterField("first_name", PREFIX),
        FilterField("last_name", PREFIX),
        FilterField("gender", PREFIX),
        FilterField("email", PREFIX),
        FilterField("course_name", PREFIX),
        FilterField("college_name", PREFIX),
        FilterField("subject_name", PREFIX),
        FilterField("dob", DATE),
        FilterField("mobile_no", EQUALS),
    ),
    duplicate_message="Email Id already exists",
)

MARKSHEET = EntityDescriptor(
    name="marksheet",
    model=Marksheet,
    unique_key="roll_no",
    label="Marksheet",
    field_types={
        "id": "long",
        "roll_no": "string",
        "student_id": "long",
        "name": "string",
        "physics": "int",
        "chemistry": "int",
        "maths": "int",
    },
    filter_fields=(
        FilterField("id", EQUALS),
        FilterField("roll_no", PREFIX),
        FilterField("name", PREFIX),
        FilterField("student_id", EQUALS),
    ),
    duplicate_message="Roll no already exists",
)

PATIENT = EntityDescriptor(
    name="patient",
    model=Patient,
    unique_key="name",
    label="Patient",
    field_types={
        "id": "long",
        "name": "string",
        "date_of_visit": "date",
        "mobile": "string",
        "disease": "string",
    },
    filter_fields=(
        FilterField("id", EQUALS),
        FilterField("name", PREFIX),
        FilterField("disease", PREFIX),
        FilterField("date_of_visit", DATE),
    ),
    duplicate_message="Patient already exists",
)

USER = EntityDescriptor(
    name="user",
    model=User,
    unique_key="login",
    label="User",
    field_types={
        "id": "long",
        "first_name": "string",
        "last_name": "string",
        "login": "string",
        "password": "string",
        "dob": "date",
        "mobile_no": "string",
        "role_id": "long",
        "gender": "string",
    },
    filter_fields=(
        FilterField("id", EQUALS),
        FilterField("first_name", PREFIX),
        FilterField("login", PREFIX),
        FilterField("role_id", EQUALS),
        FilterField("dob", DATE),
    ),
    duplicate_message="Login Id already exists",
)

TIMETABLE = EntityDescriptor(
    name="timetable",
    model=Timetable,
    unique_key=("course_id", "subject_id", "exam_date"),
    label="Timetable",
    field_types={
        "id": "long",
        "semester": "string",
        "description": "string",
        "exam_date": "date",
        "exam_time": "string",
        "course_id": "long",
        "course_name": "string",
        "subject_id": "long",
        "subject_name": "string",
    },
    filter_fields=(
        FilterField("id", EQUALS),
        FilterField("course_id", EQUALS),
        FilterField("subject_id", EQUALS),
        FilterField("exam_date", DATE),
    ),
    duplicate_message="Timetable already exists for this course, subject and exam date",
)

DESCRIPTORS: Dict[str, EntityDescriptor] = {
    descriptor.name: descriptor
    for descriptor in (ROLE, COLLEGE, COURSE, SUBJECT, STUDENT, FACULTY, MARKSHEET, PATIENT, USER, TIMETABLE)
}

_STORE_CLASSES = {"user": UserStore, "marksheet": MarksheetStore}

STORES: Dict[str, EntityStore] = {
    name: _STORE_CLASSES.get(name, EntityStore)(descriptor) for name, descriptor in DESCRIPTORS.items()
}


def get_descriptor(name: str) -> EntityDescriptor:
    return DESCRIPTORS[name]


def get_store(name: str) -> EntityStore:
    return STORES[name]
