from .base import AuditMixin, IdSequence
from .User import Role, User
from .Academic import College, Course, Subject, Student, Faculty, Marksheet, Timetable
from .Patient import Patient

__all__ = [
    'AuditMixin',
    'IdSequence',
    'Role',
    'User',
    'College',
    'Course',
    'Subject',
    'Student',
    'Faculty',
    'Marksheet',
    'Timetable',
    'Patient',
]
