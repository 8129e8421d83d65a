# schemas/__init__.py

from .role_schema import RoleFormSchema, RoleSchema
from .college_schema import CollegeFormSchema, CollegeSchema
from .course_schema import CourseFormSchema, CourseSchema, SubjectFormSchema, SubjectSchema
from .student_schema import FacultyFormSchema, FacultySchema, StudentFormSchema, StudentSchema
from .marksheet_schema import GetMarksheetFormSchema, MarksheetFormSchema, MarksheetSchema
from .patient_schema import PatientFormSchema, PatientSchema
from .timetable_schema import TimetableFormSchema, TimetableSchema
from .user_schema import (
    ChangePasswordFormSchema,
    LoginFormSchema,
    UserFormSchema,
    UserRegistrationFormSchema,
    UserSchema,
)

# entity name -> schema validating its edit form
FORM_SCHEMAS = {
    'role': RoleFormSchema,
    'college': CollegeFormSchema,
    'course': CourseFormSchema,
    'subject': SubjectFormSchema,
    'student': StudentFormSchema,
    'faculty': FacultyFormSchema,
    'marksheet': MarksheetFormSchema,
    'patient': PatientFormSchema,
    'user': UserFormSchema,
    'timetable': TimetableFormSchema,
}

# entity name -> schema dumping a stored record
RECORD_SCHEMAS = {
    'role': RoleSchema,
    'college': CollegeSchema,
    'course': CourseSchema,
    'subject': SubjectSchema,
    'student': StudentSchema,
    'faculty': FacultySchema,
    'marksheet': MarksheetSchema,
    'patient': PatientSchema,
    'user': UserSchema,
    'timetable': TimetableSchema,
}

__all__ = [
    'FORM_SCHEMAS',
    'RECORD_SCHEMAS',
    'RoleFormSchema',
    'RoleSchema',
    'CollegeFormSchema',
    'CollegeSchema',
    'CourseFormSchema',
    'CourseSchema',
    'SubjectFormSchema',
    'SubjectSchema',
    'StudentFormSchema',
    'StudentSchema',
    'FacultyFormSchema',
    'FacultySchema',
    'MarksheetFormSchema',
    'MarksheetSchema',
    'GetMarksheetFormSchema',
    'PatientFormSchema',
    'PatientSchema',
    'TimetableFormSchema',
    'TimetableSchema',
    'UserFormSchema',
    'UserRegistrationFormSchema',
    'LoginFormSchema',
    'ChangePasswordFormSchema',
    'UserSchema',
]
