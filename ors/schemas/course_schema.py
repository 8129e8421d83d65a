from ors.models import Course, Subject
from .base import FormSchema, RecordSchema, name_field, text_field


class CourseFormSchema(FormSchema):
    name = name_field("Course Name")
    duration = text_field("Duration")
    description = text_field("Description")


class SubjectFormSchema(FormSchema):
    name = name_field("Subject Name")
    course_id = text_field("Course Name")
    description = text_field("Description")


class CourseSchema(RecordSchema):
    class Meta:
        model = Course
        load_instance = False


class SubjectSchema(RecordSchema):
    class Meta:
        model = Subject
        load_instance = False
