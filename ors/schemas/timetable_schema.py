from ors.models import Timetable
from .base import FormSchema, RecordSchema, date_field, text_field


class TimetableFormSchema(FormSchema):
    course_id = text_field("Course Name")
    subject_id = text_field("Subject Name")
    semester = text_field("Semester")
    exam_date = date_field("Exam Date")
    exam_time = text_field("Exam Time")
    description = text_field("Description")


class TimetableSchema(RecordSchema):
    class Meta:
        model = Timetable
        load_instance = False
