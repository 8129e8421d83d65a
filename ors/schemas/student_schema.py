from ors.models import Faculty, Student
from .base import FormSchema, RecordSchema, date_field, email_field, gender_field, name_field, phone_field, text_field


class StudentFormSchema(FormSchema):
    first_name = name_field("First Name")
    last_name = name_field("Last Name")
    dob = date_field("Date of Birth")
    mobile_no = phone_field()
    email = email_field("Email")
    college_id = text_field("College Name")


class FacultyFormSchema(FormSchema):
    first_name = name_field("First Name")
    last_name = name_field("Last Name")
    gender = gender_field()
    dob = date_field("Date of Birth")
    email = email_field("Email")
    mobile_no = phone_field()
    college_id = text_field("College Name")
    course_id = text_field("Course Name")
    subject_id = text_field("Subject Name")


class StudentSchema(RecordSchema):
    class Meta:
        model = Student
        load_instance = False


class FacultySchema(RecordSchema):
    class Meta:
        model = Faculty
        load_instance = False
