from ors.models import College
from .base import FormSchema, RecordSchema, name_field, phone_field, text_field


class CollegeFormSchema(FormSchema):
    name = name_field("College Name")
    address = text_field("Address")
    state = text_field("State")
    city = text_field("City")
    phone_no = phone_field("Phone No")


class CollegeSchema(RecordSchema):
    class Meta:
        model = College
        load_instance = False
