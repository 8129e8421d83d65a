from ors.models import Patient
from .base import FormSchema, RecordSchema, date_field, name_field, phone_field, text_field


class PatientFormSchema(FormSchema):
    name = name_field("Name")
    date_of_visit = date_field("Date of Visit")
    mobile = phone_field("Mobile")
    disease = text_field("Disease")


class PatientSchema(RecordSchema):
    class Meta:
        model = Patient
        load_instance = False
