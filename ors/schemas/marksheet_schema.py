from marshmallow import fields

from ors.models import Marksheet
from ors.utils import data_validator as dv
from .base import FormSchema, RecordSchema, check, marks_field, required, text_field


class MarksheetFormSchema(FormSchema):
    student_id = text_field("Student Name")
    roll_no = fields.String(
        required=True,
        error_messages=required("Roll Number"),
        validate=check(dv.is_roll_no, "Roll No is invalid"),
    )
    physics = marks_field()
    chemistry = marks_field()
    maths = marks_field()


class GetMarksheetFormSchema(FormSchema):
    roll_no = text_field("Roll Number")


class MarksheetSchema(RecordSchema):
    class Meta:
        model = Marksheet
        load_instance = False

    total = fields.Integer(dump_only=True)
