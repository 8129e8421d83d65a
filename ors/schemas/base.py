from marshmallow import EXCLUDE, ValidationError, fields, pre_load, validate

from ors.extensions import ma
from ors.models.enumerations import Gender
from ors.utils.data_utility import get_int, to_millis
from ors.utils import data_validator as dv


def required(label):
    return {"required": f"{label} is required"}


_required_messages = required


def check(predicate, message):
    """Wrap a boolean predicate as a marshmallow validator."""

    def validator(value):
        if not predicate(value):
            raise ValidationError(message)

    return validator


def marks_in_range(value):
    return 0 <= get_int(value) <= 100


def name_field(label):
    return fields.String(
        required=True,
        error_messages=required(label),
        validate=check(dv.is_name, f"Invalid {label}"),
    )


def email_field(label):
    return fields.String(
        required=True,
        error_messages=required(label),
        validate=check(dv.is_email, f"{label} is invalid"),
    )


def date_field(label):
    return fields.String(
        required=True,
        error_messages=required(label),
        validate=check(dv.is_date, f"{label} is invalid"),
    )


def phone_field(label="Mobile No"):
    return fields.String(
        required=True,
        error_messages=required(label),
        validate=[
            check(dv.is_phone_length, f"{label} must have 10 digits"),
            check(dv.is_phone_no, f"Invalid {label}"),
        ],
    )


def text_field(label):
    return fields.String(required=True, error_messages=required(label))


def gender_field(label="Gender"):
    return fields.String(
        required=True,
        error_messages=required(label),
        validate=validate.OneOf([g.value for g in Gender], error=f"{label} is invalid"),
    )


def marks_field(label="Marks"):
    return fields.String(
        required=True,
        error_messages=required(label),
        validate=[
            check(dv.is_integer, f"{label} must be an integer"),
            check(marks_in_range, f"{label} should be in 0 to 100"),
        ],
    )


def password_field(label="Password", required=True):
    return fields.String(
        required=required,
        error_messages=_required_messages(label),
        validate=[
            check(dv.is_password_length, f"{label} should be 8 to 12 characters"),
            check(dv.is_password, "Must contain uppercase, lowercase, digit & special character"),
        ],
    )


class FormSchema(ma.Schema):
    """
    Validation-only schema over raw request fields.

    Blank values are dropped before loading so that the required check fires
    first, and format checks only run on values that are present.
    """

    class Meta:
        unknown = EXCLUDE

    @pre_load
    def drop_blank_values(self, data, **kwargs):
        cleaned = {}
        for key, value in data.items():
            if isinstance(value, (list, tuple, dict)) or dv.is_null(value):
                continue
            cleaned[key] = value if isinstance(value, str) else str(value)
        return cleaned


class RecordSchema(ma.SQLAlchemyAutoSchema):
    """Output shape of a stored record; audit timestamps as epoch milliseconds."""

    created_datetime = fields.Function(lambda obj: to_millis(obj.created_datetime))
    modified_datetime = fields.Function(lambda obj: to_millis(obj.modified_datetime))
