from marshmallow import ValidationError, fields, validates_schema

from ors.models import User
from ors.utils.data_utility import get_long
from .base import (
    FormSchema,
    RecordSchema,
    date_field,
    email_field,
    gender_field,
    name_field,
    password_field,
    phone_field,
    text_field,
)


class UserRegistrationFormSchema(FormSchema):
    first_name = name_field("First Name")
    last_name = name_field("Last Name")
    login = email_field("Login Id")
    password = password_field()
    confirm_password = text_field("Confirm Password")
    gender = gender_field()
    dob = date_field("Date of Birth")
    mobile_no = phone_field()

    @validates_schema(skip_on_field_errors=False)
    def passwords_match(self, data, **kwargs):
        password = data.get("password")
        confirm = data.get("confirm_password")
        if password and confirm and password != confirm:
            raise ValidationError("Password and Confirm Password must be Same!", field_name="confirm_password")


class UserFormSchema(UserRegistrationFormSchema):
    """Add/edit form; editing an existing user may leave the password blank."""

    id = fields.String()
    password = password_field(required=False)
    confirm_password = fields.String()
    role_id = text_field("Role")

    @validates_schema(skip_on_field_errors=False)
    def password_for_new_user(self, data, **kwargs):
        editing = get_long(data.get("id")) > 0
        errors = {}
        if not editing and not data.get("password"):
            errors["password"] = ["Password is required"]
        if (data.get("password") or not editing) and not data.get("confirm_password"):
            errors["confirm_password"] = ["Confirm Password is required"]
        if errors:
            raise ValidationError(errors)


class LoginFormSchema(FormSchema):
    login = email_field("Login Id")
    password = text_field("Password")


class ChangePasswordFormSchema(FormSchema):
    old_password = text_field("Old Password")
    new_password = password_field("New Password")
    confirm_password = text_field("Confirm Password")

    @validates_schema(skip_on_field_errors=False)
    def passwords_consistent(self, data, **kwargs):
        old = data.get("old_password")
        new = data.get("new_password")
        confirm = data.get("confirm_password")
        errors = {}
        if old and new and old == new:
            errors["new_password"] = ["Old and New passwords should be different"]
        if new and confirm and new != confirm:
            errors["confirm_password"] = ["New and confirm passwords not matched"]
        if errors:
            raise ValidationError(errors)


class UserSchema(RecordSchema):
    class Meta:
        model = User
        load_instance = False
        exclude = ("password",)
