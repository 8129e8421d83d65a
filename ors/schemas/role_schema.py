from ors.models import Role
from .base import FormSchema, RecordSchema, name_field, text_field


class RoleFormSchema(FormSchema):
    name = name_field("Role Name")
    description = text_field("Description")


class RoleSchema(RecordSchema):
    class Meta:
        model = Role
        load_instance = False
