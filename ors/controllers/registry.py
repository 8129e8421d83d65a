"""Screen name -> controller, one instance per screen."""

from __future__ import annotations

from typing import Dict, Optional

from ors.schemas import FORM_SCHEMAS, RECORD_SCHEMAS
from ors.store import DESCRIPTORS

from .base import BaseController
from .crud import FormController, ListController, Reference, person_name
from .marksheet_controllers import GetMarksheetController, MeritListController
from .user_controllers import (
    ChangePasswordController,
    LoginController,
    MyProfileController,
    UserRegistrationController,
    WelcomeController,
)

REFERENCES = {
    "subject": (Reference("course_id", "course", "course_name"),),
    "student": (Reference("college_id", "college", "college_name"),),
    "faculty": (
        Reference("college_id", "college", "college_name"),
        Reference("course_id", "course", "course_name"),
        Reference("subject_id", "subject", "subject_name"),
    ),
    "marksheet": (Reference("student_id", "student", "name", label=person_name),),
    "user": (Reference("role_id", "role"),),
    "timetable": (
        Reference("course_id", "course", "course_name"),
        Reference("subject_id", "subject", "subject_name"),
    ),
}


def build_controllers() -> Dict[str, BaseController]:
    controllers: Dict[str, BaseController] = {}
    for name, descriptor in DESCRIPTORS.items():
        references = REFERENCES.get(name, ())
        form = FormController(
            descriptor,
            schema=FORM_SCHEMAS[name],
            record_schema=RECORD_SCHEMAS[name],
            references=references,
        )
        listing = ListController(
            descriptor,
            record_schema=RECORD_SCHEMAS[name],
            references=references,
        )
        controllers[form.screen] = form
        controllers[listing.screen] = listing

    for controller in (
        LoginController(),
        UserRegistrationController(),
        ChangePasswordController(),
        MyProfileController(),
        WelcomeController(),
        GetMarksheetController(),
        MeritListController(),
    ):
        controllers[controller.screen] = controller
    return controllers


CONTROLLERS = build_controllers()


def get_controller(screen: str) -> Optional[BaseController]:
    return CONTROLLERS.get(screen)
