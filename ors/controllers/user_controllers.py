from __future__ import annotations

from typing import Dict

from ors.exceptions import DuplicateKeyError
from ors.models.enumerations import Operation
from ors.schemas import ChangePasswordFormSchema, LoginFormSchema, UserRegistrationFormSchema, UserSchema
from ors.services.accounts import register_user
from ors.services.populator import populate_bean, populate_dto
from ors.store import get_descriptor, get_store
from ors.utils.data_utility import get_string
from ors.utils.logging_utils import get_logger

from .base import BaseController, Handler, InboundRequest, Outcome, config_value

INVALID_LOGIN = "Invalid LoginId And Password"
LOGGED_OUT = "Logout Successful!"
REGISTERED = "Registration successful!"
LOGIN_EXISTS = "Login id already exists"
PASSWORD_CHANGED = "Password has been changed Successfully"
OLD_PASSWORD_INVALID = "Old Password is Invalid"


class LoginController(BaseController):
    screen = "login"
    view = "login_view"
    schema = LoginFormSchema
    record_schema = UserSchema
    skip_validation = frozenset({Operation.SIGN_UP, Operation.LOGOUT})

    def build_handlers(self) -> Dict[Operation, Handler]:
        return {
            Operation.SIGN_IN: self.sign_in,
            Operation.SIGN_UP: self.sign_up,
            Operation.LOGOUT: self.logout,
        }

    def populate(self, request: InboundRequest):
        record = populate_bean(get_descriptor("user"), request.fields)
        record.password = None
        return record

    def display(self, request: InboundRequest, outcome: Outcome) -> Outcome:
        if request.operation is Operation.LOGOUT:
            return self.logout(request, outcome)
        return outcome

    def sign_in(self, request: InboundRequest, outcome: Outcome) -> Outcome:
        login = get_string(request.fields.get("login"))
        password = request.fields.get("password") or ""
        user = get_store("user").authenticate(login, password)
        if user is None:
            outcome.record = self.populate(request)
            return outcome.error(INVALID_LOGIN)

        outcome.record = user
        outcome.session_identity = user.login
        role = get_store("role").find_by_pk(user.role_id) if user.role_id else None
        if role is not None:
            outcome.preload["role"] = role.name
        return outcome.redirect_to("welcome")

    def sign_up(self, request: InboundRequest, outcome: Outcome) -> Outcome:
        return outcome.redirect_to("user_registration")

    def logout(self, request: InboundRequest, outcome: Outcome) -> Outcome:
        get_logger("auth").info("Logout for %s", request.identity)
        outcome.end_session = True
        return outcome.success(LOGGED_OUT)


class UserRegistrationController(BaseController):
    screen = "user_registration"
    view = "user_registration_view"
    schema = UserRegistrationFormSchema
    record_schema = UserSchema

    def build_handlers(self) -> Dict[Operation, Handler]:
        return {
            Operation.SIGN_UP: self.sign_up,
            Operation.RESET: self.reset,
        }

    def populate(self, request: InboundRequest):
        return populate_bean(get_descriptor("user"), request.fields)

    def sign_up(self, request: InboundRequest, outcome: Outcome) -> Outcome:
        user = self.populate(request)
        populate_dto(user, request.fields, request.identity, config_value("SYSTEM_IDENTITY", "root"))
        try:
            register_user(user)
        except DuplicateKeyError:
            user.password = None
            outcome.record = user
            return outcome.error(LOGIN_EXISTS)
        outcome.record = user
        return outcome.success(REGISTERED)

    def reset(self, request: InboundRequest, outcome: Outcome) -> Outcome:
        return outcome.redirect_to(self.screen)


class ChangePasswordController(BaseController):
    screen = "change_password"
    view = "change_password_view"
    schema = ChangePasswordFormSchema
    skip_validation = frozenset({Operation.CHANGE_MY_PROFILE})
    requires_identity = True

    def build_handlers(self) -> Dict[Operation, Handler]:
        return {
            Operation.SAVE: self.save,
            Operation.CHANGE_MY_PROFILE: self.change_my_profile,
        }

    def save(self, request: InboundRequest, outcome: Outcome) -> Outcome:
        store = get_store("user")
        user = store.find_by_unique_key(request.identity)
        if user is None:
            return outcome.redirect_to("login")
        changed = store.change_password(
            user.id,
            request.fields.get("old_password") or "",
            request.fields.get("new_password") or "",
            modified_by=request.identity,
        )
        if not changed:
            return outcome.error(OLD_PASSWORD_INVALID)
        return outcome.success(PASSWORD_CHANGED)

    def change_my_profile(self, request: InboundRequest, outcome: Outcome) -> Outcome:
        return outcome.redirect_to("my_profile")


class MyProfileController(BaseController):
    """Read-only view of the signed-in user's own record."""

    screen = "my_profile"
    view = "my_profile_view"
    record_schema = UserSchema
    requires_identity = True

    def display(self, request: InboundRequest, outcome: Outcome) -> Outcome:
        outcome.record = get_store("user").find_by_unique_key(request.identity)
        return outcome

    def fallback(self, request: InboundRequest, outcome: Outcome) -> Outcome:
        return self.display(request, outcome)


class WelcomeController(BaseController):
    screen = "welcome"
    view = "welcome_view"
