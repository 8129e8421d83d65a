"""Field-format predicates used by the validation schemas."""

import re

from ors.utils.data_utility import parse_date

NAME_RE = re.compile(r"^[A-Za-z][A-Za-z ]*$")
EMAIL_RE = re.compile(r"^[\w.+-]+@[\w-]+(\.[\w-]+)*\.[A-Za-z]{2,}$")
PHONE_RE = re.compile(r"^[6-9][0-9]{9}$")
ROLL_NO_RE = re.compile(r"^[A-Za-z0-9]{2,}$")
PASSWORD_RE = re.compile(r"^(?=.*[0-9])(?=.*[a-z])(?=.*[A-Z])(?=.*[@#$%^&+=!*_-])\S+$")


def is_null(value) -> bool:
    return value is None or str(value).strip() == ""


def is_not_null(value) -> bool:
    return not is_null(value)


def is_name(value) -> bool:
    return is_not_null(value) and bool(NAME_RE.match(str(value).strip()))


def is_email(value) -> bool:
    return is_not_null(value) and bool(EMAIL_RE.match(str(value).strip()))


def is_phone_length(value) -> bool:
    return is_not_null(value) and len(str(value).strip()) == 10


def is_phone_no(value) -> bool:
    return is_not_null(value) and bool(PHONE_RE.match(str(value).strip()))


def is_integer(value) -> bool:
    if is_null(value):
        return False
    try:
        int(str(value).strip())
    except ValueError:
        return False
    return True


def is_date(value) -> bool:
    return parse_date(value) is not None


def is_roll_no(value) -> bool:
    return is_not_null(value) and bool(ROLL_NO_RE.match(str(value).strip()))


def is_password_length(value) -> bool:
    return is_not_null(value) and 8 <= len(str(value)) <= 12


def is_password(value) -> bool:
    return is_not_null(value) and bool(PASSWORD_RE.match(str(value)))
