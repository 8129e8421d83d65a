from __future__ import annotations

from typing import Optional

from flask import current_app

from ors.exceptions import StorageError
from ors.models import User
from ors.store import get_store
from ors.utils.logging_utils import get_logger, log_context


def default_role_id(role_name: Optional[str] = None) -> int:
    role_name = role_name or current_app.config.get("DEFAULT_ROLE_NAME", "student")
    role = get_store("role").find_by_unique_key(role_name)
    if role is None:
        raise StorageError(f"Role {role_name!r} is not configured")
    return role.id


def register_user(user: User) -> int:
    """Add a self-registered user under the default role."""

    logger = get_logger("auth")
    with log_context(action="register", login=user.login):
        user.role_id = default_role_id()
        user_id = get_store("user").add(user)
        logger.info("Registered user id=%s", user_id)
        return user_id
