from __future__ import annotations

from typing import Any, Dict, Optional

import bcrypt
from sqlalchemy.orm import Session

from ors.models import User
from ors.utils.data_utility import current_timestamp
from ors.utils.logging_utils import get_logger, log_context

from .engine import EntityStore


def hash_password(raw: str) -> str:
    return bcrypt.hashpw(raw.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def is_hashed(value: Optional[str]) -> bool:
    return bool(value) and value.startswith("$2") and len(value) == 60


class UserStore(EntityStore):
    """User persistence: passwords are stored as bcrypt hashes only."""

    def _prepare_values(self, session: Session, record, values: Dict[str, Any], creating: bool) -> Dict[str, Any]:
        password = values.get("password")
        if not password:
            if creating:
                values["password"] = None
            else:
                # a blank password on edit keeps the stored hash
                values.pop("password", None)
        elif not is_hashed(password):
            values["password"] = hash_password(password)
        return values

    def authenticate(self, login: str, password: str) -> Optional[User]:
        logger = get_logger("auth")
        with log_context(action="authenticate", login=login):
            user = self.find_by_unique_key(login)
            if user is None or not user.check_password(password):
                logger.info("Authentication failed for %s", login)
                return None
            logger.info("Authenticated user id=%s", user.id)
            return user

    def change_password(self, user_id: int, old_password: str, new_password: str, modified_by: str) -> bool:
        """
        Replace the password of ``user_id`` when ``old_password`` matches.

        Returns False when the user is unknown or the old password is wrong.
        """

        logger = get_logger("auth")
        with log_context(model="User", action="change_password", actor_id=modified_by):
            with self._session_scope() as session:
                with self._transaction(session, "change_password"):
                    user = session.get(User, user_id)
                    if user is None or not user.check_password(old_password):
                        logger.info("Password change rejected for user id=%s", user_id)
                        return False
                    user.set_password(new_password)
                    user.modified_by = modified_by
                    user.modified_datetime = current_timestamp()
            logger.info("Password changed for user id=%s", user_id)
            return True

