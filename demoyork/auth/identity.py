"""Resolve a session token to the user and role behind it."""

import logging
from typing import Tuple

from demoyork.core.exceptions import DataIntegrityError, InvalidSession, UnknownUser
from demoyork.core.security import SessionCodec
from demoyork.models.role import Role
from demoyork.models.user import User
from demoyork.services.credential_store import CredentialStore

logger = logging.getLogger("demoyork.auth")


class IdentityResolver:
    """Turns a session token into ``(User, Role)``.

    Read-only and idempotent; safe to call once per request.
    """

    def __init__(self, codec: SessionCodec, store: CredentialStore):
        self.codec = codec
        self.store = store

    def resolve(self, token: str) -> Tuple[User, Role]:
        """Decode the token and load its user and role.

        Raises:
            InvalidSession / ExpiredSession: propagated from the codec.
            UnknownUser: the identity no longer exists.
            DataIntegrityError: the user's role reference dangles.
        """
        subject = self.codec.parse(token)
        try:
            user_id = int(subject)
        except (TypeError, ValueError):
            raise InvalidSession("Invalid session payload")

        user = self.store.get_user(user_id)
        if user is None:
            raise UnknownUser("User not found")

        role = self.store.get_role(user.role_id)
        if role is None:
            logger.critical(
                "User %s references missing role id %s; store is corrupt",
                user.id,
                user.role_id,
            )
            raise DataIntegrityError("User role could not be resolved")
        return user, role
