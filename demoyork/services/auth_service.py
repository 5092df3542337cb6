"""Auth service — sign-in and account creation."""

import logging
from typing import Tuple

from demoyork.core.exceptions import AuthenticationError
from demoyork.core.security import SessionCodec, hash_password, verify_password
from demoyork.models.role import Role
from demoyork.models.user import User
from demoyork.schemas.schemas import RoleOut, UserOut
from demoyork.services.credential_store import CredentialStore

logger = logging.getLogger("demoyork.auth")


class AuthService:
    """Handles credential checks and user creation."""

    @staticmethod
    def authenticate(store: CredentialStore, codec: SessionCodec, username: str, password: str) -> Tuple[User, str]:
        """Check credentials and issue a session token.

        Raises:
            AuthenticationError: If credentials are invalid.
        """
        user = store.get_user_by_username(username)
        if not user or not verify_password(password, user.hashed_password):
            raise AuthenticationError("Invalid username or password")
        token = codec.issue(str(user.id))
        logger.info("User %s signed in", user.username)
        return user, token

    @staticmethod
    def create_user(store: CredentialStore, username: str, email: str, password: str, role: Role) -> User:
        """Hash the password and store the user. Callers run the duplicate guard first."""
        user = store.add_user(username, email, hash_password(password), role)
        logger.info("Created user %s with role %s", user.username, role.name)
        return user

    @staticmethod
    def to_out(user: User, role: Role) -> UserOut:
        return UserOut(
            id=user.id,
            username=user.username,
            email=user.email,
            role=RoleOut.model_validate(role),
            created_at=user.created_at,
        )


auth_service = AuthService()
