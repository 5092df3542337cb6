"""Credential store — read/write access to users and roles."""

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from demoyork.core.exceptions import Conflict
from demoyork.models.role import Role
from demoyork.models.user import User


class CredentialStore:
    """Thin query layer over the users and roles tables for one DB session."""

    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def find_user_matching(self, username: str, email: str) -> Optional[User]:
        """Return any user whose username or email collides with the given ones."""
        return (
            self.db.query(User)
            .filter(or_(User.username == username, User.email == email))
            .first()
        )

    def get_role(self, role_id: int) -> Optional[Role]:
        return self.db.query(Role).filter(Role.id == role_id).first()

    def get_role_by_name(self, name: str) -> Optional[Role]:
        return self.db.query(Role).filter(Role.name == name).first()

    def add_user(self, username: str, email: str, hashed_password: str, role: Role) -> User:
        """Insert a user in a single write.

        Raises:
            Conflict: the store's unique constraints rejected the row.
        """
        user = User(
            username=username,
            email=email,
            hashed_password=hashed_password,
            role_id=role.id,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise Conflict("Username or email is already in use")
        self.db.refresh(user)
        return user
