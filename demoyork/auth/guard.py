"""Duplicate guard — early rejection of signups that collide with existing users.

The check is advisory: two concurrent signups can both pass it. The unique
constraints on ``users.username`` and ``users.email`` are what actually
keep identities exclusive (see ``CredentialStore.add_user``).
"""

from dataclasses import dataclass
from typing import Union

from demoyork.services.credential_store import CredentialStore


@dataclass(frozen=True)
class Candidate:
    username: str
    email: str


@dataclass(frozen=True)
class Ok:
    conflict = False


@dataclass(frozen=True)
class Conflicting:
    field: str

    conflict = True

    @property
    def message(self) -> str:
        return f"Failed! {self.field.capitalize()} is already in use!"


DuplicateCheck = Union[Ok, Conflicting]


def check_no_duplicate(store: CredentialStore, candidate: Candidate) -> DuplicateCheck:
    """Look for a user sharing the candidate's username or email."""
    existing = store.find_user_matching(candidate.username, candidate.email)
    if existing is None:
        return Ok()
    if existing.username == candidate.username:
        return Conflicting("username")
    return Conflicting("email")
