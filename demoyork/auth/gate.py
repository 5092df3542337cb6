"""Authorization gate: declarative role requirements and one pure evaluator."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Protocol, Union

# Seeded role levels
CUSTOMER_LEVEL = 1
USER_LEVEL = 3
ADMIN_LEVEL = 5


class RoleLike(Protocol):
    name: str
    level: int


class DenyReason(str, enum.Enum):
    INSUFFICIENT_PRIVILEGE = "insufficient_privilege"
    WRONG_ROLE = "wrong_role"
    NOT_SELF_SERVICE = "not_self_service"


@dataclass(frozen=True)
class NamedRole:
    """Requirement satisfied only by the role with this exact name."""

    name: str

    def describe(self) -> str:
        return f"role '{self.name}'"


@dataclass(frozen=True)
class MinimumLevel:
    """Requirement satisfied by any role at or above this level."""

    level: int

    def describe(self) -> str:
        return f"level {self.level}+"


AuthorizationRequirement = Union[NamedRole, MinimumLevel]


@dataclass(frozen=True)
class Allow:
    allowed = True


@dataclass(frozen=True)
class Deny:
    requirement: AuthorizationRequirement
    reason: DenyReason

    allowed = False

    @property
    def message(self) -> str:
        return f"Requires {self.requirement.describe()}"


Decision = Union[Allow, Deny]

ALLOW = Allow()

# Canonical requirements
require_customer = MinimumLevel(CUSTOMER_LEVEL)
require_user = MinimumLevel(USER_LEVEL)
require_admin = NamedRole("admin")


def require(requirement: AuthorizationRequirement, role: RoleLike) -> Decision:
    """Evaluate one requirement against a resolved role. No I/O."""
    if isinstance(requirement, NamedRole):
        if role.name == requirement.name:
            return ALLOW
        return Deny(requirement, DenyReason.WRONG_ROLE)
    if isinstance(requirement, MinimumLevel):
        if role.level >= requirement.level:
            return ALLOW
        return Deny(requirement, DenyReason.INSUFFICIENT_PRIVILEGE)
    raise TypeError(f"Unknown requirement: {requirement!r}")


def require_all(requirements: Iterable[AuthorizationRequirement], role: RoleLike) -> Decision:
    """Conjunction of requirements; returns the first Deny, otherwise Allow."""
    for requirement in requirements:
        decision = require(requirement, role)
        if not decision.allowed:
            return decision
    return ALLOW


def requirement_for_role(role: RoleLike) -> MinimumLevel:
    """A minimum-level requirement pinned to ``role``'s level."""
    return MinimumLevel(role.level)
