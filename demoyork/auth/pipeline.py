"""Per-route authorization pipelines.

A pipeline is an ordered list of async steps. Each step receives the
request context built so far and returns either ``Continue(context)`` with
whatever it resolved added, or ``Abort(error)``. The first abort ends the
run; nothing after it executes.

Canonical pipelines:

    write_pipeline(require_user)   resolve_identity -> authorize
    signup_pipeline(...)           check_duplicates -> validate_signup_role
    session_pipeline()             resolve_identity
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Awaitable, Callable, Iterable, Optional, Sequence, Union

from demoyork.auth.gate import AuthorizationRequirement, DenyReason, require_all
from demoyork.auth.guard import Candidate, check_no_duplicate
from demoyork.auth.identity import IdentityResolver
from demoyork.core.exceptions import (
    AuthenticationError,
    ClientDisconnected,
    Conflict,
    DemoYorkError,
    Forbidden,
    ValidationError,
)
from demoyork.models.role import Role
from demoyork.models.user import User
from demoyork.services.credential_store import CredentialStore

logger = logging.getLogger("demoyork.auth")


@dataclass(frozen=True)
class RequestContext:
    """Everything one request's pipeline knows, accumulated step by step."""

    store: CredentialStore
    resolver: Optional[IdentityResolver] = None
    session_token: Optional[str] = None
    candidate: Optional[Candidate] = None
    requested_role: Optional[str] = None
    user: Optional[User] = None
    role: Optional[Role] = None
    trail: tuple = field(default_factory=tuple)


@dataclass(frozen=True)
class Continue:
    context: RequestContext

    def unwrap(self) -> RequestContext:
        return self.context


@dataclass(frozen=True)
class Abort:
    error: DemoYorkError
    step: str = ""

    def unwrap(self) -> RequestContext:
        raise self.error


Outcome = Union[Continue, Abort]
Step = Callable[[RequestContext], Awaitable[Outcome]]
DisconnectProbe = Callable[[], Awaitable[bool]]


class Pipeline:
    """An ordered, short-circuiting sequence of steps."""

    def __init__(self, name: str, steps: Sequence[Step]):
        self.name = name
        self.steps = tuple(steps)

    def then(self, *steps: Step) -> "Pipeline":
        return Pipeline(self.name, self.steps + steps)

    async def run(
        self,
        context: RequestContext,
        is_disconnected: Optional[DisconnectProbe] = None,
    ) -> Outcome:
        for step in self.steps:
            step_name = getattr(step, "__name__", repr(step))
            if is_disconnected is not None and await is_disconnected():
                logger.info("%s: client disconnected before %s", self.name, step_name)
                return Abort(ClientDisconnected("Client disconnected"), step_name)

            outcome = await step(context)
            if isinstance(outcome, Abort):
                logger.debug("%s: aborted at %s (%s)", self.name, step_name, outcome.error.message)
                return Abort(outcome.error, outcome.step or step_name)
            context = replace(outcome.context, trail=outcome.context.trail + (step_name,))
        return Continue(context)

    def __repr__(self) -> str:
        names = " -> ".join(getattr(s, "__name__", repr(s)) for s in self.steps)
        return f"<Pipeline {self.name}: {names}>"


# ---- Steps ----

async def resolve_identity(context: RequestContext) -> Outcome:
    if not context.session_token:
        return Abort(AuthenticationError("No session provided"))
    if context.resolver is None:
        raise RuntimeError("resolve_identity needs an IdentityResolver in the context")
    try:
        user, role = context.resolver.resolve(context.session_token)
    except DemoYorkError as exc:
        return Abort(exc)
    return Continue(replace(context, user=user, role=role))


def authorize(*requirements: AuthorizationRequirement) -> Step:
    """Step that checks the already-resolved role against all requirements."""

    async def authorize_role(context: RequestContext) -> Outcome:
        if context.role is None:
            return Abort(AuthenticationError("No resolved identity"))
        decision = require_all(requirements, context.role)
        if not decision.allowed:
            logger.warning(
                "Denied user %s with role %s(%s): %s (%s)",
                context.user.id if context.user else None,
                context.role.name,
                context.role.level,
                decision.message,
                decision.reason.value,
            )
            return Abort(Forbidden(decision.message, reason=decision.reason.value))
        return Continue(context)

    return authorize_role


async def check_duplicates(context: RequestContext) -> Outcome:
    if context.candidate is None:
        return Abort(ValidationError("Username and email are required"))
    result = check_no_duplicate(context.store, context.candidate)
    if result.conflict:
        return Abort(Conflict(result.message, field=result.field))
    return Continue(context)


def validate_signup_role(allowed_roles: Iterable[str], default_role: str) -> Step:
    """Step that loads the requested role and checks it is self-service."""
    allowed = frozenset(allowed_roles)

    async def validate_role(context: RequestContext) -> Outcome:
        name = context.requested_role or default_role
        role = context.store.get_role_by_name(name)
        if role is None:
            return Abort(ValidationError(f"Failed! Role {name} does not exist!"))
        if name not in allowed:
            logger.warning("Denied signup with role %s (%s)", name, DenyReason.NOT_SELF_SERVICE.value)
            return Abort(
                Forbidden(f"Role {name} cannot be chosen at signup", reason=DenyReason.NOT_SELF_SERVICE.value)
            )
        return Continue(replace(context, role=role))

    return validate_role


# ---- Canonical pipelines ----

def session_pipeline() -> Pipeline:
    return Pipeline("session", [resolve_identity])


def write_pipeline(*requirements: AuthorizationRequirement) -> Pipeline:
    return Pipeline("write", [resolve_identity, authorize(*requirements)])


def signup_pipeline(allowed_roles: Iterable[str], default_role: str) -> Pipeline:
    return Pipeline(
        "signup",
        [check_duplicates, validate_signup_role(allowed_roles, default_role)],
    )
