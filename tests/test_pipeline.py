"""Pipeline composition, short-circuiting and the canonical chains."""

import asyncio

import pytest

from demoyork.auth.gate import DenyReason, require_admin, require_user
from demoyork.auth.guard import Candidate
from demoyork.auth.identity import IdentityResolver
from demoyork.auth.pipeline import (
    Abort,
    Continue,
    Pipeline,
    RequestContext,
    session_pipeline,
    signup_pipeline,
    write_pipeline,
)
from demoyork.core.exceptions import (
    AuthenticationError,
    ClientDisconnected,
    Conflict,
    ExpiredSession,
    Forbidden,
    ValidationError,
)
from demoyork.services.credential_store import CredentialStore


def run(pipeline, context, is_disconnected=None):
    return asyncio.run(pipeline.run(context, is_disconnected))


@pytest.fixture
def store(seeded_db):
    return CredentialStore(seeded_db)


@pytest.fixture
def context_for(store, codec):
    def _context_for(user=None, **extra):
        token = codec.issue(str(user.id)) if user is not None else None
        return RequestContext(
            store=store,
            resolver=IdentityResolver(codec, store),
            session_token=token,
            **extra,
        )

    return _context_for


def recording_step(calls, name, outcome=None):
    async def step(context):
        calls.append(name)
        return outcome if outcome is not None else Continue(context)

    step.__name__ = name
    return step


def test_steps_run_in_order(store):
    calls = []
    pipeline = Pipeline("t", [recording_step(calls, "a"), recording_step(calls, "b")])
    outcome = run(pipeline, RequestContext(store=store))
    assert isinstance(outcome, Continue)
    assert calls == ["a", "b"]
    assert outcome.context.trail == ("a", "b")


def test_first_abort_short_circuits(store):
    calls = []
    error = Forbidden("nope")
    pipeline = Pipeline("t", [
        recording_step(calls, "a"),
        recording_step(calls, "b", Abort(error)),
        recording_step(calls, "c"),
    ])
    outcome = run(pipeline, RequestContext(store=store))
    assert isinstance(outcome, Abort)
    assert outcome.error is error
    assert outcome.step == "b"
    assert calls == ["a", "b"]
    with pytest.raises(Forbidden):
        outcome.unwrap()


def test_disconnect_aborts_before_next_step(store):
    calls = []
    pipeline = Pipeline("t", [recording_step(calls, "a")])

    async def gone():
        return True

    outcome = run(pipeline, RequestContext(store=store), gone)
    assert isinstance(outcome.error, ClientDisconnected)
    assert calls == []


def test_then_appends_steps(store):
    calls = []
    pipeline = Pipeline("t", [recording_step(calls, "a")]).then(recording_step(calls, "b"))
    run(pipeline, RequestContext(store=store))
    assert calls == ["a", "b"]


def test_session_pipeline_requires_token(context_for):
    outcome = run(session_pipeline(), context_for())
    assert isinstance(outcome.error, AuthenticationError)
    assert outcome.step == "resolve_identity"


def test_write_pipeline_fills_context(context_for, make_user):
    alice = make_user("alice", "user")
    outcome = run(write_pipeline(require_user), context_for(alice))
    context = outcome.unwrap()
    assert context.user.username == "alice"
    assert context.role.name == "user"


def test_write_pipeline_denies_insufficient_role(context_for, make_user):
    alice = make_user("alice", "user")
    outcome = run(write_pipeline(require_admin), context_for(alice))
    assert isinstance(outcome.error, Forbidden)
    assert outcome.error.reason == "wrong_role"


def test_write_pipeline_denies_customer_adds(context_for, make_user):
    carol = make_user("carol", "customer")
    outcome = run(write_pipeline(require_user), context_for(carol))
    assert outcome.error.reason == "insufficient_privilege"


def test_write_pipeline_expired_session_skips_authorize(context_for, make_user, clock):
    alice = make_user("alice", "admin")
    context = context_for(alice)
    clock.advance(hours=2)
    outcome = run(write_pipeline(require_admin), context)
    assert isinstance(outcome.error, ExpiredSession)
    assert outcome.step == "resolve_identity"


def signup_context(store, username="bob", email="bob@example.com", role=None):
    return RequestContext(store=store, candidate=Candidate(username, email), requested_role=role)


SIGNUP = signup_pipeline(["customer", "user"], "customer")


def test_signup_defaults_role(store):
    context = run(SIGNUP, signup_context(store)).unwrap()
    assert context.role.name == "customer"


def test_signup_accepts_self_service_role(store):
    context = run(SIGNUP, signup_context(store, role="user")).unwrap()
    assert context.role.level == 3


def test_signup_rejects_admin(store):
    outcome = run(SIGNUP, signup_context(store, role="admin"))
    assert isinstance(outcome.error, Forbidden)


def test_signup_rejects_unknown_role(store):
    outcome = run(SIGNUP, signup_context(store, role="wizard"))
    assert isinstance(outcome.error, ValidationError)


def test_signup_duplicate_stops_before_role_check(store, make_user):
    make_user("bob", "user")
    # The requested role is invalid too; only the first failure is reported
    outcome = run(SIGNUP, signup_context(store, role="wizard"))
    assert isinstance(outcome.error, Conflict)
    assert outcome.error.field == "username"
    assert outcome.step == "check_duplicates"


def test_signup_admin_denial_carries_reason(store):
    outcome = run(SIGNUP, signup_context(store, role="admin"))
    assert outcome.error.reason == DenyReason.NOT_SELF_SERVICE.value
