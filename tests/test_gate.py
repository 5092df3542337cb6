"""Authorization gate: named-role and minimum-level requirements."""

from types import SimpleNamespace

import pytest

from demoyork.auth.gate import (
    Allow,
    Deny,
    DenyReason,
    MinimumLevel,
    NamedRole,
    require,
    require_admin,
    require_all,
    require_user,
    requirement_for_role,
)

CUSTOMER = SimpleNamespace(name="customer", level=1)
USER = SimpleNamespace(name="user", level=3)
ADMIN = SimpleNamespace(name="admin", level=5)
ROLES = [CUSTOMER, USER, ADMIN]


@pytest.mark.parametrize("lower", ROLES)
@pytest.mark.parametrize("higher", ROLES)
def test_minimum_level_orders_roles(lower, higher):
    decision = require(requirement_for_role(higher), lower)
    if lower.level < higher.level:
        assert isinstance(decision, Deny)
        assert decision.reason is DenyReason.INSUFFICIENT_PRIVILEGE
    else:
        assert isinstance(decision, Allow)


def test_named_role_matches_only_that_name():
    assert require(require_admin, ADMIN).allowed
    decision = require(require_admin, USER)
    assert not decision.allowed
    assert decision.reason is DenyReason.WRONG_ROLE
    assert decision.message == "Requires role 'admin'"


def test_named_role_ignores_level():
    impostor = SimpleNamespace(name="superuser", level=99)
    assert not require(NamedRole("admin"), impostor).allowed


def test_require_user_allows_user_and_admin():
    assert not require(require_user, CUSTOMER).allowed
    assert require(require_user, USER).allowed
    assert require(require_user, ADMIN).allowed


def test_require_all_is_a_conjunction():
    requirements = [MinimumLevel(3), NamedRole("user")]
    assert require_all(requirements, USER).allowed
    decision = require_all(requirements, ADMIN)
    assert not decision.allowed
    assert decision.requirement == NamedRole("user")


def test_require_all_returns_first_deny():
    decision = require_all([MinimumLevel(5), NamedRole("admin")], CUSTOMER)
    assert decision.requirement == MinimumLevel(5)


def test_empty_requirements_allow():
    assert require_all([], CUSTOMER).allowed


def test_unknown_requirement_type():
    with pytest.raises(TypeError):
        require("admin", ADMIN)
