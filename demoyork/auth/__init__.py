"""Request authorization: session identity, role gates, duplicate checks, pipelines."""

from demoyork.auth.gate import (
    Allow,
    Deny,
    DenyReason,
    MinimumLevel,
    NamedRole,
    require,
    require_all,
    require_admin,
    require_customer,
    require_user,
)
from demoyork.auth.guard import Candidate, check_no_duplicate
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

__all__ = [
    "Allow", "Deny", "DenyReason", "MinimumLevel", "NamedRole",
    "require", "require_all", "require_admin", "require_customer", "require_user",
    "Candidate", "check_no_duplicate",
    "IdentityResolver",
    "Abort", "Continue", "Pipeline", "RequestContext",
    "session_pipeline", "signup_pipeline", "write_pipeline",
]
