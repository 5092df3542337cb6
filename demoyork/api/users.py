"""Users API router — signup, signin, signout, me."""

from dataclasses import replace

from fastapi import APIRouter, Depends, Request, Response, status

from demoyork.auth.dependencies import get_request_context, get_session_codec, guard, run_pipeline
from demoyork.auth.guard import Candidate
from demoyork.auth.pipeline import RequestContext, session_pipeline, signup_pipeline
from demoyork.core.config import settings
from demoyork.core.security import SessionCodec
from demoyork.schemas.schemas import MessageResponse, SigninRequest, SignupRequest, UserOut
from demoyork.services.auth_service import auth_service

router = APIRouter(prefix="/users", tags=["users"])

signup_chain = signup_pipeline(settings.SELF_SERVICE_ROLES, settings.DEFAULT_SIGNUP_ROLE)


@router.post("/signup", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def signup(
    body: SignupRequest,
    request: Request,
    context: RequestContext = Depends(get_request_context),
):
    """Register a new user after the duplicate and role checks pass."""
    context = replace(
        context,
        candidate=Candidate(username=body.username, email=body.email),
        requested_role=body.role,
    )
    context = await run_pipeline(signup_chain, context, request)
    user = auth_service.create_user(
        context.store, body.username, body.email, body.password, context.role
    )
    return auth_service.to_out(user, context.role)


@router.post("/signin", response_model=UserOut)
async def signin(
    body: SigninRequest,
    response: Response,
    context: RequestContext = Depends(get_request_context),
    codec: SessionCodec = Depends(get_session_codec),
):
    """Check credentials and set the session cookie."""
    user, token = auth_service.authenticate(context.store, codec, body.username, body.password)
    # Resolve through the same path every protected request takes
    user, role = context.resolver.resolve(token)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=int(codec.ttl.total_seconds()),
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )
    return auth_service.to_out(user, role)


@router.post("/signout", response_model=MessageResponse)
async def signout(response: Response):
    """Clear the session cookie."""
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME, httponly=True, samesite="lax")
    return MessageResponse(message="You've been signed out!")


@router.get("/me", response_model=UserOut)
async def me(context: RequestContext = Depends(guard(session_pipeline()))):
    """Current user and role, from the session cookie."""
    return auth_service.to_out(context.user, context.role)
