"""FastAPI glue: turn pipelines into route dependencies."""

from typing import Callable, Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from demoyork.auth.identity import IdentityResolver
from demoyork.auth.pipeline import Pipeline, RequestContext
from demoyork.core.config import settings
from demoyork.core.security import SessionCodec
from demoyork.db.session import get_db
from demoyork.services.credential_store import CredentialStore


def get_session_codec(request: Request) -> SessionCodec:
    """The process-wide codec, created once by the app lifespan."""
    codec: Optional[SessionCodec] = getattr(request.app.state, "session_codec", None)
    if codec is None:
        raise RuntimeError("Session codec is not configured; the app lifespan has not run")
    return codec


def get_credential_store(db: Session = Depends(get_db)) -> CredentialStore:
    return CredentialStore(db)


def get_request_context(
    request: Request,
    store: CredentialStore = Depends(get_credential_store),
    codec: SessionCodec = Depends(get_session_codec),
) -> RequestContext:
    """Seed context for a request: its store, resolver and session cookie."""
    return RequestContext(
        store=store,
        resolver=IdentityResolver(codec, store),
        session_token=request.cookies.get(settings.SESSION_COOKIE_NAME),
    )


async def run_pipeline(pipeline: Pipeline, context: RequestContext, request: Request) -> RequestContext:
    """Run ``pipeline`` for ``request``; raise the aborting error, if any."""
    outcome = await pipeline.run(context, is_disconnected=request.is_disconnected)
    return outcome.unwrap()


def guard(pipeline: Pipeline) -> Callable:
    """Dependency that runs ``pipeline`` and yields the completed context.

    Usage:
        @router.delete("/{category_id}")
        async def delete(ctx: RequestContext = Depends(guard(write_pipeline(require_admin)))):
            ...
    """

    async def dependency(
        request: Request,
        context: RequestContext = Depends(get_request_context),
    ) -> RequestContext:
        return await run_pipeline(pipeline, context, request)

    dependency.__name__ = f"guard_{pipeline.name}"
    return dependency
