"""Common dependencies for FastAPI routes."""

from fastapi import Depends, Request
from fastapi_throttle import RateLimiter

from ..config import get_settings
from ..workflows.controller import WorkflowController, WorkspaceSession

settings = get_settings()

# Rate limiter for routes that call the model
router_limiter = RateLimiter(times=settings.rate_limit_times, seconds=settings.rate_limit_seconds)


def get_session(request: Request) -> WorkspaceSession:
    """The review session attached to the running app."""
    return request.app.state.session


def get_controller(session: WorkspaceSession = Depends(get_session)) -> WorkflowController:
    return WorkflowController(session, max_upload_bytes=settings.max_upload_mb * 1024 * 1024)
