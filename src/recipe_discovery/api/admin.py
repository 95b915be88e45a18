"""Admin API endpoints with simple token auth."""

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, status

from recipe_discovery.api.serializers import serialize_user
from recipe_discovery.containers import AppContainer
from recipe_discovery.domain.errors import NotFoundError

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/jobs", dependencies=[Depends(require_admin)])
async def list_jobs(request: Request) -> dict[str, object]:
    """Return the periodic jobs and when they run next."""
    container: AppContainer = request.app.state.container
    return {
        "running": container.scheduler.running,
        "jobs": container.scheduler.describe(),
    }


@router.get("/users", dependencies=[Depends(require_admin)])
async def find_user(
    request: Request, email: str = Query(min_length=1)
) -> dict[str, object]:
    """Look up a user by email address."""
    container: AppContainer = request.app.state.container
    user = container.user_service.find_by_email(email)
    if user is None:
        raise NotFoundError("User", email)
    return serialize_user(user)
