from fastapi import APIRouter

from teamlink.api.v1.health import router as health_router
from teamlink.api.v1.auth import router as auth_router
from teamlink.api.v1.users import router as users_router
from teamlink.api.v1.skills import router as skills_router
from teamlink.api.v1.projects import router as projects_router
from teamlink.api.v1.teams import router as teams_router
from teamlink.api.v1.notifications import router as notifications_router
from teamlink.schemas.common import ErrorResponse


# domain errors share one body shape
v1_router = APIRouter(
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    }
)

# ------------------------------------------------------------------
# SYSTEM / CORE
# ------------------------------------------------------------------
v1_router.include_router(health_router, tags=["health"])
v1_router.include_router(auth_router, tags=["auth"])

# ------------------------------------------------------------------
# PEOPLE / CATALOG
# ------------------------------------------------------------------
v1_router.include_router(users_router, tags=["users"])
v1_router.include_router(skills_router, tags=["skills"])

# ------------------------------------------------------------------
# PROJECTS / APPLICATIONS / TEAMS
# ------------------------------------------------------------------
v1_router.include_router(projects_router, tags=["projects"])
v1_router.include_router(teams_router, tags=["teams"])

# ------------------------------------------------------------------
# REALTIME
# ------------------------------------------------------------------
v1_router.include_router(notifications_router, tags=["notifications"])
