# teamlink/api/v1/projects.py
from __future__ import annotations

import uuid
from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, Response
from sqlalchemy.orm import Session

from teamlink.api.v1.views import (
    application_resp,
    match_resp,
    project_resp,
    rateable_member_resp,
    rating_resp,
)
from teamlink.core.auth_deps import get_freelancer, get_leader
from teamlink.db.session import get_db
from teamlink.models.enums import ApplicationStatus
from teamlink.policies.rbac import Principal
from teamlink.schemas.applications import (
    ApplicationResponse,
    ApplicationStatusUpdateRequest,
)
from teamlink.schemas.matching import ProjectMatchResponse
from teamlink.schemas.projects import (
    ProjectCreateRequest,
    ProjectResponse,
    ProjectSkillsReplaceRequest,
    ProjectUpdateRequest,
)
from teamlink.schemas.ratings import (
    RateableMemberResponse,
    RatingCreateRequest,
    RatingResponse,
)
from teamlink.services import notifications_service as notify
from teamlink.services.applications_service import ApplicationsService
from teamlink.services.matching_service import MatchingService
from teamlink.services.projects_service import ProjectsService
from teamlink.services.ratings_service import RatingsService

router = APIRouter(prefix="/projects")


def _requirements(skills) -> list:
    return [(s.skillId, s.requiredLevel) for s in skills]


# ------------------------------------------------------------------
# PROJECTS
# ------------------------------------------------------------------

@router.post("", response_model=ProjectResponse, status_code=201)
async def create_project(
    body: ProjectCreateRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_leader),
):
    p = ProjectsService().create(
        db,
        principal,
        title=body.title,
        description=body.description,
        skills=_requirements(body.skills),
    )
    return project_resp(p)


@router.get("", response_model=List[ProjectResponse])
async def list_open_projects(db: Session = Depends(get_db)):
    return [project_resp(p) for p in ProjectsService().list_open(db)]


@router.get("/my-projects", response_model=List[ProjectResponse])
async def my_projects(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_leader),
):
    return [project_resp(p) for p in ProjectsService().list_owned(db, principal)]


@router.get("/my-applications", response_model=List[ApplicationResponse])
async def my_applications(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_freelancer),
):
    rows = ApplicationsService().list_mine(db, principal)
    return [application_resp(a, with_user=False) for a in rows]


@router.get("/recommended", response_model=List[ProjectMatchResponse])
async def recommended_projects(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_freelancer),
):
    return [match_resp(m) for m in MatchingService().recommended_projects(db, principal)]


@router.get("/{projectId}", response_model=ProjectResponse)
async def get_project(projectId: uuid.UUID, db: Session = Depends(get_db)):
    return project_resp(ProjectsService().get(db, projectId))


@router.put("/{projectId}", response_model=ProjectResponse)
async def update_project(
    projectId: uuid.UUID,
    body: ProjectUpdateRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_leader),
):
    changes = body.model_dump(exclude_unset=True)
    p = ProjectsService().update(db, projectId, principal, changes=changes)
    return project_resp(p)


@router.delete("/{projectId}", status_code=204)
async def delete_project(
    projectId: uuid.UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_leader),
):
    ProjectsService().delete(db, projectId, principal)
    return Response(status_code=204)


@router.put("/{projectId}/skills", response_model=ProjectResponse)
async def replace_project_skills(
    projectId: uuid.UUID,
    body: ProjectSkillsReplaceRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_leader),
):
    p = ProjectsService().replace_skills(
        db, projectId, principal, skills=_requirements(body.skills)
    )
    return project_resp(p)


# ------------------------------------------------------------------
# APPLICATIONS
# ------------------------------------------------------------------

@router.post("/{projectId}/applications", response_model=ApplicationResponse, status_code=201)
async def apply_to_project(
    projectId: uuid.UUID,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_freelancer),
):
    app_row = ApplicationsService().apply(db, projectId, principal)

    event = notify.application_received(app_row, app_row.project, app_row.user.username)
    background_tasks.add_task(notify.hub.send_to_user, str(app_row.project.owner_id), event)

    return application_resp(app_row)


@router.get("/{projectId}/applications", response_model=List[ApplicationResponse])
async def list_project_applications(
    projectId: uuid.UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_leader),
):
    rows = ApplicationsService().list_for_project(db, projectId, principal)
    return [application_resp(a, with_project=False) for a in rows]


@router.put(
    "/{projectId}/applications/{applicationId}/status",
    response_model=ApplicationResponse,
)
async def update_application_status(
    projectId: uuid.UUID,
    applicationId: uuid.UUID,
    body: ApplicationStatusUpdateRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_leader),
):
    app_row, team_row, changed = ApplicationsService().update_status(
        db,
        projectId,
        applicationId,
        principal,
        status=body.status,
        role_title=body.roleTitle,
    )

    if not changed:
        event = None
    elif body.status == ApplicationStatus.accepted:
        event = notify.application_accepted(app_row.project, team_row)
    elif body.status == ApplicationStatus.rejected:
        event = notify.application_rejected(app_row.project, app_row)
    else:
        event = None
    if event is not None:
        background_tasks.add_task(notify.hub.send_to_user, str(app_row.user_id), event)

    return application_resp(app_row)


# ------------------------------------------------------------------
# RATINGS
# ------------------------------------------------------------------

@router.post("/{projectId}/ratings", response_model=RatingResponse, status_code=201)
async def rate_user(
    projectId: uuid.UUID,
    body: RatingCreateRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_leader),
):
    r = RatingsService().rate_user(
        db,
        projectId,
        principal,
        rated_user_id=body.ratedUserId,
        score=body.rating,
        comment=body.comment,
    )
    return rating_resp(r)


@router.get("/{projectId}/rateable-members", response_model=List[RateableMemberResponse])
async def rateable_members(
    projectId: uuid.UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_leader),
):
    rows = RatingsService().rateable_members(db, projectId, principal)
    return [rateable_member_resp(item) for item in rows]
