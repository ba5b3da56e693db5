# teamlink/api/v1/teams.py
from __future__ import annotations

import uuid
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from teamlink.api.v1.views import team_resp
from teamlink.core.auth_deps import get_current_principal, get_leader
from teamlink.db.session import get_db
from teamlink.policies.rbac import Principal
from teamlink.schemas.teams import TeamMemberResponse, TeamMemberUpdateRequest
from teamlink.services.teams_service import TeamsService

router = APIRouter(prefix="/teams")


@router.get("/projects/{projectId}", response_model=List[TeamMemberResponse])
async def project_team(projectId: uuid.UUID, db: Session = Depends(get_db)):
    return [team_resp(t) for t in TeamsService().project_team(db, projectId)]


@router.get("/my-memberships", response_model=List[TeamMemberResponse])
async def my_memberships(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    rows = TeamsService().my_memberships(db, principal)
    return [team_resp(t, with_user=False, with_project=True) for t in rows]


@router.put("/projects/{projectId}/members/{teamId}", response_model=TeamMemberResponse)
async def update_member_role(
    projectId: uuid.UUID,
    teamId: uuid.UUID,
    body: TeamMemberUpdateRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_leader),
):
    row = TeamsService().update_member_role(
        db, projectId, teamId, principal, role_title=body.roleTitle
    )
    return team_resp(row)


@router.delete("/projects/{projectId}/members/{teamId}", status_code=204)
async def remove_member(
    projectId: uuid.UUID,
    teamId: uuid.UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_leader),
):
    TeamsService().remove_member(db, projectId, teamId, principal)
    return Response(status_code=204)
