# teamlink/api/v1/skills.py
from __future__ import annotations

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from teamlink.api.v1.views import skill_resp
from teamlink.core.auth_deps import get_leader
from teamlink.db.session import get_db
from teamlink.policies.rbac import Principal
from teamlink.schemas.skills import SkillCreateRequest, SkillResponse
from teamlink.services.skills_service import SkillsService

router = APIRouter(prefix="/skills")


@router.get("", response_model=List[SkillResponse])
async def list_skills(
    search: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
):
    svc = SkillsService()
    rows = svc.search(db, search) if search else svc.list_all(db)
    return [skill_resp(s) for s in rows]


@router.get("/{skillId}", response_model=SkillResponse)
async def get_skill(skillId: uuid.UUID, db: Session = Depends(get_db)):
    return skill_resp(SkillsService().get(db, skillId))


@router.post("", response_model=SkillResponse, status_code=201)
async def create_skill(
    body: SkillCreateRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_leader),
):
    return skill_resp(SkillsService().create(db, name=body.name))


@router.delete("/{skillId}", status_code=204)
async def delete_skill(
    skillId: uuid.UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_leader),
):
    SkillsService().delete(db, skillId)
    return Response(status_code=204)
