# teamlink/api/v1/users.py
from __future__ import annotations

import uuid
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from teamlink.api.v1.views import user_resp, user_skill_resp
from teamlink.core.auth_deps import get_current_principal
from teamlink.db.session import get_db
from teamlink.policies.rbac import Principal
from teamlink.schemas.skills import UserSkillRequest, UserSkillResponse
from teamlink.schemas.users import (
    ProfileUpdateRequest,
    UserProfileResponse,
    UserResponse,
)
from teamlink.services.users_service import UsersService

router = APIRouter(prefix="/users")


# ------------------------------------------------------------------
# OWN PROFILE
# ------------------------------------------------------------------

@router.get("/profile", response_model=UserResponse)
async def get_profile(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    svc = UsersService()
    user = svc.get_or_create(db, principal)
    return user_resp(svc.get(db, user.id), principal)


@router.put("/profile", response_model=UserResponse)
async def update_profile(
    body: ProfileUpdateRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    changes = {}
    fields = body.model_fields_set
    if "bio" in fields:
        changes["bio"] = body.bio
    if "avatarUrl" in fields:
        changes["avatar_url"] = str(body.avatarUrl) if body.avatarUrl else None

    svc = UsersService()
    user = svc.update_profile(db, principal, changes=changes)
    return user_resp(svc.get(db, user.id), principal)


@router.get("/all", response_model=List[UserResponse])
async def list_users(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return [user_resp(u) for u in UsersService().list_active(db)]


# ------------------------------------------------------------------
# OWN SKILLS
# ------------------------------------------------------------------

@router.get("/skills/my-skills", response_model=List[UserSkillResponse])
async def my_skills(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    svc = UsersService()
    user = svc.get_or_create(db, principal)
    return [user_skill_resp(us) for us in svc.list_skills(db, user.id)]


@router.post("/skills", response_model=UserSkillResponse)
async def add_skill(
    body: UserSkillRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    row = UsersService().upsert_skill(
        db, principal, skill_id=body.skillId, level=body.level
    )
    return user_skill_resp(row)


@router.delete("/skills/{skillId}", status_code=204)
async def remove_skill(
    skillId: uuid.UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    UsersService().remove_skill(db, principal, skillId)
    return Response(status_code=204)


# ------------------------------------------------------------------
# OTHER USERS
# ------------------------------------------------------------------

@router.get("/{userId}", response_model=UserResponse)
async def get_user(
    userId: uuid.UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return user_resp(UsersService().get(db, userId))


@router.get("/{userId}/skills", response_model=List[UserSkillResponse])
async def get_user_skills(
    userId: uuid.UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    svc = UsersService()
    svc.get(db, userId)
    return [user_skill_resp(us) for us in svc.list_skills(db, userId)]


@router.get("/{userId}/profile", response_model=UserProfileResponse)
async def get_public_profile(
    userId: uuid.UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return UsersService().public_profile(db, userId)
