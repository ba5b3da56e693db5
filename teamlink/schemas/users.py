from __future__ import annotations

from typing import List, Optional
from pydantic import AnyHttpUrl, BaseModel, ConfigDict, Field

from teamlink.models.enums import Role
from teamlink.schemas.skills import UserSkillResponse


class ProfileUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")
    bio: Optional[str] = None
    avatarUrl: Optional[AnyHttpUrl] = None


class UserResponse(BaseModel):
    id: str
    username: str
    email: str
    bio: Optional[str] = None
    avatarUrl: Optional[str] = None
    isActive: bool
    lastLoginAt: Optional[str] = None
    createdAt: str
    skills: List[UserSkillResponse] = Field(default_factory=list)
    role: Optional[Role] = None


class ProfileRating(BaseModel):
    rating: int
    comment: Optional[str] = None
    createdAt: str
    raterUsername: str
    projectTitle: str


class UserProfileResponse(BaseModel):
    id: str
    username: str
    email: str
    bio: Optional[str] = None
    avatarUrl: Optional[str] = None
    createdAt: str
    skills: List[UserSkillResponse]
    ratings: List[ProfileRating]
    averageRating: float
    totalRatings: int
