#teamlink/schemas/projects.py
from __future__ import annotations

import uuid
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from teamlink.models.enums import ProjectStatus, SkillLevel
from teamlink.schemas.common import UserSummary


# -----------------------
# Request models
# -----------------------


class ProjectSkillRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")
    skillId: uuid.UUID
    requiredLevel: SkillLevel


class ProjectCreateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    skills: List[ProjectSkillRequest] = Field(default_factory=list)


class ProjectUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    status: Optional[ProjectStatus] = None


class ProjectSkillsReplaceRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")
    skills: List[ProjectSkillRequest]


# -----------------------
# Response models
# -----------------------


class ProjectSkillResponse(BaseModel):
    skillId: str
    skillName: str
    requiredLevel: SkillLevel


class ApplicationBrief(BaseModel):
    id: str
    status: str
    createdAt: str
    user: Optional[UserSummary] = None


class TeamMemberBrief(BaseModel):
    id: str
    roleTitle: str
    joinedAt: str
    user: Optional[UserSummary] = None


class ProjectResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    ownerId: str
    status: ProjectStatus
    createdAt: str
    owner: Optional[UserSummary] = None
    skills: List[ProjectSkillResponse] = Field(default_factory=list)
    applications: List[ApplicationBrief] = Field(default_factory=list)
    team: List[TeamMemberBrief] = Field(default_factory=list)
