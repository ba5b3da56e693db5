from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel

from teamlink.models.enums import ProjectStatus, SkillLevel


class SkillMatch(BaseModel):
    skillName: str
    requiredLevel: SkillLevel
    userLevel: Optional[SkillLevel] = None
    isMatch: bool


class ProjectOwner(BaseModel):
    id: str
    username: str
    avatarUrl: Optional[str] = None


class ProjectMatchResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    status: ProjectStatus
    createdAt: str
    owner: ProjectOwner
    skillMatches: List[SkillMatch]
    matchPercentage: int
    totalRequiredSkills: int
    matchedSkills: int
