from __future__ import annotations

import uuid
from pydantic import BaseModel, ConfigDict, Field

from teamlink.models.enums import SkillLevel


class SkillCreateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = Field(..., min_length=1, max_length=255)


class SkillResponse(BaseModel):
    id: str
    name: str


class UserSkillRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")
    skillId: uuid.UUID
    level: SkillLevel


class UserSkillResponse(BaseModel):
    id: str
    name: str
    level: SkillLevel
