from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from teamlink.schemas.applications import ApplicationProjectSummary
from teamlink.schemas.common import UserSummary


class TeamMemberUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")
    roleTitle: str = Field(..., min_length=1, max_length=255)


class TeamMemberResponse(BaseModel):
    id: str
    projectId: str
    userId: str
    roleTitle: str
    joinedAt: str
    user: Optional[UserSummary] = None
    project: Optional[ApplicationProjectSummary] = None
