from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from teamlink.models.enums import ApplicationStatus, ProjectStatus
from teamlink.schemas.common import UserSummary


class ApplicationStatusUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")
    status: ApplicationStatus
    roleTitle: Optional[str] = Field(default=None, min_length=1, max_length=255)


class ApplicationProjectSummary(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    status: ProjectStatus
    createdAt: str
    owner: Optional[UserSummary] = None


class ApplicationResponse(BaseModel):
    id: str
    userId: str
    projectId: str
    status: ApplicationStatus
    createdAt: str
    user: Optional[UserSummary] = None
    project: Optional[ApplicationProjectSummary] = None
