from __future__ import annotations

import uuid
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from teamlink.schemas.common import UserSummary


class RatingCreateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")
    ratedUserId: uuid.UUID
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = None


class RatingResponse(BaseModel):
    id: str
    raterId: str
    ratedUserId: str
    projectId: str
    rating: int
    comment: Optional[str] = None
    createdAt: str


class ExistingRating(BaseModel):
    rating: int
    comment: Optional[str] = None
    createdAt: str


class RateableMemberResponse(BaseModel):
    teamId: str
    roleTitle: str
    joinedAt: str
    user: UserSummary
    hasRated: bool
    existingRating: Optional[ExistingRating] = None
