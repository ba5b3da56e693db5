from __future__ import annotations

from typing import Optional
from pydantic import BaseModel


class UserSummary(BaseModel):
    id: str
    username: str
    email: Optional[str] = None
    avatarUrl: Optional[str] = None
    bio: Optional[str] = None


class ErrorResponse(BaseModel):
    detail: str
    error: str
