from __future__ import annotations

from datetime import datetime
from typing import Any, Dict
from pydantic import BaseModel, Field

from teamlink.models.enums import NotificationType


class NotificationEvent(BaseModel):
    """Fixed payload pushed to a single recipient."""

    id: str
    type: NotificationType
    title: str
    message: str
    data: Dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime
