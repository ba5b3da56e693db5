#teamlink/models/enums.py
from __future__ import annotations
from enum import Enum


class Role(str, Enum):
    leader = "leader"
    freelancer = "freelancer"


class SkillLevel(str, Enum):
    beginner = "beginner"
    intermediate = "intermediate"
    expert = "expert"

    @property
    def rank(self) -> int:
        return SKILL_LEVEL_RANK[self]


SKILL_LEVEL_RANK = {
    SkillLevel.beginner: 1,
    SkillLevel.intermediate: 2,
    SkillLevel.expert: 3,
}


class ProjectStatus(str, Enum):
    open = "open"
    in_progress = "in_progress"
    closed = "closed"
    completed = "completed"


class ApplicationStatus(str, Enum):
    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"


class NotificationType(str, Enum):
    application_received = "application_received"
    application_accepted = "application_accepted"
    application_rejected = "application_rejected"
