#teamlink/policies/projects_policy.py
from __future__ import annotations

from teamlink.core.exceptions import ForbiddenError
from teamlink.models.project import Project
from teamlink.models.user import User


def is_owner(project: Project, user: User) -> bool:
    return project.owner_id == user.id


def ensure_owner(project: Project, user: User, message: str) -> None:
    """Ownership gate shared by every owner-only project action."""
    if not is_owner(project, user):
        raise ForbiddenError(message)
