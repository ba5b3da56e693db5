#teamlink/policies/applications_policy.py
from __future__ import annotations

from typing import Dict, FrozenSet

from teamlink.core.exceptions import InvalidOperationError
from teamlink.models.enums import ApplicationStatus, ProjectStatus
from teamlink.models.project import Project
from teamlink.models.user import User

DEFAULT_ROLE_TITLE = "Team Member"

# accepted / rejected are terminal
ALLOWED_TRANSITIONS: Dict[ApplicationStatus, FrozenSet[ApplicationStatus]] = {
    ApplicationStatus.pending: frozenset(
        {ApplicationStatus.accepted, ApplicationStatus.rejected}
    ),
    ApplicationStatus.accepted: frozenset(),
    ApplicationStatus.rejected: frozenset(),
}


def ensure_can_apply(project: Project, user: User) -> None:
    if project.owner_id == user.id:
        raise InvalidOperationError("You cannot apply to your own project")
    if project.status != ProjectStatus.open.value:
        raise InvalidOperationError("This project is not accepting applications")


def is_noop_transition(current: ApplicationStatus, target: ApplicationStatus) -> bool:
    return current == target


def ensure_transition(current: ApplicationStatus, target: ApplicationStatus) -> None:
    """
    Re-applying the current status is allowed (no-op). Anything outside
    ALLOWED_TRANSITIONS is rejected.
    """
    if is_noop_transition(current, target):
        return
    if target not in ALLOWED_TRANSITIONS[current]:
        raise InvalidOperationError(
            f"Application has already been {current.value} and cannot be changed to {target.value}"
        )
