#teamlink/policies/ratings_policy.py
from __future__ import annotations

import uuid
from fractions import Fraction
from typing import Iterable, Tuple

from teamlink.core.exceptions import ForbiddenError, InvalidOperationError
from teamlink.core.numbers import round_half_up
from teamlink.models.enums import ProjectStatus

NOT_OWNER_MESSAGE = "You can only rate members of your own projects"
NOT_COMPLETED_MESSAGE = "You can only rate users after the project is completed"
SELF_RATING_MESSAGE = "You cannot rate yourself"
NOT_MEMBER_MESSAGE = "User is not a member of this project's team"
ALREADY_RATED_MESSAGE = "You have already rated this user for this project"


def ensure_rating_window(
    *,
    owner_id: uuid.UUID,
    caller_id: uuid.UUID,
    project_status: str,
) -> None:
    """Owner-only, and only once the project is completed."""
    if owner_id != caller_id:
        raise ForbiddenError(NOT_OWNER_MESSAGE)
    if project_status != ProjectStatus.completed.value:
        raise InvalidOperationError(NOT_COMPLETED_MESSAGE)


def ensure_can_rate(
    *,
    owner_id: uuid.UUID,
    caller_id: uuid.UUID,
    project_status: str,
    rated_user_id: uuid.UUID,
    is_team_member: bool,
    already_rated: bool,
) -> None:
    """
    Rating preconditions, checked in order:
    1. caller owns the project
    2. project is completed
    3. no self-rating
    4. target is on the project's team
    5. no previous rating for (caller, target, project)
    """
    ensure_rating_window(
        owner_id=owner_id, caller_id=caller_id, project_status=project_status
    )
    if rated_user_id == caller_id:
        raise InvalidOperationError(SELF_RATING_MESSAGE)
    if not is_team_member:
        raise InvalidOperationError(NOT_MEMBER_MESSAGE)
    if already_rated:
        raise InvalidOperationError(ALREADY_RATED_MESSAGE)


def summarize_scores(scores: Iterable[int]) -> Tuple[float, int]:
    """(average rounded to 2 places, count); average is 0 with no ratings."""
    values = list(scores)
    if not values:
        return 0.0, 0
    average = round_half_up(Fraction(sum(values), len(values)), 2)
    return float(average), len(values)
