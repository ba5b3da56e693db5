# teamlink/services/ratings_service.py
from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from teamlink.db.session import unique_guard
from teamlink.models.rating import Rating
from teamlink.models.team import Team
from teamlink.policies.ratings_policy import (
    ALREADY_RATED_MESSAGE,
    ensure_can_rate,
    ensure_rating_window,
)
from teamlink.policies.rbac import Principal
from teamlink.services.projects_service import ProjectsService
from teamlink.services.users_service import UsersService

logger = logging.getLogger(__name__)


class RatingsService:
    def __init__(self, users: Optional[UsersService] = None, projects: Optional[ProjectsService] = None):
        self.users = users or UsersService()
        self.projects = projects or ProjectsService(users=self.users)

    def _existing(
        self, db: Session, rater_id: uuid.UUID, rated_user_id: uuid.UUID, project_id: uuid.UUID
    ) -> Optional[Rating]:
        return db.execute(
            select(Rating).where(
                Rating.rater_id == rater_id,
                Rating.rated_user_id == rated_user_id,
                Rating.project_id == project_id,
            )
        ).scalar_one_or_none()

    def rate_user(
        self,
        db: Session,
        project_id: uuid.UUID,
        principal: Principal,
        *,
        rated_user_id: uuid.UUID,
        score: int,
        comment: Optional[str] = None,
    ) -> Rating:
        caller = self.users.get_or_create(db, principal)
        project = self.projects.get(db, project_id)

        is_member = db.execute(
            select(Team.id).where(
                Team.project_id == project.id, Team.user_id == rated_user_id
            )
        ).first() is not None

        ensure_can_rate(
            owner_id=project.owner_id,
            caller_id=caller.id,
            project_status=project.status,
            rated_user_id=rated_user_id,
            is_team_member=is_member,
            already_rated=self._existing(db, caller.id, rated_user_id, project.id) is not None,
        )

        rating = Rating(
            rater_id=caller.id,
            rated_user_id=rated_user_id,
            project_id=project.id,
            score=score,
            comment=comment,
        )
        with unique_guard(db, ALREADY_RATED_MESSAGE):
            db.add(rating)

        logger.info(
            "rating %s by=%s for=%s project=%s",
            rating.id, caller.id, rated_user_id, project.id,
        )
        db.refresh(rating)
        return rating

    def rateable_members(
        self, db: Session, project_id: uuid.UUID, principal: Principal
    ) -> List[Dict[str, Any]]:
        """
        Team rows the owner may rate (every member but the owner), each with
        whether the caller has rated them already.
        """
        caller = self.users.get_or_create(db, principal)
        project = self.projects.get(db, project_id)
        ensure_rating_window(
            owner_id=project.owner_id,
            caller_id=caller.id,
            project_status=project.status,
        )

        members = db.execute(
            select(Team)
            .where(Team.project_id == project.id, Team.user_id != project.owner_id)
            .options(selectinload(Team.user))
            .order_by(Team.joined_at.asc())
        ).scalars().all()

        given = {
            r.rated_user_id: r
            for r in db.execute(
                select(Rating).where(
                    Rating.rater_id == caller.id, Rating.project_id == project.id
                )
            ).scalars()
        }

        result = []
        for member in members:
            rating = given.get(member.user_id)
            result.append(
                {
                    "team": member,
                    "has_rated": rating is not None,
                    "existing_rating": rating,
                }
            )
        return result
