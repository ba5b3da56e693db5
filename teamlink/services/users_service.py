# teamlink/services/users_service.py
from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from teamlink.core.exceptions import (
    InvalidOperationError,
    NotFoundError,
    UnauthenticatedError,
)
from teamlink.db.base import utcnow
from teamlink.db.session import unique_guard
from teamlink.models.enums import SkillLevel
from teamlink.models.rating import Rating
from teamlink.models.skill import Skill, UserSkill
from teamlink.models.user import User
from teamlink.policies.rbac import Principal
from teamlink.policies.ratings_policy import summarize_scores

logger = logging.getLogger(__name__)


class UsersService:
    def _by_external_id(self, db: Session, external_id: str) -> User | None:
        return db.execute(
            select(User).where(User.external_id == external_id)
        ).scalar_one_or_none()

    def get_or_create(self, db: Session, principal: Principal) -> User:
        """
        Resolve the caller to its local User, creating the shadow record on
        first contact. Keyed on the external identity id; touches last_login_at.
        """
        user = self._by_external_id(db, principal.external_id)
        if user is not None:
            user.last_login_at = utcnow()
            db.commit()
            return user

        if not principal.email:
            raise UnauthenticatedError("Token missing email claim.")

        username = principal.username or principal.email.split("@")[0]
        user = User(
            external_id=principal.external_id,
            username=username,
            email=principal.email,
            is_active=True,
            last_login_at=utcnow(),
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            # another request created the shadow first; fall back to it
            db.rollback()
            user = self._by_external_id(db, principal.external_id)
            if user is None:
                raise InvalidOperationError(
                    "Email is already registered to another account."
                )
            return user

        db.refresh(user)
        logger.info("created local user %s for identity %s", user.id, principal.external_id)
        return user

    def get(self, db: Session, user_id: uuid.UUID) -> User:
        user = db.execute(
            select(User)
            .where(User.id == user_id)
            .options(selectinload(User.user_skills))
        ).scalar_one_or_none()
        if not user:
            raise NotFoundError("User not found")
        return user

    def list_active(self, db: Session) -> List[User]:
        return db.execute(
            select(User)
            .where(User.is_active.is_(True))
            .options(selectinload(User.user_skills))
            .order_by(User.created_at.asc())
        ).scalars().all()

    def update_profile(
        self, db: Session, principal: Principal, *, changes: Dict[str, Any]
    ) -> User:
        user = self.get_or_create(db, principal)
        if "bio" in changes:
            user.bio = changes["bio"]
        if "avatar_url" in changes:
            user.avatar_url = changes["avatar_url"]
        db.commit()
        db.refresh(user)
        return user

    # ─────────────────────────────────────────────
    # SKILLS
    # ─────────────────────────────────────────────

    def list_skills(self, db: Session, user_id: uuid.UUID) -> List[UserSkill]:
        return db.execute(
            select(UserSkill).where(UserSkill.user_id == user_id)
        ).scalars().all()

    def upsert_skill(
        self,
        db: Session,
        principal: Principal,
        *,
        skill_id: uuid.UUID,
        level: SkillLevel,
    ) -> UserSkill:
        """Add a skill to the caller, or change its level if already held."""
        user = self.get_or_create(db, principal)

        if db.get(Skill, skill_id) is None:
            raise NotFoundError("Skill not found")

        row = db.execute(
            select(UserSkill).where(
                UserSkill.user_id == user.id, UserSkill.skill_id == skill_id
            )
        ).scalar_one_or_none()

        with unique_guard(db, "You already have this skill"):
            if row is None:
                row = UserSkill(user_id=user.id, skill_id=skill_id, level=level.value)
                db.add(row)
            else:
                row.level = level.value
        db.refresh(row)
        return row

    def remove_skill(self, db: Session, principal: Principal, skill_id: uuid.UUID) -> None:
        user = self.get_or_create(db, principal)
        row = db.execute(
            select(UserSkill).where(
                UserSkill.user_id == user.id, UserSkill.skill_id == skill_id
            )
        ).scalar_one_or_none()
        if not row:
            raise NotFoundError("User skill not found")
        db.delete(row)
        db.commit()

    # ─────────────────────────────────────────────
    # PUBLIC PROFILE
    # ─────────────────────────────────────────────

    def public_profile(self, db: Session, user_id: uuid.UUID) -> Dict[str, Any]:
        user = db.execute(
            select(User)
            .where(User.id == user_id)
            .options(
                selectinload(User.user_skills),
                selectinload(User.received_ratings).selectinload(Rating.rater),
                selectinload(User.received_ratings).selectinload(Rating.project),
            )
        ).scalar_one_or_none()
        if not user:
            raise NotFoundError("User not found")

        ratings = list(user.received_ratings)
        average, total = summarize_scores([r.score for r in ratings])

        return {
            "id": str(user.id),
            "username": user.username,
            "email": user.email,
            "bio": user.bio,
            "avatarUrl": user.avatar_url,
            "createdAt": user.created_at.isoformat(),
            "skills": [
                {"id": str(us.skill_id), "name": us.skill.name, "level": us.level}
                for us in user.user_skills
            ],
            "ratings": [
                {
                    "rating": r.score,
                    "comment": r.comment,
                    "createdAt": r.created_at.isoformat(),
                    "raterUsername": r.rater.username,
                    "projectTitle": r.project.title,
                }
                for r in ratings
            ],
            "averageRating": average,
            "totalRatings": total,
        }
