# teamlink/services/skills_service.py
from __future__ import annotations

import uuid
from typing import List

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from teamlink.core.exceptions import InvalidOperationError, NotFoundError
from teamlink.db.session import unique_guard
from teamlink.models.skill import Skill

DUPLICATE_SKILL_MESSAGE = "Skill already exists"


class SkillsService:
    def list_all(self, db: Session) -> List[Skill]:
        return db.execute(select(Skill).order_by(Skill.name.asc())).scalars().all()

    def search(self, db: Session, query: str) -> List[Skill]:
        """Case-insensitive substring match on the skill name."""
        return db.execute(
            select(Skill)
            .where(Skill.name.icontains(query, autoescape=True))
            .order_by(Skill.name.asc())
        ).scalars().all()

    def get(self, db: Session, skill_id: uuid.UUID) -> Skill:
        skill = db.get(Skill, skill_id)
        if not skill:
            raise NotFoundError("Skill not found")
        return skill

    def get_many(self, db: Session, skill_ids: List[uuid.UUID]) -> dict:
        """id -> Skill; NotFound if any id is unknown."""
        wanted = set(skill_ids)
        if not wanted:
            return {}
        rows = db.execute(select(Skill).where(Skill.id.in_(wanted))).scalars().all()
        found = {s.id: s for s in rows}
        missing = wanted - set(found)
        if missing:
            raise NotFoundError(
                "Skill not found: " + ", ".join(sorted(str(m) for m in missing))
            )
        return found

    def create(self, db: Session, *, name: str) -> Skill:
        name = name.strip()
        existing = db.execute(
            select(Skill).where(func.lower(Skill.name) == name.lower())
        ).scalar_one_or_none()
        if existing:
            raise InvalidOperationError(DUPLICATE_SKILL_MESSAGE)

        skill = Skill(name=name)
        with unique_guard(db, DUPLICATE_SKILL_MESSAGE):
            db.add(skill)
        db.refresh(skill)
        return skill

    def delete(self, db: Session, skill_id: uuid.UUID) -> None:
        skill = self.get(db, skill_id)
        db.delete(skill)
        db.commit()
