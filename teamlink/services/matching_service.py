# teamlink/services/matching_service.py
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from fractions import Fraction
from typing import Dict, List, Mapping, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from teamlink.core.numbers import round_half_up
from teamlink.models.enums import ProjectStatus, SkillLevel
from teamlink.models.project import Project
from teamlink.models.skill import UserSkill
from teamlink.policies.rbac import Principal
from teamlink.services.users_service import UsersService


@dataclass(frozen=True)
class RequiredSkill:
    skill_id: uuid.UUID
    skill_name: str
    required_level: SkillLevel


@dataclass(frozen=True)
class SkillMatchResult:
    skill_name: str
    required_level: SkillLevel
    user_level: Optional[SkillLevel]
    is_match: bool


@dataclass(frozen=True)
class MatchScore:
    skill_matches: List[SkillMatchResult]
    total_required: int
    matched: int
    percentage: int


def is_match(user_level: Optional[SkillLevel], required_level: SkillLevel) -> bool:
    """A held skill at or above the required level."""
    return user_level is not None and user_level.rank >= required_level.rank


def score_skills(
    required: Sequence[RequiredSkill],
    user_levels: Mapping[uuid.UUID, SkillLevel],
) -> MatchScore:
    """
    Compare a project's required skills against the levels a user holds.

    percentage = round_half_up(matched / total * 100); 0 when nothing is required.
    """
    matches: List[SkillMatchResult] = []
    for req in required:
        held = user_levels.get(req.skill_id)
        matches.append(
            SkillMatchResult(
                skill_name=req.skill_name,
                required_level=req.required_level,
                user_level=held,
                is_match=is_match(held, req.required_level),
            )
        )

    total = len(required)
    matched = sum(1 for m in matches if m.is_match)
    percentage = int(round_half_up(Fraction(matched * 100, total))) if total else 0
    return MatchScore(
        skill_matches=matches,
        total_required=total,
        matched=matched,
        percentage=percentage,
    )


@dataclass(frozen=True)
class ProjectMatch:
    project: Project
    score: MatchScore


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive values; they are stored as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _sort_key(item: ProjectMatch):
    created = _as_utc(item.project.created_at)
    return (
        -item.score.percentage,
        -item.score.matched,
        -created.timestamp(),
        str(item.project.id),
    )


def rank_matches(items: Sequence[ProjectMatch]) -> List[ProjectMatch]:
    """Best match first: percentage, then matched count, then newest, then id."""
    return sorted(items, key=_sort_key)


def required_skills_of(project: Project) -> List[RequiredSkill]:
    return [
        RequiredSkill(
            skill_id=ps.skill_id,
            skill_name=ps.skill.name,
            required_level=SkillLevel(ps.required_level),
        )
        for ps in project.project_skills
    ]


class MatchingService:
    def __init__(self, users: Optional[UsersService] = None):
        self.users = users or UsersService()

    def _user_levels(self, db: Session, user_id: uuid.UUID) -> Dict[uuid.UUID, SkillLevel]:
        rows = db.execute(
            select(UserSkill.skill_id, UserSkill.level).where(UserSkill.user_id == user_id)
        ).all()
        return {skill_id: SkillLevel(level) for skill_id, level in rows}

    def _candidates(self, db: Session, user_id: uuid.UUID) -> List[Project]:
        # open, not the caller's own, with at least one requirement
        return db.execute(
            select(Project)
            .where(
                Project.status == ProjectStatus.open.value,
                Project.owner_id != user_id,
                Project.project_skills.any(),
            )
            .options(selectinload(Project.owner), selectinload(Project.project_skills))
        ).scalars().all()

    def recommended_projects(self, db: Session, principal: Principal) -> List[ProjectMatch]:
        user = self.users.get_or_create(db, principal)

        levels = self._user_levels(db, user.id)
        if not levels:
            return []

        scored: List[ProjectMatch] = []
        for project in self._candidates(db, user.id):
            score = score_skills(required_skills_of(project), levels)
            if score.matched > 0:
                scored.append(ProjectMatch(project=project, score=score))

        return rank_matches(scored)
