# teamlink/services/projects_service.py
from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from teamlink.core.exceptions import NotFoundError
from teamlink.db.session import unique_guard
from teamlink.models.application import Application
from teamlink.models.enums import ProjectStatus, SkillLevel
from teamlink.models.project import Project, ProjectSkill
from teamlink.models.team import Team
from teamlink.models.user import User
from teamlink.policies.projects_policy import ensure_owner
from teamlink.policies.rbac import Principal
from teamlink.services.skills_service import SkillsService
from teamlink.services.users_service import UsersService

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = {"title", "description", "status"}

SkillRequirement = Tuple[uuid.UUID, SkillLevel]


def _detail_options():
    return (
        selectinload(Project.owner),
        selectinload(Project.project_skills),
        selectinload(Project.applications).selectinload(Application.user),
        selectinload(Project.team).selectinload(Team.user),
    )


class ProjectsService:
    def __init__(self, users: Optional[UsersService] = None, skills: Optional[SkillsService] = None):
        self.users = users or UsersService()
        self.skills = skills or SkillsService()

    def _build_project_skills(
        self, db: Session, requirements: Sequence[SkillRequirement]
    ) -> List[ProjectSkill]:
        # last entry wins when a skill is listed twice
        levels: Dict[uuid.UUID, SkillLevel] = {}
        for skill_id, level in requirements:
            levels[skill_id] = level
        self.skills.get_many(db, list(levels))
        return [
            ProjectSkill(skill_id=skill_id, required_level=level.value)
            for skill_id, level in levels.items()
        ]

    def create(
        self,
        db: Session,
        principal: Principal,
        *,
        title: str,
        description: Optional[str],
        skills: Sequence[SkillRequirement] = (),
    ) -> Project:
        owner = self.users.get_or_create(db, principal)

        project = Project(
            title=title,
            description=description,
            owner_id=owner.id,
            status=ProjectStatus.open.value,
        )
        project.project_skills = self._build_project_skills(db, skills)
        db.add(project)
        db.commit()
        logger.info("project %s created by %s", project.id, owner.id)
        return self.get(db, project.id)

    def get(self, db: Session, project_id: uuid.UUID) -> Project:
        project = db.execute(
            select(Project).where(Project.id == project_id).options(*_detail_options())
        ).scalar_one_or_none()
        if not project:
            raise NotFoundError("Project not found")
        return project

    def get_owned(
        self, db: Session, project_id: uuid.UUID, principal: Principal, message: str
    ) -> Tuple[User, Project]:
        """(caller, project) once the caller is confirmed as the project owner."""
        user = self.users.get_or_create(db, principal)
        project = self.get(db, project_id)
        ensure_owner(project, user, message)
        return user, project

    def list_open(self, db: Session) -> List[Project]:
        return db.execute(
            select(Project)
            .where(Project.status == ProjectStatus.open.value)
            .options(*_detail_options())
            .order_by(Project.created_at.desc())
        ).scalars().all()

    def list_owned(self, db: Session, principal: Principal) -> List[Project]:
        user = self.users.get_or_create(db, principal)
        return db.execute(
            select(Project)
            .where(Project.owner_id == user.id)
            .options(*_detail_options())
            .order_by(Project.created_at.desc())
        ).scalars().all()

    def update(
        self,
        db: Session,
        project_id: uuid.UUID,
        principal: Principal,
        *,
        changes: Dict[str, Any],
    ) -> Project:
        _, project = self.get_owned(
            db, project_id, principal, "You can only update your own projects"
        )
        for key, value in changes.items():
            if key not in UPDATABLE_FIELDS:
                continue
            # title and status are NOT NULL; an explicit null leaves them unchanged
            if value is None and key != "description":
                continue
            if isinstance(value, ProjectStatus):
                value = value.value
            setattr(project, key, value)
        db.commit()
        logger.info("project %s updated fields=%s", project.id, sorted(changes))
        return self.get(db, project.id)

    def delete(self, db: Session, project_id: uuid.UUID, principal: Principal) -> None:
        _, project = self.get_owned(
            db, project_id, principal, "You can only delete your own projects"
        )
        db.delete(project)
        db.commit()
        logger.info("project %s deleted", project_id)

    def replace_skills(
        self,
        db: Session,
        project_id: uuid.UUID,
        principal: Principal,
        *,
        skills: Sequence[SkillRequirement],
    ) -> Project:
        _, project = self.get_owned(
            db, project_id, principal, "You can only update your own projects"
        )
        new_rows = self._build_project_skills(db, skills)

        # flush removals before inserts so (project, skill) stays unique
        project.project_skills.clear()
        db.flush()
        with unique_guard(db, "Skill is already required by this project"):
            project.project_skills.extend(new_rows)
        return self.get(db, project.id)
