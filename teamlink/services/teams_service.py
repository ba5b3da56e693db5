# teamlink/services/teams_service.py
from __future__ import annotations

import logging
import uuid
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from teamlink.core.exceptions import NotFoundError
from teamlink.models.project import Project
from teamlink.models.team import Team
from teamlink.policies.rbac import Principal
from teamlink.services.projects_service import ProjectsService
from teamlink.services.users_service import UsersService

logger = logging.getLogger(__name__)

MANAGE_MESSAGE = "You can only manage team members for your own projects"


class TeamsService:
    def __init__(self, users: Optional[UsersService] = None, projects: Optional[ProjectsService] = None):
        self.users = users or UsersService()
        self.projects = projects or ProjectsService(users=self.users)

    def project_team(self, db: Session, project_id: uuid.UUID) -> List[Team]:
        self.projects.get(db, project_id)
        return db.execute(
            select(Team)
            .where(Team.project_id == project_id)
            .options(selectinload(Team.user))
            .order_by(Team.joined_at.asc())
        ).scalars().all()

    def _member(self, db: Session, project_id: uuid.UUID, team_id: uuid.UUID) -> Team:
        row = db.execute(
            select(Team)
            .where(Team.id == team_id, Team.project_id == project_id)
            .options(selectinload(Team.user))
        ).scalar_one_or_none()
        if not row:
            raise NotFoundError("Team member not found")
        return row

    def update_member_role(
        self,
        db: Session,
        project_id: uuid.UUID,
        team_id: uuid.UUID,
        principal: Principal,
        *,
        role_title: str,
    ) -> Team:
        self.projects.get_owned(db, project_id, principal, MANAGE_MESSAGE)
        row = self._member(db, project_id, team_id)
        row.role_title = role_title
        db.commit()
        db.refresh(row)
        return row

    def remove_member(
        self, db: Session, project_id: uuid.UUID, team_id: uuid.UUID, principal: Principal
    ) -> None:
        self.projects.get_owned(db, project_id, principal, MANAGE_MESSAGE)
        row = self._member(db, project_id, team_id)
        db.delete(row)
        db.commit()
        logger.info("team member %s removed from project %s", team_id, project_id)

    def my_memberships(self, db: Session, principal: Principal) -> List[Team]:
        user = self.users.get_or_create(db, principal)
        return db.execute(
            select(Team)
            .where(Team.user_id == user.id)
            .options(selectinload(Team.project).selectinload(Project.owner))
            .order_by(Team.joined_at.desc())
        ).scalars().all()
