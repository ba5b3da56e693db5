# teamlink/services/applications_service.py
from __future__ import annotations

import logging
import uuid
from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from teamlink.core.exceptions import InvalidOperationError, NotFoundError
from teamlink.db.session import unique_guard
from teamlink.models.application import Application
from teamlink.models.enums import ApplicationStatus
from teamlink.models.project import Project
from teamlink.models.team import Team
from teamlink.policies.applications_policy import (
    DEFAULT_ROLE_TITLE,
    ensure_can_apply,
    ensure_transition,
    is_noop_transition,
)
from teamlink.policies.rbac import Principal
from teamlink.services.projects_service import ProjectsService
from teamlink.services.users_service import UsersService

logger = logging.getLogger(__name__)

ALREADY_APPLIED_MESSAGE = "You have already applied to this project"
ALREADY_MEMBER_MESSAGE = "User is already a member of this project's team"


class ApplicationsService:
    """
    Application lifecycle:

        pending -> accepted   (team membership created in the same commit)
        pending -> rejected

    accepted / rejected are terminal.
    """

    def __init__(self, users: Optional[UsersService] = None, projects: Optional[ProjectsService] = None):
        self.users = users or UsersService()
        self.projects = projects or ProjectsService(users=self.users)

    def apply(self, db: Session, project_id: uuid.UUID, principal: Principal) -> Application:
        user = self.users.get_or_create(db, principal)
        project = self.projects.get(db, project_id)

        ensure_can_apply(project, user)

        if self._existing_application(db, user.id, project.id) is not None:
            raise InvalidOperationError(ALREADY_APPLIED_MESSAGE)

        application = Application(
            user_id=user.id,
            project_id=project.id,
            status=ApplicationStatus.pending.value,
        )
        with unique_guard(db, ALREADY_APPLIED_MESSAGE):
            db.add(application)

        logger.info(
            "application %s submitted user=%s project=%s",
            application.id, user.id, project.id,
        )
        return self._load(db, application.id)

    def update_status(
        self,
        db: Session,
        project_id: uuid.UUID,
        application_id: uuid.UUID,
        principal: Principal,
        *,
        status: ApplicationStatus,
        role_title: Optional[str] = None,
    ) -> Tuple[Application, Optional[Team], bool]:
        """
        Owner decision on an application. Returns the application, the
        applicant's team row on acceptance, and whether the status moved.
        """
        self.projects.get_owned(
            db,
            project_id,
            principal,
            "You can only manage applications for your own projects",
        )

        application = db.execute(
            select(Application).where(
                Application.id == application_id,
                Application.project_id == project_id,
            )
        ).scalar_one_or_none()
        if not application:
            raise NotFoundError("Application not found")

        current = ApplicationStatus(application.status)
        ensure_transition(current, status)
        changed = not is_noop_transition(current, status)

        team_row: Optional[Team] = None
        with unique_guard(db, ALREADY_MEMBER_MESSAGE):
            application.status = status.value
            if status == ApplicationStatus.accepted:
                team_row = self._ensure_member(
                    db, project_id, application.user_id, role_title or DEFAULT_ROLE_TITLE
                )

        logger.info(
            "application %s -> %s project=%s", application.id, status.value, project_id
        )
        if team_row is not None:
            db.refresh(team_row)
        return self._load(db, application.id), team_row, changed

    def _existing_application(
        self, db: Session, user_id: uuid.UUID, project_id: uuid.UUID
    ) -> Optional[Application]:
        return db.execute(
            select(Application).where(
                Application.user_id == user_id,
                Application.project_id == project_id,
            )
        ).scalar_one_or_none()

    def _team_row(
        self, db: Session, project_id: uuid.UUID, user_id: uuid.UUID
    ) -> Optional[Team]:
        return db.execute(
            select(Team).where(Team.project_id == project_id, Team.user_id == user_id)
        ).scalar_one_or_none()

    def _ensure_member(
        self, db: Session, project_id: uuid.UUID, user_id: uuid.UUID, role_title: str
    ) -> Team:
        row = self._team_row(db, project_id, user_id)
        if row is None:
            row = Team(project_id=project_id, user_id=user_id, role_title=role_title)
            db.add(row)
        return row

    def list_for_project(
        self, db: Session, project_id: uuid.UUID, principal: Principal
    ) -> List[Application]:
        self.projects.get_owned(
            db,
            project_id,
            principal,
            "You can only view applications for your own projects",
        )
        return db.execute(
            select(Application)
            .where(Application.project_id == project_id)
            .options(selectinload(Application.user))
            .order_by(Application.created_at.desc())
        ).scalars().all()

    def list_mine(self, db: Session, principal: Principal) -> List[Application]:
        user = self.users.get_or_create(db, principal)
        return db.execute(
            select(Application)
            .where(Application.user_id == user.id)
            .options(selectinload(Application.project).selectinload(Project.owner))
            .order_by(Application.created_at.desc())
        ).scalars().all()

    def _load(self, db: Session, application_id: uuid.UUID) -> Application:
        return db.execute(
            select(Application)
            .where(Application.id == application_id)
            .options(
                selectinload(Application.user),
                selectinload(Application.project).selectinload(Project.owner),
            )
        ).scalar_one()
