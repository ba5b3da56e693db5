# teamlink/models/project.py
from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    func,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from teamlink.db.base import Base, utcnow


class Project(Base):
    __tablename__ = "projects"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, server_default=text("'open'"), default="open"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), default=utcnow
    )

    owner = relationship("User", back_populates="owned_projects")

    # deleting a project removes everything hanging off it
    project_skills: Mapped[List["ProjectSkill"]] = relationship(
        back_populates="project", cascade="all, delete-orphan"
    )
    applications: Mapped[List["Application"]] = relationship(
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="Application.created_at",
    )
    team: Mapped[List["Team"]] = relationship(
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="Team.joined_at",
    )
    ratings: Mapped[List["Rating"]] = relationship(
        back_populates="project", cascade="all, delete-orphan"
    )

    __table_args__ = (Index("ix_projects_status_owner", "status", "owner_id"),)


class ProjectSkill(Base):
    __tablename__ = "project_skills"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    skill_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("skills.id", ondelete="CASCADE"), nullable=False
    )
    required_level: Mapped[str] = mapped_column(String(32), nullable=False)

    project = relationship("Project", back_populates="project_skills")
    skill = relationship("Skill", lazy="joined")

    __table_args__ = (
        UniqueConstraint("project_id", "skill_id", name="uq_project_skills_project_skill"),
    )
