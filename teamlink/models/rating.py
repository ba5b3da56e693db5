# teamlink/models/rating.py
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    Text,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from teamlink.db.base import Base, utcnow


class Rating(Base):
    __tablename__ = "ratings"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    rater_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    rated_user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    project_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )

    score: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), default=utcnow
    )

    rater = relationship("User", foreign_keys=[rater_id])
    rated_user = relationship(
        "User", foreign_keys=[rated_user_id], back_populates="received_ratings"
    )
    project = relationship("Project", back_populates="ratings")

    __table_args__ = (
        UniqueConstraint(
            "rater_id",
            "rated_user_id",
            "project_id",
            name="uq_ratings_rater_rated_project",
        ),
        CheckConstraint("score BETWEEN 1 AND 5", name="ck_ratings_score_range"),
    )
