"""Import every model so metadata (and Alembic) sees all tables."""

from teamlink.models.user import User
from teamlink.models.skill import Skill, UserSkill
from teamlink.models.project import Project, ProjectSkill
from teamlink.models.application import Application
from teamlink.models.team import Team
from teamlink.models.rating import Rating

__all__ = [
    "User",
    "Skill",
    "UserSkill",
    "Project",
    "ProjectSkill",
    "Application",
    "Team",
    "Rating",
]
