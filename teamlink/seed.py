import logging

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from teamlink.core.config import get_settings
from teamlink.core.logging import configure_logging
from teamlink.db.session import SessionLocal
from teamlink.models import (
    Application,
    Project,
    ProjectSkill,
    Rating,
    Skill,
    Team,
    User,
    UserSkill,
)

logger = logging.getLogger(__name__)

SKILLS = [
    "JavaScript", "TypeScript", "React", "Node.js", "Python",
    "Django", "UI/UX Design", "MySQL", "PostgreSQL", "Docker",
    "AWS", "Mobile Development", "Project Management", "DevOps", "Machine Learning",
]

# (external_id, username, bio)
USERS = [
    ("kc-001", "sarah_lead", "Team leader and frontend developer focused on UI/UX."),
    ("kc-002", "mike_chen", "Backend engineer and team lead, Python and cloud infrastructure."),
    ("kc-003", "john_dev", "Full-stack developer, React and Node.js."),
    ("kc-004", "emily_davis", "Project coordinator with a technical background."),
    ("kc-005", "alex_rodriguez", "Mobile developer, React Native and iOS."),
    ("kc-006", "lisa_kim", "Data scientist and ML engineer."),
    ("kc-007", "david_johnson", "DevOps engineer, AWS, Docker and CI/CD."),
]

USER_SKILLS = {
    "sarah_lead": [("React", "expert"), ("UI/UX Design", "expert"), ("JavaScript", "expert"),
                   ("TypeScript", "intermediate"), ("Project Management", "expert")],
    "mike_chen": [("Python", "expert"), ("Django", "expert"), ("Docker", "expert"),
                  ("AWS", "expert"), ("DevOps", "expert"), ("Project Management", "expert")],
    "john_dev": [("JavaScript", "expert"), ("TypeScript", "expert"), ("React", "expert"),
                 ("Node.js", "expert"), ("MySQL", "intermediate")],
    "emily_davis": [("Project Management", "intermediate"), ("JavaScript", "beginner"),
                    ("UI/UX Design", "intermediate")],
    "alex_rodriguez": [("Mobile Development", "expert"), ("React", "expert"),
                       ("JavaScript", "expert"), ("TypeScript", "intermediate")],
    "lisa_kim": [("Python", "expert"), ("Machine Learning", "expert"),
                 ("PostgreSQL", "expert"), ("AWS", "intermediate")],
    "david_johnson": [("Docker", "expert"), ("AWS", "expert"), ("DevOps", "expert"),
                      ("Python", "intermediate")],
}

# (title, owner, status, description, required skills)
PROJECTS = [
    ("E-Commerce Platform", "sarah_lead", "open",
     "Modern e-commerce platform with a React frontend and Node.js backend.",
     [("React", "intermediate"), ("Node.js", "intermediate"), ("PostgreSQL", "beginner")]),
    ("Mobile Fitness App", "sarah_lead", "open",
     "Fitness tracking mobile app with social features.",
     [("Mobile Development", "expert"), ("UI/UX Design", "intermediate")]),
    ("Educational Platform", "sarah_lead", "in_progress",
     "Online learning platform with video streaming and interactive content.",
     [("TypeScript", "intermediate"), ("React", "intermediate")]),
    ("AI-Powered Analytics Dashboard", "mike_chen", "open",
     "Analytics dashboard with machine learning insights.",
     [("Python", "expert"), ("Machine Learning", "intermediate"), ("React", "beginner")]),
    ("Microservices Architecture Migration", "mike_chen", "open",
     "Migrating a legacy monolith to microservices on Docker and AWS.",
     [("Docker", "intermediate"), ("AWS", "intermediate"), ("DevOps", "expert")]),
    ("IoT Smart Home System", "mike_chen", "completed",
     "Smart home IoT system with mobile app control.",
     [("Mobile Development", "intermediate")]),
]

# (username, project title, status, role title when accepted)
APPLICATIONS = [
    ("john_dev", "E-Commerce Platform", "accepted", "Full-Stack Developer"),
    ("emily_davis", "E-Commerce Platform", "pending", None),
    ("david_johnson", "E-Commerce Platform", "pending", None),
    ("alex_rodriguez", "Mobile Fitness App", "accepted", "Mobile Developer"),
    ("john_dev", "Mobile Fitness App", "pending", None),
    ("emily_davis", "Mobile Fitness App", "rejected", None),
    ("john_dev", "Educational Platform", "accepted", "Full-Stack Developer"),
    ("lisa_kim", "Educational Platform", "pending", None),
    ("lisa_kim", "AI-Powered Analytics Dashboard", "accepted", "ML Engineer"),
    ("john_dev", "AI-Powered Analytics Dashboard", "pending", None),
    ("david_johnson", "AI-Powered Analytics Dashboard", "rejected", None),
    ("david_johnson", "Microservices Architecture Migration", "accepted", "DevOps Engineer"),
    ("john_dev", "Microservices Architecture Migration", "accepted", "Backend Developer"),
    ("alex_rodriguez", "IoT Smart Home System", "accepted", "Mobile Developer"),
    ("lisa_kim", "IoT Smart Home System", "pending", None),
]

OWNER_ROLE_TITLE = "Project Lead"


def clear(db: Session) -> None:
    # children first
    for model in (Rating, Team, Application, ProjectSkill, UserSkill, Project, Skill, User):
        db.execute(delete(model))
    db.commit()


def seed(db: Session) -> dict:
    clear(db)

    skills = {name: Skill(name=name) for name in SKILLS}
    db.add_all(skills.values())

    users = {
        username: User(
            external_id=external_id,
            username=username,
            email=f"{username}@example.com",
            bio=bio,
            avatar_url=f"https://api.dicebear.com/7.x/avataaars/svg?seed={username}",
            is_active=True,
        )
        for external_id, username, bio in USERS
    }
    db.add_all(users.values())
    db.flush()

    for username, held in USER_SKILLS.items():
        for skill_name, level in held:
            db.add(UserSkill(user_id=users[username].id, skill_id=skills[skill_name].id, level=level))

    projects = {}
    for title, owner, status, description, required in PROJECTS:
        project = Project(
            title=title,
            description=description,
            owner_id=users[owner].id,
            status=status,
            project_skills=[
                ProjectSkill(skill_id=skills[name].id, required_level=level)
                for name, level in required
            ],
        )
        db.add(project)
        db.flush()
        # owners sit on their own team
        db.add(Team(project_id=project.id, user_id=users[owner].id, role_title=OWNER_ROLE_TITLE))
        projects[title] = project

    for username, title, status, role_title in APPLICATIONS:
        user_id = users[username].id
        project_id = projects[title].id
        db.add(Application(user_id=user_id, project_id=project_id, status=status))
        if status == "accepted":
            db.add(Team(project_id=project_id, user_id=user_id, role_title=role_title))

    db.commit()
    return stats(db)


def stats(db: Session) -> dict:
    return {
        model.__tablename__: db.execute(select(func.count()).select_from(model)).scalar_one()
        for model in (User, Skill, UserSkill, Project, ProjectSkill, Application, Team, Rating)
    }


def main() -> None:
    configure_logging(get_settings())
    db = SessionLocal()
    try:
        logger.info("seeding database")
        counts = seed(db)
        logger.info("seeding complete", extra={"counts": counts})
    except Exception:
        db.rollback()
        logger.exception("seeding failed")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
