import pytest

from teamlink.core.exceptions import InvalidOperationError
from teamlink.db.session import unique_guard
from teamlink.models.application import Application
from teamlink.models.enums import ApplicationStatus, ProjectStatus
from teamlink.models.rating import Rating
from teamlink.models.skill import Skill
from teamlink.models.team import Team
from teamlink.services.applications_service import ApplicationsService
from teamlink.services.projects_service import ProjectsService
from teamlink.services.ratings_service import RatingsService
from teamlink.services.teams_service import TeamsService
from teamlink.services.users_service import UsersService
from teamlink.tests.helpers import principal


def _commit_elsewhere(session_factory, row):
    """Write `row` through an independent session, as a concurrent request would."""
    other = session_factory()
    try:
        other.add(row)
        other.commit()
    finally:
        other.close()


def test_unique_violation_becomes_invalid_operation(db):
    db.add(Skill(name="Kotlin"))
    db.commit()

    with pytest.raises(InvalidOperationError) as exc:
        with unique_guard(db, "Skill already exists"):
            db.add(Skill(name="Kotlin"))
    assert exc.value.message == "Skill already exists"

    # session is usable after the rollback
    db.add(Skill(name="Scala"))
    db.commit()


def test_skill_names_unique_ignoring_case(db):
    db.add(Skill(name="Python"))
    db.commit()

    with pytest.raises(InvalidOperationError) as exc:
        with unique_guard(db, "Skill already exists"):
            db.add(Skill(name="PYTHON"))
    assert exc.value.message == "Skill already exists"


def test_concurrent_application_hits_constraint(db, session_factory, monkeypatch):
    owner = principal("owner", leader=True)
    applicant = principal("applicant")
    project = ProjectsService().create(db, owner, title="Race", description=None)
    applicant_id = UsersService().get_or_create(db, applicant).id
    project_id = project.id

    svc = ApplicationsService()

    def lost_race(_db, user_id, pid):
        _commit_elsewhere(
            session_factory,
            Application(user_id=user_id, project_id=pid, status=ApplicationStatus.pending.value),
        )
        return None

    monkeypatch.setattr(svc, "_existing_application", lost_race)

    with pytest.raises(InvalidOperationError) as exc:
        svc.apply(db, project_id, applicant)
    assert exc.value.message == "You have already applied to this project"

    rows = db.query(Application).filter_by(project_id=project_id, user_id=applicant_id).all()
    assert len(rows) == 1


def test_concurrent_acceptance_hits_team_constraint(db, session_factory, monkeypatch):
    owner = principal("owner", leader=True)
    applicant = principal("applicant")
    project = ProjectsService().create(db, owner, title="Crowded", description=None)
    app_row = ApplicationsService().apply(db, project.id, applicant)
    project_id, application_id = project.id, app_row.id

    svc = ApplicationsService()

    def lost_race(_db, pid, user_id):
        _commit_elsewhere(
            session_factory, Team(project_id=pid, user_id=user_id, role_title="Team Member")
        )
        return None

    monkeypatch.setattr(svc, "_team_row", lost_race)

    with pytest.raises(InvalidOperationError) as exc:
        svc.update_status(db, project_id, application_id, owner, status=ApplicationStatus.accepted)
    assert exc.value.message == "User is already a member of this project's team"

    # status change rolled back with the failed team insert
    db.expire_all()
    assert db.get(Application, application_id).status == ApplicationStatus.pending.value
    assert len(TeamsService().project_team(db, project_id)) == 1


def test_concurrent_rating_hits_constraint(db, session_factory, monkeypatch):
    owner = principal("owner", leader=True)
    member = principal("member")
    projects = ProjectsService()
    project = projects.create(db, owner, title="Done", description=None)
    app_row = ApplicationsService().apply(db, project.id, member)
    ApplicationsService().update_status(
        db, project.id, app_row.id, owner, status=ApplicationStatus.accepted
    )
    projects.update(db, project.id, owner, changes={"status": ProjectStatus.completed})
    project_id, member_id = project.id, app_row.user_id

    svc = RatingsService()

    def lost_race(_db, rater_id, rated_user_id, pid):
        _commit_elsewhere(
            session_factory,
            Rating(rater_id=rater_id, rated_user_id=rated_user_id, project_id=pid, score=3),
        )
        return None

    monkeypatch.setattr(svc, "_existing", lost_race)

    with pytest.raises(InvalidOperationError) as exc:
        svc.rate_user(db, project_id, owner, rated_user_id=member_id, score=5)
    assert exc.value.message == "You have already rated this user for this project"

    db.expire_all()
    assert [r.score for r in db.query(Rating).filter_by(project_id=project_id).all()] == [3]


def test_double_acceptance_keeps_one_team_row(db):
    owner = principal("owner", leader=True)
    applicant = principal("applicant")
    project = ProjectsService().create(db, owner, title="Once", description=None)
    app_row = ApplicationsService().apply(db, project.id, applicant)

    svc = ApplicationsService()
    _, first, moved = svc.update_status(db, project.id, app_row.id, owner, status=ApplicationStatus.accepted)
    _, second, again = svc.update_status(db, project.id, app_row.id, owner, status=ApplicationStatus.accepted)
    assert first.id == second.id
    assert (moved, again) == (True, False)
    assert len(TeamsService().project_team(db, project.id)) == 1
