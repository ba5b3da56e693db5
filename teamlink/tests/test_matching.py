import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from teamlink.models.enums import SkillLevel
from teamlink.services.matching_service import (
    MatchScore,
    ProjectMatch,
    RequiredSkill,
    is_match,
    rank_matches,
    score_skills,
)
from teamlink.tests.helpers import freelancer_headers, leader_headers, settings

PREFIX = settings.api_prefix

B, I, E = SkillLevel.beginner, SkillLevel.intermediate, SkillLevel.expert


def _required(*levels):
    return [RequiredSkill(uuid.uuid4(), f"skill-{n}", lvl) for n, lvl in enumerate(levels)]


# ------------------------------------------------------------------
# PURE SCORER
# ------------------------------------------------------------------

@pytest.mark.parametrize("required", [B, I, E])
def test_expert_satisfies_every_level(required):
    assert is_match(E, required)


def test_level_ordering():
    assert not is_match(B, E)
    assert not is_match(B, I)
    assert is_match(I, I)
    assert not is_match(None, B)


def test_percentage_rounds_half_up():
    req = _required(B, B, B, B, B, B, B, B)
    held = {req[0].skill_id: E}
    # 1/8 = 12.5%
    assert score_skills(req, held).percentage == 13


@pytest.mark.parametrize(
    "matched, total, expected",
    [(1, 3, 33), (2, 3, 67), (1, 2, 50), (3, 3, 100), (0, 4, 0)],
)
def test_percentage(matched, total, expected):
    req = _required(*([I] * total))
    held = {r.skill_id: I for r in req[:matched]}
    score = score_skills(req, held)
    assert score.matched == matched
    assert score.total_required == total
    assert score.percentage == expected


def test_skill_match_details():
    req = _required(I, E)
    held = {req[0].skill_id: E, req[1].skill_id: B}
    score = score_skills(req, held)
    first, second = score.skill_matches
    assert first.is_match and first.user_level == E
    assert not second.is_match and second.user_level == B
    assert score.percentage == 50


def test_more_skills_never_lower_the_score():
    req = _required(B, I, E, I)
    small = {req[0].skill_id: B}
    large = dict(small)
    large[req[1].skill_id] = I
    large[uuid.uuid4()] = E  # unrelated skill
    large[req[2].skill_id] = B  # below requirement
    assert score_skills(req, large).percentage >= score_skills(req, small).percentage


def test_rank_matches_tie_breaks():
    now = datetime.now(timezone.utc)

    def pm(pct, matched, age_minutes, pid):
        project = SimpleNamespace(id=pid, created_at=now - timedelta(minutes=age_minutes))
        return ProjectMatch(project=project, score=MatchScore([], 0, matched, pct))

    a = pm(100, 1, 0, "a")
    b = pm(100, 3, 10, "b")
    c = pm(50, 5, 0, "c")
    d = pm(100, 3, 0, "d")
    e = pm(100, 3, 0, "e")

    assert [m.project.id for m in rank_matches([a, b, c, e, d])] == ["d", "e", "b", "a", "c"]


def test_rank_matches_mixed_naive_and_aware_timestamps():
    # naive values are UTC
    naive = SimpleNamespace(id="naive", created_at=datetime(2026, 1, 1, 12, 0))
    aware = SimpleNamespace(id="aware", created_at=datetime(2026, 1, 1, 11, 0, tzinfo=timezone.utc))
    score = MatchScore([], 0, 1, 100)

    ranked = rank_matches([ProjectMatch(aware, score), ProjectMatch(naive, score)])
    assert [m.project.id for m in ranked] == ["naive", "aware"]


# ------------------------------------------------------------------
# RECOMMENDATIONS ENDPOINT
# ------------------------------------------------------------------

def test_insufficient_level_is_not_recommended(api, client):
    x = api.skill("SkillX")
    api.project("Needs X", skills=[(x, "intermediate")])
    api.give_skill("fl", x, "beginner")

    r = client.get(f"{PREFIX}/projects/recommended", headers=freelancer_headers("fl"))
    assert r.status_code == 200
    assert r.json() == []


def test_user_without_skills_gets_nothing(api, client):
    x = api.skill("SkillX")
    api.project("Needs X", skills=[(x, "beginner")])

    r = client.get(f"{PREFIX}/projects/recommended", headers=freelancer_headers("fl"))
    assert r.json() == []


def test_recommendations_ranked_and_filtered(api, client):
    py = api.skill("Python")
    sql = api.skill("SQL")
    ml = api.skill("ML")

    full = api.project("Full match", skills=[(py, "beginner"), (sql, "intermediate")])
    half = api.project("Half match", skills=[(py, "expert"), (ml, "beginner")])
    api.project("No match", skills=[(ml, "beginner")])
    api.project("No skills")
    closed = api.project("Closed", skills=[(py, "beginner")])
    assert api.set_status(closed, "closed").status_code == 200

    api.give_skill("fl", py, "expert")
    api.give_skill("fl", sql, "intermediate")

    r = client.get(f"{PREFIX}/projects/recommended", headers=freelancer_headers("fl"))
    assert r.status_code == 200
    body = r.json()
    assert [p["id"] for p in body] == [full, half]

    top = body[0]
    assert top["matchPercentage"] == 100
    assert top["matchedSkills"] == 2
    assert top["totalRequiredSkills"] == 2
    assert top["owner"]["username"] == "leader"

    second = body[1]
    assert second["matchPercentage"] == 50
    by_name = {m["skillName"]: m for m in second["skillMatches"]}
    assert by_name["Python"] == {
        "skillName": "Python",
        "requiredLevel": "expert",
        "userLevel": "expert",
        "isMatch": True,
    }
    assert by_name["ML"]["userLevel"] is None
    assert by_name["ML"]["isMatch"] is False


def test_leaders_cannot_ask_for_recommendations(client):
    r = client.get(f"{PREFIX}/projects/recommended", headers=leader_headers())
    assert r.status_code == 403
