# teamlink/api/v1/views.py
"""Row -> response dict renderers shared by the v1 routers."""
from __future__ import annotations

from typing import Optional

from teamlink.models.application import Application
from teamlink.models.project import Project
from teamlink.models.rating import Rating
from teamlink.models.skill import Skill, UserSkill
from teamlink.models.team import Team
from teamlink.models.user import User
from teamlink.policies.rbac import Principal
from teamlink.services.matching_service import ProjectMatch


def iso(dt):
    return dt.isoformat() if dt else None


def user_summary(u: Optional[User]) -> Optional[dict]:
    if u is None:
        return None
    return {
        "id": str(u.id),
        "username": u.username,
        "email": u.email,
        "avatarUrl": u.avatar_url,
        "bio": u.bio,
    }


def skill_resp(s: Skill) -> dict:
    return {"id": str(s.id), "name": s.name}


def user_skill_resp(us: UserSkill) -> dict:
    return {"id": str(us.skill_id), "name": us.skill.name, "level": us.level}


def user_resp(u: User, principal: Optional[Principal] = None) -> dict:
    out = {
        "id": str(u.id),
        "username": u.username,
        "email": u.email,
        "bio": u.bio,
        "avatarUrl": u.avatar_url,
        "isActive": bool(u.is_active),
        "lastLoginAt": iso(u.last_login_at),
        "createdAt": iso(u.created_at),
        "skills": [user_skill_resp(us) for us in u.user_skills],
    }
    if principal is not None:
        out["role"] = principal.role.value
    return out


def project_summary(p: Project) -> dict:
    return {
        "id": str(p.id),
        "title": p.title,
        "description": p.description,
        "status": p.status,
        "createdAt": iso(p.created_at),
        "owner": user_summary(p.owner),
    }


def project_resp(p: Project) -> dict:
    return {
        "id": str(p.id),
        "title": p.title,
        "description": p.description,
        "ownerId": str(p.owner_id),
        "status": p.status,
        "createdAt": iso(p.created_at),
        "owner": user_summary(p.owner),
        "skills": [
            {
                "skillId": str(ps.skill_id),
                "skillName": ps.skill.name,
                "requiredLevel": ps.required_level,
            }
            for ps in p.project_skills
        ],
        "applications": [
            {
                "id": str(a.id),
                "status": a.status,
                "createdAt": iso(a.created_at),
                "user": user_summary(a.user),
            }
            for a in p.applications
        ],
        "team": [
            {
                "id": str(t.id),
                "roleTitle": t.role_title,
                "joinedAt": iso(t.joined_at),
                "user": user_summary(t.user),
            }
            for t in p.team
        ],
    }


def application_resp(a: Application, *, with_user: bool = True, with_project: bool = True) -> dict:
    return {
        "id": str(a.id),
        "userId": str(a.user_id),
        "projectId": str(a.project_id),
        "status": a.status,
        "createdAt": iso(a.created_at),
        "user": user_summary(a.user) if with_user else None,
        "project": project_summary(a.project) if with_project else None,
    }


def team_resp(t: Team, *, with_user: bool = True, with_project: bool = False) -> dict:
    return {
        "id": str(t.id),
        "projectId": str(t.project_id),
        "userId": str(t.user_id),
        "roleTitle": t.role_title,
        "joinedAt": iso(t.joined_at),
        "user": user_summary(t.user) if with_user else None,
        "project": project_summary(t.project) if with_project else None,
    }


def rating_resp(r: Rating) -> dict:
    return {
        "id": str(r.id),
        "raterId": str(r.rater_id),
        "ratedUserId": str(r.rated_user_id),
        "projectId": str(r.project_id),
        "rating": r.score,
        "comment": r.comment,
        "createdAt": iso(r.created_at),
    }


def rateable_member_resp(item: dict) -> dict:
    t: Team = item["team"]
    existing: Optional[Rating] = item["existing_rating"]
    return {
        "teamId": str(t.id),
        "roleTitle": t.role_title,
        "joinedAt": iso(t.joined_at),
        "user": user_summary(t.user),
        "hasRated": item["has_rated"],
        "existingRating": (
            {
                "rating": existing.score,
                "comment": existing.comment,
                "createdAt": iso(existing.created_at),
            }
            if existing is not None
            else None
        ),
    }


def match_resp(m: ProjectMatch) -> dict:
    p = m.project
    return {
        "id": str(p.id),
        "title": p.title,
        "description": p.description,
        "status": p.status,
        "createdAt": iso(p.created_at),
        "owner": {
            "id": str(p.owner.id),
            "username": p.owner.username,
            "avatarUrl": p.owner.avatar_url,
        },
        "skillMatches": [
            {
                "skillName": sm.skill_name,
                "requiredLevel": sm.required_level.value,
                "userLevel": sm.user_level.value if sm.user_level else None,
                "isMatch": sm.is_match,
            }
            for sm in m.score.skill_matches
        ],
        "matchPercentage": m.score.percentage,
        "totalRequiredSkills": m.score.total_required,
        "matchedSkills": m.score.matched,
    }
