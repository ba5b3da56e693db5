from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient
from jose import jwt

from teamlink.core.config import get_settings
from teamlink.policies.rbac import Principal, role_from_claims

settings = get_settings()


# ------------------------------------------------------------------
# IDENTITY
# ------------------------------------------------------------------

def make_token(sub: str, *, roles=(), email=None, username=None, expires_in=3600) -> str:
    claims = {
        "sub": sub,
        "email": email if email is not None else f"{sub}@example.com",
        "preferred_username": username or sub,
        "realm_access": {"roles": list(roles)},
        "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
    }
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def leader_headers(name: str = "leader") -> dict:
    return bearer(make_token(name, roles=["leader", "offline_access"]))


def freelancer_headers(name: str = "freelancer") -> dict:
    return bearer(make_token(name, roles=["offline_access"]))


def principal(name: str, *, leader: bool = False) -> Principal:
    roles = ("leader",) if leader else ()
    return Principal(
        external_id=name,
        email=f"{name}@example.com",
        username=name,
        role=role_from_claims(roles),
        roles=roles,
    )


# ------------------------------------------------------------------
# API SHORTCUTS
# ------------------------------------------------------------------

class Api:
    """Thin helpers over the HTTP surface for multi-step scenarios."""

    def __init__(self, client: TestClient):
        self.client = client
        self.prefix = settings.api_prefix

    def url(self, path: str) -> str:
        return f"{self.prefix}{path}"

    def skill(self, name: str, who: str = "leader") -> str:
        r = self.client.post(self.url("/skills"), json={"name": name}, headers=leader_headers(who))
        assert r.status_code == 201, r.text
        return r.json()["id"]

    def give_skill(self, who: str, skill_id: str, level: str) -> None:
        r = self.client.post(
            self.url("/users/skills"),
            json={"skillId": skill_id, "level": level},
            headers=freelancer_headers(who),
        )
        assert r.status_code == 200, r.text

    def project(self, title: str, owner: str = "leader", skills=()) -> str:
        r = self.client.post(
            self.url("/projects"),
            json={
                "title": title,
                "description": f"{title} description",
                "skills": [{"skillId": sid, "requiredLevel": lvl} for sid, lvl in skills],
            },
            headers=leader_headers(owner),
        )
        assert r.status_code == 201, r.text
        return r.json()["id"]

    def set_status(self, project_id: str, status: str, owner: str = "leader"):
        return self.client.put(
            self.url(f"/projects/{project_id}"),
            json={"status": status},
            headers=leader_headers(owner),
        )

    def apply(self, project_id: str, who: str):
        return self.client.post(
            self.url(f"/projects/{project_id}/applications"),
            headers=freelancer_headers(who),
        )

    def decide(self, project_id: str, application_id: str, status: str, owner="leader", role_title=None):
        body = {"status": status}
        if role_title is not None:
            body["roleTitle"] = role_title
        return self.client.put(
            self.url(f"/projects/{project_id}/applications/{application_id}/status"),
            json=body,
            headers=leader_headers(owner),
        )

    def me(self, who: str, leader: bool = False) -> dict:
        headers = leader_headers(who) if leader else freelancer_headers(who)
        r = self.client.get(self.url("/users/profile"), headers=headers)
        assert r.status_code == 200, r.text
        return r.json()
