from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from teamlink.core.auth_deps import principal_from_token
from teamlink.core.exceptions import ForbiddenError, UnauthenticatedError
from teamlink.models.enums import Role
from teamlink.policies.rbac import require_role, role_from_claims
from teamlink.tests.helpers import (
    bearer,
    freelancer_headers,
    leader_headers,
    make_token,
    principal,
    settings,
)

PREFIX = settings.api_prefix


@pytest.mark.parametrize(
    "roles, expected",
    [
        (["leader"], Role.leader),
        (["offline_access", "leader", "uma_authorization"], Role.leader),
        ([], Role.freelancer),
        (["offline_access"], Role.freelancer),
        (["Leader"], Role.freelancer),
    ],
)
def test_role_from_claims(roles, expected):
    assert role_from_claims(roles) == expected


def test_principal_from_token_reads_realm_roles():
    p = principal_from_token(make_token("kc-1", roles=["leader"], username="sam"))
    assert p.external_id == "kc-1"
    assert p.username == "sam"
    assert p.email == "kc-1@example.com"
    assert p.role == Role.leader


def test_expired_token_rejected():
    token = make_token("kc-1", expires_in=-60)
    with pytest.raises(UnauthenticatedError):
        principal_from_token(token)


def test_require_role():
    require_role(principal("lead", leader=True), Role.leader)
    with pytest.raises(ForbiddenError):
        require_role(principal("free"), Role.leader)


def test_auth_me_reports_derived_role(client):
    r = client.get(f"{PREFIX}/auth/me", headers=leader_headers("lead-1"))
    assert r.status_code == 200
    assert r.json()["role"] == "leader"
    assert r.json()["externalId"] == "lead-1"

    r = client.get(f"{PREFIX}/auth/me", headers=freelancer_headers("free-1"))
    assert r.json()["role"] == "freelancer"


def test_leader_only_route_rejects_freelancer(client):
    r = client.post(f"{PREFIX}/skills", json={"name": "Go"}, headers=freelancer_headers())
    assert r.status_code == 403
    assert r.json()["error"] == "forbidden"


def test_profile_get_or_create_is_idempotent(api):
    first = api.me("kc-42")
    second = api.me("kc-42")
    assert first["id"] == second["id"]
    assert first["username"] == "kc-42"
    assert first["role"] == "freelancer"


def test_username_falls_back_to_email_local_part(client):
    token = jwt.encode(
        {
            "sub": "kc-no-name",
            "email": "quiet.person@example.com",
            "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
        },
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )
    r = client.get(f"{PREFIX}/users/profile", headers=bearer(token))
    assert r.status_code == 200
    assert r.json()["username"] == "quiet.person"
