#teamlink/core/auth_deps.py
from __future__ import annotations

import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from teamlink.core.config import get_settings
from teamlink.core.exceptions import UnauthenticatedError
from teamlink.core.security import decode_token, extract_roles
from teamlink.models.enums import Role
from teamlink.policies.rbac import Principal, require_role, role_from_claims

logger = logging.getLogger(__name__)

bearer = HTTPBearer(auto_error=False)


def principal_from_token(token: str) -> Principal:
    """
    Resolve an opaque bearer token into a Principal.

    Guarantees:
    - token signature and expiry are valid
    - sub (external identity id) is present
    - role is derived from the realm roles claim, never stored
    """
    try:
        payload = decode_token(token)
    except JWTError as exc:
        logger.info("token rejected: %s", exc)
        raise UnauthenticatedError("Invalid or expired token.")

    external_id = payload.get("sub")
    if not external_id:
        raise UnauthenticatedError("Token missing required claims.")

    roles = extract_roles(payload)
    return Principal(
        external_id=str(external_id),
        email=payload.get("email"),
        username=payload.get("preferred_username"),
        role=role_from_claims(roles, get_settings().leader_role),
        roles=tuple(roles),
    )


def get_current_principal(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> Principal:
    """
    Canonical authentication dependency.
    """
    if creds is None or not creds.credentials:
        raise UnauthenticatedError("Not authenticated.")

    principal = principal_from_token(creds.credentials)

    # Make principal available to downstream middleware / handlers
    request.state.principal = principal
    return principal


def get_leader(principal: Principal = Depends(get_current_principal)) -> Principal:
    require_role(principal, Role.leader)
    return principal


def get_freelancer(principal: Principal = Depends(get_current_principal)) -> Principal:
    require_role(principal, Role.freelancer)
    return principal
