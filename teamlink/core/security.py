# teamlink/core/security.py
from __future__ import annotations

from typing import Any, Dict, List

from jose import jwt

from teamlink.core.config import get_settings


def decode_token(token: str) -> Dict[str, Any]:
    settings = get_settings()
    options = {"verify_aud": settings.jwt_audience is not None}
    return jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[settings.jwt_algorithm],
        audience=settings.jwt_audience,
        issuer=settings.jwt_issuer,
        options=options,
    )


def extract_roles(payload: Dict[str, Any]) -> List[str]:
    """
    Realm roles live under realm_access.roles; a flat "roles" claim is
    accepted as well.
    """
    realm_access = payload.get("realm_access") or {}
    roles = realm_access.get("roles") or payload.get("roles") or []
    return [str(r) for r in roles]
