#teamlink/api/v1/auth.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from teamlink.core.auth_deps import get_current_principal
from teamlink.policies.rbac import Principal

router = APIRouter(prefix="/auth")


@router.get("/me")
def get_me(principal: Principal = Depends(get_current_principal)):
    return {
        "externalId": principal.external_id,
        "email": principal.email,
        "username": principal.username,
        "role": principal.role.value,
        "roles": list(principal.roles),
    }
