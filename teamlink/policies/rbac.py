#teamlink/policies/rbac.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple

from teamlink.core.exceptions import ForbiddenError
from teamlink.models.enums import Role


@dataclass(frozen=True)
class Principal:
    external_id: str
    email: Optional[str]
    username: Optional[str]
    role: Role
    roles: Tuple[str, ...] = field(default_factory=tuple)


def role_from_claims(roles: Iterable[str], leader_role: str = Role.leader.value) -> Role:
    """
    Pure role resolution: leader if the claim set carries the leader role,
    freelancer otherwise.
    """
    return Role.leader if leader_role in set(roles) else Role.freelancer


def require_role(principal: Principal, role: Role) -> None:
    if principal.role != role:
        raise ForbiddenError(f"This action is restricted to {role.value}s.")
