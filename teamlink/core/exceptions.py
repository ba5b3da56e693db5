"""Domain error taxonomy for the TeamLink workflow."""

from fastapi import status


class TeamLinkError(Exception):
    """Base exception for TeamLink."""

    status_code = status.HTTP_400_BAD_REQUEST
    kind = "error"

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class NotFoundError(TeamLinkError):
    """Entity does not exist, or a caller-scoped lookup yields nothing."""

    status_code = status.HTTP_404_NOT_FOUND
    kind = "not_found"


class ForbiddenError(TeamLinkError):
    """Caller is authenticated but does not own the entity."""

    status_code = status.HTTP_403_FORBIDDEN
    kind = "forbidden"


class InvalidOperationError(TeamLinkError):
    """Entity exists and caller is authorized, but a state precondition fails."""

    status_code = status.HTTP_400_BAD_REQUEST
    kind = "invalid_operation"


class UnauthenticatedError(TeamLinkError):
    """No resolvable caller identity."""

    status_code = status.HTTP_401_UNAUTHORIZED
    kind = "unauthenticated"
