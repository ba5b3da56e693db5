from teamlink.schemas.common import UserSummary, ErrorResponse
from teamlink.schemas.projects import ProjectCreateRequest, ProjectUpdateRequest, ProjectResponse
from teamlink.schemas.applications import ApplicationStatusUpdateRequest, ApplicationResponse
from teamlink.schemas.matching import ProjectMatchResponse, SkillMatch
from teamlink.schemas.ratings import RatingCreateRequest, RatingResponse, RateableMemberResponse
from teamlink.schemas.notifications import NotificationEvent
