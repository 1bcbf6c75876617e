from schemas.auth import LoginRequest, SignupRequest, UserPublic
from schemas.onboarding import (
    APPLICATION_STATUSES,
    TERMINAL_STATUSES,
    AssignEmployeeRequest,
    OnboardingSubmission,
    SelectedFundSchema,
    StatusUpdateRequest,
)

__all__ = [
    "APPLICATION_STATUSES",
    "TERMINAL_STATUSES",
    "AssignEmployeeRequest",
    "LoginRequest",
    "OnboardingSubmission",
    "SelectedFundSchema",
    "SignupRequest",
    "StatusUpdateRequest",
    "UserPublic",
]
