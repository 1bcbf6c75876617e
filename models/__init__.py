from models.employee import Employee
from models.onboarding import AdminTask, OnboardingApplication
from models.user import User

__all__ = [
    "AdminTask",
    "Employee",
    "OnboardingApplication",
    "User",
]
