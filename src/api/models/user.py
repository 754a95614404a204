"""
User request/response models
"""
from typing import Optional

from pydantic import ConfigDict

from ..formatters import format_datetime
from .common import CamelModel

# Fields the update endpoints may touch; email has its own verified flow
USER_UPDATE_FIELDS = ("name", "monthly_budget")


class UserCreate(CamelModel):
    """Create user request; presence of required fields is checked by the service"""
    name: Optional[str] = None
    email: Optional[str] = None
    monthly_budget: Optional[float] = None


class UserReplace(CamelModel):
    """Full update request"""
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    monthly_budget: Optional[float] = None


class UserPatch(UserReplace):
    """Partial update request; unknown keys are kept so they can be reported"""


class ChangeEmailRequest(CamelModel):
    current_email: Optional[str] = None
    new_email: Optional[str] = None


class UserResponse(CamelModel):
    """User response"""
    id: str
    name: str
    email: str
    monthly_budget: float
    created_at: str
    updated_at: str

    @classmethod
    def from_record(cls, user) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            monthly_budget=user.monthly_budget,
            created_at=format_datetime(user.created_at),
            updated_at=format_datetime(user.updated_at),
        )
