from pydantic import BaseModel, ConfigDict, Field, model_validator
from uuid import UUID, uuid4
from datetime import datetime, timezone
from typing import Optional

from camp_eval.models.enumerations import RATER_ROLES, Role


class StaffUserBase(BaseModel):
    """
    Base Pydantic model for a staff account.
    """

    username: str = Field(..., min_length=1, max_length=100)
    full_name: str = Field(..., min_length=1, max_length=255)
    role: Role
    platoon: Optional[int] = Field(
        default=None,
        ge=1,
        le=10,
        description="Assigned platoon; only meaningful for rater roles"
    )

    @model_validator(mode="after")
    def drop_platoon_for_reviewers(self):
        if self.role not in RATER_ROLES:
            self.platoon = None
        return self


class StaffUserCreate(StaffUserBase):
    """
    Model for creating a staff account.
    """

    password: str = Field(..., min_length=1, max_length=255)


class StaffUserResponse(StaffUserBase):
    """
    Staff account returned in API responses (never includes the password).
    """

    id: UUID = Field(default_factory=uuid4)
    is_active: bool = True

    model_config = ConfigDict(from_attributes=True)


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=255)
    role: Role


class SessionContext(BaseModel):
    """
    Caller identity, created once at login and passed to every operation
    that needs it. Invalidated explicitly at logout.
    """

    token: str
    user_id: UUID
    username: str
    full_name: str
    role: Role
    platoon: Optional[int] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
