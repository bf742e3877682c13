from pydantic import BaseModel, ConfigDict, Field, model_validator
from uuid import UUID, uuid4
from datetime import datetime, timezone
from typing import Optional, List

from camp_eval.models.enumerations import Batch, CampState, MemberStatus, StateOfOrigin


class Institution(BaseModel):
    """
    One row of the "higher institutions attended" list.
    """

    name: str = Field(default="", max_length=255, description="Institution name")
    year: str = Field(default="", max_length=20, description="Year or period attended")


class RegistrationForm(BaseModel):
    """
    Flat form state for the corps-member self registration.

    Unset selections are None and unset text fields are empty strings, so
    the same model carries a half-filled form between the three sections.
    """

    camp_state: Optional[CampState] = Field(default=None, description="Camp state")
    state_code: str = Field(default="", max_length=20, description="State reg code, e.g. LA/25C/0001")
    platoon: Optional[int] = Field(default=None, ge=1, le=10, description="Platoon (1-10)")
    call_up_no: str = Field(default="", max_length=50, description="NYSC call-up number")
    surname: str = Field(default="", max_length=100)
    other_names: str = Field(default="", max_length=255)
    change_of_name: str = Field(default="", max_length=255)
    state_of_origin: Optional[StateOfOrigin] = None
    state_of_deployment: Optional[CampState] = Field(
        default=None,
        description="Derived: always equals camp_state"
    )
    batch: Optional[Batch] = None
    phone: str = Field(default="", max_length=20)
    qualification: str = Field(default="", max_length=255)
    specialization: str = Field(default="", max_length=255)
    institutions: List[Institution] = Field(default_factory=lambda: [Institution()])

    @model_validator(mode="after")
    def derive_state_of_deployment(self):
        self.state_of_deployment = self.camp_state
        return self


class CorpMemberCreate(BaseModel):
    """
    Persistence payload built from a fully validated RegistrationForm.
    """

    camp_state: CampState
    state_code: str
    platoon: int = Field(..., ge=1, le=10)
    call_up_no: str
    surname: str
    other_names: Optional[str] = None
    change_of_name: Optional[str] = None
    state_of_origin: StateOfOrigin
    state_of_deployment: CampState
    batch: Batch
    phone: Optional[str] = None
    qualification: str
    specialization: str
    institutions: List[Institution] = Field(default_factory=list)
    status: MemberStatus = MemberStatus.SUBMITTED


class CorpMemberResponse(CorpMemberCreate):
    """
    Stored corps-member record returned in API responses.
    """

    id: UUID = Field(default_factory=uuid4, description="Unique corps member identifier")

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Record creation timestamp (UTC)"
    )

    model_config = ConfigDict(from_attributes=True)


class SubjectSummary(BaseModel):
    """
    The slice of a corps member that dashboards list and filter on.
    """

    id: UUID
    surname: str
    other_names: Optional[str] = None
    state_code: str
    call_up_no: str
    platoon: int
    camp_state: CampState

    model_config = ConfigDict(from_attributes=True)


class SectionValidationResponse(BaseModel):
    """
    Result of validating one registration section.
    """

    section: int
    valid: bool
    error_message: Optional[str] = None


class ErrorResponse(BaseModel):
    """
    Standard error response model.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[dict] = Field(default=None, description="Additional error details")
    timestamp: datetime = Field(..., description="Error occurrence timestamp")
