from pydantic import BaseModel, ConfigDict, Field
from uuid import UUID
from datetime import date, datetime
from typing import Dict, List, Optional

from camp_eval.models.corp_member import CorpMemberResponse, SubjectSummary
from camp_eval.models.enumerations import Role
from camp_eval.models.rating import CompositeScoreResponse, RatingResponse


class SubjectListItem(SubjectSummary):
    """
    Dashboard row: summary plus the rating state relevant to the viewer.
    """

    rated: Optional[bool] = Field(
        default=None,
        description="Whether the viewer's rater role has rated this member (raters only)"
    )
    own_total_score: Optional[int] = None
    totals: Dict[Role, int] = Field(default_factory=dict, description="Stored total per rater role")
    composite: CompositeScoreResponse


class SubjectListResponse(BaseModel):
    items: List[SubjectListItem]
    total: int


class CommentUpdate(BaseModel):
    comment: str = Field(..., min_length=1, max_length=4000)


class CommentResponse(BaseModel):
    corp_member_id: UUID
    commenter_role: Role
    comment: str
    commented_by: str
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CommandantAssessmentUpdate(BaseModel):
    """
    Commandant's final assessment of a corps member.

    The signature date defaults to the day the assessment is saved.
    """

    general_assessment: str = Field(default="", max_length=4000)
    support_training_programs: bool = Field(
        default=False,
        description="Whether the commandant supports the member for further training programmes"
    )
    signature_date: Optional[date] = None


class CommandantAssessmentResponse(BaseModel):
    corp_member_id: UUID
    assessed_by_id: UUID
    assessed_by: str
    general_assessment: str
    support_training_programs: bool
    signature_date: date
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SubjectProfile(BaseModel):
    """
    Full profile shown to reviewers and raters.
    """

    member: CorpMemberResponse
    ratings: List[RatingResponse]
    composite: CompositeScoreResponse
    comments: List[CommentResponse]
    assessments: List[CommandantAssessmentResponse] = Field(default_factory=list)


class PlatoonStatsResponse(BaseModel):
    platoon: int
    total: int
    fully_rated: int
