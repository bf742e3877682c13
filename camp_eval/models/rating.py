from pydantic import BaseModel, ConfigDict, Field
from uuid import UUID
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from camp_eval.models.enumerations import Role


class RatingSubmission(BaseModel):
    """
    Category scores submitted by a rater. 0 marks an unset category.
    """

    scores: Dict[str, int] = Field(
        ...,
        description="Category key -> score in {0, 2, 4, 6, 8, 10}"
    )


class RatingResponse(BaseModel):
    """
    A finalized rating as stored for a corps member.
    """

    corp_member_id: UUID
    rater_role: Role
    rated_by: str
    scores: Dict[str, int]
    total_score: int = Field(..., ge=0)
    max_score: int = Field(..., ge=0)
    is_complete: bool
    rated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CompositeScoreResponse(BaseModel):
    """
    Composite of the platoon instructor and Man O'War totals.
    """

    available: bool
    score: Optional[Decimal] = Field(default=None, description="Mean of both totals, one decimal")
    label: str


class RatingCategoryResponse(BaseModel):
    key: str
    label: str


class RatingSchemaResponse(BaseModel):
    role: Role
    categories: List[RatingCategoryResponse]
    scale: Dict[int, str]
    max_total: int
