"""
Rating Schemas Router - Camp Evaluation API
camp_eval/routers/rating_schemas.py

Read-only view of what each rater role scores against.
"""

from typing import List

from fastapi import APIRouter

from camp_eval.models.rating import RatingCategoryResponse, RatingSchemaResponse
from camp_eval.scoring.rating_aggregator import RATING_SCALE, RATING_SCHEMAS

router = APIRouter(prefix="/api/v1/rating-schemas", tags=["Ratings"])


@router.get(
    "",
    response_model=List[RatingSchemaResponse],
    summary="Rating categories and scale per rater role",
)
async def list_rating_schemas() -> List[RatingSchemaResponse]:
    return [
        RatingSchemaResponse(
            role=schema.role,
            categories=[RatingCategoryResponse(key=c.key, label=c.label) for c in schema.categories],
            scale={value: RATING_SCALE[value] for value in schema.scale},
            max_total=schema.max_total,
        )
        for schema in RATING_SCHEMAS.values()
    ]
