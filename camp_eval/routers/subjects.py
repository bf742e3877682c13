"""
Subjects Router - Camp Evaluation API
camp_eval/routers/subjects.py

Staff-facing view of registered corps members: role-scoped listing,
platoon stats, full profile, rating submission, reviewer comments and
the commandant's final assessment.
"""

import logging
from collections import defaultdict
from datetime import date
from typing import Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from camp_eval.config import settings
from camp_eval.core.dependencies import (
    get_assessment_repository,
    get_comment_repository,
    get_corp_member_repository,
    get_current_session,
    get_rating_repository,
    require_roles,
)
from camp_eval.core.errors import raise_forbidden, raise_member_not_found, raise_validation_error
from camp_eval.core.exceptions import ScoringValidationError
from camp_eval.models.corp_member import CorpMemberResponse, ErrorResponse, SubjectSummary
from camp_eval.models.enumerations import (
    COMMENTER_ROLES,
    RATER_ROLES,
    REVIEWER_ROLES,
    CampState,
    Role,
)
from camp_eval.models.rating import CompositeScoreResponse, RatingResponse, RatingSubmission
from camp_eval.models.staff import SessionContext
from camp_eval.models.subject import (
    CommandantAssessmentResponse,
    CommandantAssessmentUpdate,
    CommentResponse,
    CommentUpdate,
    PlatoonStatsResponse,
    SubjectListItem,
    SubjectListResponse,
    SubjectProfile,
)
from camp_eval.repositories.assessment_repository import AssessmentRepository
from camp_eval.repositories.comment_repository import CommentRepository
from camp_eval.repositories.corp_member_repository import CorpMemberRepository
from camp_eval.repositories.rating_repository import RatingRepository
from camp_eval.scoring.composite import combine
from camp_eval.scoring.rating_aggregator import RatingSheet
from camp_eval.scoring.role_filter import can_act_on, filter_subjects, platoon_stats

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/subjects", tags=["Subjects"])

# The composite shown for every subject pairs these two rater roles
COMPOSITE_ROLES = (Role.PLATOON_INSTRUCTOR, Role.MAN_O_WAR)


#  Helpers

def composite_for(ratings: Dict[Role, RatingResponse]) -> CompositeScoreResponse:
    result = combine(*(ratings.get(role) for role in COMPOSITE_ROLES))
    return CompositeScoreResponse(available=result.available, score=result.score, label=result.label)


def ratings_by_member(rating_repo: RatingRepository) -> Dict[UUID, Dict[Role, RatingResponse]]:
    grouped: Dict[UUID, Dict[Role, RatingResponse]] = defaultdict(dict)
    for row in rating_repo.list_all():
        rating = RatingResponse(**row)
        grouped[rating.corp_member_id][rating.rater_role] = rating
    return grouped


def load_member(member_id: UUID, repo: CorpMemberRepository) -> CorpMemberResponse:
    member = repo.get_by_id(member_id)
    if member is None:
        raise_member_not_found()
    return CorpMemberResponse(**member)


#  Routes

@router.get(
    "",
    response_model=SubjectListResponse,
    summary="List corps members visible to the caller",
    description=(
        "Raters bound to a platoon only see that platoon. Search matches surname, "
        "other names, state code and call-up number. All filters combine."
    ),
)
async def list_subjects(
    search: Optional[str] = Query(default=None, max_length=100),
    platoon: Optional[str] = Query(default=None, description="Platoon number or 'all'"),
    camp_state: Optional[CampState] = Query(default=None),
    session: SessionContext = Depends(get_current_session),
    member_repo: CorpMemberRepository = Depends(get_corp_member_repository),
    rating_repo: RatingRepository = Depends(get_rating_repository),
) -> SubjectListResponse:
    subjects = [SubjectSummary.model_validate(m) for m in member_repo.list_all()]
    visible = filter_subjects(
        subjects,
        session.role,
        platoon_binding=session.platoon,
        search=search,
        platoon=platoon,
        camp_state=camp_state,
    )
    ratings = ratings_by_member(rating_repo)
    is_rater = session.role in RATER_ROLES

    items = []
    for subject in visible:
        member_ratings = ratings.get(subject.id, {})
        own = member_ratings.get(session.role)
        items.append(
            SubjectListItem(
                **subject.model_dump(),
                rated=(own is not None) if is_rater else None,
                own_total_score=own.total_score if own is not None else None,
                totals={role: r.total_score for role, r in member_ratings.items()},
                composite=composite_for(member_ratings),
            )
        )
    return SubjectListResponse(items=items, total=len(items))


@router.get(
    "/stats",
    response_model=List[PlatoonStatsResponse],
    responses={403: {"model": ErrorResponse, "description": "Reviewer roles only"}},
    summary="Per-platoon registration and rating counts",
)
async def subject_stats(
    session: SessionContext = Depends(require_roles(*REVIEWER_ROLES)),
    member_repo: CorpMemberRepository = Depends(get_corp_member_repository),
    rating_repo: RatingRepository = Depends(get_rating_repository),
) -> List[PlatoonStatsResponse]:
    subjects = [SubjectSummary.model_validate(m) for m in member_repo.list_all()]
    ratings = ratings_by_member(rating_repo)
    fully_rated = [
        member_id
        for member_id, member_ratings in ratings.items()
        if composite_for(member_ratings).available
    ]
    stats = platoon_stats(subjects, fully_rated, platoon_count=settings.PLATOON_COUNT)
    return [PlatoonStatsResponse(platoon=s.platoon, total=s.total, fully_rated=s.fully_rated) for s in stats]


@router.get(
    "/{member_id}",
    response_model=SubjectProfile,
    responses={
        403: {"model": ErrorResponse, "description": "Outside the caller's platoon"},
        404: {"model": ErrorResponse, "description": "Corps member not found"},
    },
    summary="Full corps member profile",
)
async def get_subject(
    member_id: UUID,
    session: SessionContext = Depends(get_current_session),
    member_repo: CorpMemberRepository = Depends(get_corp_member_repository),
    rating_repo: RatingRepository = Depends(get_rating_repository),
    comment_repo: CommentRepository = Depends(get_comment_repository),
    assessment_repo: AssessmentRepository = Depends(get_assessment_repository),
) -> SubjectProfile:
    member = load_member(member_id, member_repo)
    if not can_act_on(session.role, session.platoon, member):
        raise_forbidden("This corps member is not in your platoon")

    ratings = [RatingResponse(**r) for r in rating_repo.list_for_member(member_id)]
    return SubjectProfile(
        member=member,
        ratings=ratings,
        composite=composite_for({r.rater_role: r for r in ratings}),
        comments=[CommentResponse(**c) for c in comment_repo.list_for_member(member_id)],
        assessments=[CommandantAssessmentResponse(**a) for a in assessment_repo.list_for_member(member_id)],
    )


@router.put(
    "/{member_id}/ratings",
    response_model=RatingResponse,
    responses={
        403: {"model": ErrorResponse, "description": "Not a rater, or outside the caller's platoon"},
        404: {"model": ErrorResponse, "description": "Corps member not found"},
        422: {"model": ErrorResponse, "description": "Unknown category, off-scale score or incomplete rating"},
    },
    summary="Submit the caller's rating",
    description="Every category must be scored 2, 4, 6, 8 or 10. Replaces the caller role's previous rating.",
)
async def submit_rating(
    member_id: UUID,
    payload: RatingSubmission,
    session: SessionContext = Depends(require_roles(*RATER_ROLES)),
    member_repo: CorpMemberRepository = Depends(get_corp_member_repository),
    rating_repo: RatingRepository = Depends(get_rating_repository),
) -> RatingResponse:
    member = load_member(member_id, member_repo)
    if not can_act_on(session.role, session.platoon, member):
        raise_forbidden("You can only rate corps members in your platoon")

    try:
        sheet = RatingSheet.from_scores(session.role, payload.scores)
        record = sheet.commit(member_id, session.full_name)
    except ScoringValidationError as e:
        raise_validation_error(e.message)

    stored = rating_repo.upsert_and_mark_rated(record)
    logger.info("%s rated %s: %s/%s", session.role.value, member.state_code, record.total_score, record.max_score)
    return RatingResponse(**stored)


@router.put(
    "/{member_id}/comments",
    response_model=CommentResponse,
    responses={
        403: {"model": ErrorResponse, "description": "Commandant and soldier only"},
        404: {"model": ErrorResponse, "description": "Corps member not found"},
    },
    summary="Save the caller's comment on a corps member",
)
async def save_comment(
    member_id: UUID,
    payload: CommentUpdate,
    session: SessionContext = Depends(require_roles(*COMMENTER_ROLES)),
    member_repo: CorpMemberRepository = Depends(get_corp_member_repository),
    comment_repo: CommentRepository = Depends(get_comment_repository),
) -> CommentResponse:
    if not member_repo.exists(member_id):
        raise_member_not_found()

    comment = payload.comment.strip()
    if not comment:
        raise_validation_error("Comment must not be empty")

    saved = comment_repo.upsert(member_id, session.role, comment, session.full_name)
    return CommentResponse(**saved)


@router.put(
    "/{member_id}/assessment",
    response_model=CommandantAssessmentResponse,
    responses={
        403: {"model": ErrorResponse, "description": "Commandant only"},
        404: {"model": ErrorResponse, "description": "Corps member not found"},
    },
    summary="Save the commandant's final assessment",
    description=(
        "General assessment, support for further training programmes and signature date. "
        "Replaces the caller's previous assessment of this corps member."
    ),
)
async def save_assessment(
    member_id: UUID,
    payload: CommandantAssessmentUpdate,
    session: SessionContext = Depends(require_roles(Role.COMMANDANT)),
    member_repo: CorpMemberRepository = Depends(get_corp_member_repository),
    assessment_repo: AssessmentRepository = Depends(get_assessment_repository),
) -> CommandantAssessmentResponse:
    member = load_member(member_id, member_repo)

    saved = assessment_repo.upsert(
        member_id,
        session.user_id,
        session.full_name,
        payload.general_assessment.strip(),
        payload.support_training_programs,
        payload.signature_date or date.today(),
    )
    logger.info("commandant assessed %s (training support: %s)", member.state_code, payload.support_training_programs)
    return CommandantAssessmentResponse(**saved)
