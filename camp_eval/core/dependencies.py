"""
Dependencies - Camp Evaluation API
camp_eval/core/dependencies.py

FastAPI dependency injection for repositories and the caller's session.
"""

from functools import lru_cache
from typing import Callable, Optional

from fastapi import Depends, Header

from camp_eval.core.errors import raise_forbidden, raise_not_authenticated
from camp_eval.models.enumerations import Role
from camp_eval.models.staff import SessionContext
from camp_eval.repositories.assessment_repository import AssessmentRepository
from camp_eval.repositories.comment_repository import CommentRepository
from camp_eval.repositories.corp_member_repository import CorpMemberRepository
from camp_eval.repositories.rating_repository import RatingRepository
from camp_eval.repositories.staff_repository import StaffRepository
from camp_eval.scoring.registration_validator import SubmissionValidator
from camp_eval.services.session_store import SessionStore, get_session_store

SESSION_HEADER = "X-Session-Token"


@lru_cache()
def get_submission_validator() -> SubmissionValidator:
    """Get cached SubmissionValidator built from settings."""
    return SubmissionValidator()


@lru_cache()
def get_corp_member_repository() -> CorpMemberRepository:
    """Get cached CorpMemberRepository instance."""
    return CorpMemberRepository()


@lru_cache()
def get_rating_repository() -> RatingRepository:
    """Get cached RatingRepository instance."""
    return RatingRepository()


@lru_cache()
def get_comment_repository() -> CommentRepository:
    """Get cached CommentRepository instance."""
    return CommentRepository()


@lru_cache()
def get_assessment_repository() -> AssessmentRepository:
    """Get cached AssessmentRepository instance."""
    return AssessmentRepository()


@lru_cache()
def get_staff_repository() -> StaffRepository:
    """Get cached StaffRepository instance."""
    return StaffRepository()


def get_current_session(
    token: Optional[str] = Header(default=None, alias=SESSION_HEADER),
    store: SessionStore = Depends(get_session_store),
) -> SessionContext:
    """Resolve the caller's session from the X-Session-Token header (401 if absent or expired)."""
    if not token:
        raise_not_authenticated()
    session = store.get(token)
    if session is None:
        raise_not_authenticated()
    return session


def require_roles(*roles: Role) -> Callable[..., SessionContext]:
    """Dependency factory: the caller's session, or 403 when its role is not listed."""

    def checker(session: SessionContext = Depends(get_current_session)) -> SessionContext:
        if session.role not in roles:
            raise_forbidden()
        return session

    return checker
