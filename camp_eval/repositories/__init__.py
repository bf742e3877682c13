"""
Repositories Package - Camp Evaluation API
camp_eval/repositories/__init__.py

Data access layer for Snowflake database operations.
"""

from camp_eval.repositories.assessment_repository import AssessmentRepository
from camp_eval.repositories.base import BaseRepository
from camp_eval.repositories.comment_repository import CommentRepository
from camp_eval.repositories.corp_member_repository import CorpMemberRepository
from camp_eval.repositories.rating_repository import RatingRepository
from camp_eval.repositories.staff_repository import StaffRepository

__all__ = [
    "AssessmentRepository",
    "BaseRepository",
    "CommentRepository",
    "CorpMemberRepository",
    "RatingRepository",
    "StaffRepository",
]
