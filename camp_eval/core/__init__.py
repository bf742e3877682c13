"""
Core Package - Camp Evaluation API
camp_eval/core/__init__.py

Core infrastructure: exceptions here; FastAPI dependencies in
camp_eval.core.dependencies and HTTP error helpers in camp_eval.core.errors
(imported directly, since repositories depend on this package).
"""

from camp_eval.core.exceptions import (
    DatabaseConnectionException,
    DuplicateEntityException,
    ForeignKeyViolationException,
    IncompleteRatingError,
    InvalidScoreError,
    RegistrationValidationError,
    RepositoryException,
    ScoringValidationError,
    UnknownCategoryError,
)

__all__ = [
    "DatabaseConnectionException",
    "DuplicateEntityException",
    "ForeignKeyViolationException",
    "IncompleteRatingError",
    "InvalidScoreError",
    "RegistrationValidationError",
    "RepositoryException",
    "ScoringValidationError",
    "UnknownCategoryError",
]
