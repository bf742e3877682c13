"""
Custom Exceptions - Camp Evaluation API
camp_eval/core/exceptions.py

Repository errors and scoring/validation engine errors.
"""

from typing import Optional


class RepositoryException(Exception):
    """Base exception for repository operations."""

    pass


class DuplicateEntityException(RepositoryException):
    """Duplicate entity violation."""

    def __init__(self, message: str = "Entity already exists"):
        self.message = message
        super().__init__(message)


class DatabaseConnectionException(RepositoryException):
    """Database connection failure."""

    def __init__(self, message: str = "Database connection failed"):
        self.message = message
        super().__init__(message)


class ForeignKeyViolationException(RepositoryException):
    """Foreign key constraint violation."""

    def __init__(self, message: str = "Foreign key constraint violation"):
        self.message = message
        super().__init__(message)


# Engine errors. All are recoverable by correcting input and retrying.


class ScoringValidationError(ValueError):
    """Base exception for registration and rating rule violations."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class RegistrationValidationError(ScoringValidationError):
    """A registration form section failed validation."""

    def __init__(self, section: int, message: str):
        self.section = section
        super().__init__(message)


class InvalidScoreError(ScoringValidationError):
    """A category score outside the fixed discrete scale."""

    def __init__(self, category: str, value: object, allowed: Optional[tuple] = None):
        self.category = category
        self.value = value
        allowed_text = ", ".join(str(v) for v in allowed) if allowed else "the rating scale"
        super().__init__(f"Invalid score {value!r} for '{category}': must be one of {allowed_text}")


class UnknownCategoryError(ScoringValidationError):
    """A category key that does not belong to the rater role's schema."""

    def __init__(self, category: str, role: str):
        self.category = category
        self.role = role
        super().__init__(f"Category '{category}' is not rated by role '{role}'")


class IncompleteRatingError(ScoringValidationError):
    """Commit attempted while one or more categories are unset."""

    def __init__(self, missing: list):
        self.missing = list(missing)
        super().__init__("Please rate all categories before saving")
