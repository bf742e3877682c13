# camp_eval/scoring/rating_aggregator.py
"""
Category Rating Aggregator
--------------------------
Holds one rater's category scores for one corps member, keeps the total and
reports completion.

Every rater role rates against a fixed category set drawn from RATING_SCHEMAS;
every category takes a value from the discrete scale {2, 4, 6, 8, 10}.

    total        = Σ category scores (unset categories contribute 0)
    is_complete  = every category of the role's schema is set
    max_total    = 10 × number of categories (50 or 90)

Unset categories are held as None. At the input boundary a score of 0 means
"unset", which is why 0 can never join the scale.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple
from uuid import UUID

import structlog

from camp_eval.core.exceptions import (
    IncompleteRatingError,
    InvalidScoreError,
    UnknownCategoryError,
)
from camp_eval.models.enumerations import Role

logger = structlog.get_logger(__name__)

UNSET = 0

RATING_SCALE: Dict[int, str] = {
    10: "Excellent",
    8:  "Very Good",
    6:  "Good",
    4:  "Fair",
    2:  "Poor",
}


@dataclass(frozen=True)
class RatingCategory:
    key: str
    label: str


@dataclass(frozen=True)
class RatingSchema:
    """Category set and scale a rater role scores against."""
    role: Role
    categories: Tuple[RatingCategory, ...]
    scale: Tuple[int, ...] = tuple(sorted(RATING_SCALE))

    @property
    def keys(self) -> Tuple[str, ...]:
        return tuple(c.key for c in self.categories)

    @property
    def max_total(self) -> int:
        return max(self.scale) * len(self.categories)


_CAMP_ACTIVITY_CATEGORIES = (
    RatingCategory("appearance",      "Appearance & Bearing During Camp Activities"),
    RatingCategory("punctuality",     "Punctuality & Regularity at Camp Activities"),
    RatingCategory("discipline",      "Discipline & Obedience to Rules"),
    RatingCategory("participation",   "Participation in Camp Activities"),
    RatingCategory("general_conduct", "General Conduct & Attitude"),
)

_SQUAD_CATEGORIES = (
    RatingCategory("appearance_bearing_physique", "Appearance, Bearing & Physique"),
    RatingCategory("punctuality_regularity",      "Punctuality & Regularity"),
    RatingCategory("camp_civics_knowledge",       "Camp Civics Knowledge"),
    RatingCategory("civil_orientation",           "Civil Orientation"),
    RatingCategory("sense_of_duty",               "Sense of Duty"),
    RatingCategory("initiative_resourcefulness",  "Initiative & Resourcefulness"),
    RatingCategory("team_work",                   "Team Work"),
    RatingCategory("command_leadership",          "Command & Leadership"),
    RatingCategory("discipline",                  "Discipline"),
)

# Role -> schema. Adding a rater role is a table entry, not a code branch.
RATING_SCHEMAS: Mapping[Role, RatingSchema] = MappingProxyType({
    Role.PLATOON_INSTRUCTOR: RatingSchema(Role.PLATOON_INSTRUCTOR, _CAMP_ACTIVITY_CATEGORIES),
    Role.MAN_O_WAR:          RatingSchema(Role.MAN_O_WAR, _CAMP_ACTIVITY_CATEGORIES),
    Role.SQUAD_INSTRUCTOR:   RatingSchema(Role.SQUAD_INSTRUCTOR, _SQUAD_CATEGORIES),
})


def get_schema(role: Role) -> RatingSchema:
    """Schema for a rater role; ValueError for roles that do not rate."""
    try:
        return RATING_SCHEMAS[Role(role)]
    except KeyError:
        raise ValueError(f"Role '{role}' does not submit category ratings") from None


@dataclass(frozen=True)
class RatingRecord:
    """Finalized rating, ready to overwrite the rater role's stored rating."""
    corp_member_id: UUID
    rater_role: Role
    rated_by: str
    scores: Mapping[str, int]
    total_score: int
    max_score: int
    is_complete: bool = True
    rated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class RatingSheet:
    """
    Immutable in-progress rating. Every update returns a new sheet, and
    total_score is derived from the current scores on each read.
    """
    schema: RatingSchema
    scores: Mapping[str, Optional[int]]

    @classmethod
    def blank(cls, role: Role) -> "RatingSheet":
        schema = get_schema(role)
        return cls(schema, MappingProxyType({k: None for k in schema.keys}))

    @classmethod
    def from_scores(cls, role: Role, scores: Mapping[str, int]) -> "RatingSheet":
        """
        Build a sheet from a wire map of category -> score, where 0 is unset.

        Raises:
            UnknownCategoryError: a key outside the role's schema.
            InvalidScoreError: a value outside {0} ∪ scale.
        """
        sheet = cls.blank(role)
        for key, value in scores.items():
            if value == UNSET and not isinstance(value, bool):
                sheet._require_category(key)
                continue
            sheet = sheet.set_category(key, value)
        return sheet

    def set_category(self, key: str, value: int) -> "RatingSheet":
        """
        Return a new sheet with `key` set to `value`.

        Raises:
            UnknownCategoryError: `key` is not in this role's schema.
            InvalidScoreError: `value` is not on the discrete scale.
        """
        self._require_category(key)
        if isinstance(value, bool) or not isinstance(value, int) or value not in self.schema.scale:
            raise InvalidScoreError(key, value, self.schema.scale)
        updated = dict(self.scores)
        updated[key] = value
        return RatingSheet(self.schema, MappingProxyType(updated))

    @property
    def role(self) -> Role:
        return self.schema.role

    @property
    def total_score(self) -> int:
        return sum(v for v in self.scores.values() if v is not None)

    @property
    def is_complete(self) -> bool:
        return all(self.scores.get(k) is not None for k in self.schema.keys)

    @property
    def missing_categories(self) -> Tuple[str, ...]:
        return tuple(k for k in self.schema.keys if self.scores.get(k) is None)

    def as_wire(self) -> Dict[str, int]:
        """Category -> score with 0 for unset."""
        return {k: (self.scores.get(k) or UNSET) for k in self.schema.keys}

    def commit(self, corp_member_id: UUID, rated_by: str) -> RatingRecord:
        """
        Finalize the sheet.

        Raises:
            IncompleteRatingError: one or more categories are unset.
        """
        missing = self.missing_categories
        if missing:
            raise IncompleteRatingError(list(missing))

        record = RatingRecord(
            corp_member_id=corp_member_id,
            rater_role=self.role,
            rated_by=rated_by,
            scores=MappingProxyType({k: self.scores[k] for k in self.schema.keys}),
            total_score=self.total_score,
            max_score=self.schema.max_total,
        )

        logger.info(
            "rating_committed",
            corp_member_id=str(corp_member_id),
            rater_role=self.role.value,
            rated_by=rated_by,
            total_score=record.total_score,
            max_score=record.max_score,
        )
        return record

    def _require_category(self, key: str) -> None:
        if key not in self.schema.keys:
            raise UnknownCategoryError(key, self.role.value)
