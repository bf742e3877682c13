# tests/test_rating_aggregator.py

"""
Rating Aggregator Tests - schemas, scale checks, totals and commit
"""

from uuid import uuid4

import pytest

from camp_eval.core.exceptions import IncompleteRatingError, InvalidScoreError, UnknownCategoryError
from camp_eval.models.enumerations import Role
from camp_eval.scoring.rating_aggregator import (
    RATING_SCALE,
    RATING_SCHEMAS,
    RatingSheet,
    get_schema,
)


class TestSchemas:
    def test_scale(self):
        assert sorted(RATING_SCALE) == [2, 4, 6, 8, 10]
        assert RATING_SCALE[10] == "Excellent"
        assert RATING_SCALE[2] == "Poor"

    @pytest.mark.parametrize(
        "role, count, max_total",
        [
            (Role.PLATOON_INSTRUCTOR, 5, 50),
            (Role.MAN_O_WAR, 5, 50),
            (Role.SQUAD_INSTRUCTOR, 9, 90),
        ],
    )
    def test_schema_sizes(self, role, count, max_total):
        schema = get_schema(role)
        assert len(schema.categories) == count
        assert schema.max_total == max_total

    def test_pi_and_mow_share_categories(self):
        assert RATING_SCHEMAS[Role.PLATOON_INSTRUCTOR].keys == RATING_SCHEMAS[Role.MAN_O_WAR].keys

    @pytest.mark.parametrize("role", [Role.COMMANDANT, Role.SOLDIER])
    def test_reviewer_has_no_schema(self, role):
        with pytest.raises(ValueError):
            get_schema(role)

    def test_schema_table_is_read_only(self):
        with pytest.raises(TypeError):
            RATING_SCHEMAS[Role.SOLDIER] = RATING_SCHEMAS[Role.MAN_O_WAR]


class TestRatingSheet:
    def test_blank(self):
        sheet = RatingSheet.blank(Role.PLATOON_INSTRUCTOR)
        assert sheet.total_score == 0
        assert not sheet.is_complete
        assert sheet.missing_categories == sheet.schema.keys

    def test_set_category_returns_new_sheet(self):
        blank = RatingSheet.blank(Role.MAN_O_WAR)
        rated = blank.set_category("discipline", 8)
        assert rated.total_score == 8
        assert blank.total_score == 0
        assert blank.scores["discipline"] is None

    def test_overwrite_category(self):
        sheet = RatingSheet.blank(Role.MAN_O_WAR).set_category("discipline", 8).set_category("discipline", 4)
        assert sheet.total_score == 4

    @pytest.mark.parametrize("value", [0, 1, 3, 5, 7, 9, 11, 12, -2, True, 8.0, "8"])
    def test_off_scale_value(self, value):
        with pytest.raises(InvalidScoreError) as exc_info:
            RatingSheet.blank(Role.MAN_O_WAR).set_category("discipline", value)
        assert exc_info.value.category == "discipline"

    def test_unknown_category(self):
        with pytest.raises(UnknownCategoryError):
            RatingSheet.blank(Role.SQUAD_INSTRUCTOR).set_category("appearance", 10)

    def test_worked_example(self, camp_activity_scores):
        sheet = RatingSheet.from_scores(Role.PLATOON_INSTRUCTOR, camp_activity_scores)
        assert sheet.total_score == 30
        assert sheet.is_complete

    def test_zero_is_unset_on_the_wire(self, camp_activity_scores):
        sheet = RatingSheet.from_scores(Role.PLATOON_INSTRUCTOR, {**camp_activity_scores, "general_conduct": 0})
        assert sheet.total_score == 28
        assert sheet.missing_categories == ("general_conduct",)
        assert sheet.as_wire()["general_conduct"] == 0

    def test_zero_for_unknown_category_still_rejected(self):
        with pytest.raises(UnknownCategoryError):
            RatingSheet.from_scores(Role.PLATOON_INSTRUCTOR, {"team_work": 0})

    def test_all_tens_squad(self):
        scores = {key: 10 for key in RATING_SCHEMAS[Role.SQUAD_INSTRUCTOR].keys}
        sheet = RatingSheet.from_scores(Role.SQUAD_INSTRUCTOR, scores)
        assert sheet.total_score == 90


class TestCommit:
    def test_commit_complete(self, camp_activity_scores):
        member_id = uuid4()
        record = RatingSheet.from_scores(Role.MAN_O_WAR, camp_activity_scores).commit(member_id, "Cpl. Obi")

        assert record.corp_member_id == member_id
        assert record.rater_role == Role.MAN_O_WAR
        assert record.rated_by == "Cpl. Obi"
        assert record.total_score == 30
        assert record.max_score == 50
        assert record.is_complete
        assert dict(record.scores) == camp_activity_scores

    def test_commit_incomplete(self):
        sheet = RatingSheet.blank(Role.PLATOON_INSTRUCTOR).set_category("appearance", 10)
        with pytest.raises(IncompleteRatingError) as exc_info:
            sheet.commit(uuid4(), "Mrs. Ade")
        assert exc_info.value.message == "Please rate all categories before saving"
        assert "appearance" not in exc_info.value.missing
        assert len(exc_info.value.missing) == 4
