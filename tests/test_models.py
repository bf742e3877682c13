# tests/test_models.py

"""
Model Validation Tests - enumerations and Pydantic models
"""

import pytest
from pydantic import ValidationError

from camp_eval.models.corp_member import CorpMemberCreate, Institution, RegistrationForm
from camp_eval.models.enumerations import (
    COMMENTER_ROLES,
    RATER_ROLES,
    REVIEWER_ROLES,
    Batch,
    CampState,
    FormSection,
    Role,
    StateOfOrigin,
)
from camp_eval.models.staff import LoginRequest, StaffUserCreate
from camp_eval.models.subject import CommentUpdate


# ENUMERATION TESTS


class TestEnumerations:
    def test_camp_states(self):
        assert [c.value for c in CampState] == ["Lagos", "Ondo"]

    def test_batches(self):
        assert [b.value for b in Batch] == ["Batch A", "Batch B", "Batch C"]

    def test_states_of_origin(self):
        """36 states plus FCT."""
        assert len(StateOfOrigin) == 37
        assert StateOfOrigin("FCT") == StateOfOrigin.FCT

    def test_form_sections(self):
        assert [int(s) for s in FormSection] == [1, 2, 3]

    def test_role_groups(self):
        assert set(RATER_ROLES) | set(REVIEWER_ROLES) == set(Role)
        assert not set(RATER_ROLES) & set(REVIEWER_ROLES)
        assert set(COMMENTER_ROLES) == {Role.COMMANDANT, Role.SOLDIER}


# REGISTRATION MODEL TESTS


class TestRegistrationForm:
    def test_defaults(self):
        form = RegistrationForm()
        assert form.camp_state is None
        assert form.state_code == ""
        assert form.institutions == [Institution()]

    def test_state_of_deployment_follows_camp_state(self):
        form = RegistrationForm(camp_state="Ondo", state_of_deployment="Lagos")
        assert form.state_of_deployment == CampState.ONDO

    @pytest.mark.parametrize("platoon", [0, 11])
    def test_platoon_range(self, platoon):
        with pytest.raises(ValidationError):
            RegistrationForm(platoon=platoon)

    def test_unknown_batch(self):
        with pytest.raises(ValidationError):
            RegistrationForm(batch="Batch D")


class TestCorpMemberCreate:
    def test_required_fields(self):
        with pytest.raises(ValidationError):
            CorpMemberCreate(camp_state="Lagos", state_code="LA/25C/0001")


# STAFF MODEL TESTS


class TestStaffModels:
    def test_rater_keeps_platoon(self):
        user = StaffUserCreate(username="pi1", password="x", full_name="A", role="platoon_instructor", platoon=1)
        assert user.platoon == 1

    @pytest.mark.parametrize("role", ["commandant", "soldier"])
    def test_reviewer_platoon_dropped(self, role):
        user = StaffUserCreate(username="r", password="x", full_name="A", role=role, platoon=4)
        assert user.platoon is None

    def test_login_requires_role(self):
        with pytest.raises(ValidationError):
            LoginRequest(username="pi1", password="x")

    def test_login_unknown_role(self):
        with pytest.raises(ValidationError):
            LoginRequest(username="pi1", password="x", role="admin")


class TestCommentUpdate:
    def test_empty(self):
        with pytest.raises(ValidationError):
            CommentUpdate(comment="")

    def test_too_long(self):
        with pytest.raises(ValidationError):
            CommentUpdate(comment="x" * 4001)
