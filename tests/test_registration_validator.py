# tests/test_registration_validator.py

"""
Registration Validator Tests - section rules, submission payload, normalization
"""

import pytest

from camp_eval.core.exceptions import RegistrationValidationError
from camp_eval.models.corp_member import Institution, RegistrationForm
from camp_eval.models.enumerations import Batch, CampState, FormSection, MemberStatus, StateOfOrigin
from camp_eval.scoring.registration_validator import (
    SubmissionValidator,
    ValidationResult,
    add_institution,
    filled_institutions,
    normalize_call_up,
    normalize_phone,
    remove_institution,
    select_camp_state,
)


@pytest.fixture
def validator():
    return SubmissionValidator(
        state_prefixes={"Lagos": "LA", "Ondo": "OD"},
        year_code="25C",
        call_up_prefix="NYSC/",
        country_code="234",
        phone_digits=10,
    )


@pytest.fixture
def form(valid_registration_data):
    return RegistrationForm(**valid_registration_data)


class TestSectionOne:
    """Camp state, state code and platoon."""

    def test_valid(self, validator, form):
        assert validator.validate(1, form) == ValidationResult.ok()

    def test_missing_camp_state_wins_over_everything(self, validator):
        result = validator.validate(FormSection.CAMP_PLATOON, RegistrationForm())
        assert result.error_message == "Please select your camp state"

    @pytest.mark.parametrize(
        "state_code",
        ["LA/25C/001", "LA/25C/00001", "LA/25C/ABCD", "la/25c/0001", "OD/25C/0001", "LA/24C/0001", ""],
    )
    def test_bad_state_code(self, validator, form, state_code):
        result = validator.validate(1, form.model_copy(update={"state_code": state_code}))
        assert not result.valid
        assert result.error_message == "State Code must be in format: LA/25C/0000 (exactly 4 digits)"

    def test_ondo_prefix(self, validator, form):
        ondo = form.model_copy(update={"camp_state": CampState.ONDO, "state_code": "OD/25C/0420"})
        assert validator.validate(1, ondo).valid

    def test_missing_platoon(self, validator, form):
        result = validator.validate(1, form.model_copy(update={"platoon": None}))
        assert result.error_message == "Please select your platoon"


class TestSectionTwo:
    """Call-up number, surname, state of origin, batch and phone."""

    def test_valid(self, validator, form):
        assert validator.validate(2, form).valid

    def test_raw_call_up_is_not_normalized(self, validator, form):
        result = validator.validate(2, form.model_copy(update={"call_up_no": "12345"}))
        assert result.error_message == "NYSC Call Up Number must start with NYSC/"

    def test_whitespace_surname(self, validator, form):
        result = validator.validate(2, form.model_copy(update={"surname": "   "}))
        assert result.error_message == "Please enter your surname"

    def test_missing_state_of_origin(self, validator, form):
        result = validator.validate(2, form.model_copy(update={"state_of_origin": None}))
        assert result.error_message == "Please select your state of origin"

    def test_missing_batch(self, validator, form):
        result = validator.validate(2, form.model_copy(update={"batch": None}))
        assert result.error_message == "Please select your batch"

    def test_first_failure_only(self, validator, form):
        broken = form.model_copy(update={"surname": "", "batch": None, "phone": "123"})
        assert validator.validate(2, broken).error_message == "Please enter your surname"

    @pytest.mark.parametrize("phone", ["+2348012345678", ""])
    def test_phone_accepted(self, validator, form, phone):
        assert validator.validate(2, form.model_copy(update={"phone": phone})).valid

    @pytest.mark.parametrize("phone", ["+23480123456", "+234801234567890", "08012345678", "+2338012345678"])
    def test_phone_rejected(self, validator, form, phone):
        result = validator.validate(2, form.model_copy(update={"phone": phone}))
        assert result.error_message == "Phone number must be in format: +234XXXXXXXXXX (10 digits after +234)"


class TestSectionThree:
    """Qualification and specialization; institutions never fail."""

    def test_valid_without_institutions(self, validator, form):
        assert validator.validate(3, form.model_copy(update={"institutions": []})).valid

    def test_missing_qualification(self, validator, form):
        result = validator.validate(3, form.model_copy(update={"qualification": " "}))
        assert result.error_message == "Please enter your qualification"

    def test_missing_specialization(self, validator, form):
        result = validator.validate(3, form.model_copy(update={"specialization": ""}))
        assert result.error_message == "Please enter your area of specialization"


class TestValidateArguments:
    @pytest.mark.parametrize("section", [0, 4, -1])
    def test_unknown_section(self, validator, form, section):
        with pytest.raises(ValueError):
            validator.validate(section, form)

    def test_validate_does_not_modify_form(self, validator, form):
        before = form.model_dump()
        validator.validate(1, form)
        validator.validate(2, form)
        validator.validate(3, form)
        assert form.model_dump() == before

    def test_unconfigured_camp_state(self, form):
        lagos_only = SubmissionValidator(state_prefixes={"Lagos": "LA"})
        with pytest.raises(LookupError):
            lagos_only.state_code_prefix(CampState.ONDO)


class TestBuildSubmission:
    def test_payload(self, validator, form):
        payload = validator.build_submission(form)

        assert payload.surname == "ADEYEMI"
        assert payload.other_names == "TOLU GRACE"
        assert payload.change_of_name is None
        assert payload.state_of_deployment == CampState.LAGOS
        assert payload.batch == Batch.BATCH_A
        assert payload.state_of_origin == StateOfOrigin.OYO
        assert payload.status == MemberStatus.SUBMITTED
        assert payload.institutions == [Institution(name="University of Lagos", year="2019-2023")]

    def test_blank_phone_stored_as_null(self, validator, form):
        payload = validator.build_submission(form.model_copy(update={"phone": ""}))
        assert payload.phone is None

    def test_rejects_with_section(self, validator, form):
        with pytest.raises(RegistrationValidationError) as exc_info:
            validator.build_submission(form.model_copy(update={"qualification": ""}))
        assert exc_info.value.section == 3
        assert exc_info.value.message == "Please enter your qualification"

    def test_validate_all_reports_earliest_section(self, validator, form):
        broken = form.model_copy(update={"platoon": None, "qualification": ""})
        section, result = validator.validate_all(broken)
        assert section == FormSection.CAMP_PLATOON
        assert result.error_message == "Please select your platoon"


class TestNormalization:
    def test_select_camp_state_resets_code(self, validator, form):
        updated = select_camp_state(form, CampState.ONDO, validator)
        assert updated.state_code == "OD/25C/"
        assert updated.state_of_deployment == CampState.ONDO
        assert form.state_code == "LA/25C/0001"

    def test_select_no_camp_state(self, validator, form):
        updated = select_camp_state(form, None, validator)
        assert updated.state_code == ""
        assert updated.state_of_deployment is None

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("12345", "NYSC/12345"),
            ("NYSC12345", "NYSC/12345"),
            ("NYSC/12345", "NYSC/12345"),
            ("", ""),
        ],
    )
    def test_normalize_call_up(self, raw, expected):
        assert normalize_call_up(raw, "NYSC/") == expected

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("0801 234 5678", "+2348012345678"),
            ("08012345678", "+2348012345678"),
            ("2348012345678", "+2348012345678"),
            ("+2348012345678", "+2348012345678"),
            ("(0801)-234-5678", "+2348012345678"),
            ("", ""),
        ],
    )
    def test_normalize_phone(self, raw, expected):
        assert normalize_phone(raw, "234") == expected

    def test_normalized_phone_passes_validation(self, validator, form):
        phone = normalize_phone("0801 234 5678", "234")
        assert validator.validate(2, form.model_copy(update={"phone": phone})).valid


class TestInstitutionList:
    def test_add(self):
        rows = add_institution([Institution(name="UNILAG")])
        assert rows == [Institution(name="UNILAG"), Institution()]

    def test_remove(self):
        rows = [Institution(name="A"), Institution(name="B")]
        assert remove_institution(rows, 0) == [Institution(name="B")]

    def test_last_row_is_kept(self):
        rows = [Institution(name="A")]
        assert remove_institution(rows, 0) == rows

    def test_remove_out_of_range(self):
        with pytest.raises(IndexError):
            remove_institution([Institution(), Institution()], 5)

    def test_filled(self):
        rows = [Institution(name="UNILAG", year="2020"), Institution(name="  ", year="2021"), Institution()]
        assert filled_institutions(rows) == [Institution(name="UNILAG", year="2020")]
