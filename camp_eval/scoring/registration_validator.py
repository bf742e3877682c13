# camp_eval/scoring/registration_validator.py
"""
Registration Validator
----------------------
Section-scoped validation of the corps-member registration form.

The form is filled in three sections, each validated on its own before the
caller may advance:

    1. Camp & platoon     camp state, state code, platoon
    2. Personal details   call-up number, surname, state of origin, batch, phone
    3. Education          qualification, specialization (institutions never fail)

Rules run in declared order and the first failure wins; errors are never
accumulated. Normalization helpers (call-up prefix, phone formatting, state
code prefix) are applied by the caller as the user types and are never run
implicitly by validate().
"""
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple, Union

import structlog

from camp_eval.config import settings
from camp_eval.core.exceptions import RegistrationValidationError
from camp_eval.models.corp_member import CorpMemberCreate, Institution, RegistrationForm
from camp_eval.models.enumerations import CampState, FormSection

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one section: advance, or a single error message."""
    valid: bool
    error_message: Optional[str] = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def fail(cls, message: str) -> "ValidationResult":
        return cls(valid=False, error_message=message)


Rule = Callable[[RegistrationForm], Optional[str]]


class SubmissionValidator:
    """Validate a RegistrationForm one section at a time."""

    def __init__(
        self,
        state_prefixes: Optional[Dict[str, str]] = None,
        year_code: Optional[str] = None,
        call_up_prefix: Optional[str] = None,
        country_code: Optional[str] = None,
        phone_digits: Optional[int] = None,
    ):
        self.state_prefixes = dict(state_prefixes or settings.CAMP_STATE_PREFIXES)
        self.year_code = year_code or settings.CAMP_YEAR_CODE
        self.call_up_prefix = call_up_prefix or settings.CALL_UP_PREFIX
        self.country_code = country_code or settings.PHONE_COUNTRY_CODE
        self.phone_digits = phone_digits or settings.PHONE_SUBSCRIBER_DIGITS
        self._phone_re = re.compile(
            rf"\+{re.escape(self.country_code)}[0-9]{{{self.phone_digits}}}"
        )

        self._rules: Dict[FormSection, List[Rule]] = {
            FormSection.CAMP_PLATOON: [
                self._check_camp_state,
                self._check_state_code,
                self._check_platoon,
            ],
            FormSection.PERSONAL: [
                self._check_call_up,
                self._check_surname,
                self._check_state_of_origin,
                self._check_batch,
                self._check_phone,
            ],
            FormSection.EDUCATION: [
                self._check_qualification,
                self._check_specialization,
            ],
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def validate(
        self, section: Union[FormSection, int], form: RegistrationForm
    ) -> ValidationResult:
        """
        Validate a single section of the form.

        Args:
            section: 1, 2 or 3 (or the matching FormSection).
            form: Current form state.

        Returns:
            ValidationResult carrying the first failing rule's message, if any.

        Raises:
            ValueError: if `section` is not 1, 2 or 3.
        """
        section = FormSection(section)
        for rule in self._rules[section]:
            message = rule(form)
            if message is not None:
                logger.debug("section_rejected", section=int(section), message=message)
                return ValidationResult.fail(message)
        return ValidationResult.ok()

    def validate_all(
        self, form: RegistrationForm
    ) -> Tuple[Optional[FormSection], ValidationResult]:
        """Validate sections in order; return the first failing section, or (None, ok)."""
        for section in FormSection:
            result = self.validate(section, form)
            if not result.valid:
                return section, result
        return None, ValidationResult.ok()

    def build_submission(self, form: RegistrationForm) -> CorpMemberCreate:
        """
        Turn a fully valid form into the persistence payload.

        Raises:
            RegistrationValidationError: the first failing section and message.
        """
        section, result = self.validate_all(form)
        if section is not None:
            logger.info(
                "registration_rejected",
                section=int(section),
                message=result.error_message,
            )
            raise RegistrationValidationError(int(section), result.error_message)

        payload = CorpMemberCreate(
            camp_state=form.camp_state,
            state_code=form.state_code,
            platoon=form.platoon,
            call_up_no=form.call_up_no,
            surname=form.surname.strip().upper(),
            other_names=form.other_names.strip().upper() or None,
            change_of_name=form.change_of_name.strip() or None,
            state_of_origin=form.state_of_origin,
            state_of_deployment=form.camp_state,
            batch=form.batch,
            phone=form.phone or None,
            qualification=form.qualification.strip(),
            specialization=form.specialization.strip(),
            institutions=filled_institutions(form.institutions),
        )
        logger.info(
            "registration_accepted",
            state_code=payload.state_code,
            platoon=payload.platoon,
            institutions=len(payload.institutions),
        )
        return payload

    def state_code_prefix(self, camp_state: Optional[CampState]) -> str:
        """'LA/25C/' style prefix for a camp state; empty when unset."""
        if camp_state is None:
            return ""
        prefix = self.state_prefixes.get(CampState(camp_state).value)
        if prefix is None:
            raise LookupError(f"No state code prefix configured for camp state {camp_state}")
        return f"{prefix}/{self.year_code}/"

    # ------------------------------------------------------------------
    # Section 1: camp & platoon
    # ------------------------------------------------------------------

    def _check_camp_state(self, form: RegistrationForm) -> Optional[str]:
        if form.camp_state is None:
            return "Please select your camp state"
        return None

    def _check_state_code(self, form: RegistrationForm) -> Optional[str]:
        prefix = self.state_code_prefix(form.camp_state)
        if not re.fullmatch(rf"{re.escape(prefix)}[0-9]{{4}}", form.state_code):
            return f"State Code must be in format: {prefix}0000 (exactly 4 digits)"
        return None

    def _check_platoon(self, form: RegistrationForm) -> Optional[str]:
        if form.platoon is None:
            return "Please select your platoon"
        return None

    # ------------------------------------------------------------------
    # Section 2: personal details
    # ------------------------------------------------------------------

    def _check_call_up(self, form: RegistrationForm) -> Optional[str]:
        if not form.call_up_no.startswith(self.call_up_prefix):
            return f"NYSC Call Up Number must start with {self.call_up_prefix}"
        return None

    def _check_surname(self, form: RegistrationForm) -> Optional[str]:
        if not form.surname.strip():
            return "Please enter your surname"
        return None

    def _check_state_of_origin(self, form: RegistrationForm) -> Optional[str]:
        if form.state_of_origin is None:
            return "Please select your state of origin"
        return None

    def _check_batch(self, form: RegistrationForm) -> Optional[str]:
        if form.batch is None:
            return "Please select your batch"
        return None

    def _check_phone(self, form: RegistrationForm) -> Optional[str]:
        # Phone is optional; only a non-empty value is checked.
        if form.phone and not self._phone_re.fullmatch(form.phone):
            return (
                f"Phone number must be in format: +{self.country_code}"
                f"{'X' * self.phone_digits} ({self.phone_digits} digits after +{self.country_code})"
            )
        return None

    # ------------------------------------------------------------------
    # Section 3: education
    # ------------------------------------------------------------------

    def _check_qualification(self, form: RegistrationForm) -> Optional[str]:
        if not form.qualification.strip():
            return "Please enter your qualification"
        return None

    def _check_specialization(self, form: RegistrationForm) -> Optional[str]:
        if not form.specialization.strip():
            return "Please enter your area of specialization"
        return None


# ----------------------------------------------------------------------
# Input normalization (runs upstream of validation, as the user types)
# ----------------------------------------------------------------------


def select_camp_state(
    form: RegistrationForm,
    camp_state: Optional[CampState],
    validator: Optional[SubmissionValidator] = None,
) -> RegistrationForm:
    """Set the camp state, reset the state code to its prefix and derive deployment."""
    validator = validator or SubmissionValidator()
    return form.model_copy(
        update={
            "camp_state": camp_state,
            "state_code": validator.state_code_prefix(camp_state),
            "state_of_deployment": camp_state,
        }
    )


def normalize_call_up(value: str, prefix: Optional[str] = None) -> str:
    """Prepend the call-up prefix when missing. 'NYSC12' and '12' both become 'NYSC/12'."""
    prefix = prefix or settings.CALL_UP_PREFIX
    if not value or value.startswith(prefix):
        return value
    bare = prefix.rstrip("/")
    rest = re.sub(rf"^{re.escape(bare)}/?", "", value)
    return prefix + rest


def normalize_phone(value: str, country_code: Optional[str] = None) -> str:
    """
    Keep digits and '+', then force a '+<country code>' prefix.

    '0801 234 5678' -> '+2348012345678'. Length is not checked here.
    """
    country_code = country_code or settings.PHONE_COUNTRY_CODE
    formatted = re.sub(r"[^0-9+]", "", value)
    if formatted and not formatted.startswith(f"+{country_code}"):
        formatted = formatted.lstrip("0")
        formatted = re.sub(rf"^\+?{re.escape(country_code)}", "", formatted)
        formatted = f"+{country_code}{formatted}"
    return formatted


# ----------------------------------------------------------------------
# Institution list builder (filter on commit, not on edit)
# ----------------------------------------------------------------------


def add_institution(institutions: List[Institution]) -> List[Institution]:
    return [*institutions, Institution()]


def remove_institution(institutions: List[Institution], index: int) -> List[Institution]:
    """Remove the row at `index`; the last remaining row is kept."""
    if len(institutions) <= 1:
        return list(institutions)
    if not 0 <= index < len(institutions):
        raise IndexError(f"institution index {index} out of range")
    return [inst for i, inst in enumerate(institutions) if i != index]


def filled_institutions(institutions: List[Institution]) -> List[Institution]:
    return [inst for inst in institutions if inst.name.strip()]
