"""
Registration Router - Camp Evaluation API
camp_eval/routers/registrations.py

Corps-member self registration: per-section validation while the form is
filled, then one final submission.
"""

import logging

from fastapi import APIRouter, Depends, Path, status

from camp_eval.core.dependencies import get_corp_member_repository, get_submission_validator
from camp_eval.core.errors import raise_conflict, raise_validation_error
from camp_eval.core.exceptions import DuplicateEntityException, RegistrationValidationError
from camp_eval.models.corp_member import (
    CorpMemberResponse,
    ErrorResponse,
    RegistrationForm,
    SectionValidationResponse,
)
from camp_eval.repositories.corp_member_repository import CorpMemberRepository
from camp_eval.scoring.registration_validator import SubmissionValidator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/registrations", tags=["Registrations"])

DUPLICATE_MESSAGE = "A corps member with this state code or call-up number is already registered"


@router.post(
    "/validate/{section}",
    response_model=SectionValidationResponse,
    summary="Validate one registration section",
    description="Runs the rules for section 1, 2 or 3 in order and reports the first failure only.",
)
async def validate_section(
    form: RegistrationForm,
    section: int = Path(..., ge=1, le=3),
    validator: SubmissionValidator = Depends(get_submission_validator),
) -> SectionValidationResponse:
    result = validator.validate(section, form)
    return SectionValidationResponse(
        section=section,
        valid=result.valid,
        error_message=result.error_message,
    )


@router.post(
    "",
    response_model=CorpMemberResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {
            "model": ErrorResponse,
            "description": "Already registered",
        },
        422: {
            "model": ErrorResponse,
            "description": "A section failed validation",
            "content": {
                "application/json": {
                    "example": {
                        "detail": {
                            "error_code": "VALIDATION_ERROR",
                            "message": "NYSC Call Up Number must start with NYSC/",
                            "details": {"section": 2},
                            "timestamp": "2025-11-03T12:00:00Z",
                        }
                    }
                }
            },
        },
    },
    summary="Submit a registration",
    description="Validates all three sections, then stores the corps member with status 'submitted'.",
)
async def submit_registration(
    form: RegistrationForm,
    validator: SubmissionValidator = Depends(get_submission_validator),
    repo: CorpMemberRepository = Depends(get_corp_member_repository),
) -> CorpMemberResponse:
    try:
        payload = validator.build_submission(form)
    except RegistrationValidationError as e:
        raise_validation_error(e.message, {"section": e.section})

    if repo.registration_exists(payload.state_code, payload.call_up_no):
        raise_conflict("ALREADY_REGISTERED", DUPLICATE_MESSAGE)

    try:
        member = repo.create(payload)
    except DuplicateEntityException:
        raise_conflict("ALREADY_REGISTERED", DUPLICATE_MESSAGE)

    logger.info("Registered corps member %s (platoon %s)", member["state_code"], member["platoon"])
    return CorpMemberResponse(**member)
