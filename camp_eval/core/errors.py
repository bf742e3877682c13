"""
HTTP Error Helpers - Camp Evaluation API
camp_eval/core/errors.py

Uniform ErrorResponse bodies for HTTPException, the request validation
handler and the repository failure handler registered in main.py.
"""

import logging
from datetime import datetime, timezone

from fastapi import Request, status
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.responses import JSONResponse

from camp_eval.core.exceptions import DatabaseConnectionException, RepositoryException
from camp_eval.models.corp_member import ErrorResponse

logger = logging.getLogger(__name__)


FIELD_MESSAGES = {
    "platoon": {
        "greater_than_equal": "Platoon must be between 1 and 10",
        "less_than_equal": "Platoon must be between 1 and 10",
        "int_parsing": "Platoon must be a valid integer",
    },
    "camp_state": {
        "enum": "Camp state must be one of: Lagos, Ondo",
    },
    "batch": {
        "enum": "Batch must be one of: Batch A, Batch B, Batch C",
    },
    "state_of_origin": {
        "enum": "State of origin must be a Nigerian state or FCT",
    },
    "role": {
        "missing": "Role is required",
        "enum": "Role must be one of: platoon_instructor, man_o_war, squad_instructor, commandant, soldier",
    },
    "username": {
        "missing": "Username is required",
        "string_too_short": "Username is required",
    },
    "password": {
        "missing": "Password is required",
        "string_too_short": "Password is required",
    },
    "scores": {
        "missing": "Scores are required",
        "dict_type": "Scores must be an object of category -> score",
    },
    "comment": {
        "missing": "Comment is required",
        "string_too_short": "Comment must not be empty",
        "string_too_long": "Comment must not exceed 4000 characters",
    },
    "general_assessment": {
        "string_too_long": "General assessment must not exceed 4000 characters",
    },
    "support_training_programs": {
        "bool": "Support for training programmes must be true or false",
    },
    "signature_date": {
        "date": "Signature date must be a valid date (YYYY-MM-DD)",
    },
    "section": {
        "int_parsing": "Section must be 1, 2 or 3",
    },
    "member_id": {
        "uuid_parsing": "Corps member ID must be a valid UUID format",
    },
}

DEFAULT_MESSAGES = {
    "missing": "Field '{field}' is required",
    "string_too_short": "Field '{field}' is too short",
    "string_too_long": "Field '{field}' is too long",
    "less_than_equal": "Field '{field}' exceeds maximum allowed value",
    "greater_than_equal": "Field '{field}' is below minimum allowed value",
    "uuid_parsing": "Field '{field}' must be a valid UUID",
    "string_type": "Field '{field}' must be a string",
    "int_type": "Field '{field}' must be an integer",
    "int_parsing": "Field '{field}' must be a valid integer",
    "enum": "Field '{field}' has an invalid value",
    "extra_forbidden": "Unknown field '{field}' is not allowed",
}


def get_validation_message(field: str, error_type: str) -> str:
    # Nested locations like "scores.appearance" fall back to their root field
    root = field.split(".")[0]
    if root in FIELD_MESSAGES:
        for key, message in FIELD_MESSAGES[root].items():
            if key in error_type:
                return message

    for key, template in DEFAULT_MESSAGES.items():
        if key in error_type:
            return template.format(field=field)

    return f"Invalid value for field '{field}'"


def _error_body(error_code: str, message: str, details=None) -> dict:
    return ErrorResponse(
        error_code=error_code,
        message=message,
        details=details,
        timestamp=datetime.now(timezone.utc),
    ).model_dump(mode="json")


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()

    if not errors:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=_error_body("VALIDATION_ERROR", "Request validation failed"),
        )

    err = errors[0]
    error_type = err.get("type", "")
    loc = err.get("loc", [])

    if "json_invalid" in error_type:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body("INVALID_REQUEST", "Malformed JSON request body"),
        )

    field = ".".join(str(part) for part in loc if part not in ("body", "path", "query", "header"))
    message = get_validation_message(field, error_type)

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_body(
            "VALIDATION_ERROR",
            message,
            {"field": field, "type": error_type} if field else None,
        ),
    )


async def repository_exception_handler(request: Request, exc: RepositoryException):
    logger.error("Repository failure on %s %s: %s", request.method, request.url.path, exc)
    if isinstance(exc, DatabaseConnectionException):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=_error_body("DATABASE_UNAVAILABLE", "The database is unavailable, please try again later"),
        )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("DATABASE_ERROR", "A database error occurred, please try again"),
    )


#  Exception Helpers

def raise_error(status_code: int, error_code: str, message: str, details=None):
    raise HTTPException(status_code=status_code, detail=_error_body(error_code, message, details))


def raise_validation_error(msg: str, details=None):
    raise_error(status.HTTP_422_UNPROCESSABLE_ENTITY, "VALIDATION_ERROR", msg, details)


def raise_not_authenticated():
    raise_error(status.HTTP_401_UNAUTHORIZED, "NOT_AUTHENTICATED", "Please log in to continue")


def raise_forbidden(msg: str = "Your role is not allowed to perform this action"):
    raise_error(status.HTTP_403_FORBIDDEN, "FORBIDDEN", msg)


def raise_member_not_found():
    raise_error(status.HTTP_404_NOT_FOUND, "CORP_MEMBER_NOT_FOUND", "Corps member not found")


def raise_conflict(error_code: str, msg: str):
    raise_error(status.HTTP_409_CONFLICT, error_code, msg)
