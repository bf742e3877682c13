"""
Staff Router - Camp Evaluation API
camp_eval/routers/staff.py

Commandant-only management of staff accounts.
"""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from camp_eval.core.dependencies import get_staff_repository, require_roles
from camp_eval.core.errors import raise_conflict, raise_error
from camp_eval.core.exceptions import DuplicateEntityException
from camp_eval.models.corp_member import ErrorResponse
from camp_eval.models.enumerations import Role
from camp_eval.models.staff import SessionContext, StaffUserCreate, StaffUserResponse
from camp_eval.repositories.staff_repository import StaffRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/staff", tags=["Staff"])

require_commandant = require_roles(Role.COMMANDANT)


def raise_staff_not_found():
    raise_error(status.HTTP_404_NOT_FOUND, "STAFF_NOT_FOUND", "Staff user not found")


@router.get(
    "",
    response_model=List[StaffUserResponse],
    summary="List staff accounts",
)
async def list_staff(
    session: SessionContext = Depends(require_commandant),
    repo: StaffRepository = Depends(get_staff_repository),
) -> List[StaffUserResponse]:
    return [StaffUserResponse(**u) for u in repo.list_staff()]


@router.post(
    "",
    response_model=StaffUserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse, "description": "Username already taken"}},
    summary="Add a staff account",
)
async def create_staff(
    payload: StaffUserCreate,
    session: SessionContext = Depends(require_commandant),
    repo: StaffRepository = Depends(get_staff_repository),
) -> StaffUserResponse:
    if repo.username_exists(payload.username):
        raise_conflict("USERNAME_TAKEN", "Username already exists")
    try:
        user = repo.create(payload)
    except DuplicateEntityException:
        raise_conflict("USERNAME_TAKEN", "Username already exists")

    logger.info("Staff user %s (%s) added by %s", payload.username, payload.role.value, session.username)
    return StaffUserResponse(**user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse, "description": "Staff user not found"}},
    summary="Remove a staff account",
)
async def delete_staff(
    user_id: UUID,
    session: SessionContext = Depends(require_commandant),
    repo: StaffRepository = Depends(get_staff_repository),
) -> None:
    if user_id == session.user_id:
        raise_error(status.HTTP_409_CONFLICT, "CANNOT_DELETE_SELF", "You cannot delete your own account")
    if not repo.delete(user_id):
        raise_staff_not_found()
    logger.info("Staff user %s removed by %s", user_id, session.username)
