"""
Auth Router - Camp Evaluation API
camp_eval/routers/auth.py

Staff login and logout. Login is the only place a SessionContext is built.
"""

import logging

from fastapi import APIRouter, Depends, status

from camp_eval.core.dependencies import get_current_session, get_staff_repository
from camp_eval.core.errors import raise_error
from camp_eval.models.corp_member import ErrorResponse
from camp_eval.models.staff import LoginRequest, SessionContext
from camp_eval.repositories.staff_repository import StaffRepository
from camp_eval.services.session_store import SessionStore, get_session_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["Auth"])


@router.post(
    "/login",
    response_model=SessionContext,
    responses={401: {"model": ErrorResponse, "description": "Invalid credentials"}},
    summary="Log in as a staff member",
)
async def login(
    payload: LoginRequest,
    staff_repo: StaffRepository = Depends(get_staff_repository),
    store: SessionStore = Depends(get_session_store),
) -> SessionContext:
    user = staff_repo.authenticate(payload.username, payload.password, payload.role)
    if user is None:
        logger.info("Failed login for %s as %s", payload.username, payload.role.value)
        raise_error(status.HTTP_401_UNAUTHORIZED, "INVALID_CREDENTIALS", "Invalid username or password")
    return store.create(user)


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Log out and invalidate the session",
)
async def logout(
    session: SessionContext = Depends(get_current_session),
    store: SessionStore = Depends(get_session_store),
) -> None:
    store.invalidate(session.token)


@router.get(
    "/me",
    response_model=SessionContext,
    summary="Current session",
)
async def me(session: SessionContext = Depends(get_current_session)) -> SessionContext:
    return session
