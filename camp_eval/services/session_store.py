"""
Session Store - Camp Evaluation API
camp_eval/services/session_store.py

Redis-backed store for logged-in staff sessions. A session is created at
login, read on every authenticated request and removed at logout.
"""
import secrets
from functools import lru_cache
from typing import Any, Dict, Optional

import redis
import structlog

from camp_eval.config import settings
from camp_eval.models.staff import SessionContext

logger = structlog.get_logger()

KEY_PREFIX = "session:"


class SessionStore:
    def __init__(self, ttl_seconds: Optional[int] = None):
        self.client = redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=5,
        )
        self.ttl_seconds = ttl_seconds or settings.SESSION_TTL_SECONDS

    @staticmethod
    def key(token: str) -> str:
        return f"{KEY_PREFIX}{token}"

    def create(self, user: Dict[str, Any]) -> SessionContext:
        """Open a session for an authenticated staff user dict."""
        session = SessionContext(
            token=secrets.token_urlsafe(32),
            user_id=user["id"],
            username=user["username"],
            full_name=user["full_name"],
            role=user["role"],
            platoon=user.get("platoon"),
        )
        self.client.setex(self.key(session.token), self.ttl_seconds, session.model_dump_json())
        logger.info("session_created", username=session.username, role=session.role.value)
        return session

    def get(self, token: str) -> Optional[SessionContext]:
        data = self.client.get(self.key(token))
        if data:
            return SessionContext.model_validate_json(data)
        return None

    def invalidate(self, token: str) -> bool:
        """Remove a session. Returns False when it was already gone."""
        removed = bool(self.client.delete(self.key(token)))
        if removed:
            logger.info("session_invalidated")
        return removed


# ---- FastAPI dependency singleton ----
@lru_cache
def get_session_store() -> SessionStore:
    return SessionStore()
