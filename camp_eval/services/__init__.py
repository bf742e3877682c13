"""
Services Package - Camp Evaluation API
camp_eval/services/__init__.py
"""

from camp_eval.services.session_store import SessionStore, get_session_store
from camp_eval.services.snowflake import get_snowflake_connection

__all__ = [
    "SessionStore",
    "get_session_store",
    "get_snowflake_connection",
]
