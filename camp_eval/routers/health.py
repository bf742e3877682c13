"""
Health Check Router - Camp Evaluation API
camp_eval/routers/health.py

Returns health status of Snowflake and Redis with real connection checks.
"""
from datetime import datetime, timezone
from typing import Dict

import redis
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from snowflake.connector.errors import Error as SnowflakeError

from camp_eval.config import settings
from camp_eval.services.snowflake import get_snowflake_connection

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    dependencies: Dict[str, str]


def _short(error: Exception) -> str:
    text = str(error)
    return text[:100] + "..." if len(text) > 100 else text


#  Dependency Health Checks


async def check_snowflake() -> str:
    """Check Snowflake connection health."""
    missing = [
        name
        for name in ("SNOWFLAKE_ACCOUNT", "SNOWFLAKE_USER", "SNOWFLAKE_PASSWORD")
        if not getattr(settings, name)
    ]
    if missing:
        return f"unhealthy: Missing settings: {', '.join(missing)}"

    try:
        conn = get_snowflake_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT CURRENT_USER()")
            user = cursor.fetchone()[0]
            cursor.close()
        finally:
            conn.close()
        return f"healthy (User: {user})"
    except SnowflakeError as e:
        return f"unhealthy: {_short(e)}"


async def check_redis() -> str:
    """Check Redis (session store) connection health."""
    try:
        client = redis.from_url(settings.REDIS_URL, socket_connect_timeout=5)
        client.ping()
        client.close()
        return "healthy"
    except redis.RedisError as e:
        return f"unhealthy: {_short(e)}"


#  Main Health Check Route


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={
        200: {"description": "All dependencies healthy"},
        503: {"description": "One or more dependencies unhealthy"},
    },
    summary="Health check",
)
async def health_check():
    dependencies = {
        "snowflake": await check_snowflake(),
        "redis": await check_redis(),
    }
    all_healthy = all(v.startswith("healthy") for v in dependencies.values())

    response = HealthResponse(
        status="healthy" if all_healthy else "degraded",
        timestamp=datetime.now(timezone.utc),
        version=settings.APP_VERSION,
        dependencies=dependencies,
    )
    if all_healthy:
        return response
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=response.model_dump(mode="json"),
    )
