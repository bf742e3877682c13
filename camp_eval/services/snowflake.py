"""
Snowflake connection factory - Camp Evaluation API
camp_eval/services/snowflake.py
"""

import snowflake.connector

from camp_eval.config import settings


def get_snowflake_connection() -> snowflake.connector.SnowflakeConnection:
    """
    Open a Snowflake connection from settings.
    Used by repositories; the caller closes it.
    """
    password = settings.SNOWFLAKE_PASSWORD
    return snowflake.connector.connect(
        account=settings.SNOWFLAKE_ACCOUNT,
        user=settings.SNOWFLAKE_USER,
        password=password.get_secret_value() if password else None,
        warehouse=settings.SNOWFLAKE_WAREHOUSE,
        database=settings.SNOWFLAKE_DATABASE,
        schema=settings.SNOWFLAKE_SCHEMA,
        role=settings.SNOWFLAKE_ROLE,
    )
