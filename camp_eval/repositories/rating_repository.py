"""
Rating Repository - Camp Evaluation API
camp_eval/repositories/rating_repository.py

One row per (corps member, rater role). Re-submitting overwrites the row.
"""

import json
from typing import Any, Dict, List
from uuid import UUID

from camp_eval.models.enumerations import MemberStatus, Role
from camp_eval.repositories.base import BaseRepository
from camp_eval.scoring.rating_aggregator import RatingRecord

_COLUMNS = """
    CORP_MEMBER_ID, RATER_ROLE, RATED_BY, SCORES, TOTAL_SCORE,
    MAX_SCORE, IS_COMPLETE, RATED_AT
"""


class RatingRepository(BaseRepository):
    """Repository for committed category ratings."""

    TABLE_NAME = "RATINGS"
    MEMBER_TABLE_NAME = "CORP_MEMBERS"

    def upsert_and_mark_rated(self, record: RatingRecord) -> Dict[str, Any]:
        """
        Write a committed rating and flag the corps member as rated.

        Replaces any earlier rating from the same role. Both statements run in
        one transaction: if either fails, neither is kept.

        Args:
            record: Finalized record from RatingSheet.commit

        Returns:
            Stored rating dict
        """
        merge_sql = f"""
            MERGE INTO {self.TABLE_NAME} t
            USING (
                SELECT %s AS CORP_MEMBER_ID, %s AS RATER_ROLE, %s AS RATED_BY,
                       PARSE_JSON(%s) AS SCORES, %s AS TOTAL_SCORE, %s AS MAX_SCORE,
                       %s AS IS_COMPLETE, %s AS RATED_AT
            ) s
            ON t.CORP_MEMBER_ID = s.CORP_MEMBER_ID AND t.RATER_ROLE = s.RATER_ROLE
            WHEN MATCHED THEN UPDATE SET
                RATED_BY = s.RATED_BY,
                SCORES = s.SCORES,
                TOTAL_SCORE = s.TOTAL_SCORE,
                MAX_SCORE = s.MAX_SCORE,
                IS_COMPLETE = s.IS_COMPLETE,
                RATED_AT = s.RATED_AT
            WHEN NOT MATCHED THEN INSERT ({_COLUMNS})
                VALUES (s.CORP_MEMBER_ID, s.RATER_ROLE, s.RATED_BY, s.SCORES,
                        s.TOTAL_SCORE, s.MAX_SCORE, s.IS_COMPLETE, s.RATED_AT)
        """
        params = (
            str(record.corp_member_id),
            record.rater_role.value,
            record.rated_by,
            json.dumps(dict(record.scores)),
            record.total_score,
            record.max_score,
            record.is_complete,
            record.rated_at,
        )
        status_sql = f"UPDATE {self.MEMBER_TABLE_NAME} SET STATUS = %s WHERE ID = %s"

        with self.transaction() as cursor:
            cursor.execute(merge_sql, params)
            cursor.execute(status_sql, (MemberStatus.RATED.value, str(record.corp_member_id)))
        return self._record_to_dict(record)

    def list_for_member(self, member_id: UUID) -> List[Dict[str, Any]]:
        sql = f"SELECT {_COLUMNS} FROM {self.TABLE_NAME} WHERE CORP_MEMBER_ID = %s ORDER BY RATER_ROLE"
        rows = self.execute_query(sql, (str(member_id),), fetch_all=True) or []
        return [self._row_to_dict(r) for r in rows]

    def list_all(self) -> List[Dict[str, Any]]:
        sql = f"SELECT {_COLUMNS} FROM {self.TABLE_NAME}"
        rows = self.execute_query(sql, fetch_all=True) or []
        return [self._row_to_dict(r) for r in rows]

    def _record_to_dict(self, record: RatingRecord) -> Dict[str, Any]:
        return {
            "corp_member_id": record.corp_member_id,
            "rater_role": record.rater_role,
            "rated_by": record.rated_by,
            "scores": dict(record.scores),
            "total_score": record.total_score,
            "max_score": record.max_score,
            "is_complete": record.is_complete,
            "rated_at": record.rated_at,
        }

    def _row_to_dict(self, row: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "corp_member_id": UUID(row["CORP_MEMBER_ID"]),
            "rater_role": Role(row["RATER_ROLE"]),
            "rated_by": row["RATED_BY"],
            "scores": self.parse_variant(row["SCORES"], default={}),
            "total_score": int(row["TOTAL_SCORE"]),
            "max_score": int(row["MAX_SCORE"]),
            "is_complete": bool(row["IS_COMPLETE"]),
            "rated_at": self.normalize_timestamp(row["RATED_AT"]),
        }
