"""
Assessment Repository - Camp Evaluation API
camp_eval/repositories/assessment_repository.py

Commandant final assessments. One row per (corps member, commandant);
saving again overwrites it.
"""

from datetime import date, datetime, timezone
from typing import Any, Dict, List
from uuid import UUID

from camp_eval.repositories.base import BaseRepository

_COLUMNS = """
    CORP_MEMBER_ID, ASSESSED_BY_ID, ASSESSED_BY, GENERAL_ASSESSMENT,
    SUPPORT_TRAINING_PROGRAMS, SIGNATURE_DATE, UPDATED_AT
"""


class AssessmentRepository(BaseRepository):
    """Repository for commandant assessments."""

    TABLE_NAME = "COMMANDANT_ASSESSMENTS"

    def upsert(
        self,
        member_id: UUID,
        assessed_by_id: UUID,
        assessed_by: str,
        general_assessment: str,
        support_training_programs: bool,
        signature_date: date,
    ) -> Dict[str, Any]:
        """
        Create or replace the commandant's assessment of a corps member.

        Returns:
            Stored assessment dict
        """
        now = datetime.now(timezone.utc)
        sql = f"""
            MERGE INTO {self.TABLE_NAME} t
            USING (
                SELECT %s AS CORP_MEMBER_ID, %s AS ASSESSED_BY_ID, %s AS ASSESSED_BY,
                       %s AS GENERAL_ASSESSMENT, %s AS SUPPORT_TRAINING_PROGRAMS,
                       %s AS SIGNATURE_DATE, %s AS UPDATED_AT
            ) s
            ON t.CORP_MEMBER_ID = s.CORP_MEMBER_ID AND t.ASSESSED_BY_ID = s.ASSESSED_BY_ID
            WHEN MATCHED THEN UPDATE SET
                ASSESSED_BY = s.ASSESSED_BY,
                GENERAL_ASSESSMENT = s.GENERAL_ASSESSMENT,
                SUPPORT_TRAINING_PROGRAMS = s.SUPPORT_TRAINING_PROGRAMS,
                SIGNATURE_DATE = s.SIGNATURE_DATE,
                UPDATED_AT = s.UPDATED_AT
            WHEN NOT MATCHED THEN INSERT ({_COLUMNS})
                VALUES (s.CORP_MEMBER_ID, s.ASSESSED_BY_ID, s.ASSESSED_BY, s.GENERAL_ASSESSMENT,
                        s.SUPPORT_TRAINING_PROGRAMS, s.SIGNATURE_DATE, s.UPDATED_AT)
        """
        params = (
            str(member_id),
            str(assessed_by_id),
            assessed_by,
            general_assessment,
            support_training_programs,
            signature_date,
            now,
        )
        self.execute_query(sql, params, commit=True)
        return {
            "corp_member_id": member_id,
            "assessed_by_id": assessed_by_id,
            "assessed_by": assessed_by,
            "general_assessment": general_assessment,
            "support_training_programs": support_training_programs,
            "signature_date": signature_date,
            "updated_at": now,
        }

    def list_for_member(self, member_id: UUID) -> List[Dict[str, Any]]:
        sql = f"""
            SELECT {_COLUMNS}
            FROM {self.TABLE_NAME}
            WHERE CORP_MEMBER_ID = %s
            ORDER BY UPDATED_AT
        """
        rows = self.execute_query(sql, (str(member_id),), fetch_all=True) or []
        return [self._row_to_dict(r) for r in rows]

    def _row_to_dict(self, row: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "corp_member_id": UUID(row["CORP_MEMBER_ID"]),
            "assessed_by_id": UUID(row["ASSESSED_BY_ID"]),
            "assessed_by": row["ASSESSED_BY"],
            "general_assessment": row["GENERAL_ASSESSMENT"] or "",
            "support_training_programs": bool(row["SUPPORT_TRAINING_PROGRAMS"]),
            "signature_date": row["SIGNATURE_DATE"],
            "updated_at": self.normalize_timestamp(row["UPDATED_AT"]),
        }
