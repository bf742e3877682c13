"""
Comment Repository - Camp Evaluation API
camp_eval/repositories/comment_repository.py

At most one free-text comment per (corps member, commenter role).
"""

from datetime import datetime, timezone
from typing import Any, Dict, List
from uuid import UUID

from camp_eval.models.enumerations import Role
from camp_eval.repositories.base import BaseRepository


class CommentRepository(BaseRepository):
    """Repository for commandant and soldier comments."""

    TABLE_NAME = "MEMBER_COMMENTS"

    def upsert(
        self,
        member_id: UUID,
        commenter_role: Role,
        comment: str,
        commented_by: str,
    ) -> Dict[str, Any]:
        now = datetime.now(timezone.utc)
        sql = f"""
            MERGE INTO {self.TABLE_NAME} t
            USING (
                SELECT %s AS CORP_MEMBER_ID, %s AS COMMENTER_ROLE, %s AS COMMENT,
                       %s AS COMMENTED_BY, %s AS UPDATED_AT
            ) s
            ON t.CORP_MEMBER_ID = s.CORP_MEMBER_ID AND t.COMMENTER_ROLE = s.COMMENTER_ROLE
            WHEN MATCHED THEN UPDATE SET
                COMMENT = s.COMMENT,
                COMMENTED_BY = s.COMMENTED_BY,
                UPDATED_AT = s.UPDATED_AT
            WHEN NOT MATCHED THEN INSERT (CORP_MEMBER_ID, COMMENTER_ROLE, COMMENT, COMMENTED_BY, UPDATED_AT)
                VALUES (s.CORP_MEMBER_ID, s.COMMENTER_ROLE, s.COMMENT, s.COMMENTED_BY, s.UPDATED_AT)
        """
        params = (str(member_id), commenter_role.value, comment, commented_by, now)
        self.execute_query(sql, params, commit=True)
        return {
            "corp_member_id": member_id,
            "commenter_role": commenter_role,
            "comment": comment,
            "commented_by": commented_by,
            "updated_at": now,
        }

    def list_for_member(self, member_id: UUID) -> List[Dict[str, Any]]:
        sql = f"""
            SELECT CORP_MEMBER_ID, COMMENTER_ROLE, COMMENT, COMMENTED_BY, UPDATED_AT
            FROM {self.TABLE_NAME}
            WHERE CORP_MEMBER_ID = %s
            ORDER BY COMMENTER_ROLE
        """
        rows = self.execute_query(sql, (str(member_id),), fetch_all=True) or []
        return [
            {
                "corp_member_id": UUID(r["CORP_MEMBER_ID"]),
                "commenter_role": Role(r["COMMENTER_ROLE"]),
                "comment": r["COMMENT"],
                "commented_by": r["COMMENTED_BY"],
                "updated_at": self.normalize_timestamp(r["UPDATED_AT"]),
            }
            for r in rows
        ]
