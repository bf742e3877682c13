"""
Corps Member Repository - Camp Evaluation API
camp_eval/repositories/corp_member_repository.py

Data access layer for registered corps members.
"""

import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from camp_eval.models.corp_member import CorpMemberCreate
from camp_eval.repositories.base import BaseRepository

_COLUMNS = """
    ID, CAMP_STATE, STATE_CODE, PLATOON, CALL_UP_NO, SURNAME, OTHER_NAMES,
    CHANGE_OF_NAME, STATE_OF_ORIGIN, STATE_OF_DEPLOYMENT, BATCH, PHONE,
    QUALIFICATION, SPECIALIZATION, INSTITUTIONS, STATUS, CREATED_AT
"""


class CorpMemberRepository(BaseRepository):
    """Repository for corps member records."""

    TABLE_NAME = "CORP_MEMBERS"

    def create(self, payload: CorpMemberCreate) -> Dict[str, Any]:
        """
        Insert a validated registration.

        Args:
            payload: Persistence payload from SubmissionValidator.build_submission

        Returns:
            Created corps member dict
        """
        member_id = uuid4()
        now = datetime.now(timezone.utc)

        # PARSE_JSON is not allowed inside VALUES, hence INSERT ... SELECT
        sql = f"""
            INSERT INTO {self.TABLE_NAME} ({_COLUMNS})
            SELECT %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s,
                   PARSE_JSON(%s), %s, %s
        """
        params = (
            str(member_id),
            payload.camp_state.value,
            payload.state_code,
            payload.platoon,
            payload.call_up_no,
            payload.surname,
            payload.other_names,
            payload.change_of_name,
            payload.state_of_origin.value,
            payload.state_of_deployment.value,
            payload.batch.value,
            payload.phone,
            payload.qualification,
            payload.specialization,
            json.dumps([i.model_dump() for i in payload.institutions]),
            payload.status.value,
            now,
        )
        self.execute_query(sql, params, commit=True)
        return self.get_by_id(member_id)

    def get_by_id(self, member_id: UUID) -> Optional[Dict[str, Any]]:
        sql = f"SELECT {_COLUMNS} FROM {self.TABLE_NAME} WHERE ID = %s"
        row = self.execute_query(sql, (str(member_id),), fetch_one=True)
        if not row:
            return None
        return self._row_to_dict(row)

    def list_all(self) -> List[Dict[str, Any]]:
        """All corps members ordered by platoon then surname."""
        sql = f"SELECT {_COLUMNS} FROM {self.TABLE_NAME} ORDER BY PLATOON, SURNAME"
        rows = self.execute_query(sql, fetch_all=True) or []
        return [self._row_to_dict(r) for r in rows]

    def exists(self, member_id: UUID) -> bool:
        sql = f"SELECT 1 FROM {self.TABLE_NAME} WHERE ID = %s"
        return self.execute_query(sql, (str(member_id),), fetch_one=True) is not None

    def registration_exists(self, state_code: str, call_up_no: str) -> bool:
        """True when either the state code or the call-up number is already registered."""
        sql = f"SELECT 1 FROM {self.TABLE_NAME} WHERE STATE_CODE = %s OR CALL_UP_NO = %s LIMIT 1"
        return self.execute_query(sql, (state_code, call_up_no), fetch_one=True) is not None

    def _row_to_dict(self, row: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "id": UUID(row["ID"]),
            "camp_state": row["CAMP_STATE"],
            "state_code": row["STATE_CODE"],
            "platoon": int(row["PLATOON"]),
            "call_up_no": row["CALL_UP_NO"],
            "surname": row["SURNAME"],
            "other_names": row["OTHER_NAMES"],
            "change_of_name": row["CHANGE_OF_NAME"],
            "state_of_origin": row["STATE_OF_ORIGIN"],
            "state_of_deployment": row["STATE_OF_DEPLOYMENT"],
            "batch": row["BATCH"],
            "phone": row["PHONE"],
            "qualification": row["QUALIFICATION"],
            "specialization": row["SPECIALIZATION"],
            "institutions": self.parse_variant(row["INSTITUTIONS"], default=[]),
            "status": row["STATUS"],
            "created_at": self.normalize_timestamp(row["CREATED_AT"]),
        }
