"""
Staff Repository - Camp Evaluation API
camp_eval/repositories/staff_repository.py

Staff accounts: instructors, Man O'War, soldiers and the commandant.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from camp_eval.models.enumerations import Role
from camp_eval.models.staff import StaffUserCreate
from camp_eval.repositories.base import BaseRepository

_PUBLIC_COLUMNS = "ID, USERNAME, FULL_NAME, ROLE, PLATOON, IS_ACTIVE"


class StaffRepository(BaseRepository):
    """Repository for staff user accounts."""

    TABLE_NAME = "USERS"

    def authenticate(self, username: str, password: str, role: Role) -> Optional[Dict[str, Any]]:
        """
        Look up an active account matching username, password and role.

        Returns:
            Staff user dict, or None when nothing matches
        """
        sql = f"""
            SELECT {_PUBLIC_COLUMNS}
            FROM {self.TABLE_NAME}
            WHERE USERNAME = %s AND PASSWORD = %s AND ROLE = %s AND IS_ACTIVE = TRUE
        """
        row = self.execute_query(sql, (username, password, role.value), fetch_one=True)
        return self._row_to_dict(row) if row else None

    def create(self, payload: StaffUserCreate) -> Dict[str, Any]:
        user_id = uuid4()
        sql = f"""
            INSERT INTO {self.TABLE_NAME}
                (ID, USERNAME, PASSWORD, FULL_NAME, ROLE, PLATOON, IS_ACTIVE, CREATED_AT)
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
        """
        params = (
            str(user_id),
            payload.username,
            payload.password,
            payload.full_name,
            payload.role.value,
            payload.platoon,
            True,
            datetime.now(timezone.utc),
        )
        self.execute_query(sql, params, commit=True)
        return self.get_by_id(user_id)

    def get_by_id(self, user_id: UUID) -> Optional[Dict[str, Any]]:
        sql = f"SELECT {_PUBLIC_COLUMNS} FROM {self.TABLE_NAME} WHERE ID = %s"
        row = self.execute_query(sql, (str(user_id),), fetch_one=True)
        return self._row_to_dict(row) if row else None

    def username_exists(self, username: str) -> bool:
        sql = f"SELECT 1 FROM {self.TABLE_NAME} WHERE USERNAME = %s"
        return self.execute_query(sql, (username,), fetch_one=True) is not None

    def list_staff(self) -> List[Dict[str, Any]]:
        """Every account except the commandant's, by full name."""
        sql = f"""
            SELECT {_PUBLIC_COLUMNS}
            FROM {self.TABLE_NAME}
            WHERE ROLE <> %s
            ORDER BY FULL_NAME
        """
        rows = self.execute_query(sql, (Role.COMMANDANT.value,), fetch_all=True) or []
        return [self._row_to_dict(r) for r in rows]

    def delete(self, user_id: UUID) -> bool:
        sql = f"DELETE FROM {self.TABLE_NAME} WHERE ID = %s"
        return bool(self.execute_query(sql, (str(user_id),), commit=True))

    def _row_to_dict(self, row: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "id": UUID(row["ID"]),
            "username": row["USERNAME"],
            "full_name": row["FULL_NAME"],
            "role": Role(row["ROLE"]),
            "platoon": int(row["PLATOON"]) if row["PLATOON"] is not None else None,
            "is_active": bool(row["IS_ACTIVE"]),
        }
