# tests/conftest.py

"""
Pytest Fixtures - Shared test configurations and data for models and APIs

The API runs against in-memory repositories and an in-memory session store,
swapped in through app.dependency_overrides, so no Snowflake or Redis is needed.

SEED STAFF (username / password / role / platoon):
- commandant / command123 / commandant   / -
- soldier    / soldier123 / soldier      / -
- pi3        / pi123      / platoon_instructor / 3
- mow3       / mow123     / man_o_war    / 3
- squad      / squad123   / squad_instructor   / -
"""

import secrets
from datetime import datetime, timezone
from typing import Dict, Optional
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient

from camp_eval.core.dependencies import (
    get_assessment_repository,
    get_comment_repository,
    get_corp_member_repository,
    get_rating_repository,
    get_staff_repository,
)
from camp_eval.main import app
from camp_eval.models.enumerations import MemberStatus, Role
from camp_eval.models.staff import SessionContext, StaffUserCreate
from camp_eval.services.session_store import get_session_store


# =============================================================================
# IN-MEMORY COLLABORATORS
# =============================================================================

class InMemoryCorpMemberRepository:
    def __init__(self):
        self.rows: Dict[UUID, dict] = {}

    def create(self, payload):
        member_id = uuid4()
        self.rows[member_id] = {
            **payload.model_dump(),
            "id": member_id,
            "created_at": datetime.now(timezone.utc),
        }
        return self.get_by_id(member_id)

    def get_by_id(self, member_id):
        row = self.rows.get(member_id)
        return dict(row) if row else None

    def list_all(self):
        return [dict(r) for r in sorted(self.rows.values(), key=lambda r: (r["platoon"], r["surname"]))]

    def exists(self, member_id):
        return member_id in self.rows

    def registration_exists(self, state_code, call_up_no):
        return any(
            r["state_code"] == state_code or r["call_up_no"] == call_up_no
            for r in self.rows.values()
        )

    def set_status(self, member_id, status: MemberStatus):
        self.rows[member_id]["status"] = status


class InMemoryRatingRepository:
    """Rating rows plus the member status flag, written together or not at all."""

    def __init__(self, member_repo: InMemoryCorpMemberRepository):
        self.member_repo = member_repo
        self.rows: Dict[tuple, dict] = {}

    def upsert_and_mark_rated(self, record):
        row = {
            "corp_member_id": record.corp_member_id,
            "rater_role": record.rater_role,
            "rated_by": record.rated_by,
            "scores": dict(record.scores),
            "total_score": record.total_score,
            "max_score": record.max_score,
            "is_complete": record.is_complete,
            "rated_at": record.rated_at,
        }
        before = dict(self.rows)
        try:
            self.rows[(record.corp_member_id, record.rater_role)] = row
            self.member_repo.set_status(record.corp_member_id, MemberStatus.RATED)
        except Exception:
            self.rows = before
            raise
        return dict(row)

    def list_for_member(self, member_id):
        return [dict(r) for (m, _), r in self.rows.items() if m == member_id]

    def list_all(self):
        return [dict(r) for r in self.rows.values()]


class InMemoryCommentRepository:
    def __init__(self):
        self.rows: Dict[tuple, dict] = {}

    def upsert(self, member_id, commenter_role, comment, commented_by):
        row = {
            "corp_member_id": member_id,
            "commenter_role": commenter_role,
            "comment": comment,
            "commented_by": commented_by,
            "updated_at": datetime.now(timezone.utc),
        }
        self.rows[(member_id, commenter_role)] = row
        return dict(row)

    def list_for_member(self, member_id):
        return [dict(r) for (m, _), r in self.rows.items() if m == member_id]


class InMemoryAssessmentRepository:
    def __init__(self):
        self.rows: Dict[tuple, dict] = {}

    def upsert(
        self,
        member_id,
        assessed_by_id,
        assessed_by,
        general_assessment,
        support_training_programs,
        signature_date,
    ):
        row = {
            "corp_member_id": member_id,
            "assessed_by_id": assessed_by_id,
            "assessed_by": assessed_by,
            "general_assessment": general_assessment,
            "support_training_programs": support_training_programs,
            "signature_date": signature_date,
            "updated_at": datetime.now(timezone.utc),
        }
        self.rows[(member_id, assessed_by_id)] = row
        return dict(row)

    def list_for_member(self, member_id):
        return [dict(r) for (m, _), r in self.rows.items() if m == member_id]


class InMemoryStaffRepository:
    def __init__(self):
        self.rows: Dict[UUID, dict] = {}

    def _public(self, row):
        return {k: v for k, v in row.items() if k != "password"}

    def authenticate(self, username, password, role):
        for row in self.rows.values():
            if (
                row["username"] == username
                and row["password"] == password
                and row["role"] == role
                and row["is_active"]
            ):
                return self._public(row)
        return None

    def create(self, payload: StaffUserCreate):
        user_id = uuid4()
        self.rows[user_id] = {**payload.model_dump(), "id": user_id, "is_active": True}
        return self.get_by_id(user_id)

    def get_by_id(self, user_id):
        row = self.rows.get(user_id)
        return self._public(row) if row else None

    def username_exists(self, username):
        return any(r["username"] == username for r in self.rows.values())

    def list_staff(self):
        rows = [r for r in self.rows.values() if r["role"] != Role.COMMANDANT]
        return [self._public(r) for r in sorted(rows, key=lambda r: r["full_name"])]

    def delete(self, user_id):
        return self.rows.pop(user_id, None) is not None


class InMemorySessionStore:
    def __init__(self):
        self.sessions: Dict[str, SessionContext] = {}

    def create(self, user):
        session = SessionContext(
            token=secrets.token_urlsafe(16),
            user_id=user["id"],
            username=user["username"],
            full_name=user["full_name"],
            role=user["role"],
            platoon=user.get("platoon"),
        )
        self.sessions[session.token] = session
        return session

    def get(self, token) -> Optional[SessionContext]:
        return self.sessions.get(token)

    def invalidate(self, token):
        return self.sessions.pop(token, None) is not None


SEED_STAFF = [
    ("commandant", "command123", "Col. Bello Ahmed", Role.COMMANDANT, None),
    ("soldier", "soldier123", "Sgt. Musa Ibrahim", Role.SOLDIER, None),
    ("pi3", "pi123", "Mrs. Funke Ade", Role.PLATOON_INSTRUCTOR, 3),
    ("mow3", "mow123", "Cpl. Chidi Obi", Role.MAN_O_WAR, 3),
    ("squad", "squad123", "Mr. Tunde Bakare", Role.SQUAD_INSTRUCTOR, None),
]


# =============================================================================
# REPOSITORY / STORE FIXTURES
# =============================================================================

@pytest.fixture
def member_repo():
    return InMemoryCorpMemberRepository()


@pytest.fixture
def rating_repo(member_repo):
    return InMemoryRatingRepository(member_repo)


@pytest.fixture
def comment_repo():
    return InMemoryCommentRepository()


@pytest.fixture
def assessment_repo():
    return InMemoryAssessmentRepository()


@pytest.fixture
def staff_repo():
    repo = InMemoryStaffRepository()
    for username, password, full_name, role, platoon in SEED_STAFF:
        repo.create(
            StaffUserCreate(
                username=username,
                password=password,
                full_name=full_name,
                role=role,
                platoon=platoon,
            )
        )
    return repo


@pytest.fixture
def session_store():
    return InMemorySessionStore()


# =============================================================================
# FASTAPI TEST CLIENT FIXTURE
# =============================================================================

@pytest.fixture
def client(member_repo, rating_repo, comment_repo, assessment_repo, staff_repo, session_store):
    """TestClient with every external collaborator replaced by an in-memory fake."""
    app.dependency_overrides[get_corp_member_repository] = lambda: member_repo
    app.dependency_overrides[get_rating_repository] = lambda: rating_repo
    app.dependency_overrides[get_comment_repository] = lambda: comment_repo
    app.dependency_overrides[get_assessment_repository] = lambda: assessment_repo
    app.dependency_overrides[get_staff_repository] = lambda: staff_repo
    app.dependency_overrides[get_session_store] = lambda: session_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def login(client):
    """Log in as a seed staff user and return the auth header."""

    def _login(username: str) -> Dict[str, str]:
        password, role = next((p, r.value) for u, p, _, r, _ in SEED_STAFF if u == username)
        response = client.post(
            "/api/v1/auth/login",
            json={"username": username, "password": password, "role": role},
        )
        assert response.status_code == 200, response.text
        return {"X-Session-Token": response.json()["token"]}

    return _login


# =============================================================================
# REGISTRATION FIXTURES
# =============================================================================

@pytest.fixture
def valid_registration_data():
    """A complete registration that passes all three sections."""
    return {
        "camp_state": "Lagos",
        "state_code": "LA/25C/0001",
        "platoon": 3,
        "call_up_no": "NYSC/12345",
        "surname": "Adeyemi",
        "other_names": "Tolu Grace",
        "change_of_name": "",
        "state_of_origin": "Oyo",
        "batch": "Batch A",
        "phone": "+2348012345678",
        "qualification": "B.Sc",
        "specialization": "Computer Science",
        "institutions": [
            {"name": "University of Lagos", "year": "2019-2023"},
            {"name": "", "year": ""},
        ],
    }


@pytest.fixture
def registered_member(client, valid_registration_data):
    """Register the valid form and return the created record."""
    response = client.post("/api/v1/registrations", json=valid_registration_data)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def camp_activity_scores():
    """Platoon instructor / Man O'War scores totalling 30."""
    return {
        "appearance": 10,
        "punctuality": 8,
        "discipline": 6,
        "participation": 4,
        "general_conduct": 2,
    }


@pytest.fixture
def sample_uuid():
    """A random UUID that matches no stored record."""
    return str(uuid4())
