"""
Shared fixtures: an isolated store, a recording notifier and an HTTP client
"""
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from faculty_eval import state
from faculty_eval.api.deps import get_notifier
from faculty_eval.core.roles import Role
from faculty_eval.core.store import DocumentStore
from faculty_eval.core.workflow import ScoringWorkflow
from faculty_eval.main import app
from faculty_eval.models import QuizQuestion
from faculty_eval.services import question_bank
from faculty_eval.services import users as user_registry


FIXED_NOW = datetime(2025, 1, 15, 10, 30, tzinfo=timezone.utc)

SECTIONS = ["Pedagogy", "Technology", "Design", "Demonstration", "Ethics"]


class RecordingNotifier:
    """Keeps every published event for assertions"""

    def __init__(self):
        self.events = []

    async def publish(self, room, event, payload):
        self.events.append((room, event, payload))


def build_bank(count=25, marks=2):
    """count questions spread over five sections; correct answer is always index 1"""
    return [
        QuizQuestion(
            id=f"q{i}",
            section=SECTIONS[(i - 1) * len(SECTIONS) // count],
            question=f"Question {i}?",
            options=["a", "b", "c", "d"],
            correct_answer=1,
            marks=marks,
        )
        for i in range(1, count + 1)
    ]


def answers_with_correct(count_correct, total=25):
    """Answer the first count_correct questions right and the rest wrong"""
    return {f"q{i}": 1 if i <= count_correct else 0 for i in range(1, total + 1)}


@pytest.fixture
def store():
    store = DocumentStore()
    for question in build_bank():
        question_bank.add_question(store, question)
    return store


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def workflow(store, notifier):
    return ScoringWorkflow(store, notifier, clock=lambda: FIXED_NOW)


@pytest.fixture
def participant(store):
    return user_registry.create_user(
        store, "Dr. Faculty One", "faculty1@faculty.com", "password123",
        employee_id="FAC001", designation="Professor", department="General", batch="Batch A",
    )


@pytest.fixture
def admin(store):
    return user_registry.create_user(
        store, "Admin User", "admin@faculty.com", "admin123", role=Role.ADMIN, employee_id="ADM001",
    )


@pytest.fixture
def super_admin(store):
    return user_registry.create_user(
        store, "Super Admin", "super@faculty.com", "admin123", role=Role.SUPER_ADMIN, employee_id="SUPER001",
    )


@pytest.fixture
def client(store, notifier, monkeypatch):
    """HTTP client bound to the fixture store and recording notifier"""
    monkeypatch.setattr(state, "STORE", store)
    app.dependency_overrides[get_notifier] = lambda: notifier
    yield TestClient(app)
    app.dependency_overrides.clear()


def login(client, email, password):
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}
