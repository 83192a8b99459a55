"""
Integration tests for the REST API.

The app is built around an in-memory repository and exercised with
FastAPI's TestClient.
"""

import pytest
from fastapi.testclient import TestClient

from quizpulse.api.main import create_app
from quizpulse.config import Settings
from quizpulse.service import QuizService
from quizpulse.storage import MemoryRepository


@pytest.fixture
def service(safety_quiz):
    return QuizService(MemoryRepository([safety_quiz]))


@pytest.fixture
def client(service):
    app = create_app(Settings(storage_backend="memory"), service=service)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def guarded_client(service):
    app = create_app(Settings(storage_backend="memory", demo_guard_enabled=True, admin_pin="4321"), service=service)
    with TestClient(app) as test_client:
        yield test_client


PERFECT = {
    "answers": [
        {"questionId": "q1", "selectedOptionIds": ["o2"]},
        {"questionId": "q2", "selectedOptionIds": ["m1", "m3"]},
        {"questionId": "q3", "selectedOptionIds": [], "textAnswer": " EVACUATE "},
    ]
}


class TestQuizRoutes:

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "ok"

    def test_list_quizzes(self, client):
        response = client.get("/api/quizzes")
        assert response.status_code == 200
        (quiz,) = response.json()
        assert quiz["id"] == "quiz-safety"
        assert quiz["createdAt"] == "2024-01-01T00:00:00+00:00"

    def test_get_quiz(self, client):
        response = client.get("/api/quizzes/quiz-safety")
        assert response.status_code == 200
        assert response.json()["questions"][2]["type"] == "TEXT"

    def test_get_missing_quiz(self, client):
        assert client.get("/api/quizzes/nope").status_code == 404

    def test_upsert_quiz(self, client):
        doc = {
            "id": "quiz_new",
            "title": "New quiz",
            "subtitle": "",
            "createdAt": "2024-03-03T00:00:00Z",
            "questions": [],
        }
        response = client.post("/api/quizzes", json=doc)
        assert response.json() == {"success": True}
        assert client.get("/api/quizzes/quiz_new").json()["title"] == "New quiz"

    def test_untitled_quiz_rejected(self, client):
        response = client.post("/api/quizzes", json={"id": "x", "title": "  "})
        assert response.status_code == 422

    def test_unknown_question_type_rejected(self, client):
        doc = {"id": "x", "title": "T", "questions": [{"id": "q", "type": "ESSAY"}]}
        assert client.post("/api/quizzes", json=doc).status_code == 422

    def test_delete_quiz_cascades(self, client):
        client.post("/api/quizzes/quiz-safety/submit", json=PERFECT)
        assert client.delete("/api/quizzes/quiz-safety").json() == {"success": True}

        assert client.get("/api/quizzes/quiz-safety").status_code == 404
        assert client.get("/api/submissions/quiz-safety").json() == []


class TestScoringRoutes:

    def test_preview_score(self, client):
        response = client.post("/api/quizzes/quiz-safety/score", json=PERFECT)
        assert response.json() == {"total": 30, "max": 30}
        assert client.get("/api/submissions/quiz-safety").json() == []

    def test_submit(self, client):
        response = client.post("/api/quizzes/quiz-safety/submit", json=PERFECT)
        body = response.json()

        assert response.status_code == 200
        assert body["id"].startswith("sub_")
        assert body["totalScore"] == 30
        assert body["maxPossibleScore"] == 30

    def test_submit_to_missing_quiz(self, client):
        assert client.post("/api/quizzes/nope/submit", json=PERFECT).status_code == 404


class TestSubmissionRoutes:

    def test_client_scored_submission(self, client):
        doc = {
            "id": "sub_1",
            "quizId": "quiz-safety",
            "timestamp": "2024-01-02T10:00:00Z",
            "answers": [{"questionId": "q1", "selectedOptionIds": ["o3"]}],
            "totalScore": -50,
            "maxPossibleScore": 30,
        }
        assert client.post("/api/submissions", json=doc).json() == {"success": True}

        (stored,) = client.get("/api/submissions/quiz-safety").json()
        assert stored["totalScore"] == -50
        assert stored["answers"][0]["selectedOptionIds"] == ["o3"]

    def test_delete_submission(self, client):
        sub_id = client.post("/api/quizzes/quiz-safety/submit", json=PERFECT).json()["id"]
        assert client.delete(f"/api/submissions/{sub_id}").json() == {"success": True}
        assert client.get("/api/submissions/quiz-safety").json() == []


class TestAnalyticsRoute:

    def test_empty(self, client):
        body = client.get("/api/quizzes/quiz-safety/analytics").json()
        assert body["summary"] == {"count": 0, "average": 0.0, "maxPossible": 30}
        assert [q["questionId"] for q in body["perQuestion"]] == ["q1", "q2"]

    def test_tallies(self, client):
        client.post("/api/quizzes/quiz-safety/submit", json=PERFECT)
        client.post(
            "/api/quizzes/quiz-safety/submit",
            json={"answers": [{"questionId": "q2", "selectedOptionIds": ["m1", "m2"]}]},
        )

        body = client.get("/api/quizzes/quiz-safety/analytics").json()
        assert body["summary"]["count"] == 2
        assert body["summary"]["average"] == 15.0
        multi = body["perQuestion"][1]
        assert [o["count"] for o in multi["options"]] == [2, 1, 1]
        assert multi["options"][0] == {"optionId": "m1", "label": "Extinguisher", "count": 2}

    def test_missing_quiz(self, client):
        assert client.get("/api/quizzes/nope/analytics").status_code == 404


class TestDemoGuard:

    def test_reads_open(self, guarded_client):
        assert guarded_client.get("/api/quizzes").status_code == 200

    def test_write_without_pin(self, guarded_client):
        assert guarded_client.delete("/api/quizzes/quiz-safety").status_code == 403

    def test_write_with_pin(self, guarded_client):
        response = guarded_client.delete("/api/quizzes/quiz-safety", headers={"X-Demo-Pin": "4321"})
        assert response.status_code == 200

    def test_respondent_submit_not_guarded(self, guarded_client):
        assert guarded_client.post("/api/quizzes/quiz-safety/submit", json=PERFECT).status_code == 200
