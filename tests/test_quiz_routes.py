#!/usr/bin/env python3
"""
Pytest tests for the public quiz endpoints
Runs the FastAPI app against an in-memory SQLite database
"""

from unittest.mock import patch

import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.models.quiz import QuizAttempt
from app.repositories.quiz_attempt_repository import QuizAttemptRepository
from tests.helpers import mock_response, seed_quiz


class TestQuizCatalogue:
    """Test listing and viewing quizzes"""

    @pytest.fixture(autouse=True)
    def setup(self, client, db_session):
        self.client = client
        self.db = db_session

    def test_lists_only_published_quizzes(self):
        seed_quiz(self.db, [1, 2], title_en="Published")
        seed_quiz(self.db, [1], is_published=False, title_en="Draft")

        response = self.client.get("/api/quiz")

        assert response.status_code == 200
        titles = [quiz["title_en"] for quiz in response.json()]
        assert titles == ["Published"]

    def test_lists_newest_first(self):
        seed_quiz(self.db, [1], title_en="Older")
        seed_quiz(self.db, [1], title_en="Newer")

        response = self.client.get("/api/quiz")

        assert [q["title_en"] for q in response.json()] == ["Newer", "Older"]

    def test_quiz_detail_hides_answers(self):
        """Correct answers and explanations are withheld before submission"""
        quiz = seed_quiz(self.db, [2, 4, 1])

        response = self.client.get(f"/api/quiz/{quiz.id}")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == quiz.id
        assert [q["order_number"] for q in data["questions"]] == [1, 2, 3]
        for question in data["questions"]:
            assert "correct_answer" not in question
            assert "explanation_th" not in question
            assert "explanation_en" not in question
            assert question["option_4_en"] == "Option 4"

    def test_unpublished_quiz_detail_is_not_found(self):
        quiz = seed_quiz(self.db, [1], is_published=False)

        response = self.client.get(f"/api/quiz/{quiz.id}")

        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "QUIZ_NOT_FOUND"

    def test_unknown_quiz_detail_is_not_found(self):
        response = self.client.get("/api/quiz/12345")

        assert response.status_code == 404


class TestQuizSubmission:
    """Test POST /api/quiz/{id}/submit"""

    @pytest.fixture(autouse=True)
    def setup(self, client, db_session):
        self.client = client
        self.db = db_session
        self.quiz = seed_quiz(self.db, [2, 4, 1])
        self.question_ids = [q.id for q in self.quiz.questions]

    def _answers(self, values):
        return {str(qid): value for qid, value in zip(self.question_ids, values)}

    def test_submit_scores_and_reveals_answers(self):
        response = self.client.post(
            f"/api/quiz/{self.quiz.id}/submit",
            json={"answers": self._answers([2, 3, 1]), "session_id": "sess-1"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["score"] == 2
        assert data["total"] == 3
        assert data["percentage"] == 67
        assert [q["correct_answer"] for q in data["questions"]] == [2, 4, 1]
        assert data["questions"][0]["explanation_en"] == "Explanation 1"

        attempt = data["attempt"]
        assert attempt["quiz_id"] == self.quiz.id
        assert attempt["session_id"] == "sess-1"
        assert attempt["is_anonymous"] is False
        assert attempt["total_questions"] == 3
        assert attempt["completed_at"] is not None
        assert [a["is_correct"] for a in attempt["answers"]] == [True, False, True]

    def test_submit_persists_one_attempt(self):
        self.client.post(
            f"/api/quiz/{self.quiz.id}/submit",
            json={"answers": self._answers([2, 4, 1])},
        )

        attempts = self.db.query(QuizAttempt).all()
        assert len(attempts) == 1
        assert attempts[0].score == 3
        assert attempts[0].session_id is None

    def test_omitted_answer_counts_as_wrong(self):
        answers = self._answers([2, 3, 1])
        del answers[str(self.question_ids[1])]

        response = self.client.post(
            f"/api/quiz/{self.quiz.id}/submit", json={"answers": answers}
        )

        assert response.status_code == 200
        assert response.json()["score"] == 2
        assert response.json()["attempt"]["answers"][1]["selected_answer"] is None

    def test_foreign_question_answers_are_ignored(self):
        other = seed_quiz(self.db, [3])
        answers = self._answers([2, 3, 1])
        answers[str(other.questions[0].id)] = 3
        answers["not-a-question"] = 1

        response = self.client.post(
            f"/api/quiz/{self.quiz.id}/submit", json={"answers": answers}
        )

        assert response.status_code == 200
        assert response.json()["score"] == 2
        assert response.json()["total"] == 3

    def test_empty_body_scores_zero(self):
        response = self.client.post(f"/api/quiz/{self.quiz.id}/submit", json={})

        assert response.status_code == 200
        assert response.json()["score"] == 0
        assert response.json()["attempt"]["is_anonymous"] is True

    def test_two_sessions_make_two_attempts(self):
        """Identical answers from two sessions are stored separately"""
        answers = self._answers([2, 4, 3])
        first = self.client.post(
            f"/api/quiz/{self.quiz.id}/submit",
            json={"answers": answers, "session_id": "a"},
        ).json()
        second = self.client.post(
            f"/api/quiz/{self.quiz.id}/submit",
            json={"answers": answers, "session_id": "b"},
        ).json()

        assert first["attempt"]["id"] != second["attempt"]["id"]
        assert first["score"] == second["score"] == 2
        assert self.db.query(QuizAttempt).count() == 2

    def test_unpublished_quiz_can_still_be_graded(self):
        draft = seed_quiz(self.db, [1], is_published=False)
        answers = {str(draft.questions[0].id): 1}

        response = self.client.post(
            f"/api/quiz/{draft.id}/submit", json={"answers": answers}
        )

        assert response.status_code == 200
        assert response.json()["percentage"] == 100

    def test_quiz_without_questions_is_zero_percent(self):
        empty = seed_quiz(self.db, [])

        response = self.client.post(
            f"/api/quiz/{empty.id}/submit", json={"answers": {"1": 1}}
        )

        assert response.status_code == 200
        assert response.json()["percentage"] == 0
        assert response.json()["total"] == 0

    def test_unknown_quiz_is_not_found(self):
        response = self.client.post("/api/quiz/9999/submit", json={"answers": {}})

        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "QUIZ_NOT_FOUND"
        assert self.db.query(QuizAttempt).count() == 0

    def test_storage_failure_is_distinct_from_not_found(self):
        with patch.object(
            QuizAttemptRepository, "create", side_effect=SQLAlchemyError("down")
        ):
            response = self.client.post(
                f"/api/quiz/{self.quiz.id}/submit",
                json={"answers": self._answers([2, 4, 1])},
            )

        assert response.status_code == 500
        assert response.json()["detail"]["code"] == "STORAGE_FAILURE"

    @patch("app.services.auth.requests.get")
    def test_bearer_token_attaches_user(self, mock_get):
        mock_get.return_value = mock_response(200, {"id": "user-42", "email": "a@b.c"})

        response = self.client.post(
            f"/api/quiz/{self.quiz.id}/submit",
            json={"answers": {}},
            headers={"Authorization": "Bearer good-token"},
        )

        assert response.status_code == 200
        assert response.json()["attempt"]["user_id"] == "user-42"

    @patch("app.services.auth.requests.get")
    def test_invalid_bearer_token_is_rejected(self, mock_get):
        mock_get.return_value = mock_response(401)

        response = self.client.post(
            f"/api/quiz/{self.quiz.id}/submit",
            json={"answers": {}},
            headers={"Authorization": "Bearer bad-token"},
        )

        assert response.status_code == 401
        assert response.json()["detail"]["code"] == "INVALID_TOKEN"
        assert self.db.query(QuizAttempt).count() == 0
