#!/usr/bin/env python3
"""
Pytest tests for QuizService.grade_submission
Repositories are mocked so storage behaviour can be controlled per test
"""

from datetime import datetime, timezone
from unittest.mock import Mock, patch

import pytest
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from app.core.exceptions import NotFoundError, StorageError
from app.models.quiz import Quiz, QuizAttempt
from app.schemas.quiz import QuizResultResponse
from app.services.quiz import QuizService
from tests.helpers import make_question


def fake_create(attempt_data):
    """Echo the inserted row back like the database would"""
    attempt = QuizAttempt(**attempt_data)
    attempt.id = 1
    attempt.started_at = datetime(2026, 1, 1, tzinfo=timezone.utc)
    return attempt


class TestGradeSubmission:
    """Test grading and attempt recording"""

    def setup_method(self):
        self.mock_db = Mock()
        self.service = QuizService(self.mock_db)
        self.quiz = Quiz(id=7, title_th="ทดสอบ", title_en="Test", is_published=True)
        self.questions = [
            make_question(7, 101, 1, 2),
            make_question(7, 102, 2, 4),
            make_question(7, 103, 3, 1),
        ]

    def _patched(self, create_side_effect=fake_create):
        return (
            patch.object(self.service.repository, "get_by_id", return_value=self.quiz),
            patch.object(
                self.service.repository, "get_questions", return_value=self.questions
            ),
            patch.object(
                self.service.attempt_repository,
                "create",
                side_effect=create_side_effect,
            ),
        )

    def test_grades_and_records_attempt(self):
        get_quiz, get_questions, create = self._patched()
        with get_quiz, get_questions, create as mock_create:
            result = self.service.grade_submission(
                7, {"101": 2, "102": 3, "103": 1}, session_id="sess-1"
            )

        assert isinstance(result, QuizResultResponse)
        assert result.score == 2
        assert result.total == 3
        assert result.percentage == 67

        mock_create.assert_called_once()
        stored = mock_create.call_args.args[0]
        assert stored["quiz_id"] == 7
        assert stored["session_id"] == "sess-1"
        assert stored["score"] == 2
        assert stored["total_questions"] == 3
        assert stored["answers"] == [
            {"question_id": 101, "selected_answer": 2, "is_correct": True},
            {"question_id": 102, "selected_answer": 3, "is_correct": False},
            {"question_id": 103, "selected_answer": 1, "is_correct": True},
        ]
        assert stored["completed_at"].tzinfo is not None

    def test_result_reveals_correct_answers(self):
        get_quiz, get_questions, create = self._patched()
        with get_quiz, get_questions, create:
            result = self.service.grade_submission(7, {})

        assert [q.correct_answer for q in result.questions] == [2, 4, 1]
        assert result.questions[0].explanation_en == "Explanation 1"

    def test_anonymous_submission(self):
        """No session id is stored as NULL and flagged anonymous"""
        get_quiz, get_questions, create = self._patched()
        with get_quiz, get_questions, create as mock_create:
            result = self.service.grade_submission(7, {"101": 2})

        assert mock_create.call_args.args[0]["session_id"] is None
        assert result.attempt.is_anonymous is True
        assert result.attempt.session_id is None

    def test_user_id_is_recorded(self):
        get_quiz, get_questions, create = self._patched()
        with get_quiz, get_questions, create as mock_create:
            result = self.service.grade_submission(7, {}, user_id="user-1")

        assert mock_create.call_args.args[0]["user_id"] == "user-1"
        assert result.attempt.user_id == "user-1"

    def test_unknown_quiz_is_not_found(self):
        """A missing quiz fails before grading and writes nothing"""
        with (
            patch.object(self.service.repository, "get_by_id", return_value=None),
            patch.object(self.service.attempt_repository, "create") as mock_create,
        ):
            with pytest.raises(NotFoundError) as exc_info:
                self.service.grade_submission(99, {"101": 2})

        assert exc_info.value.code == "QUIZ_NOT_FOUND"
        mock_create.assert_not_called()

    def test_question_load_failure_is_storage_error(self):
        with (
            patch.object(self.service.repository, "get_by_id", return_value=self.quiz),
            patch.object(
                self.service.repository,
                "get_questions",
                side_effect=OperationalError("SELECT", {}, Exception("down")),
            ),
            patch.object(self.service.attempt_repository, "create") as mock_create,
        ):
            with pytest.raises(StorageError) as exc_info:
                self.service.grade_submission(7, {})

        assert exc_info.value.code == "STORAGE_FAILURE"
        mock_create.assert_not_called()

    def test_attempt_insert_failure_rolls_back(self):
        """A failed insert is surfaced, not retried"""
        get_quiz, get_questions, create = self._patched(
            create_side_effect=SQLAlchemyError("insert failed")
        )
        with get_quiz, get_questions, create as mock_create:
            with pytest.raises(StorageError):
                self.service.grade_submission(7, {"101": 2})

        assert mock_create.call_count == 1
        self.mock_db.rollback.assert_called_once()

    def test_empty_quiz_scores_zero_percent(self):
        with (
            patch.object(self.service.repository, "get_by_id", return_value=self.quiz),
            patch.object(self.service.repository, "get_questions", return_value=[]),
            patch.object(
                self.service.attempt_repository, "create", side_effect=fake_create
            ),
        ):
            result = self.service.grade_submission(7, {"101": 1})

        assert result.total == 0
        assert result.score == 0
        assert result.percentage == 0
        assert result.attempt.answers == []
