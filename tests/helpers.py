from unittest.mock import Mock

from app.models.quiz import Quiz, QuizQuestion

ADMIN_PASSWORD = "test-admin-password"


def make_question(quiz_id, question_id, order_number, correct_answer, **extra):
    """Unsaved question row for service-level tests"""
    data = {
        "id": question_id,
        "quiz_id": quiz_id,
        "order_number": order_number,
        "question_th": f"คำถาม {order_number}",
        "question_en": f"Question {order_number}",
        "correct_answer": correct_answer,
        "explanation_th": f"เฉลย {order_number}",
        "explanation_en": f"Explanation {order_number}",
    }
    for n in range(1, 5):
        data[f"option_{n}_th"] = f"ตัวเลือก {n}"
        data[f"option_{n}_en"] = f"Option {n}"
    data.update(extra)
    return QuizQuestion(**data)


def seed_quiz(db, correct_answers, is_published=True, **quiz_fields):
    """Persist a quiz whose questions have the given correct answers"""
    quiz = Quiz(
        title_th=quiz_fields.pop("title_th", "แบบทดสอบละหมาด"),
        title_en=quiz_fields.pop("title_en", "Salah quiz"),
        category=quiz_fields.pop("category", "salah"),
        difficulty=quiz_fields.pop("difficulty", "easy"),
        is_published=is_published,
        questions_count=len(correct_answers),
        **quiz_fields,
    )
    db.add(quiz)
    db.flush()
    for index, correct in enumerate(correct_answers):
        question = make_question(quiz.id, None, index + 1, correct)
        db.add(question)
    db.commit()
    db.refresh(quiz)
    return quiz


def mock_response(status_code=200, json_data=None):
    response = Mock()
    response.status_code = status_code
    response.json.return_value = json_data or {}
    response.raise_for_status = Mock()
    return response
