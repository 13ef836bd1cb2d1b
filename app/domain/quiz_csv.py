import csv
import io
from typing import Dict, List, Optional

from app.schemas.quiz import QuestionCreate

# Thai header first, English fallback
COLUMN_ALIASES = {
    "order": ("ลำดับ", "order"),
    "question": ("คำถาม", "question"),
    "option_1": ("ตัวเลือก 1", "option_1"),
    "option_2": ("ตัวเลือก 2", "option_2"),
    "option_3": ("ตัวเลือก 3", "option_3"),
    "option_4": ("ตัวเลือก 4", "option_4"),
    "correct_answer": ("คำตอบที่ถูก", "correct_answer"),
    "explanation": ("เฉลยละเอียด", "explanation"),
}


def _value(row: Dict[str, str], key: str) -> str:
    for column in COLUMN_ALIASES[key]:
        value = (row.get(column) or "").strip()
        if value:
            return value
    return ""


def _to_int(value: str) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def parse_question_csv(text: str) -> List[QuestionCreate]:
    """
    Parse an uploaded question sheet.

    Rows are ordered by their order column (falling back to row position).
    Thai text is copied into the English fields. Rows with a missing
    question or option, or a correct answer outside 1-4, are dropped.
    """
    reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
    parsed = []
    for index, row in enumerate(reader):
        if not any((v or "").strip() for v in row.values() if isinstance(v, str)):
            continue

        question = _value(row, "question")
        options = [_value(row, f"option_{n}") for n in range(1, 5)]
        correct = _to_int(_value(row, "correct_answer") or "1")
        order = _to_int(_value(row, "order")) or index + 1

        if not question or not all(options):
            continue
        if correct is None or not 1 <= correct <= 4:
            continue

        explanation = _value(row, "explanation") or None
        parsed.append(
            (
                order,
                QuestionCreate(
                    question_th=question,
                    question_en=question,
                    option_1_th=options[0],
                    option_1_en=options[0],
                    option_2_th=options[1],
                    option_2_en=options[1],
                    option_3_th=options[2],
                    option_3_en=options[2],
                    option_4_th=options[3],
                    option_4_en=options[3],
                    correct_answer=correct,
                    explanation_th=explanation,
                    explanation_en=explanation,
                ),
            )
        )

    parsed.sort(key=lambda item: item[0])
    return [question for _, question in parsed]
