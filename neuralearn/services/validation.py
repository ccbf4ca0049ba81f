"""Quiz payload validation.

Checks run in a fixed order and the first violation wins, so callers always
get one message that points at the earliest problem in the payload. Question
messages carry the 1-based position of the offending question.
"""
import math
from typing import Any, Callable, Iterable, List, Mapping, Optional

from neuralearn.models.orm import Difficulty

DIFFICULTIES = tuple(d.value for d in Difficulty)
# durations are stored in a 32-bit integer column
MAX_DURATION = 2**31 - 1

Check = Callable[[Mapping[str, Any]], Optional[str]]


class QuizValidationError(ValueError):
    pass


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _is_index(value: Any) -> bool:
    # bool is an int subclass but true/false is not an option index
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if isinstance(value, int):
        return True
    return math.isfinite(value) and value.is_integer()


def check_title(data: Mapping[str, Any]) -> Optional[str]:
    if len(_text(data.get("title"))) < 3:
        return "Title must be at least 3 characters"
    return None


def check_topic(data: Mapping[str, Any]) -> Optional[str]:
    if len(_text(data.get("topic"))) < 2:
        return "Topic must be at least 2 characters"
    return None


def check_has_questions(data: Mapping[str, Any]) -> Optional[str]:
    questions = data.get("questions")
    if not isinstance(questions, list) or len(questions) == 0:
        return "Quiz must have at least one question"
    return None


def check_question(q: Any, position: int) -> Optional[str]:
    q = q if isinstance(q, Mapping) else {}
    if len(_text(q.get("question"))) < 3:
        return f"Question {position}: Question text is required"
    options = q.get("options")
    if not isinstance(options, list) or len(options) < 2:
        return f"Question {position}: Must have at least 2 options"
    answer = q.get("correctAnswer")
    if not _is_index(answer) or answer < 0 or answer >= len(options):
        return f"Question {position}: Invalid correct answer index"
    if not q.get("topic"):
        return f"Question {position}: Topic is required"
    return None


def check_questions(data: Mapping[str, Any]) -> Optional[str]:
    for position, q in enumerate(data.get("questions") or [], start=1):
        message = check_question(q, position)
        if message:
            return message
    return None


def check_settings(data: Mapping[str, Any]) -> Optional[str]:
    """Optional fields, only looked at once the required shape is valid."""
    difficulty = data.get("difficulty")
    if difficulty and difficulty not in DIFFICULTIES:
        return f"Difficulty must be one of {', '.join(DIFFICULTIES)}"
    duration = data.get("duration")
    if duration and (not _is_index(duration) or duration <= 0 or duration > MAX_DURATION):
        return "Duration must be a positive number of minutes"
    for position, q in enumerate(data["questions"], start=1):
        qd = q.get("difficulty")
        if qd and qd not in DIFFICULTIES:
            return f"Question {position}: Difficulty must be one of {', '.join(DIFFICULTIES)}"
    return None


QUIZ_CHECKS: List[Check] = [check_title, check_topic, check_has_questions, check_questions, check_settings]


def first_violation(data: Any, checks: Iterable[Check] = QUIZ_CHECKS) -> Optional[str]:
    """Return the first violated rule's message, or None when the payload is valid."""
    payload = data if isinstance(data, Mapping) else {}
    for check in checks:
        message = check(payload)
        if message:
            return message
    return None


def validate_quiz_data(data: Any) -> None:
    message = first_violation(data)
    if message:
        raise QuizValidationError(message)
