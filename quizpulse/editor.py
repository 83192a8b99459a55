"""
Quiz editor operations.

Every edit is an immutable update: it takes a Quiz and returns a new Quiz,
leaving the input (and every question/option tuple it shares) untouched.
Questions and options are addressed by their position, the way the editor
UI lists them.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import fields, replace
from datetime import datetime, timezone
from typing import Any, Literal

from .exceptions import QuizValidationError
from .models import Option, Question, QuestionType, Quiz

DEFAULT_TEXT_SCORE = 10
MIN_CHOICE_OPTIONS = 2

_QUESTION_FIELDS = {f.name for f in fields(Question)} - {"id", "options"}
_OPTION_FIELDS = {f.name for f in fields(Option)} - {"id"}


def new_id(prefix: str) -> str:
    """Generate an id like ``q_1718000000000_1a2b3c``."""
    return f"{prefix}_{int(time.time() * 1000)}_{uuid.uuid4().hex[:6]}"


def utc_now_iso() -> str:
    """Current UTC time in ISO format."""
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Constructors
# =============================================================================


def new_quiz(title: str = "", subtitle: str = "") -> Quiz:
    """Create an empty quiz."""
    return Quiz(id=new_id("quiz"), title=title, subtitle=subtitle, created_at=utc_now_iso())


def new_option(text: str = "", score: int = 0) -> Option:
    return Option(id=new_id("opt"), text=text, score=score)


def new_question(text: str = "") -> Question:
    """Create a SINGLE question with two placeholder options."""
    return Question(
        id=new_id("q"),
        text=text,
        type=QuestionType.SINGLE,
        options=(new_option("Option 1"), new_option("Option 2")),
    )


# =============================================================================
# Helpers
# =============================================================================


def _check_index(items: tuple, index: int, what: str) -> None:
    if not 0 <= index < len(items):
        raise IndexError(f"{what} index out of range: {index}")


def _replace_at(items: tuple, index: int, item: Any) -> tuple:
    return items[:index] + (item,) + items[index + 1:]


def _with_question(quiz: Quiz, index: int, question: Question) -> Quiz:
    return replace(quiz, questions=_replace_at(quiz.questions, index, question))


def _check_fields(changes: dict[str, Any], allowed: set[str], what: str) -> None:
    unknown = set(changes) - allowed
    if unknown:
        raise QuizValidationError(f"Cannot edit {what} field(s): {', '.join(sorted(unknown))}")


# =============================================================================
# Question Operations
# =============================================================================


def add_question(quiz: Quiz, question: Question | None = None) -> Quiz:
    """Append a question (a fresh SINGLE question by default)."""
    return replace(quiz, questions=quiz.questions + (question or new_question(),))


def remove_question(quiz: Quiz, index: int) -> Quiz:
    _check_index(quiz.questions, index, "Question")
    return replace(quiz, questions=quiz.questions[:index] + quiz.questions[index + 1:])


def move_question(quiz: Quiz, index: int, direction: Literal["up", "down"]) -> Quiz:
    """
    Swap a question with its neighbour.

    Moving past either end returns the quiz unchanged.
    """
    if direction not in ("up", "down"):
        raise QuizValidationError(f"Unknown direction: {direction}")
    target = index - 1 if direction == "up" else index + 1
    if not (0 <= index < len(quiz.questions) and 0 <= target < len(quiz.questions)):
        return quiz

    questions = list(quiz.questions)
    questions[index], questions[target] = questions[target], questions[index]
    return replace(quiz, questions=tuple(questions))


def update_question(quiz: Quiz, index: int, **changes: Any) -> Quiz:
    """
    Change question fields (``text``, ``type``).

    A type change goes through change_question_type so the option list is
    reshaped for the new type.
    """
    _check_index(quiz.questions, index, "Question")
    _check_fields(changes, _QUESTION_FIELDS, "question")

    new_type = changes.pop("type", None)
    if changes:
        quiz = _with_question(quiz, index, replace(quiz.questions[index], **changes))
    if new_type is not None:
        quiz = change_question_type(quiz, index, QuestionType(new_type))
    return quiz


def change_question_type(quiz: Quiz, index: int, new_type: QuestionType) -> Quiz:
    """
    Switch a question's type, reshaping its options.

    - TEXT keeps only the first option, or gets a blank keyword worth 10.
    - SINGLE/MULTI are padded to at least two options.
    """
    _check_index(quiz.questions, index, "Question")
    question = quiz.questions[index]

    if new_type is QuestionType.TEXT:
        options = question.options[:1] or (new_option("", DEFAULT_TEXT_SCORE),)
    else:
        options = question.options
        while len(options) < MIN_CHOICE_OPTIONS:
            options = options + (new_option(f"Option {len(options) + 1}"),)

    return _with_question(quiz, index, replace(question, type=new_type, options=options))


# =============================================================================
# Option Operations
# =============================================================================


def add_option(quiz: Quiz, question_index: int, option: Option | None = None) -> Quiz:
    _check_index(quiz.questions, question_index, "Question")
    question = quiz.questions[question_index]
    updated = replace(question, options=question.options + (option or new_option(),))
    return _with_question(quiz, question_index, updated)


def update_option(quiz: Quiz, question_index: int, option_index: int, **changes: Any) -> Quiz:
    """Change option fields (``text``, ``score``)."""
    _check_index(quiz.questions, question_index, "Question")
    question = quiz.questions[question_index]
    _check_index(question.options, option_index, "Option")
    _check_fields(changes, _OPTION_FIELDS, "option")

    if "score" in changes:
        changes["score"] = int(changes["score"])
    option = replace(question.options[option_index], **changes)
    updated = replace(question, options=_replace_at(question.options, option_index, option))
    return _with_question(quiz, question_index, updated)


def remove_option(quiz: Quiz, question_index: int, option_index: int) -> Quiz:
    _check_index(quiz.questions, question_index, "Question")
    question = quiz.questions[question_index]
    _check_index(question.options, option_index, "Option")
    options = question.options[:option_index] + question.options[option_index + 1:]
    return _with_question(quiz, question_index, replace(question, options=options))


# =============================================================================
# Validation
# =============================================================================


def validate_quiz(quiz: Quiz) -> Quiz:
    """Check a quiz can be saved. Returns it unchanged."""
    if not quiz.title.strip():
        raise QuizValidationError("Please enter a quiz title")
    return quiz
