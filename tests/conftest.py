"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from quizpulse.models import Answer, Option, Question, QuestionType, Quiz, Submission


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests (API and storage backends)")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        path = str(item.fspath)
        if "unit" in path:
            item.add_marker(pytest.mark.unit)
        elif "integration" in path:
            item.add_marker(pytest.mark.integration)
        elif "smoke" in path:
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def single_question():
    """Fire alarm question: one right answer, two penalties."""
    return Question(
        id="q1",
        text="What should you do when the fire alarm rings?",
        type=QuestionType.SINGLE,
        options=(
            Option(id="o1", text="Ignore it", score=-10),
            Option(id="o2", text="Evacuate immediately via stairs", score=10),
            Option(id="o3", text="Take the elevator", score=-50),
        ),
    )


@pytest.fixture
def multi_question():
    """Select-all-that-apply question with a penalty option."""
    return Question(
        id="q2",
        text="Which items belong in a fire kit?",
        type=QuestionType.MULTI,
        options=(
            Option(id="m1", text="Extinguisher", score=5),
            Option(id="m2", text="Fireworks", score=-5),
            Option(id="m3", text="Smoke hood", score=5),
        ),
    )


@pytest.fixture
def text_question():
    """Free-text keyword question."""
    return Question(
        id="q3",
        text="One word: what do you do first?",
        type=QuestionType.TEXT,
        options=(Option(id="t1", text="Evacuate", score=10),),
    )


@pytest.fixture
def safety_quiz(single_question, multi_question, text_question):
    """Quiz with one question of each type (max score 30)."""
    return Quiz(
        id="quiz-safety",
        title="Fire Safety",
        subtitle="Annual refresher",
        created_at="2024-01-01T00:00:00+00:00",
        questions=(single_question, multi_question, text_question),
    )


@pytest.fixture
def make_submission():
    """Factory for submissions against safety_quiz."""

    def _make(sub_id, answers, total=0, quiz_id="quiz-safety", max_possible=30):
        return Submission(
            id=sub_id,
            quiz_id=quiz_id,
            timestamp="2024-01-02T10:00:00+00:00",
            answers=tuple(answers),
            total_score=total,
            max_possible_score=max_possible,
        )

    return _make


@pytest.fixture
def sample_answers():
    """Perfect answers for safety_quiz (30 points)."""
    return [
        Answer(question_id="q1", selected_option_ids=("o2",)),
        Answer(question_id="q2", selected_option_ids=("m1", "m3")),
        Answer(question_id="q3", text_answer="evacuate"),
    ]
