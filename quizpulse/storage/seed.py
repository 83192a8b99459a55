"""Demo content for a fresh store."""

from __future__ import annotations

from ..editor import utc_now_iso
from ..models import Option, Question, QuestionType, Quiz

DEMO_QUIZ_ID = "demo-1"


def demo_quiz() -> Quiz:
    """The fire-safety quiz every new json store starts with."""
    return Quiz(
        id=DEMO_QUIZ_ID,
        title="Company Safety Policy 2024",
        subtitle="A mandatory check on new fire safety protocols.",
        created_at=utc_now_iso(),
        questions=(
            Question(
                id="q1",
                text="What should you do when the fire alarm rings?",
                type=QuestionType.SINGLE,
                options=(
                    Option(id="o1", text="Ignore it", score=-10),
                    Option(id="o2", text="Evacuate immediately via stairs", score=10),
                    Option(id="o3", text="Take the elevator", score=-50),
                ),
            ),
        ),
    )
