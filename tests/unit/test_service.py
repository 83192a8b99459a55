"""
Unit tests for QuizService over the in-memory repository.
"""

import pytest

from quizpulse.exceptions import QuizNotFoundError, QuizValidationError
from quizpulse.models import Answer, Quiz
from quizpulse.service import QuizService
from quizpulse.storage import MemoryRepository


@pytest.fixture
def service(safety_quiz):
    return QuizService(MemoryRepository([safety_quiz]), share_base_url="https://quiz.example.com/")


class TestQuizzes:

    def test_get_quiz(self, service, safety_quiz):
        assert service.get_quiz("quiz-safety") == safety_quiz

    def test_get_missing_quiz(self, service):
        with pytest.raises(QuizNotFoundError) as exc:
            service.get_quiz("missing")
        assert exc.value.quiz_id == "missing"

    def test_save_requires_title(self, service):
        with pytest.raises(QuizValidationError):
            service.save_quiz(Quiz(id="untitled", title=" "))
        assert service.repository.fetch_quiz("untitled") is None

    def test_share_url(self, service):
        assert service.share_url("quiz-safety") == "https://quiz.example.com/#/quiz/quiz-safety"


class TestSubmit:

    def test_preview_does_not_persist(self, service, sample_answers):
        result = service.preview_score("quiz-safety", sample_answers)
        assert (result.total, result.max) == (30, 30)
        assert service.submissions("quiz-safety") == []

    def test_submit_records_scored_submission(self, service, sample_answers):
        submission = service.submit("quiz-safety", sample_answers)

        assert submission.id.startswith("sub_")
        assert submission.quiz_id == "quiz-safety"
        assert submission.total_score == 30
        assert submission.max_possible_score == 30
        assert submission.timestamp
        assert len(submission.answers) == 3
        assert service.submissions("quiz-safety") == [submission]

    def test_submit_unknown_quiz(self, service):
        with pytest.raises(QuizNotFoundError):
            service.submit("missing", [])

    def test_submit_keeps_one_answer_per_question(self, service):
        answers = [
            Answer(question_id="q1", selected_option_ids=("o1",)),
            Answer(question_id="q1", selected_option_ids=("o2",)),
        ]
        submission = service.submit("quiz-safety", answers)
        assert len(submission.answers) == 1
        assert submission.total_score == 10


class TestAnalytics:

    def test_analytics_after_submissions(self, service, sample_answers):
        service.submit("quiz-safety", sample_answers)
        service.submit("quiz-safety", [Answer(question_id="q1", selected_option_ids=("o3",))])

        report = service.analytics("quiz-safety")

        assert report.summary.count == 2
        assert report.summary.average == -10.0
        assert report.summary.max_possible == 30
        assert [t.count for t in report.per_question[0].options] == [0, 1, 1]

    def test_delete_quiz_cascades(self, service, sample_answers):
        service.submit("quiz-safety", sample_answers)
        service.delete_quiz("quiz-safety")

        assert service.submissions("quiz-safety") == []
        with pytest.raises(QuizNotFoundError):
            service.analytics("quiz-safety")

    def test_delete_submission(self, service, sample_answers):
        submission = service.submit("quiz-safety", sample_answers)
        service.delete_submission(submission.id)
        assert service.analytics("quiz-safety").summary.count == 0
