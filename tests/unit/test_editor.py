"""
Unit tests for immutable quiz editing.
"""

import pytest

from quizpulse import editor
from quizpulse.exceptions import QuizValidationError
from quizpulse.models import Option, QuestionType


class TestConstructors:

    def test_new_quiz(self):
        quiz = editor.new_quiz("Title", "Sub")
        assert quiz.id.startswith("quiz_")
        assert quiz.title == "Title"
        assert quiz.created_at
        assert quiz.questions == ()

    def test_new_question_defaults(self):
        question = editor.new_question()
        assert question.id.startswith("q_")
        assert question.type is QuestionType.SINGLE
        assert [o.text for o in question.options] == ["Option 1", "Option 2"]
        assert all(o.score == 0 for o in question.options)

    def test_ids_unique(self):
        assert editor.new_question().id != editor.new_question().id


class TestQuestionEdits:

    def test_add_question_returns_new_quiz(self, safety_quiz):
        edited = editor.add_question(safety_quiz)
        assert len(edited.questions) == 4
        assert len(safety_quiz.questions) == 3

    def test_remove_question(self, safety_quiz):
        edited = editor.remove_question(safety_quiz, 1)
        assert [q.id for q in edited.questions] == ["q1", "q3"]
        assert [q.id for q in safety_quiz.questions] == ["q1", "q2", "q3"]

    def test_remove_out_of_range(self, safety_quiz):
        with pytest.raises(IndexError):
            editor.remove_question(safety_quiz, 9)

    def test_move_up(self, safety_quiz):
        edited = editor.move_question(safety_quiz, 1, "up")
        assert [q.id for q in edited.questions] == ["q2", "q1", "q3"]

    def test_move_down(self, safety_quiz):
        edited = editor.move_question(safety_quiz, 1, "down")
        assert [q.id for q in edited.questions] == ["q1", "q3", "q2"]

    @pytest.mark.parametrize("index,direction", [(0, "up"), (2, "down"), (7, "up")])
    def test_move_past_end_is_noop(self, safety_quiz, index, direction):
        assert editor.move_question(safety_quiz, index, direction) is safety_quiz

    def test_move_bad_direction(self, safety_quiz):
        with pytest.raises(QuizValidationError):
            editor.move_question(safety_quiz, 1, "sideways")

    def test_update_text(self, safety_quiz):
        edited = editor.update_question(safety_quiz, 0, text="New text")
        assert edited.questions[0].text == "New text"
        assert edited.questions[0].options == safety_quiz.questions[0].options

    def test_update_unknown_field(self, safety_quiz):
        with pytest.raises(QuizValidationError):
            editor.update_question(safety_quiz, 0, id="hijack")

    def test_update_type_goes_through_reshape(self, safety_quiz):
        edited = editor.update_question(safety_quiz, 0, type="TEXT")
        assert edited.questions[0].type is QuestionType.TEXT
        assert len(edited.questions[0].options) == 1


class TestTypeChange:

    def test_to_text_keeps_first_option(self, safety_quiz):
        edited = editor.change_question_type(safety_quiz, 1, QuestionType.TEXT)
        question = edited.questions[1]
        assert question.type is QuestionType.TEXT
        assert [o.id for o in question.options] == ["m1"]

    def test_to_text_without_options_creates_keyword(self, safety_quiz):
        emptied = editor.remove_option(safety_quiz, 0, 0)
        emptied = editor.remove_option(emptied, 0, 0)
        emptied = editor.remove_option(emptied, 0, 0)
        edited = editor.change_question_type(emptied, 0, QuestionType.TEXT)
        (option,) = edited.questions[0].options
        assert option.text == ""
        assert option.score == 10

    def test_to_choice_pads_options(self, safety_quiz):
        edited = editor.change_question_type(safety_quiz, 2, QuestionType.MULTI)
        question = edited.questions[2]
        assert question.type is QuestionType.MULTI
        assert len(question.options) == 2
        assert question.options[0].text == "Evacuate"
        assert question.options[1].text == "Option 2"

    def test_single_to_multi_keeps_options(self, safety_quiz):
        edited = editor.change_question_type(safety_quiz, 0, QuestionType.MULTI)
        assert edited.questions[0].options == safety_quiz.questions[0].options


class TestOptionEdits:

    def test_add_option(self, safety_quiz):
        edited = editor.add_option(safety_quiz, 0)
        assert len(edited.questions[0].options) == 4
        assert edited.questions[0].options[-1].score == 0
        assert len(safety_quiz.questions[0].options) == 3

    def test_add_given_option(self, safety_quiz):
        edited = editor.add_option(safety_quiz, 0, Option(id="o4", text="Call 112", score=5))
        assert edited.questions[0].options[-1].id == "o4"

    def test_update_option_score(self, safety_quiz):
        edited = editor.update_option(safety_quiz, 0, 0, score="-3")
        assert edited.questions[0].options[0].score == -3
        assert safety_quiz.questions[0].options[0].score == -10

    def test_update_option_text(self, safety_quiz):
        edited = editor.update_option(safety_quiz, 2, 0, text="Leave")
        assert edited.questions[2].options[0].text == "Leave"

    def test_update_option_unknown_field(self, safety_quiz):
        with pytest.raises(QuizValidationError):
            editor.update_option(safety_quiz, 0, 0, colour="red")

    def test_remove_option(self, safety_quiz):
        edited = editor.remove_option(safety_quiz, 0, 1)
        assert [o.id for o in edited.questions[0].options] == ["o1", "o3"]

    def test_option_index_out_of_range(self, safety_quiz):
        with pytest.raises(IndexError):
            editor.update_option(safety_quiz, 0, 5, text="x")

    def test_unedited_questions_shared(self, safety_quiz):
        edited = editor.update_option(safety_quiz, 0, 0, text="x")
        assert edited.questions[1] is safety_quiz.questions[1]


class TestValidation:

    def test_blank_title_rejected(self):
        with pytest.raises(QuizValidationError):
            editor.validate_quiz(editor.new_quiz("   "))

    def test_titled_quiz_ok(self, safety_quiz):
        assert editor.validate_quiz(safety_quiz) is safety_quiz
