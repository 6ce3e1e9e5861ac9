"""Tests for wire and view schemas."""

import pytest
from pydantic import TypeAdapter, ValidationError

from portal.schemas import (
    Assessment,
    AssessmentCard,
    AssessmentCreate,
    AssessmentUpdate,
    CardStatus,
    CodingQuestion,
    McqQuestion,
    Question,
    SubjectiveQuestion,
    Submission,
    invalid_answer_question,
)

question_adapter = TypeAdapter(Question)


class TestQuestionUnion:
    """Questions are discriminated on their type field."""

    def test_mcq(self):
        question = question_adapter.validate_python(
            {"id": "q1", "type": "MCQ", "text": "Pick", "points": 5,
             "options": ["a", "b"], "correct_answer": "b"}
        )

        assert isinstance(question, McqQuestion)
        assert question.is_correct("b")
        assert not question.is_correct("a")

    def test_non_mcq_variants_carry_no_options(self):
        subjective = question_adapter.validate_python(
            {"id": "q2", "type": "SUBJECTIVE", "text": "Explain", "points": 5, "options": ["x", "y"]}
        )
        coding = question_adapter.validate_python(
            {"id": "q3", "type": "CODING", "text": "Write", "points": 5}
        )

        assert isinstance(subjective, SubjectiveQuestion)
        assert isinstance(coding, CodingQuestion)
        assert not hasattr(subjective, "options")

    def test_mcq_needs_two_options(self):
        with pytest.raises(ValidationError):
            McqQuestion(text="Pick", points=5, options=["only"])

    def test_stored_answer_outside_options_is_readable(self):
        question = McqQuestion(text="Pick", points=5, options=["a", "b"], correct_answer="c")

        assert question.answer_is_option is False

    def test_authoring_payloads_require_answer_in_options(self):
        question = McqQuestion(text="Pick", points=5, options=["a", "b"], correct_answer="c")

        with pytest.raises(ValidationError, match="Question 1: correct_answer must be one of the options"):
            AssessmentUpdate(title="Quiz", duration=10, questions=[question])
        with pytest.raises(ValidationError):
            AssessmentCreate(title="Quiz", duration=10, questions=[question])

    def test_listed_assessment_tolerates_removed_option(self):
        assessment = Assessment.model_validate(
            {
                "id": "a1",
                "title": "Quiz",
                "duration": 10,
                "questions": [
                    {"type": "MCQ", "text": "Pick", "points": 5, "options": ["a", "b"],
                     "correct_answer": "removed option"},
                ],
            }
        )

        assert assessment.questions[0].answer_is_option is False
        assert invalid_answer_question(assessment.questions) == 1

    def test_blank_correct_answer_is_missing(self):
        question = McqQuestion(text="Pick", points=5, options=["a", "b"], correct_answer="")

        assert question.correct_answer is None
        assert not question.is_correct("")

    def test_unknown_type_is_rejected(self):
        with pytest.raises(ValidationError):
            question_adapter.validate_python({"type": "ESSAY", "text": "x", "points": 1})

    def test_points_must_be_positive(self):
        with pytest.raises(ValidationError):
            SubjectiveQuestion(text="Explain", points=0)


class TestAssessment:
    """Backend quirks normalized on input."""

    def test_zero_phase_and_blank_link_are_unset(self):
        assessment = Assessment.model_validate(
            {"id": "a1", "title": "T", "phase": 0, "next_phase_id": "", "questions": None}
        )

        assert assessment.phase is None
        assert assessment.next_phase_id is None
        assert assessment.questions == []
        assert assessment.is_root

    def test_later_phase_is_not_root(self):
        assessment = Assessment.model_validate({"id": "a2", "title": "T", "phase": 2})

        assert not assessment.is_root

    def test_unknown_fields_are_ignored(self):
        submission = Submission.model_validate(
            {"id": "s1", "assessment_id": "a1", "answers": None, "grader": "auto"}
        )

        assert submission.answers == []


class TestViews:
    """View models render camelCase keys."""

    def test_card_aliases(self):
        card = AssessmentCard(
            id="a1",
            display_title="Python",
            description="",
            phase=1,
            duration=30,
            question_count=2,
            status=CardStatus.START,
        )

        dumped = card.model_dump(mode="json", by_alias=True)

        assert dumped["displayTitle"] == "Python"
        assert dumped["questionCount"] == 2
        assert dumped["status"] == "Start"
