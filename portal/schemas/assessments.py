"""Pydantic schemas for assessments and their questions."""

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import Field, field_validator, model_validator

from .base import WireModel


class QuestionType(str, Enum):
    """Question kinds supported by the platform."""

    MCQ = "MCQ"
    SUBJECTIVE = "SUBJECTIVE"
    CODING = "CODING"


class QuestionBase(WireModel):
    """Fields shared by every question kind."""

    id: Optional[str] = None  # Absent while drafting
    text: str
    points: int = Field(gt=0)


class McqQuestion(QuestionBase):
    """Multiple choice question.

    Only this variant carries options and can grade an answer locally.
    """

    type: Literal["MCQ"] = "MCQ"
    options: list[str] = Field(min_length=2)
    correct_answer: Optional[str] = None  # Hidden from candidates by the server

    @field_validator("correct_answer", mode="before")
    @classmethod
    def _blank_answer_is_missing(cls, value):
        return value or None

    @property
    def answer_is_option(self) -> bool:
        """Whether the correct answer, if set, is still one of the options.

        Only enforced when authoring; stored questions may point at an
        option that was removed later.
        """
        return self.correct_answer is None or self.correct_answer in self.options

    def is_correct(self, value: str) -> bool:
        """Check a candidate's value against the correct option."""
        return self.correct_answer is not None and value == self.correct_answer


class SubjectiveQuestion(QuestionBase):
    """Free text question."""

    type: Literal["SUBJECTIVE"] = "SUBJECTIVE"


class CodingQuestion(QuestionBase):
    """Code answer question."""

    type: Literal["CODING"] = "CODING"


Question = Annotated[
    Union[McqQuestion, SubjectiveQuestion, CodingQuestion],
    Field(discriminator="type"),
]


class Assessment(WireModel):
    """One assessment, acting as one phase of a series."""

    id: str
    title: str
    description: str = ""
    duration: int = 0  # Minutes
    questions: list[Question] = []

    # Phase system
    phase: Optional[int] = Field(default=None, ge=1)  # None or 1 = root
    next_phase_id: Optional[str] = None
    total_marks: Optional[int] = None
    passing_score: Optional[int] = None

    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("phase", mode="before")
    @classmethod
    def _zero_phase_is_unset(cls, value):
        # The backend serializes an unset phase as 0
        return None if value in (None, 0) else value

    @field_validator("questions", mode="before")
    @classmethod
    def _null_questions(cls, value):
        return value or []

    @field_validator("next_phase_id", mode="before")
    @classmethod
    def _blank_next_phase(cls, value):
        return value or None

    @property
    def is_root(self) -> bool:
        """Whether this assessment starts a series."""
        return self.phase is None or self.phase == 1

    @property
    def question_count(self) -> int:
        return len(self.questions)


def invalid_answer_question(questions) -> Optional[int]:
    """1-based number of the first MCQ whose correct answer is not an option."""
    for number, question in enumerate(questions, start=1):
        if isinstance(question, McqQuestion) and not question.answer_is_option:
            return number
    return None


class AssessmentUpdate(WireModel):
    """Payload for editing an existing assessment.

    Authoring payloads reject MCQs whose answer is not one of the options.
    """

    title: str
    description: str = ""
    duration: int
    questions: list[Question]

    @model_validator(mode="after")
    def _answers_are_options(self) -> "AssessmentUpdate":
        number = invalid_answer_question(self.questions)
        if number is not None:
            raise ValueError(f"Question {number}: correct_answer must be one of the options")
        return self


class AssessmentCreate(AssessmentUpdate):
    """Payload for creating one phase of an assessment series."""

    phase: int = 1
    passing_score: int = 0
    total_marks: int = 0
    next_phase_id: Optional[str] = None


class CreatedResponse(WireModel):
    """Response for a created resource."""

    message: str = ""
    id: str


class DeletedResponse(WireModel):
    """Response for a deleted assessment series."""

    message: str = ""
    deleted_count: int = 0
