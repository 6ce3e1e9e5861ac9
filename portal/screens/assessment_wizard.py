"""Multi-phase assessment creation wizard.

Steps:
1. Title and description
2. Phase count and per-phase settings (duration, total marks, passing score)
3. Questions, one phase at a time; question points must add up to the
   phase's total marks before moving on
4. Review, then create

Phases are created last to first so that each one can link to the
already created next phase through ``next_phase_id``.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from portal.integrations.gateway import PortalAPIError
from portal.schemas import AssessmentCreate, McqQuestion, Question

from .base import BaseScreen, FormValidationError
from .interviewer_assessments import INTERVIEWER_ROLES

PHASE_NAMES = ("Foundation", "Pre-Intermediate", "Intermediate")
MAX_PHASES = 3
REVIEW_STEP = 4


@dataclass
class PhaseDraft:
    """Settings and questions of one phase being authored."""

    name: str
    duration: int = 0  # Minutes
    total_marks: int = 0
    passing_score: int = 0
    questions: List[Question] = field(default_factory=list)

    @property
    def points_total(self) -> int:
        return sum(q.points for q in self.questions)


def default_phase(index: int) -> PhaseDraft:
    name = PHASE_NAMES[index] if index < len(PHASE_NAMES) else f"Phase {index + 1}"
    return PhaseDraft(name=name)


class AssessmentWizardScreen(BaseScreen):
    """Step-by-step authoring of a 1 to 3 phase assessment series."""

    screen_name = "assessment_wizard"
    required_roles = INTERVIEWER_ROLES

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.step = 1
        self.title = ""
        self.description = ""
        self.phase_count = 1
        self.phases: List[PhaseDraft] = []
        self.phase_index = 0
        self.created_ids: List[str] = []
        self.redirect_to: Optional[str] = None

    async def load(self) -> None:
        self.ensure_access()

    # Phase settings

    def set_phase_count(self, count: int) -> None:
        if not 1 <= count <= MAX_PHASES:
            raise FormValidationError(f"Phase count must be between 1 and {MAX_PHASES}", field="phase_count")
        self.phase_count = count
        if self.phases:
            self._resize_phases()

    def _resize_phases(self) -> None:
        kept = self.phases[: self.phase_count]
        self.phases = kept + [default_phase(i) for i in range(len(kept), self.phase_count)]

    @property
    def current_phase(self) -> PhaseDraft:
        return self.phases[self.phase_index]

    def configure_phase(
        self,
        index: int,
        name: Optional[str] = None,
        duration: Optional[int] = None,
        total_marks: Optional[int] = None,
        passing_score: Optional[int] = None,
    ) -> PhaseDraft:
        phase = self.phases[index]
        numbers = {"duration": duration, "total_marks": total_marks, "passing_score": passing_score}
        for field_name, value in numbers.items():
            if value is None:
                continue
            if value < 0:
                raise FormValidationError(f"{field_name} must not be negative", field=field_name)
            setattr(phase, field_name, int(value))
        if name is not None:
            phase.name = name
        return phase

    # Questions of the current phase

    def _check_question(self, question: Question) -> None:
        if isinstance(question, McqQuestion) and not question.answer_is_option:
            raise FormValidationError("Correct answer must be one of the options", field="correct_answer")

    def add_question(self, question: Question) -> int:
        if self.step != 3:
            raise FormValidationError("Questions are added in the questions step")
        self._check_question(question)
        self.current_phase.questions.append(question)
        return len(self.current_phase.questions) - 1

    def replace_question(self, index: int, question: Question) -> None:
        self._check_question(question)
        self.current_phase.questions[index] = question

    def remove_question(self, index: int) -> None:
        del self.current_phase.questions[index]

    # Navigation

    def next_step(self) -> int:
        if self.step == 1:
            if not self.title:
                raise FormValidationError("Please enter an assessment title", field="title")
            if not self.phases:
                self.phases = [default_phase(i) for i in range(self.phase_count)]
            self.step = 2
        elif self.step == 2:
            self._resize_phases()
            self.step = 3
            self.phase_index = 0
        elif self.step == 3:
            phase = self.current_phase
            if phase.points_total != phase.total_marks:
                raise FormValidationError(
                    f"Phase {self.phase_index + 1} Question Points ({phase.points_total}) "
                    f"must match Total Marks ({phase.total_marks})",
                    field="total_marks",
                )
            if self.phase_index < self.phase_count - 1:
                self.phase_index += 1
            else:
                self.step = REVIEW_STEP
        return self.step

    def previous_step(self) -> int:
        if self.step == 3 and self.phase_index > 0:
            self.phase_index -= 1
        elif self.step > 1:
            self.step -= 1
        return self.step

    # Creation

    def build_payloads(self) -> List[AssessmentCreate]:
        """Phase payloads in creation order (last phase first), without links."""
        payloads = []
        for index in reversed(range(len(self.phases))):
            phase = self.phases[index]
            description = (
                self.description if index == 0 else f"{self.description} ({phase.name})"
            )
            payloads.append(
                AssessmentCreate(
                    title=f"{self.title} - {phase.name}",
                    description=description,
                    duration=phase.duration,
                    questions=phase.questions,
                    phase=index + 1,
                    passing_score=phase.passing_score,
                    total_marks=phase.total_marks,
                )
            )
        return payloads

    async def submit(self) -> bool:
        """Create every phase, linking each to the one after it."""
        self.ensure_access()
        if self.step != REVIEW_STEP:
            raise FormValidationError("Review the assessment before creating it")

        self.created_ids = []
        try:
            for payload in self.build_payloads():
                if self.created_ids:
                    payload.next_phase_id = self.created_ids[-1]
                response = await self.api.create_assessment(payload)
                self.created_ids.append(response.id)
        except PortalAPIError as e:
            self.logger.error("Assessment creation stopped", created_ids=self.created_ids)
            self.report(e, e.message or "Failed to create assessments")
            return False

        self.logger.info("Assessment series created", phases=len(self.created_ids))
        self.notifier.success(f"Successfully created {self.phase_count} phase(s)!")
        self.redirect_to = "/interviewer/assessments"
        return True
