"""Timed exam session for one candidate attempt at one assessment."""

import asyncio
from enum import Enum
from typing import Callable, Dict, List, Optional

import structlog

from portal.config import settings
from portal.integrations.gateway import PortalAPIError
from portal.notifications import Notifier
from portal.schemas import AnswerSubmission, Assessment, ExamProgress, Question, SubmitResult
from portal.services.portal_api import PortalAPI

logger = structlog.get_logger()


class ExamState(str, Enum):
    """Lifecycle of an exam session."""

    LOADING = "loading"
    IN_PROGRESS = "in_progress"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"
    ALREADY_SUBMITTED = "already_submitted"
    ERROR = "error"


TERMINAL_STATES = (ExamState.SUBMITTED, ExamState.ALREADY_SUBMITTED, ExamState.ERROR)


def build_submit_payload(
    questions: List[Question], answers: Dict[str, str]
) -> List[AnswerSubmission]:
    """One answer per question in question order, "" when unanswered."""
    return [
        AnswerSubmission(question_id=question.id, value=answers.get(question.id) or "")
        for question in questions
    ]


def format_time(seconds: int) -> str:
    """Format a countdown as m:ss."""
    minutes, secs = divmod(max(seconds, 0), 60)
    return f"{minutes}:{secs:02d}"


class ExamSession:
    """Drives one timed attempt from loading to a single submission.

    The countdown runs as its own asyncio task. Manual and timed submits go
    through submit(), which latches before any network call so that at
    most one submit request is in flight per session.
    """

    def __init__(
        self,
        api: PortalAPI,
        assessment_id: str,
        notifier: Optional[Notifier] = None,
        on_complete: Optional[Callable[[], None]] = None,
        tick_interval: Optional[float] = None,
    ):
        """Initialize session.

        Args:
            api: Backend API
            assessment_id: Assessment to take
            notifier: Channel for user notices
            on_complete: Called once the attempt is submitted or was
                already submitted before
            tick_interval: Seconds between countdown ticks
        """
        self.api = api
        self.assessment_id = assessment_id
        self.notifier = notifier or Notifier()
        self.on_complete = on_complete
        self.tick_interval = tick_interval if tick_interval is not None else settings.EXAM_TICK_INTERVAL

        self.state = ExamState.LOADING
        self.assessment: Optional[Assessment] = None
        self.index = 0
        self._answers: Dict[str, str] = {}
        self.time_left: Optional[int] = None
        self.last_error: Optional[str] = None
        self.result: Optional[SubmitResult] = None

        self._submit_latched = False
        self._timer_task: Optional[asyncio.Task] = None
        self.logger = logger.bind(assessment_id=assessment_id)

    # Loading

    async def load(self, start_timer: bool = True) -> ExamState:
        """Fetch the assessment and the caller's submissions together.

        Args:
            start_timer: Start the countdown task when the attempt opens

        Returns:
            State after loading
        """
        if self.state is not ExamState.LOADING:
            raise ExamSessionError(f"Session already loaded ({self.state.value})")

        try:
            assessment, submissions = await asyncio.gather(
                self.api.get_assessment(self.assessment_id),
                self.api.my_submissions(),
            )
        except PortalAPIError as e:
            self.state = ExamState.ERROR
            self.last_error = e.message
            self.logger.error("Failed to fetch assessment", error=e.message)
            self.notifier.error("Failed to load assessment. Please try again.")
            return self.state

        if any(s.assessment_id == self.assessment_id for s in submissions):
            self.state = ExamState.ALREADY_SUBMITTED
            self.logger.info("Assessment already submitted")
            self.notifier.info("You have already submitted this assessment.")
            self._complete()
            return self.state

        self.assessment = assessment
        self.time_left = assessment.duration * 60
        self.state = ExamState.IN_PROGRESS
        self.logger.info(
            "Exam started",
            questions=assessment.question_count,
            time_left=self.time_left,
        )

        if start_timer:
            self.start_timer()
        return self.state

    # Navigation and answers

    def _require_in_progress(self) -> None:
        if self.state is not ExamState.IN_PROGRESS:
            raise ExamSessionError(f"Exam is not in progress ({self.state.value})")

    @property
    def question_count(self) -> int:
        return self.assessment.question_count if self.assessment else 0

    @property
    def current_question(self) -> Optional[Question]:
        if not self.assessment or not (0 <= self.index < self.question_count):
            return None
        return self.assessment.questions[self.index]

    @property
    def is_last_question(self) -> bool:
        return self.index == self.question_count - 1

    @property
    def answers(self) -> Dict[str, str]:
        return dict(self._answers)

    def answer_for(self, question_id: str) -> Optional[str]:
        return self._answers.get(question_id)

    def select_answer(self, value: str) -> None:
        """Store the answer for the current question, replacing any earlier one."""
        self._require_in_progress()
        question = self.current_question
        if question is None:
            raise ExamSessionError("No question to answer")
        self._answers[question.id] = value

    def next(self) -> int:
        self._require_in_progress()
        if self.index < self.question_count - 1:
            self.index += 1
        return self.index

    def previous(self) -> int:
        self._require_in_progress()
        if self.index > 0:
            self.index -= 1
        return self.index

    # Countdown

    @property
    def is_low_time(self) -> bool:
        return self.time_left is not None and self.time_left < settings.LOW_TIME_THRESHOLD

    def start_timer(self) -> None:
        """Start the countdown task if the attempt has time on the clock."""
        if self._timer_task and not self._timer_task.done():
            return
        if self.state is not ExamState.IN_PROGRESS or not self.time_left:
            return
        self._timer_task = asyncio.create_task(
            self._run_timer(), name=f"exam-timer-{self.assessment_id}"
        )

    async def _run_timer(self) -> None:
        while self.state is ExamState.IN_PROGRESS and self.time_left and self.time_left > 0:
            await asyncio.sleep(self.tick_interval)
            await self.tick()

    async def tick(self) -> None:
        """Advance the countdown by one second; at zero, auto-submit once."""
        if self.state is not ExamState.IN_PROGRESS or not self.time_left or self.time_left <= 0:
            return

        self.time_left -= 1
        if self.time_left <= 0:
            self.time_left = 0
            self.logger.info("Time is up, submitting")
            await self.submit(auto_submit=True)

    def _stop_timer(self) -> None:
        task = self._timer_task
        self._timer_task = None
        if task is None or task.done():
            return
        # The timer itself may be the caller; its loop exits on the state change
        if task is asyncio.current_task():
            return
        task.cancel()

    # Submission

    async def submit(self, auto_submit: bool = False) -> bool:
        """Submit the attempt.

        Returns:
            True if this call submitted the attempt; False if it was refused
            because a submit is already under way, the session is not in
            progress, or the request failed
        """
        if self._submit_latched or self.state is not ExamState.IN_PROGRESS:
            self.logger.debug("Submit refused", state=self.state.value, auto_submit=auto_submit)
            return False

        self._submit_latched = True
        self.state = ExamState.SUBMITTING
        self._stop_timer()

        succeeded = False
        try:
            answers = build_submit_payload(self.assessment.questions, self._answers)
            self.logger.info("Submitting exam", auto_submit=auto_submit, answers=len(answers))
            self.result = await self.api.submit_assessment(self.assessment.id, answers)
            succeeded = True
        except PortalAPIError as e:
            self.last_error = e.message
            self.logger.error("Exam submission failed", error=e.message)
            self.notifier.error(e.message or "Failed to submit assessment. Please try again.")
            return False
        finally:
            if not succeeded:
                # Back to an interactive state; the candidate may retry by hand
                self.state = ExamState.IN_PROGRESS
                self._submit_latched = False

        self.state = ExamState.SUBMITTED
        if auto_submit:
            self.notifier.info("Time's up! Your assessment has been automatically submitted.")
        else:
            self.notifier.success("Assessment submitted successfully!")
        self._complete()
        return True

    def _complete(self) -> None:
        if self.on_complete:
            self.on_complete()

    async def close(self) -> None:
        """Stop the countdown; called when leaving the exam screen."""
        task = self._timer_task
        self._stop_timer()
        if task and task is not asyncio.current_task():
            try:
                await task
            except asyncio.CancelledError:
                pass

    def progress(self) -> ExamProgress:
        """Snapshot for rendering."""
        return ExamProgress(
            assessment_id=self.assessment_id,
            title=self.assessment.title if self.assessment else "",
            state=self.state.value,
            question_index=self.index,
            question_count=self.question_count,
            time_left=self.time_left,
            clock=format_time(self.time_left) if self.time_left is not None else "--:--",
            low_time=self.is_low_time,
            answered=sum(1 for value in self._answers.values() if value),
        )


class ExamSessionError(Exception):
    """Raised when an exam session is used outside its current state."""

    pass
