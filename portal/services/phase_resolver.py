"""Resolve multi-phase assessment series into display cards.

An assessment series is a forward chain of assessments linked through
``next_phase_id``, starting at a root (phase 1 or no phase). For each root
the resolver walks the chain past every passed phase and reports the next
actionable phase together with the action to offer:

- Start: nothing submitted in the series yet
- Resume: at least one phase passed, the next one is open
- Completed: the last phase is passed
- Failed: a phase was submitted without passing (dashboard only)

The candidate dashboard and the plain assessments list disagree on failed
phases. The dashboard shows Failed; the list only counts passed
submissions, so a failed phase keeps whatever status was set before it.
Both behaviours are kept, selected by ResolverVariant.
"""

from enum import Enum
from typing import Dict, Iterable, List, Optional

import structlog

from portal.schemas import Assessment, AssessmentCard, CardStatus, Submission

logger = structlog.get_logger()


class ResolverVariant(str, Enum):
    """Call site whose failure semantics to apply."""

    DASHBOARD = "dashboard"
    LIST = "list"


def _first_submissions(
    submissions: Iterable[Submission], passed_only: bool
) -> Dict[str, Submission]:
    """Index submissions by assessment, keeping the first match in input order."""
    index: Dict[str, Submission] = {}
    for submission in submissions:
        if passed_only and not submission.passed:
            continue
        index.setdefault(submission.assessment_id, submission)
    return index


def resolve_series(
    assessments: List[Assessment],
    submissions: List[Submission],
    variant: ResolverVariant = ResolverVariant.DASHBOARD,
) -> List[AssessmentCard]:
    """Build one card per root assessment.

    Args:
        assessments: Every assessment visible to the caller
        submissions: The caller's submissions
        variant: DASHBOARD reports Failed; LIST ignores unpassed submissions

    Returns:
        Cards in the order the roots appear in ``assessments``
    """
    variant = ResolverVariant(variant)
    by_id = {a.id: a for a in assessments}
    by_assessment = _first_submissions(
        submissions, passed_only=variant is ResolverVariant.LIST
    )
    # A well-formed chain visits each assessment at most once
    max_steps = len(assessments)

    cards = []
    for root in assessments:
        if not root.is_root:
            continue

        current = root
        phase = root.phase or 1
        status = CardStatus.START
        steps = 0

        while True:
            submission = by_assessment.get(current.id)
            if submission is None:
                break

            if not submission.passed:
                status = CardStatus.FAILED
                break

            if not current.next_phase_id:
                status = CardStatus.COMPLETED
                break

            next_assessment: Optional[Assessment] = by_id.get(current.next_phase_id)
            if next_assessment is None:
                # Dangling link: stay on the passed phase with the current status
                break

            steps += 1
            if steps >= max_steps:
                logger.warning(
                    "Phase chain exceeds assessment count, stopping",
                    root_id=root.id,
                    assessment_id=current.id,
                    next_phase_id=current.next_phase_id,
                )
                break

            current = next_assessment
            phase = next_assessment.phase or (phase + 1)
            status = CardStatus.RESUME

        cards.append(
            AssessmentCard(
                id=current.id,
                display_title=root.title,
                description=root.description,
                phase=phase,
                duration=current.duration,
                question_count=current.question_count,
                status=status,
            )
        )

    return cards
