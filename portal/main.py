"""Command line front end for the assessment portal."""

import asyncio
import getpass
import json
import sys
from argparse import ArgumentParser, Namespace
from typing import Any, Awaitable, Callable, List, Optional

import structlog
from pydantic import BaseModel

from portal.config import settings
from portal.integrations.gateway import ApiGateway
from portal.logging import configure_logging
from portal.notifications import Notice, Notifier
from portal.schemas import InterviewStatus, McqQuestion, Role
from portal.screens import (
    AssessmentSubmissionsScreen,
    AuthScreen,
    CandidateAssessmentsScreen,
    CandidateDashboardScreen,
    CandidateInterviewsScreen,
    FormValidationError,
    InterviewerAssessmentsScreen,
    InterviewerInterviewsScreen,
    InterviewSlotFormScreen,
    NotAuthenticatedError,
    PublicIdentifyScreen,
    PublicResultScreen,
    PublicTakeAssessmentScreen,
    ResultScreen,
    TakeAssessmentScreen,
)
from portal.services import ExamSessionError, ExamState, PortalAPI
from portal.session import AuthSession

logger = structlog.get_logger()


class CommandContext:
    """Objects shared by every command of one invocation."""

    def __init__(self, session: AuthSession, api: PortalAPI, notifier: Notifier):
        self.session = session
        self.api = api
        self.notifier = notifier

    def screen(self, screen_class, **kwargs):
        return screen_class(self.api, self.session, self.notifier, **kwargs)


def print_notice(notice: Notice) -> None:
    print(f"[{notice.level}] {notice.message}", file=sys.stderr)


def emit(data: Any) -> None:
    """Print models or lists of models as JSON on stdout."""
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json", by_alias=True)
    elif isinstance(data, list):
        data = [
            item.model_dump(mode="json", by_alias=True) if isinstance(item, BaseModel) else item
            for item in data
        ]
    print(json.dumps(data, indent=2, default=str))


def _status(ok: bool) -> int:
    return 0 if ok else 1


# Auth


async def cmd_login(ctx: CommandContext, args: Namespace) -> int:
    screen = ctx.screen(AuthScreen)
    password = args.password or getpass.getpass("Password: ")
    route = await screen.login(args.email, password)
    if route:
        print(f"Logged in as {ctx.session.role.value}, continue at {route}")
    return _status(route is not None)


async def cmd_signup(ctx: CommandContext, args: Namespace) -> int:
    screen = ctx.screen(AuthScreen)
    password = args.password or getpass.getpass("Password: ")
    confirm = args.password or getpass.getpass("Confirm password: ")
    route = await screen.signup(args.email, password, confirm, Role(args.role), name=args.name)
    if route:
        print(f"Account created, continue at {route}")
    return _status(route is not None)


async def cmd_logout(ctx: CommandContext, args: Namespace) -> int:
    print(f"Logged out, continue at {ctx.screen(AuthScreen).logout()}")
    return 0


async def cmd_whoami(ctx: CommandContext, args: Namespace) -> int:
    if not ctx.session.is_authenticated:
        print("Not logged in")
        return 1
    expires_at = ctx.session.expires_at
    emit(
        {
            "user_id": ctx.session.user_id,
            "role": ctx.session.role.value if ctx.session.role else None,
            "expires_at": expires_at.isoformat() if expires_at else None,
        }
    )
    return 0


async def cmd_google_url(ctx: CommandContext, args: Namespace) -> int:
    print(ctx.screen(AuthScreen).google_login_url(Role(args.role)))
    return 0


async def cmd_set_password(ctx: CommandContext, args: Namespace) -> int:
    password = getpass.getpass("New password: ")
    confirm = getpass.getpass("Confirm password: ")
    return _status(await ctx.screen(AuthScreen).set_password(password, confirm))


# Candidate


async def cmd_dashboard(ctx: CommandContext, args: Namespace) -> int:
    screen = ctx.screen(CandidateDashboardScreen)
    await screen.load()
    emit(
        {
            "available": screen.available_count,
            "completed": screen.completed_count,
            "cards": [c.model_dump(mode="json", by_alias=True) for c in screen.cards],
        }
    )
    return 0


async def cmd_assessments(ctx: CommandContext, args: Namespace) -> int:
    screen = ctx.screen(CandidateAssessmentsScreen)
    await screen.load()
    emit(screen.cards)
    return 0


async def _read_line(prompt: str) -> str:
    """Read stdin in a worker thread so the countdown keeps running."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, input, prompt)


def _show_question(screen: TakeAssessmentScreen) -> None:
    exam = screen.exam
    question = exam.current_question
    if question is None:
        print("This assessment has no questions, type :s to submit")
        return
    progress = exam.progress()
    print(
        f"\n[{progress.clock}] Question {progress.question_index + 1}/{progress.question_count}"
        f" ({question.points} pts, {question.type})"
    )
    print(question.text)
    if isinstance(question, McqQuestion):
        for number, option in enumerate(question.options, start=1):
            print(f"  {number}. {option}")
    current = exam.answer_for(question.id)
    if current:
        print(f"  Current answer: {current}")


def _parse_answer(screen: TakeAssessmentScreen, line: str) -> str:
    question = screen.exam.current_question
    if isinstance(question, McqQuestion) and line.isdigit():
        number = int(line)
        if 1 <= number <= len(question.options):
            return question.options[number - 1]
    return line


async def cmd_take(ctx: CommandContext, args: Namespace) -> int:
    screen_class = PublicTakeAssessmentScreen if args.public else TakeAssessmentScreen
    screen = ctx.screen(screen_class, assessment_id=args.assessment_id)
    state = await screen.load()
    if state is not ExamState.IN_PROGRESS:
        if screen.next_route:
            print(f"Continue at {screen.next_route}")
        return _status(state is ExamState.ALREADY_SUBMITTED)

    print("Type an answer, or :n next, :p previous, :s submit, :q quit")
    waiting = False
    screen_complete = screen.exam.on_complete

    def on_complete() -> None:
        screen_complete()
        if waiting:
            # A blocked input() cannot be interrupted; the next line ends the loop
            print("\nTime's up, your answers were submitted. Press Enter to see your result.")

    screen.exam.on_complete = on_complete
    try:
        while screen.exam.state is ExamState.IN_PROGRESS:
            _show_question(screen)
            waiting = True
            line = (await _read_line("> ")).strip()
            waiting = False
            # The countdown may have submitted while we were waiting
            if screen.exam.state is not ExamState.IN_PROGRESS:
                break
            if line == ":n":
                screen.exam.next()
            elif line == ":p":
                screen.exam.previous()
            elif line == ":s":
                await screen.exam.submit()
            elif line == ":q":
                return 1
            elif line:
                screen.exam.select_answer(_parse_answer(screen, line))
                if not screen.exam.is_last_question:
                    screen.exam.next()
    finally:
        await screen.close()

    if screen.exam.result:
        emit(screen.exam.result)
    if screen.next_route:
        print(f"Continue at {screen.next_route}")
    return _status(screen.exam.state is ExamState.SUBMITTED)


async def cmd_result(ctx: CommandContext, args: Namespace) -> int:
    screen_class = PublicResultScreen if args.public else ResultScreen
    screen = ctx.screen(screen_class, assessment_id=args.assessment_id)
    await screen.load()
    if screen.result is None:
        return 1
    emit(screen.result)
    return 0


async def cmd_public_start(ctx: CommandContext, args: Namespace) -> int:
    screen = ctx.screen(PublicIdentifyScreen, assessment_id=args.assessment_id)
    await screen.load()
    if screen.redirect_to is None:
        await screen.start(args.name, args.email, args.phone)
    if screen.redirect_to:
        print(f"Continue at {screen.redirect_to}")
    return _status(screen.redirect_to is not None)


async def cmd_interviews(ctx: CommandContext, args: Namespace) -> int:
    screen = ctx.screen(CandidateInterviewsScreen)
    await screen.load()
    emit({"available": [i.model_dump(mode="json") for i in screen.available],
          "mine": [i.model_dump(mode="json") for i in screen.mine]})
    return 0


async def cmd_book(ctx: CommandContext, args: Namespace) -> int:
    screen = ctx.screen(CandidateInterviewsScreen)
    return _status(await screen.book(args.interview_id))


async def cmd_cancel_interview(ctx: CommandContext, args: Namespace) -> int:
    if ctx.session.role == Role.CANDIDATE:
        screen = ctx.screen(CandidateInterviewsScreen)
    else:
        screen = ctx.screen(InterviewerInterviewsScreen)
    return _status(await screen.cancel(args.interview_id))


# Interviewer


async def cmd_my_assessments(ctx: CommandContext, args: Namespace) -> int:
    screen = ctx.screen(InterviewerAssessmentsScreen)
    await screen.load()
    screen.search_term = args.search
    emit(
        [
            {"id": a.id, "title": a.title, "phase": a.phase, "questions": a.question_count}
            for a in screen.filtered
        ]
    )
    return 0


async def cmd_delete_assessment(ctx: CommandContext, args: Namespace) -> int:
    screen = ctx.screen(InterviewerAssessmentsScreen)
    return _status(await screen.delete(args.assessment_id))


async def cmd_submissions(ctx: CommandContext, args: Namespace) -> int:
    screen = ctx.screen(AssessmentSubmissionsScreen, assessment_id=args.assessment_id)
    await screen.load()
    emit(screen.submissions)
    return 0


async def cmd_slots(ctx: CommandContext, args: Namespace) -> int:
    screen = ctx.screen(InterviewerInterviewsScreen)
    await screen.load()
    screen.set_filter(args.status)
    emit({"stats": screen.stats.model_dump(by_alias=True),
          "interviews": [i.model_dump(mode="json") for i in screen.filtered]})
    return 0


async def cmd_create_slot(ctx: CommandContext, args: Namespace) -> int:
    screen = ctx.screen(InterviewSlotFormScreen)
    await screen.load()
    screen.title = args.title
    screen.description = args.description
    screen.type = args.type
    screen.date = args.date
    screen.time = args.time
    screen.duration = args.duration
    screen.meeting_link = args.meeting_link
    ok = await screen.submit()
    if ok:
        emit(screen.created)
    return _status(ok)


async def cmd_complete_interview(ctx: CommandContext, args: Namespace) -> int:
    screen = ctx.screen(InterviewerInterviewsScreen)
    return _status(await screen.complete(args.interview_id, args.notes))


Handler = Callable[[CommandContext, Namespace], Awaitable[int]]


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(prog="portal", description="Assessment portal client")
    parser.add_argument("--api-url", default=None, help=f"Backend URL (default {settings.API_URL})")
    parser.add_argument("--log-level", default=None)
    commands = parser.add_subparsers(dest="command", required=True)

    def add(name: str, handler: Handler, help_text: str) -> ArgumentParser:
        sub = commands.add_parser(name, help=help_text)
        sub.set_defaults(handler=handler)
        return sub

    sub = add("login", cmd_login, "Log in with email and password")
    sub.add_argument("--email", required=True)
    sub.add_argument("--password")

    sub = add("signup", cmd_signup, "Create an account and log in")
    sub.add_argument("--email", required=True)
    sub.add_argument("--password")
    sub.add_argument("--name", default="")
    sub.add_argument("--role", choices=[Role.CANDIDATE.value, Role.INTERVIEWER.value], default=Role.CANDIDATE.value)

    add("logout", cmd_logout, "Forget the stored session")
    add("whoami", cmd_whoami, "Show the stored session")

    sub = add("google-url", cmd_google_url, "Print the Google sign-in URL")
    sub.add_argument("--role", choices=[Role.CANDIDATE.value, Role.INTERVIEWER.value], default=Role.CANDIDATE.value)

    add("set-password", cmd_set_password, "Set a password for an OAuth account")
    add("dashboard", cmd_dashboard, "Candidate dashboard")
    add("assessments", cmd_assessments, "Candidate assessment list")

    for name, handler, help_text in (
        ("take", cmd_take, "Take an assessment"),
        ("result", cmd_result, "Show an assessment result"),
    ):
        sub = add(name, handler, help_text)
        sub.add_argument("assessment_id")
        sub.add_argument("--public", action="store_true", help="Use the shared-link flow")

    sub = add("public-start", cmd_public_start, "Identify for a shared assessment link")
    sub.add_argument("assessment_id")
    sub.add_argument("--name", required=True)
    sub.add_argument("--email", required=True)
    sub.add_argument("--phone", default="")

    add("interviews", cmd_interviews, "Bookable and booked interviews")
    sub = add("book", cmd_book, "Book an interview slot")
    sub.add_argument("interview_id")
    sub = add("cancel-interview", cmd_cancel_interview, "Cancel an interview")
    sub.add_argument("interview_id")

    sub = add("my-assessments", cmd_my_assessments, "Assessments you authored")
    sub.add_argument("--search", default="")
    sub = add("delete-assessment", cmd_delete_assessment, "Delete an assessment series")
    sub.add_argument("assessment_id")
    sub = add("submissions", cmd_submissions, "Submissions for an assessment")
    sub.add_argument("assessment_id")

    sub = add("slots", cmd_slots, "Interview slots you own")
    sub.add_argument("--status", choices=["all"] + [s.value for s in InterviewStatus], default="all")
    sub = add("create-slot", cmd_create_slot, "Publish an interview slot")
    sub.add_argument("--title", required=True)
    sub.add_argument("--type", default="Technical")
    sub.add_argument("--date", required=True, help="YYYY-MM-DD, local time")
    sub.add_argument("--time", required=True, help="HH:MM, local time")
    sub.add_argument("--duration", type=int, default=60)
    sub.add_argument("--description", default="")
    sub.add_argument("--meeting-link", default="")
    sub = add("complete-interview", cmd_complete_interview, "Mark an interview completed")
    sub.add_argument("interview_id")
    sub.add_argument("--notes", default="")

    return parser


async def main(argv: Optional[List[str]] = None) -> int:
    """Run one command and return the process exit code."""
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level)

    session = AuthSession()
    session.restore()
    ctx = CommandContext(
        session=session,
        api=PortalAPI(ApiGateway(session, base_url=args.api_url)),
        notifier=Notifier(listener=print_notice),
    )

    try:
        return await args.handler(ctx, args)
    except NotAuthenticatedError as e:
        print(f"Not authorized, continue at {e.redirect_to}", file=sys.stderr)
        return 1
    except FormValidationError as e:
        print(f"Invalid input: {e.message}", file=sys.stderr)
        return 1
    except ExamSessionError as e:
        print(f"Exam error: {e}", file=sys.stderr)
        return 1


def run() -> None:
    """Console script entry point."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Interrupted")
        sys.exit(130)


if __name__ == "__main__":
    run()
