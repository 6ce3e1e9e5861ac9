"""Tests for the command line front end."""

import pytest

from portal import main as cli
from portal.schemas import Role, SubmitResult
from portal.screens import TakeAssessmentScreen
from portal.session import AuthSession


class TestParser:
    """Argument parsing."""

    def test_create_slot_arguments(self):
        args = cli.build_parser().parse_args(
            ["create-slot", "--title", "Tech", "--date", "2026-03-01", "--time", "09:00"]
        )

        assert args.handler is cli.cmd_create_slot
        assert (args.duration, args.type, args.meeting_link) == (60, "Technical", "")

    def test_take_public_flag(self):
        args = cli.build_parser().parse_args(["take", "a1", "--public"])

        assert args.assessment_id == "a1"
        assert args.public is True

    def test_unknown_slot_status_is_rejected(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["slots", "--status", "postponed"])


class TestMain:
    """Exit codes."""

    @pytest.fixture
    def session_path(self, tmp_path, monkeypatch):
        path = str(tmp_path / "session.json")
        monkeypatch.setattr(cli, "AuthSession", lambda: AuthSession(path=path))
        return path

    @pytest.mark.asyncio
    async def test_whoami_without_session(self, session_path, capsys):
        assert await cli.main(["whoami"]) == 1

        assert "Not logged in" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_guarded_command_without_session(self, session_path, capsys):
        assert await cli.main(["my-assessments"]) == 1

        assert "continue at /login" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_form_validation_exit_code(self, session_path, capsys):
        AuthSession(path=session_path).login("tok", Role.INTERVIEWER)

        code = await cli.main(
            ["create-slot", "--title", "Tech", "--date", "2026-03-01", "--time", "09:00", "--duration", "5"]
        )

        assert code == 1
        assert "Duration must be between 15 and 240 minutes" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_logout(self, session_path):
        AuthSession(path=session_path).login("tok", Role.CANDIDATE)

        assert await cli.main(["logout"]) == 0

        assert AuthSession(path=session_path).restore() is False


class TestTake:
    """Interactive exam loop."""

    @pytest.fixture
    def take_api(self, api, make_assessment):
        api.get_assessment.return_value = make_assessment("a1")
        api.my_submissions.return_value = []
        api.submit_assessment.return_value = SubmitResult(score=5, total_marks=10, passed=False)
        return api

    @pytest.fixture
    def ctx(self, take_api, candidate_session, notifier):
        return cli.CommandContext(candidate_session, take_api, notifier)

    @pytest.fixture
    def script(self, monkeypatch):
        """Feed scripted input lines to the exam loop."""
        lines = []

        async def read_line(prompt):
            return lines.pop(0)

        monkeypatch.setattr(cli, "_read_line", read_line)
        return lines

    async def take(self, ctx, *argv):
        return await cli.cmd_take(ctx, cli.build_parser().parse_args(["take", "a1", *argv]))

    def submitted(self, api):
        _, answers = api.submit_assessment.await_args.args
        return [(a.question_id, a.value) for a in answers]

    @pytest.mark.asyncio
    async def test_option_number_then_text_then_submit(self, ctx, take_api, script, capsys):
        script.extend(["2", "Because", ":s"])

        assert await self.take(ctx) == 0

        assert self.submitted(take_api) == [("a1-q1", "4"), ("a1-q2", "Because")]
        out = capsys.readouterr().out
        assert "Question 1/2 (5 pts, MCQ)" in out
        assert "  2. 4" in out
        assert "Question 2/2 (5 pts, SUBJECTIVE)" in out
        assert '"passed": false' in out
        assert "Continue at /candidate/assessments/a1/result" in out

    @pytest.mark.asyncio
    async def test_quit_does_not_submit(self, ctx, take_api, script):
        script.extend(["2", ":q"])

        assert await self.take(ctx) == 1

        take_api.submit_assessment.assert_not_called()

    @pytest.mark.asyncio
    async def test_navigation_keeps_answers(self, ctx, take_api, script, capsys):
        script.extend([":n", "x", ":p", ":p", "3", ":s"])

        assert await self.take(ctx) == 0

        # 3 is not an option number, so it is kept as typed
        assert self.submitted(take_api) == [("a1-q1", "3"), ("a1-q2", "x")]
        assert "Current answer: x" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_assessment_without_questions(self, ctx, take_api, make_assessment, script, capsys):
        take_api.get_assessment.return_value = make_assessment("a1", questions=[])
        script.append(":s")

        assert await self.take(ctx) == 0

        assert self.submitted(take_api) == []
        assert "This assessment has no questions, type :s to submit" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_countdown_submit_ends_loop(self, ctx, take_api, monkeypatch, capsys):
        screens = []

        class RecordingScreen(TakeAssessmentScreen):
            def __init__(self, *args, **kwargs):
                super().__init__(*args, **kwargs)
                screens.append(self)

        async def read_line(prompt):
            # Time runs out while the candidate is still typing
            exam = screens[0].exam
            exam.time_left = 1
            await exam.tick()
            return "4"

        monkeypatch.setattr(cli, "TakeAssessmentScreen", RecordingScreen)
        monkeypatch.setattr(cli, "_read_line", read_line)

        assert await self.take(ctx) == 0

        assert self.submitted(take_api) == [("a1-q1", ""), ("a1-q2", "")]
        take_api.submit_assessment.assert_awaited_once()
        assert "Press Enter to see your result" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_already_submitted(self, ctx, take_api, make_submission, capsys):
        take_api.my_submissions.return_value = [make_submission("a1")]

        assert await self.take(ctx) == 0

        take_api.submit_assessment.assert_not_called()
        assert "Continue at /candidate/assessments/a1/result" in capsys.readouterr().out
