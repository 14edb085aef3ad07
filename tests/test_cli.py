"""
Tests for the command-line interface.
"""

import io
import json

import pytest

from marriage_quiz import cli
from marriage_quiz.navigator import AdvancePolicy
from marriage_quiz.notice import NoticeBoard
from marriage_quiz.participation import ParticipationTracker
from marriage_quiz.quiz.flow import build_flow_from_data
from marriage_quiz.quiz.questions import QUESTION_SECTIONS
from marriage_quiz.session import QuizSession
from marriage_quiz.storage import MemoryStorage


class NoopToken:
    def cancel(self):
        pass


def scripted_input(lines):
    """Input function that replays lines, then ends with EOF."""
    remaining = list(lines)

    def _input(prompt=""):
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    return _input


def make_session(storage, policy=AdvancePolicy.REQUIRE_ANSWER):
    return QuizSession(
        flow=build_flow_from_data(QUESTION_SECTIONS),
        tracker=ParticipationTracker(storage),
        policy=policy,
        notices=NoticeBoard(scheduler=lambda delay, cb: NoopToken()),
    )


class TestRunInteractive:
    """Tests for the terminal quiz loop."""

    def test_option_number_and_check(self):
        """Test picking an option by number and checking it."""
        storage = MemoryStorage()
        session = make_session(storage)
        out = io.StringIO()

        cli.run_interactive(session, scripted_input(["1", "/c", "/q"]), out)

        assert session.navigator.answer_for("finance-account") == "공동 통장 하나로 관리"
        assert "정답" in out.getvalue()

    def test_notice_on_unanswered_next(self):
        """Test the answer-required notice is printed."""
        out = io.StringIO()
        session = make_session(MemoryStorage())

        cli.run_interactive(session, scripted_input(["/n"]), out)

        assert "답변을 입력해야" in out.getvalue()
        assert session.navigator.position == 0

    def test_repeated_notice_is_printed_each_time(self):
        """Test the same notice shows again on a second refused move."""
        out = io.StringIO()
        session = make_session(MemoryStorage())

        cli.run_interactive(session, scripted_input(["/n", "/n"]), out)

        assert out.getvalue().count("답변을 입력해야") == 2

    def test_free_text_on_choice_question(self):
        """Test typing text that isn't an option leaves the question unanswered."""
        out = io.StringIO()
        session = make_session(MemoryStorage())

        cli.run_interactive(session, scripted_input(["아무거나", "/n"]), out)

        assert cli.CHOOSE_OPTION_TEXT in out.getvalue()
        assert session.navigator.answer_for("finance-account") == ""
        assert session.navigator.position == 0
        # Options are listed again after the hint
        assert out.getvalue().count("1. 공동 통장 하나로 관리") == 3

    def test_invalid_choices_do_not_complete(self):
        """Test a run with unlisted choice answers never marks participation."""
        storage = MemoryStorage()
        session = make_session(storage, policy=AdvancePolicy.FREE)
        lines = []
        for item in session.flow:
            lines += ["아무거나" if item.kind.value == "single-choice" else "답변", "/n"]

        cli.run_interactive(session, scripted_input(lines), io.StringIO())

        assert session.navigator.is_last
        assert "marriage-quiz-participated" not in storage.values

    def test_complete_run_marks_participation(self):
        """Test answering everything records participation."""
        storage = MemoryStorage()
        session = make_session(storage)
        lines = []
        for item in session.flow:
            lines += ["1" if item.kind.value == "single-choice" else "답변", "/n"]

        out = io.StringIO()
        cli.run_interactive(session, scripted_input(lines), out)

        assert storage.values["marriage-quiz-participated"] == "true"
        assert "이미 참여하셨습니다" in out.getvalue()

    def test_retake(self):
        """Test /retake clears the flag."""
        storage = MemoryStorage({"marriage-quiz-participated": "true"})
        session = make_session(storage)

        cli.run_interactive(session, scripted_input(["/retake", "/q"]), io.StringIO())

        assert "marriage-quiz-participated" not in storage.values


class TestResolveAnswer:
    """Tests for option number mapping."""

    def test_number_to_value(self):
        """Test numbers pick options, text passes through."""
        flow = build_flow_from_data(QUESTION_SECTIONS)
        choice, text = flow[0], flow[1]

        assert cli.resolve_answer(choice, "2") == "각자 관리 후 비율대로 분담"
        assert cli.resolve_answer(text, "1") == "1"

    def test_exact_option_value(self):
        """Test an option typed out in full is accepted."""
        choice = build_flow_from_data(QUESTION_SECTIONS)[0]

        assert cli.resolve_answer(choice, "한 사람이 전담") == "한 사람이 전담"

    @pytest.mark.parametrize("text", ["9", "0", "아무거나", "공동 통장", ""])
    def test_anything_else_is_rejected(self, text):
        """Test out-of-range numbers and free text don't answer a choice question."""
        choice = build_flow_from_data(QUESTION_SECTIONS)[0]

        assert cli.resolve_answer(choice, text) is None


class TestMain:
    """Tests for the CLI entry point."""

    def test_status_and_reset(self, tmp_path, capsys):
        """Test status and reset against file storage."""
        path = str(tmp_path / "storage.json")
        tracker_args = ["--storage", "file", "--storage-path", path]

        assert cli.main(tracker_args + ["status"]) == 0
        assert "미참여" in capsys.readouterr().out

        (tmp_path / "storage.json").write_text(
            json.dumps({"marriage-quiz-participated": "true"}), encoding="utf-8"
        )
        cli.main(tracker_args + ["status"])
        assert "참여 완료" in capsys.readouterr().out

        assert cli.main(tracker_args + ["reset"]) == 0
        cli.main(tracker_args + ["status"])
        assert "미참여" in capsys.readouterr().out

    def test_list_json(self, capsys):
        """Test listing the flow as JSON."""
        assert cli.main(["--storage", "memory", "list", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)

        assert data[0]["sectionId"] == "finance"
        assert data[0]["orderInSection"] == 1

    def test_list_text(self, capsys):
        """Test listing the flow as text."""
        assert cli.main(["--storage", "memory", "list"]) == 0
        assert "[재정 1/2]" in capsys.readouterr().out

    def test_bad_questions_file(self, tmp_path, capsys):
        """Test a bad question file exits with an error."""
        path = tmp_path / "bad.json"
        path.write_text("nope", encoding="utf-8")

        assert cli.main(["--storage", "memory", "--questions", str(path), "list"]) == 1
        assert "Error" in capsys.readouterr().err

    def test_option_without_value(self, tmp_path, capsys):
        """Test a malformed option in a question file exits with an error."""
        path = tmp_path / "questions.json"
        path.write_text(json.dumps([{
            "id": "s",
            "title": "S",
            "questions": [{"id": "q", "type": "single", "prompt": "?", "options": [{"label": "x"}]}],
        }]), encoding="utf-8")

        assert cli.main(["--storage", "memory", "--questions", str(path), "list"]) == 1
        assert "Error" in capsys.readouterr().err
