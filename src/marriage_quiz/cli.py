"""
Command-line interface for marriage-quiz

Plays the quiz in a terminal, and inspects or clears the participation flag.
"""

import sys
import argparse
import json
import logging
from typing import Callable, List, Optional, TextIO

from .config import config
from .errors import QuestionDataError
from .navigator import AdvancePolicy
from .participation import ParticipationTracker
from .quiz.evaluator import EvaluationResult, ResultStatus
from .quiz.flow import FlowItem
from .quiz.questions import load_flow
from .quiz.schema import QuestionKind
from .session import QuizSession, QuizView, Screen
from .storage import get_storage

RESULT_COLORS = {
    ResultStatus.CORRECT: "\033[92m",  # Green
    ResultStatus.PARTIAL: "\033[93m",  # Yellow
    ResultStatus.INCORRECT: "\033[91m",  # Red
}
RESET = "\033[0m"

HELP_TEXT = """Type an answer (or an option number) and press enter.
  /n  다음 질문      /p  이전 질문      /c  정답 체크
  /r  전체 리셋      /retake 재응시하기  /q  종료"""

CHOOSE_OPTION_TEXT = "보기 중에서 번호를 골라 주세요."


def format_question(session: QuizSession) -> str:
    """Format the current question for terminal output."""
    nav = session.navigator
    item = nav.current
    if item is None:
        return "질문이 없습니다."

    kind_label = "객관식" if item.kind == QuestionKind.SINGLE_CHOICE else "서술형"
    lines = [
        "",
        "=" * 60,
        f"[{item.section_title}] 섹션 진행 {nav.section_progress} · 전체 진행 {nav.overall_progress}",
        "=" * 60,
        f"({kind_label}) {item.prompt}",
    ]
    if item.question.description:
        lines.append(f"  {item.question.description}")

    current_answer = nav.answer_for(item.id)
    if item.kind == QuestionKind.SINGLE_CHOICE:
        for number, option in enumerate(item.question.options, start=1):
            marker = "●" if option.value == current_answer else "○"
            lines.append(f"  {marker} {number}. {option.label}")
    else:
        if item.question.guidance:
            lines.append(f"  {item.question.guidance}")
        if current_answer:
            lines.append(f"  > {current_answer}")

    lines.append("답변이 저장되었어요." if nav.has_answer() else "답변을 입력해 주세요.")
    return "\n".join(lines)


def format_result(result: EvaluationResult) -> str:
    """Format an evaluation result with its status color."""
    color = RESULT_COLORS[result.status]
    return f"{color}{result.label}{RESET} {result.message}"


def resolve_answer(item: FlowItem, text: str) -> Optional[str]:
    """
    Turn typed input into an answer for the current question.

    Choice questions take an option number or an exact option value;
    anything else gives None. Text questions take the input as is.
    """
    if item.kind != QuestionKind.SINGLE_CHOICE:
        return text

    options = item.question.options
    choice = text.strip()
    if choice.isdigit():
        index = int(choice) - 1
        if 0 <= index < len(options):
            return options[index].value
    if text in item.question.option_values:
        return text
    return None


def run_interactive(
    session: QuizSession,
    input_fn: Callable[[str], str] = input,
    out: TextIO = sys.stdout,
) -> None:
    """Drive a session from terminal input until the user quits."""

    def say(text: str = ""):
        print(text, file=out)

    session.start()
    say(HELP_TEXT)
    notices_seen = session.notices.shown_count

    while True:
        if session.screen == Screen.QUIZ and session.view == QuizView.QUESTION:
            say(format_question(session))
        elif session.view == QuizView.ALREADY_PARTICIPATED:
            say("이미 참여하셨습니다. /retake 로 재응시하거나 /q 로 종료하세요.")
        elif session.view == QuizView.EMPTY:
            say("질문이 없습니다.")

        try:
            line = input_fn("> ")
        except EOFError:
            break
        command = line.strip()

        if command == "/q":
            break
        elif command == "/n":
            session.next()
        elif command == "/p":
            session.previous()
        elif command == "/c":
            result = session.check()
            if result is not None:
                say(format_result(result))
        elif command == "/r":
            session.reset()
        elif command == "/retake":
            session.retake()
        elif command.startswith("/"):
            say(HELP_TEXT)
        elif session.view == QuizView.QUESTION:
            answer = resolve_answer(session.navigator.current, line)
            if answer is None:
                say(CHOOSE_OPTION_TEXT)
            else:
                session.answer(answer)

        # Every show() counts, even when the text repeats
        notice = session.notices.message
        if notice and session.notices.shown_count != notices_seen:
            say(f"! {notice}")
        notices_seen = session.notices.shown_count

    nav = session.navigator
    say(f"응답 완료: {nav.answered_count}/{len(nav.flow)}")
    session.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="marriage-quiz",
        description="예비 부부 모의고사 - sequential quiz for couples",
        epilog="Example: marriage-quiz play --questions my_questions.json",
    )
    parser.add_argument(
        "--questions",
        help="JSON question file (sections or flat questions with category)",
    )
    parser.add_argument(
        "--storage",
        choices=["file", "memory", "null"],
        default=config.storage.backend,
        help=f"Where the participation flag is kept (default: {config.storage.backend})",
    )
    parser.add_argument(
        "--storage-path",
        default=config.storage.get_path(),
        help="Path for the file storage",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    play_parser = subparsers.add_parser("play", help="Take the quiz (default)")
    play_parser.add_argument(
        "--free-advance",
        action="store_true",
        help="Allow moving on without answering",
    )

    subparsers.add_parser("status", help="Show whether the quiz was completed")
    subparsers.add_parser("reset", help="Clear the participation flag")

    list_parser = subparsers.add_parser("list", help="List the question flow")
    list_parser.add_argument(
        "--json",
        action="store_true",
        help="Output the flow as JSON",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    storage = get_storage(args.storage, path=args.storage_path)
    tracker = ParticipationTracker(storage)
    command = args.command or "play"

    if command == "status":
        print("참여 완료" if tracker.read() else "미참여")
        return 0

    if command == "reset":
        tracker.reset()
        print("참여 기록을 초기화했습니다.")
        return 0

    try:
        flow = load_flow(args.questions)
    except QuestionDataError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if command == "list":
        if args.json:
            print(json.dumps([item.to_dict() for item in flow], indent=2, ensure_ascii=False))
        else:
            for number, item in enumerate(flow, start=1):
                print(f"{number:>3}. [{item.section_title} {item.section_progress}] {item.prompt}")
        return 0

    policy = AdvancePolicy.FREE if getattr(args, "free_advance", False) else None
    session = QuizSession(flow=flow, tracker=tracker, policy=policy)
    run_interactive(session)
    return 0


if __name__ == "__main__":
    sys.exit(main())
