"""Terminal front end for the product submission workflow.

Usage:
    python -m app.cli submit
    python -m app.cli list
    python -m app.cli report 1 --out ./reports
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable

from .config import load_settings
from .engines.questions.catalog import Question
from .engines.reports.renderer import export_report
from .engines.submissions.clients import HttpProductClient, ProductClient
from .engines.submissions.workflow import SubmissionWorkflow, WorkflowStage
from .errors import ProductServiceError

logger = logging.getLogger(__name__)

Ask = Callable[[str], str]
Say = Callable[[str], None]

BACK = "back"


def _ask_question(question: Question, ask: Ask, say: Say, current: str = "") -> str:
    say(f"\n{question.prompt}")
    if current:
        say(f"  current: {current} (press enter to keep)")
    if question.help:
        say(f"  ({question.help})")
    if question.choices:
        for number, choice in enumerate(question.choices, start=1):
            say(f"  {number}. {choice}")
        raw = ask("Choice number: ").strip()
        if raw.isdigit() and 1 <= int(raw) <= len(question.choices):
            return question.choices[int(raw) - 1]
        return raw
    hint = f" [{question.placeholder}]" if question.placeholder else ""
    return ask(f"Answer{hint}: ")


def run_workflow(client: ProductClient, ask: Ask = input, say: Say = print) -> int | None:
    """Drive one submission through the three steps; returns the stored id or None if abandoned."""
    workflow = SubmissionWorkflow(client)
    while True:
        if workflow.error_message:
            say(f"! {workflow.error_message}")

        if workflow.stage is WorkflowStage.BASIC_INFO:
            say("\nStep 1 of 3: Basic Product Information")
            workflow.set_basic_info(
                ask(f"Product name [{workflow.product_name}]: ") or workflow.product_name,
                ask(f"Product type [{workflow.product_type}]: ") or workflow.product_type,
                ask(f"Description [{workflow.description}]: ") or workflow.description,
            )
            workflow.next_from_basic_info()

        elif workflow.stage is WorkflowStage.QUESTIONNAIRE:
            say(f"\nStep 2 of 3: {workflow.category} questions")
            for question in workflow.questions:
                current = workflow.answers.get(question.id, "")
                value = _ask_question(question, ask, say, current)
                workflow.set_answer(question.id, value if value.strip() else current)
            if not workflow.next_from_questionnaire():
                if ask("Type 'back' to edit basic info, or press enter to retry: ").strip().lower() == BACK:
                    workflow.back()

        else:
            say("\nStep 3 of 3: Review & Submit")
            say(f"  Product: {workflow.product_name} ({workflow.product_type})")
            say(f"  Description: {workflow.description}")
            for question in workflow.questions:
                say(f"  - {question.prompt}\n      {workflow.answers.get(question.id, '')}")
            choice = ask("Submit? [y]es / [b]ack / [q]uit: ").strip().lower()
            if choice.startswith("q"):
                return None
            if choice.startswith("b"):
                workflow.back()
                continue
            submission = workflow.submit()
            if submission is not None:
                say(f"Submitted product #{submission.id} at {submission.submitted_at.isoformat()}")
                return submission.id


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="product-submit", description="Submit and export product questionnaires")
    parser.add_argument("--api-url", default=None, help="Product API base URL (defaults to PRODUCT_API_URL)")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("submit", help="Fill in and submit a product interactively")
    sub.add_parser("list", help="List submitted products")
    report = sub.add_parser("report", help="Export a submitted product as a PDF report")
    report.add_argument("product_id", type=int)
    report.add_argument("--out", default=None, help="Output directory (defaults to REPORT_EXPORT_DIR)")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    client = HttpProductClient(args.api_url or settings.product_api_url, settings.product_api_timeout_seconds)

    try:
        if args.command == "submit":
            return 0 if run_workflow(client) is not None else 1

        products = client.list_products()
        if args.command == "list":
            print(f"{len(products)} product(s)")
            for item in products:
                print(f"#{item.id}  {item.product_name}  [{item.product_type}]  {item.submitted_at.isoformat()}")
            return 0

        match = next((item for item in products if item.id == args.product_id), None)
        if match is None:
            print(f"Product #{args.product_id} not found", file=sys.stderr)
            return 1
        out_dir = Path(args.out) if args.out else settings.report_export_dir
        print(f"PDF generated: {export_report(match, out_dir)}")
        return 0
    except ProductServiceError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except (EOFError, KeyboardInterrupt):
        print("\nAborted", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
