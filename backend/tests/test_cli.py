import sys
from pathlib import Path

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from app.cli import run_workflow
from app.engines.questions.resolver import resolve
from app.engines.submissions.clients import LocalProductClient
from app.engines.submissions.store import SubmissionStore


def _scripted(replies):
    pending = list(replies)
    prompts: list[str] = []

    def ask(prompt: str) -> str:
        prompts.append(prompt)
        return pending.pop(0)

    return ask, prompts


def test_run_workflow_submits_with_numbered_choices():
    store = SubmissionStore()
    questions, _ = resolve("Clothing")
    replies = ["Linen Shirt", "clothing", "Breathable summer shirt"]
    replies += ["1" if q.choices else "Linen" for q in questions]
    replies += ["y"]
    ask, _prompts = _scripted(replies)
    output: list[str] = []

    submitted_id = run_workflow(LocalProductClient(store), ask=ask, say=output.append)

    assert submitted_id == 1
    stored = store.list()[0]
    assert stored.answers["clothing_sustainable"] == "Yes"
    assert stored.answers["clothing_material"] == "Linen"
    assert any(line.startswith("Submitted product #1") for line in output)


def test_run_workflow_reports_missing_fields_then_recovers():
    store = SubmissionStore()
    questions, _ = resolve("Other")
    replies = ["", "", ""]
    replies += ["Desk Lamp", "furniture", "Adjustable lamp"]
    replies += ["2" if q.choices else "Steel" for q in questions]
    replies += ["q"]
    ask, _prompts = _scripted(replies)
    output: list[str] = []

    assert run_workflow(LocalProductClient(store), ask=ask, say=output.append) is None
    assert "! Please fill in all fields" in output
    assert store.count == 0


def test_main_returns_error_code_when_input_is_interrupted(monkeypatch, capsys):
    from app import cli

    for error in (EOFError, KeyboardInterrupt):
        def interrupted(_client, error=error):
            raise error()

        monkeypatch.setattr(cli, "run_workflow", interrupted)
        assert cli.main(["submit"]) == 1
        assert "Aborted" in capsys.readouterr().err
