import sys
from datetime import datetime, timezone
from pathlib import Path

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

import pytest

from app.engines.reports import renderer
from app.engines.reports.renderer import (
    EMPTY_TITLE,
    export_report,
    format_label,
    layout_report,
    render_submission_pdf,
    report_filename,
)
from app.engines.submissions.store import Submission
from app.errors import RenderError

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _submission(answers=None, name="Pure Organic Honey", description="Raw wildflower honey.") -> Submission:
    return Submission(
        id=1,
        product_name=name,
        product_type="Food",
        description=description,
        answers=answers if answers is not None else {"food_organic": "Yes"},
        submitted_at=NOW,
    )


def test_format_label():
    assert format_label("food_organic") == "Food Organic"
    assert format_label("cosmetic-cruelty_free") == "Cosmetic Cruelty Free"
    assert format_label("shelfLife") == "Shelf Life"


def test_report_filename_replaces_non_alphanumerics():
    assert report_filename("Pure Organic Honey") == "Pure_Organic_Honey_Report.pdf"
    assert report_filename("Café & Co.") == "Caf____Co__Report.pdf"


def test_empty_answers_render_placeholder_and_no_cards():
    layout = layout_report(_submission(answers={}), now=NOW)
    assert layout.cards == []
    assert [block.data["title"] for block in layout.blocks("empty")] == [EMPTY_TITLE]
    assert layout.blocks("summary") == []


def test_one_card_per_answer_with_verbatim_values():
    answers = {
        "food_organic": "Yes",
        "food_allergens": "Contains: Milk, Soy",
        "food_expiry": "1-4 weeks (Perishable)",
    }
    layout = layout_report(_submission(answers=answers), now=NOW)

    assert [card.data["value"] for card in layout.cards] == list(answers.values())
    assert [card.data["label"] for card in layout.cards] == ["Food Organic", "Food Allergens", "Food Expiry"]
    assert [card.data["key"] for card in layout.cards] == list(answers)
    assert layout.blocks("empty") == []
    assert layout.blocks("summary")[0].data["total"] == 3
    assert layout.blocks("end_note")[0].data["text"] == "End of review - All 3 questions answered"


def test_header_shows_generation_date():
    layout = layout_report(_submission(), now=NOW)
    assert layout.generated_on == "May 1, 2024"
    assert layout.pages[0][0].kind == "header"
    assert layout.blocks("summary")[0].data["completed_on"] == "May 1, 2024"


def test_cards_paginate_without_crossing_bottom_limit():
    answers = {f"question_{i}": "A fairly long answer " * 6 for i in range(25)}
    layout = layout_report(_submission(answers=answers), now=NOW)

    assert layout.page_count > 1
    assert len(layout.cards) == 25
    for page in layout.pages:
        for block in page:
            if block.kind == "card":
                assert block.top + block.height <= renderer.BOTTOM_LIMIT


def test_render_is_deterministic_pdf():
    first = render_submission_pdf(_submission(), now=NOW)
    second = render_submission_pdf(_submission(), now=NOW)
    assert first.startswith(b"%PDF-")
    assert first == second
    assert b"Food Organic" in first
    assert b"Page 1 of 1" in first


def test_footer_counts_all_pages():
    answers = {f"question_{i}": "Answer " * 30 for i in range(20)}
    submission = _submission(answers=answers)
    total = layout_report(submission, now=NOW).page_count
    pdf = render_submission_pdf(submission, now=NOW)
    assert total > 1
    assert f"Page {total} of {total}".encode() in pdf


def test_render_failure_raises_render_error(monkeypatch):
    def boom(*_args, **_kwargs):
        raise ValueError("layout exploded")

    monkeypatch.setattr(renderer, "layout_report", boom)
    with pytest.raises(RenderError) as excinfo:
        render_submission_pdf(_submission(), now=NOW)
    assert str(excinfo.value) == "Failed to generate PDF. Please try again."


def test_export_report_writes_named_file(tmp_path):
    target = export_report(_submission(), tmp_path, now=NOW)
    assert target == tmp_path / "Pure_Organic_Honey_Report.pdf"
    assert target.read_bytes().startswith(b"%PDF-")


def test_export_report_leaves_no_file_on_failure(tmp_path, monkeypatch):
    def boom(*_args, **_kwargs):
        raise ValueError("layout exploded")

    monkeypatch.setattr(renderer, "layout_report", boom)
    with pytest.raises(RenderError):
        export_report(_submission(), tmp_path, now=NOW)
    assert list(tmp_path.iterdir()) == []


def test_oversized_answer_continues_across_pages():
    value = "word " * 3000
    layout = layout_report(_submission(answers={"food_allergens": value, "food_organic": "Yes"}), now=NOW)

    segments = [block for page in layout.pages for block in page if block.kind in ("card", "card_continued")]
    assert layout.page_count > 2
    assert len(layout.cards) == 2
    assert [card.data["index"] for card in layout.cards] == [1, 2]
    assert layout.cards[0].data["value"] == value
    for block in segments:
        assert block.top + block.height <= renderer.BOTTOM_LIMIT

    first_card_lines = [
        line for block in segments if block.data["index"] == 1 for line in block.data["value_lines"]
    ]
    assert " ".join(first_card_lines).split() == value.split()


def test_oversized_answer_renders_every_page_footer():
    submission = _submission(answers={"food_allergens": "word " * 3000})
    total = layout_report(submission, now=NOW).page_count
    pdf = render_submission_pdf(submission, now=NOW)
    assert f"Page {total} of {total}".encode() in pdf
