"""PDF report for a single product submission.

Layout is computed first as plain data (``layout_report``) so the total page
count is known before any page is drawn; ``render_submission_pdf`` then
paints each block with reportlab.
"""

import logging
import os
import re
import tempfile
from dataclasses import dataclass, field
from datetime import datetime, timezone
from io import BytesIO
from pathlib import Path
from typing import Any

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from ...errors import RenderError
from ..submissions.store import Submission

logger = logging.getLogger(__name__)

PAGE_WIDTH, PAGE_HEIGHT = A4
MARGIN = 20 * mm
CONTENT_WIDTH = PAGE_WIDTH - 2 * MARGIN
HEADER_HEIGHT = 35 * mm
LINE_HEIGHT = 5 * mm
BOTTOM_LIMIT = PAGE_HEIGHT - 30 * mm
CARD_GAP = 7 * mm

BRAND = (79, 70, 229)
ANSWER_GREEN = (34, 197, 94)
FOOTER_TEXT = "Product Management System"
REPORT_TITLE = "Product Report"
SECTION_TITLE = "Product Review & Details"
SECTION_SUBTITLE = "AI-Generated questions and responses based on product information"
EMPTY_TITLE = "No questions were answered during the review process."
EMPTY_HINT = "Complete the multi-step form to generate detailed review questions."
RENDER_FAILED_MESSAGE = "Failed to generate PDF. Please try again."


def format_label(key: str) -> str:
    text = re.sub(r"[_-]", " ", str(key or ""))
    text = re.sub(r"([a-z])([A-Z])", r"\1 \2", text)
    text = re.sub(r"\b\w", lambda match: match.group(0).upper(), text)
    return text.strip()


def report_filename(product_name: str) -> str:
    return f"{re.sub(r'[^a-zA-Z0-9]', '_', product_name or '')}_Report.pdf"


def _long_date(value: datetime) -> str:
    return f"{value:%B} {value.day}, {value.year}"


def _short_date(value: datetime) -> str:
    return f"{value:%b} {value.day}, {value.year}"


def _wrap(text: str, font: str, size: float, width: float) -> list[str]:
    lines: list[str] = []
    for paragraph in str(text or "").splitlines() or [""]:
        lines.extend(simpleSplit(paragraph, font, size, width) or [""])
    return lines


@dataclass
class Block:
    kind: str
    top: float
    height: float
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class ReportLayout:
    title: str
    generated_on: str
    pages: list[list[Block]]

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def blocks(self, kind: str) -> list[Block]:
        return [block for page in self.pages for block in page if block.kind == kind]

    @property
    def cards(self) -> list[Block]:
        return self.blocks("card")


class _Paginator:
    def __init__(self) -> None:
        self.pages: list[list[Block]] = [[]]
        self.y = 0.0

    def place(self, kind: str, height: float, gap: float = 0.0, **data: Any) -> Block:
        if self.y + height > BOTTOM_LIMIT and self.pages[-1]:
            self.pages.append([])
            self.y = MARGIN
        block = Block(kind=kind, top=self.y, height=height, data=data)
        self.pages[-1].append(block)
        self.y += height + gap
        return block

    def new_page(self) -> None:
        self.pages.append([])
        self.y = MARGIN


def _place_card(
    pager: _Paginator,
    index: int,
    key: str,
    label: str,
    value: str,
    q_lines: list[str],
    a_lines: list[str],
    question_height: float,
) -> None:
    # Answers taller than a page continue on following pages as unnumbered segments.
    chrome = 16 * mm
    total = question_height + len(a_lines) * LINE_HEIGHT + chrome
    if total <= BOTTOM_LIMIT - MARGIN:
        pager.place(
            "card",
            total,
            gap=CARD_GAP,
            index=index,
            key=key,
            label=label,
            value=value,
            label_lines=q_lines,
            value_lines=a_lines,
            question_height=question_height,
            answer_height=len(a_lines) * LINE_HEIGHT + 6 * mm,
        )
        return

    if BOTTOM_LIMIT - pager.y < question_height + chrome + LINE_HEIGHT and pager.pages[-1]:
        pager.new_page()
    remaining = list(a_lines)
    first = True
    while remaining:
        head = question_height if first else 0.0
        fit = max(1, int((BOTTOM_LIMIT - pager.y - head - chrome - 0.01) // LINE_HEIGHT))
        chunk, remaining = remaining[:fit], remaining[fit:]
        data: dict[str, Any] = {
            "index": index,
            "key": key,
            "value_lines": chunk,
            "question_height": head,
            "answer_height": len(chunk) * LINE_HEIGHT + 6 * mm,
            "label_lines": q_lines if first else [],
        }
        if first:
            data.update(label=label, value=value)
        pager.place(
            "card" if first else "card_continued",
            head + len(chunk) * LINE_HEIGHT + chrome,
            gap=0.0 if remaining else CARD_GAP,
            **data,
        )
        if remaining:
            pager.new_page()
        first = False


def layout_report(submission: Submission, now: datetime | None = None) -> ReportLayout:
    generated = now or datetime.now(timezone.utc)
    pager = _Paginator()

    pager.place("header", HEADER_HEIGHT, date=_long_date(generated))
    pager.y = 50 * mm
    pager.place("name", 18 * mm, value=submission.product_name)
    pager.place("type", 16 * mm, value=format_label(submission.product_type))

    desc_lines = _wrap(submission.description, "Helvetica", 10, CONTENT_WIDTH)
    pager.place("label", 6 * mm, value="DESCRIPTION")
    for line in desc_lines:
        pager.place("text_line", LINE_HEIGHT, value=line)
    pager.y += 10 * mm
    pager.place("separator", 10 * mm)
    pager.place("section", 18 * mm)

    answers = list(submission.answers.items())
    if not answers:
        pager.place("empty", 20 * mm, title=EMPTY_TITLE, hint=EMPTY_HINT)
    else:
        pager.place(
            "summary",
            12 * mm,
            gap=6 * mm,
            total=len(answers),
            completed_on=_short_date(submission.submitted_at),
        )
        for index, (key, value) in enumerate(answers, start=1):
            label = format_label(key)
            q_lines = _wrap(label, "Helvetica-Bold", 10, CONTENT_WIDTH - 20 * mm)
            a_lines = _wrap(str(value), "Helvetica", 9, CONTENT_WIDTH - 26 * mm)
            question_height = len(q_lines) * LINE_HEIGHT + 8 * mm
            _place_card(pager, index, key, label, str(value), q_lines, a_lines, question_height)
        plural = "" if len(answers) == 1 else "s"
        pager.y += 4 * mm
        pager.place("end_note", 5 * mm, text=f"End of review - All {len(answers)} question{plural} answered")

    return ReportLayout(
        title=f"{submission.product_name} - {REPORT_TITLE}",
        generated_on=_long_date(generated),
        pages=pager.pages,
    )


def _fill(c: canvas.Canvas, rgb: tuple[int, int, int]) -> None:
    c.setFillColorRGB(*(channel / 255 for channel in rgb))


def _stroke(c: canvas.Canvas, rgb: tuple[int, int, int]) -> None:
    c.setStrokeColorRGB(*(channel / 255 for channel in rgb))


def _y(top: float) -> float:
    return PAGE_HEIGHT - top


def _draw_block(c: canvas.Canvas, block: Block) -> None:
    top = block.top
    data = block.data
    kind = block.kind

    if kind == "header":
        _fill(c, BRAND)
        c.rect(0, _y(HEADER_HEIGHT), PAGE_WIDTH, HEADER_HEIGHT, stroke=0, fill=1)
        c.setFillColorRGB(1, 1, 1)
        c.setFont("Helvetica-Bold", 20)
        c.drawString(MARGIN, _y(15 * mm), REPORT_TITLE)
        c.setFont("Helvetica", 9)
        c.drawString(MARGIN, _y(22 * mm), data["date"])
    elif kind in ("name", "type"):
        _fill(c, (100, 100, 100))
        c.setFont("Helvetica-Bold", 9)
        c.drawString(MARGIN, _y(top), "PRODUCT NAME" if kind == "name" else "PRODUCT TYPE")
        _fill(c, (0, 0, 0))
        if kind == "name":
            c.setFont("Helvetica-Bold", 16)
            c.drawString(MARGIN, _y(top + 7 * mm), data["value"])
        else:
            c.setFont("Helvetica", 11)
            c.drawString(MARGIN, _y(top + 6 * mm), data["value"])
    elif kind == "label":
        _fill(c, (100, 100, 100))
        c.setFont("Helvetica-Bold", 9)
        c.drawString(MARGIN, _y(top), data["value"])
    elif kind == "text_line":
        _fill(c, (0, 0, 0))
        c.setFont("Helvetica", 10)
        c.drawString(MARGIN, _y(top), data["value"])
    elif kind == "separator":
        _stroke(c, (200, 200, 200))
        c.setLineWidth(0.5 * mm)
        c.line(MARGIN, _y(top), PAGE_WIDTH - MARGIN, _y(top))
    elif kind == "section":
        _fill(c, BRAND)
        c.rect(MARGIN - 2 * mm, _y(top + 10 * mm), 3 * mm, 12 * mm, stroke=0, fill=1)
        c.setFont("Helvetica-Bold", 12)
        c.drawString(MARGIN + 3 * mm, _y(top + 4 * mm), SECTION_TITLE)
        _fill(c, (120, 120, 120))
        c.setFont("Helvetica-Oblique", 8)
        c.drawString(MARGIN + 3 * mm, _y(top + 9 * mm), SECTION_SUBTITLE)
    elif kind == "empty":
        _fill(c, (250, 250, 250))
        c.roundRect(MARGIN, _y(top + block.height), CONTENT_WIDTH, block.height, 2 * mm, stroke=0, fill=1)
        _fill(c, (150, 150, 150))
        c.setFont("Helvetica-Oblique", 10)
        c.drawCentredString(MARGIN + CONTENT_WIDTH / 2, _y(top + 10 * mm), data["title"])
        c.setFont("Helvetica-Oblique", 8)
        c.drawCentredString(MARGIN + CONTENT_WIDTH / 2, _y(top + 15 * mm), data["hint"])
    elif kind == "summary":
        _fill(c, (245, 247, 250))
        c.roundRect(MARGIN, _y(top + block.height), CONTENT_WIDTH, block.height, 2 * mm, stroke=0, fill=1)
        _fill(c, BRAND)
        c.setFont("Helvetica-Bold", 9)
        c.drawString(MARGIN + 4 * mm, _y(top + 5 * mm), f"Total Questions: {data['total']}")
        _fill(c, (100, 100, 100))
        c.setFont("Helvetica", 9)
        c.drawString(MARGIN + 4 * mm, _y(top + 9 * mm), f"Review completed on {data['completed_on']}")
    elif kind in ("card", "card_continued"):
        _draw_card(c, block)
    elif kind == "end_note":
        _fill(c, (150, 150, 150))
        c.setFont("Helvetica-Oblique", 8)
        c.drawCentredString(PAGE_WIDTH / 2, _y(top), data["text"])


def _draw_card(c: canvas.Canvas, block: Block) -> None:
    data = block.data
    top = block.top

    _fill(c, (252, 252, 252))
    _stroke(c, (220, 220, 220))
    c.setLineWidth(0.4 * mm)
    c.roundRect(MARGIN, _y(top + block.height), CONTENT_WIDTH, block.height, 2 * mm, stroke=1, fill=1)

    y = top + 6 * mm
    if not data["label_lines"]:
        _draw_answer(c, data, y)
        return

    _fill(c, BRAND)
    c.circle(MARGIN + 6 * mm, _y(y + 1 * mm), 3.5 * mm, stroke=0, fill=1)
    c.setFillColorRGB(1, 1, 1)
    c.setFont("Helvetica-Bold", 9)
    c.drawCentredString(MARGIN + 6 * mm, _y(y + 2.5 * mm), str(data["index"]))

    _fill(c, BRAND)
    c.setFont("Helvetica-Bold", 8)
    c.drawString(MARGIN + 12 * mm, _y(y + 2 * mm), "Q:")
    _fill(c, (30, 30, 30))
    c.setFont("Helvetica-Bold", 10)
    for offset, line in enumerate(data["label_lines"]):
        c.drawString(MARGIN + 17 * mm, _y(y + 2 * mm + offset * LINE_HEIGHT), line)
    _draw_answer(c, data, y + data["question_height"])


def _draw_answer(c: canvas.Canvas, data: dict[str, Any], y: float) -> None:
    _fill(c, ANSWER_GREEN)
    c.setFont("Helvetica-Bold", 8)
    c.drawString(MARGIN + 12 * mm, _y(y), "A:")
    _fill(c, (248, 250, 252))
    _stroke(c, (235, 240, 245))
    c.setLineWidth(0.2 * mm)
    answer_height = data["answer_height"]
    c.roundRect(
        MARGIN + 17 * mm,
        _y(y - 2 * mm + answer_height),
        CONTENT_WIDTH - 29 * mm,
        answer_height,
        1.5 * mm,
        stroke=1,
        fill=1,
    )
    _fill(c, (50, 50, 50))
    c.setFont("Helvetica", 9)
    for offset, line in enumerate(data["value_lines"]):
        c.drawString(MARGIN + 20 * mm, _y(y + 2 * mm + offset * LINE_HEIGHT), line)


def _draw_footer(c: canvas.Canvas, page_number: int, total_pages: int) -> None:
    footer_top = PAGE_HEIGHT - 15 * mm
    _stroke(c, (200, 200, 200))
    c.setLineWidth(0.3 * mm)
    c.line(MARGIN, _y(footer_top), PAGE_WIDTH - MARGIN, _y(footer_top))
    _fill(c, (120, 120, 120))
    c.setFont("Helvetica", 8)
    c.drawCentredString(PAGE_WIDTH / 2, _y(footer_top + 5 * mm), FOOTER_TEXT)
    c.drawRightString(PAGE_WIDTH - MARGIN, _y(footer_top + 5 * mm), f"Page {page_number} of {total_pages}")


def render_submission_pdf(submission: Submission, now: datetime | None = None) -> bytes:
    """Render ``submission`` to PDF bytes; identical input and ``now`` give identical bytes."""
    try:
        layout = layout_report(submission, now)
        buf = BytesIO()
        c = canvas.Canvas(buf, pagesize=A4, invariant=1, pageCompression=0)
        c.setTitle(layout.title)
        c.setAuthor(FOOTER_TEXT)
        for page_number, blocks in enumerate(layout.pages, start=1):
            for block in blocks:
                _draw_block(c, block)
            _draw_footer(c, page_number, layout.page_count)
            c.showPage()
        c.save()
        return buf.getvalue()
    except Exception as exc:
        logger.exception("PDF generation failed for submission id=%s", getattr(submission, "id", None))
        raise RenderError(RENDER_FAILED_MESSAGE) from exc


def export_report(submission: Submission, directory: Path, now: datetime | None = None) -> Path:
    """Write the report into ``directory``; a failed render never leaves a file behind."""
    pdf_bytes = render_submission_pdf(submission, now)
    try:
        directory.mkdir(parents=True, exist_ok=True)
        target = directory / report_filename(submission.product_name)
        fd, tmp_name = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(pdf_bytes)
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as exc:
        logger.exception("Unable to write report into %s", directory)
        raise RenderError(RENDER_FAILED_MESSAGE) from exc
    logger.info("PDF generated: %s", target)
    return target
