"""PDF reports for product submissions."""

from .renderer import export_report, format_label, layout_report, render_submission_pdf, report_filename

__all__ = [
    "export_report",
    "format_label",
    "layout_report",
    "render_submission_pdf",
    "report_filename",
]
