"""Report rendering: JSON, HTML and PDF."""

from .html_report import MAX_LISTED_NODES, render_report_card, render_report_html
from .json_report import report_to_dict, result_to_dict, result_to_json
from .labels import LABELS, label
from .pdf_report import PDF_OPTIONS, export_pdf

__all__ = [
    "LABELS",
    "MAX_LISTED_NODES",
    "PDF_OPTIONS",
    "export_pdf",
    "label",
    "render_report_card",
    "render_report_html",
    "report_to_dict",
    "result_to_dict",
    "result_to_json",
]
