"""Report rendering and cosmetic augmentation."""

from covmerge.report.augment import ADDITION_HTML, augment_html, augment_report
from covmerge.report.renderer import GoCoverRenderer, ReportRenderer

__all__ = [
    "ADDITION_HTML",
    "GoCoverRenderer",
    "ReportRenderer",
    "augment_html",
    "augment_report",
]
