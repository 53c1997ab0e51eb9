# asview/output/__init__.py
from .base import Reporter
from .report import JSONReporter, TextReporter, report_records, summary_lines

__all__ = [
    "Reporter",
    "TextReporter",
    "JSONReporter",
    "summary_lines",
    "report_records",
]
