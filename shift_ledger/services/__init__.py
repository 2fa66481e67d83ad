"""Services wiring the codec to a store."""

from .submissions import SubmissionError, SubmissionService
from .summary import render_summary_line

__all__ = [
    "SubmissionError",
    "SubmissionService",
    "render_summary_line",
]
