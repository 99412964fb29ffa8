"""
initsort Reporting

Data a display layer needs: rendered tables, JSON documents, run summaries
and the list of units whose declared priority is out of date.
"""

from .updates import (
    PriorityUpdate,
    pending_priority_updates,
)
from .render import (
    analysis_rows,
    format_rows,
    render_order,
    render_table,
    render_json,
    render_run_report,
)

__all__ = [
    "PriorityUpdate",
    "pending_priority_updates",
    "analysis_rows",
    "format_rows",
    "render_order",
    "render_table",
    "render_json",
    "render_run_report",
]
