"""Checked-file aggregation and untrack script rendering."""

from untracker.selection.aggregator import (
    CommandGroups,
    SelectionAggregator,
    collect_checked,
    relative_path,
    render_commands,
)

__all__ = [
    "CommandGroups",
    "SelectionAggregator",
    "collect_checked",
    "relative_path",
    "render_commands",
]
