"""Output formatting utilities."""

from .time_formatter import format_time, format_percent, percent_of
from .node_label import render_node_label, escape_label

__all__ = ["format_time", "format_percent", "percent_of", "render_node_label", "escape_label"]
