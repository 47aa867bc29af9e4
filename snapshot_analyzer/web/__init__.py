"""Report building and rendering."""

from .result_builder import prepare_results, serialize_tree
from .renderer import render_report

__all__ = ["prepare_results", "serialize_tree", "render_report"]
