"""Processors for snapshot trace reconstruction and analysis."""

from .event_correlator import EventCorrelator
from .backref_resolver import BackrefResolver
from .hierarchy_builder import HierarchyBuilder
from .timeline_builder import ScriptTimelineBuilder, ObjectTimelineBuilder
from .aggregator import TimingAggregator
from .file_processor import TraceFileProcessor

__all__ = [
    "EventCorrelator",
    "BackrefResolver",
    "HierarchyBuilder",
    "ScriptTimelineBuilder",
    "ObjectTimelineBuilder",
    "TimingAggregator",
    "TraceFileProcessor",
]
