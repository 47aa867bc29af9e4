"""Core components for snapshot trace analysis."""

from .errors import (
    SnapshotTraceError,
    MalformedTrace,
    MissingCorrelationData,
    UnresolvedBackref,
    UnrecognizedNamespace,
    TreeInvariantError,
)
from .types import TraceNode, BackrefEntry, ScriptRecord, ObjectRecord, TraceConfig
from .context import ParseContext
from .analyzer import SnapshotAnalyzer

__all__ = [
    "SnapshotAnalyzer",
    "ParseContext",
    "SnapshotTraceError",
    "MalformedTrace",
    "MissingCorrelationData",
    "UnresolvedBackref",
    "UnrecognizedNamespace",
    "TreeInvariantError",
    "TraceNode",
    "BackrefEntry",
    "ScriptRecord",
    "ObjectRecord",
    "TraceConfig",
]
