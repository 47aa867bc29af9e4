"""
Snapshot Analyzer - Snapshot Deserialization Trace Analysis Tool
"""

__version__ = "1.0.0"

from .core.analyzer import SnapshotAnalyzer
from .core.types import ObjectRecord, ScriptRecord, TraceConfig, TraceNode

__all__ = ["SnapshotAnalyzer", "ObjectRecord", "ScriptRecord", "TraceConfig", "TraceNode"]
