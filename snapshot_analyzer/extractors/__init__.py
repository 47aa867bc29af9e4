"""Line and event extraction utilities for snapshot traces."""

from .line_classifier import LineClassifier, ClassifiedLine
from .event_extractor import ScriptEventExtractor, ScriptEvent

__all__ = ["LineClassifier", "ClassifiedLine", "ScriptEventExtractor", "ScriptEvent"]
