"""
Exception types raised while analyzing a snapshot trace.
"""

from typing import Optional


class SnapshotTraceError(Exception):
    """Base class for all snapshot trace analysis errors."""


class MalformedTrace(SnapshotTraceError):
    """A tree-node line did not yield a valid depth or name."""

    def __init__(self, reason: str, line: str = '', line_number: Optional[int] = None):
        self.reason = reason
        self.line = line
        self.line_number = line_number
        location = f" (line {line_number})" if line_number is not None else ''
        super().__init__(f"Malformed trace line{location}: {reason}: {line!r}")


class MissingCorrelationData(SnapshotTraceError):
    """A script id seen in the baseline run is missing from another run."""

    def __init__(self, script_id: int, run: int):
        self.script_id = script_id
        self.run = run
        super().__init__(f"Script {script_id} has no deserialize event in run {run}")


class UnresolvedBackref(SnapshotTraceError):
    """A back-reference is pointed to but never defined."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Back-reference {name!r} has no definition")


class UnrecognizedNamespace(SnapshotTraceError):
    """A script name belongs to neither known namespace family."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown group for {name}")


class TreeInvariantError(SnapshotTraceError):
    """The depth cursor walked past the root."""
