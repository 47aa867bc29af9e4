"""
Type definitions for snapshot trace analysis.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TypedDict


DEPTH_ENCODINGS = ('hex', 'indent')


@dataclass
class TraceNode:
    """One deserialized object (or event) in the reconstructed tree."""
    id: int
    name: str
    data: str = ''
    depth: int = -1
    children: List['TraceNode'] = field(default_factory=list)
    parent: Optional['TraceNode'] = field(default=None, repr=False, compare=False)
    ref: Optional[str] = None
    backref: Optional[str] = None

    def add_child(self, node: 'TraceNode') -> None:
        self.children.append(node)
        node.parent = self


@dataclass
class BackrefEntry:
    """A named back-reference slot and every node pointing at it."""
    name: str
    defining_node: Optional[TraceNode] = None
    referencing_nodes: List[TraceNode] = field(default_factory=list)


@dataclass
class ScriptRecord:
    """Timing for one deserialized script."""
    id: int
    timestamp: float
    elapsed_since_last: float
    name: Optional[str] = None
    node_id: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'timestamp': self.timestamp,
            'elapsed_ms': self.elapsed_since_last,
            'name': self.name,
            'node_id': None if self.node_id is None else str(self.node_id),
        }


@dataclass
class ObjectRecord:
    """Timing window for one deserialized heap object."""
    timestamp: float
    raw_payload: str
    duration: float
    node_id: int = 0
    script_id: int = -1

    @property
    def pointer(self) -> str:
        return self.raw_payload.split(' ', 1)[0]

    @property
    def description(self) -> str:
        parts = self.raw_payload.split(' ', 1)
        return parts[1] if len(parts) > 1 else ''

    def to_dict(self) -> Dict[str, Any]:
        return {
            'timestamp': self.timestamp,
            'data': self.raw_payload,
            'pointer': self.pointer,
            'description': self.description,
            'duration_ms': self.duration,
            'node_id': str(self.node_id),
            'script_id': self.script_id,
        }


class AggregatedStats(TypedDict):
    """Ranked and grouped statistics handed to the renderer."""
    objects: List[ObjectRecord]
    scripts: List[ScriptRecord]
    total_object_time_ms: float
    total_script_time_ms: float
    namespace_percentages: Dict[str, float]
    chart_rows: List[list]


class TraceConfig:
    """Configuration for snapshot trace analysis."""
    
    def __init__(
        self,
        depth_encoding: str = 'hex',
        runs: int = 0,
        object_time_threshold: float = 0.02,
        fallback_top_n: int = 10
    ):
        """
        Initialize snapshot trace analysis configuration.
        
        Args:
            depth_encoding: How tree-node lines carry their depth.
                            'hex' - a leading hexadecimal depth token (default)
                            'indent' - the number of leading whitespace characters
                            A trace uses exactly one of these; lines that do not
                            match the chosen encoding are skipped as malformed.
            
            runs: Number of repeated event logs to average script timestamps over.
                  Default: 0 (use the script events embedded in the trace itself)
            
            object_time_threshold: Objects whose duration (ms) does not exceed this
                                   value are left out of the top objects table.
            
            fallback_top_n: Number of objects kept when nothing exceeds the threshold.
        """
        if depth_encoding not in DEPTH_ENCODINGS:
            raise ValueError(f"Unknown depth encoding {depth_encoding!r}, expected one of {DEPTH_ENCODINGS}")
        if runs < 0:
            raise ValueError("runs must be non-negative")
        self.depth_encoding = depth_encoding
        self.runs = runs
        self.object_time_threshold = object_time_threshold
        self.fallback_top_n = fallback_top_n
