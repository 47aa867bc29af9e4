"""
Mutable state threaded through a single pass over a snapshot trace.
"""

from typing import Dict, List, Optional, Tuple

from .types import ObjectRecord, ScriptRecord, TraceNode
from ..processors.backref_resolver import BackrefResolver


class ParseContext:
    """
    Everything the trace pass mutates: the node arena, the depth stack,
    back-references and the timelines. One context per trace keeps the
    parser reentrant.
    """
    
    def __init__(self, averaged_timestamps: Optional[Dict[int, float]] = None):
        self.root = TraceNode(id=0, name='root', depth=-1)
        # Arena indexed by node id; nodes[0] is the synthetic root
        self.nodes: List[TraceNode] = [self.root]
        # Path from the root to the cursor
        self.stack: List[TraceNode] = [self.root]
        self.backrefs = BackrefResolver()
        self.averaged_timestamps: Dict[int, float] = averaged_timestamps or {}
        self.scripts: List[ScriptRecord] = []
        self.scripts_by_id: Dict[int, ScriptRecord] = {}
        self.pending_details: Dict[int, Tuple[str, int]] = {}
        self.objects: List[ObjectRecord] = []
        self.skipped_lines: int = 0
    
    @property
    def cursor(self) -> TraceNode:
        return self.stack[-1]
    
    @property
    def next_node_id(self) -> int:
        """Id the next accepted tree-node line will receive."""
        return len(self.nodes)
    
    def node(self, node_id: int) -> TraceNode:
        return self.nodes[node_id]
