"""
Back-reference bookkeeping for the reconstructed object tree.
"""

from typing import Dict, List, Optional, Tuple

from ..core.errors import UnresolvedBackref
from ..core.types import BackrefEntry, TraceNode


class BackrefResolver:
    """Links each back-reference name to its defining node and every node pointing at it."""
    
    def __init__(self):
        self.entries: Dict[str, BackrefEntry] = {}
    
    def _entry(self, name: str) -> BackrefEntry:
        entry = self.entries.get(name)
        if entry is None:
            entry = self.entries[name] = BackrefEntry(name)
        return entry
    
    def define(self, name: str, node: TraceNode) -> BackrefEntry:
        """
        Record node as the definition of name. A later definition of the same
        name replaces the earlier one.
        """
        entry = self._entry(name)
        entry.defining_node = node
        node.ref = name
        return entry
    
    def register_reference(self, name: str, node: TraceNode) -> BackrefEntry:
        """Record node as pointing at name, whether or not name is defined yet."""
        entry = self._entry(name)
        entry.referencing_nodes.append(node)
        node.backref = name
        return entry
    
    def get(self, name: str) -> Optional[BackrefEntry]:
        return self.entries.get(name)
    
    def reference_markers(self, name: str) -> List[Tuple[int, int]]:
        """
        Ordered-index markers for a definition.
        
        Returns:
            List of (index, referencing node id), indices 0..len-1 in discovery order
        """
        entry = self.entries.get(name)
        if entry is None:
            return []
        return [(index, node.id) for index, node in enumerate(entry.referencing_nodes)]
    
    def definition(self, name: str) -> TraceNode:
        """
        The node that defines name.
        
        Raises:
            UnresolvedBackref: If name was never defined
        """
        entry = self.entries.get(name)
        if entry is None or entry.defining_node is None:
            raise UnresolvedBackref(name)
        return entry.defining_node
    
    def anchor_for(self, name: str) -> Optional[str]:
        """
        Anchor of the definition that name resolves to.
        
        Returns:
            'backref-<name>', or None for a dangling reference
        """
        try:
            self.definition(name)
        except UnresolvedBackref:
            return None
        return f"backref-{name}"
    
    def unresolved(self) -> List[str]:
        """Names that are referenced but never defined."""
        return [name for name, entry in self.entries.items()
                if entry.defining_node is None and entry.referencing_nodes]
