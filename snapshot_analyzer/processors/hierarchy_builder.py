"""
Hierarchy builder for snapshot trace nodes.
"""

from typing import TYPE_CHECKING

from ..core.errors import TreeInvariantError
from ..core.types import TraceNode
from ..extractors import LineClassifier

if TYPE_CHECKING:
    from ..core.context import ParseContext


class HierarchyBuilder:
    """Builds the object tree from depth-annotated node lines, in emission order."""
    
    def __init__(self, context: "ParseContext"):
        """
        Args:
            context: ParseContext holding the node arena and depth stack
        """
        self.context = context
    
    def add_node(self, depth: int, name: str, data: str = '') -> TraceNode:
        """
        Attach a new node under the nearest preceding node of smaller depth.
        
        The depth stack mirrors the parent chain from the root to the cursor,
        so popping it is the same walk as chasing parent links while
        cursor.depth >= depth, without re-traversing the tree.
        
        Args:
            depth: Parsed depth (>= 0)
            name: Node name
            data: Raw trailing payload
            
        Returns:
            The inserted node, which becomes the new cursor
            
        Raises:
            TreeInvariantError: If the walk would pop the root
        """
        stack = self.context.stack
        
        while stack[-1].depth >= depth:
            if len(stack) == 1:
                raise TreeInvariantError(f"depth {depth} walked past the root")
            stack.pop()
        
        node = TraceNode(id=self.context.next_node_id, name=name, data=data, depth=depth)
        stack[-1].add_child(node)
        stack.append(node)
        self.context.nodes.append(node)
        
        if name == 'Backref':
            target = LineClassifier.extract_backref_target(data)
            if target is not None:
                self.context.backrefs.register_reference(target, node)
        
        return node
    
    def define_backref(self, name: str) -> TraceNode:
        """
        Mark the current cursor node as the definition of a back-reference.
        
        Returns:
            The defining node
        """
        node = self.context.cursor
        self.context.backrefs.define(name, node)
        return node
