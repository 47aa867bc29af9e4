"""
HTML labels for tree nodes: escaped text plus back-reference and source links.
"""

from typing import TYPE_CHECKING

from markupsafe import Markup, escape

from ..core.types import TraceNode

if TYPE_CHECKING:
    from ..processors.backref_resolver import BackrefResolver

DESERIALIZER_SOURCE_ROOT = (
    "https://chromium.googlesource.com/v8/v8/+/refs/heads/roll/src/snapshot/deserializer.cc"
)

# Node name -> line in the deserializer that emits it
DESERIALIZER_SOURCE_LINES = {
    'NewObject': '1081',
    'RootArray': '1146',
    'ReadOnlyHeapRef': '1120',
    'Backref': '1102',
}


def escape_label(text: str) -> Markup:
    """
    Escape node text for the tree widget.
    
    'Script' is rewritten to 'Xscript' so the widget never sees a
    script-like token in a title.
    """
    return Markup(str(escape(text)).replace('Script', 'Xscript'))


def render_node_label(node: TraceNode, backrefs: "BackrefResolver") -> Markup:
    """
    Render the display label of a node.
    
    A defining node gets one numbered marker per referencing node, in
    discovery order, wrapped in the 'backref-<name>' anchor. A referencing
    node links back to that anchor; a dangling reference is shown without
    a link.
    
    Args:
        node: Tree node
        backrefs: BackrefResolver populated by the trace pass
        
    Returns:
        Markup label
    """
    text = f"{node.name} {node.data}" if node.data else node.name
    label = escape_label(text)
    
    if node.ref:
        entry = backrefs.get(node.ref)
        if entry is not None and entry.defining_node is node and entry.referencing_nodes:
            markers = Markup('').join(
                Markup('<sup><a href="#{}">[{}]</a></sup>').format(node_id, index)
                for index, node_id in backrefs.reference_markers(node.ref)
            )
            label += Markup('<span id="backref-{}">{}</span>').format(node.ref, markers)
    
    if node.backref:
        anchor = backrefs.anchor_for(node.backref)
        if anchor is not None:
            label += Markup(' <a href="#{}">(backref {})</a>').format(anchor, node.backref)
        else:
            label += Markup(' <span class="dangling">(backref {})</span>').format(node.backref)
    
    source_line = DESERIALIZER_SOURCE_LINES.get(node.name)
    if source_line:
        label += Markup(
            ' <a class="flright" target="_blank" href="{}#{}">'
            '<span style="font-size: 0.5em"> [src]</span></a>'
        ).format(DESERIALIZER_SOURCE_ROOT, source_line)
    
    return label
