"""
Result builder for report and JSON output.
"""

from typing import Any, Dict

from ..core.types import TraceNode
from ..formatters import escape_label, format_percent, format_time, render_node_label


def serialize_tree(root: TraceNode, backrefs) -> Dict[str, Any]:
    """
    Convert the object tree into plain nested dictionaries.
    
    Parent links are dropped so the result has no cycles and ids become
    strings (they double as HTML anchors). Every other node field is kept;
    the rendered HTML goes in 'label'. Iterative so that deep traces do
    not hit the recursion limit.
    
    Args:
        root: Root TraceNode
        backrefs: BackrefResolver of the same parse
        
    Returns:
        Nested dict with 'id', 'name', 'data', 'depth', 'ref', 'backref',
        'label' and 'children'
    """
    def convert(node: TraceNode) -> Dict[str, Any]:
        return {
            'id': str(node.id),
            'name': node.name,
            'data': node.data,
            'depth': node.depth,
            'ref': node.ref,
            'backref': node.backref,
            'label': str(render_node_label(node, backrefs)),
            'children': [],
        }
    
    result = convert(root)
    pending = [(root, result)]
    while pending:
        node, converted = pending.pop()
        for child in node.children:
            converted_child = convert(child)
            converted['children'].append(converted_child)
            pending.append((child, converted_child))
    
    return result


def prepare_results(analyzer) -> Dict[str, Any]:
    """
    Convert analyzer results to a structured format for JSON/HTML output.
    
    Args:
        analyzer: SnapshotAnalyzer instance with completed analysis
        
    Returns:
        Dictionary with structured results for rendering
    """
    stats = analyzer.stats
    total_object_time = stats['total_object_time_ms']
    total_script_time = stats['total_script_time_ms']
    
    objects = []
    for record in stats['objects']:
        entry = record.to_dict()
        entry.update({
            'percent': format_percent(record.duration, total_object_time),
            'duration_formatted': f"{record.duration:.3f}",
            'description_html': str(escape_label(record.description)),
        })
        objects.append(entry)
    
    scripts = []
    for record in stats['scripts']:
        entry = record.to_dict()
        entry.update({
            'percent': format_percent(record.elapsed_since_last, total_script_time),
            'elapsed_formatted': f"{record.elapsed_since_last:.3f}",
        })
        scripts.append(entry)
    
    context = analyzer.context
    final_results = {
        'summary': {
            'total_nodes': len(context.nodes) - 1,
            'skipped_lines': context.skipped_lines,
            'total_objects': len(context.objects),
            'total_scripts': len(context.scripts),
            'total_object_time_ms': total_object_time,
            'total_object_time_formatted': f"{total_object_time:.3f}",
            'total_script_time_ms': total_script_time,
            'total_script_time_formatted': f"{total_script_time:.3f}",
            'total_script_time_human': format_time(total_script_time),
            'unresolved_backrefs': context.backrefs.unresolved(),
        },
        'tree': serialize_tree(context.root, context.backrefs),
        'objects': objects,
        'scripts': scripts,
        'namespace_percentages': stats['namespace_percentages'],
        'chart_rows': stats['chart_rows'],
    }
    return final_results
