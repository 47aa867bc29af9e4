"""
Standalone HTML report rendering.
"""

from typing import Any, Dict

from jinja2 import Environment, PackageLoader, select_autoescape

_environment = Environment(
    loader=PackageLoader('snapshot_analyzer.web', 'templates'),
    autoescape=select_autoescape(['html']),
)


def render_report(results: Dict[str, Any], title: str = 'snapshot trace') -> str:
    """
    Render prepared results as a single self-contained HTML page.
    
    Args:
        results: Output of prepare_results()
        title: Page title
        
    Returns:
        HTML document
    """
    template = _environment.get_template('report.html')
    return template.render(title=title, results=results)
