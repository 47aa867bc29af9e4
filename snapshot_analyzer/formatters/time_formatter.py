"""
Time and share formatting for report output.
"""


def format_time(ms: float, precision: int = 3) -> str:
    """
    Format a duration in milliseconds.
    
    Args:
        ms: Time in milliseconds
        precision: Decimal places
        
    Returns:
        Formatted time string (e.g., "0.512ms", "1.204s")
    """
    if abs(ms) < 1000:
        return f"{ms:.{precision}f}ms"
    return f"{ms/1000:.{precision}f}s"


def percent_of(part: float, total: float) -> float:
    """Share of part in total, in percent; 0 when total is 0."""
    if not total:
        return 0.0
    return part / total * 100


def format_percent(part: float, total: float) -> str:
    """
    Format a share of a total with two decimals.
    
    Returns:
        e.g. "12.50"
    """
    return f"{percent_of(part, total):.2f}"
