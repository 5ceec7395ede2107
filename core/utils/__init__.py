"""
Utility functions for Currency Rates.
"""


def format_rate(value: float | str) -> str:
    """
    Format a rate in its natural decimal form.

    Uses the shortest representation that round-trips, without a trailing
    ".0" on whole numbers: 5.2 -> "5.2", 67000.5 -> "67000.5", 0 -> "0".

    Args:
        value: The rate to format (float or numeric string).

    Returns:
        Formatted rate string.
    """
    try:
        val = float(value)
    except (ValueError, TypeError):
        return "0"

    text = repr(val)
    if text.endswith(".0"):
        text = text[:-2]
    return text
