"""
Formatting utilities.
"""

from core.units import AreaUnit


def format_inr(amount: float, symbol: str = "₹") -> str:
    """
    Format an amount in rupees with Indian digit grouping.

    Rounds to the nearest whole rupee.

    Args:
        amount: The amount in rupees.
        symbol: Currency symbol prefix.

    Returns:
        Formatted string, e.g. "₹ 48,00,000".
    """
    rounded = int(round(amount))
    sign = "-" if rounded < 0 else ""
    digits = str(abs(rounded))

    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        digits = ",".join(groups + [tail])

    return f"{symbol} {sign}{digits}"


def format_area(value: float, unit: AreaUnit, decimals: int = 0) -> str:
    """
    Format an area with its unit label.

    Args:
        value: Area magnitude in ``unit``.
        unit: The area unit.
        decimals: Number of decimal places.

    Returns:
        Formatted string, e.g. "1200 sqft".
    """
    if decimals == 0:
        return f"{int(round(value))} {unit.label}"
    return f"{value:.{decimals}f} {unit.label}"

