# snowball/utils.py
def money(x: float) -> str:
    try:
        return f"${x:,.2f}"
    except (TypeError, ValueError):
        return f"${x}"

def compact_money(x: float) -> str:
    """Axis-label style: $1.2M, $12K, $950."""
    if x >= 1_000_000:
        return f"${x / 1_000_000:.1f}M"
    if x >= 1000:
        return f"${x / 1000:.0f}K"
    return f"${x:.0f}"
