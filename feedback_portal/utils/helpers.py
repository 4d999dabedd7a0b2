from typing import Any


def safe_float(value: Any, default: float = 0.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return float(default)


def round_rating(value: Any) -> float:
    """Per-officer display precision (one decimal)."""
    return round(safe_float(value), 1)


def round_overall(value: Any) -> float:
    """Global average display precision (two decimals)."""
    return round(safe_float(value), 2)


def format_rating(value: Any) -> str:
    """'N/A' for officers nobody has rated yet, else one decimal."""
    v = safe_float(value)
    return f"{round_rating(v):.1f}" if v > 0 else "N/A"
