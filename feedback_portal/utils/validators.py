import math
import re
from typing import Any


def clean_str(val: Any, max_len: int = 255) -> str | None:
    """
    Collapse whitespace, trim, enforce max length. Returns None if empty after cleaning.
    Spreadsheet blanks (None, NaN, the strings "nan"/"none") count as empty.
    """
    if val is None:
        return None
    if isinstance(val, float) and math.isnan(val):
        return None
    s = re.sub(r"\s+", " ", str(val)).strip()
    if not s or s.lower() in ("nan", "none"):
        return None
    return s[:max_len]
