import math
import re
import unicodedata


def lower_lay_string(s: str) -> str:
    """
    Normalize a string with NFKD and drop combining marks (accents).
    """
    normalized = unicodedata.normalize('NFKD', s)
    return ''.join(c for c in normalized if not unicodedata.combining(c))


def collapse(s: str) -> str:
    """
    Collapse runs of whitespace into a single space and trim both ends.
    """
    return re.sub(r'\s+', ' ', s).strip()


def fold_for_search(s: str) -> str:
    # accent- and case-insensitive form used by library search
    return collapse(lower_lay_string(s or "")).casefold()


def format_time(seconds) -> str:
    """
    m:ss with zero-padded seconds. Unknown, NaN, infinite or negative -> "0:00".
    """
    try:
        seconds = float(seconds)
    except (TypeError, ValueError):
        return "0:00"
    if math.isnan(seconds) or math.isinf(seconds) or seconds < 0:
        return "0:00"
    s = int(seconds)
    m = s // 60
    s = s % 60
    return f"{m}:{s:02d}"


def format_ms(ms) -> str:
    if ms is None:
        return "0:00"
    return format_time(ms / 1000.0)


def clamp(value: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return min(hi, max(lo, float(value)))
