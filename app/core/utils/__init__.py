"""유틸리티 모듈"""

from app.core.utils.datetime import (
    UTC,
    days_since,
    ensure_utc,
    format_iso,
    now_utc,
    parse_iso,
)
from app.core.utils.time import elapsed_ms, measure_time

__all__ = [
    # datetime
    "UTC",
    "now_utc",
    "ensure_utc",
    "format_iso",
    "parse_iso",
    "days_since",
    # time measurement
    "elapsed_ms",
    "measure_time",
]
