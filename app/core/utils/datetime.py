"""날짜/시간 유틸리티

업스트림 API는 "2024-03-01T12:34:56.1234567Z" 처럼 소수점 7자리와
"Z" 접미사를 섞어서 반환하므로 파싱 시 정규화합니다.
"""

import re
from datetime import datetime, timezone
from typing import Any, Optional

UTC = timezone.utc

_FRACTION_PATTERN = re.compile(r"\.(\d+)")


def now_utc() -> datetime:
    """현재 UTC 시간 반환"""
    return datetime.now(UTC)


def ensure_utc(dt: datetime) -> datetime:
    """naive datetime은 UTC로 간주"""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def format_iso(dt: datetime) -> str:
    """ISO 8601 형식으로 포맷 (UTC)"""
    return ensure_utc(dt).isoformat()


def parse_iso(value: Any) -> Optional[datetime]:
    """ISO 8601 문자열 파싱

    Args:
        value: ISO 8601 문자열 또는 datetime (그 외 타입은 None)

    Returns:
        UTC datetime, 파싱할 수 없으면 None
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    # 마이크로초(6자리)를 넘는 소수점은 잘라냄
    text = _FRACTION_PATTERN.sub(
        lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1
    )

    try:
        return ensure_utc(datetime.fromisoformat(text))
    except ValueError:
        return None


def days_since(dt: datetime, now: Optional[datetime] = None) -> float:
    """경과 일수 (소수 포함)"""
    reference = ensure_utc(now) if now else now_utc()
    return (reference - ensure_utc(dt)).total_seconds() / 86400
