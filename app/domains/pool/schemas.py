"""Pool 도메인 스키마 정의"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class PoolDiagnosticsResponse(BaseModel):
    """후보 풀 진단 응답"""

    cache_key: str
    exists: bool
    raw_length: int = Field(..., description="저장된 원문 길이")
    json_ok: bool
    json_error: Optional[str] = None
    schema_ok: bool
    schema_error: Optional[str] = None
    item_count: int
    updated_at: Optional[str] = None
    cache_error: Optional[str] = None


class PoolStatusResponse(BaseModel):
    """마지막 갱신 상태 기록"""

    record: dict[str, Any]
