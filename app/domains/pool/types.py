"""Pool 도메인 타입 정의"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from app.domains.catalog.types import CandidatePool


class PoolRefreshOutcome(str, Enum):
    """풀 갱신 결과 구분

    NO_CANDIDATES와 ALL_FILTERED는 모두 실패지만 원인이 다릅니다.
    전자는 업스트림에서 후보를 하나도 얻지 못한 경우,
    후자는 후보는 있었지만 활동량 기준을 통과한 항목이 없는 경우입니다.
    """

    REFRESHED = "REFRESHED"
    NO_CANDIDATES = "NO_CANDIDATES"
    ALL_FILTERED = "ALL_FILTERED"
    STORE_FAILED = "STORE_FAILED"


class PoolCounts(BaseModel):
    fetched: int = 0
    enriched: int = 0
    filtered: int = 0


class PoolSample(BaseModel):
    name: str
    current_activity: int
    tags: list[str] = Field(default_factory=list)


class PoolRefreshResult(BaseModel):
    """풀 갱신 결과 (예외 대신 반환)"""

    success: bool
    outcome: PoolRefreshOutcome
    counts: PoolCounts = Field(default_factory=PoolCounts)
    updated_at: datetime
    filter: str
    sample: list[PoolSample] = Field(default_factory=list)
    error: Optional[str] = None
    diagnostics: dict[str, Any] = Field(default_factory=dict)


class PoolLoadStatus(str, Enum):
    OK = "OK"
    EMPTY = "EMPTY"
    MISSING = "MISSING"
    CORRUPT = "CORRUPT"


class PoolLoadResult(BaseModel):
    status: PoolLoadStatus
    pool: Optional[CandidatePool] = None
    error: Optional[str] = None

    @property
    def usable(self) -> bool:
        return self.status == PoolLoadStatus.OK and self.pool is not None
