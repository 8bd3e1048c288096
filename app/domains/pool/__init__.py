"""Pool 도메인 모듈

추천 후보 풀을 주기적으로 갱신하고 캐시에서 읽는 도메인입니다.

구조:
    - types.py: 갱신/로드 결과 타입
    - parsers.py: 탐색 API 응답 추출 전략
    - client.py: 탐색/메타데이터/썸네일 API 클라이언트
    - service.py: 풀 갱신, 캐시 저장소 래퍼
    - schemas.py: Pydantic 스키마 (Response)
    - router.py: API 엔드포인트 (갱신은 API Key 인증)
    - exceptions.py: 도메인 예외
"""

from app.domains.pool.exceptions import PoolErrorCode, PoolStatusNotFoundException
from app.domains.pool.service import (
    CandidatePoolManager,
    CandidatePoolStore,
    passes_activity_filter,
)
from app.domains.pool.types import (
    PoolLoadResult,
    PoolLoadStatus,
    PoolRefreshOutcome,
    PoolRefreshResult,
)

__all__ = [
    "CandidatePoolManager",
    "CandidatePoolStore",
    "PoolErrorCode",
    "PoolLoadResult",
    "PoolLoadStatus",
    "PoolRefreshOutcome",
    "PoolRefreshResult",
    "PoolStatusNotFoundException",
    "passes_activity_filter",
]
