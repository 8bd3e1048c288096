"""Pool 도메인 예외 정의"""

from enum import Enum

from app.core.exceptions import NotFoundException


class PoolErrorCode(str, Enum):
    """후보 풀 도메인 에러 코드"""

    POOL_STATUS_NOT_FOUND = "POOL_STATUS_NOT_FOUND"


class PoolStatusNotFoundException(NotFoundException):
    """저장된 갱신 상태 기록이 없는 경우"""

    def __init__(self, key: str | None = None):
        detail = {"status_key": key} if key else {}
        super().__init__(
            message="후보 풀 갱신 기록이 없습니다.",
            error_code=PoolErrorCode.POOL_STATUS_NOT_FOUND,
            detail=detail,
        )
