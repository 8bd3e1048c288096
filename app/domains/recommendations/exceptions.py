"""Recommendations 도메인 예외 정의"""

from enum import Enum
from typing import Any

from app.core.exceptions import ServiceUnavailableException


class RecommendationErrorCode(str, Enum):
    """추천 도메인 에러 코드"""

    RECOMMENDATION_UNAVAILABLE = "RECOMMENDATION_UNAVAILABLE"


class RecommendationUnavailableException(ServiceUnavailableException):
    """캐시 풀과 실시간 대체 경로가 모두 실패한 경우"""

    def __init__(self, error: str | None = None, diagnostics: dict[str, Any] | None = None):
        detail: dict[str, Any] = {}
        if error:
            detail["error"] = error
        if diagnostics:
            detail["diagnostics"] = diagnostics
        super().__init__(
            message="추천 목록을 생성할 수 없습니다.",
            error_code=RecommendationErrorCode.RECOMMENDATION_UNAVAILABLE,
            detail=detail,
        )
