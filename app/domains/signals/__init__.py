"""Signals 도메인 모듈

사용자 공개 프로필(배지, 그룹, 계정)에서 프로파일링 신호를 수집합니다.

구조:
    - client.py: 업스트림 프로필 API 클라이언트
    - service.py: 사용자 ID 검증, 동시 수집, 사용자 이름 조회
    - schemas.py: Pydantic 스키마 (Request/Response)
    - router.py: API 엔드포인트
    - exceptions.py: 도메인 예외
"""

from app.domains.signals.exceptions import (
    InvalidUserIdException,
    InvalidUsernameException,
    SignalErrorCode,
    UserLookupUnavailableException,
    UserNotFoundException,
)
from app.domains.signals.service import (
    CollectedSignals,
    SignalCollector,
    UserResolver,
    validate_user_id,
    validate_username,
)

__all__ = [
    "SignalErrorCode",
    "InvalidUserIdException",
    "InvalidUsernameException",
    "UserNotFoundException",
    "UserLookupUnavailableException",
    "CollectedSignals",
    "SignalCollector",
    "UserResolver",
    "validate_user_id",
    "validate_username",
]
