"""Signals 도메인 예외 정의"""

from enum import Enum

from app.core.exceptions import (
    BadRequestException,
    NotFoundException,
    ServiceUnavailableException,
)


class SignalErrorCode(str, Enum):
    """신호 수집 도메인 에러 코드"""

    INVALID_USER_ID = "INVALID_USER_ID"
    INVALID_USERNAME = "INVALID_USERNAME"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    USER_LOOKUP_UNAVAILABLE = "USER_LOOKUP_UNAVAILABLE"


class InvalidUserIdException(BadRequestException):
    """사용자 ID 형식이 올바르지 않은 경우"""

    def __init__(self, user_id: str | None = None):
        detail = {"user_id": user_id} if user_id is not None else {}
        super().__init__(
            message="유효하지 않은 사용자 ID입니다.",
            error_code=SignalErrorCode.INVALID_USER_ID,
            detail=detail,
        )


class InvalidUsernameException(BadRequestException):
    """사용자 이름 형식이 올바르지 않은 경우"""

    def __init__(self, username: str | None = None):
        detail = {"username": username} if username is not None else {}
        super().__init__(
            message="유효하지 않은 사용자 이름입니다.",
            error_code=SignalErrorCode.INVALID_USERNAME,
            detail=detail,
        )


class UserNotFoundException(NotFoundException):
    """사용자 이름에 해당하는 사용자가 없는 경우"""

    def __init__(self, username: str | None = None):
        detail = {"username": username} if username else {}
        super().__init__(
            message="사용자를 찾을 수 없습니다.",
            error_code=SignalErrorCode.USER_NOT_FOUND,
            detail=detail,
        )


class UserLookupUnavailableException(ServiceUnavailableException):
    """사용자 조회 업스트림 호출이 실패한 경우"""

    def __init__(self, status: int | None = None):
        detail = {"upstream_status": status} if status else {}
        super().__init__(
            message="사용자 정보를 조회할 수 없습니다.",
            error_code=SignalErrorCode.USER_LOOKUP_UNAVAILABLE,
            detail=detail,
        )
