"""전역 예외 및 예외 핸들러

외부 API 장애(업스트림 실패, 빈 데이터, 캐시 손상)는 예외가 아니라
결과 값으로 전달되어 도메인 내부에서 대체 결과로 복구됩니다.
HTTP 오류로 노출되는 것은 잘못된 입력과 복구 불가능한 실패뿐입니다.
"""

from enum import Enum
from typing import Any, ClassVar, Dict, Optional

from fastapi import HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.schemas import ErrorDetail, ErrorResponse


class ErrorCode(str, Enum):
    """전역 에러 코드"""

    # 공통 에러
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    BAD_REQUEST = "BAD_REQUEST"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"

    # 인증 관련
    INVALID_API_KEY = "INVALID_API_KEY"


class BaseAPIException(HTTPException):
    """기본 API 예외 클래스

    하위 클래스는 상태 코드, 기본 에러 코드, 기본 메시지만 정의합니다.
    """

    default_status: ClassVar[int] = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_code: ClassVar[str] = ErrorCode.INTERNAL_ERROR
    default_message: ClassVar[str] = "서버 내부 오류가 발생했습니다."

    def __init__(
        self,
        message: Optional[str] = None,
        error_code: Optional[str] = None,
        detail: Optional[Dict[str, Any]] = None,
    ):
        self.error_code = error_code or self.default_code
        self.message = message or self.default_message
        self.detail_info = detail or {}
        super().__init__(status_code=self.default_status, detail=self.message)


class BadRequestException(BaseAPIException):
    """400 Bad Request"""

    default_status = status.HTTP_400_BAD_REQUEST
    default_code = ErrorCode.BAD_REQUEST
    default_message = "잘못된 요청입니다."


class UnauthorizedException(BaseAPIException):
    """401 Unauthorized"""

    default_status = status.HTTP_401_UNAUTHORIZED
    default_code = ErrorCode.UNAUTHORIZED
    default_message = "인증이 필요합니다."


class NotFoundException(BaseAPIException):
    """404 Not Found"""

    default_status = status.HTTP_404_NOT_FOUND
    default_code = ErrorCode.NOT_FOUND
    default_message = "리소스를 찾을 수 없습니다."


class InternalServerException(BaseAPIException):
    """500 Internal Server Error"""


class ServiceUnavailableException(BaseAPIException):
    """503 Service Unavailable

    캐시 경로와 실시간 대체 경로가 모두 실패한 경우에만 사용합니다.
    """

    default_status = status.HTTP_503_SERVICE_UNAVAILABLE
    default_code = ErrorCode.SERVICE_UNAVAILABLE
    default_message = "일시적으로 서비스를 이용할 수 없습니다."


def _error_body(
    message: str, code: str, detail: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    if isinstance(code, Enum):
        code = code.value
    body = ErrorResponse(
        message=message,
        error=ErrorDetail(
            code=code,
            message=message,
            detail=jsonable_encoder(detail) if detail is not None else None,
        ),
    )
    return body.model_dump()


async def base_exception_handler(
    request: Request, exc: BaseAPIException
) -> JSONResponse:
    """BaseAPIException 핸들러"""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.message, exc.error_code, exc.detail_info),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """요청 검증 실패 핸들러 (422)"""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_body(
            "요청 형식이 올바르지 않습니다.",
            ErrorCode.VALIDATION_ERROR,
            {"errors": exc.errors()},
        ),
    )


async def http_exception_handler(
    request: Request, exc: HTTPException
) -> JSONResponse:
    """HTTPException 핸들러"""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(str(exc.detail), ErrorCode.INTERNAL_ERROR),
    )


async def generic_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """일반 예외 핸들러"""
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(
            "서버 내부 오류가 발생했습니다.", ErrorCode.INTERNAL_ERROR
        ),
    )
