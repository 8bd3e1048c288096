"""스키마 단위 테스트"""

from app.core.schemas import APIResponse, ErrorDetail, ErrorResponse, create_response


class TestAPIResponse:
    """APIResponse 테스트"""

    def test_success_response_with_data(self):
        """데이터가 있는 성공 응답"""
        response = APIResponse(
            success=True,
            data={"primary": "explorer"},
            message="조회 성공",
        )

        assert response.success is True
        assert response.message == "조회 성공"
        assert response.data == {"primary": "explorer"}

    def test_success_response_without_data(self):
        """데이터가 없는 성공 응답"""
        response = APIResponse(success=True, message="갱신 완료")

        assert response.data is None

    def test_default_message(self):
        """기본 메시지"""
        response = APIResponse(success=True)

        assert response.message == "요청이 성공적으로 처리되었습니다."

    def test_create_response_factory(self):
        """create_response 팩토리"""
        response = create_response(data=[1, 2], message="ok", success=False)

        assert response.success is False
        assert response.data == [1, 2]
        assert response.message == "ok"


class TestErrorResponse:
    """ErrorResponse 테스트"""

    def test_error_response_structure(self):
        """에러 응답 구조"""
        response = ErrorResponse(
            message="유효하지 않은 사용자 ID입니다.",
            error=ErrorDetail(
                code="INVALID_USER_ID",
                message="유효하지 않은 사용자 ID입니다.",
                detail={"user_id": "abc"},
            ),
        )

        dumped = response.model_dump()
        assert dumped["success"] is False
        assert dumped["error"]["code"] == "INVALID_USER_ID"
        assert dumped["error"]["detail"] == {"user_id": "abc"}
