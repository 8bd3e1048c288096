"""요청 ID 컨텍스트 관리

요청마다 독립된 값을 갖는 contextvars를 사용하므로 동시 요청 간에
진단 정보가 섞이지 않습니다.
"""

import contextvars
import re
import uuid
from typing import Optional

# 요청 ID를 저장하는 컨텍스트 변수
request_id_ctx: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "request_id", default=None
)

# 외부에서 전달된 요청 ID 허용 형식 (로그 인젝션 방지)
_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._:-]{1,64}$")


def get_request_id() -> Optional[str]:
    """현재 요청 ID 반환"""
    return request_id_ctx.get()


def set_request_id(request_id: Optional[str] = None) -> str:
    """요청 ID 설정

    전달된 값이 없거나 형식이 맞지 않으면 새로 생성합니다.
    """
    if request_id is None or not _REQUEST_ID_PATTERN.match(request_id):
        request_id = generate_request_id()
    request_id_ctx.set(request_id)
    return request_id


def generate_request_id() -> str:
    """새 요청 ID 생성"""
    return str(uuid.uuid4())
