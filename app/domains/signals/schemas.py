"""Signals 도메인 스키마 정의"""

from typing import Optional

from pydantic import BaseModel, Field


class UsernameResolveRequest(BaseModel):
    """사용자 이름 조회 요청"""

    username: str = Field(..., min_length=1, max_length=50, description="사용자 이름")


class ResolvedUserResponse(BaseModel):
    """사용자 이름 조회 응답"""

    id: int = Field(..., description="사용자 ID")
    name: str
    display_name: Optional[str] = None
