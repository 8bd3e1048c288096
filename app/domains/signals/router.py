"""Signals 도메인 라우터

사용자 이름 조회 API 엔드포인트입니다.
"""

from fastapi import APIRouter, Depends

from app.core.config import Settings
from app.core.dependencies import get_app_settings, get_fetcher
from app.core.http import ResilientFetcher
from app.core.schemas import APIResponse, create_response
from app.domains.signals.client import ProfileSourceClient
from app.domains.signals.schemas import ResolvedUserResponse, UsernameResolveRequest
from app.domains.signals.service import UserResolver

router = APIRouter()


def get_profile_client(
    fetcher: ResilientFetcher = Depends(get_fetcher),
    settings: Settings = Depends(get_app_settings),
) -> ProfileSourceClient:
    """ProfileSourceClient 의존성"""
    return ProfileSourceClient(fetcher, settings)


@router.post("/resolve", response_model=APIResponse[ResolvedUserResponse])
async def resolve_username(
    data: UsernameResolveRequest,
    client: ProfileSourceClient = Depends(get_profile_client),
):
    """사용자 이름으로 사용자 ID 조회"""
    user = await UserResolver(client).resolve(data.username)
    return create_response(
        data=ResolvedUserResponse(**user),
        message="사용자를 찾았습니다.",
    )
