"""Archetypes 도메인 라우터"""

from fastapi import APIRouter, Depends, Query

from app.core.schemas import APIResponse, create_response
from app.domains.archetypes.schemas import ArchetypeProfileResponse
from app.domains.archetypes.service import (
    ArchetypeService,
    ProfileMode,
    profile_signals,
)
from app.domains.archetypes.types import SignalBundle
from app.domains.signals.client import ProfileSourceClient
from app.domains.signals.router import get_profile_client
from app.domains.signals.service import SignalCollector

router = APIRouter()


def get_archetype_service(
    client: ProfileSourceClient = Depends(get_profile_client),
) -> ArchetypeService:
    """ArchetypeService 의존성"""
    return ArchetypeService(SignalCollector(client))


@router.post("/profile", response_model=APIResponse[ArchetypeProfileResponse])
async def profile_bundle(
    bundle: SignalBundle,
    mode: ProfileMode = Query("full", description="프로파일링 모드"),
):
    """전달받은 신호 묶음 프로파일링"""
    return create_response(
        data=profile_signals(bundle, mode),
        message="프로파일링이 완료되었습니다.",
    )


@router.get("/{user_id}", response_model=APIResponse[ArchetypeProfileResponse])
async def get_user_archetype(
    user_id: str,
    mode: ProfileMode = Query("full", description="프로파일링 모드"),
    service: ArchetypeService = Depends(get_archetype_service),
):
    """사용자 아키타입 조회"""
    profile = await service.profile_user(user_id, mode)
    return create_response(data=profile, message="프로파일링이 완료되었습니다.")
