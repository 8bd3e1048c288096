"""API v1 라우터"""

from typing import Any

from fastapi import APIRouter

from app.core.schemas import APIResponse
from app.domains.archetypes.router import router as archetypes_router
from app.domains.pool.router import router as pool_router
from app.domains.recommendations.router import router as recommendations_router
from app.domains.signals.router import router as signals_router

api_router = APIRouter()

# 도메인 라우터 등록
api_router.include_router(
    archetypes_router, prefix="/archetypes", tags=["Archetypes"]
)
api_router.include_router(
    recommendations_router, prefix="/recommendations", tags=["Recommendations"]
)
api_router.include_router(pool_router, prefix="/pool", tags=["Pool"])
api_router.include_router(signals_router, prefix="/users", tags=["Users"])


@api_router.get("/", response_model=APIResponse[dict[str, Any]])
async def api_v1_root():
    """API v1 루트 엔드포인트"""
    return APIResponse(
        success=True,
        message="Playstyle Recommender API v1",
        data={
            "version": "1.0.0",
            "docs": "/docs",
        },
    )
