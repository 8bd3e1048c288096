import asyncio
from contextlib import asynccontextmanager, suppress
from typing import Any

import httpx
from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1 import api_router as api_v1_router
from app.core.cache import create_cache_store
from app.core.config import settings
from app.core.exceptions import (
    BaseAPIException,
    base_exception_handler,
    generic_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from app.core.http import ResilientFetcher
from app.core.logging import get_logger, setup_logging
from app.core.middlewares import LoggingMiddleware
from app.core.schemas import APIResponse
from app.domains.pool.client import DiscoveryClient
from app.domains.pool.service import (
    CandidatePoolManager,
    CandidatePoolStore,
    run_periodic_refresh,
)

# 로깅 설정 초기화
setup_logging()
logger = get_logger(__name__)


def _start_auto_refresh(app: FastAPI) -> "asyncio.Task[None] | None":
    """주기적 풀 갱신 태스크 (설정 시에만)"""
    if settings.pool_auto_refresh_minutes <= 0:
        return None

    manager = CandidatePoolManager(
        DiscoveryClient(
            ResilientFetcher.from_settings(app.state.http_client, settings),
            settings,
        ),
        CandidatePoolStore(app.state.cache, settings),
        settings,
    )
    logger.info(
        f"Pool auto refresh enabled every {settings.pool_auto_refresh_minutes} min"
    )
    return asyncio.create_task(
        run_periodic_refresh(
            manager.refresh_pool, settings.pool_auto_refresh_minutes * 60
        )
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 생명주기 관리"""
    # Startup
    logger.info(f"🚀 Starting {settings.app_name}...")

    app.state.http_client = httpx.AsyncClient(
        headers={"Accept": "application/json"},
        follow_redirects=True,
    )
    app.state.cache = create_cache_store(settings)
    refresh_task = _start_auto_refresh(app)

    yield
    # Shutdown
    logger.info(f"👋 Shutting down {settings.app_name}...")
    if refresh_task is not None:
        refresh_task.cancel()
        with suppress(asyncio.CancelledError):
            await refresh_task
    await app.state.http_client.aclose()
    await app.state.cache.close()


def create_app() -> FastAPI:
    """FastAPI 애플리케이션 팩토리"""
    app = FastAPI(
        title=settings.app_name,
        description="Play archetype profiling and game recommendation API",
        version="0.1.0",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )

    # 미들웨어 설정 (순서 중요: 아래에서 위로 실행됨)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    # 예외 핸들러 등록
    app.add_exception_handler(BaseAPIException, base_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # API 라우터 등록 (버저닝)
    app.include_router(api_v1_router, prefix="/api/v1")

    return app


app = create_app()


@app.get(
    "/health", tags=["Health"], response_model=APIResponse[dict[str, Any]]
)
async def health_check():
    """헬스 체크 엔드포인트"""
    return APIResponse(
        success=True,
        message="OK",
        data={
            "status": "healthy",
            "app_name": settings.app_name,
            "environment": settings.app_env,
            "cache_backend": settings.cache_backend,
        },
    )
