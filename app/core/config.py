from functools import lru_cache
from typing import List

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """애플리케이션 설정"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Playstyle Recommender"
    app_env: str = "development"
    debug: bool = True

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Internal API Key (풀 갱신 등 관리용 엔드포인트)
    internal_api_key: str = "your-internal-api-key-here"

    # CORS
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:8080",
    ]

    # Cache
    cache_backend: str = "memory"  # memory | redis
    redis_url: str = "redis://localhost:6379/0"
    pool_cache_key: str = "games_pool_v1"
    pool_status_key: str = "refresh_status_v1"
    pool_ttl_seconds: int = 6 * 60 * 60
    pool_status_ttl_seconds: int = 24 * 60 * 60

    # Upstream (Roblox 공개 API)
    users_api_url: str = "https://users.roblox.com"
    badges_api_url: str = "https://badges.roblox.com"
    groups_api_url: str = "https://groups.roblox.com"
    games_api_url: str = "https://games.roblox.com"
    thumbnails_api_url: str = "https://thumbnails.roblox.com"
    explore_api_url: str = "https://apis.roblox.com/explore-api"
    game_page_url: str = "https://www.roblox.com/games"
    upstream_timeout_ms: int = 4000
    upstream_max_retries: int = 2  # 총 시도 횟수 = 1 + retries
    upstream_initial_backoff_ms: int = 1000
    upstream_max_retry_after_seconds: int = 30

    # Profiling
    badge_fetch_limit: int = 200
    badge_page_size: int = 100

    # Candidate pool
    pool_min_activity: int = 500
    pool_visits_fallback_enabled: bool = False
    pool_min_visits_fallback: int = 1_000_000
    pool_max_sorts: int = 5
    pool_metadata_batch_size: int = 35
    pool_batch_concurrency: int = 3
    pool_description_max_length: int = 500
    pool_auto_refresh_minutes: int = 0  # 0이면 주기 갱신 비활성화

    # Recommendation
    recommendation_limit: int = 12
    recommendation_matched_limit: int = 3
    recommendation_cache_max_age: int = 300
    live_fallback_cache_max_age: int = 60
    live_fallback_max_ids: int = 50
    live_fallback_sort_token: str = "GamesPageMostEngagingSort"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            import json

            try:
                return json.loads(v)
            except json.JSONDecodeError:
                return [origin.strip() for origin in v.split(",")]
        return v

    @field_validator("cache_backend")
    @classmethod
    def validate_cache_backend(cls, v: str) -> str:
        v = v.lower()
        if v not in ("memory", "redis"):
            raise ValueError("CACHE_BACKEND must be 'memory' or 'redis'.")
        return v

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """프로덕션 환경에서 보안/인프라 설정 검증"""
        if not self.is_production:
            return self

        # Internal API Key 검증
        if self.internal_api_key == "your-internal-api-key-here":
            raise ValueError(
                "Production requires valid INTERNAL_API_KEY. "
                "Set it via environment variable."
            )

        if len(self.internal_api_key) < 32:
            raise ValueError(
                "INTERNAL_API_KEY must be at least 32 characters long "
                "for security."
            )

        # 인메모리 캐시는 프로세스마다 풀이 달라지므로 프로덕션 불가
        if self.cache_backend != "redis":
            raise ValueError(
                "Production requires CACHE_BACKEND=redis so every worker "
                "reads the same candidate pool."
            )

        return self

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """설정 인스턴스를 반환 (캐싱됨)"""
    return Settings()


settings = get_settings()
