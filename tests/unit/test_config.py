"""Config 설정 검증 테스트"""

import pytest
from pydantic import ValidationError

from app.core.config import Settings

VALID_KEY = "valid-internal-api-key-with-32-characters-minimum"


class TestDevelopmentConfig:
    """개발 환경 설정 테스트"""

    def test_development_allows_default_key_and_memory_cache(self):
        """개발 환경에서는 기본 키와 인메모리 캐시 허용"""
        config = Settings(
            app_env="development",
            internal_api_key="your-internal-api-key-here",
            cache_backend="memory",
        )
        assert config.is_development
        assert config.cache_backend == "memory"

    def test_pool_defaults(self):
        """후보 풀 기본값"""
        config = Settings(app_env="development")

        assert config.pool_cache_key == "games_pool_v1"
        assert config.pool_status_key == "refresh_status_v1"
        assert config.pool_ttl_seconds == 6 * 60 * 60
        assert config.pool_status_ttl_seconds == 24 * 60 * 60
        assert config.pool_min_activity == 500
        assert config.pool_visits_fallback_enabled is False

    def test_upstream_defaults(self):
        """업스트림 호출 기본값 (4초 타임아웃, 재시도 2회)"""
        config = Settings(app_env="development")

        assert config.upstream_timeout_ms == 4000
        assert config.upstream_max_retries == 2
        assert config.upstream_initial_backoff_ms == 1000


class TestCacheBackendConfig:
    """캐시 백엔드 설정 테스트"""

    def test_cache_backend_is_case_insensitive(self):
        """대소문자 구분 없이 허용"""
        config = Settings(app_env="development", cache_backend="REDIS")
        assert config.cache_backend == "redis"

    def test_unknown_cache_backend_rejected(self):
        """지원하지 않는 백엔드 거부"""
        with pytest.raises(ValidationError) as exc_info:
            Settings(app_env="development", cache_backend="memcached")

        assert "CACHE_BACKEND" in str(exc_info.value)

    def test_cors_origins_from_comma_string(self):
        """콤마 구분 문자열 파싱"""
        config = Settings(
            app_env="development",
            cors_origins="http://a.test, http://b.test",
        )
        assert config.cors_origins == ["http://a.test", "http://b.test"]


class TestProductionConfig:
    """프로덕션 환경 설정 검증 테스트"""

    def test_production_rejects_default_internal_api_key(self):
        """프로덕션에서 기본 Internal API Key 거부"""
        with pytest.raises(ValidationError) as exc_info:
            Settings(
                app_env="production",
                internal_api_key="your-internal-api-key-here",
                cache_backend="redis",
            )

        assert "INTERNAL_API_KEY" in str(exc_info.value)

    def test_production_rejects_short_internal_api_key(self):
        """프로덕션에서 짧은 Internal API Key 거부"""
        with pytest.raises(ValidationError) as exc_info:
            Settings(
                app_env="production",
                internal_api_key="short-key",
                cache_backend="redis",
            )

        assert "32 characters" in str(exc_info.value)

    def test_production_rejects_memory_cache(self):
        """프로덕션에서 인메모리 캐시 거부"""
        with pytest.raises(ValidationError) as exc_info:
            Settings(
                app_env="production",
                internal_api_key=VALID_KEY,
                cache_backend="memory",
            )

        assert "CACHE_BACKEND=redis" in str(exc_info.value)

    def test_production_accepts_valid_settings(self):
        """프로덕션에서 유효한 설정 허용"""
        config = Settings(
            app_env="production",
            internal_api_key=VALID_KEY,
            cache_backend="redis",
        )
        assert config.is_production
        assert config.cache_backend == "redis"
