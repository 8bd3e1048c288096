"""API 통합 테스트 - 응답 구조, 미들웨어, 도메인 엔드포인트 검증"""

from datetime import timedelta

import httpx
import pytest

from app.core.utils.datetime import now_utc
from app.domains.catalog.types import CandidatePool
from app.domains.pool.service import CandidatePoolStore
from tests.upstream import USERS_HOST, json_response

GRINDER_BADGES = [{"name": "Tycoon Master"}, {"name": "Farming Legends"}]


@pytest.fixture
def pool_store(cache, test_settings) -> CandidatePoolStore:
    return CandidatePoolStore(cache, test_settings)


class TestHealthCheck:
    """헬스 체크 API 테스트"""

    @pytest.mark.asyncio
    async def test_health_check_response_structure(self, client):
        """헬스 체크 응답 구조 검증"""
        response = await client.get("/health")

        assert response.status_code == 200

        data = response.json()
        assert data["success"] is True
        assert data["message"] == "OK"
        assert data["data"]["status"] == "healthy"
        assert "cache_backend" in data["data"]

    @pytest.mark.asyncio
    async def test_health_check_skips_request_logging(self, client):
        """헬스 체크는 로깅 제외 경로 (X-Request-ID 없음)"""
        response = await client.get("/health")

        assert "x-request-id" not in response.headers


class TestAPIRoot:
    """API 루트 테스트"""

    @pytest.mark.asyncio
    async def test_api_v1_root(self, client):
        """API v1 루트 응답 검증"""
        response = await client.get("/api/v1/")

        assert response.status_code == 200

        data = response.json()
        assert data["success"] is True
        assert "version" in data["data"]


class TestMiddleware:
    """미들웨어 테스트"""

    @pytest.mark.asyncio
    async def test_request_id_header_in_response(self, client):
        """응답에 X-Request-ID 헤더 포함 여부"""
        response = await client.get("/api/v1/")

        assert len(response.headers["x-request-id"]) == 36  # UUID 형식
        assert response.headers["x-process-time"].endswith("ms")

    @pytest.mark.asyncio
    async def test_custom_request_id_forwarded(self, client):
        """클라이언트가 보낸 X-Request-ID가 응답에 유지되는지"""
        response = await client.get(
            "/api/v1/", headers={"X-Request-ID": "custom-request-id-12345"}
        )

        assert response.headers["x-request-id"] == "custom-request-id-12345"

    @pytest.mark.asyncio
    async def test_malformed_request_id_is_replaced(self, client):
        """형식에 맞지 않는 요청 ID는 새로 생성"""
        response = await client.get(
            "/api/v1/", headers={"X-Request-ID": "bad id with spaces"}
        )

        assert response.headers["x-request-id"] != "bad id with spaces"


class TestArchetypesAPI:
    """아키타입 API 테스트"""

    @pytest.mark.asyncio
    async def test_get_user_archetype(self, client, upstream):
        upstream.register_user(42, badges=GRINDER_BADGES, groups=["Trading Hub"])

        response = await client.get("/api/v1/archetypes/42")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["user_id"] == 42
        assert data["mode"] == "full"
        assert set(data["result"]["scores"]) == {
            "explorer", "grinder", "socializer", "competitor",
            "builder", "trader", "roleplayer", "casual",
        }
        assert data["result"]["neutral"] is False
        assert data["sources"]["badges"] is True

    @pytest.mark.asyncio
    async def test_badge_and_group_keywords(self, client, upstream):
        """타이쿤 배지와 농장 그룹은 grinder 1순위"""
        upstream.register_user(
            7, badges=[{"name": "Tycoon Master"}], groups=["Farming Legends"]
        )

        response = await client.get("/api/v1/archetypes/7")

        assert response.status_code == 200
        result = response.json()["data"]["result"]
        assert result["primary"] == "grinder"
        assert result["secondary"] == "trader"
        assert result["scores"]["grinder"] == 0.75
        assert result["group_count"] == 1

    @pytest.mark.asyncio
    async def test_upstream_outage_returns_neutral(self, client):
        """업스트림 장애 시 200과 균등 분포"""
        response = await client.get("/api/v1/archetypes/42?mode=quick")

        assert response.status_code == 200
        result = response.json()["data"]["result"]
        assert result["neutral"] is True
        assert result["primary"] == "explorer"
        assert result["confidence"] == 0.25

    @pytest.mark.asyncio
    async def test_invalid_user_id(self, client):
        response = await client.get("/api/v1/archetypes/abc")

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"]["code"] == "INVALID_USER_ID"

    @pytest.mark.asyncio
    async def test_invalid_mode(self, client):
        response = await client.get("/api/v1/archetypes/42?mode=deep")

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_profile_bundle(self, client, upstream):
        """신호 묶음 직접 프로파일링 (업스트림 호출 없음)"""
        payload = {
            "badges": [{"name": "Sandbox Architect"}],
            "groups": [{"groupName": "Builders Guild"}],
        }

        response = await client.post("/api/v1/archetypes/profile", json=payload)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["result"]["primary"] == "builder"
        assert data["reason"] == "Express your creativity"
        assert upstream.calls == []


class TestRecommendationsAPI:
    """추천 API 테스트"""

    @pytest.mark.asyncio
    async def test_recommendations_from_cached_pool(
        self, client, upstream, pool_store, item_factory
    ):
        # Given
        upstream.register_user(42, badges=GRINDER_BADGES)
        items = [
            item_factory(name="Mining Simulator"),
            item_factory(name="Sword Fight Arena"),
        ]
        await pool_store.save(
            CandidatePool(
                updated_at=now_utc() - timedelta(hours=1),
                items=[item.with_tags() for item in items],
            )
        )

        # When
        response = await client.get("/api/v1/recommendations", params={"user_id": "42"})

        # Then
        assert response.status_code == 200
        assert response.headers["cache-control"] == "public, max-age=300"
        data = response.json()["data"]
        assert data["state"] == "SCORED"
        assert data["source"] == "cache"
        assert data["basis"]["primary"] == "grinder"
        assert data["recommendations"][0]["item"]["name"] == "Mining Simulator"
        assert 0 <= data["recommendations"][0]["score"] <= 100

    @pytest.mark.asyncio
    async def test_live_fallback_has_short_cache(
        self, client, upstream, game_record_factory
    ):
        """캐시 풀이 없으면 실시간 대체 경로 (짧은 캐시)"""
        upstream.register_user(42, badges=GRINDER_BADGES)
        upstream.register_games_list([1, 2])
        upstream.register_games(
            [game_record_factory(1, name="Pet Simulator"), game_record_factory(2)]
        )

        response = await client.get("/api/v1/recommendations", params={"user_id": "42"})

        assert response.status_code == 200
        assert response.headers["cache-control"] == "public, max-age=60"
        data = response.json()["data"]
        assert data["state"] == "LIVE_SCORED"
        assert data["source"] == "live_fallback"
        assert data["pool_status"] == "MISSING"
        assert len(data["recommendations"]) == 2

    @pytest.mark.asyncio
    async def test_total_failure_returns_503(self, client, upstream):
        """캐시 풀과 실시간 목록이 모두 없으면 503"""
        upstream.register_user(42, badges=GRINDER_BADGES)

        response = await client.get("/api/v1/recommendations", params={"user_id": "42"})

        assert response.status_code == 503
        body = response.json()
        assert body["error"]["code"] == "RECOMMENDATION_UNAVAILABLE"
        assert body["error"]["detail"]["error"] == "Live candidate list unavailable"

    @pytest.mark.asyncio
    async def test_invalid_user_id(self, client, upstream):
        response = await client.get("/api/v1/recommendations", params={"user_id": "12; DROP"})

        assert response.status_code == 400
        assert upstream.calls == []

    @pytest.mark.asyncio
    async def test_missing_user_id(self, client):
        response = await client.get("/api/v1/recommendations")

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_score_endpoint(self, client, upstream):
        """신호와 후보를 직접 전달하는 추천"""
        payload = {
            "signals": {"badges": [{"name": "Tycoon Master"}]},
            "items": [
                {"id": 1, "name": "Pet Simulator", "current_activity": 1000},
                {"id": 2, "name": "Quiet Garden", "tags": ["tycoon"]},
            ],
        }

        response = await client.post("/api/v1/recommendations/score", json=payload)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["source"] == "request"
        assert data["recommendations"][0]["item"]["id"] == 1
        assert data["recommendations"][1]["item"]["tags"] == []
        assert upstream.calls == []


class TestPoolAPI:
    """후보 풀 API 테스트"""

    @pytest.mark.asyncio
    async def test_refresh_requires_api_key(self, client):
        response = await client.post("/api/v1/pool/refresh")

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_refresh_rejects_wrong_api_key(self, client):
        response = await client.post(
            "/api/v1/pool/refresh", headers={"X-Internal-Api-Key": "wrong"}
        )

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "INVALID_API_KEY"

    @pytest.mark.asyncio
    async def test_refresh_and_status(
        self, client, upstream, api_key_header, game_record_factory
    ):
        """갱신 후 상태/진단 조회"""
        # Given
        upstream.register_discovery({"Popular": [1, 2]})
        upstream.register_games(
            [game_record_factory(1), game_record_factory(2, playing=100)]
        )

        # When
        refresh = await client.post("/api/v1/pool/refresh", headers=api_key_header)
        status = await client.get("/api/v1/pool/status")
        diagnostics = await client.get("/api/v1/pool/diagnostics")

        # Then
        assert refresh.status_code == 200
        body = refresh.json()
        assert body["success"] is True
        assert body["data"]["outcome"] == "REFRESHED"
        assert body["data"]["counts"] == {"fetched": 2, "enriched": 2, "filtered": 1}

        assert status.status_code == 200
        assert status.json()["data"]["record"]["outcome"] == "REFRESHED"

        info = diagnostics.json()["data"]
        assert info["exists"] is True
        assert info["schema_ok"] is True
        assert info["item_count"] == 1

    @pytest.mark.asyncio
    async def test_failed_refresh_is_reported_in_body(self, client, api_key_header):
        """갱신 실패도 200, success=false"""
        response = await client.post("/api/v1/pool/refresh", headers=api_key_header)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is False
        assert body["data"]["outcome"] == "NO_CANDIDATES"

    @pytest.mark.asyncio
    async def test_status_not_found(self, client):
        response = await client.get("/api/v1/pool/status")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "POOL_STATUS_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_diagnostics_with_corrupt_pool(self, client, cache, test_settings):
        await cache.put(test_settings.pool_cache_key, "{oops", 60)

        response = await client.get("/api/v1/pool/diagnostics")

        info = response.json()["data"]
        assert info["exists"] is True
        assert info["json_ok"] is False


class TestUsersAPI:
    """사용자 이름 조회 API 테스트"""

    @pytest.mark.asyncio
    async def test_resolve_username(self, client, upstream):
        upstream.post(
            USERS_HOST,
            "/v1/usernames/users",
            json_response({"data": [{"id": 156, "name": "builderman", "displayName": "Builder"}]}),
        )

        response = await client.post("/api/v1/users/resolve", json={"username": "builderman"})

        assert response.status_code == 200
        assert response.json()["data"] == {
            "id": 156,
            "name": "builderman",
            "display_name": "Builder",
        }

    @pytest.mark.asyncio
    async def test_resolve_unknown_username(self, client, upstream):
        upstream.post(USERS_HOST, "/v1/usernames/users", json_response({"data": []}))

        response = await client.post("/api/v1/users/resolve", json={"username": "ghost_user"})

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "USER_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_resolve_upstream_failure(self, client, upstream):
        upstream.post(USERS_HOST, "/v1/usernames/users", httpx.Response(500))

        response = await client.post("/api/v1/users/resolve", json={"username": "builderman"})

        assert response.status_code == 503

    @pytest.mark.asyncio
    async def test_resolve_invalid_username(self, client):
        response = await client.post("/api/v1/users/resolve", json={"username": "a b"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_USERNAME"
