"""Pool 도메인 서비스

후보 풀 갱신(탐색 → 메타데이터 → 필터 → 아이콘 → 태그 → 저장)과
캐시된 풀 읽기를 담당합니다.

풀은 갱신 시 통째로 교체되며, 갱신이 실패하면 기존 풀은 TTL 만료 전까지
그대로 유지됩니다. 갱신 결과와 무관하게 상태 기록은 항상 저장합니다.
"""

import asyncio
import json
import math
from datetime import datetime
from typing import Any, Awaitable, Callable, Optional, Sequence

from pydantic import ValidationError

from app.core.cache import CacheDecodeError, CacheStore, CacheUnavailableError
from app.core.config import Settings
from app.core.http import FetchDiagnostics
from app.core.logging import get_logger
from app.core.utils.datetime import format_iso, now_utc, parse_iso
from app.domains.catalog.types import CandidatePool, ContentItem
from app.domains.pool.client import DiscoveryClient
from app.domains.pool.parsers import coerce_id
from app.domains.pool.types import (
    PoolCounts,
    PoolLoadResult,
    PoolLoadStatus,
    PoolRefreshOutcome,
    PoolRefreshResult,
    PoolSample,
)

logger = get_logger(__name__)

SAMPLE_SIZE = 3


def _count(value: Any) -> int:
    """음수가 아닌 정수로 변환 (숫자가 아니면 0)"""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float):
        return max(int(value), 0) if math.isfinite(value) else 0
    return coerce_id(value) or 0


def _text(value: Any) -> Optional[str]:
    """비어 있지 않은 문자열만 유지"""
    return value if isinstance(value, str) and value else None


def build_item(record: dict[str, Any], settings: Settings) -> Optional[ContentItem]:
    """메타데이터 레코드를 ContentItem으로 변환 (ID가 없으면 None)"""
    universe_id = coerce_id(record.get("id"))
    if universe_id is None:
        return None

    root_place_id = coerce_id(record.get("rootPlaceId"))
    creator = record.get("creator")
    description = str(record.get("description") or "")

    return ContentItem(
        id=universe_id,
        root_place_id=root_place_id,
        name=str(record.get("name") or ""),
        description=description[: settings.pool_description_max_length],
        genre=_text(record.get("genre")),
        current_activity=_count(record.get("playing")),
        total_activity=_count(record.get("visits")),
        favorites=_count(record.get("favoritedCount")),
        max_players=_count(record.get("maxPlayers")) or None,
        creator_name=(
            _text(creator.get("name")) if isinstance(creator, dict) else None
        ),
        updated_at=parse_iso(record.get("updated")),
        game_url=(
            f"{settings.game_page_url}/{root_place_id}" if root_place_id else None
        ),
    )


def build_items(
    records: Sequence[dict[str, Any]], settings: Settings
) -> list[ContentItem]:
    """레코드 변환 (ID 중복은 먼저 나온 것만 유지)"""
    items: dict[int, ContentItem] = {}
    for record in records:
        item = build_item(record, settings)
        if item is not None and item.id not in items:
            items[item.id] = item
    return list(items.values())


def passes_activity_filter(item: ContentItem, settings: Settings) -> bool:
    """풀 포함 기준 (동시 접속자 하한, 경계 포함)"""
    if item.current_activity >= settings.pool_min_activity:
        return True
    if settings.pool_visits_fallback_enabled:
        return (
            item.current_activity == 0
            and item.total_activity >= settings.pool_min_visits_fallback
        )
    return False


def describe_filter(settings: Settings) -> str:
    rule = f"current_activity >= {settings.pool_min_activity}"
    if settings.pool_visits_fallback_enabled:
        rule += (
            f" OR (current_activity == 0 AND total_activity >= "
            f"{settings.pool_min_visits_fallback})"
        )
    return rule


async def finalize_items(
    discovery: DiscoveryClient,
    items: Sequence[ContentItem],
    diagnostics: Optional[FetchDiagnostics] = None,
) -> list[ContentItem]:
    """아이콘 URL을 채우고 태그 생성 (아이콘 실패 시 빈 URL)"""
    icons = await discovery.fetch_icons([item.id for item in items], diagnostics)
    return [
        item.model_copy(update={"icon_url": icons.get(item.id, "")}).with_tags()
        for item in items
    ]


class CandidatePoolStore:
    """캐시에 저장된 후보 풀 읽기/쓰기"""

    def __init__(self, cache: CacheStore, settings: Settings):
        self.cache = cache
        self.settings = settings

    @property
    def key(self) -> str:
        return self.settings.pool_cache_key

    async def load(self) -> PoolLoadResult:
        """캐시된 풀 읽기

        손상된 값은 예외가 아니라 CORRUPT 상태로 반환합니다.
        """
        try:
            data = await self.cache.get_json(self.key)
        except CacheDecodeError as e:
            logger.warning(f"Cached pool is corrupt (invalid JSON): {e.reason}")
            return PoolLoadResult(status=PoolLoadStatus.CORRUPT, error=e.reason)
        except CacheUnavailableError as e:
            logger.warning(f"Cache unavailable while loading pool: {e.reason}")
            return PoolLoadResult(status=PoolLoadStatus.MISSING, error=e.reason)

        if data is None:
            logger.info("No cached pool found")
            return PoolLoadResult(status=PoolLoadStatus.MISSING)

        try:
            pool = CandidatePool.model_validate(data)
        except ValidationError as e:
            logger.warning(
                f"Cached pool is corrupt (schema mismatch): "
                f"{e.error_count()} errors"
            )
            return PoolLoadResult(
                status=PoolLoadStatus.CORRUPT,
                error=f"{e.error_count()} validation errors",
            )

        if pool.is_empty:
            logger.info("Cached pool has no items")
            return PoolLoadResult(status=PoolLoadStatus.EMPTY, pool=pool)
        return PoolLoadResult(status=PoolLoadStatus.OK, pool=pool)

    async def save(self, pool: CandidatePool) -> None:
        await self.cache.put_json(
            self.key,
            pool.model_dump(mode="json"),
            self.settings.pool_ttl_seconds,
        )

    async def save_status(self, record: dict[str, Any]) -> None:
        """갱신 상태 기록 (실패해도 갱신 결과에는 영향 없음)"""
        try:
            await self.cache.put_json(
                self.settings.pool_status_key,
                record,
                self.settings.pool_status_ttl_seconds,
            )
        except CacheUnavailableError as e:
            logger.warning(f"Failed to save pool refresh status: {e.reason}")

    async def load_status(self) -> Optional[dict[str, Any]]:
        try:
            record = await self.cache.get_json(self.settings.pool_status_key)
        except (CacheDecodeError, CacheUnavailableError) as e:
            logger.warning(f"Pool refresh status unreadable: {e}")
            return None
        return record if isinstance(record, dict) else None

    async def inspect(self) -> dict[str, Any]:
        """풀 진단 정보 (원문 값은 노출하지 않음)"""
        info: dict[str, Any] = {
            "cache_key": self.key,
            "exists": False,
            "raw_length": 0,
            "json_ok": False,
            "json_error": None,
            "schema_ok": False,
            "schema_error": None,
            "item_count": 0,
            "updated_at": None,
        }
        try:
            raw = await self.cache.get(self.key)
        except CacheUnavailableError as e:
            info["cache_error"] = e.reason
            return info
        if raw is None:
            return info

        info["exists"] = True
        info["raw_length"] = len(raw)
        try:
            data = json.loads(raw)
        except ValueError as e:
            info["json_error"] = str(e)
            return info
        info["json_ok"] = True

        try:
            pool = CandidatePool.model_validate(data)
        except ValidationError as e:
            info["schema_error"] = f"{e.error_count()} validation errors"
            return info
        info["schema_ok"] = True
        info["item_count"] = len(pool.items)
        info["updated_at"] = format_iso(pool.updated_at)
        return info


class CandidatePoolManager:
    """후보 풀 갱신"""

    def __init__(
        self,
        discovery: DiscoveryClient,
        store: CandidatePoolStore,
        settings: Settings,
    ):
        self.discovery = discovery
        self.store = store
        self.settings = settings

    async def _finish(
        self,
        outcome: PoolRefreshOutcome,
        counts: PoolCounts,
        started_at: datetime,
        diagnostics: FetchDiagnostics,
        sample: Optional[list[PoolSample]] = None,
        error: Optional[str] = None,
    ) -> PoolRefreshResult:
        result = PoolRefreshResult(
            success=outcome == PoolRefreshOutcome.REFRESHED,
            outcome=outcome,
            counts=counts,
            updated_at=started_at,
            filter=describe_filter(self.settings),
            sample=sample or [],
            error=error,
            diagnostics=diagnostics.to_dict(),
        )
        await self.store.save_status(result.model_dump(mode="json"))
        return result

    async def refresh_pool(self, now: Optional[datetime] = None) -> PoolRefreshResult:
        """후보 풀 갱신

        Returns:
            PoolRefreshResult: 성공/실패 구분과 단계별 개수.
            실패해도 예외를 던지지 않으며 기존 풀은 덮어쓰지 않습니다.
        """
        started_at = now or now_utc()
        diagnostics = FetchDiagnostics()
        counts = PoolCounts()

        ids = await self.discovery.discover_ids(diagnostics)
        counts.fetched = len(ids)
        if not ids:
            logger.warning("Pool refresh found no candidates from discovery")
            return await self._finish(
                PoolRefreshOutcome.NO_CANDIDATES,
                counts,
                started_at,
                diagnostics,
                error="No candidates fetched from any source",
            )

        records = await self.discovery.fetch_metadata(ids, diagnostics) or []
        items = build_items(records, self.settings)
        counts.enriched = len(items)

        eligible = [item for item in items if passes_activity_filter(item, self.settings)]
        counts.filtered = len(eligible)
        if not eligible:
            logger.warning(
                f"Pool refresh filtered out all {counts.enriched} candidates "
                f"({describe_filter(self.settings)})"
            )
            return await self._finish(
                PoolRefreshOutcome.ALL_FILTERED,
                counts,
                started_at,
                diagnostics,
                error="All candidates filtered out",
            )

        finalized = await finalize_items(self.discovery, eligible, diagnostics)
        pool = CandidatePool(updated_at=started_at, items=finalized)
        sample = [
            PoolSample(
                name=item.name,
                current_activity=item.current_activity,
                tags=item.tags,
            )
            for item in finalized[:SAMPLE_SIZE]
        ]

        try:
            await self.store.save(pool)
        except CacheUnavailableError as e:
            logger.error(f"Failed to store refreshed pool: {e.reason}")
            return await self._finish(
                PoolRefreshOutcome.STORE_FAILED,
                counts,
                started_at,
                diagnostics,
                sample=sample,
                error=e.reason,
            )

        logger.info(
            f"Pool refreshed: fetched={counts.fetched}, "
            f"enriched={counts.enriched}, filtered={counts.filtered}"
        )
        return await self._finish(
            PoolRefreshOutcome.REFRESHED,
            counts,
            started_at,
            diagnostics,
            sample=sample,
        )


async def run_periodic_refresh(
    refresh: Callable[[], Awaitable[PoolRefreshResult]],
    interval_seconds: float,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> None:
    """주기적 풀 갱신 루프 (취소될 때까지 실행)"""
    while True:
        try:
            result = await refresh()
            logger.info(f"Scheduled pool refresh finished: {result.outcome.value}")
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Scheduled pool refresh crashed")
        await sleep(interval_seconds)
