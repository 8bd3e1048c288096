"""콘텐츠 탐색/메타데이터 업스트림 클라이언트"""

import asyncio
import uuid
from typing import Any, Awaitable, Callable, Optional, Sequence, TypeVar

from app.core.config import Settings
from app.core.http import FetchDiagnostics, ResilientFetcher
from app.core.logging import get_logger
from app.domains.pool.parsers import (
    SortRef,
    extract_content_ids,
    parse_icon_urls,
    parse_sorts,
    select_sorts,
)

logger = get_logger(__name__)

T = TypeVar("T")

PREFERRED_SORT_TOKENS = (
    "Popular",
    "PopularWorldwide",
    "TopRated",
    "MostEngaging",
    "Trending",
)


def chunked(ids: Sequence[int], size: int) -> list[list[int]]:
    return [list(ids[i : i + size]) for i in range(0, len(ids), size)]


class DiscoveryClient:
    """탐색/메타데이터/썸네일 API 클라이언트

    배치 호출은 Semaphore로 동시 실행 수를 제한합니다.
    실패한 배치는 건너뛰고 나머지 결과로 진행합니다.
    """

    def __init__(self, fetcher: ResilientFetcher, settings: Settings):
        self.fetcher = fetcher
        self.settings = settings

    async def _run_batches(
        self,
        ids: Sequence[int],
        fetch_batch: Callable[[list[int], int], Awaitable[Optional[T]]],
    ) -> list[T]:
        semaphore = asyncio.Semaphore(self.settings.pool_batch_concurrency)

        async def run(batch: list[int], index: int) -> Optional[T]:
            async with semaphore:
                return await fetch_batch(batch, index)

        batches = chunked(ids, self.settings.pool_metadata_batch_size)
        results = await asyncio.gather(
            *(run(batch, index) for index, batch in enumerate(batches))
        )
        return [result for result in results if result is not None]

    async def fetch_sorts(
        self, session_id: str, diagnostics: Optional[FetchDiagnostics] = None
    ) -> list[SortRef]:
        result = await self.fetcher.call(
            f"{self.settings.explore_api_url}/v1/get-sorts",
            params={"sessionId": session_id},
            label="discover-sorts",
            diagnostics=diagnostics,
        )
        if not result.ok:
            return []
        return parse_sorts(result.data)

    async def fetch_sort_content_ids(
        self,
        session_id: str,
        sort: SortRef,
        diagnostics: Optional[FetchDiagnostics] = None,
    ) -> list[int]:
        result = await self.fetcher.call(
            f"{self.settings.explore_api_url}/v1/get-sort-content",
            params={"sessionId": session_id, "sortId": sort.sort_id},
            label=f"discover-content-{sort.sort_id}",
            diagnostics=diagnostics,
        )
        if not result.ok:
            return []
        return extract_content_ids(result.data)

    async def discover_ids(
        self, diagnostics: Optional[FetchDiagnostics] = None
    ) -> list[int]:
        """탐색 정렬 목록에서 후보 ID 수집 (중복 제거, 발견 순서 유지)"""
        session_id = str(uuid.uuid4())
        sorts = await self.fetch_sorts(session_id, diagnostics)
        if not sorts:
            logger.warning("Discovery returned no sorts")
            return []

        chosen = select_sorts(
            sorts, PREFERRED_SORT_TOKENS, self.settings.pool_max_sorts
        )
        id_lists = await asyncio.gather(
            *(
                self.fetch_sort_content_ids(session_id, sort, diagnostics)
                for sort in chosen
            )
        )

        ids: dict[int, None] = {}
        for id_list in id_lists:
            for content_id in id_list:
                ids[content_id] = None
        logger.info(
            f"Discovered {len(ids)} candidate ids from {len(chosen)} sorts"
        )
        return list(ids)

    async def fetch_top_game_ids(
        self, diagnostics: Optional[FetchDiagnostics] = None
    ) -> Optional[list[int]]:
        """게임 목록 API의 인기 정렬 ID (실시간 대체 경로용)

        Returns:
            ID 목록, 호출 실패 시 None
        """
        result = await self.fetcher.call(
            f"{self.settings.games_api_url}/v1/games/list",
            params={
                "model.sortToken": self.settings.live_fallback_sort_token,
                "model.maxRows": self.settings.live_fallback_max_ids,
            },
            label="games-list",
            diagnostics=diagnostics,
        )
        if not result.ok:
            return None
        ids = extract_content_ids(result.data)
        return ids[: self.settings.live_fallback_max_ids]

    async def fetch_metadata(
        self,
        ids: Sequence[int],
        diagnostics: Optional[FetchDiagnostics] = None,
    ) -> Optional[list[dict[str, Any]]]:
        """게임 메타데이터 배치 조회

        Returns:
            메타데이터 레코드, 모든 배치가 실패하면 None
        """
        if not ids:
            return []

        async def fetch_batch(
            batch: list[int], index: int
        ) -> Optional[list[dict[str, Any]]]:
            result = await self.fetcher.call(
                f"{self.settings.games_api_url}/v1/games",
                params={"universeIds": ",".join(map(str, batch))},
                label=f"metadata-batch-{index}",
                diagnostics=diagnostics,
            )
            if not result.ok or not isinstance(result.data, dict):
                logger.warning(
                    f"Skipping metadata batch {index} ({len(batch)} ids)"
                )
                return None
            records = result.data.get("data")
            if not isinstance(records, list):
                return []
            return [record for record in records if isinstance(record, dict)]

        batches = await self._run_batches(ids, fetch_batch)
        if not batches:
            return None
        return [record for batch in batches for record in batch]

    async def fetch_icons(
        self,
        ids: Sequence[int],
        diagnostics: Optional[FetchDiagnostics] = None,
    ) -> dict[int, str]:
        """게임 아이콘 URL 배치 조회 (실패한 배치는 빈 URL)"""
        if not ids:
            return {}

        async def fetch_batch(batch: list[int], index: int) -> Optional[dict[int, str]]:
            result = await self.fetcher.call(
                f"{self.settings.thumbnails_api_url}/v1/games/icons",
                params={
                    "universeIds": ",".join(map(str, batch)),
                    "returnPolicy": "PlaceHolder",
                    "size": "150x150",
                    "format": "Png",
                    "isCircular": "false",
                },
                label=f"icons-batch-{index}",
                diagnostics=diagnostics,
            )
            if not result.ok:
                return None
            return parse_icon_urls(result.data)

        icons: dict[int, str] = {}
        for batch_icons in await self._run_batches(ids, fetch_batch):
            icons.update(batch_icons)
        return icons
