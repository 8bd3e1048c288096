"""후보 풀 수동 갱신 스크립트

실제 업스트림 API를 호출해 후보 풀을 한 번 갱신하고 결과를 출력합니다.
CACHE_BACKEND=redis 환경에서 실행해야 서버와 같은 풀을 갱신합니다.

Usage::

    python -m scripts.refresh_pool
"""

import asyncio
import sys

import httpx

from app.core.cache import create_cache_store
from app.core.config import settings
from app.core.http import ResilientFetcher
from app.core.logging import setup_logging
from app.domains.pool.client import DiscoveryClient
from app.domains.pool.service import CandidatePoolManager, CandidatePoolStore


async def refresh() -> bool:
    """풀 갱신 1회 실행"""
    print("=" * 60)
    print("🔄 후보 풀 갱신")
    print("=" * 60)
    print(f"  캐시 백엔드: {settings.cache_backend}")
    print(f"  캐시 키: {settings.pool_cache_key}")
    print(f"  필터: current_activity >= {settings.pool_min_activity}")

    cache = create_cache_store(settings)
    async with httpx.AsyncClient(headers={"Accept": "application/json"}) as client:
        manager = CandidatePoolManager(
            DiscoveryClient(ResilientFetcher.from_settings(client, settings), settings),
            CandidatePoolStore(cache, settings),
            settings,
        )
        result = await manager.refresh_pool()
    await cache.close()

    print("\n" + "=" * 60)
    print("📊 갱신 결과")
    print("=" * 60)
    print(f"  결과: {result.outcome.value}")
    print(f"  발견: {result.counts.fetched}")
    print(f"  메타데이터: {result.counts.enriched}")
    print(f"  저장: {result.counts.filtered}")
    for sample in result.sample:
        print(f"    - {sample.name} ({sample.current_activity}명) {sample.tags}")
    if result.error:
        print(f"\n❌ {result.error}")
    print(f"\n  업스트림 호출 실패: {result.diagnostics.get('failed', 0)}건")

    return result.success


if __name__ == "__main__":
    setup_logging()
    success = asyncio.run(refresh())
    sys.exit(0 if success else 1)
