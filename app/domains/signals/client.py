"""사용자 프로필 업스트림 클라이언트

배지/그룹/계정 정보를 ResilientFetcher로 조회합니다.
호출 실패는 None으로 반환되며 예외를 던지지 않습니다.
"""

from datetime import datetime
from typing import Any, Optional

from app.core.config import Settings
from app.core.http import FetchDiagnostics, ResilientFetcher
from app.core.logging import get_logger
from app.core.utils.datetime import parse_iso
from app.domains.archetypes.types import Badge, GroupMembership

logger = get_logger(__name__)


def _records(data: Any) -> list[dict[str, Any]]:
    """{"data": [...]} 응답에서 dict 레코드만 추출"""
    if not isinstance(data, dict):
        return []
    records = data.get("data")
    if not isinstance(records, list):
        return []
    return [record for record in records if isinstance(record, dict)]


class ProfileSourceClient:
    """사용자 프로필 업스트림 클라이언트"""

    def __init__(self, fetcher: ResilientFetcher, settings: Settings):
        self.fetcher = fetcher
        self.settings = settings

    async def fetch_badges(
        self,
        user_id: int,
        limit: Optional[int] = None,
        diagnostics: Optional[FetchDiagnostics] = None,
    ) -> Optional[list[Badge]]:
        """배지 목록 (커서 페이지네이션)

        Returns:
            최대 limit개의 배지. 첫 페이지부터 실패하면 None,
            이후 페이지가 실패하면 그때까지 받은 배지.
        """
        limit = limit or self.settings.badge_fetch_limit
        url = f"{self.settings.badges_api_url}/v1/users/{user_id}/badges"
        badges: list[Badge] = []
        cursor = ""

        while len(badges) < limit:
            result = await self.fetcher.call(
                url,
                params={
                    "limit": self.settings.badge_page_size,
                    "sortOrder": "Desc",
                    "cursor": cursor,
                },
                label="badges",
                diagnostics=diagnostics,
            )
            if not result.ok:
                if not badges:
                    return None
                logger.warning(
                    f"Badge pagination stopped early for user {user_id} "
                    f"after {len(badges)} badges"
                )
                break

            for record in _records(result.data):
                awarder = record.get("awarder")
                badges.append(
                    Badge(
                        name=str(record.get("name") or ""),
                        description=record.get("description"),
                        awarder_id=(
                            awarder.get("id") if isinstance(awarder, dict) else None
                        ),
                    )
                )

            next_cursor = (
                result.data.get("nextPageCursor")
                if isinstance(result.data, dict)
                else None
            )
            if not next_cursor:
                break
            cursor = next_cursor

        return badges[:limit]

    async def fetch_groups(
        self, user_id: int, diagnostics: Optional[FetchDiagnostics] = None
    ) -> Optional[list[GroupMembership]]:
        """가입 그룹 목록"""
        result = await self.fetcher.call(
            f"{self.settings.groups_api_url}/v2/users/{user_id}/groups/roles",
            label="groups",
            diagnostics=diagnostics,
        )
        if not result.ok:
            return None

        groups = []
        for record in _records(result.data):
            group = record.get("group")
            if isinstance(group, dict) and group.get("name"):
                groups.append(GroupMembership(group_name=str(group["name"])))
        return groups

    async def fetch_account(
        self, user_id: int, diagnostics: Optional[FetchDiagnostics] = None
    ) -> Optional[dict[str, Any]]:
        """계정 정보 (created, name, displayName)"""
        result = await self.fetcher.call(
            f"{self.settings.users_api_url}/v1/users/{user_id}",
            label="account",
            diagnostics=diagnostics,
        )
        if not result.ok or not isinstance(result.data, dict):
            return None
        return result.data

    async def fetch_account_created(
        self, user_id: int, diagnostics: Optional[FetchDiagnostics] = None
    ) -> Optional[datetime]:
        account = await self.fetch_account(user_id, diagnostics)
        if account is None:
            return None
        return parse_iso(account.get("created"))

    async def resolve_username(self, username: str):
        """사용자 이름으로 사용자 조회

        Returns:
            (FetchResult, 첫 번째 일치 레코드 또는 None)
        """
        result = await self.fetcher.call(
            f"{self.settings.users_api_url}/v1/usernames/users",
            method="POST",
            json_body={"usernames": [username], "excludeBannedUsers": True},
            label="resolve_username",
        )
        if not result.ok:
            return result, None
        records = _records(result.data)
        return result, (records[0] if records else None)
