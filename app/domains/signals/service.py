"""Signals 도메인 서비스

사용자 ID 검증과 프로필 신호 수집을 담당합니다.
배지/그룹/계정 호출은 동시에 실행되며, 일부가 실패해도
성공한 결과만으로 SignalBundle을 구성합니다.
"""

import asyncio
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from app.core.http import FetchDiagnostics
from app.core.logging import get_logger
from app.domains.archetypes.types import Badge, GroupMembership, SignalBundle
from app.domains.signals.client import ProfileSourceClient
from app.domains.signals.exceptions import (
    InvalidUserIdException,
    InvalidUsernameException,
    UserLookupUnavailableException,
    UserNotFoundException,
)

logger = get_logger(__name__)

_USER_ID_PATTERN = re.compile(r"^\d{1,20}$")
_USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]{3,20}$")

SIGNAL_SOURCES = ("badges", "groups", "account")


def validate_user_id(user_id: str) -> int:
    """사용자 ID 검증

    Raises:
        InvalidUserIdException: 숫자가 아니거나 20자리를 넘는 경우
    """
    value = (user_id or "").strip()
    if not _USER_ID_PATTERN.match(value):
        raise InvalidUserIdException(user_id)
    return int(value)


def validate_username(username: str) -> str:
    """사용자 이름 검증 (영문/숫자/밑줄 3~20자)"""
    value = (username or "").strip()
    if not _USERNAME_PATTERN.match(value):
        raise InvalidUsernameException(username)
    return value


@dataclass
class CollectedSignals:
    """신호 수집 결과

    Attributes:
        bundle: 프로파일링 입력 (실패한 항목은 빈 값)
        available: 출처별 호출 성공 여부
        diagnostics: 호출 기록
    """

    bundle: SignalBundle
    available: dict[str, bool] = field(default_factory=dict)
    diagnostics: FetchDiagnostics = field(default_factory=FetchDiagnostics)

    @property
    def is_empty_failure(self) -> bool:
        """모든 출처 호출이 실패했는지 여부"""
        return not any(self.available.get(source) for source in SIGNAL_SOURCES)


class SignalCollector:
    """프로필 신호 수집기"""

    def __init__(self, client: ProfileSourceClient):
        self.client = client

    @staticmethod
    def _settled(source: str, outcome: Any) -> Any:
        # gather(return_exceptions=True) 결과에서 예외를 실패로 변환
        if isinstance(outcome, Exception):
            logger.warning(
                f"Signal source '{source}' raised "
                f"{type(outcome).__name__}: {outcome}"
            )
            return None
        return outcome

    async def collect(
        self,
        user_id: int,
        diagnostics: Optional[FetchDiagnostics] = None,
    ) -> CollectedSignals:
        """배지/그룹/계정 정보를 동시에 수집

        Args:
            user_id: 검증된 사용자 ID
            diagnostics: 호출 기록을 누적할 진단 객체

        Returns:
            CollectedSignals: 부분 실패를 포함한 수집 결과
        """
        diagnostics = diagnostics if diagnostics is not None else FetchDiagnostics()

        outcomes = await asyncio.gather(
            self.client.fetch_badges(user_id, diagnostics=diagnostics),
            self.client.fetch_groups(user_id, diagnostics=diagnostics),
            self.client.fetch_account_created(user_id, diagnostics=diagnostics),
            return_exceptions=True,
        )
        badges: Optional[list[Badge]] = self._settled("badges", outcomes[0])
        groups: Optional[list[GroupMembership]] = self._settled("groups", outcomes[1])
        created: Optional[datetime] = self._settled("account", outcomes[2])

        available = {
            "badges": badges is not None,
            "groups": groups is not None,
            "account": created is not None,
        }
        missing = [source for source, ok in available.items() if not ok]
        if missing:
            logger.warning(
                f"Partial signals for user {user_id}: unavailable={missing}"
            )

        bundle = SignalBundle(
            badges=badges or [],
            groups=groups or [],
            account_created_at=created,
        )
        logger.info(
            f"Collected signals for user {user_id}: "
            f"badges={bundle.badge_count}, groups={bundle.group_count}"
        )
        return CollectedSignals(
            bundle=bundle, available=available, diagnostics=diagnostics
        )


class UserResolver:
    """사용자 이름 → 사용자 ID 조회"""

    def __init__(self, client: ProfileSourceClient):
        self.client = client

    async def resolve(self, username: str) -> dict[str, Any]:
        """사용자 이름 조회

        Raises:
            InvalidUsernameException: 이름 형식이 올바르지 않은 경우
            UserNotFoundException: 일치하는 사용자가 없는 경우
            UserLookupUnavailableException: 업스트림 호출 실패
        """
        name = validate_username(username)
        result, record = await self.client.resolve_username(name)
        if not result.ok:
            raise UserLookupUnavailableException(result.status)
        if record is None or record.get("id") is None:
            raise UserNotFoundException(name)

        return {
            "id": int(record["id"]),
            "name": record.get("name") or name,
            "display_name": record.get("displayName"),
        }
