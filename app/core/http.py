"""타임아웃/재시도/429 백오프가 적용된 업스트림 호출

모든 외부 API 호출은 ResilientFetcher를 거칩니다.
호출 실패는 예외가 아니라 FetchResult(ok=False)로 반환되므로
호출 측에서 부분 데이터로 진행하거나 대체 경로로 전환할 수 있습니다.
"""

import asyncio
import json
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional

import httpx

from app.core.config import Settings
from app.core.logging import get_logger
from app.core.utils.time import elapsed_ms

logger = get_logger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]

# 오류 응답 본문 미리보기 길이
ERROR_PREVIEW_LENGTH = 300


@dataclass
class FetchResult:
    """업스트림 호출 결과

    Attributes:
        ok: 2xx 응답 수신 여부
        data: 파싱된 JSON (JSON이 아니면 원문 텍스트)
        status: 마지막 HTTP 상태 코드 (연결 실패 시 None)
        error: 실패 사유 ("timeout", 응답 본문 일부, 예외 메시지)
        duration_ms: 재시도를 포함한 전체 소요 시간
    """

    ok: bool
    data: Any = None
    status: Optional[int] = None
    error: Optional[str] = None
    duration_ms: int = 0


@dataclass
class FetchTrace:
    """진단용 호출 기록 한 건"""

    label: str
    url: str
    ok: bool
    status: Optional[int]
    error: Optional[str]
    duration_ms: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "url": self.url,
            "ok": self.ok,
            "status": self.status,
            "error": self.error,
            "duration_ms": self.duration_ms,
        }


@dataclass
class FetchDiagnostics:
    """요청 단위 진단 기록

    하나의 작업(풀 갱신, 추천 요청) 동안 명시적으로 전달되고
    결과와 함께 반환됩니다. 모듈 전역 상태를 두지 않습니다.
    """

    traces: list[FetchTrace] = field(default_factory=list)

    def record(self, label: str, url: str, result: FetchResult) -> None:
        self.traces.append(
            FetchTrace(
                label=label,
                url=url,
                ok=result.ok,
                status=result.status,
                error=result.error,
                duration_ms=result.duration_ms,
            )
        )

    @property
    def failures(self) -> list[FetchTrace]:
        return [trace for trace in self.traces if not trace.ok]

    def to_dict(self) -> dict[str, Any]:
        return {
            "requests": [trace.to_dict() for trace in self.traces],
            "failed": len(self.failures),
        }


def parse_retry_after(
    header: Optional[str], max_seconds: float = 30
) -> Optional[float]:
    """Retry-After 헤더를 초 단위로 파싱

    숫자 형식이고 (0, max_seconds] 범위일 때만 유효합니다.
    HTTP-date 형식이나 범위를 벗어난 값은 None을 반환하여
    지수 백오프로 대체하게 합니다.
    """
    if not header:
        return None
    try:
        seconds = float(header)
    except ValueError:
        return None
    if 0 < seconds <= max_seconds:
        return seconds
    return None


def _decode_body(response: httpx.Response) -> Any:
    text = response.text
    try:
        return json.loads(text)
    except ValueError:
        return text


class ResilientFetcher:
    """재시도 정책이 내장된 HTTP 호출기"""

    def __init__(
        self,
        client: httpx.AsyncClient,
        timeout_ms: int = 4000,
        max_retries: int = 2,
        initial_backoff_ms: int = 1000,
        max_retry_after_seconds: float = 30,
        sleep: SleepFunc = asyncio.sleep,
    ):
        """
        Args:
            client: 공유 httpx 클라이언트
            timeout_ms: 시도당 타임아웃 (밀리초)
            max_retries: 재시도 횟수 (총 시도 = 1 + max_retries)
            initial_backoff_ms: 첫 백오프 (이후 2배씩 증가)
            max_retry_after_seconds: 허용하는 Retry-After 상한
            sleep: 대기 함수 (테스트에서 교체)
        """
        self.client = client
        self.timeout_ms = timeout_ms
        self.max_retries = max_retries
        self.initial_backoff_ms = initial_backoff_ms
        self.max_retry_after_seconds = max_retry_after_seconds
        self._sleep = sleep

    @classmethod
    def from_settings(
        cls, client: httpx.AsyncClient, settings: Settings
    ) -> "ResilientFetcher":
        return cls(
            client=client,
            timeout_ms=settings.upstream_timeout_ms,
            max_retries=settings.upstream_max_retries,
            initial_backoff_ms=settings.upstream_initial_backoff_ms,
            max_retry_after_seconds=settings.upstream_max_retry_after_seconds,
        )

    def _backoff_seconds(self, attempt: int) -> float:
        return self.initial_backoff_ms * (2**attempt) / 1000

    async def call(
        self,
        url: str,
        *,
        method: str = "GET",
        params: Optional[dict[str, Any]] = None,
        json_body: Optional[Any] = None,
        timeout_ms: Optional[int] = None,
        max_retries: Optional[int] = None,
        label: Optional[str] = None,
        diagnostics: Optional[FetchDiagnostics] = None,
    ) -> FetchResult:
        """업스트림 호출

        Args:
            url: 요청 URL
            method: HTTP 메서드
            params: 쿼리 파라미터
            json_body: JSON 요청 본문
            timeout_ms: 시도당 타임아웃 (기본값 덮어쓰기)
            max_retries: 재시도 횟수 (기본값 덮어쓰기)
            label: 진단 기록용 이름
            diagnostics: 호출 기록을 누적할 진단 객체

        Returns:
            FetchResult: 호출 결과 (예외를 던지지 않음)
        """
        timeout = (timeout_ms or self.timeout_ms) / 1000
        retries = self.max_retries if max_retries is None else max_retries

        start = time.perf_counter()
        last_error: Optional[str] = None
        last_status: Optional[int] = None
        result: Optional[FetchResult] = None

        for attempt in range(retries + 1):
            has_next = attempt < retries
            try:
                response = await self.client.request(
                    method,
                    url,
                    params=params,
                    json=json_body,
                    timeout=timeout,
                )
            except httpx.TimeoutException:
                last_error = "timeout"
            except httpx.HTTPError as e:
                last_error = str(e) or type(e).__name__
            else:
                last_status = response.status_code

                if response.status_code == 429 and has_next:
                    delay = parse_retry_after(
                        response.headers.get("Retry-After"),
                        self.max_retry_after_seconds,
                    )
                    if delay is None:
                        delay = self._backoff_seconds(attempt)
                    logger.warning(
                        f"Rate limited by upstream ({url}), "
                        f"retrying in {delay:.1f}s"
                    )
                    await self._sleep(delay)
                    continue

                if response.status_code >= 500 and has_next:
                    await self._sleep(self._backoff_seconds(attempt))
                    continue

                if response.is_success:
                    result = FetchResult(
                        ok=True,
                        data=_decode_body(response),
                        status=response.status_code,
                        duration_ms=int(elapsed_ms(start)),
                    )
                else:
                    # 재시도 대상이 아닌 오류 (429/5xx 제외 4xx, 또는 마지막 시도)
                    result = FetchResult(
                        ok=False,
                        status=response.status_code,
                        error=response.text[:ERROR_PREVIEW_LENGTH],
                        duration_ms=int(elapsed_ms(start)),
                    )
                break

            if has_next:
                await self._sleep(self._backoff_seconds(attempt))

        if result is None:
            result = FetchResult(
                ok=False,
                status=last_status,
                error=last_error,
                duration_ms=int(elapsed_ms(start)),
            )

        if not result.ok:
            logger.warning(
                f"Upstream call failed: {label or url} "
                f"(status={result.status}, error={result.error})"
            )
        if diagnostics is not None:
            diagnostics.record(label or url, url, result)

        return result
