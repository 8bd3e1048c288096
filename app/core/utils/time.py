"""처리 시간 측정 유틸리티

요청 처리 시간(미들웨어)과 업스트림 호출 시간(ResilientFetcher)에 사용합니다.
"""

import time
from contextlib import contextmanager
from typing import Generator


def elapsed_ms(start_time: float) -> float:
    """perf_counter() 시작 시점부터의 경과 시간 (밀리초)"""
    return (time.perf_counter() - start_time) * 1000


@contextmanager
def measure_time() -> Generator[dict[str, float], None, None]:
    """블록 실행 시간을 timer["elapsed_ms"]에 기록

    예외가 발생해도 경과 시간은 기록됩니다.
    """
    timer = {"elapsed_ms": 0.0}
    start = time.perf_counter()
    try:
        yield timer
    finally:
        timer["elapsed_ms"] = elapsed_ms(start)
