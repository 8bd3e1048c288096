"""미들웨어 모듈"""

from app.core.middlewares.logging import EXCLUDE_PATHS, LoggingMiddleware

__all__ = [
    "EXCLUDE_PATHS",
    "LoggingMiddleware",
]
