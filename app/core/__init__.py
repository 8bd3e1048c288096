"""Core 모듈"""

from app.core.cache import (
    CacheDecodeError,
    CacheStore,
    CacheUnavailableError,
    InMemoryCacheStore,
)
from app.core.config import settings
from app.core.exceptions import (
    BadRequestException,
    BaseAPIException,
    ErrorCode,
    InternalServerException,
    NotFoundException,
    ServiceUnavailableException,
    UnauthorizedException,
)
from app.core.http import FetchDiagnostics, FetchResult, ResilientFetcher
from app.core.logging import get_logger, setup_logging

__all__ = [
    "settings",
    "CacheStore",
    "CacheDecodeError",
    "CacheUnavailableError",
    "InMemoryCacheStore",
    "ErrorCode",
    "BaseAPIException",
    "BadRequestException",
    "UnauthorizedException",
    "NotFoundException",
    "InternalServerException",
    "ServiceUnavailableException",
    "FetchDiagnostics",
    "FetchResult",
    "ResilientFetcher",
    "get_logger",
    "setup_logging",
]
