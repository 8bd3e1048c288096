"""Catalog 도메인 모듈

추천 후보 콘텐츠와 태그 추출 규칙을 정의하는 도메인입니다.

구조:
    - types.py: ContentItem, CandidatePool
    - tags.py: 장르/키워드/구조 기반 태그 추출
"""

from app.domains.catalog.tags import (
    DEFAULT_TAG_TABLES,
    GENRE_TO_TAGS,
    KEYWORD_TAG_RULES,
    KeywordRule,
    TagTables,
    extract_tags,
)
from app.domains.catalog.types import CandidatePool, ContentItem

__all__ = [
    "CandidatePool",
    "ContentItem",
    "DEFAULT_TAG_TABLES",
    "GENRE_TO_TAGS",
    "KEYWORD_TAG_RULES",
    "KeywordRule",
    "TagTables",
    "extract_tags",
]
