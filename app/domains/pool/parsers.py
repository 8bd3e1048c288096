"""탐색 API 응답 파서

탐색 API 응답 스키마는 고정되어 있지 않아 같은 데이터가 여러 필드명과
중첩 구조로 내려옵니다. 알려진 구조별 추출 함수를 순서대로 시도하고
처음으로 비어 있지 않은 결과를 사용합니다.
"""

from typing import Any, Callable, NamedTuple, Optional, Sequence

from app.core.logging import get_logger

logger = get_logger(__name__)

IdExtractor = Callable[[Any], list[int]]

# 항목에서 ID를 찾는 필드 (앞쪽 우선)
ENTRY_ID_FIELDS = ("universeId", "contentId", "id", "placeId")
FLAT_LIST_FIELDS = ("experiences", "games", "contents", "data", "items")
NESTED_LIST_FIELDS = ("experiences", "games")
SORT_ID_FIELDS = ("topicId", "sortId", "token", "id")
SORT_NAME_FIELDS = ("sortDisplayName", "topic", "name", "token")


class SortRef(NamedTuple):
    """탐색 정렬 목록 참조"""

    sort_id: str
    name: str


def _as_dict(value: Any) -> Optional[dict[str, Any]]:
    return value if isinstance(value, dict) else None


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def coerce_id(value: Any) -> Optional[int]:
    """양의 정수 ID로 변환 (bool, 음수, 숫자가 아닌 문자열은 None)"""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, str) and value.strip().isdigit():
        parsed = int(value.strip())
        return parsed if parsed > 0 else None
    return None


def entry_id(entry: Any) -> Optional[int]:
    data = _as_dict(entry)
    if data is None:
        return None
    for field in ENTRY_ID_FIELDS:
        value = coerce_id(data.get(field))
        if value is not None:
            return value
    return None


def _ids_from(entries: Sequence[Any]) -> list[int]:
    return [value for value in map(entry_id, entries) if value is not None]


def extract_top_level_list(data: Any) -> list[int]:
    """[{...}, {...}]"""
    return _ids_from(_as_list(data))


def extract_flat(data: Any) -> list[int]:
    """{"experiences": [...]} / {"games": [...]} / ..."""
    root = _as_dict(data) or {}
    for field in FLAT_LIST_FIELDS:
        ids = _ids_from(_as_list(root.get(field)))
        if ids:
            return ids
    return []


def extract_nested_sorts(data: Any) -> list[int]:
    """{"sorts": [{"experiences": [...]}, ...]}"""
    root = _as_dict(data) or {}
    ids: list[int] = []
    for sort in _as_list(root.get("sorts")):
        sort_data = _as_dict(sort) or {}
        for field in NESTED_LIST_FIELDS:
            ids.extend(_ids_from(_as_list(sort_data.get(field))))
    return ids


def extract_recommendation_list(data: Any) -> list[int]:
    """{"recommendationList": [{"contentType": "Game", "contentId": 1}]}"""
    root = _as_dict(data) or {}
    ids = []
    for entry in _as_list(root.get("recommendationList")):
        entry_data = _as_dict(entry) or {}
        if entry_data.get("contentType") != "Game":
            continue
        value = coerce_id(entry_data.get("contentId"))
        if value is not None:
            ids.append(value)
    return ids


ID_EXTRACTORS: tuple[IdExtractor, ...] = (
    extract_top_level_list,
    extract_flat,
    extract_nested_sorts,
    extract_recommendation_list,
)


def extract_content_ids(
    data: Any, extractors: Sequence[IdExtractor] = ID_EXTRACTORS
) -> list[int]:
    """응답에서 콘텐츠 ID 추출 (중복 제거, 순서 유지)

    Returns:
        처음으로 결과를 낸 추출 함수의 ID 목록, 모두 실패하면 빈 목록
    """
    for extractor in extractors:
        ids = extractor(data)
        if ids:
            return list(dict.fromkeys(ids))

    logger.debug(f"No content ids found in response of type {type(data).__name__}")
    return []


def parse_sorts(data: Any) -> list[SortRef]:
    """get-sorts 응답에서 정렬 목록 추출"""
    root = _as_dict(data) or {}
    refs = []
    for sort in _as_list(root.get("sorts")):
        sort_data = _as_dict(sort)
        if sort_data is None:
            continue
        sort_id = next(
            (str(sort_data[f]) for f in SORT_ID_FIELDS if sort_data.get(f)),
            None,
        )
        if sort_id is None:
            continue
        name = next(
            (str(sort_data[f]) for f in SORT_NAME_FIELDS if sort_data.get(f)),
            sort_id,
        )
        refs.append(SortRef(sort_id=sort_id, name=name))
    return refs


def select_sorts(
    sorts: Sequence[SortRef], preferred: Sequence[str], limit: int
) -> list[SortRef]:
    """선호 토큰과 일치하는 정렬을 먼저, 나머지는 원래 순서로 채움"""
    selected: list[SortRef] = []
    for token in preferred:
        needle = token.lower()
        for sort in sorts:
            if sort in selected:
                continue
            if needle in sort.sort_id.lower() or needle in sort.name.lower():
                selected.append(sort)
                break
    for sort in sorts:
        if sort not in selected:
            selected.append(sort)
    return selected[:limit]


def parse_icon_urls(data: Any) -> dict[int, str]:
    """썸네일 응답에서 완료된 이미지 URL만 추출"""
    root = _as_dict(data) or {}
    icons = {}
    for entry in _as_list(root.get("data")):
        entry_data = _as_dict(entry) or {}
        target = coerce_id(entry_data.get("targetId"))
        url = entry_data.get("imageUrl")
        if target is not None and url and entry_data.get("state") == "Completed":
            icons[target] = str(url)
    return icons
