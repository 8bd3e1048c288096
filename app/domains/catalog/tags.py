"""콘텐츠 태그 추출

장르 매핑, 이름/설명 키워드, 구조적 수치(최대 인원, 동시 접속자)로
콘텐츠의 태그 집합을 만듭니다. 순수 함수이며 같은 입력에 항상 같은
순서의 결과를 반환합니다.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, NamedTuple, Optional, Protocol


class Taggable(Protocol):
    name: str
    description: Optional[str]
    genre: Optional[str]
    max_players: Optional[int]
    current_activity: int


class KeywordRule(NamedTuple):
    """키워드 중 하나라도 포함되면 tag를 추가"""

    keywords: tuple[str, ...]
    tag: str


GENRE_TO_TAGS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "Adventure": ("adventure", "exploration"),
        "Horror": ("horror", "story"),
        "Survival": ("survival", "adventure"),
        "RPG": ("story", "quest", "adventure"),
        "Simulation": ("simulator",),
        "Tycoon": ("tycoon", "simulator", "business"),
        "Fighting": ("pvp", "fighting", "combat"),
        "FPS": ("fps", "shooter", "pvp"),
        "Sports": ("sports", "competitive"),
        "Town and City": ("social", "life", "roleplay", "town"),
        "Comedy": ("casual", "fun"),
        "Sci-Fi": ("adventure", "story"),
        "Fantasy": ("story", "roleplay", "adventure"),
        "Naval": ("adventure", "pvp"),
        "Military": ("pvp", "shooter", "battle"),
        "Building": ("build", "sandbox", "creative"),
        "Medieval": ("roleplay", "story", "pvp"),
        "All Genres": (),
    }
)

# 규칙 순서대로 검사 (여러 규칙이 같은 태그를 추가할 수 있음)
KEYWORD_TAG_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(("simulator", "sim"), "simulator"),
    KeywordRule(("tycoon",), "tycoon"),
    KeywordRule(("idle", "afk"), "idle"),
    KeywordRule(("obby", "obstacle"), "obby"),
    KeywordRule(("parkour",), "parkour"),
    KeywordRule(("roleplay", " rp ", " rp"), "roleplay"),
    KeywordRule(("pvp",), "pvp"),
    KeywordRule(("fps", "shooter", "gun"), "fps"),
    KeywordRule(("trade", "trading"), "trade"),
    KeywordRule(("build", "building", "construct"), "build"),
    KeywordRule(("sandbox",), "sandbox"),
    KeywordRule(("survival",), "survival"),
    KeywordRule(("horror", "scary"), "horror"),
    KeywordRule(("adventure", "quest"), "adventure"),
    KeywordRule(("hangout", "chill"), "hangout"),
    KeywordRule(("battle", "war", "fight"), "battle"),
    KeywordRule(("arena",), "arena"),
    KeywordRule(("escape",), "escape"),
    KeywordRule(("tower",), "tower"),
    KeywordRule(("race", "racing"), "race"),
    KeywordRule(("life", "town", "city"), "life"),
    KeywordRule(("story", "mystery"), "story"),
    KeywordRule(("school", "hospital", "cafe", "restaurant"), "social"),
    KeywordRule(("family", "adopt"), "family"),
    KeywordRule(("upgrade", "rebirth", "prestige"), "upgrade"),
    KeywordRule(("grind", "farm"), "grind"),
    KeywordRule(("minigame", "mini game"), "minigame"),
    KeywordRule(("easy", "casual", "simple"), "casual"),
    KeywordRule(("ranked", "competitive"), "ranked"),
)


@dataclass(frozen=True)
class TagTables:
    """태그 추출 규칙 묶음 (테스트에서 교체 가능)"""

    genre_tags: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: GENRE_TO_TAGS
    )
    keyword_rules: tuple[KeywordRule, ...] = KEYWORD_TAG_RULES
    social_capacity: int = 50
    popular_activity: int = 10_000


DEFAULT_TAG_TABLES = TagTables()


def extract_tags(
    item: Taggable, tables: TagTables = DEFAULT_TAG_TABLES
) -> tuple[str, ...]:
    """콘텐츠 태그 추출

    Args:
        item: 이름/설명/장르/최대 인원/동시 접속자를 가진 콘텐츠
        tables: 추출 규칙

    Returns:
        중복 없는 태그 (추가된 순서 유지)
    """
    # dict를 순서 보존 집합으로 사용
    tags: dict[str, None] = {}
    text = f"{item.name or ''} {item.description or ''}".lower()

    for tag in tables.genre_tags.get(item.genre or "", ()):
        tags[tag] = None

    for rule in tables.keyword_rules:
        if any(keyword in text for keyword in rule.keywords):
            tags[rule.tag] = None

    if (item.max_players or 0) >= tables.social_capacity:
        tags["social"] = None
        tags["party"] = None
    if (item.current_activity or 0) >= tables.popular_activity:
        tags["popular"] = None

    return tuple(tags)
