"""아키타입 키워드 및 문구 (읽기 전용)"""

from types import MappingProxyType
from typing import Mapping

from app.domains.archetypes.types import ArchetypeKey

# 배지/그룹 텍스트에서 찾는 아키타입별 키워드
ARCHETYPE_KEYWORDS: Mapping[ArchetypeKey, tuple[str, ...]] = MappingProxyType(
    {
        ArchetypeKey.EXPLORER: (
            "adventure", "explore", "discover", "world",
            "quest", "mystery", "horror", "survival",
        ),
        ArchetypeKey.GRINDER: (
            "simulator", "tycoon", "idle", "upgrade",
            "farm", "grind", "rebirth",
        ),
        ArchetypeKey.SOCIALIZER: (
            "social", "hangout", "party", "cafe",
            "roleplay", "town", "life", "friends",
        ),
        ArchetypeKey.COMPETITOR: (
            "pvp", "fps", "shooter", "arena", "ranked",
            "battle", "fighting", "combat", "war",
        ),
        ArchetypeKey.BUILDER: (
            "build", "sandbox", "create", "design",
            "craft", "construct", "creative",
        ),
        ArchetypeKey.TRADER: (
            "trade", "trading", "market", "economy",
            "shop", "business", "tycoon", "money",
        ),
        ArchetypeKey.ROLEPLAYER: (
            "roleplay", "rp", "life", "story",
            "family", "school", "hospital",
        ),
        ArchetypeKey.CASUAL: (
            "obby", "minigame", "casual", "easy", "parkour",
            "escape", "tower", "race", "fun",
        ),
    }
)

# 1순위 아키타입별 추천 사유 문구
ARCHETYPE_REASONS: Mapping[ArchetypeKey, str] = MappingProxyType(
    {
        ArchetypeKey.EXPLORER: "Great for discovering new adventures",
        ArchetypeKey.GRINDER: "Perfect for long-term progression",
        ArchetypeKey.SOCIALIZER: "Ideal for meeting new friends",
        ArchetypeKey.COMPETITOR: "Challenge yourself against others",
        ArchetypeKey.BUILDER: "Express your creativity",
        ArchetypeKey.TRADER: "Master the in-game economy",
        ArchetypeKey.ROLEPLAYER: "Immerse yourself in stories",
        ArchetypeKey.CASUAL: "Quick fun without commitment",
    }
)

DEFAULT_REASON = "Suggested for you"


def recommendation_reason(archetype: ArchetypeKey) -> str:
    """1순위 아키타입에 맞는 추천 사유"""
    return ARCHETYPE_REASONS.get(archetype, DEFAULT_REASON)
