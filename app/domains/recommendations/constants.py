"""아키타입별 선호/비선호 태그 (읽기 전용)"""

from types import MappingProxyType
from typing import Mapping, NamedTuple

from app.domains.archetypes.types import ArchetypeKey


class TagAffinity(NamedTuple):
    want: tuple[str, ...]
    avoid: tuple[str, ...]


ARCHETYPE_TO_TAGS: Mapping[ArchetypeKey, TagAffinity] = MappingProxyType(
    {
        ArchetypeKey.EXPLORER: TagAffinity(
            want=("adventure", "openworld", "exploration", "story",
                  "quest", "horror", "survival", "mystery"),
            avoid=("idle", "afk", "simulator"),
        ),
        ArchetypeKey.GRINDER: TagAffinity(
            want=("simulator", "tycoon", "idle", "upgrade",
                  "farm", "grind", "incremental", "rebirth"),
            avoid=("pvp", "competitive"),
        ),
        ArchetypeKey.SOCIALIZER: TagAffinity(
            want=("social", "hangout", "party", "cafe",
                  "roleplay", "town", "life", "friends"),
            avoid=("pvp", "shooter", "fps"),
        ),
        ArchetypeKey.COMPETITOR: TagAffinity(
            want=("pvp", "fps", "shooter", "arena", "ranked",
                  "battle", "fighting", "combat", "war"),
            avoid=("idle", "afk", "hangout"),
        ),
        ArchetypeKey.BUILDER: TagAffinity(
            want=("build", "sandbox", "create", "design",
                  "craft", "construct", "creative", "architect"),
            avoid=("pvp", "shooter"),
        ),
        ArchetypeKey.TRADER: TagAffinity(
            want=("trade", "trading", "market", "economy",
                  "shop", "business", "tycoon", "money"),
            avoid=("obby", "parkour"),
        ),
        ArchetypeKey.ROLEPLAYER: TagAffinity(
            want=("roleplay", "rp", "life", "story", "family",
                  "school", "hospital", "brookhaven", "bloxburg"),
            avoid=("simulator", "idle", "pvp"),
        ),
        ArchetypeKey.CASUAL: TagAffinity(
            want=("obby", "minigame", "casual", "easy", "parkour",
                  "escape", "tower", "race", "fun"),
            avoid=("grind", "competitive", "ranked"),
        ),
    }
)
