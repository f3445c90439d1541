from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

Category = Literal["jelly", "creature", "mutation", "item"]

CATEGORIES: tuple[Category, ...] = ("jelly", "creature", "mutation", "item")
LIVING_CATEGORIES: tuple[Category, ...] = ("jelly", "creature")

EffectId = Literal[
    # jellies
    "bruiser",
    "spicy",
    "shelly",
    "flutter",
    "jambler",
    "jumper",
    "gum",
    "chilli",
    "junior",
    "sling",
    # creatures
    "zor",
    "oodalah",
    "rock",
    "rogue_jellies",
    "torble",
    "jammie",
    "slime",
    "jim",
    "kibble",
    "taki",
    "pao_larm",
    # mutations
    "pitiful_gaze",
    "strong",
    "tough",
    "fast",
    "sucker",
    "armor",
    "willpower",
    "icebreaker",
    "hazardous",
    "super",
    # items
    "goober_fruit",
    "jelly_jabber",
    "jelly_jail",
    "angelly",
    "powder_jelly",
    "sharp_stick",
    "shield",
    "onedesix",
    "sticky_snatcher",
    "nab_net",
]


@dataclass(frozen=True)
class CardDefinition:
    """One catalogue entry. Living entries carry stats, usable entries do not."""

    effect_id: EffectId
    category: Category
    name: str
    rules_text: str
    health: int | None = None
    damage: int | None = None
    defense: int | None = None
    # Health rolled on a die of this many sides when the instance is created.
    health_die: int | None = None
    modifier_capacity: int = 0

    @property
    def living(self) -> bool:
        return self.category in LIVING_CATEGORIES

    @property
    def texture_key(self) -> str:
        return f"{self.category}/{self.effect_id}"


@dataclass(frozen=True)
class CardCatalog:
    """Immutable catalogue used to seed the four source decks."""

    cards: dict[str, CardDefinition]

    def get(self, effect_id: str) -> CardDefinition:
        return self.cards[effect_id]

    def all_ids(self) -> Sequence[str]:
        return list(self.cards.keys())

    def by_category(self, category: Category) -> list[CardDefinition]:
        return [c for c in self.cards.values() if c.category == category]
