from __future__ import annotations

import random
from dataclasses import dataclass, field

from .types import LIVING_CATEGORIES, CardDefinition, Category, EffectId


@dataclass(eq=False)
class Card:
    """One physical card instance.

    Instances compare by identity, never by value: two Bruisers with the same
    current stats are still two different cards. `uid` is stable for the whole
    match and is what the presentation layer and the event log refer to.
    """

    uid: int
    category: Category
    effect_id: EffectId
    base_health: int | None = None
    base_damage: int | None = None
    base_defense: int | None = None
    current_health: int | None = None
    current_damage: int | None = None
    current_defense: int | None = None
    modifier_capacity: int = 0
    modifiers: list["Card"] = field(default_factory=list)

    @property
    def living(self) -> bool:
        return self.category in LIVING_CATEGORIES

    @property
    def texture_key(self) -> str:
        return f"{self.category}/{self.effect_id}"

    def reset_stats(self) -> None:
        self.current_health = self.base_health
        self.current_damage = self.base_damage
        self.current_defense = self.base_defense

    def can_attach(self) -> bool:
        return len(self.modifiers) < self.modifier_capacity

    def same_face(self, other: "Card") -> bool:
        """Structural comparison: category, effect and current stats."""
        return (
            self.category == other.category
            and self.effect_id == other.effect_id
            and self.current_health == other.current_health
            and self.current_damage == other.current_damage
            and self.current_defense == other.current_defense
        )

    def __repr__(self) -> str:
        if self.living:
            return (
                f"Card#{self.uid}({self.texture_key} "
                f"{self.current_health}/{self.current_damage}/{self.current_defense})"
            )
        return f"Card#{self.uid}({self.texture_key})"


def new_living(
    uid: int,
    effect_id: EffectId,
    health: int,
    damage: int,
    defense: int,
    category: Category,
    modifier_capacity: int = 1,
) -> Card:
    return Card(
        uid=uid,
        category=category,
        effect_id=effect_id,
        base_health=health,
        base_damage=damage,
        base_defense=defense,
        current_health=health,
        current_damage=damage,
        current_defense=defense,
        modifier_capacity=modifier_capacity,
    )


def new_usable(uid: int, effect_id: EffectId, category: Category) -> Card:
    return Card(uid=uid, category=category, effect_id=effect_id)


def from_definition(uid: int, card: CardDefinition, rng: random.Random) -> Card:
    if not card.living:
        return new_usable(uid, card.effect_id, card.category)
    health = card.health
    if card.health_die is not None:
        health = rng.randint(1, card.health_die)
    assert health is not None and card.damage is not None and card.defense is not None
    return new_living(
        uid,
        card.effect_id,
        health,
        card.damage,
        card.defense,
        card.category,
        modifier_capacity=card.modifier_capacity,
    )
