"""
Attack resolution.
One attack = one die roll against the defender's defense. A roll equal to or
above defense hits for the attacker's full current damage; anything lower
does nothing. Defenders reduced to 0 health are discarded with their
mutations, survivors go back to their field.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

from .cards import Card
from .zones import Zones


@dataclass(frozen=True)
class AttackOutcome:
    roll: int
    hit: bool
    damage: int
    defender_health: int
    destroyed: bool


def roll_die(rng: random.Random, sides: int = 6) -> int:
    return rng.randint(1, sides)


def can_attack(card: Card) -> bool:
    return card.current_damage is not None and card.current_damage > 0


def can_defend(card: Card) -> bool:
    return card.current_health is not None


def resolve_attack(attacker: Card, defender: Card, roll: int) -> AttackOutcome:
    """Apply one attack with a known roll. Mutates defender.current_health only."""
    if attacker.current_damage is None or defender.current_health is None or defender.current_defense is None:
        raise ValueError(f"{attacker!r} cannot attack {defender!r}")

    hit = roll >= defender.current_defense
    damage = 0
    if hit:
        damage = attacker.current_damage
        defender.current_health = max(0, defender.current_health - damage)
    return AttackOutcome(
        roll=roll,
        hit=hit,
        damage=damage,
        defender_health=defender.current_health,
        destroyed=defender.current_health <= 0,
    )


def settle_attack(
    zones: Zones,
    outcome: AttackOutcome,
    attacker_player: int,
    attacker: Card,
    target_player: int,
    defender: Card,
) -> bool:
    """Route both cards after an attack. Returns True if the target's field is now empty."""
    if outcome.destroyed:
        zones.discard_modifiers(defender)
        zones.recycle(defender)
    else:
        zones.move(defender, zones.fields[target_player])
    zones.move(attacker, zones.fields[attacker_player])
    return outcome.destroyed and not zones.fields[target_player]
