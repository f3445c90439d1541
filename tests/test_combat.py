from __future__ import annotations

import random

import pytest

from jellyjam.engine.cards import new_living, new_usable
from jellyjam.engine.combat import can_attack, can_defend, resolve_attack, roll_die, settle_attack
from jellyjam.engine.zones import Zones


def test_roll_meeting_defense_hits_for_full_damage() -> None:
    attacker = new_living(0, "bruiser", 2, 2, 3, "jelly")
    defender = new_living(1, "kibble", 4, 2, 3, "creature")
    out = resolve_attack(attacker, defender, roll=3)
    assert out.hit
    assert out.damage == 2
    assert defender.current_health == 2
    assert not out.destroyed


def test_roll_below_defense_misses() -> None:
    attacker = new_living(0, "bruiser", 2, 2, 3, "jelly")
    defender = new_living(1, "kibble", 4, 2, 3, "creature")
    out = resolve_attack(attacker, defender, roll=2)
    assert not out.hit
    assert out.damage == 0
    assert defender.current_health == 4


def test_health_is_clamped_at_zero() -> None:
    attacker = new_living(0, "oodalah", 1, 255, 3, "creature")
    defender = new_living(1, "rock", 4, 0, 2, "creature")
    out = resolve_attack(attacker, defender, roll=6)
    assert out.destroyed
    assert defender.current_health == 0
    assert out.defender_health == 0


def test_attack_sequence_is_reproducible_for_a_seed() -> None:
    def run(seed: int) -> list[tuple[int, bool, int]]:
        rng = random.Random(seed)
        attacker = new_living(0, "zor", 3, 1, 3, "creature")
        defender = new_living(1, "pao_larm", 30, 3, 3, "creature")
        out = []
        for _ in range(12):
            o = resolve_attack(attacker, defender, roll_die(rng))
            out.append((o.roll, o.hit, o.defender_health))
        return out

    assert run(2024) == [
        (4, True, 29),
        (2, False, 29),
        (6, True, 28),
        (5, True, 27),
        (3, True, 26),
        (2, False, 26),
        (6, True, 25),
        (4, True, 24),
        (6, True, 23),
        (3, True, 22),
        (5, True, 21),
        (2, False, 21),
    ]
    assert run(2024) == run(2024)


def test_usable_cards_cannot_fight() -> None:
    item = new_usable(0, "sharp_stick", "item")
    jumper = new_living(1, "jumper", 1, 0, 4, "jelly")
    assert not can_attack(item)
    assert not can_attack(jumper)
    assert can_defend(jumper)
    assert not can_defend(item)
    with pytest.raises(ValueError):
        resolve_attack(item, jumper, roll=6)


def test_settle_discards_destroyed_defender_and_its_mutations() -> None:
    zones = Zones.empty(random.Random(1), player_count=2)
    attacker = new_living(0, "spicy", 2, 2, 3, "jelly")
    defender = new_living(1, "flutter", 1, 1, 4, "jelly")
    mutation = new_usable(2, "tough", "mutation")
    defender.modifiers.append(mutation)

    out = resolve_attack(attacker, defender, roll=4)
    emptied = settle_attack(zones, out, 0, attacker, 1, defender)

    assert emptied
    assert zones.fields[0] == [attacker]
    assert zones.fields[1] == []
    assert zones.decks["jelly"] == [defender]
    assert zones.loot == [mutation]
    assert defender.modifiers == []


def test_settle_returns_survivor_to_its_field() -> None:
    zones = Zones.empty(random.Random(1), player_count=2)
    attacker = new_living(0, "shelly", 2, 1, 2, "jelly")
    defender = new_living(1, "rock", 4, 0, 2, "creature")
    out = resolve_attack(attacker, defender, roll=5)
    assert not settle_attack(zones, out, 0, attacker, 1, defender)
    assert zones.fields[1] == [defender]
    assert defender.current_health == 3
