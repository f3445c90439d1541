from __future__ import annotations

import random

from jellyjam.engine.cards import new_living, new_usable
from jellyjam.engine.zones import Zones


def _zones() -> Zones:
    return Zones.empty(random.Random(3), player_count=2)


def test_draw_fresh_resets_stats() -> None:
    zones = _zones()
    c = new_living(0, "gum", 3, 1, 2, "jelly")
    c.current_health = 1
    zones.decks["jelly"].append(c)
    drawn = zones.draw_fresh("jelly")
    assert drawn is c
    assert c.current_health == 3
    assert zones.decks["jelly"] == []


def test_draw_from_empty_deck_returns_none() -> None:
    zones = _zones()
    assert zones.draw_fresh("creature") is None
    assert zones.draw_fresh("loot") is None
    assert zones.event_log[-1] == {"type": "DECK_EMPTY", "deck": "loot"}


def test_recycle_routes_by_category() -> None:
    zones = _zones()
    jelly = new_living(0, "sling", 2, 1, 4, "jelly")
    creature = new_living(1, "rock", 4, 0, 2, "creature")
    item = new_usable(2, "nab_net", "item")
    for c in (jelly, creature, item):
        zones.recycle(c)
    assert zones.decks["jelly"] == [jelly]
    assert len(zones.loot) == 2
    assert any(c is creature for c in zones.loot)
    assert any(c is item for c in zones.loot)


def test_detached_modifiers_land_in_loot() -> None:
    zones = _zones()
    jelly = new_living(0, "junior", 2, 1, 3, "jelly", modifier_capacity=2)
    mods = [new_usable(1, "strong", "mutation"), new_usable(2, "armor", "mutation")]
    jelly.modifiers.extend(mods)
    zones.fields[0].append(jelly)
    assert sorted(c.uid for c in zones.all_cards()) == [0, 1, 2]

    zones.discard_modifiers(jelly)
    assert jelly.modifiers == []
    assert sorted(c.uid for c in zones.loot) == [1, 2]
    assert sorted(c.uid for c in zones.all_cards()) == [0, 1, 2]


def test_move_appends() -> None:
    zones = _zones()
    c = new_usable(0, "shield", "item")
    zones.move(c, zones.hands[1])
    assert zones.hands[1] == [c]
