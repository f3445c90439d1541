from __future__ import annotations

from jellyjam.client.text import describe, format_card, wrap
from jellyjam.engine.cards import new_living, new_usable


def test_format_card_shows_stats_and_mutations() -> None:
    jelly = new_living(0, "junior", 2, 1, 3, "jelly", modifier_capacity=2)
    jelly.modifiers.append(new_usable(1, "strong", "mutation"))
    assert format_card(jelly) == "junior HP 2 DMG 1 DEF 3 +strong"
    assert format_card(new_usable(2, "shield", "item")) == "shield (item)"


def test_describe_summarizes_milestones() -> None:
    assert describe({"type": "GAME_ENDED", "winner": 1, "victories": [0, 3]}) == "*** P2 wins the match! ***"
    line = describe({"type": "ATTACK", "player": 0, "target": 2, "roll": 5, "hit": True, "damage": 2, "health": 1})
    assert line == "P1 attacks P3 (roll 5): hit for 2, health 1"
    assert describe({"type": "CARD_RECYCLED", "uid": 3, "to": "loot"}) is None
    tie = describe({"type": "NO_SURVIVOR", "round": 2, "winner": 1})
    assert tie is not None and "P2" in tie


def test_wrap_respects_width_and_line_cap() -> None:
    lines = wrap("one two three four five six seven eight nine ten", 10, max_lines=3)
    assert len(lines) == 3
    assert all(len(line) <= 10 for line in lines)
