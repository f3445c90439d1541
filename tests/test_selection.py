from __future__ import annotations

from jellyjam.engine.cards import new_living, new_usable
from jellyjam.engine.match import new_match, select_card, select_player
from jellyjam.engine.selection import RandomSelector, ScriptedSelector, SeatedSelector
from jellyjam.paths import get_paths
from jellyjam.services.content import ContentService


def _state():
    paths = get_paths()
    catalog = ContentService(paths.data_dir, paths.schema_dir).load_catalog()
    state = new_match(catalog, seed=3)
    assert state is not None
    return state


class _Counting:
    def __init__(self) -> None:
        self.calls = 0

    def choose_card(self, state, player, candidates, reason, optional):
        self.calls += 1
        return candidates[0]

    def choose_player(self, state, player, candidates):
        self.calls += 1
        return candidates[-1]


def test_select_card_removes_exactly_the_chosen_card() -> None:
    state = _state()
    a = new_living(100, "gum", 3, 1, 2, "jelly")
    b = new_living(101, "gum", 3, 1, 2, "jelly")
    item = new_usable(102, "shield", "item")
    zone = [a, item, b]

    chosen = select_card(state, ScriptedSelector(cards=[1]), 0, zone, lambda c: c.living, "place")
    assert chosen is b
    assert zone == [a, item]
    assert state.event_log[-1] == {"type": "DECISION", "player": 0, "reason": "place", "uid": 101}


def test_select_card_skips_the_selector_when_nothing_matches() -> None:
    state = _state()
    selector = _Counting()
    zone = [new_usable(100, "shield", "item")]
    assert select_card(state, selector, 0, zone, lambda c: c.living, "attacker") is None
    assert selector.calls == 0
    assert len(zone) == 1


def test_out_of_list_answers_are_rejected_then_retried() -> None:
    state = _state()
    zone = [new_living(100, "gum", 3, 1, 2, "jelly")]
    stranger = new_living(200, "gum", 3, 1, 2, "jelly")

    class _Stubborn:
        def __init__(self) -> None:
            self.answers = [stranger, zone[0]]

        def choose_card(self, state, player, candidates, reason, optional):
            return self.answers.pop(0)

        def choose_player(self, state, player, candidates):
            return None

    target = zone[0]
    assert select_card(state, _Stubborn(), 0, zone, lambda c: True, "withdraw") is target
    kinds = [ev["type"] for ev in state.event_log[-2:]]
    assert kinds == ["DECISION_REJECTED", "DECISION"]


def test_scripted_selector_matches_effect_ids() -> None:
    state = _state()
    zone = [new_living(100, "gum", 3, 1, 2, "jelly"), new_living(101, "zor", 3, 2, 3, "creature")]
    chosen = select_card(state, ScriptedSelector(cards=["zor"]), 0, zone, lambda c: True, "place")
    assert chosen is not None and chosen.effect_id == "zor"


def test_select_player_only_offers_qualifying_players() -> None:
    state = _state()
    selector = _Counting()
    assert select_player(state, selector, 0, lambda p: p in (1, 2)) == 2
    assert select_player(state, selector, 0, lambda p: False) is None
    assert selector.calls == 1


def test_seated_selector_routes_by_player() -> None:
    state = _state()
    human = _Counting()
    seated = SeatedSelector({1: human}, default=RandomSelector())
    zone = [new_living(100, "gum", 3, 1, 2, "jelly"), new_living(101, "gum", 3, 1, 2, "jelly")]
    assert seated.for_player(1) is human
    assert isinstance(seated.for_player(0), RandomSelector)
    first = zone[0]
    assert select_card(state, seated, 1, zone, lambda c: True, "place") is first
    assert human.calls == 1


def test_random_selector_picks_a_candidate() -> None:
    state = _state()
    zone = [new_living(100 + i, "gum", 3, 1, 2, "jelly") for i in range(5)]
    originals = list(zone)
    chosen = select_card(state, RandomSelector(), 0, zone, lambda c: True, "discard", optional=False)
    assert any(chosen is c for c in originals)
    assert len(zone) == 4
