from __future__ import annotations

from jellyjam.engine.match import MatchConfig, new_match, run_match
from jellyjam.engine.selection import RandomSelector
from jellyjam.engine.serialize import snapshot
from jellyjam.paths import get_paths
from jellyjam.services.content import ContentService


def _load_catalog():
    paths = get_paths()
    return ContentService(paths.data_dir, paths.schema_dir).load_catalog()


def test_same_seed_replays_the_same_match() -> None:
    catalog = _load_catalog()
    seed = 424242
    config = MatchConfig(player_count=4, victory_threshold=2)

    state1 = new_match(catalog, seed=seed, config=config)
    state2 = new_match(catalog, seed=seed, config=config)
    assert state1 is not None and state2 is not None
    assert snapshot(state1) == snapshot(state2)

    run_match(state1, RandomSelector())
    run_match(state2, RandomSelector())

    assert state1.phase == "game_over"
    assert snapshot(state1) == snapshot(state2)
    assert state1.event_log == state2.event_log


def test_partial_runs_agree_step_for_step() -> None:
    catalog = _load_catalog()
    state1 = new_match(catalog, seed=99)
    state2 = new_match(catalog, seed=99)
    assert state1 is not None and state2 is not None
    run_match(state1, RandomSelector(), max_steps=40)
    run_match(state2, RandomSelector(), max_steps=40)
    assert snapshot(state1) == snapshot(state2)
