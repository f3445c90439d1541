from __future__ import annotations

import pytest

from jellyjam.engine.effects import EffectContext, EffectRegistry
from jellyjam.engine.match import new_match, step
from jellyjam.engine.selection import RandomSelector
from jellyjam.paths import get_paths
from jellyjam.services.content import ContentService


def _load_catalog():
    paths = get_paths()
    return ContentService(paths.data_dir, paths.schema_dir).load_catalog()


def test_empty_registry_is_inert() -> None:
    catalog = _load_catalog()
    state = new_match(catalog, seed=8, effects=EffectRegistry())
    assert state is not None
    assert len(state.effects) == 0
    for _ in range(30):
        step(state, RandomSelector())
    assert not any(ev["type"] == "EFFECT_FIRED" for ev in state.event_log)


def test_unknown_phase_is_rejected() -> None:
    reg = EffectRegistry()
    with pytest.raises(ValueError):
        reg.register("on_tuesday", "zor", lambda ctx: None)  # type: ignore[arg-type]


def test_on_draw_fires_for_every_starting_card() -> None:
    catalog = _load_catalog()
    seen: list[str] = []
    reg = EffectRegistry()
    for effect_id in catalog.all_ids():
        reg.register("on_draw", effect_id, lambda ctx: seen.append(ctx.card.effect_id))
    assert len(reg) == 41

    state = new_match(catalog, seed=4, effects=reg)
    assert state is not None
    assert len(seen) == 4 * 5
    fired = [ev for ev in state.event_log if ev["type"] == "EFFECT_FIRED"]
    assert len(fired) == 20
    assert all(ev["phase"] == "on_draw" for ev in fired)


def test_on_any_runs_after_the_phase_hook() -> None:
    order: list[str] = []
    reg = EffectRegistry()
    reg.register("on_any", "zor", lambda ctx: order.append(f"any:{ctx.phase}"))
    reg.register("on_attack", "zor", lambda ctx: order.append("attack"))

    catalog = _load_catalog()
    state = new_match(catalog, seed=1)
    assert state is not None
    zor = next(c for c in state.zones.all_cards() if c.effect_id == "zor")
    count = reg.dispatch(EffectContext(state=state, phase="on_attack", player=0, card=zor))
    assert count == 2
    assert order == ["attack", "any:on_any"]
    assert reg.hooks_for("on_draw", "zor") == []


def test_on_enter_fires_when_cards_are_placed() -> None:
    catalog = _load_catalog()
    entered: list[int] = []
    reg = EffectRegistry()
    for effect_id in catalog.all_ids():
        reg.register("on_enter", effect_id, lambda ctx: entered.append(ctx.card.uid))

    state = new_match(catalog, seed=12, effects=reg)
    assert state is not None
    while state.phase == "placement":
        assert step(state, RandomSelector()).ok
    on_field = sorted(c.uid for f in state.zones.fields for c in f)
    assert sorted(entered) == on_field
