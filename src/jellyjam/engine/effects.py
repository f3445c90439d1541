"""Phase-indexed hook table for per-card abilities.

Nothing is registered by default: every (phase, effect_id) pair is a no-op
until a hook is added. The match fires a phase for a card, then `on_any`.

Two effects have known rules that are not enforced here yet:
  zor      on_damaged  cannot attack until it takes damage
  oodalah  on_attack   nothing survives a hit (its damage value already
                       guarantees this)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

from .cards import Card

if TYPE_CHECKING:
    from .match import MatchState

Phase = Literal[
    "on_draw",
    "on_discard",
    "on_bounce",
    "on_turn_start",
    "on_turn_end",
    "on_enter",
    "on_exit",
    "on_attack",
    "on_damaged",
    "on_any",
]

PHASES: tuple[Phase, ...] = (
    "on_draw",
    "on_discard",
    "on_bounce",
    "on_turn_start",
    "on_turn_end",
    "on_enter",
    "on_exit",
    "on_attack",
    "on_damaged",
    "on_any",
)


@dataclass(frozen=True)
class EffectContext:
    state: "MatchState"
    phase: Phase
    player: int
    card: Card
    other: Card | None = None


EffectHook = Callable[[EffectContext], None]


class EffectRegistry:
    def __init__(self) -> None:
        self._hooks: dict[tuple[Phase, str], list[EffectHook]] = {}

    def register(self, phase: Phase, effect_id: str, hook: EffectHook) -> None:
        if phase not in PHASES:
            raise ValueError(f"Unknown phase: {phase}")
        self._hooks.setdefault((phase, effect_id), []).append(hook)

    def hooks_for(self, phase: Phase, effect_id: str) -> list[EffectHook]:
        return list(self._hooks.get((phase, effect_id), []))

    def dispatch(self, ctx: EffectContext) -> int:
        """Run the hooks for ctx.phase and then on_any. Returns how many ran."""
        fired = 0
        for hook in self.hooks_for(ctx.phase, ctx.card.effect_id):
            hook(ctx)
            fired += 1
        if ctx.phase != "on_any":
            any_ctx = EffectContext(
                state=ctx.state, phase="on_any", player=ctx.player, card=ctx.card, other=ctx.other
            )
            for hook in self.hooks_for("on_any", ctx.card.effect_id):
                hook(any_ctx)
                fired += 1
        return fired

    def __len__(self) -> int:
        return sum(len(v) for v in self._hooks.values())
