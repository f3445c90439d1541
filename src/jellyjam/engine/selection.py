from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Literal, Protocol, Union

from .cards import Card

if TYPE_CHECKING:
    from .match import MatchState

SelectReason = Literal[
    "place",
    "attach",
    "item",
    "attacker",
    "defender",
    "withdraw",
    "discard",
    "prize",
]

# A scripted card choice: candidate index, effect_id, or None to decline.
CardChoice = Union[int, str, None]


class Selector(Protocol):
    """Decides which card or player a choice resolves to.

    The engine only ever offers legal candidates and removes the chosen card
    itself. Returning None declines; for mandatory choices the engine asks
    again.
    """

    def choose_card(
        self,
        state: "MatchState",
        player: int,
        candidates: Sequence[Card],
        reason: SelectReason,
        optional: bool,
    ) -> Card | None: ...

    def choose_player(self, state: "MatchState", player: int, candidates: Sequence[int]) -> int | None: ...


class RandomSelector:
    """Uniform choice among candidates, drawn from the match RNG."""

    def choose_card(
        self,
        state: "MatchState",
        player: int,
        candidates: Sequence[Card],
        reason: SelectReason,
        optional: bool,
    ) -> Card | None:
        if not candidates:
            return None
        return state.rng.choice(list(candidates))

    def choose_player(self, state: "MatchState", player: int, candidates: Sequence[int]) -> int | None:
        if not candidates:
            return None
        return state.rng.choice(list(candidates))


class ScriptedSelector:
    """Plays back queued choices, then defers to `fallback` (or declines).

    Card choices are a candidate index, an effect_id (first candidate with that
    effect wins) or None. Player choices are player indices.
    """

    def __init__(
        self,
        cards: Iterable[CardChoice] = (),
        players: Iterable[int | None] = (),
        fallback: Selector | None = None,
    ) -> None:
        self.cards: list[CardChoice] = list(cards)
        self.players: list[int | None] = list(players)
        self.fallback = fallback

    def choose_card(
        self,
        state: "MatchState",
        player: int,
        candidates: Sequence[Card],
        reason: SelectReason,
        optional: bool,
    ) -> Card | None:
        if not self.cards:
            if self.fallback is not None:
                return self.fallback.choose_card(state, player, candidates, reason, optional)
            return None
        choice = self.cards.pop(0)
        if choice is None:
            return None
        if isinstance(choice, int):
            if 0 <= choice < len(candidates):
                return candidates[choice]
            return None
        for c in candidates:
            if c.effect_id == choice:
                return c
        return None

    def choose_player(self, state: "MatchState", player: int, candidates: Sequence[int]) -> int | None:
        if not self.players:
            if self.fallback is not None:
                return self.fallback.choose_player(state, player, candidates)
            return None
        return self.players.pop(0)


class SeatedSelector:
    """Routes each decision to the selector sitting in that player's seat."""

    def __init__(self, seats: Mapping[int, Selector], default: Selector) -> None:
        self.seats = dict(seats)
        self.default = default

    def for_player(self, player: int) -> Selector:
        return self.seats.get(player, self.default)

    def choose_card(
        self,
        state: "MatchState",
        player: int,
        candidates: Sequence[Card],
        reason: SelectReason,
        optional: bool,
    ) -> Card | None:
        return self.for_player(player).choose_card(state, player, candidates, reason, optional)

    def choose_player(self, state: "MatchState", player: int, candidates: Sequence[int]) -> int | None:
        return self.for_player(player).choose_player(state, player, candidates)
