from __future__ import annotations

import random
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Iterable, Literal

from .cards import Card, from_definition
from .combat import can_attack, can_defend, resolve_attack, roll_die, settle_attack
from .effects import EffectContext, EffectRegistry, Phase
from .selection import SelectReason, Selector
from .types import CATEGORIES, CardCatalog, Category
from .zones import Event, Zones, take

MatchPhase = Literal["placement", "turn", "cleanup", "round_end", "prize", "redraw", "game_over"]

MAX_DECISION_ATTEMPTS = 8


class DecisionError(RuntimeError):
    pass


@dataclass(frozen=True)
class MatchConfig:
    player_count: int = 4
    victory_threshold: int = 3
    hand_limit: int = 8
    placement_cards: int = 2
    die_sides: int = 6
    starting_hand: tuple[tuple[Category, int], ...] = (
        ("jelly", 2),
        ("creature", 1),
        ("mutation", 1),
        ("item", 1),
    )


@dataclass
class StepResult:
    ok: bool
    events: list[Event]
    error: str | None = None


@dataclass
class MatchState:
    config: MatchConfig
    seed: int
    rng: random.Random
    zones: Zones
    effects: EffectRegistry
    player_victories: list[int]
    placed_counts: list[int]
    phase: MatchPhase = "placement"
    current_player: int = 0
    current_round: int = 1
    placement_start: int = 0
    player_placement: list[int] = field(default_factory=list)
    prize_queue: list[int] = field(default_factory=list)
    human_players: frozenset[int] = frozenset()
    winner: int | None = None
    event_log: list[Event] = field(default_factory=list)

    @property
    def player_count(self) -> int:
        return self.config.player_count

    @property
    def victory_threshold(self) -> int:
        return self.config.victory_threshold

    def is_human(self, player: int) -> bool:
        return player in self.human_players

    def active_players(self) -> list[int]:
        """Players that still have cards on their field."""
        return [p for p in range(self.player_count) if self.zones.fields[p]]


def _log(state: MatchState, event: Event) -> None:
    state.event_log.append(event)


def _fire(state: MatchState, phase: Phase, player: int, card: Card, other: Card | None = None) -> None:
    fired = state.effects.dispatch(EffectContext(state=state, phase=phase, player=player, card=card, other=other))
    if fired:
        _log(
            state,
            {"type": "EFFECT_FIRED", "phase": phase, "player": player, "uid": card.uid, "hooks": fired},
        )


def select_card(
    state: MatchState,
    selector: Selector,
    player: int,
    zone: list[Card],
    predicate: Callable[[Card], bool],
    reason: SelectReason,
    optional: bool = True,
) -> Card | None:
    """Ask `player` to pick a card of `zone` matching `predicate` and remove it.

    Returns None when nothing matches, or when an optional choice is declined.
    """
    candidates = [c for c in zone if predicate(c)]
    if not candidates:
        return None
    for _ in range(MAX_DECISION_ATTEMPTS):
        choice = selector.choose_card(state, player, candidates, reason, optional)
        if choice is None:
            if optional:
                _log(state, {"type": "DECISION", "player": player, "reason": reason, "uid": None})
                return None
        elif any(choice is c for c in candidates) and take(zone, choice):
            _log(state, {"type": "DECISION", "player": player, "reason": reason, "uid": choice.uid})
            return choice
        _log(
            state,
            {
                "type": "DECISION_REJECTED",
                "player": player,
                "reason": reason,
                "uid": choice.uid if choice is not None else None,
            },
        )
    if optional:
        return None
    raise DecisionError(f"Player {player} made no valid '{reason}' choice.")


def select_player(
    state: MatchState, selector: Selector, player: int, predicate: Callable[[int], bool]
) -> int | None:
    """Ask `player` to pick a player index matching `predicate`.

    Never loops without a qualifying player; returns None if there is none or
    the selector keeps answering outside the candidates.
    """
    candidates = [p for p in range(state.player_count) if predicate(p)]
    if not candidates:
        return None
    for _ in range(MAX_DECISION_ATTEMPTS):
        choice = selector.choose_player(state, player, candidates)
        if choice in candidates:
            _log(state, {"type": "DECISION", "player": player, "reason": "target", "target": choice})
            return choice
        _log(state, {"type": "DECISION_REJECTED", "player": player, "reason": "target", "target": choice})
    return None


def _draw_to_hand(state: MatchState, player: int, source: str) -> Card | None:
    card = state.zones.draw_fresh(source)
    if card is None:
        return None
    state.zones.move(card, state.zones.hands[player])
    _log(state, {"type": "CARD_DRAWN", "player": player, "deck": source, "uid": card.uid})
    _fire(state, "on_draw", player, card)
    return card


def _refill_prize_pool(state: MatchState) -> None:
    zones = state.zones
    target = state.player_count - 1
    while len(zones.prize_pool) < target:
        card = zones.draw_fresh("loot")
        if card is None:
            break
        zones.move(card, zones.prize_pool)
    _log(state, {"type": "PRIZE_POOL_REFILLED", "size": len(zones.prize_pool)})


def _place(state: MatchState, player: int, reason: str) -> None:
    """Record `player` in this round's placement list (once)."""
    if player in state.player_placement:
        return
    state.player_placement.append(player)
    _log(state, {"type": "PLAYER_PLACED", "player": player, "reason": reason})


# --- placement ---------------------------------------------------------------


def _step_placement(state: MatchState, selector: Selector) -> None:
    cfg = state.config
    zones = state.zones
    player = state.current_player
    hand = zones.hands[player]

    if state.placed_counts[player] < cfg.placement_cards:
        card = select_card(state, selector, player, hand, lambda c: c.living, "place", optional=False)
        if card is None:
            _log(
                state,
                {"type": "PLACEMENT_SHORT", "player": player, "placed": state.placed_counts[player]},
            )
        else:
            zones.move(card, zones.fields[player])
            state.placed_counts[player] += 1
            _log(state, {"type": "CARD_PLACED", "player": player, "uid": card.uid})
            _fire(state, "on_enter", player, card)
            if card.can_attach():
                mod = select_card(
                    state, selector, player, hand, lambda c: c.category == "mutation", "attach"
                )
                if mod is not None:
                    card.modifiers.append(mod)
                    _log(
                        state,
                        {"type": "MUTATION_ATTACHED", "player": player, "uid": card.uid, "mutation": mod.uid},
                    )

    if state.placed_counts[player] < cfg.placement_cards and any(c.living for c in hand):
        return

    state.current_player = (player + 1) % state.player_count
    if state.current_player != state.placement_start:
        return

    # Everyone has placed; the player who started placement takes the first turn.
    for p in range(state.player_count):
        if not zones.fields[p]:
            _place(state, p, "no_cards")
    state.phase = "turn"
    _log(state, {"type": "PLACEMENT_DONE", "first_player": state.current_player})


# --- turn --------------------------------------------------------------------


def _use_item(state: MatchState, selector: Selector, player: int) -> bool:
    zones = state.zones
    own_field = zones.fields[player]
    card = select_card(state, selector, player, own_field, lambda c: c.category == "item", "item")
    if card is None:
        return False
    _fire(state, "on_exit", player, card)
    zones.discard_modifiers(card)
    zones.recycle_to_loot(card)
    _log(state, {"type": "ITEM_USED", "player": player, "uid": card.uid})
    _fire(state, "on_discard", player, card)
    if not own_field:
        _place(state, player, "emptied")
    return True


def _attack(state: MatchState, selector: Selector, player: int) -> bool:
    zones = state.zones
    own_field = zones.fields[player]
    attacker = select_card(state, selector, player, own_field, can_attack, "attacker")
    if attacker is None:
        return False

    target = select_player(state, selector, player, lambda q: q != player and bool(zones.fields[q]))
    defender = None
    if target is not None:
        defender = select_card(state, selector, player, zones.fields[target], can_defend, "defender")
    if target is None or defender is None:
        zones.move(attacker, own_field)
        _log(state, {"type": "ATTACK_CANCELLED", "player": player, "uid": attacker.uid})
        return False

    _fire(state, "on_attack", player, attacker, defender)
    roll = roll_die(state.rng, state.config.die_sides)
    outcome = resolve_attack(attacker, defender, roll)
    _log(
        state,
        {
            "type": "ATTACK",
            "player": player,
            "target": target,
            "attacker": attacker.uid,
            "defender": defender.uid,
            "roll": outcome.roll,
            "hit": outcome.hit,
            "damage": outcome.damage,
            "health": outcome.defender_health,
        },
    )
    if outcome.hit:
        _fire(state, "on_damaged", target, defender, attacker)
    if outcome.destroyed:
        _fire(state, "on_exit", target, defender)

    emptied = settle_attack(zones, outcome, player, attacker, target, defender)
    if outcome.destroyed:
        _log(state, {"type": "CARD_DESTROYED", "player": target, "uid": defender.uid})
        _fire(state, "on_discard", target, defender)
    if emptied:
        _place(state, target, "knocked_out")
    return True


def _withdraw(state: MatchState, selector: Selector, player: int) -> bool:
    zones = state.zones
    own_field = zones.fields[player]
    card = select_card(state, selector, player, own_field, lambda c: True, "withdraw")
    if card is None:
        return False
    _fire(state, "on_exit", player, card)
    zones.discard_modifiers(card)
    zones.move(card, zones.hands[player])
    _log(state, {"type": "CARD_WITHDRAWN", "player": player, "uid": card.uid})
    _fire(state, "on_bounce", player, card)
    if not own_field:
        _place(state, player, "withdrew")
    return True


def _step_turn(state: MatchState, selector: Selector) -> None:
    player = state.current_player
    own_field = state.zones.fields[player]
    _log(state, {"type": "TURN_STARTED", "player": player, "round": state.current_round})
    for card in list(own_field):
        _fire(state, "on_turn_start", player, card)

    taken = _use_item(state, selector, player)
    if not taken and own_field and len(state.active_players()) > 1:
        taken = _attack(state, selector, player)
    if not taken:
        taken = _withdraw(state, selector, player)
    if not taken:
        _log(state, {"type": "TURN_PASSED", "player": player})
    state.phase = "cleanup"


def _collect_field(state: MatchState, player: int) -> None:
    zones = state.zones
    own_field = zones.fields[player]
    hand = zones.hands[player]
    while own_field:
        card = own_field.pop(0)
        mods = zones.detach_modifiers(card)
        hand.append(card)
        hand.extend(mods)
        _fire(state, "on_bounce", player, card)
    _log(state, {"type": "FIELD_COLLECTED", "player": player, "hand_size": len(hand)})


def _step_cleanup(state: MatchState, selector: Selector) -> None:
    cfg = state.config
    zones = state.zones
    player = state.current_player
    hand = zones.hands[player]

    while len(hand) > cfg.hand_limit:
        card = select_card(state, selector, player, hand, lambda c: True, "discard", optional=False)
        if card is None:
            break
        zones.discard_modifiers(card)
        zones.recycle(card)
        _log(state, {"type": "CARD_DISCARDED", "player": player, "uid": card.uid})
        _fire(state, "on_discard", player, card)

    for card in list(zones.fields[player]):
        _fire(state, "on_turn_end", player, card)
    _log(state, {"type": "TURN_ENDED", "player": player, "hand_size": len(hand)})

    remaining = state.active_players()
    if len(remaining) > 1:
        state.current_player = (player + 1) % state.player_count
        state.phase = "turn"
        return

    if remaining:
        survivor = remaining[0]
    else:
        # Every field emptied this turn: the player placed last takes the round.
        survivor = state.player_placement[-1] if state.player_placement else player
        _log(state, {"type": "NO_SURVIVOR", "round": state.current_round, "winner": survivor})
    _place(state, survivor, "survived")
    _collect_field(state, survivor)
    state.current_player = survivor
    state.phase = "round_end"


# --- round end ---------------------------------------------------------------


def _step_round_end(state: MatchState, selector: Selector) -> None:
    placement = state.player_placement
    placement.reverse()
    winner = placement[0]
    state.player_victories[winner] += 1
    _log(
        state,
        {
            "type": "ROUND_WON",
            "round": state.current_round,
            "winner": winner,
            "placement": list(placement),
            "victories": list(state.player_victories),
        },
    )
    if state.player_victories[winner] >= state.victory_threshold:
        state.winner = winner
        state.phase = "game_over"
        _log(state, {"type": "GAME_ENDED", "winner": winner, "victories": list(state.player_victories)})
        return
    state.prize_queue = placement[:-1]
    state.phase = "prize"


def _step_prize(state: MatchState, selector: Selector) -> None:
    zones = state.zones
    if state.prize_queue and not zones.prize_pool:
        _log(state, {"type": "PRIZE_POOL_EMPTY", "unawarded": list(state.prize_queue)})
        state.prize_queue.clear()
    if state.prize_queue:
        player = state.prize_queue[0]
        card = select_card(state, selector, player, zones.prize_pool, lambda c: True, "prize", optional=False)
        state.prize_queue.pop(0)
        if card is not None:
            zones.move(card, zones.hands[player])
            _log(state, {"type": "PRIZE_CLAIMED", "player": player, "uid": card.uid})
    if not state.prize_queue:
        state.phase = "redraw"


def _step_redraw(state: MatchState, selector: Selector) -> None:
    zones = state.zones
    state.player_placement.clear()
    _refill_prize_pool(state)
    for player in range(state.player_count):
        if not any(c.living for c in zones.hands[player]):
            _draw_to_hand(state, player, "jelly")
        _draw_to_hand(state, player, "jelly")
    state.current_round += 1
    state.placed_counts = [0 for _ in range(state.player_count)]
    state.placement_start = state.current_player
    state.phase = "placement"
    _log(state, {"type": "ROUND_STARTED", "round": state.current_round, "first_player": state.current_player})


_HANDLERS: dict[str, Callable[[MatchState, Selector], None]] = {
    "placement": _step_placement,
    "turn": _step_turn,
    "cleanup": _step_cleanup,
    "round_end": _step_round_end,
    "prize": _step_prize,
    "redraw": _step_redraw,
}


def step(state: MatchState, selector: Selector) -> StepResult:
    """Advance the match by one discrete step.

    This mutates `state` in-place but remains deterministic for a given
    (seed, catalogue, decisions). A step that fails on a decision leaves the
    current phase in place so it can be retried.
    """
    if state.phase == "game_over":
        return StepResult(ok=False, events=[], error="Match already ended.")

    before = len(state.event_log)
    try:
        _HANDLERS[state.phase](state, selector)
    except DecisionError as e:
        return StepResult(ok=False, events=state.event_log[before:], error=str(e))
    return StepResult(ok=True, events=state.event_log[before:])


def run_match(state: MatchState, selector: Selector, max_steps: int = 20_000) -> MatchState:
    for _ in range(max_steps):
        if state.phase == "game_over":
            break
        if not step(state, selector).ok:
            break
    return state


def _setup(state: MatchState) -> None:
    cfg = state.config
    zones = state.zones
    for deck in zones.decks.values():
        zones.shuffle(deck)

    for player in range(state.player_count):
        for source, count in cfg.starting_hand:
            for _ in range(count):
                _draw_to_hand(state, player, source)

    for category in ("creature", "mutation", "item"):
        deck = zones.decks[category]
        zones.loot.extend(deck)
        deck.clear()
    zones.shuffle(zones.loot)
    _log(state, {"type": "LOOT_CREATED", "size": len(zones.loot)})

    _refill_prize_pool(state)
    state.placement_start = state.current_player
    _log(state, {"type": "ROUND_STARTED", "round": state.current_round, "first_player": state.current_player})


def new_match(
    catalog: CardCatalog,
    seed: int,
    config: MatchConfig | None = None,
    effects: EffectRegistry | None = None,
    human_players: Iterable[int] = (),
) -> MatchState | None:
    """Build and set up a match. Returns None for fewer than two players."""
    cfg = config or MatchConfig()
    if cfg.player_count <= 1:
        return None

    rng = random.Random(seed)
    event_log: list[Event] = []
    zones = Zones.empty(rng, cfg.player_count, event_log)
    uid = 0
    for category in CATEGORIES:
        for definition in catalog.by_category(category):
            zones.decks[category].append(from_definition(uid, definition, rng))
            uid += 1

    state = MatchState(
        config=cfg,
        seed=seed,
        rng=rng,
        zones=zones,
        effects=effects if effects is not None else EffectRegistry(),
        player_victories=[0 for _ in range(cfg.player_count)],
        placed_counts=[0 for _ in range(cfg.player_count)],
        human_players=frozenset(human_players),
        event_log=event_log,
    )
    _setup(state)
    return state
