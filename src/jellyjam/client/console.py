"""
Jelly Jam - Console Client

Play a match in the terminal, or watch bots play one.

Usage:
    jellyjam-console                      # you are player 1, three bots
    jellyjam-console --human              # no human seats, print round results only
    jellyjam-console --players 2 --seed 7 --human 0 1
"""

from __future__ import annotations

import argparse
import random
import sys
from collections.abc import Sequence

from jellyjam.engine.cards import Card
from jellyjam.engine.match import MatchConfig, MatchState, new_match, step
from jellyjam.engine.selection import RandomSelector, SeatedSelector, SelectReason
from jellyjam.paths import get_paths
from jellyjam.services.content import ContentService
from jellyjam.services.telemetry import TelemetryService

from .text import PROMPTS, describe, format_card


class PromptSelector:
    """Human player at the terminal. Re-prompts until the input is valid."""

    def __init__(self, name: str = "You") -> None:
        self.name = name

    def _ask(self, count: int, optional: bool) -> int | None:
        hint = f"[0-{count - 1}]" + (", blank to skip" if optional else "")
        while True:
            try:
                choice = input(f"Choose {hint}: ").strip()
            except EOFError:
                return None
            if choice.lower() in ("q", "quit", "exit"):
                raise KeyboardInterrupt
            if not choice and optional:
                return None
            if choice.isdigit() and int(choice) < count:
                return int(choice)
            print(f"Invalid choice. Enter a number between 0 and {count - 1}.")

    def choose_card(
        self,
        state: MatchState,
        player: int,
        candidates: Sequence[Card],
        reason: SelectReason,
        optional: bool,
    ) -> Card | None:
        print(f"\n{self.name}: {PROMPTS.get(reason, reason)}")
        for i, c in enumerate(candidates):
            print(f"  [{i}] {format_card(c)}")
        idx = self._ask(len(candidates), optional)
        return None if idx is None else candidates[idx]

    def choose_player(self, state: MatchState, player: int, candidates: Sequence[int]) -> int | None:
        print(f"\n{self.name}: {PROMPTS['target']}")
        for i, p in enumerate(candidates):
            cards = ", ".join(format_card(c) for c in state.zones.fields[p])
            print(f"  [{i}] Player {p + 1}: {cards}")
        idx = self._ask(len(candidates), optional=True)
        return None if idx is None else candidates[idx]


def print_board(state: MatchState) -> None:
    print(f"\n=== Round {state.current_round} | {state.phase} | Player {state.current_player + 1} ===")
    for p in range(state.player_count):
        wins = state.player_victories[p]
        field = ", ".join(format_card(c) for c in state.zones.fields[p]) or "(empty)"
        print(f"  P{p + 1} wins={wins} hand={len(state.zones.hands[p])} field: {field}")


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="jellyjam-console")
    parser.add_argument("--players", type=int, default=4)
    parser.add_argument("--threshold", type=int, default=3)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--human", type=int, nargs="*", default=[0], help="zero-based human seats")
    parser.add_argument("--max-steps", type=int, default=20_000)
    args = parser.parse_args(argv)

    paths = get_paths()
    catalog = ContentService(paths.data_dir, paths.schema_dir).load_catalog()
    telemetry = TelemetryService(paths.telemetry_path)

    seed = args.seed if args.seed is not None else random.randrange(1, 2**31 - 1)
    config = MatchConfig(player_count=args.players, victory_threshold=args.threshold)
    state = new_match(catalog, seed=seed, config=config, human_players=args.human)
    if state is None:
        print("A match needs at least two players.", file=sys.stderr)
        return 2

    humans = {p: PromptSelector(name=f"Player {p + 1}") for p in args.human}
    selector = SeatedSelector(humans, default=RandomSelector())
    telemetry.log("match_start", {"seed": seed, "players": args.players, "human": sorted(humans)})

    verbose = bool(humans)
    try:
        for _ in range(args.max_steps):
            if state.phase == "game_over":
                break
            if verbose and state.phase in ("placement", "turn") and state.is_human(state.current_player):
                print_board(state)
            res = step(state, selector)
            telemetry.log_match_events(state, res.events)
            for ev in res.events:
                line = describe(ev)
                if line is not None and (verbose or ev.get("type") in ("ROUND_WON", "GAME_ENDED")):
                    print(line)
            if not res.ok:
                print(f"Step failed: {res.error}", file=sys.stderr)
                return 1
    except KeyboardInterrupt:
        print("\nGame aborted by user.")
        return 130

    print(f"Final victories: {state.player_victories} (seed {seed})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
