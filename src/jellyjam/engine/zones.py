from __future__ import annotations

import random
from collections.abc import Iterator
from dataclasses import dataclass, field

from .cards import Card
from .types import CATEGORIES, Category

Event = dict[str, object]


def shuffle(rng: random.Random, items: list[Card]) -> None:
    rng.shuffle(items)


def take(zone: list[Card], card: Card) -> bool:
    """Remove `card` from `zone` by identity. Returns False if it is not there."""
    for i, c in enumerate(zone):
        if c is card:
            zone.pop(i)
            return True
    return False


@dataclass
class Zones:
    """Every card collection of one match.

    All mutation goes through the match's single RNG and event log so that a
    seed reproduces the whole match.
    """

    rng: random.Random
    decks: dict[Category, list[Card]]
    hands: list[list[Card]]
    fields: list[list[Card]]
    loot: list[Card] = field(default_factory=list)
    prize_pool: list[Card] = field(default_factory=list)
    event_log: list[Event] = field(default_factory=list)

    @staticmethod
    def empty(rng: random.Random, player_count: int, event_log: list[Event] | None = None) -> "Zones":
        return Zones(
            rng=rng,
            decks={c: [] for c in CATEGORIES},
            hands=[[] for _ in range(player_count)],
            fields=[[] for _ in range(player_count)],
            event_log=event_log if event_log is not None else [],
        )

    def deck(self, name: str) -> list[Card]:
        if name == "loot":
            return self.loot
        if name == "prize_pool":
            return self.prize_pool
        return self.decks[name]  # type: ignore[index]

    def shuffle(self, zone: list[Card]) -> None:
        shuffle(self.rng, zone)

    def draw_fresh(self, source: str) -> Card | None:
        """Pop the top card of `source` and restore its stats to base.

        Returns None when the deck is empty; that is logged, never raised.
        """
        deck = self.deck(source)
        if not deck:
            self.event_log.append({"type": "DECK_EMPTY", "deck": source})
            return None
        card = deck.pop()
        card.reset_stats()
        return card

    def move(self, card: Card, destination: list[Card]) -> None:
        destination.append(card)

    def recycle_jelly(self, card: Card) -> None:
        self.decks["jelly"].append(card)
        self.shuffle(self.decks["jelly"])
        self.event_log.append({"type": "CARD_RECYCLED", "uid": card.uid, "to": "jelly"})

    def recycle_to_loot(self, card: Card) -> None:
        self.loot.append(card)
        self.shuffle(self.loot)
        self.event_log.append({"type": "CARD_RECYCLED", "uid": card.uid, "to": "loot"})

    def recycle(self, card: Card) -> None:
        """Discard routing: jellies go back to their deck, everything else to loot."""
        if card.category == "jelly":
            self.recycle_jelly(card)
        else:
            self.recycle_to_loot(card)

    def detach_modifiers(self, card: Card) -> list[Card]:
        detached = list(card.modifiers)
        card.modifiers.clear()
        return detached

    def discard_modifiers(self, card: Card) -> None:
        for mod in self.detach_modifiers(card):
            self.recycle_to_loot(mod)

    def all_cards(self) -> Iterator[Card]:
        """Every card in the match, attached modifiers included."""
        collections: list[list[Card]] = [*self.decks.values(), self.loot, self.prize_pool]
        collections.extend(self.hands)
        collections.extend(self.fields)
        for zone in collections:
            for card in zone:
                yield card
                yield from card.modifiers
