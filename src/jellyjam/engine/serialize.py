from __future__ import annotations

from .cards import Card
from .match import MatchState


def card_to_dict(c: Card) -> dict[str, object]:
    return {
        "uid": c.uid,
        "category": c.category,
        "effect_id": c.effect_id,
        "texture_key": c.texture_key,
        "health": c.current_health,
        "damage": c.current_damage,
        "defense": c.current_defense,
        "modifiers": [card_to_dict(m) for m in c.modifiers],
    }


def _zone_to_list(zone: list[Card]) -> list[dict[str, object]]:
    return [card_to_dict(c) for c in zone]


def snapshot(state: MatchState) -> dict[str, object]:
    """Return a JSON-serializable read-only view of the match for rendering."""
    zones = state.zones
    return {
        "seed": state.seed,
        "phase": state.phase,
        "current_player": state.current_player,
        "current_round": state.current_round,
        "victory_threshold": state.victory_threshold,
        "player_victories": list(state.player_victories),
        "player_placement": list(state.player_placement),
        "winner": state.winner,
        "human_players": sorted(state.human_players),
        "decks": {name: _zone_to_list(deck) for name, deck in zones.decks.items()},
        "loot": _zone_to_list(zones.loot),
        "prize_pool": _zone_to_list(zones.prize_pool),
        "hands": [_zone_to_list(h) for h in zones.hands],
        "fields": [_zone_to_list(f) for f in zones.fields],
    }
