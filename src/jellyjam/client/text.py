from __future__ import annotations

from jellyjam.engine.cards import Card

PROMPTS: dict[str, str] = {
    "place": "Place a card on your field",
    "attach": "Attach a mutation to the card you placed",
    "item": "Use an item from your field",
    "attacker": "Attack with",
    "defender": "Attack which card",
    "withdraw": "Withdraw a card to your hand",
    "discard": "Hand is over the limit, discard",
    "prize": "Claim a prize",
    "target": "Attack which player",
}


def format_card(c: Card) -> str:
    if not c.living:
        return f"{c.effect_id} ({c.category})"
    text = f"{c.effect_id} HP {c.current_health} DMG {c.current_damage} DEF {c.current_defense}"
    if c.modifiers:
        text += " +" + ",".join(m.effect_id for m in c.modifiers)
    return text


def _seat(value: object) -> str:
    return f"P{value + 1}" if isinstance(value, int) else "P?"


def describe(event: dict[str, object]) -> str | None:
    """One-line summary of an engine event, or None for bookkeeping events."""
    kind = event.get("type")
    if kind == "ATTACK":
        result = f"hit for {event['damage']}, health {event['health']}" if event["hit"] else "missed"
        return f"{_seat(event['player'])} attacks {_seat(event['target'])} (roll {event['roll']}): {result}"
    if kind == "CARD_PLACED":
        return f"{_seat(event['player'])} places a card"
    if kind == "CARD_WITHDRAWN":
        return f"{_seat(event['player'])} withdraws a card"
    if kind == "ITEM_USED":
        return f"{_seat(event['player'])} uses an item"
    if kind == "PLAYER_PLACED":
        if event["reason"] == "survived":
            return f"{_seat(event['player'])} is the last one standing"
        return f"{_seat(event['player'])} is out ({event['reason']})"
    if kind == "NO_SURVIVOR":
        return f"Every field is empty; {_seat(event['winner'])} went out last and takes the round"
    if kind == "PRIZE_CLAIMED":
        return f"{_seat(event['player'])} claims a prize"
    if kind == "ROUND_WON":
        return f"Round {event['round']} won by {_seat(event['winner'])}; wins {event['victories']}"
    if kind == "GAME_ENDED":
        return f"*** {_seat(event['winner'])} wins the match! ***"
    return None


def wrap(text: str, max_chars: int, max_lines: int = 6) -> list[str]:
    words = text.split()
    lines: list[str] = []
    cur: list[str] = []
    for w in words:
        if sum(len(x) for x in cur) + len(cur) + len(w) <= max_chars:
            cur.append(w)
        else:
            lines.append(" ".join(cur))
            cur = [w]
    if cur:
        lines.append(" ".join(cur))
    return lines[:max_lines]
