from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping, get_args

from jsonschema import Draft202012Validator

from jellyjam.engine.types import CATEGORIES, LIVING_CATEGORIES, CardCatalog, CardDefinition, EffectId

KNOWN_EFFECT_IDS: frozenset[str] = frozenset(get_args(EffectId))


class ContentError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: list(e.path))
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise ContentError("\n".join(lines))


def _require_str(obj: Mapping[str, object], key: str) -> str:
    v = obj.get(key)
    if not isinstance(v, str):
        raise ContentError(f"Expected string for {key}")
    return v


def _optional_int(obj: Mapping[str, object], key: str) -> int | None:
    v = obj.get(key)
    if v is None:
        return None
    if not isinstance(v, int):
        raise ContentError(f"Expected int for {key}")
    return v


def parse_card(raw: Mapping[str, object]) -> CardDefinition:
    effect_id = _require_str(raw, "effect_id")
    if effect_id not in KNOWN_EFFECT_IDS:
        raise ContentError(f"Unknown effect_id: {effect_id}")
    category = _require_str(raw, "category")
    if category not in CATEGORIES:
        raise ContentError(f"Unknown category for {effect_id}: {category}")

    health = _optional_int(raw, "health")
    health_die = _optional_int(raw, "health_die")
    damage = _optional_int(raw, "damage")
    defense = _optional_int(raw, "defense")
    living = category in LIVING_CATEGORIES
    if living:
        if (health is None and health_die is None) or damage is None or defense is None:
            raise ContentError(f"Living card {effect_id} needs health, damage and defense")
        capacity = _optional_int(raw, "modifier_capacity")
        modifier_capacity = 1 if capacity is None else capacity
    else:
        if any(v is not None for v in (health, health_die, damage, defense)):
            raise ContentError(f"Usable card {effect_id} cannot carry stats")
        modifier_capacity = 0

    return CardDefinition(
        effect_id=effect_id,  # type: ignore[arg-type]
        category=category,  # type: ignore[arg-type]
        name=_require_str(raw, "name"),
        rules_text=_require_str(raw, "rules_text"),
        health=health,
        damage=damage,
        defense=defense,
        health_die=health_die,
        modifier_capacity=modifier_capacity,
    )


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def load_catalog(self) -> CardCatalog:
        cards_path = self._data_dir / "cards.json"
        raw = _load_json(cards_path)
        schema = _load_json(self._schema_dir / "cards.schema.json")
        validate_json(raw, schema, context=str(cards_path))

        if not isinstance(raw, dict):
            raise ContentError("cards.json must be an object")
        raw_cards = raw.get("cards")
        if not isinstance(raw_cards, list):
            raise ContentError("cards.json.cards must be a list")

        cards: dict[str, CardDefinition] = {}
        for item in raw_cards:
            if not isinstance(item, dict):
                continue
            card = parse_card(item)
            if card.effect_id in cards:
                raise ContentError(f"Duplicate effect_id: {card.effect_id}")
            cards[card.effect_id] = card
        return CardCatalog(cards=cards)

    def validate_all(self) -> None:
        # Load is validation (schema + parse)
        _ = self.load_catalog()
