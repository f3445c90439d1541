from __future__ import annotations

import json
from pathlib import Path

import pytest

from jellyjam.paths import get_paths
from jellyjam.services.content import ContentError, ContentService, parse_card


def _write_cards(dir_: Path, cards: list[dict[str, object]]) -> ContentService:
    (dir_ / "cards.json").write_text(json.dumps({"version": 1, "cards": cards}), encoding="utf-8")
    return ContentService(dir_, get_paths().schema_dir)


def test_shipped_catalog_validates() -> None:
    paths = get_paths()
    content = ContentService(paths.data_dir, paths.schema_dir)
    content.validate_all()
    catalog = content.load_catalog()
    assert len(catalog.cards) == 41
    counts = {cat: len(catalog.by_category(cat)) for cat in ("jelly", "creature", "mutation", "item")}
    assert counts == {"jelly": 10, "creature": 11, "mutation": 10, "item": 10}


def test_catalog_stats_match_the_printed_cards() -> None:
    paths = get_paths()
    catalog = ContentService(paths.data_dir, paths.schema_dir).load_catalog()
    bruiser = catalog.get("bruiser")
    assert (bruiser.health, bruiser.damage, bruiser.defense) == (2, 2, 3)
    assert catalog.get("oodalah").damage == 255
    assert catalog.get("jambler").health is None
    assert catalog.get("jambler").health_die == 6
    assert catalog.get("junior").modifier_capacity == 2
    assert catalog.get("jim").modifier_capacity == 3
    assert catalog.get("zor").modifier_capacity == 1
    assert catalog.get("shield").modifier_capacity == 0
    assert catalog.get("shield").texture_key == "item/shield"


def test_living_card_without_stats_is_rejected(tmp_path: Path) -> None:
    content = _write_cards(
        tmp_path,
        [{"effect_id": "bruiser", "category": "jelly", "name": "Bruiser", "rules_text": ""}],
    )
    with pytest.raises(ContentError):
        content.load_catalog()


def test_usable_card_with_stats_is_rejected(tmp_path: Path) -> None:
    content = _write_cards(
        tmp_path,
        [{"effect_id": "shield", "category": "item", "name": "Shield", "rules_text": "", "defense": 2}],
    )
    with pytest.raises(ContentError):
        content.load_catalog()


def test_unknown_effect_and_duplicates_are_rejected(tmp_path: Path) -> None:
    content = _write_cards(
        tmp_path,
        [{"effect_id": "mystery", "category": "item", "name": "Mystery", "rules_text": ""}],
    )
    with pytest.raises(ContentError, match="Unknown effect_id"):
        content.load_catalog()

    shield = {"effect_id": "shield", "category": "item", "name": "Shield", "rules_text": ""}
    content = _write_cards(tmp_path, [shield, dict(shield)])
    with pytest.raises(ContentError, match="Duplicate"):
        content.load_catalog()


def test_missing_file_is_a_content_error(tmp_path: Path) -> None:
    content = ContentService(tmp_path, get_paths().schema_dir)
    with pytest.raises(ContentError, match="Missing content file"):
        content.load_catalog()


def test_parse_card_defaults_capacity() -> None:
    living = parse_card(
        {"effect_id": "gum", "category": "jelly", "name": "Gum", "rules_text": "", "health": 3, "damage": 1, "defense": 2}
    )
    assert living.modifier_capacity == 1
    usable = parse_card({"effect_id": "armor", "category": "mutation", "name": "Armor", "rules_text": ""})
    assert usable.modifier_capacity == 0
    assert not usable.living
