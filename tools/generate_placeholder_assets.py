from __future__ import annotations

import json
import os
from pathlib import Path

# Allow headless generation (CI, terminals without a display)
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame  # type: ignore[import-not-found]

from jellyjam.client.pygame_app.asset_manager import CATEGORY_COLORS
from jellyjam.client.text import wrap


def _repo_root() -> Path:
    # tools/generate_placeholder_assets.py -> parents: [tools, repo_root]
    return Path(__file__).resolve().parents[1]


SIZE = (256, 160)


def _stat_line(card: dict[str, object]) -> str:
    if card.get("category") not in ("jelly", "creature"):
        return str(card.get("category", "?")).upper()
    health = card.get("health")
    if health is None:
        health = f"d{card.get('health_die', '?')}"
    return f"HP {health}  DMG {card.get('damage', '?')}  DEF {card.get('defense', '?')}"


def generate_all() -> None:
    root = _repo_root()
    data_dir = root / "src" / "jellyjam" / "data"
    cards_dir = root / "assets" / "cards"

    cards = json.loads((data_dir / "cards.json").read_text(encoding="utf-8"))["cards"]

    pygame.init()
    pygame.font.init()
    font = pygame.font.SysFont(None, 26)
    font_small = pygame.font.SysFont(None, 18)

    for card in cards:
        category = card["category"]
        out_dir = cards_dir / category
        out_dir.mkdir(parents=True, exist_ok=True)

        surf = pygame.Surface(SIZE)
        surf.fill((20, 20, 20))
        color = CATEGORY_COLORS.get(category, (90, 90, 90))
        pygame.draw.rect(surf, color, pygame.Rect(6, 6, SIZE[0] - 12, SIZE[1] - 12), border_radius=12)
        pygame.draw.rect(surf, (0, 0, 0), pygame.Rect(10, 10, SIZE[0] - 20, SIZE[1] - 20), width=3, border_radius=10)

        surf.blit(font.render(card.get("name", card["effect_id"]), True, (20, 20, 20)), (16, 16))
        surf.blit(font_small.render(_stat_line(card), True, (240, 240, 240)), (16, 42))
        y = 70
        for line in wrap(card.get("rules_text", ""), 34, max_lines=4):
            surf.blit(font_small.render(line, True, (240, 240, 240)), (16, y))
            y += 18

        pygame.image.save(surf, (out_dir / f"{card['effect_id']}.png").as_posix())

    pygame.quit()
    print(f"Generated {len(cards)} placeholder cards under ./assets/cards/")


if __name__ == "__main__":
    generate_all()
