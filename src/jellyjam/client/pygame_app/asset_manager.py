from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pygame  # type: ignore[import-not-found]

from jellyjam.engine.types import Category

CATEGORY_COLORS: dict[Category, tuple[int, int, int]] = {
    "jelly": (214, 92, 160),
    "creature": (92, 150, 92),
    "mutation": (120, 100, 200),
    "item": (200, 160, 70),
}


@dataclass
class Fonts:
    ui: pygame.font.Font
    small: pygame.font.Font
    big: pygame.font.Font


class AssetManager:
    """Card textures live at assets/cards/<category>/<effect_id>.png."""

    def __init__(self, cards_dir: Path) -> None:
        self.cards_dir = cards_dir
        self._cache: dict[tuple[str, int, int], pygame.Surface] = {}

        pygame.font.init()
        self.fonts = Fonts(
            ui=pygame.font.SysFont(None, 24),
            small=pygame.font.SysFont(None, 18),
            big=pygame.font.SysFont(None, 34),
        )

    def card_path(self, texture_key: str) -> Path:
        return self.cards_dir / f"{texture_key}.png"

    def get_card_image(self, texture_key: str, size: tuple[int, int]) -> pygame.Surface:
        key = (texture_key, size[0], size[1])
        if key in self._cache:
            return self._cache[key]

        path = self.card_path(texture_key)
        if path.exists():
            try:
                img = pygame.image.load(path.as_posix()).convert_alpha()
                img = pygame.transform.smoothscale(img, size)
                self._cache[key] = img
                return img
            except pygame.error:
                pass

        # Missing or unreadable texture: tint by category
        category = texture_key.split("/", 1)[0]
        fallback = pygame.Surface(size)
        fallback.fill(CATEGORY_COLORS.get(category, (200, 40, 200)))  # type: ignore[call-overload]
        self._cache[key] = fallback
        return fallback
