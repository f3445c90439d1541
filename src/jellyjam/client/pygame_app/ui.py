from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import pygame  # type: ignore[import-not-found]

from jellyjam.engine.cards import Card

from .asset_manager import AssetManager

Color = tuple[int, int, int]

TILE_SIZE = (104, 64)


def draw_text(
    screen: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    pos: tuple[int, int],
    color: Color = (240, 240, 240),
) -> None:
    img = font.render(text, True, color)
    screen.blit(img, pos)


@dataclass
class Button:
    rect: pygame.Rect
    text: str
    on_click: Callable[[], None]
    enabled: bool = True

    def handle_event(self, event: pygame.event.Event) -> bool:
        if not self.enabled:
            return False
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.on_click()
                return True
        return False

    def draw(self, screen: pygame.Surface, font: pygame.font.Font) -> None:
        bg = (70, 40, 70) if self.enabled else (30, 30, 30)
        pygame.draw.rect(screen, bg, self.rect, border_radius=8)
        pygame.draw.rect(screen, (0, 0, 0), self.rect, width=2, border_radius=8)
        img = font.render(self.text, True, (240, 240, 240))
        r = img.get_rect(center=self.rect.center)
        screen.blit(img, r.topleft)


def draw_card_tile(
    screen: pygame.Surface,
    assets: AssetManager,
    card: Card,
    rect: pygame.Rect,
    highlight: bool = False,
) -> None:
    """Texture, id and (for living cards) current stats and modifier count."""
    art = assets.get_card_image(card.texture_key, (rect.w, rect.h))
    screen.blit(art, rect.topleft)
    shade = pygame.Surface((rect.w, 20), pygame.SRCALPHA)
    shade.fill((0, 0, 0, 150))
    screen.blit(shade, (rect.x, rect.bottom - 20))
    font = assets.fonts.small
    draw_text(screen, font, card.effect_id[:14], (rect.x + 4, rect.y + 4), color=(10, 10, 10))
    if card.living:
        stats = f"{card.current_health}/{card.current_damage}/{card.current_defense}"
        if card.modifiers:
            stats += f" +{len(card.modifiers)}"
        draw_text(screen, font, stats, (rect.x + 4, rect.bottom - 17))
    else:
        draw_text(screen, font, card.category, (rect.x + 4, rect.bottom - 17), color=(200, 200, 200))
    border = (250, 230, 110) if highlight else (0, 0, 0)
    pygame.draw.rect(screen, border, rect, width=3 if highlight else 2, border_radius=4)


def tile_rects(x: int, y: int, count: int, size: tuple[int, int] = TILE_SIZE, gap: int = 8) -> list[pygame.Rect]:
    w, h = size
    return [pygame.Rect(x + i * (w + gap), y, w, h) for i in range(count)]
