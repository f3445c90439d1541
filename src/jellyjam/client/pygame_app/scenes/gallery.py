from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from jellyjam.engine.types import CATEGORIES, CardDefinition

from ...text import wrap
from ..app import GameContext
from ..scene_base import SceneTransition, to_main_menu
from ..ui import Button, draw_text

FILTERS = ["all", *CATEGORIES]
CELL_W, CELL_H = 300, 32


class GalleryScene:
    def __init__(self, ctx: GameContext) -> None:
        self.ctx = ctx
        self._next: SceneTransition | None = None
        self.category_filter = "all"
        self.selected: str | None = None
        self.btn_back = Button(rect=pygame.Rect(20, 20, 120, 40), text="Back", on_click=self._on_back)
        self.btn_filter = Button(
            rect=pygame.Rect(160, 20, 240, 40),
            text="Category: all",
            on_click=self._cycle_filter,
        )

    def _on_back(self) -> None:
        self._next = to_main_menu(self.ctx)

    def _cycle_filter(self) -> None:
        i = FILTERS.index(self.category_filter)
        self.category_filter = FILTERS[(i + 1) % len(FILTERS)]
        self.btn_filter.text = f"Category: {self.category_filter}"
        self.selected = None

    def _filtered_cards(self) -> list[CardDefinition]:
        catalog = self.ctx.catalog
        if catalog is None:
            return []
        if self.category_filter == "all":
            return list(catalog.cards.values())
        return catalog.by_category(self.category_filter)  # type: ignore[arg-type]

    def _cell_rect(self, i: int) -> pygame.Rect:
        per_col = max(1, (self.ctx.screen.get_height() - 110) // (CELL_H + 6))
        col, row = divmod(i, per_col)
        return pygame.Rect(20 + col * (CELL_W + 10), 80 + row * (CELL_H + 6), CELL_W, CELL_H)

    def handle_event(self, event: pygame.event.Event) -> None:
        for b in (self.btn_back, self.btn_filter):
            if b.handle_event(event):
                return
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            self._on_back()
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            for i, c in enumerate(self._filtered_cards()):
                if self._cell_rect(i).collidepoint(event.pos):
                    self.selected = c.effect_id
                    return

    def update(self, dt: float) -> SceneTransition | None:
        return self._next

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((20, 14, 24))
        fonts = self.ctx.assets.fonts
        for b in (self.btn_back, self.btn_filter):
            b.draw(screen, fonts.ui)

        cards = self._filtered_cards()
        if self.selected is None and cards:
            self.selected = cards[0].effect_id
        for i, c in enumerate(cards):
            rect = self._cell_rect(i)
            active = c.effect_id == self.selected
            pygame.draw.rect(screen, (60, 36, 64) if active else (34, 26, 40), rect, border_radius=6)
            draw_text(screen, fonts.small, f"{c.name} ({c.category})", (rect.x + 8, rect.y + 9))

        w, h = screen.get_size()
        panel = pygame.Rect(w - 360, 80, 340, h - 100)
        pygame.draw.rect(screen, (30, 22, 36), panel, border_radius=10)
        pygame.draw.rect(screen, (0, 0, 0), panel, width=2, border_radius=10)
        if self.selected is None or self.ctx.catalog is None:
            draw_text(screen, fonts.small, "Select a card from the list.", (panel.x + 10, panel.y + 20))
            return

        c = self.ctx.catalog.get(self.selected)
        art = self.ctx.assets.get_card_image(c.texture_key, (256, 160))
        screen.blit(art, (panel.x + 42, panel.y + 16))
        draw_text(screen, fonts.ui, c.name, (panel.x + 10, panel.y + 190))
        y = panel.y + 220
        if c.living:
            health = f"d{c.health_die}" if c.health_die is not None else str(c.health)
            stats = f"Health {health}  Damage {c.damage}  Defense {c.defense}"
            if c.modifier_capacity != 1:
                stats += f"  Slots {c.modifier_capacity}"
            draw_text(screen, fonts.small, stats, (panel.x + 10, y))
            y += 24
        for line in wrap(c.rules_text, 40, max_lines=10):
            draw_text(screen, fonts.small, line, (panel.x + 10, y))
            y += 18
