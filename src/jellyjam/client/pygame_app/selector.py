from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Callable

import pygame  # type: ignore[import-not-found]

from jellyjam.engine.cards import Card
from jellyjam.engine.selection import SelectReason

from ..text import PROMPTS
from .ui import Button, draw_card_tile, draw_text, tile_rects

if TYPE_CHECKING:
    from jellyjam.engine.match import MatchState

    from .app import GameContext


class PygameSelector:
    """Click-to-choose decisions for a human seat.

    The engine asks synchronously, so each choice runs its own small event
    loop on top of the current board. Closing the window marks the selector
    aborted; every later choice is declined so the engine step can finish and
    the app loop sees the re-posted QUIT.
    """

    def __init__(self, ctx: "GameContext", player: int, render_backdrop: Callable[[pygame.Surface], None]) -> None:
        self.ctx = ctx
        self.player = player
        self.render_backdrop = render_backdrop
        self.aborted = False

    def _pick(
        self,
        title: str,
        count: int,
        draw_option: Callable[[pygame.Surface, int, pygame.Rect, bool], None],
        rects: list[pygame.Rect],
        optional: bool,
    ) -> int | None:
        if self.aborted:
            return None
        picked: list[int | None] = []
        skip = Button(
            rect=pygame.Rect(rects[0].x, rects[-1].bottom + 20, 140, 40),
            text="Skip",
            on_click=lambda: picked.append(None),
            enabled=optional,
        )
        screen = self.ctx.screen
        fonts = self.ctx.assets.fonts
        while not picked:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.aborted = True
                    pygame.event.post(event)
                    return None
                if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE and optional:
                    return None
                if skip.handle_event(event):
                    break
                if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    for i, rect in enumerate(rects):
                        if rect.collidepoint(event.pos):
                            picked.append(i)
                            break
                    if picked:
                        break
            if picked:
                break
            mouse = pygame.mouse.get_pos()
            self.render_backdrop(screen)
            overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
            overlay.fill((0, 0, 0, 160))
            screen.blit(overlay, (0, 0))
            draw_text(screen, fonts.big, f"Player {self.player + 1}: {title}", (rects[0].x, rects[0].y - 50))
            for i in range(count):
                draw_option(screen, i, rects[i], rects[i].collidepoint(mouse))
            if optional:
                skip.draw(screen, fonts.ui)
            pygame.display.flip()
            self.ctx.clock.tick(60)
        return picked[0]

    def choose_card(
        self,
        state: "MatchState",
        player: int,
        candidates: Sequence[Card],
        reason: SelectReason,
        optional: bool,
    ) -> Card | None:
        w, _h = self.ctx.screen.get_size()
        per_row = max(1, (w - 80) // 112)
        rects: list[pygame.Rect] = []
        for row_start in range(0, len(candidates), per_row):
            n = min(per_row, len(candidates) - row_start)
            rects.extend(tile_rects(40, 200 + (row_start // per_row) * 80, n))

        def draw_option(screen: pygame.Surface, i: int, rect: pygame.Rect, hover: bool) -> None:
            draw_card_tile(screen, self.ctx.assets, candidates[i], rect, highlight=hover)

        idx = self._pick(PROMPTS.get(reason, reason), len(candidates), draw_option, rects, optional)
        return None if idx is None else candidates[idx]

    def choose_player(self, state: "MatchState", player: int, candidates: Sequence[int]) -> int | None:
        rects = [pygame.Rect(40, 200 + i * 56, 320, 44) for i in range(len(candidates))]
        font = self.ctx.assets.fonts.ui

        def draw_option(screen: pygame.Surface, i: int, rect: pygame.Rect, hover: bool) -> None:
            p = candidates[i]
            pygame.draw.rect(screen, (90, 60, 90) if hover else (50, 40, 50), rect, border_radius=8)
            label = f"Player {p + 1}  ({len(state.zones.fields[p])} on field)"
            draw_text(screen, font, label, (rect.x + 12, rect.y + 12))

        idx = self._pick(PROMPTS["target"], len(candidates), draw_option, rects, optional=True)
        return None if idx is None else candidates[idx]
