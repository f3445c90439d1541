from __future__ import annotations

from collections import deque

import pygame  # type: ignore[import-not-found]

from jellyjam.engine.match import MatchState, step
from jellyjam.engine.selection import RandomSelector, SeatedSelector

from ...text import describe
from ..app import GameContext
from ..scene_base import SceneTransition, to_main_menu
from ..selector import PygameSelector
from ..ui import Button, draw_card_tile, draw_text, tile_rects

STEP_INTERVAL = 0.4
PANEL_W = 300


class MatchScene:
    """Board view. Bots advance on a timer; human seats choose through a modal picker."""

    def __init__(self, ctx: GameContext, state: MatchState) -> None:
        self.ctx = ctx
        self.state = state
        self._next: SceneTransition | None = None
        self._log: deque[str] = deque(maxlen=14)
        self._error = ""
        self._auto = True
        self._timer = 0.0

        humans = {p: PygameSelector(ctx, p, self._render_board) for p in sorted(state.human_players)}
        self.selector = SeatedSelector(humans, default=RandomSelector())

        w, _h = ctx.screen.get_size()
        px = w - PANEL_W
        self.btn_menu = Button(rect=pygame.Rect(px, 20, 130, 40), text="Menu", on_click=self._on_menu)
        self.btn_step = Button(rect=pygame.Rect(px + 140, 20, 130, 40), text="Step", on_click=self._step_once)
        self.btn_auto = Button(rect=pygame.Rect(px, 68, 270, 40), text="Auto: on", on_click=self._toggle_auto)

        ctx.telemetry.log(
            "match_start",
            {"seed": state.seed, "players": state.player_count, "human": sorted(state.human_players)},
        )

    def _on_menu(self) -> None:
        self._next = to_main_menu(self.ctx)

    def _toggle_auto(self) -> None:
        self._auto = not self._auto
        self.btn_auto.text = f"Auto: {'on' if self._auto else 'off'}"

    def _step_once(self) -> None:
        if self.state.phase == "game_over":
            return
        res = step(self.state, self.selector)
        self.ctx.telemetry.log_match_events(self.state, res.events)
        for ev in res.events:
            line = describe(ev)
            if line is not None:
                self._log.append(line)
        if not res.ok:
            self._error = res.error or "Step failed."
            self._auto = False
            self.btn_auto.text = "Auto: off"
        else:
            self._error = ""

    def handle_event(self, event: pygame.event.Event) -> None:
        for b in (self.btn_menu, self.btn_step, self.btn_auto):
            if b.handle_event(event):
                return
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self._on_menu()
            elif event.key == pygame.K_SPACE:
                self._step_once()
            elif event.key == pygame.K_a:
                self._toggle_auto()

    def update(self, dt: float) -> SceneTransition | None:
        if self._next is None and self._auto and self.state.phase != "game_over":
            self._timer += dt
            if self._timer >= STEP_INTERVAL:
                self._timer = 0.0
                self._step_once()
        return self._next

    def render(self, screen: pygame.Surface) -> None:
        self._render_board(screen)
        fonts = self.ctx.assets.fonts
        for b in (self.btn_menu, self.btn_step, self.btn_auto):
            b.draw(screen, fonts.ui)
        if self.state.winner is not None:
            self._draw_game_over(screen)

    def _render_board(self, screen: pygame.Surface) -> None:
        screen.fill((16, 10, 20))
        w, h = screen.get_size()
        n = self.state.player_count
        band_h = (h - 40) // n
        for p in range(n):
            self._draw_band(screen, p, pygame.Rect(20, 20 + p * band_h, w - PANEL_W - 40, band_h - 8))
        self._draw_panel(screen, pygame.Rect(w - PANEL_W, 120, PANEL_W - 20, h - 140))

    def _draw_band(self, screen: pygame.Surface, player: int, rect: pygame.Rect) -> None:
        st = self.state
        fonts = self.ctx.assets.fonts
        active = st.current_player == player and st.phase in ("placement", "turn", "cleanup")
        pygame.draw.rect(screen, (40, 26, 46) if active else (28, 20, 32), rect, border_radius=8)
        pygame.draw.rect(screen, (0, 0, 0), rect, width=2, border_radius=8)

        label = f"P{player + 1}  wins {st.player_victories[player]}  hand {len(st.zones.hands[player])}"
        if st.is_human(player):
            label += "  [HUMAN]"
        if player in st.player_placement:
            label += f"  out #{st.player_placement.index(player) + 1}"
        draw_text(screen, fonts.ui, label, (rect.x + 8, rect.y + 6), color=(250, 220, 120) if active else (240, 240, 240))

        tile_h = max(24, min(64, rect.h - 36))
        size = (int(tile_h * 1.6), tile_h)
        max_tiles = max(1, (rect.w - 16) // (size[0] + 8))
        shown = list(st.zones.fields[player])
        if st.is_human(player):
            shown += st.zones.hands[player]
        for card, r in zip(shown[:max_tiles], tile_rects(rect.x + 8, rect.y + 30, min(len(shown), max_tiles), size)):
            in_hand = card not in st.zones.fields[player]
            draw_card_tile(screen, self.ctx.assets, card, r)
            if in_hand:
                pygame.draw.line(screen, (120, 200, 240), (r.x, r.y - 3), (r.right, r.y - 3), 3)
        if len(shown) > max_tiles:
            draw_text(screen, fonts.small, f"+{len(shown) - max_tiles}", (rect.right - 30, rect.y + 8))

    def _draw_panel(self, screen: pygame.Surface, rect: pygame.Rect) -> None:
        st = self.state
        z = st.zones
        fonts = self.ctx.assets.fonts
        pygame.draw.rect(screen, (24, 18, 30), rect, border_radius=10)
        lines = [
            f"Round {st.current_round}   Phase: {st.phase}",
            f"Current: P{st.current_player + 1}   Seed {st.seed}",
            f"Jelly deck {len(z.decks['jelly'])}   Loot {len(z.loot)}",
            f"Prize pool {len(z.prize_pool)}",
        ]
        y = rect.y + 10
        for line in lines:
            draw_text(screen, fonts.small, line, (rect.x + 10, y))
            y += 20
        y += 8
        for line in self._log:
            draw_text(screen, fonts.small, line[:42], (rect.x + 10, y), color=(200, 200, 220))
            y += 18
        if self._error:
            draw_text(screen, fonts.small, self._error[:42], (rect.x + 10, rect.bottom - 26), color=(240, 100, 100))
        draw_text(screen, fonts.small, "SPACE step   A auto   ESC menu", (rect.x + 10, rect.bottom - 48), color=(150, 150, 170))

    def _draw_game_over(self, screen: pygame.Surface) -> None:
        overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 170))
        screen.blit(overlay, (0, 0))
        winner = self.state.winner
        if winner is not None and self.state.is_human(winner):
            title = "YOU WIN!"
        else:
            title = f"Player {(winner or 0) + 1} wins the match"
        w, h = screen.get_size()
        img = self.ctx.assets.fonts.big.render(title, True, (240, 240, 240))
        screen.blit(img, img.get_rect(center=(w // 2, h // 2 - 40)).topleft)
        draw_text(
            screen,
            self.ctx.assets.fonts.ui,
            f"Victories: {self.state.player_victories}   (ESC for menu)",
            (w // 2 - 160, h // 2),
        )
