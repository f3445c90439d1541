from __future__ import annotations

import random

import pygame  # type: ignore[import-not-found]

from jellyjam.engine.match import new_match

from ..app import GameContext
from ..scene_base import Scene, SceneTransition
from ..ui import Button, draw_text
from .gallery import GalleryScene
from .match import MatchScene
from .rules import RulesScene


class MainMenuScene:
    def __init__(self, ctx: GameContext) -> None:
        self.ctx = ctx
        self._next: SceneTransition | None = None
        self._message = ""
        self._buttons: list[Button] = []
        self._build_ui()

    def _build_ui(self) -> None:
        def go(scene: Scene) -> None:
            self._next = SceneTransition(scene)

        x, y, w, h, gap = 60, 160, 320, 56, 14
        entries = [
            ("Play (you are Player 1)", lambda: self._start(human_players=(0,))),
            ("Watch Bots", lambda: self._start(human_players=())),
            ("Card Gallery", lambda: go(GalleryScene(self.ctx))),
            ("How to Play", lambda: go(RulesScene(self.ctx))),
            ("Quit", lambda: pygame.event.post(pygame.event.Event(pygame.QUIT))),
        ]
        self._buttons = [
            Button(rect=pygame.Rect(x, y + (h + gap) * i, w, h), text=label, on_click=cb)
            for i, (label, cb) in enumerate(entries)
        ]

    def _start(self, human_players: tuple[int, ...]) -> None:
        catalog = self.ctx.catalog
        if catalog is None:
            return
        seed = self.ctx.seed if self.ctx.seed is not None else random.randrange(1, 2**31 - 1)
        state = new_match(catalog, seed=seed, config=self.ctx.config, human_players=human_players)
        if state is None:
            self._message = "A match needs at least two players."
            return
        self._next = SceneTransition(MatchScene(self.ctx, state))

    def handle_event(self, event: pygame.event.Event) -> None:
        for b in self._buttons:
            if b.handle_event(event):
                return

    def update(self, dt: float) -> SceneTransition | None:
        return self._next

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((24, 12, 28))
        fonts = self.ctx.assets.fonts
        draw_text(screen, fonts.big, "Jelly Jam", (60, 40))
        cfg = self.ctx.config
        draw_text(
            screen,
            fonts.ui,
            f"{cfg.player_count} players, first to {cfg.victory_threshold} round wins",
            (60, 100),
        )
        for b in self._buttons:
            b.draw(screen, fonts.ui)
        if self._message:
            draw_text(screen, fonts.ui, self._message, (60, 540), color=(240, 120, 120))
