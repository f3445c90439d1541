from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from ...text import wrap
from ..app import GameContext
from ..scene_base import SceneTransition, to_main_menu
from ..ui import Button, draw_text

RULES = [
    "Everyone starts with two jellies, a creature, a mutation and an item.",
    "Each round opens with placement: in turn, every player puts two living cards on their field "
    "and may attach a mutation to each living card they place.",
    "Each turn you take one action: use an item from your field, attack, or withdraw a card "
    "back to your hand. Attacks roll a die: meet the defender's defense and it loses health "
    "equal to your damage.",
    "A card reduced to zero health is discarded. Jellies go back to the jelly deck, everything "
    "else goes to the loot pile.",
    "Hold at most eight cards at the end of your turn. Once your field is empty you are out "
    "for the round.",
    "The last player with cards on the field wins the round. Everyone except the first player "
    "knocked out claims a prize, best finisher first.",
    "Every player then draws a jelly for the next round. First to the victory threshold wins.",
]


class RulesScene:
    def __init__(self, ctx: GameContext) -> None:
        self.ctx = ctx
        self._next: SceneTransition | None = None
        self.btn_back = Button(rect=pygame.Rect(20, 20, 120, 40), text="Back", on_click=self._on_back)

    def _on_back(self) -> None:
        self._next = to_main_menu(self.ctx)

    def handle_event(self, event: pygame.event.Event) -> None:
        if self.btn_back.handle_event(event):
            return
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            self._on_back()

    def update(self, dt: float) -> SceneTransition | None:
        return self._next

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((20, 14, 24))
        fonts = self.ctx.assets.fonts
        self.btn_back.draw(screen, fonts.ui)
        draw_text(screen, fonts.big, "How to Play", (160, 24))
        max_chars = max(40, (screen.get_width() - 120) // 9)
        y = 90
        for para in RULES:
            for line in wrap(para, max_chars):
                draw_text(screen, fonts.ui, line, (60, y))
                y += 26
            y += 12
