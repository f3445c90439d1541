from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

import pygame  # type: ignore[import-not-found]

if TYPE_CHECKING:
    from .app import GameContext


@dataclass
class SceneTransition:
    next_scene: "Scene"


class Scene(Protocol):
    def handle_event(self, event: pygame.event.Event) -> None: ...
    def update(self, dt: float) -> SceneTransition | None: ...
    def render(self, screen: pygame.Surface) -> None: ...


def to_main_menu(ctx: "GameContext") -> SceneTransition:
    # Imported late: the menu imports every other scene.
    from .scenes.main_menu import MainMenuScene

    return SceneTransition(MainMenuScene(ctx))
