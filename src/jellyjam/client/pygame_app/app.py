from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import pygame  # type: ignore[import-not-found]

from jellyjam.engine.match import MatchConfig
from jellyjam.engine.types import CardCatalog
from jellyjam.paths import Paths
from jellyjam.services.content import ContentService
from jellyjam.services.telemetry import TelemetryService

from .asset_manager import AssetManager
from .scene_base import Scene


@dataclass
class GameContext:
    screen: pygame.Surface
    clock: pygame.time.Clock
    paths: Paths
    assets: AssetManager
    content: ContentService
    telemetry: TelemetryService
    config: MatchConfig = field(default_factory=MatchConfig)
    seed: Optional[int] = None

    # Loaded at boot
    catalog: Optional[CardCatalog] = None


class App:
    def __init__(self, ctx: GameContext, initial_scene: Scene) -> None:
        self.ctx = ctx
        self.scene: Scene = initial_scene
        self.running = True

    def run(self) -> int:
        while self.running:
            dt = self.ctx.clock.tick(60) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                    break
                self.scene.handle_event(event)
            if not self.running:
                break

            tr = self.scene.update(dt)
            if tr is not None:
                self.scene = tr.next_scene

            self.scene.render(self.ctx.screen)
            pygame.display.flip()

        pygame.quit()
        return 0
