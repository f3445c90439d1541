from __future__ import annotations

import argparse

import pygame  # type: ignore[import-not-found]

from jellyjam.engine.match import MatchConfig
from jellyjam.paths import get_paths
from jellyjam.services.content import ContentService
from jellyjam.services.telemetry import TelemetryService

from .app import App, GameContext
from .asset_manager import AssetManager
from .scenes.boot import BootScene


def main() -> int:
    parser = argparse.ArgumentParser(prog="jellyjam")
    parser.add_argument("--width", type=int, default=1280)
    parser.add_argument("--height", type=int, default=800)
    parser.add_argument("--players", type=int, default=4)
    parser.add_argument("--threshold", type=int, default=3)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    pygame.init()
    screen = pygame.display.set_mode((args.width, args.height))
    pygame.display.set_caption("Jelly Jam")

    clock = pygame.time.Clock()
    paths = get_paths()

    ctx = GameContext(
        screen=screen,
        clock=clock,
        paths=paths,
        assets=AssetManager(cards_dir=paths.cards_assets_dir),
        content=ContentService(data_dir=paths.data_dir, schema_dir=paths.schema_dir),
        telemetry=TelemetryService(paths.telemetry_path),
        config=MatchConfig(player_count=args.players, victory_threshold=args.threshold),
        seed=args.seed,
    )

    app = App(ctx, BootScene(ctx))
    return app.run()
