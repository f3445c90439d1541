"""Deterministic, headless rules engine for Jelly Jam.

IMPORTANT: This package must never import pygame.
"""

from .cards import Card, new_living, new_usable
from .effects import EffectRegistry, Phase
from .match import MatchConfig, MatchState, StepResult, new_match, run_match, step
from .selection import RandomSelector, ScriptedSelector, SeatedSelector, Selector
from .types import CardCatalog, CardDefinition, Category

__all__ = [
    "Card",
    "CardCatalog",
    "CardDefinition",
    "Category",
    "EffectRegistry",
    "MatchConfig",
    "MatchState",
    "Phase",
    "RandomSelector",
    "ScriptedSelector",
    "SeatedSelector",
    "Selector",
    "StepResult",
    "new_living",
    "new_match",
    "new_usable",
    "run_match",
    "step",
]
