"""Kana memo game engine package."""

from .collection import JsonCollectionSource, load_collection
from .engine import MatchEngine, RevealOutcome, RevealResult
from .errors import (
    CapacityError,
    ConstructionError,
    DataSourceError,
    InvalidStateError,
    KanamemoError,
    OutOfRangeError,
)
from .game import Game, GameEvent, RevealEvent, new_game
from .grid import Grid
from .ordered import OrderedContainer
from .rules import GameConfig
from .symbols import KanaGroup, SymbolGroup, SymbolGroupCollection
from .tiles import ClickAction, Tile, TileEvent, TileState, click_action_for, transition

__all__ = [
    "CapacityError",
    "ClickAction",
    "ConstructionError",
    "DataSourceError",
    "Game",
    "GameConfig",
    "GameEvent",
    "Grid",
    "InvalidStateError",
    "JsonCollectionSource",
    "KanaGroup",
    "KanamemoError",
    "MatchEngine",
    "OrderedContainer",
    "OutOfRangeError",
    "RevealEvent",
    "RevealOutcome",
    "RevealResult",
    "SymbolGroup",
    "SymbolGroupCollection",
    "Tile",
    "TileEvent",
    "TileState",
    "click_action_for",
    "load_collection",
    "new_game",
    "transition",
]
