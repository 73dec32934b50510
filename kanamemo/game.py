from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Protocol

from .collection import CollectionSource, JsonCollectionSource
from .engine import MatchEngine, RevealOutcome, RevealResult
from .errors import InvalidStateError
from .grid import Grid
from .rules import GameConfig
from .symbols import SymbolGroupCollection
from .tiles import ClickAction, Tile

logger = logging.getLogger(__name__)


class TileRenderer(Protocol):
    def render_tile(self, tile: Tile, action: ClickAction) -> None:
        ...


class NullRenderer:
    def render_tile(self, tile: Tile, action: ClickAction) -> None:
        return None


@dataclass(frozen=True)
class RevealEvent:
    position: int


@dataclass
class GameEvent:
    position: int
    action: str
    outcome: str


class Game:
    """Owns one round of the memo game: the grid, the engine and the event log."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        source: Optional[CollectionSource] = None,
        renderer: Optional[TileRenderer] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.source = source or JsonCollectionSource()
        self.renderer = renderer or NullRenderer()
        self.rng = rng or random.Random()
        self.groups: Optional[SymbolGroupCollection] = None
        self.grid: Optional[Grid] = None
        self.engine: Optional[MatchEngine] = None
        self.event_log: List[GameEvent] = []

    @property
    def is_set_up(self) -> bool:
        return self.grid is not None and self.engine is not None

    @property
    def revealed(self) -> List[Tile]:
        return list(self.engine.revealed) if self.engine is not None else []

    @property
    def moves(self) -> int:
        return len(self.event_log)

    def set_up(self) -> None:
        # Nothing is kept on self until the first round is populated.
        groups = self.source.load(self.config.collection)
        grid = Grid(self.config.rows, self.config.columns, rng=self.rng)
        grid.populate(groups)
        self.groups = groups
        self.grid = grid
        self.engine = MatchEngine(self.config.tiles_needed_for_match, on_transition=self._render)
        self._start_round()

    def _start_round(self) -> None:
        self.engine.reset()
        self.event_log = []
        logger.info("New %dx%d round from collection %r", self.grid.rows, self.grid.columns, self.groups.name)
        self.render()

    def run(self) -> None:
        self.set_up()

    def new_round(self) -> None:
        grid, _ = self._require_set_up()
        grid.populate(self.groups)
        self._start_round()

    def render(self) -> None:
        grid, _ = self._require_set_up()
        for tile in grid.placed_tiles():
            self._render(tile)

    def handle(self, event: RevealEvent) -> RevealResult:
        grid, engine = self._require_set_up()
        tile = grid.tile_at(event.position)
        action = tile.click_action
        if action == ClickAction.REVEAL:
            result = engine.reveal(tile)
        elif action == ClickAction.ALREADY_UP:
            logger.debug("Tile %d is already up", tile.position)
            result = RevealResult(tile, RevealOutcome.IGNORED)
        else:
            logger.debug("Tile %d is already matched", tile.position)
            result = RevealResult(tile, RevealOutcome.IGNORED)
        self.event_log.append(GameEvent(position=tile.position, action=action.value, outcome=result.outcome.value))
        return result

    def reveal(self, position: int) -> RevealResult:
        return self.handle(RevealEvent(position))

    def is_finished(self) -> bool:
        return self.grid is not None and self.grid.is_cleared()

    def tear_down(self) -> None:
        self.groups = None
        self.grid = None
        self.engine = None
        self.event_log = []

    def _render(self, tile: Tile) -> None:
        self.renderer.render_tile(tile, tile.click_action)

    def _require_set_up(self):
        if self.grid is None or self.engine is None:
            raise InvalidStateError("game is not set up, call set_up() first")
        return self.grid, self.engine


def new_game(
    config: Optional[GameConfig] = None,
    rng_seed: Optional[int] = None,
    source: Optional[CollectionSource] = None,
    renderer: Optional[TileRenderer] = None,
) -> Game:
    game = Game(config=config, source=source, renderer=renderer, rng=random.Random(rng_seed))
    game.set_up()
    return game
