from __future__ import annotations

import argparse
import logging
import sys
import unicodedata
from typing import Callable, Dict, List, Optional

from .collection import DEFAULT_COLLECTION
from .errors import DataSourceError, KanamemoError
from .game import Game, new_game
from .grid import Grid
from .rules import GameConfig
from .symbols import SymbolGroup
from .tiles import ClickAction, Tile, TileState

logger = logging.getLogger(__name__)

CELL_WIDTH = 5


def _display_width(text: str) -> int:
    return sum(2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1 for ch in text)


def _cell(tile: Optional[Tile], show_hidden: bool) -> str:
    if tile is None:
        label = "?"
    elif tile.state == TileState.MATCHED:
        label = "··"
    elif tile.state == TileState.DOWN and not show_hidden:
        label = "■"
    else:
        label = tile.symbol
    pad = max(0, CELL_WIDTH - _display_width(label))
    return label + " " * pad


def format_grid(grid: Grid, show_hidden: bool = False) -> str:
    """Text view of the grid with a column header and row labels."""
    header = "    " + "".join(str(c).ljust(CELL_WIDTH) for c in range(grid.columns))
    lines = [header.rstrip()]
    for r, row in enumerate(grid.rows_of_tiles()):
        lines.append(f"{r:>2}  " + "".join(_cell(tile, show_hidden) for tile in row).rstrip())
    return "\n".join(lines)


class TextRenderer:
    def __init__(self) -> None:
        self.renders = 0

    def render_tile(self, tile: Tile, action: ClickAction) -> None:
        self.renders += 1
        logger.debug("Tile %d -> %s (click: %s)", tile.position, tile.state.value, action.value)


def parse_position(text: str, grid: Grid) -> int:
    """Accept either a slot number or ``row col``."""
    parts = text.replace(",", " ").split()
    if len(parts) == 1:
        return int(parts[0])
    if len(parts) == 2:
        row, col = int(parts[0]), int(parts[1])
        if not (0 <= row < grid.rows and 0 <= col < grid.columns):
            raise ValueError(f"no cell at row {row}, column {col}")
        return row * grid.columns + col
    raise ValueError(f"cannot read a position from {text!r}")


class PerfectMemoryPlayer:
    """Remembers every symbol it has seen and never misses a known pair."""

    def __init__(self) -> None:
        self.seen: Dict[int, SymbolGroup] = {}

    def observe(self, tile: Tile) -> None:
        self.seen[tile.position] = tile.group

    def _known_partner(self, grid: Grid, tile: Tile) -> Optional[int]:
        for position, group in self.seen.items():
            if position != tile.position and group is tile.group and grid.tile_at(position).is_down():
                return position
        return None

    def _known_pair(self, grid: Grid) -> Optional[int]:
        for position, group in self.seen.items():
            tile = grid.tile_at(position)
            if tile.is_down() and self._known_partner(grid, tile) is not None:
                return position
        return None

    def choose(self, game: Game) -> int:
        grid = game.grid
        down = [tile for tile in grid.placed_tiles() if tile.is_down()]
        if not down:
            raise KanamemoError("no face-down tile left to reveal")
        revealed = game.revealed
        if len(revealed) == 1:
            partner = self._known_partner(grid, revealed[0])
            if partner is not None:
                return partner
        else:
            known = self._known_pair(grid)
            if known is not None:
                return known
        unseen = [tile.position for tile in down if tile.position not in self.seen]
        return unseen[0] if unseen else down[0].position


def run_game(config: GameConfig, seed: Optional[int] = None, max_moves: int = 1000) -> Game:
    game = new_game(config=config, rng_seed=seed, renderer=TextRenderer())
    player = PerfectMemoryPlayer()
    for _ in range(max_moves):
        if game.is_finished():
            break
        position = player.choose(game)
        result = game.reveal(position)
        player.observe(result.tile)
    return game


def play_interactive(game: Game, read: Callable[[str], str] = input, write: Callable[[str], None] = print) -> None:
    write(f"{game.groups.name}: reveal tiles by slot number or 'row col'. 'n' new round, 'q' quits.")
    while True:
        write(format_grid(game.grid, show_hidden=game.config.debug))
        if game.is_finished():
            write(f"Cleared in {game.moves} moves.")
            return
        try:
            text = read("> ").strip().lower()
        except EOFError:
            return
        if text in ("q", "quit", "exit"):
            return
        if text == "n":
            game.new_round()
            continue
        try:
            result = game.reveal(parse_position(text, game.grid))
        except (ValueError, KanamemoError) as exc:
            write(f"Invalid move: {exc}")
            continue
        write(f"{result.tile.symbol}: {result.outcome.value.lower()}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Kana memo game in the terminal.")
    parser.add_argument("--rows", type=int, default=None, help="Grid rows (default 4).")
    parser.add_argument("--columns", type=int, default=None, help="Grid columns (default 4).")
    parser.add_argument("--collection", default=None, help=f"Collection name or JSON path (default {DEFAULT_COLLECTION}).")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for a reproducible grid.")
    parser.add_argument("--simulate", action="store_true", help="Let a perfect-memory player clear the grid.")
    parser.add_argument("--debug", action="store_true", default=None, help="Show symbols on face-down tiles.")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...).")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        config = GameConfig.from_env().with_overrides(
            rows=args.rows, columns=args.columns, collection=args.collection, debug=args.debug
        )
        if args.simulate:
            game = run_game(config, seed=args.seed)
            print(format_grid(game.grid, show_hidden=True))
            print(f"Game finished after {game.moves} reveals" if game.is_finished() else "Move limit reached")
            return 0
        play_interactive(new_game(config=config, rng_seed=args.seed, renderer=TextRenderer()))
    except DataSourceError as exc:
        logger.error("Cannot start game (%s): %s", exc.title, exc)
        return 2
    except KanamemoError as exc:
        logger.error("Cannot start game: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
