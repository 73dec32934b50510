from __future__ import annotations

"""
Kanamemo pygame front end.

Interaction model:
- Click a face-down tile to reveal it. Two tiles of the same kana (in any of
  romaji, hiragana or katakana) are matched; a mismatch stays visible until
  the next click.
- N starts a new round, G toggles the debug overlay (symbols on face-down
  tiles plus the render log), Esc quits.
"""

import argparse
import logging
import traceback
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .errors import DataSourceError, KanamemoError
from .game import Game, RevealEvent, new_game
from .grid import Grid
from .rules import GameConfig
from .tiles import ClickAction, Tile, TileState

try:
    import pygame  # type: ignore
except Exception:  # pragma: no cover
    pygame = None  # type: ignore

logger = logging.getLogger(__name__)


# --- Theme --------------------------------------------------------------------

BG = (22, 27, 34)
PANEL = (30, 36, 46)
PANEL_LINE = (54, 63, 77)
TEXT = (220, 226, 235)
SUB = (164, 174, 187)
ERR = (235, 87, 87)
WARN = (255, 170, 40)


@dataclass(frozen=True)
class TileTheme:
    up: Tuple[int, int, int] = (238, 232, 214)
    down: Tuple[int, int, int] = (88, 138, 255)
    matched: Tuple[int, int, int] = (45, 55, 70)
    up_text: Tuple[int, int, int] = (30, 30, 30)
    down_text: Tuple[int, int, int] = (200, 215, 255)

    def background(self, state: TileState) -> Tuple[int, int, int]:
        if state == TileState.UP:
            return self.up
        if state == TileState.MATCHED:
            return self.matched
        return self.down


FONT_NAMES = "notosanscjkjp,notosansjp,notosanscjk,msgothic,yugothic,hiraginosans,arialunicodems,arial"


# --- Hit testing ---------------------------------------------------------------

@dataclass
class TileHit:
    rect: pygame.Rect
    position: int


def layout_tiles(grid: Grid, area: pygame.Rect, gap: int = 8) -> List[TileHit]:
    """Square tiles centered in ``area``, one per grid slot, row-major."""
    side = min(
        (area.width - gap * (grid.columns + 1)) // grid.columns,
        (area.height - gap * (grid.rows + 1)) // grid.rows,
    )
    side = max(side, 1)
    total_w = grid.columns * side + (grid.columns + 1) * gap
    total_h = grid.rows * side + (grid.rows + 1) * gap
    x0 = area.x + (area.width - total_w) // 2 + gap
    y0 = area.y + (area.height - total_h) // 2 + gap
    hits: List[TileHit] = []
    for position in range(grid.size):
        r, c = divmod(position, grid.columns)
        rect = pygame.Rect(x0 + c * (side + gap), y0 + r * (side + gap), side, side)
        hits.append(TileHit(rect=rect, position=position))
    return hits


def tile_at_point(hits: Sequence[TileHit], point: Tuple[int, int]) -> Optional[int]:
    for hit in hits:
        if hit.rect.collidepoint(point):
            return hit.position
    return None


def status_message(game: Game) -> str:
    if game.is_finished():
        return f"Cleared in {game.moves} clicks. Press N for a new round."
    revealed = game.revealed
    if len(revealed) >= game.config.tiles_needed_for_match:
        return "No match. Click another tile to continue."
    return f"Clicks: {game.moves}"


class GuiRenderer:
    """Keeps a log of tile transitions for the debug overlay.

    The window itself is redrawn from the grid every frame, so nothing else
    has to happen when a tile changes state.
    """

    def __init__(self, limit: int = 300) -> None:
        self.limit = limit
        self.log: List[str] = []

    def render_tile(self, tile: Tile, action: ClickAction) -> None:
        self.log.append(f"tile {tile.position} {tile.symbol} -> {tile.state.value} ({action.value})")
        del self.log[: -self.limit]


# --- Drawing -------------------------------------------------------------------

def draw_tile(surface, rect: pygame.Rect, tile: Optional[Tile], font, theme: TileTheme, debug: bool = False):
    if tile is None:
        pygame.draw.rect(surface, PANEL_LINE, rect, width=2, border_radius=8)
        return
    pygame.draw.rect(surface, theme.background(tile.state), rect, border_radius=8)
    pygame.draw.rect(surface, PANEL_LINE, rect, width=2, border_radius=8)
    label = tile.face(show_hidden=debug)
    if not label:
        return
    color = theme.up_text if tile.is_up() else theme.down_text
    text = font.render(label, True, color)
    surface.blit(text, text.get_rect(center=rect.center))


def status_bar(surface, rect: pygame.Rect, left: str, right: str, small_font, color=SUB):
    pygame.draw.rect(surface, PANEL, rect, border_radius=8)
    pygame.draw.rect(surface, PANEL_LINE, rect, width=2, border_radius=8)
    surface.blit(small_font.render(left, True, color), (rect.x + 10, rect.y + 8))
    r = small_font.render(right, True, SUB)
    surface.blit(r, (rect.right - r.get_width() - 10, rect.y + 8))


def draw_traceback(surface, lines: Sequence[str], title_font, small_font, max_width: int = 180) -> int:
    """Crash screen: as many traceback lines as fit. Returns how many were drawn."""
    _, H = surface.get_size()
    surface.fill((15, 18, 23))
    surface.blit(title_font.render("Kanamemo crashed, traceback:", True, ERR), (20, 20))
    y = 60
    drawn = 0
    for ln in lines:
        if y > H - 40:
            break
        surface.blit(small_font.render(ln[:max_width], True, TEXT), (20, y))
        y += small_font.get_height() + 2
        drawn += 1
    surface.blit(small_font.render("Press ESC or close the window.", True, WARN), (20, H - 28))
    return drawn


def wants_close(events) -> bool:
    return any(
        e.type == pygame.QUIT or (e.type == pygame.KEYDOWN and e.key == pygame.K_ESCAPE)
        for e in events
    )


# --- GUI entry ----------------------------------------------------------------

def launch_gui(config: Optional[GameConfig] = None, seed: Optional[int] = None) -> None:  # pragma: no cover
    if pygame is None:
        raise ImportError("pygame is required for the GUI. Install it with `pip install pygame`.")

    config = config or GameConfig()
    renderer = GuiRenderer()
    game = new_game(config=config, rng_seed=seed, renderer=renderer)
    theme = TileTheme()

    pygame.init()
    pygame.display.set_caption(f"Kanamemo — {game.groups.name}")
    screen = pygame.display.set_mode((900, 760), pygame.RESIZABLE)
    clock = pygame.time.Clock()

    title_font = pygame.font.SysFont("arial", 24, bold=True)
    small_font = pygame.font.SysFont("arial", 14)
    show_debug = config.debug
    message = status_message(game)
    tile_fonts = {}

    def run_loop():
        nonlocal screen, show_debug, message

        running = True
        while running:
            W, H = screen.get_size()
            screen.fill(BG)

            margin = 10
            header_h = 48
            status_h = 32
            header = pygame.Rect(margin, margin, W - 2 * margin, header_h)
            board = pygame.Rect(margin, header.bottom + margin, W - 2 * margin, H - header_h - status_h - 4 * margin)
            status = pygame.Rect(margin, board.bottom + margin, W - 2 * margin, status_h)

            pygame.draw.rect(screen, PANEL, header, border_radius=10)
            pygame.draw.rect(screen, PANEL_LINE, header, width=2, border_radius=10)
            screen.blit(title_font.render("Kanamemo", True, TEXT), (header.x + 12, header.y + 10))

            hits = layout_tiles(game.grid, board)
            size = max(12, hits[0].rect.height // 3)
            if size not in tile_fonts:
                tile_fonts[size] = pygame.font.SysFont(FONT_NAMES, size)
            tile_font = tile_fonts[size]
            for hit in hits:
                draw_tile(screen, hit.rect, game.grid.tiles[hit.position], tile_font, theme, debug=show_debug)

            status_bar(screen, status, message, f"{game.config.rows}x{game.config.columns}", small_font)

            if show_debug:
                dbg = pygame.Rect(margin, header.bottom + margin, int(W * 0.38), int(H * 0.3))
                pygame.draw.rect(screen, (20, 26, 34), dbg, border_radius=10)
                pygame.draw.rect(screen, (90, 98, 118), dbg, width=2, border_radius=10)
                lh = small_font.get_height() + 2
                visible = max(1, (dbg.height - 16) // lh)
                y = dbg.y + 8
                for ln in renderer.log[-visible:]:
                    screen.blit(small_font.render(ln, True, (210, 216, 225)), (dbg.x + 8, y))
                    y += lh

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.VIDEORESIZE:
                    screen = pygame.display.set_mode(event.size, pygame.RESIZABLE)
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_n:
                        game.new_round()
                        message = "New round."
                    elif event.key == pygame.K_g:
                        show_debug = not show_debug
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    position = tile_at_point(hits, event.pos)
                    if position is not None:
                        game.handle(RevealEvent(position))
                        message = status_message(game)

            pygame.display.flip()
            clock.tick(60)

    try:
        run_loop()
    except Exception:
        # Keep window open and display the traceback to avoid "silent close"
        logger.exception("GUI crashed")
        lines = traceback.format_exc().splitlines()[-40:]
        while not wants_close(pygame.event.get()):
            draw_traceback(screen, lines, title_font, small_font)
            pygame.display.flip()
    pygame.quit()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Kana memo game window.")
    parser.add_argument("--rows", type=int, default=None)
    parser.add_argument("--columns", type=int, default=None)
    parser.add_argument("--collection", default=None, help="Collection name or JSON path.")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--debug", action="store_true", default=None)
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    try:
        config = GameConfig.from_env().with_overrides(
            rows=args.rows, columns=args.columns, collection=args.collection, debug=args.debug
        )
        launch_gui(config, seed=args.seed)
    except DataSourceError as exc:
        logger.error("Cannot start game (%s): %s", exc.title, exc)
        return 2
    except KanamemoError as exc:
        logger.error("Cannot start game: %s", exc)
        return 1
    return 0


if __name__ == "__main__":  # allows standalone execution
    raise SystemExit(main())
