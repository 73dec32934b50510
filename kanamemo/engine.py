from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Deque, List, Optional, Tuple

from .errors import ConstructionError
from .tiles import Tile, TileEvent

logger = logging.getLogger(__name__)

TransitionCallback = Callable[[Tile], None]


class RevealOutcome(str, Enum):
    IGNORED = "IGNORED"
    REVEALED = "REVEALED"
    MATCH = "MATCH"
    MISMATCH = "MISMATCH"


@dataclass(frozen=True)
class RevealResult:
    tile: Tile
    outcome: RevealOutcome
    matched: Tuple[Tile, ...] = ()
    hidden: Tuple[Tile, ...] = ()


class MatchEngine:
    """Tracks the face-up tiles and decides matches and mismatches.

    A mismatch is not hidden right away: the non-matching tiles stay up so
    the player can look at them, and are flipped back down by the next
    reveal.
    """

    def __init__(self, tiles_needed_for_match: int = 2, on_transition: Optional[TransitionCallback] = None) -> None:
        if isinstance(tiles_needed_for_match, bool) or not isinstance(tiles_needed_for_match, int):
            raise ConstructionError(f"tiles_needed_for_match must be an int, got {tiles_needed_for_match!r}")
        if tiles_needed_for_match < 2:
            raise ConstructionError("a match needs at least 2 tiles")
        self.tiles_needed_for_match = tiles_needed_for_match
        self.on_transition = on_transition
        self.revealed: Deque[Tile] = deque()

    @property
    def needed_for_match_reached(self) -> bool:
        return len(self.revealed) == self.tiles_needed_for_match

    @property
    def needed_for_match_exceeded(self) -> bool:
        # Never more than one over between two reveals.
        return len(self.revealed) > self.tiles_needed_for_match

    def reset(self) -> None:
        self.revealed = deque()

    def reveal(self, tile: Tile) -> RevealResult:
        if not tile.is_down():
            logger.debug("Ignoring reveal of %s tile at %d", tile.state.value, tile.position)
            return RevealResult(tile, RevealOutcome.IGNORED)
        self._apply(tile, TileEvent.REVEAL)
        self.revealed.append(tile)
        return self.process_up_tiles(tile)

    def process_up_tiles(self, latest: Tile) -> RevealResult:
        outcome = RevealOutcome.REVEALED
        matched: Tuple[Tile, ...] = ()
        hidden: Tuple[Tile, ...] = ()
        if self.needed_for_match_reached:
            if self.up_tiles_are_matching():
                matched = self.process_match()
                outcome = RevealOutcome.MATCH
            else:
                outcome = RevealOutcome.MISMATCH
                logger.debug("Mismatch: %s", [t.symbol for t in self.revealed])
        if self.needed_for_match_exceeded:
            hidden = self.process_mismatch()
        return RevealResult(latest, outcome, matched, hidden)

    def up_tiles_are_matching(self) -> bool:
        first = self.revealed[0]
        return all(tile.is_in_same_group_as(first) for tile in self.revealed)

    def process_match(self) -> Tuple[Tile, ...]:
        matched = tuple(self.revealed)
        while self.revealed:
            self._apply(self.revealed.popleft(), TileEvent.MATCH)
        logger.debug("Match: %s", [t.symbol for t in matched])
        return matched

    def process_mismatch(self) -> Tuple[Tile, ...]:
        """Flip every up tile but the most recent one back down."""
        hidden: List[Tile] = []
        while len(self.revealed) > 1:
            tile = self.revealed.popleft()
            self._apply(tile, TileEvent.HIDE)
            hidden.append(tile)
        return tuple(hidden)

    def _apply(self, tile: Tile, event: TileEvent) -> None:
        tile.apply(event)
        if self.on_transition is not None:
            self.on_transition(tile)
