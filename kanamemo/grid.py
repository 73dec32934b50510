from __future__ import annotations

import logging
import random
from typing import Iterator, List, Optional

from .errors import CapacityError, ConstructionError, OutOfRangeError
from .ordered import OrderedContainer
from .symbols import SymbolGroup, SymbolGroupCollection
from .tiles import Tile

logger = logging.getLogger(__name__)


def validate_dimensions(rows: int, columns: int) -> None:
    for label, value in (("rows", rows), ("columns", columns)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConstructionError(f"{label} must be an int, got {value!r}")
        if value <= 0:
            raise ConstructionError(f"{label} must be positive, got {value}")
    if (rows * columns) % 2:
        raise ConstructionError(f"a {rows}x{columns} grid has an odd number of slots")


class Grid:
    """The memo tile grid.

    Slots are numbered row-major from 0 to ``rows * columns - 1``. The grid
    is empty until ``populate`` fills every slot with a tile; populating
    again throws the previous round's tiles away.
    """

    def __init__(self, rows: int, columns: int, rng: Optional[random.Random] = None) -> None:
        validate_dimensions(rows, columns)
        self.rows = rows
        self.columns = columns
        self.rng = rng or random.Random()
        self.tiles: List[Optional[Tile]] = [None] * (rows * columns)

    @property
    def size(self) -> int:
        return len(self.tiles)

    def populate(self, groups: SymbolGroupCollection) -> None:
        self.populate_random_pairs(groups)

    def populate_random_pairs(self, groups: SymbolGroupCollection) -> None:
        """Fill every slot with tiles, two per group.

        From ``[[a, b, c], [d, e, f]]`` a 1x4 grid could get ``a, c, f, e``
        spread over random slots. Raises CapacityError before touching the
        grid when the groups cannot cover every slot.
        """
        needed = self.size // 2
        if len(groups) < needed:
            raise CapacityError(
                f"{self.rows}x{self.columns} grid needs {needed} symbol groups, collection has {len(groups)}"
            )
        self.tiles = [None] * self.size
        slots_available = OrderedContainer(self.size).init_with_indices().shuffle(self.rng)
        for group in groups.shuffled(self.rng):
            if len(slots_available) < 2:
                break
            slot_a = slots_available.pop()
            slot_b = slots_available.pop()
            symbol_a, symbol_b = group.get_random_pair(self.rng)
            self.tiles[slot_a] = Tile(slot_a, symbol_a, group)
            self.tiles[slot_b] = Tile(slot_b, symbol_b, group)
        logger.debug("Populated %dx%d grid with %d pairs", self.rows, self.columns, needed)

    def tile_at(self, position: int) -> Tile:
        if isinstance(position, bool) or not isinstance(position, int) or not 0 <= position < self.size:
            raise OutOfRangeError(f"position {position!r} outside of {self.rows}x{self.columns} grid")
        tile = self.tiles[position]
        if tile is None:
            raise OutOfRangeError(f"slot {position} has no tile, populate the grid first")
        return tile

    def rows_of_tiles(self) -> List[List[Optional[Tile]]]:
        return [self.tiles[r * self.columns:(r + 1) * self.columns] for r in range(self.rows)]

    def placed_tiles(self) -> Iterator[Tile]:
        for tile in self.tiles:
            if tile is not None:
                yield tile

    def placed_groups(self) -> List[SymbolGroup]:
        seen: List[SymbolGroup] = []
        for tile in self.placed_tiles():
            if not any(tile.group is group for group in seen):
                seen.append(tile.group)
        return seen

    def is_full(self) -> bool:
        return all(tile is not None for tile in self.tiles)

    def is_cleared(self) -> bool:
        return self.is_full() and all(tile.is_matched() for tile in self.placed_tiles())
