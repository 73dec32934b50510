from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional, Sequence, Tuple

from .errors import ConstructionError, InvalidStateError
from .ordered import OrderedContainer

KANA_GROUP_SIZE = 3


def _validate_members(members: object) -> Tuple[str, ...]:
    if isinstance(members, (str, bytes)) or not isinstance(members, (list, tuple, OrderedContainer)):
        raise ConstructionError(f"symbol group needs a sequence of symbols, got {type(members).__name__}")
    values = tuple(members)
    if not values:
        raise ConstructionError("symbol group cannot be empty")
    for value in values:
        if not isinstance(value, str):
            raise ConstructionError(f"symbols must be strings, got {value!r}")
    return values


@dataclass(frozen=True, eq=False)
class SymbolGroup:
    """Symbols that count as the same thing when matching tiles.

    Groups compare and hash by identity: two tiles match when they point at
    the same group object, whatever symbol each of them shows.
    """

    members: Tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "members", _validate_members(self.members))

    def get_random_pair(self, rng: Optional[random.Random] = None) -> Tuple[str, str]:
        if len(self.members) < 2:
            raise InvalidStateError(f"group {self.members!r} has fewer than 2 symbols")
        available = OrderedContainer(self.members).shuffle(rng)
        return available.pop(), available.pop()

    def contains(self, symbol: str) -> bool:
        return symbol in self.members

    def __contains__(self, symbol: object) -> bool:
        return symbol in self.members

    def __len__(self) -> int:
        return len(self.members)

    def __iter__(self) -> Iterator[str]:
        return iter(self.members)


@dataclass(frozen=True, eq=False)
class KanaGroup(SymbolGroup):
    """A romaji spelling with its hiragana and katakana."""

    members: Tuple[str, ...] = field(init=False)
    romaji: str
    hiragana: str
    katakana: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "members", _validate_members((self.romaji, self.hiragana, self.katakana)))

    @classmethod
    def from_row(cls, row: Sequence[str]) -> "KanaGroup":
        if isinstance(row, (str, bytes)) or not isinstance(row, (list, tuple)):
            raise ConstructionError(f"kana row must be a list, got {type(row).__name__}")
        if len(row) != KANA_GROUP_SIZE:
            raise ConstructionError(f"kana row must have {KANA_GROUP_SIZE} symbols, got {len(row)}")
        return cls(*row)


class SymbolGroupCollection:
    """Ordered collection of symbol groups, loaded once per game."""

    def __init__(self, groups: Iterable[SymbolGroup] = (), name: str = "", description: str = "") -> None:
        self._groups: OrderedContainer[SymbolGroup] = OrderedContainer(list(groups))
        for group in self._groups:
            if not isinstance(group, SymbolGroup):
                raise ConstructionError(f"expected SymbolGroup, got {type(group).__name__}")
        self.name = name
        self.description = description

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[str]], name: str = "", description: str = "") -> "SymbolGroupCollection":
        return cls([KanaGroup.from_row(row) for row in rows], name=name, description=description)

    def shuffle(self, rng: Optional[random.Random] = None) -> "SymbolGroupCollection":
        self._groups.shuffle(rng)
        return self

    def shuffled(self, rng: Optional[random.Random] = None) -> "SymbolGroupCollection":
        return SymbolGroupCollection(self._groups, self.name, self.description).shuffle(rng)

    def find_group(self, symbol: str) -> Optional[SymbolGroup]:
        for group in self._groups:
            if symbol in group:
                return group
        return None

    def __len__(self) -> int:
        return len(self._groups)

    def __iter__(self) -> Iterator[SymbolGroup]:
        return iter(self._groups)

    def __getitem__(self, index: int) -> SymbolGroup:
        return self._groups[index]

    def __repr__(self) -> str:
        return f"SymbolGroupCollection(name={self.name!r}, groups={len(self._groups)})"
