from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

from .errors import InvalidStateError
from .symbols import SymbolGroup


class TileState(str, Enum):
    DOWN = "DOWN"
    UP = "UP"
    MATCHED = "MATCHED"


class TileEvent(str, Enum):
    REVEAL = "REVEAL"
    MATCH = "MATCH"
    HIDE = "HIDE"


class ClickAction(str, Enum):
    REVEAL = "REVEAL"
    ALREADY_UP = "ALREADY_UP"
    ALREADY_MATCHED = "ALREADY_MATCHED"


_TRANSITIONS: Dict[Tuple[TileState, TileEvent], TileState] = {
    (TileState.DOWN, TileEvent.REVEAL): TileState.UP,
    (TileState.UP, TileEvent.MATCH): TileState.MATCHED,
    (TileState.UP, TileEvent.HIDE): TileState.DOWN,
}


def transition(state: TileState, event: TileEvent) -> TileState:
    try:
        return _TRANSITIONS[(state, event)]
    except KeyError:
        raise InvalidStateError(f"cannot apply {event.value} to a {state.value} tile") from None


def click_action_for(state: TileState) -> ClickAction:
    """Which click handler a tile in ``state`` gets."""
    if state == TileState.DOWN:
        return ClickAction.REVEAL
    if state == TileState.UP:
        return ClickAction.ALREADY_UP
    if state == TileState.MATCHED:
        return ClickAction.ALREADY_MATCHED
    raise InvalidStateError(f"unknown tile state {state!r}")


@dataclass(eq=False)
class Tile:
    position: int
    symbol: str
    group: SymbolGroup
    state: TileState = TileState.DOWN

    def apply(self, event: TileEvent) -> TileState:
        self.state = transition(self.state, event)
        return self.state

    @property
    def click_action(self) -> ClickAction:
        return click_action_for(self.state)

    def is_in_same_group_as(self, other: "Tile") -> bool:
        return self.group is other.group

    def is_down(self) -> bool:
        return self.state == TileState.DOWN

    def is_up(self) -> bool:
        return self.state == TileState.UP

    def is_matched(self) -> bool:
        return self.state == TileState.MATCHED

    def face(self, show_hidden: bool = False) -> str:
        """Symbol visible on the tile, or an empty string when it's hidden."""
        if self.state == TileState.UP or (show_hidden and self.state == TileState.DOWN):
            return self.symbol
        return ""
