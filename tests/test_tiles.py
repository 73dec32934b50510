import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from kanamemo.errors import InvalidStateError
from kanamemo.symbols import KanaGroup
from kanamemo.tiles import ClickAction, Tile, TileEvent, TileState, click_action_for, transition


def test_transition_table():
    assert transition(TileState.DOWN, TileEvent.REVEAL) == TileState.UP
    assert transition(TileState.UP, TileEvent.MATCH) == TileState.MATCHED
    assert transition(TileState.UP, TileEvent.HIDE) == TileState.DOWN


@pytest.mark.parametrize(
    "state,event",
    [
        (TileState.DOWN, TileEvent.MATCH),
        (TileState.DOWN, TileEvent.HIDE),
        (TileState.UP, TileEvent.REVEAL),
        (TileState.MATCHED, TileEvent.REVEAL),
        (TileState.MATCHED, TileEvent.MATCH),
        (TileState.MATCHED, TileEvent.HIDE),
    ],
)
def test_illegal_transitions_raise(state, event):
    with pytest.raises(InvalidStateError):
        transition(state, event)


def test_click_action_per_state():
    assert click_action_for(TileState.DOWN) == ClickAction.REVEAL
    assert click_action_for(TileState.UP) == ClickAction.ALREADY_UP
    assert click_action_for(TileState.MATCHED) == ClickAction.ALREADY_MATCHED


def test_tile_lifecycle_and_queries():
    tile = Tile(0, "a", KanaGroup("a", "あ", "ア"))
    assert tile.is_down() and not tile.is_up() and not tile.is_matched()
    assert tile.face() == ""
    assert tile.face(show_hidden=True) == "a"

    tile.apply(TileEvent.REVEAL)
    assert tile.is_up()
    assert tile.click_action == ClickAction.ALREADY_UP
    assert tile.face() == "a"

    tile.apply(TileEvent.MATCH)
    assert tile.is_matched()
    assert tile.face(show_hidden=True) == ""
    with pytest.raises(InvalidStateError):
        tile.apply(TileEvent.HIDE)
    assert tile.is_matched()


def test_same_group_uses_group_identity():
    group = KanaGroup("a", "あ", "ア")
    lookalike = KanaGroup("a", "あ", "ア")
    romaji = Tile(0, "a", group)
    katakana = Tile(1, "ア", group)
    other = Tile(2, "a", lookalike)
    assert romaji.is_in_same_group_as(katakana)
    assert not romaji.is_in_same_group_as(other)
