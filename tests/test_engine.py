import pathlib
import sys
from collections import deque

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from kanamemo.engine import MatchEngine, RevealOutcome
from kanamemo.errors import ConstructionError
from kanamemo.symbols import KanaGroup
from kanamemo.tiles import Tile, TileState


def _tiles():
    g1 = KanaGroup("a", "あ", "ア")
    g2 = KanaGroup("i", "い", "イ")
    return [Tile(0, "a", g1), Tile(1, "ア", g1), Tile(2, "い", g2), Tile(3, "i", g2)]


def test_same_group_pair_matches():
    tiles = _tiles()
    engine = MatchEngine()

    first = engine.reveal(tiles[0])
    assert first.outcome == RevealOutcome.REVEALED
    assert list(engine.revealed) == [tiles[0]]

    second = engine.reveal(tiles[1])
    assert second.outcome == RevealOutcome.MATCH
    assert tiles[0].is_matched() and tiles[1].is_matched()
    assert list(engine.revealed) == []
    assert set(second.matched) == {tiles[0], tiles[1]}


def test_mismatch_stays_up_until_next_reveal():
    tiles = _tiles()
    engine = MatchEngine()

    engine.reveal(tiles[0])
    result = engine.reveal(tiles[2])
    assert result.outcome == RevealOutcome.MISMATCH
    assert tiles[0].is_up() and tiles[2].is_up()
    assert list(engine.revealed) == [tiles[0], tiles[2]]

    result = engine.reveal(tiles[1])
    assert result.outcome == RevealOutcome.REVEALED
    assert result.hidden == (tiles[0], tiles[2])
    assert tiles[0].is_down() and tiles[2].is_down()
    assert tiles[1].is_up()
    assert list(engine.revealed) == [tiles[1]]

    result = engine.reveal(tiles[0])
    assert result.outcome == RevealOutcome.MATCH
    assert tiles[0].is_matched() and tiles[1].is_matched()


def test_revealing_matched_or_up_tile_is_noop():
    tiles = _tiles()
    calls = []
    engine = MatchEngine(on_transition=calls.append)
    engine.reveal(tiles[0])
    engine.reveal(tiles[1])
    assert len(calls) == 4

    again = engine.reveal(tiles[0])
    assert again.outcome == RevealOutcome.IGNORED
    assert tiles[0].state == TileState.MATCHED
    assert len(calls) == 4

    engine.reveal(tiles[2])
    up_again = engine.reveal(tiles[2])
    assert up_again.outcome == RevealOutcome.IGNORED
    assert list(engine.revealed) == [tiles[2]]
    assert len(calls) == 5


def test_revealed_never_exceeds_capacity_between_reveals():
    tiles = _tiles()
    engine = MatchEngine()
    for tile in (tiles[0], tiles[2], tiles[3], tiles[1]):
        engine.reveal(tile)
        assert len(engine.revealed) <= engine.tiles_needed_for_match
        assert not any(t.is_matched() for t in engine.revealed)


def test_three_of_a_kind_matching():
    group = KanaGroup("u", "う", "ウ")
    other = KanaGroup("e", "え", "エ")
    tiles = [Tile(0, "u", group), Tile(1, "う", group), Tile(2, "ウ", group), Tile(3, "e", other)]
    engine = MatchEngine(tiles_needed_for_match=3)

    engine.reveal(tiles[0])
    engine.reveal(tiles[1])
    assert tiles[0].is_up() and tiles[1].is_up()
    result = engine.reveal(tiles[2])
    assert result.outcome == RevealOutcome.MATCH
    assert all(t.is_matched() for t in tiles[:3])
    assert list(engine.revealed) == []


def test_reset_clears_revealed():
    tiles = _tiles()
    engine = MatchEngine()
    engine.reveal(tiles[0])
    engine.reset()
    assert list(engine.revealed) == []


@pytest.mark.parametrize("needed", [1, 0, True, "2"])
def test_bad_match_size_raises(needed):
    with pytest.raises(ConstructionError):
        MatchEngine(tiles_needed_for_match=needed)


def test_stale_tiles_leave_the_queue_oldest_first():
    group = KanaGroup("u", "う", "ウ")
    other = KanaGroup("e", "え", "エ")
    tiles = [Tile(0, "u", group), Tile(1, "う", group), Tile(2, "ウ", group), Tile(3, "e", other)]
    engine = MatchEngine(tiles_needed_for_match=3)

    for tile in (tiles[0], tiles[3], tiles[1]):
        engine.reveal(tile)
    assert list(engine.revealed) == [tiles[0], tiles[3], tiles[1]]

    result = engine.reveal(tiles[2])
    assert result.hidden == (tiles[0], tiles[3], tiles[1])
    assert list(engine.revealed) == [tiles[2]]
    assert isinstance(engine.revealed, deque)
