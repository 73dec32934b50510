import pathlib
import random
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from kanamemo.errors import ConstructionError, InvalidStateError
from kanamemo.symbols import KanaGroup, SymbolGroup, SymbolGroupCollection


def test_kana_group_exposes_renderings():
    kana = KanaGroup("a", "あ", "ア")
    assert kana.romaji == "a"
    assert kana.hiragana == "あ"
    assert kana.katakana == "ア"
    assert kana.members == ("a", "あ", "ア")
    assert "あ" in kana


def test_random_pair_is_two_distinct_members():
    kana = KanaGroup("ka", "か", "カ")
    rng = random.Random(3)
    pairs = set()
    for _ in range(100):
        first, second = kana.get_random_pair(rng)
        assert first != second
        assert first in kana and second in kana
        pairs.add(frozenset((first, second)))
    assert len(pairs) == 3
    assert kana.members == ("ka", "か", "カ")


def test_random_pair_needs_two_members():
    with pytest.raises(InvalidStateError):
        SymbolGroup(("a",)).get_random_pair()


def test_groups_compare_by_identity():
    first = KanaGroup("a", "あ", "ア")
    second = KanaGroup("a", "あ", "ア")
    assert first != second
    assert first == first
    assert len({first, second}) == 2


@pytest.mark.parametrize("members", ["abc", (), ("a", 1), None])
def test_malformed_group_raises(members):
    with pytest.raises(ConstructionError):
        SymbolGroup(members)


def test_from_row_checks_arity():
    with pytest.raises(ConstructionError):
        KanaGroup.from_row(["a", "あ"])
    with pytest.raises(ConstructionError):
        KanaGroup.from_row("aあア")


def test_collection_shuffled_keeps_original_order():
    collection = SymbolGroupCollection.from_rows([["a", "あ", "ア"], ["i", "い", "イ"], ["u", "う", "ウ"]], name="test")
    original = list(collection)
    shuffled = collection.shuffled(random.Random(8))
    assert list(collection) == original
    assert len(shuffled) == 3
    assert {id(g) for g in shuffled} == {id(g) for g in original}
    assert shuffled.name == "test"


def test_collection_find_group():
    collection = SymbolGroupCollection.from_rows([["a", "あ", "ア"], ["i", "い", "イ"]])
    assert collection.find_group("イ") is collection[1]
    assert collection.find_group("zz") is None


def test_collection_rejects_non_groups():
    with pytest.raises(ConstructionError):
        SymbolGroupCollection([["a", "あ", "ア"]])
