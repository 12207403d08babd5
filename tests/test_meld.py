import pathlib
import sys
from itertools import combinations

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from rummikub.meld import Meld, MeldKind, can_extend, classify, is_run, is_set, is_valid_group
from rummikub.rules import Ruleset
from rummikub.tiles import Color, Tile, parse_tiles

J = Tile.joker()


def tiles(text):
    return parse_tiles(text)


@pytest.mark.parametrize(
    "group",
    [
        "R7, U7, K7",
        "R7, U7, K7, Y7",
        "J, R7, U7",
        "J, R7, U7, K7",
        "J, J, R7, U7",
    ],
)
def test_valid_sets(group):
    assert is_set(tiles(group))
    assert not is_run(tiles(group))


@pytest.mark.parametrize(
    "group",
    [
        "R7, U7",
        "R7, R7, U7",
        "R7, U7, K8",
        "J, R7, U7, K7, Y7",
        "J, J, R7",
        "J, J, J",
    ],
)
def test_invalid_sets(group):
    assert not is_set(tiles(group))


@pytest.mark.parametrize(
    "group",
    [
        "R3, R4, R5",
        "R5, R3, R4, R6",
        "J, R5, R6",
        "R5, J, R7",
        "R12, R13, J",
        "K6, J, J, K9",
        "J, J, U1, U2",
        "K1, K2, K3, K4, K5, K6, K7, K8, K9, K10, K11, K12, K13",
    ],
)
def test_valid_runs(group):
    assert is_run(tiles(group))
    assert not is_set(tiles(group))


@pytest.mark.parametrize(
    "group",
    [
        "R3, R4",
        "R3, R5, R6",
        "R3, R4, U5",
        "R3, R3, R4",
        "J, R3, R6",
        "J, J, R7",
        "J, J, J",
        "K6, J, J, K10",
    ],
)
def test_invalid_runs(group):
    assert not is_run(tiles(group))


def test_run_cannot_outgrow_rank_range():
    group = tiles("K1, K2, K3, K4, K5, K6, K7, K8, K9, K10, K11, K12, K13") + [J]
    assert not is_run(group)


def test_all_joker_group_is_rejected():
    assert not is_valid_group([J, J, J])
    assert classify([J, J, J]) is None


def test_single_real_tile_anchor_is_configurable():
    loose = Ruleset(min_real_tiles=1)
    assert is_set([J, J, Tile(Color.RED, 7)], loose)
    assert is_run([J, J, Tile(Color.RED, 7)], loose)
    assert not is_valid_group([J, J, Tile(Color.RED, 7)])


def test_can_extend():
    run = tiles("R5, R6, R7")
    assert can_extend(Tile(Color.RED, 8), run)
    assert can_extend(Tile(Color.RED, 4), run)
    assert can_extend(J, run)
    assert not can_extend(Tile(Color.RED, 9), run)
    assert not can_extend(Tile(Color.BLUE, 8), run)

    full_set = tiles("R5, U5, K5")
    assert can_extend(Tile(Color.YELLOW, 5), full_set)
    assert not can_extend(Tile(Color.RED, 5), full_set)
    assert not can_extend(J, full_set + [Tile(Color.YELLOW, 5)])


def test_no_group_is_both_a_set_and_a_run():
    pool = [Tile(color, rank) for color in Color if color != Color.JOKER for rank in range(1, 5)]
    pool.append(J)
    for size in (3, 4):
        for group in combinations(pool, size):
            assert not (is_set(group) and is_run(group)), group


def test_meld_from_tiles_classifies_kind():
    assert Meld.from_tiles(tiles("R1, R2, R3")).kind == MeldKind.RUN
    assert Meld.from_tiles(tiles("R1, U1, J")).kind == MeldKind.SET
    with pytest.raises(ValueError):
        Meld.from_tiles(tiles("R1, U2, K3"))


def test_meld_is_valid_reports_reason():
    ok, reason = Meld.from_effective_run(Color.BLUE, 4, 3).is_valid()
    assert ok, reason

    mislabelled = Meld(MeldKind.SET, tuple(tiles("R1, R2, R3")))
    ok, reason = mislabelled.is_valid()
    assert not ok
    assert "RUN" in reason

    short = Meld(MeldKind.RUN, tuple(tiles("R1, R2")))
    assert short.is_valid() == (False, "meld too short")


def test_meld_points_count_jokers_by_ruleset():
    meld = Meld.from_tiles(tiles("J, R5, R6"))
    assert meld.points() == 11
    assert meld.points(Ruleset(joker_score=30)) == 41
    assert Meld.from_effective_set(9, [Color.RED, Color.BLUE, Color.YELLOW]).points() == 27
