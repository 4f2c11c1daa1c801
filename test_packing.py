#!/usr/bin/env python3
"""
Test the width search and the public packing entry points.
"""

from itertools import combinations

import pytest

from tilepack import InfeasibleWidthError, InvalidInputError, PackingError, TilePacker, TileSpec, pack_tiles
from tilepack.packing import make_tiles

MIXED_SIZES = [(30, 20), (10, 40), (25, 25), (5, 5), (40, 10),
               (15, 15), (20, 30), (8, 12), (12, 8), (33, 7), (18, 22), (6, 35)]


def test_two_tiles_fit_in_one_row():
    result = pack_tiles([(100, 100), (50, 50)], max_width=150, keys=["A", "B"])
    assert (result.width, result.height) == (150, 100)
    assert result.positions == [(0, 0), (100, 0)]
    assert [p.key for p in result.placements] == ["A", "B"]


def test_tile_wider_than_max_width_fails():
    with pytest.raises(InfeasibleWidthError) as excinfo:
        pack_tiles([(200, 50)], max_width=100)
    assert excinfo.value.key == "0"
    assert excinfo.value.tile_width == 200
    assert excinfo.value.max_width == 100
    assert isinstance(excinfo.value, PackingError)


def test_four_squares_make_a_two_by_two_grid():
    result = pack_tiles([(50, 50)] * 4, max_width=100)
    assert (result.width, result.height) == (100, 100)
    assert sorted(result.positions) == [(0, 0), (0, 50), (50, 0), (50, 50)]
    assert len(set(result.positions)) == 4


def test_no_tiles():
    result = pack_tiles([], max_width=64)
    assert (result.width, result.height) == (0, 0)
    assert result.placements == []
    assert result.efficiency == 0.0


def test_narrower_width_wins_on_smaller_area():
    result = pack_tiles([(10, 10)], max_width=20)
    assert (result.width, result.height) == (10, 10)
    assert result.positions == [(0, 0)]


def test_single_tile_exactly_max_width():
    result = pack_tiles([(64, 10), (32, 5)], max_width=64)
    assert result.width == 64
    assert result.trials == 1


def test_positions_follow_input_order():
    result = pack_tiles([(5, 5), (50, 50), (20, 20)], max_width=80, keys=["small", "big", "mid"])
    assert [p.key for p in result.placements] == ["small", "big", "mid"]
    assert [p.index for p in result.placements] == [0, 1, 2]
    assert result.placements[1].x == 0 and result.placements[1].y == 0


@pytest.mark.parametrize("max_width", [40, 55, 80, 150])
def test_layout_properties(max_width):
    result = pack_tiles(MIXED_SIZES, max_width=max_width)

    assert max(w for w, _ in MIXED_SIZES) <= result.width <= max_width
    for a, b in combinations(result.placements, 2):
        assert not a.rect.intersects(b.rect)
    for p in result.placements:
        assert 0 <= p.x and p.rect.right <= result.width
        assert 0 <= p.y and p.rect.bottom <= result.height
    assert result.height == max(p.rect.bottom for p in result.placements)
    assert [(p.width, p.height) for p in result.placements] == MIXED_SIZES


def test_best_trial_has_smallest_area_then_perimeter():
    result = pack_tiles(MIXED_SIZES, max_width=90)
    assert result.trials == 90 - 40 + 1
    assert len(result.trial_log) == result.trials
    best = (result.area, result.width + result.height)
    for trial in result.trial_log:
        assert (trial.area, trial.perimeter) >= best


def test_packing_is_deterministic():
    first = pack_tiles(MIXED_SIZES, max_width=70)
    second = pack_tiles(MIXED_SIZES, max_width=70)
    assert first.positions == second.positions
    assert (first.width, first.height) == (second.width, second.height)


def test_parallel_search_matches_serial():
    serial = pack_tiles(MIXED_SIZES, max_width=100)
    parallel = pack_tiles(MIXED_SIZES, max_width=100, workers=2)
    assert parallel.positions == serial.positions
    assert (parallel.width, parallel.height) == (serial.width, serial.height)


def test_efficiency():
    result = pack_tiles([(50, 50)] * 4, max_width=100)
    assert result.tile_area == 10000
    assert result.efficiency == pytest.approx(1.0)


@pytest.mark.parametrize("sizes, field", [
    ([(0, 10)], "width"),
    ([(10, -1)], "height"),
    ([(10.5, 10)], "width"),
    ([(True, 10)], "width"),
])
def test_invalid_tile_dimensions(sizes, field):
    with pytest.raises(InvalidInputError) as excinfo:
        pack_tiles(sizes, max_width=100, keys=["bad"])
    assert excinfo.value.key == "bad"
    assert excinfo.value.field == field
    assert "bad" in str(excinfo.value)


@pytest.mark.parametrize("max_width", [0, -5, 12.0])
def test_invalid_max_width(max_width):
    with pytest.raises(InvalidInputError) as excinfo:
        pack_tiles([(10, 10)], max_width=max_width)
    assert excinfo.value.field == "max_width"


def test_invalid_input_checked_before_feasibility():
    with pytest.raises(InvalidInputError):
        TilePacker(10).pack([TileSpec("wide", 50, 5, 0), TileSpec("flat", 5, 0, 1)])


def test_keys_must_match_sizes():
    with pytest.raises(InvalidInputError):
        make_tiles([(1, 1), (2, 2)], keys=["only-one"])
