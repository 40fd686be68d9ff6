import numpy as np
import pytest

from block_smash.game.grid import GameGrid
from block_smash.game.rules import ScoringRules, complete_rows, evaluate, group_rows, smash


FULL = [1, 1, 1]
GAP = [0, 1, 0]


def board_from(layout):
    return np.array(layout, dtype=np.int8)


def test_reference_fixture_groups_and_points():
    grid = board_from([
        FULL,  # 0
        GAP,
        FULL,  # 2
        GAP,
        FULL,  # 4
        FULL,
        FULL,
        GAP,
        FULL,  # 8
        FULL,
        FULL,
        FULL,
        FULL,  # 12
        FULL,
    ])
    result = evaluate(grid)
    names = [event.name for event in result.events]
    assert names == ["single", "single", "triple", "tetris", "double"]
    assert result.events[1].rows[0] == 2
    assert result.events[3].rows == (8, 9, 10, 11)
    assert result.events[4].rows == (12, 13)
    assert result.points == 40 + 40 + 300 + 1200 + 100


def test_four_group_layout():
    rows = {0, 2, 3, 4, 8, 9, 10, 11, 13}
    grid = board_from([FULL if i in rows else GAP for i in range(14)])
    result = evaluate(grid)
    assert [(e.name, e.points) for e in result.events] == [
        ("single", 40), ("triple", 300), ("tetris", 1200), ("single", 40),
    ]
    assert result.points == 1580


def test_group_rows_caps_runs():
    assert group_rows([3, 4, 5, 6, 7, 8]) == [[3, 4, 5, 6], [7, 8]]
    assert group_rows([1, 3, 5]) == [[1], [3], [5]]
    assert group_rows([]) == []


def test_no_complete_rows_is_a_no_op():
    grid = board_from([GAP, GAP, [1, 1, 0]])
    before = grid.copy()
    result = evaluate(grid)
    assert not result
    assert result.events == []
    assert result.points == 0
    assert smash(grid, result) is grid
    assert np.array_equal(grid, before)


def test_complete_rows_ignores_partial_rows():
    grid = board_from([GAP, FULL, [1, 1, 0], FULL])
    assert complete_rows(grid) == [1, 3]


def test_smash_shifts_survivors_down():
    grid = board_from([
        [2, 0, 0],
        FULL,
        [0, 3, 0],
        FULL,
        [0, 0, 4],
    ])
    out = smash(grid, evaluate(grid))
    assert out.shape == grid.shape
    assert np.array_equal(out, board_from([
        [0, 0, 0],
        [0, 0, 0],
        [2, 0, 0],
        [0, 3, 0],
        [0, 0, 4],
    ]))


def test_game_grid_smash_in_place():
    grid = GameGrid.from_rows([GAP, FULL, FULL])
    result = evaluate(grid.grid)
    grid.smash(result)
    assert grid.grid.shape == (3, 3)
    assert grid.grid.tolist() == [[0, 0, 0], [0, 0, 0], GAP]


def test_scoring_rules_lookup():
    rules = ScoringRules()
    assert [rules.score_for_lines(n) for n in range(5)] == [0, 40, 100, 300, 1200]
    assert rules.tier_for_lines(4) == "tetris"
    with pytest.raises(ValueError):
        ScoringRules(line_clear_scores=(1, 2, 3))
