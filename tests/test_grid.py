import pytest

from block_smash.game.grid import GameGrid


def test_dimensions_are_validated():
    with pytest.raises(ValueError):
        GameGrid(0, 20)
    with pytest.raises(ValueError):
        GameGrid.from_rows([1, 2, 3])


def test_place_writes_color_tags():
    grid = GameGrid(4, 3)
    assert grid.place([(2, 0), (2, 1)], 5) == 2
    assert grid.grid[2, 1] == 5
    assert grid.grid[0, 0] == 0
    with pytest.raises(IndexError):
        grid.place([(3, 0)], 1)


def test_height_and_holes():
    grid = GameGrid.from_rows([
        [0, 0, 0],
        [0, 1, 0],
        [0, 0, 1],
        [1, 1, 0],
    ])
    assert grid.get_max_height() == 3
    assert grid.count_holes() == 2


def test_clone_state_is_detached():
    grid = GameGrid.from_rows([[1, 1], [0, 1]])
    state = grid.clone_state()
    state[:] = 0
    assert grid.grid.sum() == 3
