"""Tests for the Board module."""

import numpy as np
import pytest

from grid_snake.board import Board
from grid_snake.snake import Position


class TestBoardInit:
    def test_default_dimensions(self):
        board = Board()
        assert board.width == 25
        assert board.height == 25

    def test_center(self):
        assert Board().center == (12, 12)
        assert Board(width=10, height=7).center == (5, 3)

    def test_minimum_size_enforced(self):
        with pytest.raises(ValueError, match="at least 2"):
            Board(width=1, height=4)
        with pytest.raises(ValueError, match="at least 2"):
            Board(width=4, height=1)


class TestBoardOperations:
    def test_in_bounds(self):
        board = Board(width=5, height=4)
        assert board.in_bounds(Position(0, 0))
        assert board.in_bounds(Position(4, 3))
        assert not board.in_bounds(Position(-1, 0))
        assert not board.in_bounds(Position(0, -1))
        assert not board.in_bounds(Position(5, 0))
        assert not board.in_bounds(Position(0, 4))

    def test_random_cell_in_bounds(self):
        board = Board(width=3, height=2)
        rng = np.random.default_rng(0)
        cells = {board.random_cell(rng) for _ in range(200)}
        assert all(board.in_bounds(c) for c in cells)
        assert len(cells) == 6

    def test_random_cell_types(self):
        cell = Board().random_cell(np.random.default_rng(1))
        assert type(cell.x) is int
        assert type(cell.y) is int
