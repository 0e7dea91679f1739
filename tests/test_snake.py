"""Tests for the Snake module."""

from grid_snake.snake import Direction, Position, Snake


class TestDirection:
    def test_opposites(self):
        assert Direction.UP.opposite is Direction.DOWN
        assert Direction.DOWN.opposite is Direction.UP
        assert Direction.LEFT.opposite is Direction.RIGHT
        assert Direction.RIGHT.opposite is Direction.LEFT

    def test_position_moved(self):
        p = Position(3, 3)
        assert p.moved(Direction.UP) == (3, 2)
        assert p.moved(Direction.DOWN) == (3, 4)
        assert p.moved(Direction.LEFT) == (2, 3)
        assert p.moved(Direction.RIGHT) == (4, 3)
        assert p == (3, 3)


class TestSnakeInit:
    def test_default_creation(self):
        snake = Snake(Position(5, 5))
        assert list(snake.body) == [(5, 5)]
        assert snake.head == (5, 5)
        assert len(snake) == 1
        assert snake.direction == Direction.DOWN


class TestSnakeMovement:
    def test_next_head(self):
        snake = Snake(Position(5, 5), Direction.RIGHT)
        assert snake.next_head() == (6, 5)

    def test_advance_without_growth(self):
        snake = Snake(Position(5, 5), Direction.RIGHT)
        snake.advance()
        assert list(snake.body) == [(6, 5)]

    def test_advance_with_growth(self):
        snake = Snake(Position(5, 5), Direction.RIGHT)
        snake.advance(grow=True)
        snake.advance(grow=True)
        assert list(snake.body) == [(7, 5), (6, 5), (5, 5)]
        snake.direction = Direction.DOWN
        snake.advance()
        assert list(snake.body) == [(7, 6), (7, 5), (6, 5)]

    def test_is_reversal(self):
        snake = Snake(Position(5, 5), Direction.LEFT)
        assert snake.is_reversal(Direction.RIGHT)
        assert not snake.is_reversal(Direction.UP)
        assert not snake.is_reversal(Direction.LEFT)


class TestSnakeBody:
    def test_body_contains_excludes_head(self):
        snake = Snake(Position(5, 5), Direction.RIGHT)
        snake.advance(grow=True)
        snake.advance(grow=True)
        assert not snake.body_contains(Position(7, 5))
        assert snake.body_contains(Position(6, 5))
        assert snake.body_contains(Position(5, 5))

    def test_body_contains_overlapping_head(self):
        snake = Snake(Position(5, 5))
        snake.body.appendleft(Position(5, 5))
        assert snake.body_contains(Position(5, 5))
