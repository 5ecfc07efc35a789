import unittest

from hypothesis import given, strategies as st

from rudolf.cursor import CursorController, Direction, ViewportSize
from rudolf.errors import ConfigurationError


directions = st.sampled_from(list(Direction))


class CursorUnitMoveTests(unittest.TestCase):
    @given(
        st.integers(min_value=1, max_value=300),
        st.integers(min_value=1, max_value=120),
        st.lists(st.tuples(directions, st.booleans()), max_size=200),
    )
    def test_position_always_inside_viewport(self, cols, rows, moves):
        ctrl = CursorController(ViewportSize(cols, rows))
        for direction, accelerated in moves:
            if accelerated:
                ctrl.move_10x(direction)
            else:
                ctrl.move_cursor(direction)
            self.assertTrue(0 <= ctrl.cursor_x < cols)
            self.assertTrue(0 <= ctrl.cursor_y < rows)

    def test_up_saturates_at_zero(self):
        ctrl = CursorController(ViewportSize(80, 24))
        ctrl.cursor_y = 5
        for _ in range(20):
            ctrl.move_cursor(Direction.UP)
        self.assertEqual(ctrl.cursor_y, 0)
        ctrl.move_cursor(Direction.LEFT)
        self.assertEqual(ctrl.position, (0, 0))

    def test_right_stops_at_last_column(self):
        ctrl = CursorController(ViewportSize(10, 4))
        for _ in range(25):
            ctrl.move_cursor(Direction.RIGHT)
        self.assertEqual(ctrl.cursor_x, 9)

    def test_down_stops_at_last_row(self):
        ctrl = CursorController(ViewportSize(10, 4))
        for _ in range(25):
            ctrl.move_cursor(Direction.DOWN)
        self.assertEqual(ctrl.cursor_y, 3)

    def test_empty_viewport_rejected(self):
        for cols, rows in ((10, 0), (0, 10), (-1, 5)):
            with self.subTest(cols=cols, rows=rows):
                with self.assertRaises(ConfigurationError):
                    CursorController(ViewportSize(cols, rows))

    def test_accepts_direction_values(self):
        ctrl = CursorController(ViewportSize(10, 4))
        ctrl.move_cursor("down")
        self.assertEqual(ctrl.position, (0, 1))


class CursorAcceleratedMoveTests(unittest.TestCase):
    def test_small_viewport_is_noop(self):
        ctrl = CursorController(ViewportSize(9, 9))
        ctrl.cursor_x, ctrl.cursor_y = 4, 4
        for direction in Direction:
            ctrl.move_10x(direction)
        self.assertEqual(ctrl.position, (4, 4))

    def test_steps_by_tenth_of_axis(self):
        ctrl = CursorController(ViewportSize(80, 24))
        ctrl.move_10x(Direction.RIGHT)
        ctrl.move_10x(Direction.DOWN)
        self.assertEqual(ctrl.position, (8, 2))
        ctrl.move_10x(Direction.LEFT)
        ctrl.move_10x(Direction.UP)
        self.assertEqual(ctrl.position, (0, 0))

    def test_decrement_saturates(self):
        ctrl = CursorController(ViewportSize(80, 24))
        ctrl.cursor_x, ctrl.cursor_y = 3, 1
        ctrl.move_10x(Direction.LEFT)
        ctrl.move_10x(Direction.UP)
        self.assertEqual(ctrl.position, (0, 0))

    def test_increment_clamps_to_last_index(self):
        ctrl = CursorController(ViewportSize(80, 24))
        ctrl.cursor_y = 22
        ctrl.move_10x(Direction.DOWN)
        self.assertEqual(ctrl.cursor_y, 23)
        ctrl.move_10x(Direction.DOWN)
        self.assertEqual(ctrl.cursor_y, 23)
        ctrl.cursor_x = 75
        ctrl.move_10x(Direction.RIGHT)
        self.assertEqual(ctrl.cursor_x, 79)


if __name__ == "__main__":
    unittest.main()
