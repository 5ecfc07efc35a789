from dataclasses import dataclass
from enum import Enum

from .errors import ConfigurationError


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class ViewportSize:
    columns: int
    rows: int

    def __post_init__(self):
        if self.columns <= 0 or self.rows <= 0:
            raise ConfigurationError(f"unusable viewport size {self.columns}x{self.rows}")


def clamp(x,a,b): return a if x<a else b if x>b else x


class CursorController:
    """Cursor position bounded to the viewport. Moves one axis per call, never wraps."""
    def __init__(self, size):
        self.cursor_x=0; self.cursor_y=0
        self.cols=size.columns; self.rows=size.rows

    @property
    def position(self): return (self.cursor_x, self.cursor_y)

    def move_cursor(self, direction):
        self._step(direction, 1, 1)

    def move_10x(self, direction):
        # step is a tenth of the axis; small viewports give 0 and the move is a no-op
        self._step(direction, self.cols//10, self.rows//10)

    def _step(self, direction, horizontal, vertical):
        direction=Direction(direction)
        if direction is Direction.UP:
            self.cursor_y=max(0, self.cursor_y-vertical)
        elif direction is Direction.LEFT:
            self.cursor_x=max(0, self.cursor_x-horizontal)
        elif direction is Direction.DOWN:
            if self.cursor_y != self.rows-1:
                self.cursor_y=clamp(self.cursor_y+vertical, 0, self.rows-1)
        elif direction is Direction.RIGHT:
            if self.cursor_x != self.cols-1:
                self.cursor_x=clamp(self.cursor_x+horizontal, 0, self.cols-1)
