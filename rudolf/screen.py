import sys

from .cursor import CursorController
from .errors import TerminalWriteError

VERSION = "0.1 beta"

CSI = "\x1b["
HIDE = "\x1b[?25l"
SHOW = "\x1b[?25h"
HOME = "\x1b[H"
CLEAR = "\x1b[2J"
CLEAR_EOL = "\x1b[K"
NEWLINE = "\r\n"


def move_to(x, y): return f"{CSI}{y+1};{x+1}H"


class EditorContents:
    """Per-frame accumulator. Nothing reaches the terminal until flush(), which writes the whole frame once."""
    def __init__(self, out=None):
        self.out = out if out is not None else sys.stdout
        self.content = []

    def __len__(self): return sum(len(s) for s in self.content)

    def getvalue(self): return "".join(self.content)

    def push(self, ch): self.content.append(ch)

    def push_str(self, text): self.content.append(text)

    append = push_str

    def write(self, text):
        self.content.append(text)
        return len(text)

    def flush(self):
        frame = self.getvalue()
        try:
            written = self.out.write(frame)
            self.out.flush()
        except OSError as e:
            raise TerminalWriteError(f"frame write failed: {e}") from e
        # a short write means the frame was not delivered; keep it for the caller
        if written is not None and written != len(frame):
            raise TerminalWriteError(f"short frame write: {written}/{len(frame)}")
        self.content.clear()


class Output:
    """Full-screen renderer: banner, filler rows and cursor placement, flushed as one frame."""
    def __init__(self, size, contents=None, marker="~", welcome="Welcome to Rudolf"):
        self.win_size = size
        self.contents = contents if contents is not None else EditorContents()
        self.cursor_ctrl = CursorController(size)
        self.marker = marker; self.welcome = welcome

    def move_cursor(self, direction): self.cursor_ctrl.move_cursor(direction)

    def move_10x(self, direction): self.cursor_ctrl.move_10x(direction)

    @staticmethod
    def clear_screen(out=None):
        out = out if out is not None else sys.stdout
        try:
            out.write(CLEAR + HOME)
            out.flush()
        except OSError as e:
            raise TerminalWriteError(f"clear screen failed: {e}") from e

    def refresh_screen(self):
        self.contents.push_str(HIDE + move_to(0, 0))
        self.draw_rows()
        x, y = self.cursor_ctrl.position
        self.contents.push_str(move_to(x, y) + SHOW)
        self.contents.flush()

    def draw_rows(self):
        rows = self.win_size.rows
        for i in range(rows):
            if i == rows//4:
                self.draw_message(self.welcome)
            elif i == rows//4 + 1:
                self.draw_message(f"v{VERSION}")
            else:
                self.contents.push(self.marker)
            self.contents.push_str(CLEAR_EOL)
            if i < rows-1:
                self.contents.push_str(NEWLINE)

    def draw_message(self, message):
        cols = self.win_size.columns
        message = message[:cols]
        padding = (cols - len(message))//2
        if padding:
            self.contents.push(self.marker); padding -= 1
        self.contents.push_str(" " * padding)
        self.contents.push_str(message)
