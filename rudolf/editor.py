import signal, sys, threading
from dataclasses import dataclass
from enum import Enum

from .config import AppConfig
from .cursor import Direction
from .errors import TerminalIOError, TerminalWriteError
from .input import KeyPoller, terminal_size
from .logging_setup import get_logger
from .screen import EditorContents, Output

log = get_logger("editor")


class EditorState(str, Enum):
    RUNNING = "Running"
    TERMINATED = "Terminated"


class IntentKind(str, Enum):
    QUIT = "quit"
    MOVE = "move"
    UNRECOGNIZED = "unrecognized"


class Magnitude(str, Enum):
    UNIT = "unit"
    ACCELERATED = "accelerated"


@dataclass(frozen=True)
class Intent:
    kind: IntentKind
    direction: Direction | None = None
    magnitude: Magnitude | None = None


QUIT = Intent(IntentKind.QUIT)
UNRECOGNIZED = Intent(IntentKind.UNRECOGNIZED)
ARROW_CODES = {d.value for d in Direction}
NO_MODS = frozenset()
SHIFT = frozenset({'shift'})
CTRL = frozenset({'ctrl'})


def classify(event):
    """Key press -> Intent. Only plain presses with no extra state are considered."""
    if event.kind != "press" or event.state:
        return UNRECOGNIZED
    if event.code == 'q' and event.modifiers == CTRL:
        return QUIT
    if event.code in ARROW_CODES:
        if event.modifiers == NO_MODS:
            return Intent(IntentKind.MOVE, Direction(event.code), Magnitude.UNIT)
        if event.modifiers == SHIFT:
            return Intent(IntentKind.MOVE, Direction(event.code), Magnitude.ACCELERATED)
    return UNRECOGNIZED


class Editor:
    """Render-then-read loop. Each iteration draws one frame and handles at most one key."""
    def __init__(self, reader, output, poll_interval=0.5):
        self.reader=reader; self.output=output
        self.poll_interval=poll_interval
        self.state=EditorState.RUNNING
        self.stop_requested=False
        self.frames=0

    @property
    def running(self): return self.state is EditorState.RUNNING

    def request_stop(self, *_):
        self.stop_requested=True

    def read_key(self):
        # timeouts re-poll without touching state; a pending stop request ends the wait
        while True:
            event=self.reader.poll(self.poll_interval)
            if event is not None: return event
            if self.stop_requested: return None

    def terminate(self, reason):
        self.state=EditorState.TERMINATED
        log.info("editor terminated", extra={"event": "terminated", "reason": reason})

    def process_keypress(self):
        event=self.read_key()
        if event is None:
            self.terminate("signal"); return False
        intent=classify(event)
        if intent.kind is IntentKind.QUIT:
            self.terminate("quit"); return False
        if intent.kind is IntentKind.MOVE:
            if intent.magnitude is Magnitude.ACCELERATED:
                self.output.move_10x(intent.direction)
            else:
                self.output.move_cursor(intent.direction)
            log.debug("move %s %s -> %s", intent.direction.value, intent.magnitude.value,
                      self.output.cursor_ctrl.position)
        return True

    def run_once(self):
        self.output.refresh_screen(); self.frames+=1
        return self.process_keypress()

    def run(self):
        try:
            while self.running and self.run_once():
                pass
        except TerminalIOError:
            self.state=EditorState.TERMINATED
            raise


def _install_signal_handlers(editor):
    if threading.current_thread() is not threading.main_thread():
        return {}
    previous={}
    for name in ('SIGTERM', 'SIGHUP'):
        signum=getattr(signal, name, None)
        if signum is not None:
            previous[signum]=signal.signal(signum, editor.request_stop)
    return previous


def _restore_signal_handlers(previous):
    for signum, handler in previous.items():
        signal.signal(signum, handler)


def run_editor(cfg=None, reader=None, out=None, size=None):
    """Process wiring: size (fatal before raw mode), raw mode scope, loop, teardown."""
    cfg = cfg or AppConfig()
    out = out if out is not None else sys.stdout
    size = size or terminal_size(out)
    log.info("starting editor %dx%d", size.columns, size.rows, extra={"event": "start"})
    output = Output(size, EditorContents(out), marker=cfg.display.marker, welcome=cfg.display.welcome)
    with (reader if reader is not None else KeyPoller()) as kp:
        editor = Editor(kp, output, poll_interval=cfg.input.poll_ms / 1000)
        previous = _install_signal_handlers(editor)
        try:
            editor.run()
        except BaseException:
            _restore_signal_handlers(previous)
            try:
                Output.clear_screen(out)
            except TerminalWriteError:
                log.warning("clear screen failed during teardown", exc_info=True, extra={"event": "teardown_error"})
            raise
        _restore_signal_handlers(previous)
        Output.clear_screen(out)
    return editor
