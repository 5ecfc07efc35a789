import os, sys, select, time
from dataclasses import dataclass, field

from .cursor import ViewportSize
from .errors import ConfigurationError, TerminalModeError, TerminalReadError

ARROWS = {'A':'up','B':'down','C':'right','D':'left'}
WIN_ARROWS = {'H':'up','P':'down','K':'left','M':'right'}
# xterm modifier parameter is 1 + bitmask
MOD_BITS = ((1,'shift'), (2,'alt'), (4,'ctrl'), (8,'meta'))
KNOWN_MOD_MASK = 15
NAMED = {'\r':'enter', '\n':'enter', '\t':'tab', '\x7f':'backspace'}


@dataclass(frozen=True)
class KeyEvent:
    code: str
    modifiers: frozenset = frozenset()
    kind: str = "press"
    state: frozenset = field(default_factory=frozenset)


def _modifiers(param):
    try: mask = int(param) - 1
    except ValueError: return None
    if mask < 0 or mask & ~KNOWN_MOD_MASK: return None
    return frozenset(name for bit, name in MOD_BITS if mask & bit)


def decode_key(seq):
    """Map one raw terminal sequence to a KeyEvent."""
    if seq == '\x1b':
        return KeyEvent('esc')
    if seq.startswith('\x1b'):
        body = seq[1:]
        if len(body) == 2 and body[0] in '[O' and body[1] in ARROWS:
            return KeyEvent(ARROWS[body[1]])
        if body.startswith('[1;') and body[-1:] in ARROWS:
            mods = _modifiers(body[3:-1])
            if mods is not None:
                return KeyEvent(ARROWS[body[-1]], mods)
        return KeyEvent(seq)
    if seq in NAMED:
        return KeyEvent(NAMED[seq])
    if len(seq) == 1 and 1 <= ord(seq) <= 26:
        return KeyEvent(chr(ord(seq) + 96), frozenset({'ctrl'}))
    return KeyEvent(seq)


def _utf8_length(lead):
    if lead >= 0xf0: return 4
    if lead >= 0xe0: return 3
    if lead >= 0xc0: return 2
    return 1


def terminal_size(stream=None):
    """Viewport size, read once at startup."""
    stream = stream if stream is not None else sys.stdout
    try:
        cols, rows = os.get_terminal_size(stream.fileno())
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"could not determine terminal size: {e}") from e
    if cols <= 0 or rows <= 0:
        raise ConfigurationError(f"unusable terminal size {cols}x{rows}")
    return ViewportSize(cols, rows)


class KeyPoller:
    """Raw-mode key reader. Raw mode is held for the life of the with-block and always restored."""
    def __init__(self, stream=None):
        self.stream = stream if stream is not None else sys.stdin
        self.is_windows = os.name == 'nt'
        self.fd = None
        self.old = None
        if self.is_windows:
            import msvcrt
            self.msvcrt = msvcrt
        else:
            import termios, tty
            self.termios = termios
            self.tty = tty

    def __enter__(self):
        if not self.is_windows:
            try:
                self.fd = self.stream.fileno()
                self.old = self.termios.tcgetattr(self.fd)
                self.tty.setraw(self.fd)
            except (self.termios.error, OSError, ValueError) as e:
                raise TerminalModeError(f"could not enter raw mode: {e}") from e
        return self

    def __exit__(self, t, v, tb):
        if not self.is_windows and self.old is not None:
            old, self.old = self.old, None
            try:
                self.termios.tcsetattr(self.fd, self.termios.TCSADRAIN, old)
            except (self.termios.error, OSError) as e:
                raise TerminalModeError(f"could not restore terminal mode: {e}") from e

    def poll(self, timeout=0.5):
        """Next key press, or None if nothing arrived within timeout seconds."""
        try:
            if self.is_windows:
                return self._poll_windows(timeout)
            return self._poll_posix(timeout)
        except OSError as e:
            raise TerminalReadError(f"key read failed: {e}") from e

    def _ready(self, timeout):
        return bool(select.select([self.fd], [], [], timeout)[0])

    def _poll_posix(self, timeout):
        if not self._ready(timeout): return None
        raw = os.read(self.fd, 1)
        if not raw:
            raise TerminalReadError("input stream closed")
        if raw == b'\x1b':
            raw += self._drain_escape()
        else:
            need = _utf8_length(raw[0]) - 1
            if need: raw += os.read(self.fd, need)
        return decode_key(raw.decode('utf-8', errors='replace'))

    def _drain_escape(self):
        rest = b''
        while self._ready(0.01):
            rest += os.read(self.fd, 1)
            if len(rest) == 1 and rest not in (b'[', b'O'):
                break
            if len(rest) > 1 and 0x40 <= rest[-1] <= 0x7e:
                break
        return rest

    def _poll_windows(self, timeout):
        deadline = time.monotonic() + timeout
        while not self.msvcrt.kbhit():
            if time.monotonic() >= deadline: return None
            time.sleep(0.01)
        ch = self.msvcrt.getwch()
        if ch in ('\x00','\xe0'):
            k = self.msvcrt.getwch()
            return KeyEvent(WIN_ARROWS.get(k, ch + k))
        return decode_key(ch)
