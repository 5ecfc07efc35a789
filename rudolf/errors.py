"""Error types raised by the editor core and its terminal collaborators."""


class RudolfError(Exception):
    pass


class TerminalIOError(RudolfError, OSError):
    """Terminal read, write or mode change failed."""


class TerminalWriteError(TerminalIOError):
    pass


class TerminalReadError(TerminalIOError):
    pass


class TerminalModeError(TerminalIOError):
    pass


class ConfigurationError(RudolfError):
    """Startup configuration (viewport size) could not be obtained."""
