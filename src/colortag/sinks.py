"""
Output sinks.

A sink is any callable taking (severity, line, context). The facility hands
it the fully rendered line and never looks at where it lands. The context is
an opaque reference the host may use for click-to-source navigation or
selection; the built-in sinks only pass it along.

Two sinks ship with the package:

    StreamSink    write to a file handle (stderr by default), colored
                  through a rich Console
    LoggingSink   forward to a standard-library logging.Logger
"""

import enum
import logging
import sys
from typing import Any, Optional, Protocol, TextIO

from rich.console import Console
from rich.text import Text

from .markup import MODES, strip_markup, to_text


class Severity(enum.Enum):
    """The three severities a line can carry."""
    INFO = 'info'
    WARNING = 'warning'
    ERROR = 'error'


class Sink(Protocol):
    def __call__(self, severity: Severity, line: str, context: Any) -> None:
        ...


class StreamSink:
    """Write lines to a text stream.

    Args:
        file: Output handle (default: sys.stderr, looked up at write time so
            pytest capture and redirection work)
        color: 'ansi' for terminal colors via rich, 'plain' to strip markup,
            'markup' to write the raw tags
    """

    def __init__(self, file: Optional[TextIO] = None, color: str = 'ansi'):
        if color not in MODES:
            raise ValueError(f"unknown color mode {color!r}, expected one of {MODES}")
        self._file = file
        self.color = color
        self._console: Optional[Console] = None

    @property
    def file(self) -> TextIO:
        return self._file if self._file is not None else sys.stderr

    @property
    def console(self) -> Console:
        """rich Console bound to the current output handle."""
        file = self.file
        if self._console is None or self._console.file is not file:
            self._console = Console(file=file, force_terminal=True,
                                    color_system='truecolor', soft_wrap=True,
                                    highlight=False)
        return self._console

    def __call__(self, severity: Severity, line: str, context: Any = None) -> None:
        label = _SEVERITY_LABELS.get(severity, '')
        if self.color == 'ansi':
            self.console.print(Text(label) + to_text(line))
            return
        text = strip_markup(line) if self.color == 'plain' else line
        print(label + text, file=self.file)


_SEVERITY_LABELS = {
    Severity.WARNING: 'WARNING: ',
    Severity.ERROR: 'ERROR: ',
}

_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


class LoggingSink:
    """Forward lines to a logging.Logger.

    Markup is stripped unless keep_markup is set. The context reference is
    attached to the record as record.context.
    """

    def __init__(self, logger: Optional[logging.Logger] = None,
                 keep_markup: bool = False):
        self.logger = logger if logger is not None else logging.getLogger('colortag')
        self.keep_markup = keep_markup

    def __call__(self, severity: Severity, line: str, context: Any = None) -> None:
        text = line if self.keep_markup else strip_markup(line)
        self.logger.log(_LEVELS[severity], text, extra={'context': context})
