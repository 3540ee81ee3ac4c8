"""
TagLogger — the public logging operations.

    from colortag import log, log_warning, log_error, describe_subscribers

    log(self, "layout rebuilt")                 # tag = this widget
    log(Box[int], "pooled", context=widget)     # tag = a type
    log_if(verbose, "net", "packet dropped")    # only when verbose
    log_error(self, "mesh missing")             # always shown

Each call renders f<frame>:<color=#..><b>[label]</b></color> in front of
the message and hands the line to the sink with its severity.

The enable switch decides, once, which class is built: TagLogger does the
work, DisabledTagLogger has empty bodies for everything except
log_error, which falls back to a plain "<tag>: <message>" line.
"""

import sys
from typing import Any, Optional

from . import gate
from .config import resolve_settings
from .markup import MODES
from .multicast import format_report, inspect_slot
from .render import TagRenderer, is_named, safe_str
from .sinks import Severity, Sink, StreamSink


def _default_context(tag: Any, context: Any) -> Any:
    """Explicit context wins; otherwise a named tag is its own context."""
    if context is not None:
        return context
    return tag if is_named(tag) else None


class TagLogger:
    """Active logger: renders tags and forwards every line to the sink.

    Args:
        sink: Callable (severity, line, context) (default: StreamSink())
        renderer: TagRenderer (default: one bound to the process-wide caches)
    """

    def __init__(self, sink: Optional[Sink] = None,
                 renderer: Optional[TagRenderer] = None):
        self.sink = sink if sink is not None else StreamSink()
        self.renderer = renderer if renderer is not None else TagRenderer()

    @property
    def enabled(self) -> bool:
        return True

    def _emit(self, severity: Severity, tag: Any, message: Any, context: Any) -> None:
        line = self.renderer.render(tag) + safe_str(message)
        self.sink(severity, line, _default_context(tag, context))

    def log_if(self, enabled: bool, tag: Any, message: Any, context: Any = None) -> None:
        """Log at info severity only when enabled is true."""
        if not enabled:
            return
        self._emit(Severity.INFO, tag, message, context)

    def log(self, tag: Any, message: Any, context: Any = None) -> None:
        """Log at info severity."""
        self._emit(Severity.INFO, tag, message, context)

    def log_warning(self, tag: Any, message: Any, context: Any = None) -> None:
        """Log at warning severity."""
        self._emit(Severity.WARNING, tag, message, context)

    def log_error(self, tag: Any, message: Any, context: Any = None) -> None:
        """Log at error severity."""
        self._emit(Severity.ERROR, tag, message, context)

    def describe_subscribers(self, owner_type: type, member_name: str,
                             instance: Any = None, note: Optional[str] = None) -> None:
        """Log one line listing every subscriber of a callback slot.

        The slot is read from instance, or from owner_type when instance is
        None. Subscribers are listed in invocation order.
        """
        prefix = self.renderer.render(instance if instance is not None else owner_type)
        subscribers = inspect_slot(owner_type, member_name, instance)
        report = format_report(owner_type, member_name, subscribers, note)
        self.sink(Severity.INFO, prefix + report, None)

    def __repr__(self):
        return f"{type(self).__name__}(sink={self.sink!r})"


class DisabledTagLogger(TagLogger):
    """Logger for a disabled build: everything but errors is a no-op."""

    @property
    def enabled(self) -> bool:
        return False

    def log_if(self, enabled, tag, message, context=None):
        pass

    def log(self, tag, message, context=None):
        pass

    def log_warning(self, tag, message, context=None):
        pass

    def describe_subscribers(self, owner_type, member_name, instance=None, note=None):
        pass

    def log_error(self, tag: Any, message: Any, context: Any = None) -> None:
        """Always shown; skips tag rendering."""
        line = f"{safe_str(tag)}: {safe_str(message)}"
        self.sink(Severity.ERROR, line, _default_context(tag, context))


def create_logger(enabled: Optional[bool] = None, sink: Optional[Sink] = None,
                  renderer: Optional[TagRenderer] = None) -> TagLogger:
    """Build the logger matching the enable switch.

    Args:
        enabled: Switch value; None resolves it from environment and
            config files
        sink: Output sink (default: StreamSink to stderr)
        renderer: Tag renderer (default: process-wide caches and counter)
    """
    if enabled is None:
        enabled = gate.resolve_enabled()
    cls = TagLogger if enabled else DisabledTagLogger
    return cls(sink=sink, renderer=renderer)


# =============================================================================
# Module-level singleton
# =============================================================================

_logger: Optional[TagLogger] = None


def init_logging(enabled: Optional[bool] = None, sink: Optional[Sink] = None,
                 color: Optional[str] = None, start_dir=None) -> TagLogger:
    """Initialize the module-level logger singleton.

    Call once at program startup. Values not given explicitly come from the
    environment and config files (see colortag.config).

    Args:
        enabled: Turn tagged logging on or off
        sink: Custom sink; when given, color and stream settings are unused
        color: 'ansi', 'plain' or 'markup' for the default StreamSink
        start_dir: Directory to start the .colortag.json search from

    Returns:
        The initialized logger
    """
    global _logger

    settings = resolve_settings({'enabled': enabled, 'color': color},
                                start_dir=start_dir)
    if sink is None:
        # None lets StreamSink pick up sys.stderr at write time
        stream = sys.stdout if settings['stream'] == 'stdout' else None
        mode = settings['color'] if settings['color'] in MODES else 'ansi'
        sink = StreamSink(file=stream, color=mode)

    _logger = create_logger(enabled=bool(settings['enabled']), sink=sink)
    return _logger


def get_logger() -> TagLogger:
    """Get the module-level logger, creating a default if needed."""
    global _logger
    if _logger is None:
        _logger = init_logging()
    return _logger


def log_if(enabled: bool, tag: Any, message: Any, context: Any = None) -> None:
    get_logger().log_if(enabled, tag, message, context)


def log(tag: Any, message: Any, context: Any = None) -> None:
    get_logger().log(tag, message, context)


def log_warning(tag: Any, message: Any, context: Any = None) -> None:
    get_logger().log_warning(tag, message, context)


def log_error(tag: Any, message: Any, context: Any = None) -> None:
    get_logger().log_error(tag, message, context)


def describe_subscribers(owner_type: type, member_name: str,
                         instance: Any = None, note: Optional[str] = None) -> None:
    get_logger().describe_subscribers(owner_type, member_name, instance, note)
