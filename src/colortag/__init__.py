"""
colortag — gated diagnostic logging with color-coded source tags.

Every line is prefixed with a frame number and a tag whose color is derived
from the tag's identity, so interleaved output from many emitters can be
told apart at a glance. Off by default; switch on with COLORTAG_LOG=1 or
"enabled": true in .colortag.json.

Public API:
    init_logging         — singleton initialization
    get_logger           — access singleton
    log, log_if, log_warning, log_error
                         — module-level logging calls
    describe_subscribers — list the subscribers of a callback slot
    Multicast            — multi-subscriber callback slot
    color_for, name_of   — the cached color and type-name lookups
    frames               — process-wide frame counter
    StreamSink, LoggingSink, Severity
                         — output sinks
"""

from colortag._version import __version__, __app_name__
from colortag.colors import ColorCache, color_for, FALLBACK_COLOR
from colortag.typenames import TypeNameCache, name_of
from colortag.render import FrameCounter, TagRenderer, frames
from colortag.multicast import Multicast, SubscriberInfo
from colortag.sinks import Severity, StreamSink, LoggingSink
from colortag.emitter import (
    TagLogger, DisabledTagLogger, create_logger, init_logging, get_logger,
    log, log_if, log_warning, log_error, describe_subscribers,
)

__all__ = [
    '__version__', '__app_name__',
    'ColorCache', 'color_for', 'FALLBACK_COLOR',
    'TypeNameCache', 'name_of',
    'FrameCounter', 'TagRenderer', 'frames',
    'Multicast', 'SubscriberInfo',
    'Severity', 'StreamSink', 'LoggingSink',
    'TagLogger', 'DisabledTagLogger', 'create_logger', 'init_logging', 'get_logger',
    'log', 'log_if', 'log_warning', 'log_error', 'describe_subscribers',
]
