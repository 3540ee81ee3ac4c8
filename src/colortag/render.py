"""
Tag prefix rendering.

Every emitted line starts with a prefix of the form

    f<frame>:<color=#RRGGBB><b>[<label>]</b></color>

where <frame> is the host's step counter at the time of the call, the color
comes from the bucket table in colors.py and the label depends on the shape
of the tag:

    type / generic alias   Box<int>
    named object           Button #OkButton
    anything else          name of its type (str, int, Widget, ...)

If the label cannot be built the prefix degrades to f<frame>:[<str(tag)>].
A frame source that fails shows as f?.
"""

import threading
from typing import Any, Callable, Optional, Protocol, runtime_checkable

from . import colors as _colors
from . import typenames as _typenames


@runtime_checkable
class NamedObject(Protocol):
    """An object that carries a display name (widgets, scene nodes, enums)."""
    name: Any


def safe_str(obj: Any) -> str:
    """str(obj) that never raises."""
    try:
        return str(obj)
    except Exception:
        return f"<{type(obj).__name__} object>"


def is_named(obj: Any) -> bool:
    """True when obj is a non-type object with a name attribute."""
    if _typenames.is_type_identity(obj):
        return False
    try:
        return isinstance(obj, NamedObject)
    except Exception:
        return False


class FrameCounter:
    """Monotonic step counter sampled into every tag.

    The host calls advance() once per frame, tick or event-loop turn; the
    renderer reads current. Starts at 0.
    """

    def __init__(self, start: int = 0):
        self._value = start
        self._lock = threading.Lock()

    @property
    def current(self) -> int:
        return self._value

    def advance(self, steps: int = 1) -> int:
        """Move the counter forward and return the new value."""
        if steps < 0:
            raise ValueError("frame counter only moves forward")
        with self._lock:
            self._value += steps
            return self._value

    def __call__(self) -> int:
        return self._value


# Process-wide counter used by default renderers
frames = FrameCounter()


class TagRenderer:
    """Builds the colored tag prefix for a log line.

    Args:
        colors: Color cache (default: process-wide cache)
        names: Type name cache (default: process-wide cache)
        frame_source: Zero-arg callable returning the current frame number
            (default: the module-level frames counter)
    """

    def __init__(
        self,
        colors: Optional[_colors.ColorCache] = None,
        names: Optional[_typenames.TypeNameCache] = None,
        frame_source: Optional[Callable[[], int]] = None,
    ):
        self.colors = colors if colors is not None else _colors._default
        self.names = names if names is not None else _typenames._default
        self.frame_source = frame_source if frame_source is not None else frames

    def label(self, tag: Any) -> str:
        """Bracket label for a tag. May raise if the tag misbehaves."""
        if _typenames.is_type_identity(tag):
            return self.names.name_of(tag)
        if isinstance(tag, NamedObject):
            return f"{self.names.name_of(type(tag))} #{tag.name}"
        return self.names.name_of(type(tag))

    def render(self, tag: Any) -> str:
        """Return the full prefix, trailing space included. Never raises."""
        try:
            frame = self.frame_source()
        except Exception:
            frame = '?'
        try:
            color = self.colors.color_for(tag)
            label = self.label(tag)
        except Exception:
            return f"f{frame}:[{safe_str(tag)}] "
        return f"f{frame}:<color=#{color}><b>[{label}]</b></color> "
