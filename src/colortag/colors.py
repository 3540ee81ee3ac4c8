"""
Deterministic tag colors.

Every tag identity hashes into one of a fixed number of buckets; each bucket
owns one color derived from its index, so the palette is spread evenly
around the hue wheel. Collisions share a color. With 32 buckets that is
the intended trade between table size and distinctness.

Hash text per identity shape:
    str               the string itself
    type / alias      module.qualname of the class (generic origin for
                      parameterised aliases, so list[int] ~ list[str])
    anything else     module.qualname of type(identity)

Colors near the blue/purple band (hue ~0.65) get less saturation and more
value so they stay legible on dark and light consoles alike.
"""

import colorsys
import typing
import zlib
from typing import Any, List, Optional

from .typenames import is_type_identity


FALLBACK_COLOR = 'FFFFFF'
DEFAULT_BUCKETS = 32

# Blue band correction
BAND_CENTER = 0.65
BAND_WIDTH = 0.2


def qualified_name(tp: Any) -> Optional[str]:
    """Return 'module.qualname' for a class, or None if it has no name."""
    qualname = getattr(tp, '__qualname__', None) or getattr(tp, '__name__', None)
    if qualname is None:
        return None
    module = getattr(tp, '__module__', None)
    return f"{module}.{qualname}" if module else qualname


def tag_hash(identity: Any) -> int:
    """Hash a tag identity. May raise for malformed identities."""
    if isinstance(identity, str):
        text = identity
    elif is_type_identity(identity):
        tp = typing.get_origin(identity) or identity
        text = qualified_name(tp)
    else:
        text = qualified_name(type(identity))
    if text is None:
        return 0
    return zlib.crc32(text.encode('utf-8'))


def band_modifier(hue: float) -> float:
    """1.0 at the center of the blue band, falling to 0.0 at BAND_WIDTH."""
    return 1.0 - min(max(abs(hue - BAND_CENTER) / BAND_WIDTH, 0.0), 1.0)


def bucket_color(index: int, size: int = DEFAULT_BUCKETS) -> str:
    """Derive the RRGGBB color owned by a bucket."""
    hue = index / size
    modifier = band_modifier(hue)
    saturation = 0.8 - 0.2 * modifier
    value = 0.7 + 0.3 * modifier
    rgb = colorsys.hsv_to_rgb(hue, saturation, value)
    return ''.join(f"{round(c * 255):02X}" for c in rgb)


class ColorCache:
    """Fixed table of bucket colors, filled on first use of each bucket.

    A bucket is filled by a single list store of a finished string, so
    concurrent callers see either an empty slot or the final color.
    """

    def __init__(self, size: int = DEFAULT_BUCKETS):
        if size <= 0 or size & (size - 1):
            raise ValueError(f"bucket count must be a power of two, got {size}")
        self.size = size
        self._codes: List[Optional[str]] = [None] * size

    def bucket_of(self, identity: Any) -> int:
        """Bucket index for an identity. May raise like tag_hash()."""
        return tag_hash(identity) & (self.size - 1)

    def color_for(self, identity: Any) -> str:
        """Return the color for an identity. Never raises."""
        try:
            index = self.bucket_of(identity)
        except Exception:
            return FALLBACK_COLOR

        code = self._codes[index]
        if code is None:
            code = bucket_color(index, self.size)
            self._codes[index] = code
        return code

    @property
    def filled(self) -> int:
        """Number of buckets that have been assigned a color."""
        return sum(1 for c in self._codes if c is not None)


_default = ColorCache()


def color_for(identity: Any) -> str:
    """Look up a tag color in the process-wide cache."""
    return _default.color_for(identity)
