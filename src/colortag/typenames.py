"""
Readable type names for log tags.

Plain classes render as their simple name. Parameterised generics render
with angle brackets and their arguments formatted recursively:

    list[int]                 ->  list<int>
    typing.Dict[str, Box[T]]  ->  dict<str, Box<T>>

Names are memoized per type identity for the life of the process.
"""

import threading
import typing
from typing import Any, Dict


def is_type_identity(obj: Any) -> bool:
    """True for classes and parameterised generic aliases."""
    if isinstance(obj, type):
        return True
    try:
        return typing.get_origin(obj) is not None
    except Exception:
        return False


def _simple_name(tp: Any) -> str:
    for attr in ('__name__', '__forward_arg__', '_name'):
        value = getattr(tp, attr, None)
        if isinstance(value, str) and value:
            return value
    return repr(tp)


def _cache_key(tp: Any) -> Any:
    """Structural key: origin plus ordered argument keys.

    Union equality ignores argument order, so aliases are keyed by their
    ordered parts and Union[int, str] keeps its own name.
    """
    if isinstance(tp, (list, tuple)):
        return ('[]',) + tuple(_cache_key(a) for a in tp)
    origin = typing.get_origin(tp)
    if origin is None:
        return (type(tp), tp)
    return (origin, tuple(_cache_key(a) for a in typing.get_args(tp)))


class TypeNameCache:
    """Write-once cache of rendered type names.

    Reads are lock-free; inserts go through setdefault under a lock so a
    reader sees either no entry or the finished string.
    """

    def __init__(self):
        self._names: Dict[Any, str] = {}
        self._lock = threading.Lock()

    def __len__(self):
        return len(self._names)

    def name_of(self, tp: Any) -> str:
        """Render the display name of a type. Never raises."""
        try:
            key = _cache_key(tp)
            cached = self._names.get(key)
        except Exception:
            # Unhashable alias (rare); format without caching
            return self._safe_format(tp)
        if cached is not None:
            return cached

        name = self._safe_format(tp)
        with self._lock:
            return self._names.setdefault(key, name)

    def _safe_format(self, tp: Any) -> str:
        try:
            return self._format(tp)
        except Exception:
            from .render import safe_str
            return safe_str(tp)

    def _format(self, tp: Any) -> str:
        origin = typing.get_origin(tp)
        if origin is None:
            return _simple_name(tp)
        args = typing.get_args(tp)
        if not args:
            return _simple_name(origin)
        inner = ', '.join(self._format_arg(a) for a in args)
        return f"{_simple_name(origin)}<{inner}>"

    def _format_arg(self, arg: Any) -> str:
        if arg is Ellipsis:
            return '...'
        if arg is None:
            return 'None'
        if isinstance(arg, (list, tuple)):
            return '[' + ', '.join(self._format_arg(a) for a in arg) + ']'
        if is_type_identity(arg) or hasattr(arg, '__name__') \
                or hasattr(arg, '__forward_arg__'):
            return self.name_of(arg)
        # Literal[...] values and the like
        return repr(arg)

    def clear(self) -> None:
        """Drop every entry. Test helper; production code never clears."""
        with self._lock:
            self._names.clear()


_default = TypeNameCache()


def name_of(tp: Any) -> str:
    """Render a type name through the process-wide cache."""
    return _default.name_of(tp)
