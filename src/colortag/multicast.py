"""
Multi-subscriber callback slots and the subscriber report.

Multicast is a first-class event slot that remembers its registrations in
order, so diagnostics can list who is listening without relying on
interpreter internals:

    class Canvas:
        on_resize = Multicast()          # shared (class-level) slot

        def __init__(self):
            self.on_dirty = Multicast()  # per-instance slot

    canvas.on_dirty += panel.refresh
    describe_subscribers(Canvas, 'on_dirty', canvas, note='after rebuild')

Plain attributes holding a callable, or a list/tuple/set of callables, are
reported too. Anything that cannot be resolved reports zero subscribers.
"""

import functools
import inspect
from dataclasses import dataclass
from typing import Any, Callable, Iterator, List, Optional


@dataclass(frozen=True)
class SubscriberInfo:
    """One registered callback: the type that declares it and its name."""
    declaring_type: str
    member: str

    def __str__(self):
        return f"{self.declaring_type}.{self.member}"


class Multicast:
    """Ordered, multi-subscriber callback slot.

    The same callable may be registered more than once; remove() drops the
    most recent registration, matching event semantics elsewhere.
    """

    def __init__(self, *handlers: Callable):
        self._handlers: List[Callable] = []
        for handler in handlers:
            self.add(handler)

    def add(self, handler: Callable) -> None:
        if not callable(handler):
            raise TypeError(f"handler must be callable, got {type(handler).__name__}")
        self._handlers.append(handler)

    def remove(self, handler: Callable) -> bool:
        """Remove the last registration of handler. Returns False if absent."""
        for i in range(len(self._handlers) - 1, -1, -1):
            if self._handlers[i] == handler:
                del self._handlers[i]
                return True
        return False

    def clear(self) -> None:
        self._handlers = []

    def __iadd__(self, handler):
        self.add(handler)
        return self

    def __isub__(self, handler):
        self.remove(handler)
        return self

    def __call__(self, *args, **kwargs) -> None:
        # Snapshot so handlers may unsubscribe while being invoked
        for handler in list(self._handlers):
            handler(*args, **kwargs)

    def __len__(self):
        return len(self._handlers)

    def __iter__(self) -> Iterator[Callable]:
        return iter(list(self._handlers))

    def __bool__(self):
        return True

    def subscribers(self) -> List[SubscriberInfo]:
        """Describe the registrations in invocation order."""
        return [describe_callable(h) for h in list(self._handlers)]

    def __repr__(self):
        return f"Multicast({len(self._handlers)} subscribers)"


def describe_callable(func: Callable) -> SubscriberInfo:
    """Build a SubscriberInfo for any callable."""
    while isinstance(func, functools.partial):
        func = func.func

    if inspect.ismethod(func):
        owner = func.__self__
        cls = owner if isinstance(owner, type) else type(owner)
        # Prefer the class that actually defines the method
        for klass in inspect.getmro(cls):
            if func.__name__ in vars(klass):
                cls = klass
                break
        return SubscriberInfo(cls.__name__, func.__name__)

    if inspect.isfunction(func) or inspect.isbuiltin(func):
        qualname = getattr(func, '__qualname__', None) or func.__name__
        owner, _, member = qualname.rpartition('.')
        if not owner:
            module = getattr(func, '__module__', None) or ''
            owner = module.rpartition('.')[2] or '<module>'
        return SubscriberInfo(owner.replace('.<locals>', ''), member)

    if isinstance(func, type):
        # Calling a class runs its constructor
        return SubscriberInfo(func.__name__, '__init__')

    return SubscriberInfo(type(func).__name__, '__call__')


def resolve_slot(owner_type: type, member_name: str, instance: Any = None) -> Any:
    """Read a callback slot from instance (or the type when static).

    Looks up the plain name, then the private mangled spelling
    (_Owner__name for a member declared as __name). Returns None when the
    member does not exist.
    """
    target = instance if instance is not None else owner_type
    candidates = [member_name]
    if member_name.startswith('__') and not member_name.endswith('__'):
        candidates.append(f"_{owner_type.__name__.lstrip('_')}{member_name}")

    for name in candidates:
        try:
            return getattr(target, name)
        except AttributeError:
            pass
        try:
            value = inspect.getattr_static(target, name)
        except AttributeError:
            continue
        if isinstance(value, (staticmethod, classmethod)):
            value = value.__func__
        return value
    return None


def subscribers_of(value: Any) -> List[SubscriberInfo]:
    """Enumerate the subscribers held by a slot value."""
    if value is None:
        return []
    if isinstance(value, Multicast):
        return value.subscribers()
    if isinstance(value, (list, tuple, set, frozenset)):
        return [describe_callable(v) for v in value if callable(v)]
    if callable(value):
        return [describe_callable(value)]
    return []


def inspect_slot(owner_type: type, member_name: str,
                 instance: Any = None) -> List[SubscriberInfo]:
    """Resolve and enumerate a slot; any failure yields no subscribers."""
    try:
        return subscribers_of(resolve_slot(owner_type, member_name, instance))
    except Exception:
        return []


def format_report(owner_type: type, member_name: str,
                  subscribers: List[SubscriberInfo],
                  note: Optional[str] = None) -> str:
    """Render the header and one indented line per subscriber."""
    owner = getattr(owner_type, '__name__', None) or str(owner_type)
    parts = [f"<color=orange>{owner}.{member_name} has {len(subscribers)} callbacks"]
    if note is not None:
        parts.append(f" ({note})")
    parts.append(":</color>")
    for sub in subscribers:
        parts.append(f"\n - {sub}")
    return ''.join(parts)
