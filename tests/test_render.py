"""Tests for colortag.render — tag prefixes and the frame counter."""

import enum
import re
from typing import Generic, TypeVar

import pytest

from colortag.colors import ColorCache, FALLBACK_COLOR
from colortag.render import (
    FrameCounter, TagRenderer, frames, is_named, safe_str,
)
from colortag.typenames import TypeNameCache


T = TypeVar("T")

PREFIX_RE = re.compile(r"^f(\d+):<color=#([0-9A-F]{6})><b>\[(.+)\]</b></color> $")


class Foo(Generic[T]):
    pass


class Button:
    def __init__(self, name):
        self.name = name


class Unprintable:
    def __str__(self):
        raise RuntimeError("no str")


class BadName:
    """Named object whose name blows up."""

    @property
    def name(self):
        raise RuntimeError("name unavailable")

    def __str__(self):
        return "BadName-instance"


class Mode(enum.Enum):
    EDIT = 1


# =============================================================================
# Frame counter
# =============================================================================

class TestFrameCounter:
    """Test the monotonic counter."""

    def test_starts_at_zero(self, counter):
        assert counter.current == 0
        assert counter() == 0

    def test_advance(self, counter):
        assert counter.advance() == 1
        assert counter.advance(3) == 4
        assert counter.current == 4

    def test_never_goes_back(self, counter):
        with pytest.raises(ValueError):
            counter.advance(-1)

    def test_module_counter_is_default(self):
        """Renderers without a frame source read the module counter."""
        assert TagRenderer().frame_source is frames


# =============================================================================
# Labels
# =============================================================================

class TestLabel:
    """Test label selection per identity shape."""

    def test_type_identity(self, renderer):
        assert renderer.label(Foo[int]) == "Foo<int>"

    def test_named_object(self, renderer):
        assert renderer.label(Button("OkButton")) == "Button #OkButton"

    def test_enum_member_is_named(self, renderer):
        assert renderer.label(Mode.EDIT) == "Mode #EDIT"

    def test_plain_value(self, renderer):
        assert renderer.label("network") == "str"
        assert renderer.label(42) == "int"

    def test_named_type_is_still_a_type(self, renderer):
        """A class with a name attribute renders as a type, not an object."""
        assert renderer.label(Button) == "Button"


# =============================================================================
# Render
# =============================================================================

class TestRender:
    """Test the full prefix."""

    def test_prefix_format(self, renderer, counter):
        counter.advance(7)
        prefix = renderer.render(Foo[int])
        m = PREFIX_RE.match(prefix)
        assert m, prefix
        assert m.group(1) == "7"
        assert m.group(3) == "Foo<int>"

    def test_color_matches_cache(self, renderer):
        prefix = renderer.render(Button("a"))
        assert f"<color=#{renderer.colors.color_for(Button)}>" in prefix

    def test_frame_sampled_per_call(self, renderer, counter):
        first = renderer.render("x")
        counter.advance()
        second = renderer.render("x")
        assert first.startswith("f0:")
        assert second.startswith("f1:")

    def test_fallback_when_label_fails(self, renderer):
        """A tag whose label derivation raises gets a plain prefix."""
        assert renderer.render(BadName()) == "f0:[BadName-instance] "

    def test_fallback_never_raises(self, counter):
        """Even unprintable tags render something."""
        class ExplodingNames(TypeNameCache):
            def name_of(self, tp):
                raise RuntimeError("boom")

        broken = TagRenderer(colors=ColorCache(), names=ExplodingNames(),
                             frame_source=counter)
        assert broken.render(Unprintable()) == "f0:[<Unprintable object>] "

    def test_failing_frame_source(self):
        """A frame source that raises shows as f? and the tag still renders."""
        def broken_clock():
            raise RuntimeError("tick")

        renderer = TagRenderer(colors=ColorCache(), names=TypeNameCache(),
                               frame_source=broken_clock)
        prefix = renderer.render("x")
        assert prefix.startswith("f?:<color=#")
        assert prefix.endswith("[str]</b></color> ")

    def test_unhashable_string_gets_fallback_color(self, renderer):
        prefix = renderer.render("\ud800")
        assert f"<color=#{FALLBACK_COLOR}>" in prefix


# =============================================================================
# Helpers
# =============================================================================

class TestHelpers:

    def test_safe_str(self):
        assert safe_str(3) == "3"
        assert safe_str(Unprintable()) == "<Unprintable object>"

    def test_is_named(self):
        assert is_named(Button("b"))
        assert not is_named(Button)
        assert not is_named("text")
