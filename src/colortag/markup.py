"""
Rich-text markup in rendered lines.

Tags and subscriber reports carry a small markup vocabulary:

    <color=#RRGGBB> ... </color>     hex color
    <color=orange> ... </color>      named color
    <b> ... </b>                     bold

Consoles that understand it (game-engine and IDE consoles) can take lines
as-is. For terminals, to_text() turns a line into a rich Text whose spans
carry the colors, ready for a rich Console; for files and plain pipes,
strip_markup() removes the tags.
"""

import re

from rich.color import Color, ColorParseError
from rich.style import Style
from rich.text import Text


MODES = ('ansi', 'plain', 'markup')

# Names the markup uses that rich spells differently
_COLOR_ALIASES = {
    'orange': '#FFA500',
    'grey': 'grey50',
    'gray': 'grey50',
}

_TAG_RE = re.compile(r"<(/?)(color|b)(?:=(#?[0-9A-Za-z]+))?>")


def _style_for(tag: str, arg: str) -> Style:
    if tag == 'b':
        return Style(bold=True)
    spec = _COLOR_ALIASES.get(arg.lower(), arg) if arg else ''
    try:
        return Style(color=Color.parse(spec))
    except ColorParseError:
        return Style.null()


def strip_markup(line: str) -> str:
    """Remove color and bold tags, keeping the text between them."""
    return _TAG_RE.sub('', line)


def to_text(line: str) -> Text:
    """Convert a marked-up line into a styled rich Text.

    Each open tag remembers where its span starts; the closing tag styles
    the range. Spans left open run to the end of the line.
    """
    text = Text()
    open_spans = []
    pos = 0
    for m in _TAG_RE.finditer(line):
        text.append(line[pos:m.start()])
        pos = m.end()
        closing, tag, arg = m.groups()
        if not closing:
            open_spans.append((tag, len(text), _style_for(tag, arg)))
            continue
        for i in range(len(open_spans) - 1, -1, -1):
            if open_spans[i][0] == tag:
                _, start, style = open_spans.pop(i)
                text.stylize(style, start, len(text))
                break
    text.append(line[pos:])
    for _, start, style in open_spans:
        text.stylize(style, start, len(text))
    return text
