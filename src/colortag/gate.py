"""
The enable switch.

Tagged logging is off unless switched on through configuration. The value is
read once, when the process-wide logger is built, and frozen into it: a
disabled logger is a different class whose gated methods have empty
bodies, so a disabled build does no formatting and touches no cache.

    COLORTAG_LOG=1 python app.py        # on for this run
    echo '{"enabled": true}' > .colortag.json

Only errors get through a disabled logger, as a plain "<tag>: <message>"
line.
"""

from .config import ENV_ENABLE, resolve_settings

__all__ = ['ENV_ENABLE', 'resolve_enabled']


def resolve_enabled(explicit=None, start_dir=None, environ=None) -> bool:
    """Resolve the switch: explicit value, then environment, then config files."""
    settings = resolve_settings({'enabled': explicit}, start_dir=start_dir,
                                environ=environ)
    return bool(settings['enabled'])
