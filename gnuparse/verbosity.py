"""
Verbosity level bookkeeping for command line applications.

A Verbosity is typically bumped once per -v occurrence from the parser callback
and consulted afterwards to print optional progress output on a rich console.
"""
import sys

from rich.console import Console

from .utils import Unset, coalesce


class Verbosity:
    """
    Non-negative verbosity level plus a console to print to when verbose.

    - level: clamped to zero and above.
    - console: rich console used by print()/newline(); stdout when omitted.
    """

    def __init__(self, level=0, /, console=Unset):
        self._level = max(0, level)
        self.console = coalesce(console, Console(highlight=False))

    @property
    def level(self):
        return self._level

    @level.setter
    def level(self, level):
        self._level = max(0, level)

    @property
    def verbose(self):
        return self._level > 0

    def increase(self):
        if self._level < sys.maxsize:
            self._level += 1
        return self._level

    def decrease(self):
        # once verbose, never drops back to silent
        if self._level > 1:
            self._level -= 1
        return self._level

    def when(self, action, /, *args, **kwargs):
        """Run action only when verbose; returns its result or None."""
        if self.verbose:
            return action(*args, **kwargs)
        return None

    def print(self, *objects, **options):
        self.when(self.console.print, *objects, **options)

    def newline(self, count=1):
        self.when(self.console.line, count)


__all__ = (
    "Verbosity",
)
