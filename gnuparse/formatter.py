"""
gnuparse description formatter.

Scope
- Color: the eight 3/4-bit ANSI colors with their foreground/background codes.
- paint(): ANSI-styled copy of a string (rendered by rich for the standard color system).
- format_as_header/option/abstract/example(): conventional help-text coloring.
- describe(): column-aligned description lines of a registry.
- render(): print description lines through a rich console.

Layout
- a header line ("OPTIONS:") and a blank separator come first.
- options with a short character are listed first, ordered by that character
  (plain code point order: digits < uppercase < lowercase); long-only options
  follow, ordered by long name.
- each option line is "%2s  --%-Ns  " % (short, name) followed by the first
  description line, N being the widest long name of the registry; the marker
  part is the one painted when colorizing.
- continuation lines are indented by N + 8 blanks, the option marker is not repeated.
"""
from enum import Enum

from rich.color import ColorSystem
from rich.style import Style
from rich.text import Text

HEADER = "OPTIONS:"


class Color(Enum):
    BLACK = "black"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"
    MAGENTA = "magenta"
    CYAN = "cyan"
    WHITE = "white"

    @property
    def ordinal(self):
        return list(type(self)).index(self)

    def foreground(self, bright=False):
        return self.ordinal + (90 if bright else 30)

    def background(self, bright=False):
        return self.ordinal + (100 if bright else 40)

    def style(self, bright=False):
        return ("bright_" if bright else "") + self.value


def paint(text, fg=None, bg=None, bright=False):
    """
    Return an ANSI-colored copy of text.

    None is rendered as the empty string and a call without any color returns
    text unchanged.
    """
    if text is None:
        return ""
    if fg is None and bg is None:
        return text
    style = Style(
        color=fg.style(bright) if fg is not None else None,
        bgcolor=bg.style(bright) if bg is not None else None,
    )
    return style.render(text, color_system=ColorSystem.STANDARD)


def format_as_header(text, colorize=False):
    return paint(text, Color.YELLOW) if colorize else text


def format_as_abstract(text, colorize=False):
    return paint(text, Color.BLACK, bright=True) if colorize else text


def format_as_option(text, colorize=False):
    return paint(text, Color.BLUE, bright=True) if colorize else text


def format_as_example(text, colorize=False):
    return paint(text, Color.GREEN, bright=True) if colorize else text


def _display_order(spec):
    # short-lettered options first (by character), long-only options after (by name)
    if spec.short is not None:
        return 0, spec.short
    return 1, spec.name


def describe(registry, colorize=False, *, header=True):
    """
    Build the formatted description lines of every option in the registry.
    """
    lines = []
    if header:
        lines.append(format_as_header(HEADER, colorize))
        lines.append("")

    width = max((len(spec.name) for spec in registry), default=0)
    indent = " " * (width + 8)

    for spec in sorted(registry, key=_display_order):
        marker = "%2s  --%-*s  " % ("-" + spec.short if spec.short is not None else "", width, spec.name)
        first, *rest = spec.description
        lines.append(format_as_option(marker, colorize) + first)
        lines.extend(indent + line for line in rest)

    return lines


def render(lines, console):
    """
    Print description lines on a rich console, honouring embedded ANSI colors.
    """
    for line in lines:
        console.print(Text.from_ansi(line) if "\x1b[" in line else Text(line), soft_wrap=True)


__all__ = (
    "HEADER",
    "Color",
    "paint",
    "format_as_header",
    "format_as_abstract",
    "format_as_option",
    "format_as_example",
    "describe",
    "render",
)
