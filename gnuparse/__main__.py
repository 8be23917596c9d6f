r"""
Example launcher built on gnuparse (python -m gnuparse).

It mirrors how an application front end wires the parser: a single callback
collecting option state, a shell-mode parser that prints the option list and
exits on bad input, and a regex-validated --geometry whose capture groups are
read back through get_matcher().

    python -m gnuparse -dv --geometry=800x600-200+100 -o ~/Pictures one two
"""
import sys
from typing import NamedTuple

from rich.console import Console
from rich.pretty import Pretty

from .formatter import format_as_header
from .parser import Parser
from .verbosity import Verbosity

GEOMETRY = r"(\d{3,4})[xX](\d{3,4})(([+-])(\d{1,4})([+-])(\d{1,4}))?"


class Geometry(NamedTuple):
    width: int
    height: int
    x: int | None = None
    y: int | None = None

    @classmethod
    def from_match(cls, match):
        width, height = int(match[1]), int(match[2])
        if not match[3]:
            return cls(width, height)
        return cls(width, height, int(match[4] + match[5]), int(match[6] + match[7]))


def build(callback, /, **options):
    return (
        Parser(callback, **options)
        .add_flag_option("help", "print this help to stdout", short="h")
        .add_flag_option("development", "start application in development mode", short="d")
        .add_flag_option("experimental", "enable experimental options", short="E")
        .add_flag_option("verbose", "increase verbosity", "(may be given more than once)", short="v")
        .add_parameter_option("open", "path to open initially", "(no path parameter to open nothing)",
                              short="o", required=False)
        .add_parameter_option("geometry", "main window geometry, e.g. 800x600-200+100",
                              short="g", pattern=GEOMETRY)
    )


def main(argv=None, /, *, console=None):
    console = Console(highlight=False) if console is None else console
    state = {"help": False, "development": False, "experimental": False, "open": None}
    verbosity = Verbosity(console=console)

    def callback(name, value):
        match name:
            case "verbose":
                verbosity.increase()
            case "open":
                state["open"] = value or ""
            case "geometry":
                pass
            case _:
                state[name] = True

    parser = build(callback, shell=True, prog="gnuparse")
    arguments = parser.parse(sys.argv[1:] if argv is None else argv)

    if state["help"]:
        console.print("gnuparse example launcher")
        console.print()
        parser.print_formatted_description(console.file)
        return 0

    match = parser.get_matcher("geometry")
    state["geometry"] = Geometry.from_match(match) if match else None
    state["verbosity"] = verbosity.level
    state["arguments"] = arguments

    verbosity.print(format_as_header("configuration:"))
    console.print(Pretty(state))
    return 0


if __name__ == "__main__":
    sys.exit(main())
