"""
gnuparse faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain (definition vs. parsing) to keep copy consistent
  and make logs/searches predictable.
- OptionException: base type that carries message + options and knows how to
  render itself in a short, lowercased, actionable way.
- OptionDefinitionError: raised while options are being registered.
- InvalidCommandLineParametersError: raised while an argument vector is parsed.
- trigger(): central entry point to surface any fault (respecting shell/colorful).
- getdoc(): optional description lookup for a code from the host application.

Integration
- The registry raises definition faults directly; they are programming errors.
- The parser surfaces parse faults through trigger(fault, **ctx). Outside shell mode
  they are raised; in shell mode they are rendered via rich and the process exits.
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - definition (21xxx)
      • DUPLICATE_LONG_OPTION, DUPLICATE_SHORT_OPTION, INVALID_LONG_NAME,
        INVALID_SHORT_NAME, INVALID_PATTERN, SEALED_REGISTRY
    - parsing (22xxx)
      • UNKNOWN_LONG_OPTION, UNKNOWN_SHORT_OPTION, SHORT_OPTION_ASSIGNMENT,
        FLAG_ASSIGNMENT, MISSING_PARAMETER, INVALID_PARAMETER
    """
    # --- definition errors (21xxx) ---
    DUPLICATE_LONG_OPTION   = 21101
    DUPLICATE_SHORT_OPTION  = 21102
    INVALID_LONG_NAME       = 21111
    INVALID_SHORT_NAME      = 21112
    INVALID_PATTERN         = 21121
    SEALED_REGISTRY         = 21131

    # --- parse errors (22xxx) ---
    UNKNOWN_LONG_OPTION     = 22101
    UNKNOWN_SHORT_OPTION    = 22102
    SHORT_OPTION_ASSIGNMENT = 22111
    FLAG_ASSIGNMENT         = 22112
    MISSING_PARAMETER       = 22121
    INVALID_PARAMETER       = 22122

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class OptionException(Exception):
    """
    base for every gnuparse fault.

    - message: one-sentence, lowercased description (also the str() of the exception).
    - options: read-only mapping of context (code, title, hint, input, index, ...).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    @property
    def hint(self):
        return self.options.get("hint")

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        prog = getattr(main, "__prog__", self.options.get("prog") or "gnuparse")
        code = self.options.get("code")
        title = self.options.get("title") or type(self).__name__

        header = Text.assemble(
            "[ ",
            text(prog, "prog-name"),
            " - ",
            text(code.normalize() if isinstance(code, FaultCode) else "", "code"),
            " | ",
            text(title.title(), "error-title"),
            " ]"
        )
        message = text(self.message or "", "error-message")

        if not self.options.get("hint"):
            body = Group(message)
        else:
            body = Group(message, Text.assemble(text(" → ", "hint-arrow"), text(self.options["hint"], "hint")))

        if self.options.get("fancy", False):
            return Panel(body, title=header, title_align="left")
        return Group(header, body)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class OptionDefinitionError(OptionException): ...
class DuplicateOptionError(OptionDefinitionError): ...
class InvalidOptionNameError(OptionDefinitionError): ...
class InvalidPatternError(OptionDefinitionError): ...
class SealedRegistryError(OptionDefinitionError): ...


class InvalidCommandLineParametersError(OptionException): ...
class UnknownOptionError(InvalidCommandLineParametersError): ...
class ShortOptionAssignmentError(InvalidCommandLineParametersError): ...
class FlagAssignmentError(InvalidCommandLineParametersError): ...
class MissingParameterError(InvalidCommandLineParametersError): ...
class InvalidParameterError(InvalidCommandLineParametersError): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see OptionException).
    - options are merged into the fault via copy.replace() before triggering.
    - in shell mode, rendering happens via rich console; otherwise, the exception is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "OptionException",
    "OptionDefinitionError",
    "DuplicateOptionError",
    "InvalidOptionNameError",
    "InvalidPatternError",
    "SealedRegistryError",
    "InvalidCommandLineParametersError",
    "UnknownOptionError",
    "ShortOptionAssignmentError",
    "FlagAssignmentError",
    "MissingParameterError",
    "InvalidParameterError",
    "trigger",
    "getdoc",
)
