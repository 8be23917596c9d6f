"""
gnuparse parser/dispatcher.

purpose
- consume a raw argument vector against an OptionRegistry, call back once per
  recognized option occurrence with (long_name, value_or_none), and hand the
  remaining positional arguments back to the caller.

grammar (tokens are classified left to right)
- None and "" are ignored.
- "-" and "--" stop option parsing; the marker is dropped and every later
  token is positional.
- "--name" / "--name=value": long option.
  • the inline value is taken verbatim (it may be empty or start with '-').
  • flags reject any '=...' tail.
  • a required parameter without '=' is queued and takes the next free
    non-option token.
- "-xyz": short cluster, one option per character.
  • '=' anywhere in a cluster is rejected (short options never use it).
  • required parameters are queued in order of appearance.
  • an optional parameter takes the very next token only when it is a
    non-option token; any other option token in between cancels it.
- any other token fills the pending optional parameter, else the oldest queued
  required parameter, else becomes positional.

dispatch
- values are checked against their option pattern (full match) once the whole
  vector has been read; callbacks only fire when the vector is valid, in order
  of appearance.
- matches records the last successful pattern match of each option for the
  latest pass; it is reset at the start of every parse().

threading
- a Parser is meant to be built once and used synchronously; concurrent parse()
  calls on one instance need external serialization.
"""
from collections import deque
from types import MappingProxyType

from rich.console import Console

from .faults import *
from .formatter import describe, render
from .options import OptionRegistry
from .utils import *


class _Occurrence:
    """A single option occurrence waiting for dispatch."""
    __slots__ = ("spec", "value", "index")

    def __init__(self, spec, index, value=None):
        self.spec = spec
        self.index = index
        self.value = value


class Parser:
    """
    GNU getopt style command line parser.

    parameters
    - callback: callable(long_name, value) invoked for each option occurrence.
    - registry: OptionRegistry to parse against (a fresh one when omitted).
    - shell: when True, parse faults are printed together with the option
      description on standard error and the process exits with status 1.
    - colorful: enables colors when rendering faults and descriptions in shell mode.
    - prog: program name shown in fault headers.
    """

    def __init__(self, callback, /, registry=Unset, *, shell=False, colorful=True, prog=Unset):
        if not callable(callback):
            raise TypeError("parser callback must be callable")
        if not isinstance(registry, OptionRegistry | Unset):
            raise TypeError("parser registry must be an option registry")
        self.callback = callback
        self.registry = coalesce(registry, OptionRegistry())
        self.shell = shell
        self.colorful = colorful
        self.prog = coalesce(prog, None)
        self._matches = {}

    def add_flag_option(self, name, /, *description, short=None):
        self.registry.add_flag_option(name, *description, short=short)
        return self

    def add_parameter_option(self, name, /, *description, short=None, required=True, pattern=Unset):
        self.registry.add_parameter_option(name, *description, short=short, required=required, pattern=pattern)
        return self

    @property
    def matches(self):
        return MappingProxyType(self._matches)

    def get_matcher(self, name, /):
        """
        Return the last successful pattern match for the option of the given long
        name during the latest parse, or None.
        """
        return self._matches.get(name)

    def trigger(self, fault, /, **options):
        if self.shell:
            self.print_formatted_description(stderr=True)
        trigger(fault, **options, shell=self.shell, colorful=self.colorful, prog=self.prog)

    def parse(self, args=None, /):
        """
        Parse an argument vector and return its positional arguments.

        raises
        - InvalidCommandLineParametersError (or one of its subclasses) for unknown
          options, '=' on short options or flags, missing required values and
          values rejected by their pattern.
        """
        self.registry.freeze()
        self._matches = {}
        positionals = []
        if args is None:
            return positionals

        occurrences = []
        queue = deque()
        pending = None
        stopped = False

        for index, token in enumerate(args, 1):
            if not token:
                continue
            if not isinstance(token, str):
                raise TypeError("command line arguments must be strings")

            if stopped:
                positionals.append(token)
            elif token in ("-", "--"):
                stopped = True
                pending = None
            elif token.startswith("--"):
                pending = None
                occurrence = self._parse_long(token, index)
                occurrences.append(occurrence)
                if occurrence.spec.required and occurrence.value is None:
                    queue.append(occurrence)
            elif token.startswith("-"):
                pending = None
                for occurrence in self._parse_short(token, index):
                    occurrences.append(occurrence)
                    if occurrence.spec.required:
                        queue.append(occurrence)
                    elif occurrence.spec.optional:
                        pending = occurrence
            elif pending is not None:
                pending.value = token
                pending = None
            elif queue:
                queue.popleft().value = token
            else:
                positionals.append(token)

        if queue:
            missing = queue.popleft()
            self.trigger(MissingParameterError(
                "missing required parameter for option --%s" % missing.spec.name,
                title="missing parameter",
                code=FaultCode.MISSING_PARAMETER,
                input=missing.spec.name,
                index=missing.index,
                hint="pass a value after the options (for example: --%s=<value>)" % missing.spec.name,
                docs=getdoc(FaultCode.MISSING_PARAMETER),
            ))

        for occurrence in occurrences:
            if occurrence.value is None:
                continue
            match = occurrence.spec.accepts(occurrence.value)
            if not match:
                self.trigger(InvalidParameterError(
                    "invalid parameter for option --%s=%s" % (occurrence.spec.name, occurrence.value),
                    title="invalid parameter",
                    code=FaultCode.INVALID_PARAMETER,
                    input=occurrence.value,
                    index=occurrence.index,
                    hint="the value must match %r" % occurrence.spec.pattern.pattern,
                    docs=getdoc(FaultCode.INVALID_PARAMETER),
                ))
            elif match is not True:
                self._matches[occurrence.spec.name] = match

        for occurrence in occurrences:
            self.callback(occurrence.spec.name, occurrence.value)

        return positionals

    def _parse_long(self, token, index):
        name, separator, value = token[2:].partition("=")
        spec = self.registry.long(name)

        if spec is None:
            self.trigger(UnknownOptionError(
                "invalid option --%s at argument %d" % (name, index),
                title="unknown option",
                code=FaultCode.UNKNOWN_LONG_OPTION,
                input=name,
                index=index,
                hint="see the option list for valid long options",
                docs=getdoc(FaultCode.UNKNOWN_LONG_OPTION),
            ))

        if spec.flag and separator:
            self.trigger(FlagAssignmentError(
                "option --%s takes no parameter" % name,
                title="flag cannot take a value",
                code=FaultCode.FLAG_ASSIGNMENT,
                input=name,
                index=index,
                hint="remove everything from '=' (for example: --%s)" % name,
                docs=getdoc(FaultCode.FLAG_ASSIGNMENT),
            ))

        return _Occurrence(spec, index, value if separator else None)

    def _parse_short(self, token, index):
        if "=" in token:
            self.trigger(ShortOptionAssignmentError(
                "bad form of short option %r at argument %d" % (token, index),
                title="malformed short option",
                code=FaultCode.SHORT_OPTION_ASSIGNMENT,
                input=token,
                index=index,
                hint="short options never take '=': pass the value as the next argument",
                docs=getdoc(FaultCode.SHORT_OPTION_ASSIGNMENT),
            ))

        occurrences = []
        for char in token[1:]:
            spec = self.registry.short(char)
            if spec is None:
                self.trigger(UnknownOptionError(
                    "invalid option -%s at argument %d" % (char, index),
                    title="unknown option",
                    code=FaultCode.UNKNOWN_SHORT_OPTION,
                    input=char,
                    index=index,
                    hint="see the option list for valid short options",
                    docs=getdoc(FaultCode.UNKNOWN_SHORT_OPTION),
                ))
            occurrences.append(_Occurrence(spec, index))
        return occurrences

    def get_formatted_description(self, colorize=False):
        return describe(self.registry, colorize)

    def print_formatted_description(self, file=None, *, stderr=False, colorize=Unset):
        """
        Print the formatted description through a rich console.

        colorize defaults to the parser colorful setting; the console still drops
        colors when the target is not a terminal.
        """
        colorize = coalesce(colorize, self.colorful)
        console = Console(file=file, stderr=stderr, highlight=False, no_color=not colorize)
        render(self.get_formatted_description(colorize), console)


__all__ = (
    "Parser",
)
