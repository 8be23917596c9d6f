r"""
gnuparse option specifications and registry.

Overview
- OptionSpec: one registered option, immutable once built.
  • name: long form (reachable as --name), mandatory and unique.
  • short: optional single character (reachable as -x), unique when present.
  • kind: Kind.FLAG (presence only) or Kind.PARAMETER (value-bearing).
  • required: whether a parameter option must receive a value.
  • pattern: optional compiled regular expression every value must fully match.
  • description: tuple of lines; the first is shown beside the option, the rest
    are continuation lines.

- OptionRegistry: ordered, validating collection of specs.
  • add_flag_option(...) / add_parameter_option(...) are chainable.
  • freeze() seals the registry; the parser does this before its first pass.

Validation highlights
- Long names must be non-empty, must not start with '-' and must not contain
  '=' or whitespace.
- Short names must be exactly one character other than '-', '=' or whitespace.
- Patterns are compiled once at registration; a bad pattern is an
  InvalidPatternError.
- Duplicated long or short names are DuplicateOptionError.

Quick example:
    >>> registry = OptionRegistry()
    >>> registry.add_flag_option("help", "print this help", short="h")  # doctest: +ELLIPSIS
    <...>
    >>> registry.add_parameter_option("geometry", "window geometry", short="g",
    ...                               pattern=r"(\d{3,4})[xX](\d{3,4})")  # doctest: +ELLIPSIS
    <...>
"""
import re
from enum import Enum

from .faults import *
from .utils import *


class Kind(Enum):
    FLAG = "flag"
    PARAMETER = "parameter"


def _split_description(description):
    lines = []
    for fragment in description:
        if not isinstance(fragment, str):
            raise TypeError("option description lines must be strings")
        lines.extend(fragment.splitlines() or [""])
    return lines or [""]


def _compile_pattern(name, pattern):
    if pattern is Unset or pattern is None:
        return None
    if isinstance(pattern, re.Pattern):
        return pattern
    if not isinstance(pattern, str):
        raise TypeError("option pattern must be a string or a compiled pattern")
    try:
        return re.compile(pattern)
    except re.error as exception:
        raise InvalidPatternError(
            "bad parameter pattern %r for option --%s: %s" % (pattern, name, exception),
            title="invalid pattern",
            code=FaultCode.INVALID_PATTERN,
            input=pattern,
            hint="use a valid regular expression (it must match the whole value)",
        ) from exception


class OptionSpec(StorageGuard):
    """
    Immutable description of a single command line option.

    Instances are built by OptionRegistry; building one directly is allowed but
    skips the uniqueness checks, which only make sense inside a registry.
    """
    name = view("name")
    short = view("short")
    kind = view("kind")
    required = view("required")
    pattern = view("pattern")
    description = view("description")

    def __new__(cls, name, /, *description, short=None, kind=Kind.FLAG, required=False, pattern=Unset):
        if not isinstance(name, str):
            raise TypeError("option name must be a string")
        elif not name or name.startswith("-") or "=" in name or any(char.isspace() for char in name):
            raise InvalidOptionNameError(
                "bad long option name %r" % name,
                title="invalid option name",
                code=FaultCode.INVALID_LONG_NAME,
                input=name,
                hint="use a non-empty name without leading '-', '=' or blanks (for example: 'help')",
            )

        if short is not None:
            if not isinstance(short, str):
                raise TypeError("option short name must be a string")
            elif len(short) != 1 or short in "-=" or short.isspace():
                raise InvalidOptionNameError(
                    "bad short option name %r for option --%s" % (short, name),
                    title="invalid option name",
                    code=FaultCode.INVALID_SHORT_NAME,
                    input=short,
                    hint="use exactly one character other than '-', '=' or blanks",
                )

        if not isinstance(kind, Kind):
            raise TypeError("option kind must be a Kind")

        with super().__new__(cls) as self:
            setattr(self, "-name", name)
            setattr(self, "-short", short)
            setattr(self, "-kind", kind)
            setattr(self, "-required", bool(required) and kind is Kind.PARAMETER)
            setattr(self, "-pattern", _compile_pattern(name, pattern) if kind is Kind.PARAMETER else None)
            setattr(self, "-description", _split_description(description))
        return self

    @property
    def flag(self):
        return self.kind is Kind.FLAG

    @property
    def optional(self):
        """True for parameter options whose value may be omitted."""
        return self.kind is Kind.PARAMETER and not self.required

    def accepts(self, value, /):
        """
        Match a value against the option pattern.

        Returns the match object, a plain True when there is no pattern to honour,
        or None when the value is rejected.
        """
        if self.pattern is None:
            return True
        return self.pattern.fullmatch(value)

    def __repr__(self):
        fields = ["name=%r" % self.name]
        if self.short is not None:
            fields.append("short=%r" % self.short)
        fields.append("kind=%s" % self.kind.value)
        if self.kind is Kind.PARAMETER:
            fields.append("required=%r" % self.required)
            if self.pattern is not None:
                fields.append("pattern=%r" % self.pattern.pattern)
        return "option-spec(%s)" % ", ".join(fields)

    def __rich_repr__(self):
        yield "name", self.name
        yield "short", self.short, None
        yield "kind", self.kind.value
        yield "required", self.required, False
        yield "pattern", getattr(self.pattern, "pattern", None), None
        yield "description", self.description


class OptionRegistry:
    """
    Ordered collection of OptionSpec with uniqueness enforced at registration.

    Lookup is available by long name (long()) and by short character (short());
    iteration yields specs in registration order.
    """

    def __init__(self):
        self._longs = {}
        self._shorts = {}
        self._frozen = False

    @property
    def frozen(self):
        return self._frozen

    def freeze(self):
        self._frozen = True
        return self

    def add(self, spec, /):
        if not isinstance(spec, OptionSpec):
            raise TypeError("registry entries must be option specs")
        if self._frozen:
            raise SealedRegistryError(
                "cannot add option --%s after parsing has started" % spec.name,
                title="sealed registry",
                code=FaultCode.SEALED_REGISTRY,
                input=spec.name,
                hint="register every option before the first parse",
            )
        if spec.name in self._longs:
            raise DuplicateOptionError(
                "duplicate option definition for option --%s" % spec.name,
                title="duplicate option",
                code=FaultCode.DUPLICATE_LONG_OPTION,
                input=spec.name,
                hint="every long option name must be unique",
            )
        if spec.short is not None and spec.short in self._shorts:
            raise DuplicateOptionError(
                "duplicate option definition for option -%s (--%s is already using it)" % (
                    spec.short, self._shorts[spec.short].name
                ),
                title="duplicate option",
                code=FaultCode.DUPLICATE_SHORT_OPTION,
                input=spec.short,
                hint="every short option character must be unique",
            )
        self._longs[spec.name] = spec
        if spec.short is not None:
            self._shorts[spec.short] = spec
        return self

    def add_flag_option(self, name, /, *description, short=None):
        return self.add(OptionSpec(name, *description, short=short, kind=Kind.FLAG))

    def add_parameter_option(self, name, /, *description, short=None, required=True, pattern=Unset):
        return self.add(OptionSpec(
            name,
            *description,
            short=short,
            kind=Kind.PARAMETER,
            required=required,
            pattern=pattern,
        ))

    def long(self, name, /):
        return self._longs.get(name)

    def short(self, char, /):
        return self._shorts.get(char)

    def __iter__(self):
        return iter(tuple(self._longs.values()))

    def __len__(self):
        return len(self._longs)

    def __contains__(self, name):
        return name in self._longs

    def __repr__(self):
        return "option-registry(%s)" % ", ".join(map(repr, self._longs))


__all__ = (
    "Kind",
    "OptionSpec",
    "OptionRegistry",
)
