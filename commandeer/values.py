"""
Parsed values produced by the matcher.

Positional and option-argument slots hold one of
- Absent: the slot was never filled,
- Single(value): exactly one raw token,
- Multiple(values): the tokens captured by a variadic slot.

Options hold either Boolean(flag) (no arguments) or Arguments(mapping), the
per-argument values of an option that carries arguments.

Values are immutable, hashable and compare by kind and payload, so they can be
matched structurally:

    match result.arguments["files"]:
        case Multiple(files): ...
        case Single(file): ...
        case AbsentType(): ...

Everything stays a raw string here; conversion is the job of
commandeer.extraction.
"""
import functools
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import final


@final
class AbsentType:
    """
    Singleton marking a slot that received no token.

    Falsey, printable as "Absent" and non-subclassable.
    """
    __match_args__ = ()

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Absent"

    def __reduce__(self):
        return "Absent"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'AbsentType' is not an acceptable base type")


class _Value:
    """
    Shared plumbing: a single immutable payload named by __match_args__.
    """
    __slots__ = ("_payload",)
    __match_args__ = ()

    def __init__(self, payload):
        object.__setattr__(self, "_payload", payload)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__!r} object is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__!r} object is immutable")

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self._payload == other._payload

    def __hash__(self):
        return hash((type(self).__name__, self._payload))

    def __repr__(self):
        return f"{type(self).__name__}({self._payload!r})"

    def __rich_repr__(self):
        yield self._payload


@final
class Single(_Value):
    __slots__ = ()
    __match_args__ = ("value",)

    def __init__(self, value):
        if not isinstance(value, str):
            raise TypeError("Single() argument must be a string")
        super().__init__(value)

    @property
    def value(self):
        return self._payload


@final
class Multiple(_Value):
    __slots__ = ()
    __match_args__ = ("values",)

    def __init__(self, values):
        if not isinstance(values, Iterable) or isinstance(values, str):
            raise TypeError("Multiple() argument must be an iterable of strings")
        values = tuple(values)
        if not all(isinstance(value, str) for value in values):
            raise TypeError("Multiple() argument must be an iterable of strings")
        super().__init__(values)

    @property
    def values(self):
        return self._payload

    def __len__(self):
        return len(self._payload)

    def __iter__(self):
        return iter(self._payload)


@final
class Boolean(_Value):
    __slots__ = ()
    __match_args__ = ("flag",)

    def __init__(self, flag):
        if not isinstance(flag, bool):
            raise TypeError("Boolean() argument must be a bool")
        super().__init__(flag)

    @property
    def flag(self):
        return self._payload

    def __bool__(self):
        return self._payload


@final
class Arguments(_Value):
    """
    Values of an option that carries arguments, keyed by argument name.
    """
    __slots__ = ()
    __match_args__ = ("values",)

    def __init__(self, values):
        if not isinstance(values, Mapping):
            raise TypeError("Arguments() argument must be a mapping")
        for name, value in values.items():
            if not isinstance(name, str):
                raise TypeError("Arguments() keys must be strings")
            if not isinstance(value, Single | Multiple | AbsentType):
                raise TypeError("Arguments() values must be parsed values")
        super().__init__(MappingProxyType(dict(values)))

    @property
    def values(self):
        return self._payload

    def __getitem__(self, name):
        return self._payload[name]

    def __iter__(self):
        return iter(self._payload)

    def __len__(self):
        return len(self._payload)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return dict(self._payload) == dict(other._payload)

    def __hash__(self):
        return hash((type(self).__name__, frozenset(self._payload.items())))

    def __repr__(self):
        return f"{type(self).__name__}({dict(self._payload)!r})"

    def __rich_repr__(self):
        yield dict(self._payload)


class ParseResult:
    """
    Outcome of a successful parse.

    - arguments: positional argument name → Absent | Single | Multiple
    - options: option name → Boolean | Arguments

    Both mappings are read-only; a fresh result is built on every parse.
    """
    __slots__ = ("_arguments", "_options")

    def __init__(self, arguments=(), options=()):
        object.__setattr__(self, "_arguments", MappingProxyType(dict(arguments)))
        object.__setattr__(self, "_options", MappingProxyType(dict(options)))

    @property
    def arguments(self):
        return self._arguments

    @property
    def options(self):
        return self._options

    def __setattr__(self, name, value):
        raise AttributeError("'ParseResult' object is immutable")

    def __eq__(self, other):
        if not isinstance(other, ParseResult):
            return NotImplemented
        return dict(self._arguments) == dict(other._arguments) and dict(self._options) == dict(other._options)

    __hash__ = None

    def __repr__(self):
        return f"ParseResult(arguments={dict(self._arguments)!r}, options={dict(self._options)!r})"

    def __rich_repr__(self):
        yield "arguments", dict(self._arguments)
        yield "options", dict(self._options)


Absent = AbsentType()
"""
The value of every slot that received no token.
"""


__all__ = (
    # Types
    "AbsentType",
    "Single",
    "Multiple",
    "Boolean",
    "Arguments",
    "ParseResult",

    # Constants
    "Absent",
)
