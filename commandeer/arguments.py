r"""
Commandeer definition model: positional arguments and flagged options.

Overview
- Definitions
  • Argument: a positional slot (required or optional, single or variadic).
    The same type describes the arguments nested under an option.
  • Option: a named switch with a short flag (-o), a long flag (--out) or
    both, optionally carrying its own ordered list of Arguments.
    Zero arguments → boolean flag; one → single-value option; more → structured option.

- String forms
  • argument("<file>"), argument("[file]"), argument("<files...>")
  • option("-o, --out <path> [mode]")
  Both build the same immutable definitions as the classes.

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes
    the fields listed in __introspectable__ as read-only properties.

Metadata (sanitized on construction)
- Shared
  • descr: Unset | str | Text (short help), non-empty when provided.
- Argument
  • name: identifier-like word, letters/digits/'_'/'-', not starting with a digit or '-'.
  • required, variadic: bool.
- Option
  • flags: at most one short flag "-x" and at most one long flag "--long-name",
    at least one overall.
  • arguments: iterable of Argument, kept in order.
  • required: bool.

Ordering rules between arguments (required after optional, variadic last,
unique names) are not checked here; see commandeer.validation.

Quick example:
    >>> from commandeer.arguments import Argument, Option, argument, option
    >>> files = argument("<files...>", descr="files to process")
    >>> out = option("-o, --out <path>", descr="where to write")
    >>> verbose = Option("-v", "--verbose")
    >>> out.name, files.metavar
    ('out', '<files...>')
"""
import functools
import operator
import re
from collections.abc import Iterable

from rich.text import Text

from .utils import *


class ArgumentType(type):
    """
    Metaclass giving definitions a uniform, introspectable surface.

    Responsibilities
    - Derive __typename__ from the class name (camel-case split with hyphens),
      used in messages and reprs.
    - Expose every name listed in __introspectable__ as a read-only property
      backed by the private "_{name}" field (see mirror()).
    - Provide stable __repr__/__rich_repr__ implementations; __displayable__
      (if set) narrows what is shown, otherwise __introspectable__ is used.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - option(flags=('-v', '--verbose'), required=False, ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate the shared 'descr' field.

    - descr: optional short description. Unset becomes None; a provided string
      must be non-empty after trimming.

    Mutates the metadata dict in place.
    """
    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")

    metadata["descr"] = coalesce(descr)


def _sanitize_argument_metadata(cls, metadata, /):
    r"""
    Internal: validate the name of a positional or option argument.

    Name format regex: r"[^\W\d][\w-]*"
    - starts with a Unicode letter or '_'.
    - continues with letters, digits, '_' or '-'.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not (name := name.strip()):
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
    elif not re.fullmatch(r"[^\W\d][\w-]*", name):
        raise ValueError(f"{cls.__typename__} 'name' must be a word made of letters, digits, '_' or '-'")
    metadata["name"] = name


def _sanitize_option_metadata(cls, metadata, /):
    r"""
    Internal: validate and normalize the flags and arguments of an option.

    Responsibilities
    - flags: required, at most one short and one long spelling.
        - short: r"-[^\W_]"                 e.g. "-o", "-2"
        - long:  r"--[^\W\d_](-?[^\W_]+)*"  e.g. "--out", "--dry-run"
      They are split into 'short' and 'long' fields and normalized into the
      'flags' tuple (short first).
    - arguments: iterable of Argument, stored as a list (exposed as a tuple).

    Raises
    - TypeError: when flags are missing or not strings, or arguments are not Arguments.
    - ValueError: when a flag is malformed or a second short/long flag is given.
    """
    if not metadata["flags"]:
        raise TypeError(f"{cls.__typename__} must specify at least one flag")

    short = long = None
    for flag in metadata["flags"]:
        if not isinstance(flag, str):
            raise TypeError(f"{cls.__typename__} flags must be strings")
        elif not (flag := flag.strip()):
            raise ValueError(f"{cls.__typename__} flags cannot be empty-strings")
        elif re.fullmatch(r"-[^\W_]", flag):
            if short is not None:
                raise ValueError(f"{cls.__typename__} can declare at most one short flag")
            short = flag
        elif re.fullmatch(r"--[^\W\d_](-?[^\W_]+)*", flag):
            if long is not None:
                raise ValueError(f"{cls.__typename__} can declare at most one long flag")
            long = flag
        else:
            raise ValueError(f"{cls.__typename__} flag {flag!r} must look like '-x' or '--name'")

    metadata["short"] = short
    metadata["long"] = long
    metadata["flags"] = tuple(flag for flag in (short, long) if flag is not None)

    if not isinstance(arguments := metadata["arguments"], Iterable) or isinstance(arguments, str):
        raise TypeError(f"{cls.__typename__} 'arguments' must be an iterable of arguments")
    arguments = list(arguments)
    for argument in arguments:
        if not isinstance(argument, Argument):
            raise TypeError(f"{cls.__typename__} 'arguments' must be an iterable of arguments")
    metadata["arguments"] = arguments


class Argument(metaclass=ArgumentType):
    """
    Positional argument definition.

    Also used for the arguments nested under an Option. Instances are
    immutable: every field is exposed through a read-only property.

    Properties
    - name: unique name within the owning list; key in ParseResult.
    - required: whether parsing fails when the slot stays empty.
    - variadic: whether the slot collects every following non-flag token.
    - descr: short help text or None.
    - metavar: usage label, e.g. "<file>", "[file]", "<files...>".
    """

    __introspectable__ = (
        "name",
        "required",
        "variadic",
        "descr",
    )

    def __new__(cls, name, /, required=True, variadic=False, descr=Unset):
        """
        Construct an Argument definition.

        Parameters
        - name: str
          Identifier-like word; becomes the key in the parse result.
        - required: bool
          Required arguments must be filled; defaults to True.
        - variadic: bool
          Variadic arguments capture the whole run of following non-flag tokens.
        - descr: Unset | str | Text
          Short description for help. If Unset, becomes None.
        """
        metadata = {
            "name": name,
            "required": bool(required),
            "variadic": bool(variadic),
            "descr": descr,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_argument_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @property
    def metavar(self):
        label = self.name + "..." * self.variadic
        return f"<{label}>" if self.required else f"[{label}]"


class Option(metaclass=ArgumentType):
    """
    Flagged option definition.

    Properties
    - flags: the declared spellings, short first.
    - short / long: the individual spellings (None when not declared).
    - name: the long flag without "--", else the short flag without "-";
      key in ParseResult.options.
    - arguments: ordered Arguments consumed right after the flag.
    - required: whether parsing fails when the option is never given.
    - descr: short help text or None.
    """

    __introspectable__ = (
        "flags",
        "short",
        "long",
        "arguments",
        "required",
        "descr",
    )

    __displayable__ = (
        "flags",
        "arguments",
        "required",
        "descr",
    )

    def __new__(cls, *flags, arguments=(), required=False, descr=Unset):
        """
        Construct an Option definition.

        Parameters
        - flags: one or two str
          "-x" and/or "--name"; at most one of each.
        - arguments: Iterable[Argument]
          Arguments matched after the flag, in order.
        - required: bool
          Whether the option must appear at least once; defaults to False.
        - descr: Unset | str | Text
          Short description for help. If Unset, becomes None.
        """
        metadata = {
            "flags": flags,
            "arguments": arguments,
            "required": bool(required),
            "descr": descr,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_option_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @property
    def name(self):
        if self._long is not None:
            return self._long[2:]
        return self._short[1:]

    @property
    def metavar(self):
        return " ".join(argument.metavar for argument in self._arguments)


def _parse_metavar(source, /, descr=Unset):
    """
    Internal: build an Argument from "<name>", "[name]" or their "..." forms.
    """
    if match := re.fullmatch(r"<([^\s<>\[\]]+?)(\.\.\.)?>", source):
        required = True
    elif match := re.fullmatch(r"\[([^\s<>\[\]]+?)(\.\.\.)?\]", source):
        required = False
    else:
        raise ValueError(f"argument {source!r} must look like '<name>', '[name]', '<name...>' or '[name...]'")
    return Argument(match[1], required=required, variadic=bool(match[2]), descr=descr)


def argument(source, /, descr=Unset):
    """
    Build an Argument from its usage form.

    - "<file>"      → required
    - "[file]"      → optional
    - "<files...>"  → required, variadic
    - "[files...]"  → optional, variadic
    """
    if not isinstance(source, str):
        raise TypeError("argument() first argument must be a string")
    return _parse_metavar(source.strip(), descr)


def option(source, /, required=False, descr=Unset):
    """
    Build an Option from its usage form.

    The leading segments starting with '-' are the flags (trailing commas are
    ignored); every following segment is an argument in "<name>"/"[name]" form.

    Examples
    - option("-v, --verbose")
    - option("--out <path>")
    - option("-r, --range <start> [end]", required=True)
    """
    if not isinstance(source, str):
        raise TypeError("option() first argument must be a string")

    flags = []
    arguments = []
    for segment in source.split():
        if segment.startswith("-") and not arguments:
            if flag := segment.rstrip(","):
                flags.append(flag)
        else:
            arguments.append(_parse_metavar(segment))

    if not flags:
        raise ValueError(f"option {source!r} must start with at least one flag")

    return Option(*flags, arguments=arguments, required=required, descr=descr)


__all__ = (
    # Classes (definitions)
    "Argument",
    "Option",

    # Factories (usage-form builders)
    "argument",
    "option",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del ArgumentType
