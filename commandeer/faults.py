"""
Commandeer faults (definition errors, parse errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing fault.
  Codes are grouped by domain to keep logs and searches predictable.
- DefinitionError family: developer mistakes found before any token is read.
  They are plain ValueErrors, raised eagerly and never rendered.
- CommandException family: user input mistakes. They carry a message plus
  options (title, code, hint, docs and context such as the offending token)
  and know how to render themselves with rich.
- trigger(): central entry point to surface a fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.
- Lowercased tone with readable styling (configurable via __styles__ in __main__).

Integration
- The matcher raises ParseError subclasses with their context attached.
- Program.trigger() enriches them with hints and runtime options and hands them
  to trigger(): in non-shell mode the exception is raised, in shell mode it is
  rendered on stderr and the process exits with status 1.
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the package (stable identifiers).

    grouping (by high-level domain)
    - definitions (1011x)
      • REQUIRED_AFTER_OPTIONAL, VARIADIC_NOT_LAST, DUPLICATED_NAME, DUPLICATED_FLAG
    - routing (1110x)
      • UNKNOWN_COMMAND
    - options/flags (1111x)
      • INVALID_OPTION_FLAG, MISSING_OPTION_ARGUMENTS
    - positionals (1112x)
      • TOO_MANY_ARGUMENTS, MISSING_REQUIRED_ARGUMENTS, MISSING_REQUIRED_OPTIONS
    - extraction (1113x)
      • UNCASTABLE_VALUE

    normalize() lets the host remap the numeric ids to its own labels.
    """
    # --- definition errors (10xxx) ---
    REQUIRED_AFTER_OPTIONAL     = 10111
    VARIADIC_NOT_LAST           = 10112
    DUPLICATED_NAME             = 10113
    DUPLICATED_FLAG             = 10114

    # --- routing errors (11xxx) ---
    UNKNOWN_COMMAND             = 11101

    # --- option/flag errors (11xxx) ---
    INVALID_OPTION_FLAG         = 11112
    MISSING_OPTION_ARGUMENTS    = 11117

    # --- positional/completeness errors (11xxx) ---
    TOO_MANY_ARGUMENTS          = 11121
    MISSING_REQUIRED_ARGUMENTS  = 11125
    MISSING_REQUIRED_OPTIONS    = 11126

    # --- extraction errors (11xxx) ---
    UNCASTABLE_VALUE            = 11131

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class DefinitionError(ValueError):
    """
    Base for broken program definitions.

    These are bugs in the embedding program, not in the user's input: they are
    raised while definitions are validated and the program should refuse to run.
    """
    code = Unset

    def __init__(self, message, /):
        super().__init__(message)
        self.message = message


class RequiredAfterOptionalError(DefinitionError):
    code = FaultCode.REQUIRED_AFTER_OPTIONAL

    def __init__(self, optional, required, /):
        super().__init__(
            "required argument %r cannot appear after optional argument %r" % (required, optional)
        )
        self.optional = optional
        self.required = required


class VariadicNotLastError(DefinitionError):
    code = FaultCode.VARIADIC_NOT_LAST

    def __init__(self, variadic, /):
        super().__init__("variadic argument %r cannot appear before any other arguments" % variadic)
        self.variadic = variadic


class DuplicatedNameError(DefinitionError):
    code = FaultCode.DUPLICATED_NAME

    def __init__(self, name, /):
        super().__init__("name %r is already in use" % name)
        self.name = name


class DuplicatedFlagError(DefinitionError):
    code = FaultCode.DUPLICATED_FLAG

    def __init__(self, flag, /):
        super().__init__("flag %r is claimed by more than one option" % flag)
        self.flag = flag


class CommandException(Exception):
    """
    Base for user-facing faults.

    The message is a single lowercase sentence. Everything else travels in the
    read-only 'options' mapping: presentation keys (title, code, hint, docs,
    prog, shell, fancy, colorful) and context keys specific to each fault
    (token, tokens, names, option, result, ...). Context keys are also
    readable as attributes, e.g. error.names.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = MappingProxyType(options)

    def __getattr__(self, name):
        # Only reached when regular lookup fails; never recurse through 'options'.
        if name == "options" or name.startswith("__"):
            raise AttributeError(name)
        try:
            return self.__dict__["options"][name]
        except KeyError:
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}") from None

    def __rich__(self):
        main = __import__("__main__")

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

        colorful = self.options.get("colorful", False)
        fancy = self.options.get("fancy", False)

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", self.options.get("prog", "commandeer")), styler("prog-name"))

        try:
            code = self.options["code"].normalize()
        except KeyError:
            code = "?"

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code, styler("code")),
            " | ",
            text(self.options.get("title", "error").title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))

        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))
        if docs := self.options.get("docs"):
            renders.append(text(docs, styler("hint")))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left", width=console.width - 4)

        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ParseError(CommandException):
    """
    Base for faults raised by the matcher.

    Every parse error carries 'result', the partial ParseResult assembled
    before the fault was detected.
    """


class InvalidOptionFlagError(ParseError): ...
class TooManyArgumentsError(ParseError): ...
class MissingRequiredArgumentsError(ParseError): ...
class MissingRequiredOptionsError(ParseError): ...
class MissingRequiredArgumentsForOptionError(ParseError): ...
class UnknownCommandError(CommandException): ...
class UncastableValueError(CommandException): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into the fault via copy.replace() before triggering.
    - in shell mode, rendering happens via the rich console and the process
      exits; otherwise, the exception is raised.

    typical options
    - prog, shell, fancy, colorful, title, code, hint, docs.
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
    when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "DefinitionError",
    "RequiredAfterOptionalError",
    "VariadicNotLastError",
    "DuplicatedNameError",
    "DuplicatedFlagError",
    "CommandException",
    "ParseError",
    "InvalidOptionFlagError",
    "TooManyArgumentsError",
    "MissingRequiredArgumentsError",
    "MissingRequiredOptionsError",
    "MissingRequiredArgumentsForOptionError",
    "UnknownCommandError",
    "UncastableValueError",
    "trigger",
    "getdoc",
)
