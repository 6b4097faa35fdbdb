"""
Commandeer command layer: group definitions, select one per run, report faults.

What this module provides
- Command: a named argument/option set (a sub-command), with an optional
  action receiving the ParseResult.
- Program: the top-level argument/option set plus any number of Commands.
  • run(prompt): normalize the prompt, honour the reserved 'help' literal,
    select the command, parse, call the action and return an Invocation.
  • trigger(fault): enrich a fault with a hint built from the definitions
    (suggestions for mistyped flags, listings for the rest) and surface it.
  • help(command): rich-based help rendering, color-aware and optionally
    framed in a panel.

Selection rules
- "help" [command] renders help instead of parsing.
- a first token naming a command selects it; the rest is parsed against it.
- otherwise the top-level set is used. When the top level declares nothing
  but commands exist, an empty prompt renders help and any other first token
  is an unknown command.

Quick start
    from commandeer import Program, Command, argument, option

    program = Program(
        "tool",
        commands=[
            Command(
                "copy",
                arguments=[argument("<sources...>")],
                options=[option("-t, --target <dir>", required=True), option("-v, --verbose")],
                descr="copy files into a directory",
            ),
        ],
        version="1.0.0",
        shell=True,
        colorful=True,
    )

    if __name__ == "__main__":
        invocation = program.run()

See also
- commandeer.parsing for the matching algorithm.
- commandeer.faults for fault codes and rendering behavior.
"""
import collections
import difflib
import functools
import operator
import os.path
import re
import shlex
import sys
from collections import defaultdict, deque
from collections.abc import Iterable

from rich.box import ROUNDED
from rich.console import Console, Group
from rich.containers import Lines
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .arguments import Argument, Option
from .faults import *
from .parsing import parse
from .suggestions import suggest
from .utils import *
from .validation import validate, validate_options

Invocation = collections.namedtuple("Invocation", (
    "command",
    "result",
))
Invocation.__doc__ = """
Outcome of a successful Program.run(): the selected Command (None for the
top level) and its ParseResult.
"""


class CommandType(type):
    """
    Metaclass giving Command and Program an introspectable surface.

    - __typename__ is derived from the class name (camel-case split with hyphens).
    - names listed in __introspectable__ become read-only properties over "_{name}".
    - __repr__/__rich_repr__ show __displayable__ (or __introspectable__).
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
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate the fields shared by Command and Program.

    - name: a single shell word that does not start with "-".
    - descr: Unset | str | Text, non-empty when provided; Unset becomes None.
    - arguments/options: iterables of Argument/Option, validated as lists so a
      broken definition fails at construction time.
    - action: Unset | callable; Unset becomes None.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not (name := name.strip()):
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
    elif not re.fullmatch(r"[^\s-]\S*", name):
        raise ValueError(f"{cls.__typename__} 'name' must be a shell-friendly word")
    metadata["name"] = name

    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)

    for field, kind in (("arguments", Argument), ("options", Option)):
        if not isinstance(objects := metadata[field], Iterable) or isinstance(objects, str):
            raise TypeError(f"{cls.__typename__} '{field}' must be an iterable of {field}")
        objects = list(objects)
        if not all(isinstance(object, kind) for object in objects):
            raise TypeError(f"{cls.__typename__} '{field}' must be an iterable of {field}")
        metadata[field] = objects

    validate(metadata["arguments"])
    validate_options(metadata["options"])

    if (action := metadata["action"]) is not Unset and not callable(action):
        raise TypeError(f"{cls.__typename__} 'action' must be callable")
    metadata["action"] = coalesce(action)


class Command(metaclass=CommandType):
    """
    A named argument/option set selected by the first token of the prompt.

    Properties
    - name: the token selecting this command.
    - descr: short description or None.
    - arguments / options: the definitions matched against the rest of the prompt.
    - action: callable receiving the ParseResult after a successful parse, or None.
    """

    __introspectable__ = (
        "name",
        "descr",
        "arguments",
        "options",
        "action",
    )

    __displayable__ = (
        "name",
        "descr",
        "arguments",
        "options",
    )

    def __new__(cls, name, /, arguments=(), options=(), descr=Unset, action=Unset):
        """
        Construct a Command.

        Parameters
        - name: str
          Selecting token; "help" is reserved by Program.
        - arguments: Iterable[Argument]
        - options: Iterable[Option]
        - descr: Unset | str | Text
        - action: Unset | Callable[[ParseResult], Any]

        Raises
        - TypeError/ValueError: malformed metadata.
        - DefinitionError: arguments or options break the ordering rules.
        """
        metadata = {
            "name": name,
            "descr": descr,
            "arguments": arguments,
            "options": options,
            "action": action,
        }
        _sanitize_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self


class Program(metaclass=CommandType):
    """
    A whole command-line interface: a top-level set plus its commands.

    Runtime flags
    - shell: render faults on stderr and exit with status 1 instead of raising.
    - fancy: frame help and faults in rich panels.
    - colorful: apply the palette (overridable through __styles__ in __main__).
    """

    __introspectable__ = (
        "name",
        "descr",
        "version",
        "arguments",
        "options",
        "commands",
        "action",
        "shell",
        "fancy",
        "colorful",
    )

    __displayable__ = (
        "name",
        "descr",
        "version",
        "arguments",
        "options",
        "commands",
        "shell",
        "fancy",
        "colorful",
    )

    def __new__(
            cls,
            name=Unset,
            /,
            arguments=(),
            options=(),
            commands=(),
            descr=Unset,
            version=Unset,
            action=Unset,
            *,
            shell=False,
            fancy=False,
            colorful=False,
    ):
        """
        Construct a Program.

        Parameters
        - name: Unset | str
          Program name shown in usage and fault headers; defaults to the
          basename of sys.argv[0].
        - arguments / options: top-level definitions.
        - commands: Iterable[Command]; names must be unique and "help" is reserved.
        - descr, version: Unset | str | Text
        - action: Unset | Callable[[ParseResult], Any] for the top-level set.
        - shell, fancy, colorful: runtime flags (see class docstring).
        """
        metadata = {
            "name": coalesce(name, os.path.basename(sys.argv[0]).lstrip("-") or "program"),
            "descr": descr,
            "arguments": arguments,
            "options": options,
            "action": action,
        }
        _sanitize_metadata(cls, metadata)

        if not isinstance(version, str | Text | Unset):
            raise TypeError(f"{cls.__typename__} 'version' must be a string")
        elif isinstance(version, str) and not (version := version.strip()):
            raise ValueError(f"{cls.__typename__} 'version' cannot be empty")
        metadata["version"] = coalesce(version)

        if not isinstance(commands, Iterable) or isinstance(commands, str):
            raise TypeError(f"{cls.__typename__} 'commands' must be an iterable of commands")
        children = {}
        for command in commands:
            if not isinstance(command, Command):
                raise TypeError(f"{cls.__typename__} 'commands' must be an iterable of commands")
            if command.name == "help":
                raise ValueError(f"{cls.__typename__} command name 'help' is reserved")
            if children.setdefault(command.name, command) is not command:
                raise ValueError(f"{cls.__typename__} command name {command.name!r} is already in use")
        metadata["commands"] = children

        metadata["shell"] = bool(shell)
        metadata["fancy"] = bool(fancy)
        metadata["colorful"] = bool(colorful)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    def _route(self, command=None):
        return " ".join(filter(None, (self.name, "help", command and command.name)))

    def _resolve(self, name, /):
        """
        Return the command registered under 'name', or trigger UnknownCommandError.
        """
        try:
            return self._commands[name]
        except KeyError:
            pass

        suggestions = difflib.get_close_matches(name, self._commands.keys(), 5)
        try:
            hint = "did you mean %r? you can also run '%s' to see available commands" % (
                suggestions[0], self._route()
            )
        except IndexError:
            hint = "run '%s' to see available commands" % self._route()

        return self.trigger(UnknownCommandError(
            "unknown command %r" % name,
            title="unknown command",
            code=FaultCode.UNKNOWN_COMMAND,
            input=name,
            suggestions=tuple(suggestions),
            hint=hint,
            docs=getdoc(FaultCode.UNKNOWN_COMMAND),
        ))

    def _hint(self, fault, command):
        """
        Build the default hint for a parse fault from the selected definitions.
        """
        arguments = (command or self).arguments
        options = (command or self).options
        route = self._route(command)
        label = "'%s'" % command.name if command else "this program"

        def listing(definitions):
            return ", ".join(_flags(definition) if isinstance(definition, Option) else definition.metavar
                             for definition in definitions)

        match fault:
            case InvalidOptionFlagError():
                candidates = [flag for option in options for flag in option.flags]
                if suggestion := suggest(fault.token, candidates):
                    return "%s%s you can also run '%s' to see all options" % (suggestion[0].lower(), suggestion[1:], route)
                if candidates:
                    return "available options are: %s" % listing(options)
                return "%s takes no options" % label
            case TooManyArgumentsError() | MissingRequiredArgumentsError():
                if arguments:
                    return "arguments for %s are: %s" % (label, listing(arguments))
                return "%s takes no arguments, run '%s' for details" % (label, route)
            case MissingRequiredOptionsError():
                return "options for %s are: %s" % (label, listing(options))
            case MissingRequiredArgumentsForOptionError():
                option = next(option for option in options if option.name == fault.option)
                return "option %r is defined as: %s" % (fault.flag, " ".join(filter(None, (
                    ", ".join(option.flags), option.metavar
                ))))
            case _:
                return "run '%s' for details" % route

    def trigger(self, fault, /, command=None, **options):
        """
        Surface a fault with this program's runtime options.

        A hint built from the selected definitions is added unless the fault
        already carries one. In shell mode the fault is rendered on stderr and
        the process exits with status 1; otherwise the fault is raised.
        """
        if (
                not hasattr(fault, "__trigger__") or
                not callable(fault.__trigger__) or
                not hasattr(fault, "__replace__") or
                not callable(fault.__replace__)
        ):
            raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
        if not getattr(fault, "options", {}).get("hint"):
            options.setdefault("hint", self._hint(fault, command))
        trigger(fault, **options, prog=self.name, shell=self.shell, fancy=self.fancy, colorful=self.colorful)

    def run(self, prompt=Unset, /):
        """
        Execute this program with a token stream.

        Parameters
        - prompt:
          • Unset: read tokens from sys.argv[1:].
          • str: shell-like string; will be split via shlex.split.
          • Iterable[str]: pre-tokenized sequence.

        Returns
        - Invocation(command, result) after a successful parse (the selected
          action, if any, has been called with the result).
        - None when help was rendered instead.

        Raises
        - TypeError: when prompt is not Unset/str/Iterable[str].
        - ParseError / UnknownCommandError: in non-shell mode.
        """
        if prompt is Unset:
            tokens = sys.argv[1:]
        elif isinstance(prompt, str):
            tokens = shlex.split(prompt)
        elif isinstance(prompt, Iterable):
            tokens = list(prompt)
            if not all(isinstance(token, str) for token in tokens):
                raise TypeError("run() argument must be a string or an iterable of strings")
        else:
            raise TypeError("run() argument must be a string or an iterable of strings")

        tokens = deque(tokens)

        if tokens and tokens[0] == "help":
            tokens.popleft()
            if tokens:
                self.help(tokens[0])
            else:
                self.help()
            return None

        command = None
        if tokens and tokens[0] in self._commands:
            command = self._commands[tokens.popleft()]
        elif self._commands and not self._arguments and not self._options:
            if not tokens:
                self.help()
                return None
            self._resolve(tokens[0])
            return None

        selected = command or self
        try:
            result = parse(tokens, selected._arguments, selected._options)
        except ParseError as fault:
            self.trigger(fault, command)
            return None

        if selected._action is not None:
            selected._action(result)
        return Invocation(command, result)

    def help(self, command=Unset, /, *, console=Unset):
        """
        Render help for the program, or for one of its commands, with rich.

        Palette keys
        - usage-label, program-name, command-name, description-section, version
        - group-label, argument-description, option-name, metavar, required-marker
        - children-title, children-table, children, children-description
        - footer, panel-title

        Customization
        - Define a mapping named __styles__ in __main__ to override any palette entry.
        - When colorful is False, styling is suppressed.
        """
        if isinstance(command, str):
            command = self._resolve(command)
        elif command is not Unset and not isinstance(command, Command):
            raise TypeError("help() argument must be a command or a command name")
        command = coalesce(command)

        console = coalesce(console, Console())
        styles = defaultdict(str, {
            # === Head sections ===
            "usage-label": "bold #00E6FF",  # CYAN → signature info color
            "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
            "command-name": "bold #36C5F0",  # SKY-BLUE → softer than cyan
            "description-section": "italic #A3A3A3",  # Neutral gray
            "version": "#737373",  # Dim gray

            # === Groups / definitions ===
            "group-label": "bold #FFFFFF",  # Pure white headers
            "argument-description": "#9CA3AF",  # Muted gray
            "option-name": "bold #00E6FF",  # CYAN for options
            "metavar": "bold #FFD600",  # AMBER for parameters
            "required-marker": "bold #EF4444",  # RED for required options

            # === Children table ===
            "children-title": "bold #FFFFFF",
            "children-table": "#4B5563",  # Slate border
            "children": "bold #36C5F0",  # Sky-blue commands
            "children-description": "#9CA3AF",

            # === Footer / panel ===
            "footer": "#737373",
            "panel-title": "bold #FF4D94",  # Magenta branding
        } | getattr(__import__('__main__'), "__styles__", {}))

        def styler(style):
            return styles[style] if self.colorful else ""

        def text(fragment, style=""):
            # Normalize to Rich Text. In non-colorful mode, strip styles; preserve existing Text spans.
            if not fragment:
                return Text("")
            if not self.colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        def names(option):
            return Text(", ").join(text(flag, styler("option-name")) for flag in option.flags)

        def metavar(definition):
            return Text(" ").join(text(argument.metavar, styler("metavar")) for argument in (
                definition.arguments if isinstance(definition, Option) else (definition,)
            ))

        selected = command or self
        renders = []
        width = console.width - 4 * self.fancy  # Account for panel gutters when fancy=True

        # Usage line: program (+ command) + options + positionals, wrapped with a hanging indent
        usage = Text()
        usage.append("usage", styler("usage-label")).append(":")
        usage.append(" ")
        usage.append(text(self.name, styler("program-name")))
        if command:
            usage.append(" ").append(text(command.name, styler("command-name")))
        usage.append(" ")

        offset = len(usage)
        inputs = deque()
        if not command and self._commands:
            inputs.append(text("<command>", styler("command-name")))
        for option in selected.options:
            segment = Text(" ").join(part for part in (names(option), metavar(option)) if part)
            inputs.append(segment if option.required else Text.assemble("[", segment, "]"))
        for argument in selected.arguments:
            inputs.append(metavar(argument))

        try:
            lines = Lines([inputs.popleft()])
        except IndexError:
            lines = Lines()
        while inputs:
            if len(lines[-1]) + 1 + len(input := inputs.popleft()) > width - offset:
                lines.append(input)
            else:
                lines[-1].append(Text(" ") + input)
        try:
            usage.append(lines.pop(0))
        except IndexError:
            pass
        for line in lines:
            usage.append("\n").append(" " * offset).append(line)
        renders.append(usage.append("\n"))

        # Description paragraph (+ version for the program page)
        if selected.descr:
            renders.append(text(selected.descr, styler("description-section")).append("\n"))
        if not command and self.version:
            renders.append(Text.assemble(text("version", styler("version")), " ", text(self.version, styler("version")), "\n"))

        # Arguments / options sections with hanging-indent descriptions
        padding = 2
        indent = 24
        for label, definitions in (("arguments", selected.arguments), ("options", selected.options)):
            if not definitions:
                continue
            section = Text()
            section.append(text(label, styler("group-label"))).append(":").append("\n")
            for definition in definitions:
                if isinstance(definition, Option):
                    head = Text(" ").join(part for part in (names(definition), metavar(definition)) if part)
                else:
                    head = metavar(definition)
                row = Text(" " * padding).append(head)

                descr = definition.descr
                if isinstance(definition, Option) and definition.required:
                    descr = Text.assemble(text("(required)", styler("required-marker")), " ", text(descr))
                if descr := text(descr, styler("argument-description")):
                    if len(row) >= indent:
                        row.append("\n").append(" " * indent)
                    else:
                        row.append(" " * (indent - len(row)))
                    wrapped = descr.wrap(console, max(width - indent, 1))
                    try:
                        row.append(wrapped.pop(0))
                    except IndexError:
                        pass
                    for line in wrapped:
                        row.append("\n").append(" " * indent).append(line)
                section.append(row).append("\n")
            renders.append(section)

        # Commands table
        if not command and self._commands:
            table = Table(
                "name", "help",
                title=text("commands", styler("children-title")),
                width=int(width * (2 / 3)),
                box=ROUNDED,
                style=styler("children-table"),
                header_style=styler("children-title"),
            )
            for name, child in self._commands.items():
                if child.descr:
                    help = text(child.descr, styler("children-description"))
                else:
                    help = text("run '%s' for details" % self._route(child), styler("children-description"))
                table.add_row(text(name, styler("children")), help)
            renders.append(table)
            renders.append(text("run '%s <command>' for details on a command" % self._route(), styler("footer")))

        if isinstance(renders[-1], Text):
            renders[-1].rstrip()  # Trim trailing newline on the last chunk

        renderable = Group(*renders)
        if self.fancy:
            title = f"{self.name} {command.name} help" if command else f"{self.name} help"
            renderable = Panel(
                renderable,
                title=Text.assemble("[", " ", title.upper(), " ", "]", style=styler("panel-title")),
                title_align="left",
            )

        console.print(renderable)


def _flags(option):
    return "(%s)" % ", ".join(option.flags)


__all__ = (
    # Public API surface for consumers of commandeer.commands.
    "Command",
    "Program",
    "Invocation",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del CommandType
