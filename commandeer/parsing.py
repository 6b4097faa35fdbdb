"""
The matcher: turn raw tokens into a ParseResult against one argument/option set.

Algorithm
- seeding
  • every positional argument starts as Absent.
  • every option starts as Boolean(False), or Arguments(all Absent) when it
    carries arguments.
- loop (one token at a time)
  • exact flag match → the option is recorded:
      – no arguments: Boolean(True) (repeating it changes nothing).
      – with arguments: its arguments are filled in order from the following
        non-flag tokens; a variadic one takes the whole run and ends matching.
        Fewer than the required count → MissingRequiredArgumentsForOptionError.
  • flag-shaped but unknown → InvalidOptionFlagError, immediately.
  • positional → the next argument slot; a variadic slot takes this token and
    every following non-flag token. No slot left → TooManyArgumentsError with
    this token and everything after it.
- completeness (after the last token)
  • unfilled required arguments → MissingRequiredArgumentsError
  • required options never given → MissingRequiredOptionsError (all of them)

Flags may be interleaved with positionals in any order. A repeated option
overwrites its previous value and its presence alone satisfies 'required'.

Limitation: a value starting with '-' (a negative number, a path like '-x')
is always taken for a flag and never captured by a positional or variadic slot.
"""
from .faults import *
from .tokens import TokenStream, isflag
from .utils import pluralize, ordinal
from .validation import validate, validate_options
from .values import Absent, Single, Multiple, Boolean, Arguments, ParseResult


def _drain(stream):
    """
    Consume the run of non-flag tokens at the head of the stream.
    """
    while stream and not stream.peek_is_flag():
        yield next(stream)


class _Matcher:
    """
    Per-call matching state; never shared between parses.
    """

    def __init__(self, stream, arguments, options):
        self.stream = stream
        self.total = len(stream)
        self.arguments = arguments
        self.options = options
        self.flags = {flag: option for option in options for flag in option.flags}

        self.values = {argument.name: Absent for argument in arguments}
        self.switches = {
            option.name: Arguments(dict.fromkeys((argument.name for argument in option.arguments), Absent))
            if option.arguments else Boolean(False)
            for option in options
        }
        self.seen = set()
        self.index = 0

    @property
    def position(self):
        # 1-based position of the last consumed token
        return self.total - len(self.stream)

    def snapshot(self):
        return ParseResult(self.values, self.switches)

    def run(self):
        for token in self.stream:
            if (option := self.flags.get(token)) is not None:
                self.seen.add(option.name)
                if option.arguments:
                    self.switches[option.name] = self.match_option(option, token)
                else:
                    self.switches[option.name] = Boolean(True)
            elif isflag(token):
                raise InvalidOptionFlagError(
                    "unknown option or flag %r at %s position" % (token, ordinal(self.position)),
                    title="unknown option or flag",
                    code=FaultCode.INVALID_OPTION_FLAG,
                    token=token,
                    index=self.position,
                    docs=getdoc(FaultCode.INVALID_OPTION_FLAG),
                    result=self.snapshot(),
                )
            else:
                self.match_positional(token)

        self.check_arguments()
        self.check_options()
        return self.snapshot()

    def match_option(self, option, token):
        collected = dict.fromkeys((argument.name for argument in option.arguments), Absent)
        filled = 0

        for argument in option.arguments:
            if not self.stream or self.stream.peek_is_flag():
                break
            filled += 1
            if argument.variadic:
                collected[argument.name] = Multiple(_drain(self.stream))
                break
            collected[argument.name] = Single(next(self.stream))

        required = sum(argument.required for argument in option.arguments)
        if filled < required:
            self.switches[option.name] = Arguments(collected)
            names = tuple(argument.name for argument in option.arguments[filled:] if argument.required)
            raise MissingRequiredArgumentsForOptionError(
                "missing required %s for option %r: %s" % (
                    pluralize("argument", len(names)), token, ", ".join(names)
                ),
                title="missing option arguments",
                code=FaultCode.MISSING_OPTION_ARGUMENTS,
                option=option.name,
                flag=token,
                names=names,
                index=self.position,
                docs=getdoc(FaultCode.MISSING_OPTION_ARGUMENTS),
                result=self.snapshot(),
            )

        return Arguments(collected)

    def match_positional(self, token):
        if self.index >= len(self.arguments):
            tokens = (token, *self.stream.remaining())
            raise TooManyArgumentsError(
                "%s not expected from %s position: %s" % (
                    pluralize("argument", len(tokens)), ordinal(self.position), ", ".join(map(repr, tokens))
                ),
                title="too many arguments",
                code=FaultCode.TOO_MANY_ARGUMENTS,
                tokens=tokens,
                index=self.position,
                docs=getdoc(FaultCode.TOO_MANY_ARGUMENTS),
                result=self.snapshot(),
            )

        argument = self.arguments[self.index]
        if argument.variadic:
            self.values[argument.name] = Multiple((token, *_drain(self.stream)))
        else:
            self.values[argument.name] = Single(token)
        # a variadic slot is always the last one, so this moves past the end
        self.index += 1

    def check_arguments(self):
        required = sum(argument.required for argument in self.arguments)
        if self.index >= required:
            return
        names = tuple(argument.name for argument in self.arguments[self.index:] if argument.required)
        raise MissingRequiredArgumentsError(
            "missing required %s: %s" % (pluralize("argument", len(names)), ", ".join(names)),
            title="missing arguments",
            code=FaultCode.MISSING_REQUIRED_ARGUMENTS,
            names=names,
            docs=getdoc(FaultCode.MISSING_REQUIRED_ARGUMENTS),
            result=self.snapshot(),
        )

    def check_options(self):
        names = tuple(option.name for option in self.options if option.required and option.name not in self.seen)
        if not names:
            return
        raise MissingRequiredOptionsError(
            "missing required %s: %s" % (pluralize("option", len(names)), ", ".join(names)),
            title="missing options",
            code=FaultCode.MISSING_REQUIRED_OPTIONS,
            names=names,
            docs=getdoc(FaultCode.MISSING_REQUIRED_OPTIONS),
            result=self.snapshot(),
        )


def parse(tokens, /, arguments=(), options=()):
    """
    Match tokens against an argument list and an option list.

    Parameters
    - tokens: Iterable[str] | TokenStream
      The argument vector without the program path.
    - arguments: Iterable[Argument]
      Positional definitions, in order.
    - options: Iterable[Option]
      Option definitions.

    Returns
    - ParseResult with one entry per declared argument and option.

    Raises
    - DefinitionError: when the definitions themselves are broken (checked first).
    - ParseError subclass: when the tokens do not fit the definitions; the
      partial result is available as error.result.
    """
    arguments = tuple(arguments)
    options = tuple(options)
    validate(arguments)
    validate_options(options)

    stream = tokens if isinstance(tokens, TokenStream) else TokenStream(tokens)
    return _Matcher(stream, arguments, options).run()


__all__ = (
    "parse",
)
