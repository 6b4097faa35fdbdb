"""
Definition validation: reject nonsensical argument and option lists before
any user token is read.

Checks (left to right over each list, first violation wins)
- a required argument after an optional one → RequiredAfterOptionalError
- any argument after a variadic one         → VariadicNotLastError
- the same name twice                        → DuplicatedNameError

Option lists are additionally checked for flags or names claimed twice
(DuplicatedFlagError / DuplicatedNameError), and every option's own argument
list goes through validate().

These are developer errors: they mean the program itself is broken. Program
and Command run them at construction time, parse() runs them again as a gate.
"""
from .arguments import Argument, Option
from .faults import (
    RequiredAfterOptionalError,
    VariadicNotLastError,
    DuplicatedNameError,
    DuplicatedFlagError,
)


def validate(arguments, /):
    """
    Check the ordering rules of one argument list.

    Returns None when the list is sound; raises a DefinitionError otherwise.
    """
    optional = variadic = None
    names = set()

    for argument in arguments:
        if not isinstance(argument, Argument):
            raise TypeError("validate() argument must be an iterable of arguments")
        if argument.required and optional is not None:
            raise RequiredAfterOptionalError(optional.name, argument.name)
        if variadic is not None:
            raise VariadicNotLastError(variadic.name)
        if argument.name in names:
            raise DuplicatedNameError(argument.name)

        names.add(argument.name)
        if not argument.required and optional is None:
            optional = argument
        if argument.variadic:
            variadic = argument


def validate_options(options, /):
    """
    Check an option list: each option's arguments, then flag and name clashes.
    """
    flags = set()
    names = set()

    for option in options:
        if not isinstance(option, Option):
            raise TypeError("validate_options() argument must be an iterable of options")
        validate(option.arguments)

        for flag in option.flags:
            if flag in flags:
                raise DuplicatedFlagError(flag)
            flags.add(flag)

        if option.name in names:
            raise DuplicatedNameError(option.name)
        names.add(option.name)


__all__ = (
    "validate",
    "validate_options",
)
