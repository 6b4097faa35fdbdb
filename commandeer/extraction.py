"""
Typed extraction: turn a ParseResult into a dataclass instance.

Field lookup
- each dataclass field is looked up among the positional arguments first,
  then among the options; hyphens in definition names map to underscores
  ("dry-run" → dry_run).
- a field with no parsed counterpart means the dataclass and the definitions
  disagree: that is a programming error and raises TypeError.

Conversion (driven by the field annotation)
- Absent              → the field default, else None.
- Single(text)        → annotation(text); str, int, float, Path, enums and
                        any one-argument callable work. X | None is unwrapped.
                        bool accepts true/false, yes/no, 1/0 in any case.
- Multiple(texts)     → list[X] / tuple[X, ...] / set[X] of converted items.
- Boolean(flag)       → flag.
- Arguments(mapping)  → a nested dataclass built the same way, or the lone
                        value when the option carries exactly one argument.

A converter rejecting a user-supplied value is a user error and raises
UncastableValueError.

Example
    >>> @dataclass
    ... class Copy:
    ...     sources: list[Path]
    ...     target: Path
    ...     jobs: int | None = None
    ...     verbose: bool = False
    >>> from_parsed(Copy, parse(["a", "b", "--jobs", "4"], ...))
"""
import dataclasses
import types
import typing

from .faults import FaultCode, UncastableValueError, getdoc
from .values import AbsentType, Single, Multiple, Boolean, Arguments, ParseResult


def _unwrap(annotation):
    """
    Strip None out of an optional annotation (X | None, Optional[X]).
    """
    if typing.get_origin(annotation) in (typing.Union, types.UnionType):
        remaining = [member for member in typing.get_args(annotation) if member is not type(None)]
        if len(remaining) == 1:
            return remaining[0]
    return annotation


def _boolean(text):
    try:
        return _BOOLEANS[text.lower()]
    except KeyError:
        raise ValueError(
            "expected one of %s" % ", ".join(map(repr, _BOOLEANS))
        ) from None


_BOOLEANS = {
    "true": True, "yes": True, "1": True,
    "false": False, "no": False, "0": False,
}


def _cast(annotation, text, name):
    if annotation in (str, typing.Any) or not callable(annotation):
        return text
    # bool() of any non-empty text is True
    converter = _boolean if annotation is bool else annotation
    try:
        return converter(text)
    except (TypeError, ValueError) as exception:
        raise UncastableValueError(
            "invalid value %r for %r" % (text, name),
            title="uncastable value",
            code=FaultCode.UNCASTABLE_VALUE,
            name=name,
            value=text,
            annotation=annotation,
            hint=str(exception),
            docs=getdoc(FaultCode.UNCASTABLE_VALUE),
        ) from exception


def _convert(annotation, value, name):
    annotation = _unwrap(annotation)
    origin = annotation if annotation in (list, tuple, set, frozenset) else typing.get_origin(annotation)

    match value:
        case Boolean(flag):
            return flag
        case Single(text):
            if origin in (list, tuple, set, frozenset):
                return _convert(annotation, Multiple((text,)), name)
            return _cast(annotation, text, name)
        case Multiple(texts):
            if origin not in (list, tuple, set, frozenset):
                raise TypeError(f"from_parsed() field {name!r} must be annotated as a collection")
            item = next(iter(typing.get_args(annotation)), str)
            return origin(_cast(item, text, name) for text in texts)
        case Arguments(values):
            if dataclasses.is_dataclass(annotation):
                return _build(annotation, values)
            raise TypeError(f"from_parsed() field {name!r} must be annotated with a dataclass")
        case _:
            raise TypeError(f"from_parsed() cannot convert {value!r} for field {name!r}")


def _build(cls, entries):
    hints = typing.get_type_hints(cls)
    entries = {name.replace("-", "_"): value for name, value in entries.items()}

    kwargs = {}
    for field in dataclasses.fields(cls):
        if not field.init:
            continue
        try:
            value = entries[field.name]
        except KeyError:
            raise TypeError(
                f"from_parsed() field {field.name!r} of {cls.__name__!r} has no parsed counterpart"
            ) from None

        annotation = hints.get(field.name, str)
        # a single-argument option stands for its lone value
        if isinstance(value, Arguments) and len(value) == 1 and not dataclasses.is_dataclass(_unwrap(annotation)):
            value, = value.values.values()

        if isinstance(value, AbsentType):
            if field.default is dataclasses.MISSING and field.default_factory is dataclasses.MISSING:
                kwargs[field.name] = None
            continue
        kwargs[field.name] = _convert(annotation, value, field.name)

    return cls(**kwargs)


def from_parsed(cls, result, /):
    """
    Build an instance of the dataclass 'cls' from a ParseResult.

    Raises
    - TypeError: when 'cls' is not a dataclass, or a field has no parsed
      counterpart or an annotation unfit for its value.
    - UncastableValueError: when a user-supplied value cannot be converted.
    """
    if not isinstance(cls, type) or not dataclasses.is_dataclass(cls):
        raise TypeError("from_parsed() first argument must be a dataclass type")
    if not isinstance(result, ParseResult):
        raise TypeError("from_parsed() second argument must be a parse result")

    entries = {}
    for name, value in result.options.items():
        entries[name] = value
    for name, value in result.arguments.items():
        entries[name] = value
    return _build(cls, entries)


__all__ = (
    "from_parsed",
)
