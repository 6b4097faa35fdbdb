"""
Peekable cursor over the raw token list.

A token is flag-shaped when it starts with '-' and is not exactly '-'; the
lone dash is left alone as a literal positional value (conventionally stdin).
"""
from collections import deque
from collections.abc import Iterable


def isflag(token, /):
    """
    Tell whether a raw token is flag-shaped ('-x', '--name', '-', excluded).
    """
    return token.startswith("-") and token != "-"


class TokenStream:
    """
    Single-pass, non-reentrant cursor over the tokens of one parse.

    - peek() returns the next token without consuming it (None when exhausted).
    - next(stream) consumes it; iterating the stream drains it.
    - peek_is_flag() tells whether the next token is flag-shaped.
    - remaining() snapshots what is left without consuming anything.
    """
    __slots__ = ("_tokens",)

    def __init__(self, tokens=(), /):
        if isinstance(tokens, str) or not isinstance(tokens, Iterable):
            raise TypeError("TokenStream() argument must be an iterable of strings")
        self._tokens = deque()
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError("TokenStream() argument must be an iterable of strings")
            self._tokens.append(token)

    def __iter__(self):
        return self

    def __next__(self):
        try:
            return self._tokens.popleft()
        except IndexError:
            raise StopIteration from None

    def __len__(self):
        return len(self._tokens)

    def __bool__(self):
        return bool(self._tokens)

    def __repr__(self):
        return f"TokenStream({list(self._tokens)!r})"

    def peek(self):
        try:
            return self._tokens[0]
        except IndexError:
            return None

    def peek_is_flag(self):
        return (token := self.peek()) is not None and isflag(token)

    def remaining(self):
        return tuple(self._tokens)


__all__ = (
    "TokenStream",
    "isflag",
)
