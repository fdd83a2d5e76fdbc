"""Expansion of ``$NAME`` variables and removal of quotes in word tokens."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping

from .environment import Environment
from .parsing import is_redirection
from .tokens import Token, TokenType

# Longest variable name that is looked up; longer names are cut short.
_MAX_NAME = 127


def _is_name_start(ch: str) -> bool:
    return ch == "_" or (ch.isascii() and ch.isalpha())


def _is_name_char(ch: str) -> bool:
    return ch == "_" or (ch.isascii() and ch.isalnum())


def _name_end(text: str, start: int) -> int:
    """Return the index just past the variable name starting at ``start``."""
    end = start
    while end < len(text) and _is_name_char(text[end]):
        end += 1
    return end


def _starts_variable(text: str, index: int) -> bool:
    """Return True when ``text[index]`` is a ``$`` followed by a name."""
    return (
        text[index] == "$"
        and index + 1 < len(text)
        and _is_name_start(text[index + 1])
    )


def get_env_value(env: Iterable, name: str) -> str | None:
    """Return what follows the first ``=`` in the value of ``name``.

    Returns None when the variable is missing, has no value, or its value
    holds no ``=``.
    """
    for var in env:
        if var.name == name:
            if var.value is None:
                return None
            _, sep, tail = var.value.partition("=")
            return tail if sep else None
    return None


def mask_len(value: str | None, environ: Mapping[str, str] | None = None) -> int:
    """Return the length of ``value`` once quotes are removed and variables expanded.

    Quoted sections are counted as they stand; ``$NAME`` outside quotes is
    counted as the length of its value in ``environ`` (the process
    environment by default), and as nothing when it is unset.
    """
    if not value:
        return 0
    environ = os.environ if environ is None else environ
    length = 0
    index = 0
    while index < len(value):
        ch = value[index]
        if ch in "'\"":
            close = value.find(ch, index + 1)
            if close == -1:
                length += len(value) - index - 1
                break
            length += close - index - 1
            index = close + 1
        elif _starts_variable(value, index):
            end = _name_end(value, index + 1)
            length += len(environ.get(value[index + 1 : end], ""))
            index = end
        else:
            length += 1
            index += 1
    return length


def expand_word(
    arg: str, env: Environment, prev_type: TokenType | None = None
) -> str:
    """Remove quotes from ``arg`` and replace ``$NAME`` with its value.

    Variables inside single quotes are kept as written, and nothing is
    expanded in a word that follows a redirection operator. Unset
    variables expand to an empty string.
    """
    expandable = prev_type is None or not is_redirection(prev_type)
    out: list[str] = []
    in_single = in_double = False
    index = 0
    while index < len(arg):
        ch = arg[index]
        if ch == "'" and not in_double:
            in_single = not in_single
            index += 1
        elif ch == '"' and not in_single:
            in_double = not in_double
            index += 1
        elif not in_single and expandable and _starts_variable(arg, index):
            end = _name_end(arg, index + 1)
            name = arg[index + 1 : end][:_MAX_NAME]
            out.append(env.get(name) or "")
            index = end
        else:
            out.append(ch)
            index += 1
    return "".join(out)


def expand(tokens: Iterable[Token], env: Environment | None) -> list[Token]:
    """Return the tokens with every word before the end marker expanded.

    With no environment, or an empty one, the tokens come back unchanged.
    """
    tokens = list(tokens)
    if not tokens or env is None or not len(env):
        return tokens
    result: list[Token] = []
    prev_type: TokenType | None = None
    finished = False
    for token in tokens:
        if token.type is TokenType.EOF:
            finished = True
        if not finished and token.type is TokenType.WORD:
            result.append(Token(expand_word(token.value, env, prev_type), token.type))
        else:
            result.append(token)
        prev_type = token.type
    return result