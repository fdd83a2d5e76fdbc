"""Splitting of a command line into words and operators."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import IntEnum

from .quotes import has_unclosed_quotes


class TokenType(IntEnum):
    """Kinds of token produced by the tokenizer."""

    WORD = 0
    PIPE = 1
    REDIRECT_IN = 2
    REDIRECT_OUT = 3
    APPEND = 4
    HEREDOC = 5
    EOF = 6


@dataclass(frozen=True)
class Token:
    """A word or operator taken from the command line."""

    value: str
    type: TokenType


class TokenizeError(ValueError):
    """Raised when a command line cannot be tokenized."""


_BREAKS = "|<>\n "


def _scan(text: str) -> Iterator[Token]:
    word: list[str] = []
    index = 0
    while index < len(text):
        ch = text[index]
        if ch in _BREAKS:
            if word:
                yield Token("".join(word), TokenType.WORD)
                word.clear()
            if ch == "|":
                yield Token("|", TokenType.PIPE)
            elif ch == ">":
                if text[index + 1 : index + 2] == ">":
                    yield Token(">>", TokenType.APPEND)
                    index += 1
                else:
                    yield Token(">", TokenType.REDIRECT_OUT)
            elif ch == "<":
                yield Token("<", TokenType.REDIRECT_IN)
        else:
            word.append(ch)
        index += 1
    if word:
        yield Token("".join(word), TokenType.WORD)


def tokenize_input(text: str) -> list[Token]:
    """Split ``text`` on spaces, newlines and the operators ``| > >> <``."""
    return list(_scan(text))


def tokenize(text: str | None) -> list[Token]:
    """Tokenize a command line, raising :class:`TokenizeError` on failure."""
    if not text:
        raise TokenizeError("minishell: empty input")
    if has_unclosed_quotes(text):
        raise TokenizeError("minishell: unclosed quotes")
    tokens = tokenize_input(text)
    if not tokens:
        raise TokenizeError("minishell: error tokenizing input")
    return tokens


def format_tokens(tokens: Iterable[Token]) -> str:
    """Render tokens one per line as ``Token: <value>, Type: <n>``."""
    return "".join(f"Token: {tok.value}, Type: {int(tok.type)}\n" for tok in tokens)