"""Removal of quote characters from a command line."""

from __future__ import annotations


class UnclosedQuoteError(ValueError):
    """Raised when a quoted section has no closing quote."""


def _take_quoted(text: str, start: int, quote: str, out: list[str]) -> int:
    """Append the text quoted at ``start`` and return the closing index."""
    close = text.find(quote, start + 1)
    if close == -1:
        raise UnclosedQuoteError(f"no closing {quote} for quote at {start}")
    out.append(text[start + 1 : close])
    return close


def process_quotes(text: str) -> str:
    """Strip quote characters, keeping the text between them.

    Once a quoted section has been read, the matching quote state stays
    open until the next quote of that kind, which is then dropped.
    """
    out: list[str] = []
    in_single = in_double = False
    index = 0
    while index < len(text):
        ch = text[index]
        if ch == "'" and not in_double:
            if not in_single:
                index = _take_quoted(text, index, "'", out)
            in_single = not in_single
        elif ch == '"' and not in_single:
            if not in_double:
                index = _take_quoted(text, index, '"', out)
            in_double = not in_double
        else:
            out.append(ch)
        index += 1
    return "".join(out)


def has_unclosed_quotes(text: str) -> bool:
    """Return True when a single or double quote is left open."""
    in_single = in_double = False
    for ch in text:
        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
    return in_single or in_double