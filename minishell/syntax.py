"""Syntax checks run on a raw command line before it is parsed."""

from __future__ import annotations

_BLANKS = (" ", "\t")
_OPERATORS = "<>|"
_WHITESPACE = " \t\n\v\f\r"


def _at(text: str, index: int) -> str:
    """Return the character at ``index``, or an empty string past the end."""
    return text[index] if index < len(text) else ""


def _skip_blanks(text: str, index: int) -> int:
    while _at(text, index) in _BLANKS:
        index += 1
    return index


def _is_operator_or_end(ch: str) -> bool:
    return not ch or ch in _OPERATORS


def _fail(message: str) -> bool:
    print(message)
    return False


def unclosed_quotes(text: str) -> bool:
    """Return True when every quote in ``text`` is closed.

    Prints an error message and returns False otherwise.
    """
    in_single = in_double = False
    for ch in text:
        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
    if in_single or in_double:
        return _fail("Error: Unclosed quotes")
    return True


def pipe_syntax(text: str) -> bool:
    """Check that every unquoted pipe sits between two commands."""
    in_single = in_double = False
    for index, ch in enumerate(text):
        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        if in_single or in_double or ch != "|":
            continue
        if index == 0 or index + 1 == len(text):
            return _fail("Syntax error near '|'")
        following = _at(text, _skip_blanks(text, index + 1))
        if _is_operator_or_end(following):
            return _fail("Syntax error after '|'")
    return True


def file_syntax(text: str) -> bool:
    """Check that every unquoted redirection is followed by a target."""
    in_single = in_double = False
    index = 0
    while index < len(text):
        ch = text[index]
        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        if not in_single and not in_double and ch in "<>":
            nxt = _at(text, index + 1)
            if (ch == "<" and nxt == ">") or (ch == ">" and nxt == "|"):
                return _fail("Syntax error: invalid operator")
            if ch == "<" and nxt == "<":
                index = _skip_blanks(text, index + 2)
                if _is_operator_or_end(_at(text, index)):
                    return _fail("Syntax error: missing heredoc delimiter")
                continue
            if nxt == ch:
                index += 1
            target = _skip_blanks(text, index + 1)
            if _is_operator_or_end(_at(text, target)):
                return _fail("Syntax error: missing filename")
        index += 1
    return True


def check_syntax(text: str) -> bool:
    """Run the quote, pipe and redirection checks in turn."""
    return unclosed_quotes(text) and pipe_syntax(text) and file_syntax(text)


def validate_syntax(text: str | None) -> bool:
    """Like :func:`check_syntax`, but an empty line is also invalid."""
    if not text:
        return False
    return check_syntax(text)


def is_blank_line(text: str | None) -> bool:
    """Return True when ``text`` is missing or holds only whitespace."""
    if text is None:
        return True
    return all(ch in _WHITESPACE for ch in text)