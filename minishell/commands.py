"""Simple commands built from a command line split on spaces."""

from __future__ import annotations

from dataclasses import dataclass


class EmptyCommandError(ValueError):
    """Raised when a command is built from an empty line."""


@dataclass
class Command:
    """A command name, its argument vector and the line it came from.

    ``arguments`` includes the command name itself, like ``argv``.
    """

    command: str | None
    arguments: list[str] | None
    full_command: str


def split_words(text: str, sep: str) -> list[str]:
    """Split ``text`` on ``sep``, dropping empty pieces."""
    return [part for part in text.split(sep) if part]


def create_command(text: str | None) -> Command:
    """Build a command; ``arguments`` is None unless there are several words."""
    if not text:
        raise EmptyCommandError("minishell: syntax error: empty command")
    words = split_words(text, " ")
    return Command(
        command=words[0] if words else None,
        arguments=words if len(words) > 1 else None,
        full_command=text,
    )


def parse_command(text: str) -> Command:
    """Build a command whose ``arguments`` always hold every word."""
    words = split_words(text, " ")
    return Command(
        command=words[0] if words else None,
        arguments=words,
        full_command=text,
    )