"""Grouping of tokens into commands with arguments and redirections."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .tokens import TokenizeError, TokenType, tokenize

_REDIRECTIONS = frozenset(
    {TokenType.REDIRECT_IN, TokenType.REDIRECT_OUT, TokenType.APPEND, TokenType.HEREDOC}
)


@dataclass(frozen=True)
class Redirection:
    """A redirection operator and its target file."""

    type: TokenType
    filename: str


@dataclass
class AstNode:
    """One command of a pipeline."""

    args: list[str] = field(default_factory=list)
    redirections: list[Redirection] = field(default_factory=list)


class ParseError(ValueError):
    """Raised when a command line cannot be parsed."""


def is_redirection(token_type: TokenType) -> bool:
    """Return True for the redirection operators."""
    return token_type in _REDIRECTIONS


def parse(text: str | None) -> list[AstNode]:
    """Parse a command line into the commands of a pipeline."""
    try:
        tokens = tokenize(text)
    except TokenizeError as exc:
        raise ParseError("Error tokenizing input.") from exc

    nodes = [AstNode()]
    index = 0
    while index < len(tokens):
        token = tokens[index]
        following = tokens[index + 1] if index + 1 < len(tokens) else None
        if token.type is TokenType.EOF:
            break
        if token.type is TokenType.WORD:
            nodes[-1].args.append(token.value)
        elif is_redirection(token.type):
            if following is None or following.type is not TokenType.WORD:
                raise ParseError("Redirection without target")
            nodes[-1].redirections.append(Redirection(token.type, following.value))
            index += 1
        elif token.type is TokenType.PIPE:
            if following is None or not (
                following.type is TokenType.WORD or is_redirection(following.type)
            ):
                raise ParseError(
                    "Syntax error: Pipe not followed by a command or redirection."
                )
            nodes.append(AstNode())
        else:
            raise ParseError(f"Unexpected token type: {int(token.type)}")
        index += 1
    return nodes


def format_ast(nodes: Iterable[AstNode] | None) -> str:
    """Render parsed commands with their arguments and redirections."""
    nodes = list(nodes or [])
    if not nodes:
        return "AST is empty.\n"
    parts = []
    for number, node in enumerate(nodes):
        parts.append(f"Command {number}:\n")
        parts.append("\t- Arguments: \n")
        parts.extend(f"\t\t- {arg}\n" for arg in node.args)
        parts.append("\t- Redirections: \n")
        parts.extend(
            f"\t\t- type: {int(r.type)}, filename: {r.filename}\n"
            for r in node.redirections
        )
        parts.append("\n")
    return "".join(parts)