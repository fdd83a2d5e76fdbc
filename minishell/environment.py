"""Shell variables and the env, export and unset builtins."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TextIO


@dataclass
class EnvVar:
    """A shell variable; ``value`` is None when it was exported without one."""

    name: str
    value: str | None


class InvalidIdentifierError(ValueError):
    """Raised when an export argument does not name a valid variable."""

    def __init__(self, argument: str) -> None:
        super().__init__(argument)
        self.argument = argument


class Environment:
    """An ordered collection of shell variables."""

    def __init__(self, variables: Iterable[EnvVar] = ()) -> None:
        self._vars: list[EnvVar] = list(variables)

    @classmethod
    def from_strings(cls, strings: Iterable[str]) -> Environment:
        """Build from ``NAME=VALUE`` strings, skipping any without ``=``.

        Each entry is placed in front of the previous ones.
        """
        env = cls()
        for entry in strings:
            name, sep, value = entry.partition("=")
            if sep:
                env._vars.insert(0, EnvVar(name, value))
        return env

    def _find(self, name: str) -> EnvVar | None:
        return next((var for var in self._vars if var.name == name), None)

    def get(self, name: str) -> str | None:
        """Return the value of ``name``, or None if it is not set."""
        var = self._find(name)
        return var.value if var else None

    def set(self, name: str, value: str | None) -> None:
        """Update ``name`` in place, or add it at the front."""
        var = self._find(name)
        if var:
            var.value = value
        else:
            self._vars.insert(0, EnvVar(name, value))

    def add_or_update(self, name: str, value: str | None) -> None:
        """Update ``name`` in place, or add it at the end."""
        var = self._find(name)
        if var:
            var.value = value
        else:
            self._vars.append(EnvVar(name, value))

    def unset(self, name: str) -> None:
        """Remove the first variable called ``name``, if any."""
        var = self._find(name)
        if var:
            self._vars.remove(var)

    def __iter__(self) -> Iterator[EnvVar]:
        return iter(self._vars)

    def __len__(self) -> int:
        return len(self._vars)


def _is_ascii_alpha(ch: str) -> bool:
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def _is_ascii_alnum(ch: str) -> bool:
    return _is_ascii_alpha(ch) or "0" <= ch <= "9"


def is_valid_env_name(name: str | None) -> bool:
    """Check a name (up to any ``=``) is a letter or ``_`` then word characters."""
    if not name:
        return False
    if not (_is_ascii_alpha(name[0]) or name[0] == "_"):
        return False
    head = name[1:].split("=", 1)[0]
    return all(_is_ascii_alnum(ch) or ch == "_" for ch in head)


def validate_and_split(arg: str) -> tuple[str, str | None]:
    """Split an export argument into name and value (None when no ``=``)."""
    name, sep, value = arg.partition("=")
    if not is_valid_env_name(name):
        raise InvalidIdentifierError(arg)
    return name, (value if sep else None)


def format_sorted_exports(env: Environment) -> str:
    """Render variables sorted by name as ``declare -x`` lines.

    The entry that sorts last is left out.
    """
    ordered = sorted(env, key=lambda var: var.name)
    lines = []
    for var in ordered[:-1]:
        if var.value is not None:
            lines.append(f'declare -x {var.name}="{var.value}"\n')
        else:
            lines.append(f"declare -x {var.name}\n")
    return "".join(lines)


def env_builtin(env: Environment, args: list[str] | None, out: TextIO | None = None) -> int:
    """Print every variable that has a value; reject any argument."""
    out = out if out is not None else sys.stdout
    if not len(env):
        return 0
    if args and len(args) > 1:
        sys.stderr.write("env: too many arguments\n")
        return 1
    for var in env:
        if var.name and var.value is not None:
            out.write(f"{var.name}={var.value}\n")
    return 0


def export_builtin(
    env: Environment,
    args: list[str] | None,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Set variables from ``NAME[=VALUE]`` arguments, or list them sorted."""
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr
    if not args or len(args) < 2:
        out.write(format_sorted_exports(env))
        return 0
    status = 0
    for arg in args[1:]:
        try:
            name, value = validate_and_split(arg)
        except InvalidIdentifierError:
            err.write(f"minishell: export: `{arg}': not a valid identifier\n")
            status = 1
            continue
        env.add_or_update(name, value)
    return status


def unset_builtin(env: Environment, args: list[str] | None) -> int:
    """Remove each named variable; always succeeds."""
    for name in (args or [])[1:]:
        env.unset(name)
    return 0