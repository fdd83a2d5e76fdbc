"""The echo and cd builtins."""

from __future__ import annotations

import os
import sys
from collections.abc import MutableMapping, Sequence
from typing import TextIO

_GETCWD_ERROR = (
    "minishell: cd: error retrieving current directory: getcwd: "
    "cannot access parent directories: No such file or directory"
)


def execute_echo(arguments: Sequence[str] | None, out: TextIO | None = None) -> None:
    """Write the arguments after the command name, space separated.

    A leading ``-n`` suppresses the final newline.
    """
    out = sys.stdout if out is None else out
    if not arguments or arguments[0] is None:
        out.write("\n")
        return
    rest = list(arguments[1:])
    newline = True
    if rest and rest[0] == "-n":
        newline = False
        rest = rest[1:]
    out.write(" ".join(rest))
    if newline:
        out.write("\n")


def _perror(exc: OSError) -> None:
    sys.stderr.write(f"minishell: cd: {exc.strerror}\n")


def _cd_parent(environ: MutableMapping[str, str]) -> int:
    try:
        os.stat("..")
    except OSError as exc:
        print(f"minishell: cd: error retrieving parent directory: {exc.strerror}")
        return 1
    try:
        current = os.getcwd()
    except OSError:
        print(_GETCWD_ERROR)
        return 1
    try:
        os.chdir("..")
    except OSError as exc:
        _perror(exc)
        return 1
    try:
        new_dir = os.getcwd()
    except OSError:
        print(_GETCWD_ERROR)
        head, sep, _ = current.rpartition("/")
        if sep:
            environ["PWD"] = head
        return 0
    environ["PWD"] = new_dir
    return 0


def execute_cd(
    arguments: Sequence[str] | None,
    environ: MutableMapping[str, str] | None = None,
) -> int:
    """Change directory to ``arguments[1]``, or to ``HOME`` when none is given.

    ``cd ..`` also records the new directory in ``PWD``. Returns 0 on
    success and 1 after printing an error.
    """
    environ = os.environ if environ is None else environ
    if not arguments or arguments[0] is None or len(arguments) < 2:
        home = environ.get("HOME")
        if home is None:
            sys.stderr.write("minishell: cd: HOME not set\n")
            return 1
        try:
            os.chdir(home)
        except OSError as exc:
            _perror(exc)
            return 1
        return 0
    target = arguments[1]
    if target == "..":
        return _cd_parent(environ)
    try:
        os.chdir(target)
    except OSError as exc:
        sys.stderr.write(f"minishell: cd: {target}: {exc.strerror}\n")
        return 1
    return 0