"""The interactive read-and-run loop."""

from __future__ import annotations

import contextlib
import os
import signal
import sys

from .commands import Command
from .environment import Environment
from .executor import Shell, ShellExit
from .syntax import check_syntax, is_blank_line


def process_line(shell: Shell, line: str | None) -> Command | None:
    """Check, parse and run one input line; return the command that ran."""
    if not line:
        return None
    if is_blank_line(line) or not check_syntax(line):
        return None
    cmd = shell.parse_input(line)
    if cmd is None:
        return None
    shell.run_command(cmd)
    return cmd


def _enable_history() -> None:
    if sys.stdin.isatty():
        with contextlib.suppress(ImportError):
            import readline  # noqa: F401


def main(argv: list[str] | None = None) -> int:
    """Run the shell until end of input or ``exit``; arguments are refused."""
    args = sys.argv[1:] if argv is None else list(argv)
    if args:
        return 0
    if hasattr(signal, "SIGQUIT"):
        signal.signal(signal.SIGQUIT, signal.SIG_IGN)
    _enable_history()
    env = Environment.from_strings(f"{k}={v}" for k, v in os.environ.items())
    shell = Shell(env, dict(os.environ))
    while True:
        try:
            line = input("minishell> ")
        except EOFError:
            print("CTRL + D captured")
            break
        except KeyboardInterrupt:
            print()
            continue
        try:
            process_line(shell, line)
        except ShellExit as exc:
            return exc.code
        except KeyboardInterrupt:
            print()
    return 0


if __name__ == "__main__":
    sys.exit(main())