"""Running commands: builtins, external programs, pipes and redirections."""

from __future__ import annotations

import contextlib
import errno
import os
import subprocess
import sys
import tempfile
from collections.abc import Callable, Iterator, Mapping, MutableMapping
from typing import IO, TextIO

from .builtins import execute_cd, execute_echo
from .commands import (
    Command,
    EmptyCommandError,
    create_command,
    parse_command,
    split_words,
)
from .environment import Environment, env_builtin, export_builtin, unset_builtin
from .quotes import UnclosedQuoteError, has_unclosed_quotes, process_quotes


class ShellExit(Exception):
    """Raised by the ``exit`` command to end the shell."""

    def __init__(self, code: int = 0) -> None:
        super().__init__(code)
        self.code = code


def join_path(path: str, binary: str) -> str:
    """Join a directory and a program name with a slash."""
    return f"{path}/{binary}"


def get_path(cmd: str, environ: Mapping[str, str]) -> str:
    """Find ``cmd`` in the ``PATH`` directories, or return it unchanged.

    Only directories followed by a ``:`` are searched.
    """
    path = environ.get("PATH")
    if path is None:
        return cmd
    for directory in path.split(":")[:-1]:
        candidate = join_path(directory, cmd)
        if os.access(candidate, os.F_OK):
            return candidate
    return cmd


def split_commands(text: str) -> list[str]:
    """Split a pipeline on ``|``, dropping empty pieces."""
    return split_words(text, "|")


def _split_target(command: str, sep: str, token: str) -> tuple[str, str] | None:
    parts = split_words(command, sep)
    if len(parts) < 2:
        sys.stderr.write(f"minishell: syntax error near unexpected token `{token}`\n")
        return None
    return parts[0].strip(" "), parts[1].strip(" ")


class Shell:
    """Shell state: variables, process environment and last exit status."""

    def __init__(
        self,
        env: Environment | None = None,
        environ: MutableMapping[str, str] | None = None,
    ) -> None:
        if env is None:
            env = Environment.from_strings(f"{k}={v}" for k, v in os.environ.items())
        self.env = env
        self.environ = dict(os.environ) if environ is None else environ
        self.exit_status = 0
        self.read_line: Callable[[str], str | None] = input
        self._stdin: IO | None = None
        self._stdout_file: TextIO | None = None

    @property
    def _out(self) -> TextIO:
        return self._stdout_file if self._stdout_file is not None else sys.stdout

    def _flush(self) -> None:
        sys.stdout.flush()
        if self._stdout_file is not None:
            self._stdout_file.flush()

    @contextlib.contextmanager
    def _redirected(
        self, *, stdin: IO | None = None, stdout: TextIO | None = None
    ) -> Iterator[None]:
        saved = (self._stdin, self._stdout_file)
        if stdin is not None:
            self._stdin = stdin
        if stdout is not None:
            self._stdout_file = stdout
        try:
            yield
        finally:
            self._flush()
            self._stdin, self._stdout_file = saved

    def execute_builtin(self, cmd: Command | None) -> int | None:
        """Run export, env or unset; return None for any other command."""
        if cmd is None or not cmd.command:
            return None
        if cmd.command == "export":
            return export_builtin(self.env, cmd.arguments, self._out, sys.stderr)
        if cmd.command == "env":
            return env_builtin(self.env, cmd.arguments, self._out)
        if cmd.command == "unset":
            return unset_builtin(self.env, cmd.arguments)
        return None

    def execute_external(self, cmd: Command) -> None:
        """Run a program found on the search path and record its exit status."""
        if not cmd.command:
            return
        argv = cmd.arguments or [cmd.command]
        self._flush()
        try:
            completed = subprocess.run(
                argv, stdin=self._stdin, stdout=self._stdout_file, check=False
            )
        except OSError as exc:
            sys.stderr.write(f"minishell: {exc.strerror}\n")
            self.exit_status = 1
            return
        if completed.returncode >= 0:
            self.exit_status = completed.returncode

    def execute(self, cmd: Command | None) -> None:
        """Run a builtin or an external program and set the exit status."""
        if cmd is None:
            return
        status = self.execute_builtin(cmd)
        if status is None:
            self.execute_external(cmd)
        else:
            self.exit_status = status

    def run_command(self, cmd: Command | None) -> None:
        """Dispatch a command to pipes, the shell's own commands or execution."""
        if cmd is None:
            return
        if "|" in cmd.full_command:
            self.handle_pipes(cmd)
            return
        name = cmd.command
        if name is None:
            return
        if name == "exit":
            self._out.write("Exiting minishell...\n")
            self._flush()
            raise ShellExit(0)
        if name == "cd":
            execute_cd(cmd.arguments, self.environ)
        elif name == "echo":
            execute_echo(cmd.arguments, self._out)
        elif name == "export":
            export_builtin(self.env, cmd.arguments, self._out, sys.stderr)
        elif name == "env":
            env_builtin(self.env, cmd.arguments, self._out)
        else:
            self.execute(cmd)

    def _start_stage(self, segment: str, stdin, stdout) -> subprocess.Popen | None:
        args = split_words(segment, " ")
        try:
            if not args:
                raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT))
            path = args[0] if "/" in args[0] else get_path(args[0], self.environ)
            if "/" not in path:
                path = os.path.join(os.curdir, path)
            return subprocess.Popen(
                args,
                executable=path,
                env=dict(self.environ),
                stdin=stdin,
                stdout=stdout,
            )
        except OSError as exc:
            sys.stderr.write(f"execve: {exc.strerror}\n")
            return None

    def handle_pipes(self, cmd: Command) -> None:
        """Run each ``|``-separated part as a program, chained by pipes."""
        segments = split_commands(cmd.full_command)
        self._flush()
        procs: list[subprocess.Popen] = []
        prev = self._stdin
        prev_pipe: IO | None = None
        for index, segment in enumerate(segments):
            last = index == len(segments) - 1
            stdout = self._stdout_file if last else subprocess.PIPE
            proc = self._start_stage(segment, prev, stdout)
            if prev_pipe is not None:
                prev_pipe.close()
                prev_pipe = None
            if proc is not None:
                procs.append(proc)
            if not last:
                if proc is not None and proc.stdout is not None:
                    prev_pipe = proc.stdout
                    prev = prev_pipe
                else:
                    prev = subprocess.DEVNULL
        for proc in procs:
            proc.wait()

    def _output_redirection(self, command: str, mode: str, token: str) -> None:
        split = _split_target(command, ">", token)
        if split is None:
            return
        cmd_text, target = split
        if mode == "w" and "|" in target:
            target = target.split("|", 1)[0].strip(" ")
        try:
            handle = open(target, mode, encoding="utf-8")
        except OSError as exc:
            sys.stderr.write(f"minishell: {exc.strerror}\n")
            return
        with handle, self._redirected(stdout=handle):
            self.run_command(parse_command(cmd_text))

    def handle_output_redirection(self, command: str) -> None:
        """Run ``cmd > file`` with output written over the file."""
        self._output_redirection(command, "w", ">")

    def handle_append_redirection(self, command: str) -> None:
        """Run ``cmd >> file`` with output added to the end of the file."""
        self._output_redirection(command, "a", ">>")

    def handle_input_redirection(self, command: str) -> None:
        """Run ``cmd < file`` reading its input from the file."""
        split = _split_target(command, "<", "<")
        if split is None:
            return
        cmd_text, target = split
        try:
            handle = open(target, "rb")
        except OSError as exc:
            sys.stderr.write(f"minishell: {exc.strerror}\n")
            return
        with handle, self._redirected(stdin=handle):
            self.run_command(parse_command(cmd_text))

    def handle_heredoc(
        self, command: str, read_line: Callable[[str], str | None] | None = None
    ) -> None:
        """Run ``cmd << DELIM`` with input read line by line up to the delimiter."""
        read_line = self.read_line if read_line is None else read_line
        split = _split_target(command, "<", "<<")
        if split is None:
            return
        cmd_text, delimiter = split
        try:
            fd, temp_path = tempfile.mkstemp(prefix="minishell_heredoc_")
        except OSError as exc:
            sys.stderr.write(f"minishell: {exc.strerror}\n")
            return
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as sink:
                while True:
                    try:
                        line = read_line("> ")
                    except EOFError:
                        break
                    if line is None or line == delimiter:
                        break
                    sink.write(line + "\n")
            with open(temp_path, "rb") as source, self._redirected(stdin=source):
                self.run_command(parse_command(cmd_text))
        finally:
            with contextlib.suppress(OSError):
                os.unlink(temp_path)

    def parse_input(self, text: str | None) -> Command | None:
        """Turn a line into a command, or run it here if it has a redirection.

        Returns None after an error or once a redirection has been handled.
        """
        if not text:
            sys.stderr.write("minishell: syntax error: empty input\n")
            return None
        if has_unclosed_quotes(text):
            sys.stderr.write("minishell: syntax error: unclosed quotes\n")
            return None
        try:
            processed = process_quotes(text)
        except UnclosedQuoteError:
            sys.stderr.write("minishell: error processing quotes\n")
            return None
        if "<<" in processed:
            self.handle_heredoc(processed)
            return None
        if ">>" in processed:
            self.handle_append_redirection(processed)
            return None
        if ">" in processed:
            self.handle_output_redirection(processed)
            return None
        if "<" in processed:
            self.handle_input_redirection(processed)
            return None
        try:
            return create_command(processed)
        except EmptyCommandError as exc:
            sys.stderr.write(f"{exc}\n")
            return None