import pytest

from minishell.environment import Environment, EnvVar
from minishell.executor import Shell, ShellExit
from minishell.main import main, process_line


@pytest.fixture
def shell():
    return Shell(Environment([EnvVar("HOME", "/home/user")]), {"PATH": "/bin:"})


def _feed(monkeypatch, lines):
    pending = list(lines)

    def fake_input(prompt=""):
        if not pending:
            raise EOFError
        item = pending.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    monkeypatch.setattr("builtins.input", fake_input)


def test_process_line_blank(shell, capsys):
    assert process_line(shell, "   ") is None
    assert capsys.readouterr().out == ""


def test_process_line_empty(shell):
    assert process_line(shell, "") is None


def test_process_line_syntax_error(shell, capsys):
    assert process_line(shell, "ls |") is None
    assert "Syntax error near '|'" in capsys.readouterr().out


def test_process_line_runs_echo(shell, capsys):
    cmd = process_line(shell, "echo hi")
    assert cmd.command == "echo"
    assert capsys.readouterr().out == "hi\n"


def test_process_line_exit(shell):
    with pytest.raises(ShellExit):
        process_line(shell, "exit")


def test_main_refuses_arguments():
    assert main(["extra"]) == 0


def test_main_until_end_of_input(monkeypatch, capsys):
    _feed(monkeypatch, ["echo hi"])
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "hi\n" in out
    assert "CTRL + D captured" in out


def test_main_exit(monkeypatch, capsys):
    _feed(monkeypatch, ["exit", "echo never"])
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "Exiting minishell..." in out
    assert "never" not in out


def test_main_survives_interrupt(monkeypatch, capsys):
    _feed(monkeypatch, [KeyboardInterrupt(), "echo after"])
    assert main([]) == 0
    assert "after\n" in capsys.readouterr().out