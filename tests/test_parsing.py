import pytest

from minishell.parsing import (
    AstNode,
    ParseError,
    Redirection,
    format_ast,
    is_redirection,
    parse,
)
from minishell.tokens import TokenType


def shape(nodes):
    return [
        (node.args, [(r.type, r.filename) for r in node.redirections])
        for node in nodes
    ]


@pytest.mark.parametrize(
    "token_type, expected",
    [
        (TokenType.REDIRECT_IN, True),
        (TokenType.REDIRECT_OUT, True),
        (TokenType.APPEND, True),
        (TokenType.HEREDOC, True),
        (TokenType.WORD, False),
        (TokenType.PIPE, False),
        (TokenType.EOF, False),
    ],
)
def test_is_redirection(token_type, expected):
    assert is_redirection(token_type) is expected


def test_command_with_arguments():
    assert shape(parse("ls -la")) == [(["ls", "-la"], [])]


def test_command_with_pipe():
    assert shape(parse("ls | grep test")) == [(["ls"], []), (["grep", "test"], [])]


def test_output_redirection():
    assert shape(parse("ls > output.txt")) == [
        (["ls"], [(TokenType.REDIRECT_OUT, "output.txt")])
    ]


def test_input_redirection():
    assert shape(parse("cat < input.txt")) == [
        (["cat"], [(TokenType.REDIRECT_IN, "input.txt")])
    ]


def test_append_redirection_keeps_quotes():
    assert shape(parse("echo 'Hello' >> output.txt")) == [
        (["echo", "'Hello'"], [(TokenType.APPEND, "output.txt")])
    ]


def test_complex_pipe_and_redirection():
    assert shape(parse("ls -la | grep test > output.txt")) == [
        (["ls", "-la"], []),
        (["grep", "test"], [(TokenType.REDIRECT_OUT, "output.txt")]),
    ]


def test_multiple_spaces():
    assert shape(parse("ls    -la    |    grep    test")) == [
        (["ls", "-la"], []),
        (["grep", "test"], []),
    ]


def test_quoted_pipe_is_still_split():
    assert shape(parse('echo "|" Hello World')) == [
        (["echo", '"'], []),
        (['"', "Hello", "World"], []),
    ]


def test_variables_are_left_unexpanded():
    assert shape(parse("echo $HOME | grep 'test'")) == [
        (["echo", "$HOME"], []),
        (["grep", "'test'"], []),
    ]
    assert shape(parse("echo $PATH")) == [(["echo", "$PATH"], [])]


@pytest.mark.parametrize(
    "text",
    [
        "ls'hello'     'world' ||<<<<>>>>",
        "cat << EOF Hello World EOF",
        "",
        "   ",
        "ls | | grep test",
        "ls > > output.txt",
        "cat << EOF Hello World",
        "ls |",
        "ls >",
        "echo 'open",
    ],
)
def test_parse_errors(text):
    with pytest.raises(ParseError):
        parse(text)


def test_pipe_then_redirection_is_allowed():
    assert shape(parse("ls |> out")) == [
        (["ls"], []),
        ([], [(TokenType.REDIRECT_OUT, "out")]),
    ]


def test_format_ast_empty():
    assert format_ast([]) == "AST is empty.\n"
    assert format_ast(None) == "AST is empty.\n"


def test_format_ast_output():
    text = format_ast(parse("ls > output.txt"))
    assert text == (
        "Command 0:\n"
        "\t- Arguments: \n"
        "\t\t- ls\n"
        "\t- Redirections: \n"
        "\t\t- type: 3, filename: output.txt\n"
        "\n"
    )


def test_format_ast_numbers_each_command():
    nodes = [
        AstNode(["a"]),
        AstNode(["b"], [Redirection(TokenType.APPEND, "f")]),
    ]
    text = format_ast(nodes)
    assert "Command 0:\n" in text
    assert "Command 1:\n" in text
    assert "\t\t- type: 4, filename: f\n" in text