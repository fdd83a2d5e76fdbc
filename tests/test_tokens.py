import pytest

from minishell.tokens import (
    Token,
    TokenizeError,
    TokenType,
    format_tokens,
    tokenize,
    tokenize_input,
)

W = TokenType.WORD


def words(*values):
    return [Token(v, W) for v in values]


def test_basic_command():
    assert tokenize("ls") == words("ls")


def test_command_with_arguments():
    assert tokenize("ls -la") == words("ls", "-la")


def test_command_with_pipe():
    assert tokenize("ls | grep test") == [
        Token("ls", W),
        Token("|", TokenType.PIPE),
        Token("grep", W),
        Token("test", W),
    ]


def test_output_redirection():
    assert tokenize("ls > output.txt") == [
        Token("ls", W),
        Token(">", TokenType.REDIRECT_OUT),
        Token("output.txt", W),
    ]


def test_input_redirection():
    assert tokenize("cat < input.txt") == [
        Token("cat", W),
        Token("<", TokenType.REDIRECT_IN),
        Token("input.txt", W),
    ]


def test_append_redirection():
    assert tokenize("ls >> output.txt") == [
        Token("ls", W),
        Token(">>", TokenType.APPEND),
        Token("output.txt", W),
    ]


def test_complex_command():
    assert tokenize("ls -la | grep test > output.txt") == [
        Token("ls", W),
        Token("-la", W),
        Token("|", TokenType.PIPE),
        Token("grep", W),
        Token("test", W),
        Token(">", TokenType.REDIRECT_OUT),
        Token("output.txt", W),
    ]


def test_multiple_spaces():
    assert tokenize("ls    -la    |    grep    test") == tokenize("ls -la | grep test")


def test_empty_input_fails():
    with pytest.raises(TokenizeError):
        tokenize("")


def test_only_spaces_fails():
    with pytest.raises(TokenizeError, match="error tokenizing input"):
        tokenize("   ")


def test_double_quoted_string():
    assert tokenize('echo "hello world"') == words("echo", '"hello', 'world"')


def test_single_quoted_string():
    assert tokenize("echo 'hello world'") == words("echo", "'hello", "world'")


def test_nested_quotes():
    assert tokenize("echo \"hello 'world'\"") == words("echo", '"hello', "'world'\"")


def test_unclosed_quotes_fail():
    with pytest.raises(TokenizeError, match="unclosed quotes"):
        tokenize("echo 'hello")


def test_operators_without_spaces():
    assert tokenize_input("a|b>>c<d") == [
        Token("a", W),
        Token("|", TokenType.PIPE),
        Token("b", W),
        Token(">>", TokenType.APPEND),
        Token("c", W),
        Token("<", TokenType.REDIRECT_IN),
        Token("d", W),
    ]


def test_double_less_is_two_input_redirections():
    types = [t.type for t in tokenize_input("<<")]
    assert types == [TokenType.REDIRECT_IN, TokenType.REDIRECT_IN]


def test_tokenize_input_of_blank_is_empty():
    assert tokenize_input(" \n ") == []


def test_format_tokens():
    assert format_tokens(tokenize("ls | wc")) == (
        "Token: ls, Type: 0\nToken: |, Type: 1\nToken: wc, Type: 0\n"
    )