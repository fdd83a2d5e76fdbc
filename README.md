# minishell

A small interactive command shell. It reads lines at a `minishell> ` prompt,
checks their syntax and runs them. It handles:

- pipelines of external programs: `ls -la | grep test`
- output, append and input redirection: `ls > out.txt`, `echo hi >> out.txt`, `cat < in.txt`
- heredocs: `cat << EOF`, with lines read at a `> ` prompt up to the delimiter
- single and double quotes, which are removed before the line is run
- the commands `echo` (with `-n`), `cd`, `export`, `env`, `unset` and `exit`

Any other command is run as an external program.

## Installation

```
pip install .
```

## Usage

Start the shell:

```
minishell
```

Type commands at the prompt. End the session with `exit` or Ctrl+D.

```
minishell> export GREETING=hello
minishell> env
GREETING=hello
...
minishell> echo -n no newline
minishell> ls | grep py
```

When it is started with any arguments, the shell exits at once without
reading input.

## Using it as a library

The pieces of the shell can be used on their own:

```python
from minishell.tokens import tokenize, format_tokens
from minishell.parsing import parse, format_ast
from minishell.syntax import check_syntax
from minishell.environment import Environment

print(format_tokens(tokenize("ls -la | grep test > output.txt")))
print(format_ast(parse("cat < input.txt | wc -l")))
print(check_syntax("ls | | grep"))  # prints an error message, then False

env = Environment.from_strings(["HOME=/home/user", "USER=test"])
print(env.get("USER"))  # test
```

- `minishell.syntax` checks quotes, pipes and redirections on a raw line.
- `minishell.quotes.process_quotes` strips quote characters and raises
  `UnclosedQuoteError` when a quote is left open.
- `minishell.tokens.tokenize` splits a line into `Token`s and raises
  `TokenizeError` on empty input or unclosed quotes.
- `minishell.parsing.parse` groups tokens into `AstNode`s with arguments and
  `Redirection`s, raising `ParseError` on a malformed line.
- `minishell.expansion.expand` replaces `$NAME` in word tokens with values
  taken from an `Environment`. Single quotes prevent expansion, and so does a
  preceding redirection operator; unset variables become empty.
- `minishell.environment` holds `Environment` and the `env_builtin`,
  `export_builtin` and `unset_builtin` functions.
- `minishell.executor.Shell` runs commands, pipelines and redirections.

## Limitations

- The interactive shell does not expand `$NAME` variables; expansion is only
  available through `minishell.expansion`.
- A line is split on spaces after quotes are removed, so quoted spaces do not
  keep words together when a command runs.
- Only one redirection per line is handled, and builtins are not run inside
  pipelines.
- There is no `$?`, no globbing and no job control.

## Running the tests

```
pip install ".[test]"
pytest
```