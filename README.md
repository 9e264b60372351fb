# minish

A small command shell for POSIX systems. It reads commands interactively from
a terminal, from a script file, or from standard input.

Features:

- words separated by spaces, with single quotes, double quotes and backslash
  escapes (inside double quotes a backslash escapes only `"`, `\`, `$` and
  `` ` ``)
- pipelines joined with `|`, each stage running in its own process
- output redirection: `>`, `1>`, `>>`, `1>>`, `2>`, `2>>`
- builtins: `echo`, `exit`, `type`, `pwd`, `cd`, `history`
- any other program is looked up on `PATH`, or run directly when its name
  contains `/`
- in a terminal: history browsing with the up and down arrows, backspace, and
  tab completion of command names

## Installation

```
pip install .
```

## Usage

Start an interactive session:

```
minish
```

Run a script file. A `#!` first line is skipped:

```
minish script.sh
```

Or feed commands on standard input:

```
echo 'echo hello | cat' | minish
```

The shell exits with the status of the last command it ran, or with the
status given to `exit`. An unknown command prints
`NAME: command not found` and gives status 127. A line that ends inside an
open quote prints `syntax error: unterminated quote` and is not run.

At most nine words of a command are kept; further words are dropped.

### Builtins

- `echo WORD...` prints its words separated by single spaces.
- `exit [N]` ends the shell, with status N if given.
- `type NAME` reports whether NAME is a builtin or where it is found on `PATH`.
- `pwd` prints the working directory.
- `cd [DIR]` changes directory; no argument or `~` means `$HOME`.
- `history` lists every entry, `history N` the last N.
- `history -r FILE` reads entries from FILE.
- `history -w FILE` writes all entries to FILE.
- `history -a FILE` appends the entries added since the last read or write.

### History

Only interactive sessions record history. At startup entries are loaded from
the file named by `HISTFILE`, and when the session ends the new entries are
appended to it. At most 500 entries are kept.

### Completion

Tab completes the typed text against builtin names and the entries of every
`PATH` directory. The text is extended to the longest prefix shared by all
matches; a single match is completed and followed by a space. When several
names match and nothing can be added, the first press rings the bell and the
second lists the candidates.

## Library use

```python
from minish.parser import parse, split_pipeline
from minish.history import History
from minish.shell import Shell

args, redirection = parse("echo 'hello world' > out.txt")
# args == ["echo", "hello world"], redirection.stdout_file == "out.txt"

stages = split_pipeline("echo a | tr a b")   # ["echo a ", " tr a b"]

shell = Shell(History(500), interactive=False)
status = shell.process_line("echo hi | cat")
```

Modules:

- `minish.parser`: `parse`, `split_pipeline`, `find_in_path`, `Redirection`,
  `ParseError`
- `minish.history`: `History` with `add`, `load`, `save`, `tail`
- `minish.commands`: the `echo`, `pwd` and `cd` builtins
- `minish.completion`: `find_completions`, `longest_common_prefix`
- `minish.lineeditor`: `LineEditor` and the `raw_mode` context manager
- `minish.shell`: `Shell` and the `main` entry point

## What it does not do

minish has no variable or `$` expansion, globbing, command substitution,
input redirection (`<`), here-documents, command lists (`;`, `&&`, `||`),
background jobs or job control. The line editor does not move the cursor
left or right, and completion covers only command names, not file names.