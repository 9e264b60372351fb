"""Splitting command lines into words, redirections and pipeline stages."""

from __future__ import annotations

import os
from dataclasses import dataclass

MAX_ARGS = 10

_STDOUT_TRUNCATE = {">", "1>"}
_STDOUT_APPEND = {">>", "1>>"}
_STDERR_TRUNCATE = {"2>"}
_STDERR_APPEND = {"2>>"}


class ParseError(ValueError):
    """Raised when a command line cannot be parsed."""


@dataclass
class Redirection:
    """Where a command's standard output and error should go."""

    stdout_file: str | None = None
    stdout_append: bool = False
    stderr_file: str | None = None
    stderr_append: bool = False

    @property
    def is_empty(self) -> bool:
        return self.stdout_file is None and self.stderr_file is None


def _words(line: str):
    """Yield the words of a line after quote and escape processing.

    Raises ParseError once the line ends inside an open quote.
    """
    word: list[str] | None = None
    in_single = in_double = False
    i = 0
    end = line.find("\n")
    if end == -1:
        end = len(line)

    while i < end:
        c = line[i]
        if in_single:
            if c == "'":
                in_single = False
            else:
                word.append(c)
        elif in_double:
            if c == "\\":
                nxt = line[i + 1] if i + 1 < end else ""
                if nxt in ('"', "\\", "$", "`") and nxt:
                    i += 1
                    word.append(nxt)
                else:
                    word.append(c)
            elif c == '"':
                in_double = False
            else:
                word.append(c)
        elif c == "\\":
            i += 1
            if i < end:
                if word is None:
                    word = []
                word.append(line[i])
        elif c == "'":
            in_single = True
            if word is None:
                word = []
        elif c == '"':
            in_double = True
            if word is None:
                word = []
        elif c == " ":
            if word is not None:
                yield "".join(word), False
                word = None
        else:
            if word is None:
                word = []
            word.append(c)
        i += 1

    if word is not None:
        yield "".join(word), True
    if in_single or in_double:
        raise ParseError("syntax error: unterminated quote")


def parse(line: str) -> tuple[list[str], Redirection]:
    """Parse one pipeline stage into its argument list and redirections."""
    args: list[str] = []
    redir = Redirection()
    expecting: str | None = None

    for word, is_last in _words(line):
        if expecting == "stdout":
            redir.stdout_file = word
            expecting = None
        elif expecting == "stderr":
            redir.stderr_file = word
            expecting = None
        elif not is_last and word in _STDOUT_TRUNCATE:
            expecting = "stdout"
            redir.stdout_append = False
        elif not is_last and word in _STDOUT_APPEND:
            expecting = "stdout"
            redir.stdout_append = True
        elif not is_last and word in _STDERR_TRUNCATE:
            expecting = "stderr"
            redir.stderr_append = False
        elif not is_last and word in _STDERR_APPEND:
            expecting = "stderr"
            redir.stderr_append = True
        elif len(args) < MAX_ARGS - 1:
            args.append(word)

    return args, redir


def split_pipeline(line: str) -> list[str]:
    """Split a line on every '|' that is not inside quotes."""
    stages: list[str] = []
    current: list[str] = []
    in_single = in_double = False
    for c in line:
        if c == "'" and not in_double:
            in_single = not in_single
        elif c == '"' and not in_single:
            in_double = not in_double
        elif c == "|" and not in_single and not in_double:
            stages.append("".join(current))
            current = []
            continue
        current.append(c)
    stages.append("".join(current))
    return stages


def find_in_path(name: str) -> str | None:
    """Return the first executable called name in a PATH directory, if any."""
    path = os.environ.get("PATH")
    if path is None:
        return None
    for directory in filter(None, path.split(":")):
        candidate = f"{directory}/{name}"
        if os.access(candidate, os.X_OK):
            return candidate
    return None