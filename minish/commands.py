"""Built-in commands that run inside the shell process."""

from __future__ import annotations

import os
from typing import TextIO


def echo(args: list[str], out: TextIO) -> int:
    """Write the words after the command name separated by single spaces."""
    out.write(" ".join(args))
    return 0


def pwd(out: TextIO, err: TextIO) -> int:
    """Write the current working directory."""
    try:
        cwd = os.getcwd()
    except OSError as exc:
        err.write(f"getcwd() error: {exc.strerror}\n")
        return 1
    out.write(f"{cwd}\n")
    return 0


def cd(directory: str | None, out: TextIO, err: TextIO) -> int:
    """Change directory; no argument or '~' means the home directory."""
    if directory is None or directory == "~":
        directory = os.environ.get("HOME")
        if directory is None:
            err.write("cd: HOME not set\n")
            return 1
    try:
        os.chdir(directory)
    except OSError:
        out.write(f"cd: {directory}: No such file or directory\n")
        return 1
    return 0