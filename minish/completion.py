"""Command-name completion over built-ins and the PATH."""

from __future__ import annotations

import os

BUILTINS = ("echo", "exit", "type", "pwd", "cd", "history")


def find_completions(prefix: str) -> list[str]:
    """Return sorted, distinct built-in and PATH entry names starting with prefix."""
    matches = [name for name in BUILTINS if name.startswith(prefix)]
    seen = set(matches)
    path = os.environ.get("PATH")
    if path is not None:
        for directory in filter(None, path.split(":")):
            try:
                entries = os.listdir(directory)
            except OSError:
                continue
            for name in entries:
                if name.startswith(prefix) and name not in seen:
                    seen.add(name)
                    matches.append(name)
    return sorted(matches)


def longest_common_prefix(words: list[str]) -> str:
    """Return the longest string that every word starts with."""
    if not words:
        return ""
    return os.path.commonprefix(list(words))