"""Command history kept in memory and synchronised with a file."""

from __future__ import annotations

MAX_HISTORY = 500


class History:
    """A bounded list of commands remembering how much was last synced to disk."""

    def __init__(self, limit: int = MAX_HISTORY) -> None:
        self.limit = limit
        self._entries: list[str] = []
        self._synced = 0

    def add(self, command: str) -> None:
        """Append a command; empty commands and commands past the limit are dropped."""
        if not command:
            return
        if len(self._entries) < self.limit:
            self._entries.append(command)

    def load(self, filename) -> None:
        """Append every line of a file; a file that cannot be read is ignored."""
        try:
            with open(filename, encoding="utf-8", errors="surrogateescape", newline="") as f:
                for line in f:
                    self.add(line.split("\n", 1)[0])
        except OSError:
            return
        self._synced = len(self._entries)

    def save(self, filename, append: bool = False) -> None:
        """Write the history to a file.

        In append mode only the commands added since the last load or save are
        written. A file that cannot be opened is ignored.
        """
        start = self._synced if append else 0
        try:
            with open(filename, "a" if append else "w", encoding="utf-8",
                      errors="surrogateescape") as f:
                f.writelines(f"{command}\n" for command in self._entries[start:])
        except OSError:
            return
        self._synced = len(self._entries)

    def tail(self, count: int | None = None) -> list[tuple[int, str]]:
        """Return the last count entries as (1-based number, command) pairs."""
        total = len(self._entries)
        if count is None or count > total:
            count = total
        if count <= 0:
            return []
        start = total - count
        return [(start + n + 1, command) for n, command in enumerate(self._entries[start:])]

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index):
        return self._entries[index]