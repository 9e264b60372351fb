"""Interactive line editing with history recall and command completion."""

from __future__ import annotations

import sys
import termios
from contextlib import contextmanager
from typing import Iterator, TextIO

from minish.completion import find_completions, longest_common_prefix
from minish.history import History

MAX_LINE = 1024

_UP = "\x1b[A"
_DOWN = "\x1b[B"
_BACKSPACE_KEYS = ("\x7f", "\b")
_ERASE = "\b \b"


@contextmanager
def raw_mode(fd: int) -> Iterator[None]:
    """Put the terminal on fd into raw mode, restoring its settings on exit."""
    original = termios.tcgetattr(fd)
    raw = termios.tcgetattr(fd)
    raw[0] &= ~(termios.BRKINT | termios.ICRNL | termios.INPCK
                | termios.ISTRIP | termios.IXON)
    raw[2] |= termios.CS8
    raw[3] &= ~(termios.ECHO | termios.ICANON | termios.ISIG | termios.IEXTEN)
    raw[6][termios.VMIN] = 1
    raw[6][termios.VTIME] = 0
    termios.tcsetattr(fd, termios.TCSAFLUSH, raw)
    try:
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSAFLUSH, original)


def _is_control(key: str) -> bool:
    code = ord(key)
    return code < 32 or code == 127


class LineEditor:
    """Reads one line at a time from a raw terminal, echoing as it goes."""

    def __init__(self, history: History, stdin: TextIO | None = None,
                 stdout: TextIO | None = None) -> None:
        self.history = history
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self._reset()

    def _reset(self) -> None:
        self.buffer: list[str] = []
        self._tabs_pressed = 0
        self._history_index = len(self.history)
        self._saved_line = ""

    @property
    def line(self) -> str:
        return "".join(self.buffer)

    def _write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def _replace_line(self, text: str) -> None:
        self._write(_ERASE * len(self.buffer))
        self.buffer = list(text)
        self._write(text)

    def _history_up(self) -> None:
        if self._history_index <= 0:
            return
        if self._history_index == len(self.history):
            self._saved_line = self.line
        self._history_index -= 1
        self._replace_line(self.history[self._history_index])

    def _history_down(self) -> None:
        if self._history_index >= len(self.history):
            return
        self._history_index += 1
        if self._history_index == len(self.history):
            self._replace_line(self._saved_line)
        else:
            self._replace_line(self.history[self._history_index])

    def _append(self, text: str) -> None:
        self.buffer.extend(text)
        self._write(text)

    def _complete(self) -> None:
        prefix = self.line
        matches = find_completions(prefix)
        if not matches:
            self._write("\a")
            return
        common = longest_common_prefix(matches)
        if len(common) > len(prefix):
            self._append(common[len(prefix):])
            self._tabs_pressed = 0
            if len(matches) == 1:
                self._append(" ")
        elif len(matches) == 1:
            self._append(" ")
            self._tabs_pressed = 0
        else:
            self._tabs_pressed += 1
            if self._tabs_pressed == 1:
                self._write("\a")
            elif self._tabs_pressed == 2:
                self._write(f"\n{'  '.join(matches)}\n$ {prefix}")

    def handle_key(self, key: str) -> str | None:
        """Process one key or escape sequence; return the line once Enter is pressed."""
        if key in ("\n", "\r"):
            line = self.line
            self._write("\n")
            self._reset()
            return line
        if key.startswith("\x1b"):
            if key == _UP:
                self._history_up()
            elif key == _DOWN:
                self._history_down()
        elif key == "\t":
            self._complete()
        elif key in _BACKSPACE_KEYS:
            if self.buffer:
                self.buffer.pop()
                self._write(_ERASE)
        elif not _is_control(key):
            if len(self.buffer) < MAX_LINE - 1:
                self._append(key)
        return None

    def read_line(self) -> str | None:
        """Read keys until Enter; at end of input return what was typed, or None if nothing."""
        self._reset()
        while True:
            key = self.stdin.read(1)
            if not key:
                break
            if key == "\x1b":
                first = self.stdin.read(1)
                if not first:
                    continue
                second = self.stdin.read(1)
                if not second:
                    continue
                key = key + first + second
            line = self.handle_key(key)
            if line is not None:
                return line
        line = self.line
        self._reset()
        return line or None