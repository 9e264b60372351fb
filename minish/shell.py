"""Command execution, pipelines and the read-evaluate loop."""

from __future__ import annotations

import os
import re
import subprocess
import sys
from contextlib import ExitStack, nullcontext
from typing import TextIO

from minish import commands
from minish.completion import BUILTINS
from minish.history import History
from minish.lineeditor import LineEditor, raw_mode
from minish.parser import ParseError, Redirection, find_in_path, parse, split_pipeline

_HISTORY_FILE_FLAGS = ("-r", "-w", "-a")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _is_terminal(stream) -> bool:
    try:
        return bool(stream.isatty())
    except (AttributeError, ValueError):
        return False


def _open_output(stack: ExitStack, path: str, append: bool) -> TextIO:
    flags = os.O_WRONLY | os.O_CREAT | (os.O_APPEND if append else os.O_TRUNC)
    fd = os.open(path, flags, 0o644)
    return stack.enter_context(
        os.fdopen(fd, "w", encoding="utf-8", errors="surrogateescape"))


class Shell:
    """A small command interpreter with built-ins, redirection and pipelines."""

    def __init__(self, history: History | None = None, interactive: bool = False) -> None:
        self.history = history if history is not None else History()
        self.interactive = interactive
        self.last_exit_status = 0
        self.exit_requested = False

    def execute(self, args: list[str], redirection: Redirection | None = None) -> int:
        """Run one command with its redirections and return its exit status."""
        if not args:
            return 0
        redirection = redirection or Redirection()
        with ExitStack() as stack:
            out_file = err_file = None
            if redirection.stdout_file is not None:
                try:
                    out_file = _open_output(stack, redirection.stdout_file,
                                            redirection.stdout_append)
                except OSError as exc:
                    sys.stderr.write(f"open stdout: {exc.strerror}\n")
                    return 1
            if redirection.stderr_file is not None:
                try:
                    err_file = _open_output(stack, redirection.stderr_file,
                                            redirection.stderr_append)
                except OSError as exc:
                    sys.stderr.write(f"open stderr: {exc.strerror}\n")
                    return 1
            out = out_file or sys.stdout
            err = err_file or sys.stderr
            try:
                return self._dispatch(args, out, err, out_file, err_file)
            finally:
                out.flush()
                err.flush()

    def _dispatch(self, args, out, err, out_file, err_file) -> int:
        name = args[0]
        if name == "exit":
            if len(args) > 1:
                self.last_exit_status = _atoi(args[1])
            self.exit_requested = True
            return self.last_exit_status
        if name == "echo":
            status = commands.echo(args[1:], out)
            out.write("\n")
            return status
        if name == "type":
            return self._type(args, out)
        if name == "pwd":
            return commands.pwd(out, err)
        if name == "cd":
            return commands.cd(args[1] if len(args) > 1 else None, out, err)
        if name == "history":
            return self._history(args, out)
        return self._external(args, err, out_file, err_file)

    def _type(self, args, out) -> int:
        if len(args) < 2:
            out.write("type: missing argument\n")
            return 1
        name = args[1]
        if name in BUILTINS:
            out.write(f"{name} is a shell builtin\n")
            return 0
        path = find_in_path(name)
        if path is not None:
            out.write(f"{name} is {path}\n")
            return 0
        out.write(f"{name}: not found\n")
        return 1

    def _history(self, args, out) -> int:
        if len(args) > 1 and args[1] in _HISTORY_FILE_FLAGS:
            if len(args) < 3:
                return 1
            flag, filename = args[1], args[2]
            if flag == "-r":
                self.history.load(filename)
            else:
                self.history.save(filename, append=flag == "-a")
            return 0
        limit = _atoi(args[1]) if len(args) > 1 else None
        for number, command in self.history.tail(limit):
            out.write(f"{number:5d}  {command}\n")
        return 0

    def _external(self, args, err, out_file, err_file) -> int:
        name = args[0]
        if "/" in name and os.access(name, os.X_OK):
            path = name
        else:
            path = find_in_path(name)
            if path is None:
                err.write(f"{name}: command not found\n")
                return 127
        sys.stdout.flush()
        sys.stderr.flush()
        try:
            proc = subprocess.run(args, executable=path, stdout=out_file, stderr=err_file)
        except OSError as exc:
            err.write(f"execv: {exc.strerror}\n")
            return 1
        return proc.returncode if proc.returncode >= 0 else 1

    def process_line(self, line: str) -> int:
        """Record, parse and run one input line; return the resulting exit status."""
        if not line:
            return self.last_exit_status
        if self.interactive:
            self.history.add(line)
        stages = split_pipeline(line)
        if len(stages) == 1:
            try:
                args, redirection = parse(stages[0])
            except ParseError as exc:
                sys.stderr.write(f"{exc}\n")
                return self.last_exit_status
            if not args and redirection.is_empty:
                return self.last_exit_status
            self.last_exit_status = self.execute(args, redirection)
        else:
            self._run_pipeline(stages)
        return self.last_exit_status

    def _run_pipeline(self, stages: list[str]) -> None:
        pipes = []
        try:
            for _ in stages[:-1]:
                pipes.append(os.pipe())
        except OSError as exc:
            for read_end, write_end in pipes:
                os.close(read_end)
                os.close(write_end)
            sys.stderr.write(f"pipe: {exc.strerror}\n")
            return
        sys.stdout.flush()
        sys.stderr.flush()
        pids = []
        for index, stage in enumerate(stages):
            pid = os.fork()
            if pid == 0:
                self._run_stage(index, stage, pipes)
            pids.append(pid)
        for read_end, write_end in pipes:
            os.close(read_end)
            os.close(write_end)
        wait_status = 0
        for pid in pids:
            _, wait_status = os.waitpid(pid, 0)
        if os.WIFEXITED(wait_status):
            self.last_exit_status = os.WEXITSTATUS(wait_status)
        else:
            self.last_exit_status = 1

    def _run_stage(self, index: int, stage: str, pipes) -> None:
        """Body of a forked pipeline stage; never returns."""
        status = 1
        try:
            if index > 0:
                os.dup2(pipes[index - 1][0], 0)
            if index < len(pipes):
                os.dup2(pipes[index][1], 1)
            for read_end, write_end in pipes:
                os.close(read_end)
                os.close(write_end)
            sys.stdout = open(1, "w", encoding="utf-8", errors="surrogateescape",
                              closefd=False)
            sys.stderr = open(2, "w", encoding="utf-8", errors="surrogateescape",
                              closefd=False)
            try:
                args, redirection = parse(stage)
            except ParseError as exc:
                sys.stderr.write(f"{exc}\n")
            else:
                status = self.execute(args, redirection)
        except BaseException as exc:  # the child must never return to the caller
            try:
                sys.stderr.write(f"{exc}\n")
            except Exception:
                pass
        finally:
            try:
                sys.stdout.flush()
                sys.stderr.flush()
            finally:
                os._exit(status & 0xFF)

    def run(self, stream: TextIO) -> int:
        """Read and run commands from stream until it ends or exit is called."""
        if self.interactive:
            self._run_interactive(stream)
        else:
            self._run_script(stream)
        return self.last_exit_status

    def _run_script(self, stream: TextIO) -> None:
        first_line = True
        for raw in stream:
            if self.exit_requested:
                break
            line = raw.split("\n", 1)[0]
            if first_line:
                first_line = False
                if line.startswith("#!"):
                    continue
            self.process_line(line)

    def _run_interactive(self, stream: TextIO) -> None:
        editor = LineEditor(self.history, stream, sys.stdout)
        terminal = _is_terminal(stream)
        while not self.exit_requested:
            sys.stdout.write("$ ")
            sys.stdout.flush()
            with raw_mode(stream.fileno()) if terminal else nullcontext():
                line = editor.read_line()
            if line is None:
                break
            self.process_line(line)


def main(argv: list[str] | None = None) -> int:
    """Run the shell on a script file given as the first argument, or on stdin."""
    if argv is None:
        argv = sys.argv[1:]
    histfile = os.environ.get("HISTFILE")
    interactive = _is_terminal(sys.stdin)
    history = History()

    if argv:
        try:
            stream = open(argv[0], encoding="utf-8", errors="surrogateescape")
        except OSError as exc:
            sys.stderr.write(f"fopen: {exc.strerror}\n")
            return 1
        interactive = False
    else:
        stream = sys.stdin

    if interactive and histfile:
        history.load(histfile)

    shell = Shell(history, interactive)
    try:
        shell.run(stream)
    finally:
        if stream is not sys.stdin:
            stream.close()

    if interactive and histfile:
        history.save(histfile, append=True)
    return shell.last_exit_status


if __name__ == "__main__":
    sys.exit(main())