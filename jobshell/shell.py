"""The interactive shell: built-in commands, job control and child reaping."""

from __future__ import annotations

import os
import re
import signal
import sys
from typing import Any, TextIO

from .jobs import Job, JobList, JobState, Status, analyze_status
from .parsing import Command, parse_command
from .signals import ignore_terminal_signals, restore_terminal_signals, sigchld_blocked

PROMPT = "COMMAND->"
JOB_LIST_NAME = "Lista de jobs"
_EXEC_FAILED = 255
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _to_int(text: str) -> int:
    """Read a leading integer the lenient way: 0 when there is none."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


class Shell:
    """A small job-control shell reading commands from ``stdin``."""

    def __init__(self, stdin: TextIO, stdout: TextIO, stderr: TextIO) -> None:
        self.stdin = stdin
        self.stdout = stdout
        self.stderr = stderr
        self.jobs = JobList(JOB_LIST_NAME)
        self._tty_fd = self._terminal_fd(stdin)

    @staticmethod
    def _terminal_fd(stream: TextIO) -> int | None:
        try:
            fd = stream.fileno()
        except (AttributeError, OSError, ValueError):
            return None
        return fd if os.isatty(fd) else None

    def _set_terminal(self, pgid: int) -> None:
        """Hand the controlling terminal to process group ``pgid``."""
        if self._tty_fd is None:
            return
        try:
            os.tcsetpgrp(self._tty_fd, pgid)
        except OSError:
            pass

    def _out(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def _err(self, text: str) -> None:
        self.stderr.write(text)
        self.stderr.flush()

    def run(self) -> int:
        """Read and execute commands until end of input; returns the exit code."""
        while True:
            self._out(PROMPT)
            line = self.stdin.readline()
            if line == "":
                self._out("\nBye\n")
                return 0
            self.execute(parse_command(line))

    def execute(self, command: Command) -> None:
        """Run one parsed command line."""
        name = command.name
        if name is None:
            return
        builtins = {
            "cd": self.change_directory,
            "fg": self.foreground,
            "bg": self.background,
        }
        if name == "jobs":
            self.list_jobs()
        elif name in builtins:
            builtins[name](command.args)
        else:
            self._launch(command)

    def reap(self, signum: int, frame: Any) -> None:
        """SIGCHLD handler: report and record state changes of listed jobs."""
        with sigchld_blocked():
            for job in self.jobs:
                try:
                    pid, status = os.waitpid(
                        job.pgid, os.WUNTRACED | os.WNOHANG | os.WCONTINUED
                    )
                except ChildProcessError:
                    continue
                if pid != job.pgid:
                    continue
                event, info = analyze_status(status)
                if event is Status.SUSPENDED:
                    self._out(
                        f"Process suspended, command: {job.command}, {event}, info: {info}\n"
                    )
                    job.state = JobState.STOPPED
                elif event is Status.CONTINUED:
                    self._out(
                        f"Process continued, command: {job.command}, {event}, info: {info}\n"
                    )
                    job.state = JobState.BACKGROUND
                elif event is Status.EXITED:
                    self._out(
                        f"Process exited, command: {job.command}, {event}, info: {info}\n"
                    )
                    self.jobs.remove(job)

    def change_directory(self, args: list[str]) -> None:
        """The ``cd`` built-in: go to ``args[1]``, or to $HOME without one."""
        if len(args) < 2:
            home = os.environ.get("HOME")
            if home is not None:
                try:
                    os.chdir(home)
                except OSError:
                    pass
            return
        try:
            os.chdir(args[1])
        except OSError as exc:
            self._err(f"Error changing directory: {exc.strerror}\n")

    def list_jobs(self) -> None:
        """The ``jobs`` built-in: print the job list."""
        with sigchld_blocked():
            self._out(self.jobs.format())

    def _job_at(self, args: list[str]) -> Job | None:
        position = _to_int(args[1]) if len(args) > 1 else 1
        try:
            return self.jobs.by_position(position)
        except IndexError:
            self._err(f"Error, invalid position: {position}\n")
            return None

    def foreground(self, args: list[str]) -> None:
        """The ``fg`` built-in: bring a job to the foreground and wait for it."""
        with sigchld_blocked():
            job = self._job_at(args)
            if job is None:
                return
            try:
                os.setpgid(job.pgid, job.pgid)
            except OSError:
                pass
            self._set_terminal(job.pgid)
            if job.state is JobState.STOPPED:
                os.killpg(job.pgid, signal.SIGCONT)
            try:
                _, status = os.waitpid(job.pgid, os.WUNTRACED)
            except ChildProcessError:
                self._set_terminal(os.getpgrp())
                self.jobs.remove(job)
                return
            self._set_terminal(os.getpgrp())
            event, _ = analyze_status(status)
            if event in (Status.EXITED, Status.SIGNALED):
                self.jobs.remove(job)
            elif event is Status.SUSPENDED:
                job.state = JobState.STOPPED

    def background(self, args: list[str]) -> None:
        """The ``bg`` built-in: let a stopped job continue in the background."""
        with sigchld_blocked():
            job = self._job_at(args)
            if job is None:
                return
            if job.state is JobState.STOPPED:
                job.state = JobState.BACKGROUND
                os.killpg(job.pgid, signal.SIGCONT)

    def _launch(self, command: Command) -> None:
        """Fork and exec an external program, in foreground or background."""
        args = command.args
        self.stdout.flush()
        self.stderr.flush()
        pid = os.fork()
        if pid == 0:
            self._exec_child(command)
        try:
            os.setpgid(pid, pid)
        except OSError:
            pass

        if command.background:
            with sigchld_blocked():
                self.jobs.add(Job(pid, args[0], JobState.BACKGROUND))
                self._out(f"Background job running... pid: {pid}, command: {args[0]}\n")
            return

        waited, status = os.waitpid(pid, os.WUNTRACED)
        self._set_terminal(os.getpgrp())
        event, info = analyze_status(status)
        if event is Status.SUSPENDED:
            with sigchld_blocked():
                self.jobs.add(Job(pid, args[0], JobState.STOPPED))
                self._out(
                    f"Foreground pid: {waited}, command: {args[0]}, {event}, info: {info}\n"
                )
        elif event in (Status.EXITED, Status.SIGNALED) and info != _EXEC_FAILED:
            self._out(
                f"Foreground pid: {waited}, command: {args[0]}, {event}, info: {info}\n"
            )

    def _exec_child(self, command: Command) -> None:
        """Runs in the forked child; never returns."""
        try:
            os.setpgid(0, 0)
            if not command.background:
                self._set_terminal(os.getpid())
            restore_terminal_signals()
            signal.signal(signal.SIGPIPE, signal.SIG_DFL)
            signal.signal(signal.SIGCHLD, signal.SIG_DFL)
            signal.pthread_sigmask(signal.SIG_SETMASK, set())
            try:
                os.execvp(command.args[0], command.args)
            except OSError:
                os.write(2, f"Error, command not found: {command.args[0]}\n".encode())
        finally:
            os._exit(_EXEC_FAILED)


def main(argv: list[str] | None = None) -> int:
    """Start an interactive shell on the standard streams."""
    shell = Shell(sys.stdin, sys.stdout, sys.stderr)
    ignore_terminal_signals()
    try:
        os.setpgid(0, 0)
    except OSError:
        pass
    shell._set_terminal(os.getpgrp())
    signal.signal(signal.SIGCHLD, shell.reap)
    return shell.run()


if __name__ == "__main__":
    raise SystemExit(main())