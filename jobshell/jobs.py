"""Job records, the job list and interpretation of wait statuses."""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum


class Status(Enum):
    """What happened to a child, as reported by wait."""

    SUSPENDED = "Suspended"
    SIGNALED = "Signaled"
    EXITED = "Exited"
    CONTINUED = "Continued"

    def __str__(self) -> str:
        return self.value


class JobState(Enum):
    """Where a job stands with respect to the terminal."""

    FOREGROUND = "Foreground"
    BACKGROUND = "Background"
    STOPPED = "Stopped"

    def __str__(self) -> str:
        return self.value


@dataclass(eq=False)
class Job:
    """A process group started by the shell."""

    pgid: int
    command: str
    state: JobState

    def describe(self) -> str:
        """One line with the job's pid, command and state."""
        return f"pid: {self.pgid}, command: {self.command}, state: {self.state}"


class JobList:
    """Named list of jobs; new jobs go to the front."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._jobs: list[Job] = []

    def add(self, job: Job) -> None:
        """Insert ``job`` at the head of the list."""
        self._jobs.insert(0, job)

    def remove(self, job: Job) -> None:
        """Remove ``job``; raises ValueError if it is not in the list."""
        index = next((i for i, item in enumerate(self._jobs) if item is job), None)
        if index is None:
            raise ValueError(f"job {job.pgid} is not in {self.name}")
        del self._jobs[index]

    def by_pid(self, pid: int) -> Job:
        """The job whose process group id is ``pid``; KeyError if none."""
        for job in self._jobs:
            if job.pgid == pid:
                return job
        raise KeyError(pid)

    def by_position(self, n: int) -> Job:
        """The job at 1-based position ``n``; IndexError if out of range."""
        if not 1 <= n <= len(self._jobs):
            raise IndexError(f"invalid position: {n}")
        return self._jobs[n - 1]

    def __len__(self) -> int:
        return len(self._jobs)

    def __iter__(self) -> Iterator[Job]:
        return iter(list(self._jobs))

    def format(self) -> str:
        """The list as printed by the ``jobs`` command."""
        lines = [f"Contents of {self.name}:"]
        lines.extend(f" [{n}] {job.describe()}" for n, job in enumerate(self._jobs, start=1))
        return "\n".join(lines) + "\n"


def analyze_status(status: int) -> tuple[Status, int]:
    """Interpret a raw wait status.

    Returns the kind of event and its detail: the stop or termination
    signal, the exit code, or 0 for a continued process.
    """
    if os.WIFSTOPPED(status):
        return Status.SUSPENDED, os.WSTOPSIG(status)
    if os.WIFCONTINUED(status):
        return Status.CONTINUED, 0
    if os.WIFSIGNALED(status):
        return Status.SIGNALED, os.WTERMSIG(status)
    return Status.EXITED, os.WEXITSTATUS(status)