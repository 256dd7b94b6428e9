"""Terminal-related signal dispositions and SIGCHLD masking."""

from __future__ import annotations

import signal
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, Union

Handler = Union[Callable[[int, Any], Any], int, signal.Handlers]

TERMINAL_SIGNALS = (
    signal.SIGINT,
    signal.SIGQUIT,
    signal.SIGTSTP,
    signal.SIGTTIN,
    signal.SIGTTOU,
)


def terminal_signals(handler: Handler) -> dict[int, Handler]:
    """Install ``handler`` for every terminal signal.

    Returns the handlers that were installed before, keyed by signal.
    """
    return {signum: signal.signal(signum, handler) for signum in TERMINAL_SIGNALS}


def ignore_terminal_signals() -> dict[int, Handler]:
    """Ignore the terminal signals, as the shell itself must."""
    return terminal_signals(signal.SIG_IGN)


def restore_terminal_signals() -> dict[int, Handler]:
    """Give the terminal signals back their default actions."""
    return terminal_signals(signal.SIG_DFL)


@contextmanager
def sigchld_blocked() -> Iterator[None]:
    """Keep SIGCHLD blocked for the duration of the block."""
    previous = signal.pthread_sigmask(signal.SIG_BLOCK, {signal.SIGCHLD})
    try:
        yield
    finally:
        signal.pthread_sigmask(signal.SIG_SETMASK, previous)