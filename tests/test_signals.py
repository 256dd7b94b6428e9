import os
import signal

import pytest

from jobshell.signals import (
    TERMINAL_SIGNALS,
    ignore_terminal_signals,
    restore_terminal_signals,
    sigchld_blocked,
    terminal_signals,
)

JOB_CONTROL_SIGNALS = {
    signal.SIGINT,
    signal.SIGQUIT,
    signal.SIGTSTP,
    signal.SIGTTIN,
    signal.SIGTTOU,
}


@pytest.fixture(autouse=True)
def saved_handlers():
    saved = {signum: signal.getsignal(signum) for signum in TERMINAL_SIGNALS}
    saved_chld = signal.getsignal(signal.SIGCHLD)
    yield
    for signum, handler in saved.items():
        signal.signal(signum, handler)
    signal.signal(signal.SIGCHLD, saved_chld)


def _blocked():
    return signal.pthread_sigmask(signal.SIG_BLOCK, set())


def _mask_within(context):
    with context:
        return _blocked()


def _nested_masks(outer, inner):
    with outer:
        with inner:
            inner_mask = _blocked()
        between_mask = _blocked()
    return inner_mask, between_mask


def _signal_self_within(context, received):
    with context:
        os.kill(os.getpid(), signal.SIGCHLD)
        pending = signal.sigpending()
        during = list(received)
    return pending, during


def _fail_within(context):
    with context:
        raise RuntimeError("boom", _blocked())


def test_terminal_signals_cover_job_control_signals():
    def handler(signum, frame):
        return None

    previous = terminal_signals(handler)
    assert set(previous) == JOB_CONTROL_SIGNALS
    assert all(signal.getsignal(s) is handler for s in JOB_CONTROL_SIGNALS)


def test_ignore_terminal_signals():
    restore_terminal_signals()
    previous = ignore_terminal_signals()
    assert set(previous) == JOB_CONTROL_SIGNALS
    assert all(previous[s] == signal.SIG_DFL for s in JOB_CONTROL_SIGNALS)
    assert all(signal.getsignal(s) == signal.SIG_IGN for s in JOB_CONTROL_SIGNALS)


def test_restore_terminal_signals():
    ignore_terminal_signals()
    previous = restore_terminal_signals()
    assert all(signal.getsignal(s) == signal.SIG_DFL for s in TERMINAL_SIGNALS)
    assert all(previous[s] == signal.SIG_IGN for s in TERMINAL_SIGNALS)


def test_custom_handler_installed_and_previous_returned():
    def handler(signum, frame):
        return None

    restore_terminal_signals()
    previous = terminal_signals(handler)
    assert all(signal.getsignal(s) is handler for s in TERMINAL_SIGNALS)
    assert set(previous) == set(TERMINAL_SIGNALS)
    assert all(previous[s] == signal.SIG_DFL for s in TERMINAL_SIGNALS)


def test_sigchld_blocked_inside_and_released_after():
    before = _blocked()
    inside = _mask_within(sigchld_blocked())
    after = _blocked()
    assert signal.SIGCHLD not in before
    assert signal.SIGCHLD in inside
    assert signal.SIGCHLD not in after


def test_sigchld_delivery_is_deferred_until_release():
    received = []
    signal.signal(signal.SIGCHLD, lambda signum, frame: received.append(signum))
    pending, during = _signal_self_within(sigchld_blocked(), received)
    assert signal.SIGCHLD in pending
    assert during == []
    assert received == [signal.SIGCHLD]


def test_sigchld_blocked_nests():
    inner, between = _nested_masks(sigchld_blocked(), sigchld_blocked())
    after = _blocked()
    assert signal.SIGCHLD in inner
    assert signal.SIGCHLD in between
    assert signal.SIGCHLD not in after


def test_sigchld_released_after_exception():
    with pytest.raises(RuntimeError, match="boom") as excinfo:
        _fail_within(sigchld_blocked())
    inside = excinfo.value.args[1]
    after = _blocked()
    assert signal.SIGCHLD in inside
    assert signal.SIGCHLD not in after