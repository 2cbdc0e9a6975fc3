"""Shared fixtures for bodyview tests."""

import logging

import pytest

from bodyview import logging_setup


class FakeTimer:
    """Stand-in for an event loop timer that only fires when told to."""

    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        assert self.started and not self.cancelled, "fired a timer that is not running"
        self.callback()


class TimerRecorder:
    """Timer factory remembering every timer it created."""

    def __init__(self):
        self.timers = []

    def __call__(self, delay, callback):
        timer = FakeTimer(delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def last(self):
        return self.timers[-1]


@pytest.fixture
def timers():
    return TimerRecorder()


@pytest.fixture(autouse=True)
def _detach_cli_log_handler():
    """Drop the CLI stderr handler so it never outlives a captured stream."""
    root = logging.getLogger()
    level = root.level
    yield
    handler = logging_setup._stderr_handler
    if handler is not None:
        root.removeHandler(handler)
        logging_setup._stderr_handler = None
    root.setLevel(level)
