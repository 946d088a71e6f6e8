"""Shared fixtures."""

import pytest


class _Handle:
    def __init__(self, scheduler, delay, fn):
        self.scheduler = scheduler
        self.due = scheduler.now + delay
        self.fn = fn
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """Stand-in for real timers: time only moves when `advance` is called."""

    def __init__(self):
        self.now = 0.0
        self.handles = []

    def __call__(self, delay, fn):
        handle = _Handle(self, delay, fn)
        self.handles.append(handle)
        return handle

    def advance(self, seconds):
        self.now += seconds
        due = [h for h in self.handles if not h.cancelled and h.due <= self.now]
        for handle in due:
            self.handles.remove(handle)
            handle.fn()

    @property
    def active(self):
        return [h for h in self.handles if not h.cancelled]


@pytest.fixture
def scheduler():
    return ManualScheduler()
