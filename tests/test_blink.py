"""Tests for caret blinking."""

import pytest
from scrollterm.blink import CursorBlink


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


def test_caret_alternates_each_interval():
    clock = FakeClock()
    blink = CursorBlink(0.5, clock=clock)
    assert blink.visible()
    clock.now += 0.6
    assert not blink.visible()
    clock.now += 0.5
    assert blink.visible()


def test_reset_makes_caret_solid():
    clock = FakeClock()
    blink = CursorBlink(0.5, clock=clock)
    clock.now += 0.7
    assert not blink.visible()
    blink.reset()
    assert blink.visible()


def test_time_to_toggle():
    clock = FakeClock()
    blink = CursorBlink(0.5, clock=clock)
    clock.now += 0.2
    assert blink.time_to_toggle() == pytest.approx(0.3)


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        CursorBlink(0)
