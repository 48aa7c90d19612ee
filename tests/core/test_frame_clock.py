from __future__ import annotations

import pytest

from engine.core.frame_clock import AnimationClock


def test_clock_advances_by_fixed_step() -> None:
    clock = AnimationClock(step=0.01)
    for _ in range(100):
        nxt = clock.advanced()
        assert nxt.value == clock.value + clock.step
        assert nxt.value > clock.value
        clock = nxt


def test_clock_is_immutable() -> None:
    clock = AnimationClock()
    clock.advanced()
    assert clock.value == 0.0


def test_clock_wraps_at_modulus() -> None:
    clock = AnimationClock(step=0.25, wrap=1.0)
    values = []
    for _ in range(5):
        clock = clock.advanced()
        values.append(clock.value)
    assert values == [0.25, 0.5, 0.75, 0.0, 0.25]


@pytest.mark.parametrize("step", [0.0, -0.1, float("nan"), float("inf")])
def test_clock_rejects_bad_step(step: float) -> None:
    with pytest.raises(ValueError):
        AnimationClock(step=step)


def test_clock_rejects_bad_wrap() -> None:
    with pytest.raises(ValueError):
        AnimationClock(wrap=0.0)

