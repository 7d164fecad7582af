import random

import pytest

from idv.services import latency
from idv.services.latency import NoLatency, RandomLatency


@pytest.fixture
def sleeps(monkeypatch):
    recorded = []
    monkeypatch.setattr(latency.time, "sleep", recorded.append)
    return recorded


def test_random_delay_stays_inside_window(sleeps):
    simulator = RandomLatency(random.Random(42))
    for _ in range(200):
        simulator.pause(200, 500)

    assert len(sleeps) == 200
    assert all(0.2 <= s <= 0.5 for s in sleeps)
    assert len(set(sleeps)) > 1


def test_seeded_rng_is_repeatable(sleeps):
    RandomLatency(random.Random(7)).pause(100, 300)
    RandomLatency(random.Random(7)).pause(100, 300)
    assert sleeps[0] == sleeps[1]


def test_inverted_window_uses_minimum(sleeps):
    RandomLatency(random.Random(1)).pause(300, 100)
    assert sleeps == [0.3]


def test_zero_window_does_not_sleep(sleeps):
    RandomLatency(random.Random(1)).pause(0, 0)
    NoLatency().pause(100, 200)
    assert sleeps == []
