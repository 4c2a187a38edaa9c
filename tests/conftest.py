"""Shared fixtures for lucky_slots tests."""
import random

import pytest

from lucky_slots.config import DEFAULT_RULES, Config, Rules
from lucky_slots.context import Context
from lucky_slots.ezterm import FPSCounter, Screen
from lucky_slots.reels import create_reels_animation
from lucky_slots.scheduler import Scheduler
from lucky_slots.slot_machine import SlotMachine, create_slot_machine


class FixedRNG:
    """Stand-in for `random.Random` that hands out a scripted sequence of draws."""

    def __init__(self, draws: list[int]):
        self._draws = list(draws)
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        return self._draws.pop(0)


@pytest.fixture
def fixed_rng():
    """Factory for scripted RNGs: `fixed_rng(2, 2, 2)`."""

    def make(*draws: int) -> FixedRNG:
        return FixedRNG(list(draws))

    return make


@pytest.fixture
def rules() -> Rules:
    return DEFAULT_RULES


@pytest.fixture
def config() -> Config:
    return Config()


@pytest.fixture
def machine(rules: Rules) -> SlotMachine:
    return create_slot_machine(rules)


@pytest.fixture
def scheduler() -> Scheduler:
    return Scheduler()


@pytest.fixture
def ctx(machine: SlotMachine, scheduler: Scheduler, rules: Rules) -> Context:
    return Context(
        screen=Screen(60, 24),
        game_time=0.0,
        rules=rules,
        machine=machine,
        scheduler=scheduler,
        rng=random.Random(1234),
        reels_animation=create_reels_animation(rules.reel_count),
        all_text_popups=[],
        fps_counter=FPSCounter(),
    )
