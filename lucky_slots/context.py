from __future__ import annotations

import random
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lucky_slots.config import Rules
    from lucky_slots.ezterm import FPSCounter, RichText, Screen
    from lucky_slots.popup_text import TextPopup
    from lucky_slots.reels import ReelsAnimation
    from lucky_slots.scheduler import Scheduler
    from lucky_slots.slot_machine import SlotMachine


@dataclass
class Context:
    screen: Screen
    game_time: float
    rules: Rules
    machine: SlotMachine
    scheduler: Scheduler
    rng: random.Random
    reels_animation: ReelsAnimation
    all_text_popups: list[TextPopup]
    fps_counter: FPSCounter
    debug_text: str | RichText = ""


def elapsed_fraction(game_time: float, start_timestamp: float, duration: float) -> float:
    """
    Returns a value in [0, 1] representing how far through the effect we are.
    1 means the effect is finished.
    """
    if duration <= 0.0:
        return 1.0  # instantly expired
    t = (game_time - start_timestamp) / duration
    return max(0.0, min(1.0, t))
