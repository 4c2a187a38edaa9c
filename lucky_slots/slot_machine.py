import logging
import random
from dataclasses import dataclass, field
from typing import Callable

from lucky_slots.config import DEFAULT_RULES, Rules
from lucky_slots.game_state import GameState
from lucky_slots.payout import SpinOutcome, draw_reels, resolve_spin
from lucky_slots.scheduler import Scheduler, schedule
from lucky_slots.symbol import Symbol

logger = logging.getLogger(__name__)


@dataclass
class SlotMachine:
    credits: int = DEFAULT_RULES.initial_credits
    reels: list[Symbol] = field(default_factory=lambda: _initial_reels(DEFAULT_RULES))
    is_spinning: bool = False
    win_amount: int = 0
    show_jackpot: bool = False
    game_over: bool = False
    # Bumped by reset() so callbacks from spins before the reset are dropped
    spin_generation: int = field(default=0, compare=False)


def _initial_reels(rules: Rules) -> list[Symbol]:
    return [Symbol.APPLE] * rules.reel_count


def create_slot_machine(rules: Rules = DEFAULT_RULES) -> SlotMachine:
    return SlotMachine(credits=rules.initial_credits, reels=_initial_reels(rules))


def get_game_state(machine: SlotMachine) -> GameState:
    if machine.game_over:
        return GameState.GAME_OVER
    if machine.is_spinning:
        return GameState.SPINNING
    return GameState.READY_TO_SPIN


def can_spin(machine: SlotMachine, rules: Rules = DEFAULT_RULES) -> bool:
    return not machine.is_spinning and machine.credits >= rules.spin_cost and not machine.game_over


def spin(
    machine: SlotMachine,
    scheduler: Scheduler,
    rng: random.Random,
    rules: Rules = DEFAULT_RULES,
    spin_duration: float = 1.0,
    on_resolved: Callable[[SpinOutcome], None] | None = None,
) -> bool:
    """Mutates `machine`.

    Pays for a spin and schedules its resolution `spin_duration` seconds of
    game time later. Returns `False` without touching anything when the
    machine is busy, out of credits or over.
    """
    if not can_spin(machine, rules):
        logger.debug(
            "Spin ignored (credits=%d, spinning=%s, game_over=%s)",
            machine.credits,
            machine.is_spinning,
            machine.game_over,
        )
        return False

    machine.is_spinning = True
    machine.credits -= rules.spin_cost
    machine.win_amount = 0
    machine.show_jackpot = False
    logger.debug("Spin started, %d credits left", machine.credits)

    generation: int = machine.spin_generation

    def finish_spin() -> None:
        if machine.spin_generation != generation:
            logger.debug("Dropping resolution of a spin started before reset")
            return

        outcome: SpinOutcome = resolve_spin(draw_reels(rng, rules), rules)
        _apply_outcome(machine, outcome)

        if on_resolved is not None:
            on_resolved(outcome)

    schedule(scheduler, spin_duration, finish_spin)
    return True


def _apply_outcome(machine: SlotMachine, outcome: SpinOutcome) -> None:
    machine.reels = outcome.reels
    machine.win_amount = outcome.win_amount
    machine.show_jackpot = outcome.show_jackpot
    machine.credits += outcome.win_amount
    machine.is_spinning = False

    logger.debug(
        "Spin resolved: reels=%s win=%d credits=%d",
        [int(s) for s in outcome.reels],
        outcome.win_amount,
        machine.credits,
    )

    if machine.credits <= 0:
        machine.game_over = True
        logger.info("Game over, credits=%d", machine.credits)


def reset(machine: SlotMachine, rules: Rules = DEFAULT_RULES) -> None:
    """Mutates `machine` back to its starting values, whatever state it is in.

    A spin still pending at reset time is abandoned and never pays out.
    """
    machine.credits = rules.initial_credits
    machine.reels = _initial_reels(rules)
    machine.is_spinning = False
    machine.win_amount = 0
    machine.show_jackpot = False
    machine.game_over = False
    machine.spin_generation += 1
    logger.debug("Machine reset to %d credits", machine.credits)
