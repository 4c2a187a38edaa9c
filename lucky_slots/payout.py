import random
from dataclasses import dataclass

from lucky_slots.config import Rules
from lucky_slots.symbol import Symbol


@dataclass(frozen=True)
class SpinOutcome:
    reels: list[Symbol]
    win_amount: int
    show_jackpot: bool


def draw_reels(rng: random.Random, rules: Rules) -> list[Symbol]:
    """Draws `rules.reel_count` independent, uniformly distributed symbols."""
    return [Symbol(rng.randint(1, rules.symbol_count)) for _ in range(rules.reel_count)]


def resolve_spin(reels: list[Symbol], rules: Rules) -> SpinOutcome:
    """Pure payout for a set of resolved reels.

    All reels equal pays the jackpot, exactly two distinct symbols pays the
    two-match multiplier, anything else pays nothing.
    """
    distinct_symbol_count: int = len(set(reels))

    if distinct_symbol_count == 1:
        return SpinOutcome(list(reels), rules.spin_cost * rules.jackpot_multiplier, True)

    if distinct_symbol_count == 2:
        return SpinOutcome(list(reels), rules.spin_cost * rules.two_match_multiplier, False)

    return SpinOutcome(list(reels), 0, False)
