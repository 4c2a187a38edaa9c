from dataclasses import dataclass

from lucky_slots.symbol import Symbol


@dataclass(frozen=True)
class Rules:
    initial_credits: int = 1000
    spin_cost: int = 50
    reel_count: int = 3
    symbol_count: int = 5
    jackpot_multiplier: int = 50
    two_match_multiplier: int = 5

    def __post_init__(self):
        if self.spin_cost <= 0:
            raise ValueError(f"spin_cost must be positive, got {self.spin_cost}")
        if self.reel_count < 1:
            raise ValueError(f"reel_count must be at least 1, got {self.reel_count}")
        if self.symbol_count < 1:
            raise ValueError(f"symbol_count must be at least 1, got {self.symbol_count}")
        if self.symbol_count > len(Symbol):
            raise ValueError(
                f"symbol_count must be at most {len(Symbol)}, got {self.symbol_count}"
            )
        if self.jackpot_multiplier < 0 or self.two_match_multiplier < 0:
            raise ValueError("payout multipliers must not be negative")


@dataclass
class Config:
    game_speed: float = 1.0
    fps: float = 144.0
    spin_duration_sec: float = 1.0
    reels_max_spin_speed: float = 30.0
    win_popup_duration_sec: float = 1.5

    def __post_init__(self):
        if self.game_speed <= 0.0:
            raise ValueError(f"game_speed must be positive, got {self.game_speed}")
        if self.fps <= 0.0:
            raise ValueError(f"fps must be positive, got {self.fps}")
        if self.spin_duration_sec <= 0.0:
            raise ValueError(f"spin_duration_sec must be positive, got {self.spin_duration_sec}")


DEFAULT_RULES = Rules()
