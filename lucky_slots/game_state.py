from enum import Enum, auto


class GameState(Enum):
    READY_TO_SPIN = auto()
    SPINNING = auto()
    GAME_OVER = auto()
