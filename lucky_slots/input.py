import logging
import sys
from enum import Enum, auto

from blessed.keyboard import Keystroke

from lucky_slots.config import Config
from lucky_slots.context import Context
from lucky_slots.ezterm import RGB, RichText, center_x
from lucky_slots.game_state import GameState
from lucky_slots.payout import SpinOutcome
from lucky_slots.popup_text import TextPopup
from lucky_slots.reels import create_reels_animation, start_reels_spin
from lucky_slots.slot_machine import can_spin, get_game_state, reset, spin

logger = logging.getLogger(__name__)

WIN_POPUP_Y = 15


class Input(Enum):
    QUIT = auto()
    CONFIRM = auto()
    RESTART = auto()


class Action(Enum):
    QUIT_GAME = auto()
    SPIN_REELS = auto()
    RESTART_GAME = auto()


KEYMAP: dict[str, Input] = {
    "KEY_ENTER": Input.CONFIRM,
    " ": Input.CONFIRM,
    "r": Input.RESTART,
    "q": Input.QUIT,
}


def map_input(keystroke: Keystroke) -> Input | None:
    if action := KEYMAP.get(str(keystroke)):
        return action
    if keystroke.name is not None:
        return KEYMAP.get(keystroke.name)
    return None


def get_action(ctx: Context, input: Input) -> Action | None:
    if input == Input.QUIT:
        return Action.QUIT_GAME

    game_state: GameState = get_game_state(ctx.machine)

    if game_state == GameState.READY_TO_SPIN:
        if input == Input.CONFIRM and can_spin(ctx.machine, ctx.rules):
            return Action.SPIN_REELS

    elif game_state == GameState.GAME_OVER:
        if input in (Input.RESTART, Input.CONFIRM):
            return Action.RESTART_GAME

    return None


def resolve_action(ctx: Context, action: Action, config: Config) -> None:
    """This mutates `ctx` directly"""

    match action:
        case Action.QUIT_GAME:
            logger.info("Quitting with %d credits", ctx.machine.credits)
            sys.exit()

        case Action.SPIN_REELS:
            started: bool = spin(
                ctx.machine,
                ctx.scheduler,
                ctx.rng,
                ctx.rules,
                config.spin_duration_sec,
                on_resolved=lambda outcome: on_spin_resolved(ctx, outcome, config),
            )
            if started:
                start_reels_spin(ctx.reels_animation, config.spin_duration_sec)

        case Action.RESTART_GAME:
            reset(ctx.machine, ctx.rules)
            ctx.reels_animation = create_reels_animation(ctx.rules.reel_count)
            ctx.all_text_popups = []


def on_spin_resolved(ctx: Context, outcome: SpinOutcome, config: Config) -> None:
    if outcome.win_amount <= 0:
        return

    text: str = f"+${outcome.win_amount}"
    color: RGB = RGB.GOLD if outcome.show_jackpot else RGB.YELLOW
    ctx.all_text_popups.append(
        TextPopup(
            x=center_x(ctx.screen.width, text),
            y=WIN_POPUP_Y,
            text=RichText(text, color, bold=True),
            duration_sec=config.win_popup_duration_sec,
            start_timestamp=ctx.game_time,
            rise_rows=3,
        )
    )
