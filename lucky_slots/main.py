import argparse
import logging
import random
from typing import Never

from blessed import Terminal
from blessed.keyboard import Keystroke

from lucky_slots.config import DEFAULT_RULES, Config
from lucky_slots.context import Context
from lucky_slots.ezterm import (
    BACKGROUND_BOTTOM_COLOR,
    BACKGROUND_TOP_COLOR,
    DrawCall,
    FPSCounter,
    Screen,
    buffer_diff,
    create_fps_limiter,
    fill_screen_gradient,
    flush_diffs,
    print_at,
    update_fps_counter,
)
from lucky_slots.input import get_action, map_input, resolve_action
from lucky_slots.popup_text import remove_finished_popups
from lucky_slots.reels import create_reels_animation, tick_reels_animation
from lucky_slots.renderer import render_game
from lucky_slots.scheduler import Scheduler, tick_scheduler
from lucky_slots.slot_machine import create_slot_machine

# Parent of every `lucky_slots.*` module logger, handlers attach here
PACKAGE_LOGGER_NAME = "lucky_slots"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(PACKAGE_LOGGER_NAME)


def tick(dt: float, ctx: Context, term: Terminal, config: Config) -> None:
    if (term.width, term.height) != (ctx.screen.width, ctx.screen.height):
        ctx.screen = Screen(term.width, term.height)

    # --- Inputs ---
    key_event: Keystroke = term.inkey(timeout=0.0)

    if input := map_input(key_event):
        if action := get_action(ctx, input):
            resolve_action(ctx, action, config)

    # --- Game logic ---
    ctx.game_time += dt
    tick_reels_animation(ctx.reels_animation, dt, config.reels_max_spin_speed)

    # Runs the pending spin resolution once its delay is over
    tick_scheduler(ctx.scheduler, dt)

    ctx.all_text_popups = remove_finished_popups(ctx.all_text_popups, ctx.game_time)

    update_fps_counter(ctx.fps_counter, dt / config.game_speed)

    # --- Rendering ---
    fill_screen_gradient(ctx.screen.new_buffer, BACKGROUND_TOP_COLOR, BACKGROUND_BOTTOM_COLOR)

    draw_calls: list[DrawCall] = render_game(ctx)

    for draw_call in draw_calls:
        print_at(ctx.screen, draw_call.x, draw_call.y, draw_call.rich_text)
    flush_diffs(term, buffer_diff(ctx.screen))


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="lucky-slots", description="Three reel terminal slot machine")
    parser.add_argument("--seed", type=int, default=None, help="seed the reel RNG for a reproducible game")
    parser.add_argument("--fps", type=float, default=Config.fps, help="frame rate limit")
    parser.add_argument("--log-file", default=None, help="write diagnostics to this file")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="log level used with --log-file",
    )
    return parser.parse_args(argv)


def configure_logging(log_file: str | None, log_level: str) -> None:
    # The game owns the terminal, logs only ever go to a file
    if log_file is None:
        logger.addHandler(logging.NullHandler())
        return

    handler = logging.FileHandler(log_file)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, log_level))


def create_context(term: Terminal, rng: random.Random) -> Context:
    return Context(
        screen=Screen(term.width, term.height),
        game_time=0.0,
        rules=DEFAULT_RULES,
        machine=create_slot_machine(DEFAULT_RULES),
        scheduler=Scheduler(),
        rng=rng,
        reels_animation=create_reels_animation(DEFAULT_RULES.reel_count),
        all_text_popups=[],
        fps_counter=FPSCounter(),
    )


def main(argv: list[str] | None = None) -> Never:
    args = parse_args(argv)
    configure_logging(args.log_file, args.log_level)

    term = Terminal()
    config = Config(fps=args.fps)
    ctx = create_context(term, random.Random(args.seed))

    logger.info("Starting with %d credits (seed=%s)", ctx.machine.credits, args.seed)

    fps_limiter = create_fps_limiter(config.fps)

    with (
        term.cbreak(),
        term.hidden_cursor(),
        term.fullscreen(),
    ):
        dt: float = 0.0

        while True:
            dt *= config.game_speed
            tick(dt, ctx, term, config)
            dt = fps_limiter()


if __name__ == "__main__":
    main()
