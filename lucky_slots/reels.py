import math
import random
from dataclasses import dataclass, field

from lucky_slots.ezterm import RGB, DrawCall, RichText, lerp_rgb
from lucky_slots.slot_machine import SlotMachine
from lucky_slots.symbol import ALL_SYMBOLS, SYMBOL_TILE_WIDTH, Symbol, render_symbol_tile

REEL_X_SPACING = 2
FRAME_COLOR: RGB = lerp_rgb(RGB.GOLD, RGB.WHITE, 0.5)


@dataclass
class ReelColumn:
    # Cursor is a float for easier incrementation
    # will have to be converted into an int to use as index
    cursor: float
    spin_duration: float = 0.0
    spin_time_remaining: float = 0.0
    spin_speed: float = 0.0


@dataclass
class ReelsAnimation:
    columns: list[ReelColumn] = field(default_factory=list)


def create_reels_animation(reel_count: int) -> ReelsAnimation:
    # Offset each column so they don't cycle in lockstep
    return ReelsAnimation([ReelColumn(cursor=float(i * 2)) for i in range(reel_count)])


def start_reels_spin(animation: ReelsAnimation, spin_duration: float) -> None:
    for col in animation.columns:
        col.spin_duration = spin_duration
        col.spin_time_remaining = spin_duration


def tick_reels_animation(animation: ReelsAnimation, dt: float, max_spin_speed: float) -> bool:
    """Mutates `animation`.

    Returns `True` once every column stopped or if there are no columns.
    """
    col_finished: int = 0
    for col in animation.columns:
        col.spin_time_remaining = max(0.0, col.spin_time_remaining - dt)
        col.spin_speed = calc_spin_speed(
            col.spin_duration,
            col.spin_time_remaining,
            snap_threshold=0.1,
            max_spin_speed=max_spin_speed,
        )

        col.cursor += col.spin_speed * dt

        if col.spin_speed == 0.0:
            col.spin_time_remaining = 0.0
            col_finished += 1

    return col_finished == len(animation.columns)


def calc_spin_speed(
    duration: float, time_remaining: float, snap_threshold: float, max_spin_speed: float
) -> float:
    exponent = 6

    if duration <= 0.0:
        return 0.0

    time_normalized = max(0.0, min(1.0, time_remaining / duration))

    # guaranteed zero at end or snap early
    if time_normalized <= snap_threshold:
        return 0.0

    # easing curve
    return max_spin_speed * (1 - (1 - time_normalized) ** exponent)


def reels_frame_width(reel_count: int) -> int:
    return reel_count * SYMBOL_TILE_WIDTH + (reel_count + 1) * REEL_X_SPACING + 2


def displayed_symbol(machine: SlotMachine, column: ReelColumn, col_index: int) -> Symbol:
    """While spinning, the cycling symbol under the cursor, otherwise the resolved reel."""
    if machine.is_spinning:
        return ALL_SYMBOLS[int(column.cursor) % len(ALL_SYMBOLS)]
    return machine.reels[col_index]


def render_reels(
    x: int,
    y: int,
    machine: SlotMachine,
    animation: ReelsAnimation,
    game_time: float,
) -> list[DrawCall]:
    """`y` is the center row of the tiles, the frame spans `y - 2` to `y + 2`."""
    draw_calls: list[DrawCall] = []

    frame_width: int = reels_frame_width(len(animation.columns))
    inner: str = " " * (frame_width - 2)
    frame_color: RGB = FRAME_COLOR
    if machine.game_over:
        frame_color = frame_color * 0.4

    draw_calls.append(DrawCall(x, y - 2, RichText("╭" + "─" * (frame_width - 2) + "╮", frame_color)))
    for row in range(y - 1, y + 2):
        draw_calls.append(DrawCall(x, row, RichText("│", frame_color)))
        draw_calls.append(DrawCall(x + 1, row, RichText(inner, bg_color=RGB.WHITE * 0.2)))
        draw_calls.append(DrawCall(x + frame_width - 1, row, RichText("│", frame_color)))
    draw_calls.append(DrawCall(x, y + 2, RichText("╰" + "─" * (frame_width - 2) + "╯", frame_color)))

    for col_index, col in enumerate(animation.columns):
        tile_x: int = x + 1 + REEL_X_SPACING + col_index * (SYMBOL_TILE_WIDTH + REEL_X_SPACING)
        symbol: Symbol = displayed_symbol(machine, col, col_index)

        tile_draw_calls: list[DrawCall] = render_symbol_tile(tile_x, y, symbol)

        for draw_call in tile_draw_calls:
            rt: RichText = draw_call.rich_text

            # Flicker while the column is moving
            if col.spin_time_remaining > 0.0 and rt.bg_color:
                seeded_random = random.Random(int(col.cursor))
                rt.bg_color *= seeded_random.uniform(0.8, 1.0)

            # Sinewave gold highlight on a jackpot
            if machine.show_jackpot and rt.bg_color:
                amplitude: float = 1.0
                frequency: float = 6.5
                phase_offset: float = col_index * 0.6
                t: float = 0.5 + 0.5 * amplitude * math.sin(frequency * game_time + phase_offset)
                rt.bg_color = lerp_rgb(rt.bg_color, RGB.GOLD, t * 0.6)

            draw_call.rich_text = rt

        draw_calls.extend(tile_draw_calls)

    return draw_calls
