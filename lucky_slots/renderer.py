import math

from lucky_slots.context import Context
from lucky_slots.ezterm import RGB, DrawCall, RichText, center_x, lerp_rgb, mul_alpha
from lucky_slots.game_state import GameState
from lucky_slots.popup_text import render_all_text_popups
from lucky_slots.reels import reels_frame_width, render_reels
from lucky_slots.slot_machine import can_spin, get_game_state

TITLE_Y = 2
CREDITS_Y = 4
REELS_Y = 8
WIN_TEXT_Y = 12
SPIN_PROMPT_Y = 14
JACKPOT_Y = 17
GAME_OVER_Y = 19


def render_game(ctx: Context) -> list[DrawCall]:
    draw_calls: list[DrawCall] = []
    width: int = ctx.screen.width
    game_state: GameState = get_game_state(ctx.machine)

    # Title
    title = "Lucky Slots"
    draw_calls.append(DrawCall(center_x(width, title), TITLE_Y, RichText(title, RGB.WHITE, bold=True)))

    # Credits
    credits_text = f" Credits: ${ctx.machine.credits} "
    draw_calls.append(
        DrawCall(
            center_x(width, credits_text),
            CREDITS_Y,
            RichText(credits_text, RGB.WHITE, RGB.WHITE * 0.25, bold=True),
        )
    )

    # Reels
    frame_width: int = reels_frame_width(len(ctx.reels_animation.columns))
    draw_calls.extend(
        render_reels(
            max(0, (width - frame_width) // 2),
            REELS_Y,
            ctx.machine,
            ctx.reels_animation,
            ctx.game_time,
        )
    )

    # Win amount
    if ctx.machine.win_amount > 0:
        win_text = f"You won ${ctx.machine.win_amount}!"
        draw_calls.append(
            DrawCall(center_x(width, win_text), WIN_TEXT_Y, RichText(win_text, RGB.YELLOW, bold=True))
        )

    draw_calls.append(render_spin_prompt(ctx, width))

    # Jackpot banner
    if ctx.machine.show_jackpot:
        draw_calls.extend(render_jackpot_banner(width, JACKPOT_Y, ctx.game_time))

    # Game over panel
    if game_state == GameState.GAME_OVER:
        draw_calls.extend(render_game_over(width, GAME_OVER_Y))

    draw_calls.extend(render_all_text_popups(ctx.all_text_popups, ctx.game_time))

    # Debug lines
    if isinstance(ctx.debug_text, str):
        ctx.debug_text = RichText(ctx.debug_text, RGB.WHITE * 0.5)
    draw_calls.append(DrawCall(0, 0, ctx.debug_text))

    fps_text = f"{ctx.fps_counter.ema:5.1f} FPS"
    draw_calls.append(
        DrawCall(width - len(fps_text) - 1, 0, RichText(fps_text, lerp_rgb(RGB.GREEN, RGB.WHITE, 0.6)))
    )

    return draw_calls


def render_spin_prompt(ctx: Context, width: int) -> DrawCall:
    prompt = f" Spin! (${ctx.rules.spin_cost}) "
    rich_text = RichText(prompt, RGB.WHITE, RGB.GREEN * 0.8, bold=True)

    # Greyed out while the action is unavailable
    if not can_spin(ctx.machine, ctx.rules):
        rich_text = mul_alpha(rich_text, 0.35)

    return DrawCall(center_x(width, prompt), SPIN_PROMPT_Y, rich_text)


def render_jackpot_banner(width: int, y: int, game_time: float) -> list[DrawCall]:
    text = "★ JACKPOT! ★"

    amplitude: float = 1.0
    frequency: float = 8.0
    t: float = 0.5 + 0.5 * amplitude * math.sin(frequency * game_time)

    color: RGB = lerp_rgb(RGB.YELLOW, RGB.ORANGE, t)
    return [DrawCall(center_x(width, text), y, RichText(text, color, bold=True))]


def render_game_over(width: int, y: int) -> list[DrawCall]:
    title = "Game Over"
    hint = " Restart Game [r] "
    return [
        DrawCall(center_x(width, title), y, RichText(title, RGB.RED, bold=True)),
        DrawCall(center_x(width, hint), y + 2, RichText(hint, RGB.WHITE, RGB.BLUE, bold=True)),
    ]
