from dataclasses import dataclass

from lucky_slots.context import elapsed_fraction
from lucky_slots.curves import ease_in
from lucky_slots.ezterm import DrawCall, RichText, mul_alpha


@dataclass
class TextPopup:
    x: int
    y: int
    text: RichText
    duration_sec: float
    start_timestamp: float
    rise_rows: int = 0


def render_all_text_popups(all_text_popups: list[TextPopup], game_time: float) -> list[DrawCall]:
    draw_calls: list[DrawCall] = []

    for popup in all_text_popups:
        t: float = elapsed_fraction(game_time, popup.start_timestamp, popup.duration_sec)

        if t >= 1.0:
            continue

        # Drifts upwards by `rise_rows` over its lifetime
        y: int = popup.y - int(t * popup.rise_rows)

        draw_calls.append(DrawCall(popup.x, y, mul_alpha(popup.text, _calc_popup_alpha(t))))

    return draw_calls


def remove_finished_popups(all_text_popups: list[TextPopup], game_time: float) -> list[TextPopup]:
    return [
        p
        for p in all_text_popups
        if elapsed_fraction(game_time, p.start_timestamp, p.duration_sec) < 1.0
    ]


def _calc_popup_alpha(t: float) -> float:
    ramp_frac: float = 0.05

    if t < ramp_frac:
        local_t = t / ramp_frac
        return 0.5 + 0.5 * local_t

    # Decay phase
    decay_t = (t - ramp_frac) / (1 - ramp_frac)

    return 1.0 - ease_in(decay_t)
