from __future__ import annotations

import sys
import time
from dataclasses import dataclass, field
from typing import Callable, ClassVar, TypeAlias

import numpy as np
from blessed import Terminal

# A cell is (character, (fg, bg, bold))
CellStyle: TypeAlias = "tuple[RGB, RGB, bool]"
ScreenCell: TypeAlias = "tuple[str, CellStyle]"


@dataclass
class RGB:
    r: float
    g: float
    b: float

    WHITE: ClassVar[RGB]
    BLACK: ClassVar[RGB]
    RED: ClassVar[RGB]
    GREEN: ClassVar[RGB]
    BLUE: ClassVar[RGB]
    ORANGE: ClassVar[RGB]
    YELLOW: ClassVar[RGB]
    GOLD: ClassVar[RGB]
    PURPLE: ClassVar[RGB]

    def __mul__(self, other: float | RGB) -> RGB:
        if isinstance(other, RGB):
            return RGB(
                min(1.0, self.r * other.r),
                min(1.0, self.g * other.g),
                min(1.0, self.b * other.b),
            )

        return RGB(
            min(1.0, self.r * other),
            min(1.0, self.g * other),
            min(1.0, self.b * other),
        )


RGB.WHITE = RGB(1.0, 1.0, 1.0)
RGB.BLACK = RGB(0.0, 0.0, 0.0)
RGB.RED = RGB(1.0, 0.0, 0.0)
RGB.GREEN = RGB(0.0, 0.8, 0.2)
RGB.BLUE = RGB(0.1, 0.2, 0.9)
RGB.ORANGE = RGB(1.0, 0.5, 0.0)
RGB.YELLOW = RGB(1.0, 0.95, 0.2)
RGB.GOLD = RGB(1.0, 0.85, 0.0)
RGB.PURPLE = RGB(0.45, 0.15, 0.7)

BACKGROUND_TOP_COLOR: RGB = RGB.PURPLE * 0.6
BACKGROUND_BOTTOM_COLOR: RGB = RGB.BLUE * 0.5


@dataclass
class RichText:
    text: str
    text_color: RGB = field(default_factory=lambda: RGB.WHITE)
    bg_color: RGB | None = None
    bold: bool = False


@dataclass
class ScreenBuffer:
    width: int
    height: int
    chars: np.ndarray  # shape (height, width), dtype='<U1'
    styles: np.ndarray  # shape (height, width), dtype=object, each element a CellStyle


@dataclass
class Screen:
    width: int
    height: int
    old_buffer: ScreenBuffer = field(init=False)
    new_buffer: ScreenBuffer = field(init=False)

    def __post_init__(self):
        self.old_buffer = create_buffer(self.width, self.height)
        self.new_buffer = create_buffer(self.width, self.height)


@dataclass
class DrawCall:
    x: int
    y: int
    rich_text: RichText


@dataclass
class FPSCounter:
    ema: float = 0.0
    alpha: float = 0.08


def lerp_rgb(a: RGB, b: RGB, t: float) -> RGB:
    """
    Linear interpolation between two RGB colors.
    t = 0 → returns a
    t = 1 → returns b
    """
    if t <= 0.0:
        return a
    if t >= 1.0:
        return b

    return RGB(
        a.r + (b.r - a.r) * t,
        a.g + (b.g - a.g) * t,
        a.b + (b.b - a.b) * t,
    )


def mul_alpha(rich_text: RichText, alpha: float) -> RichText:
    """Fades `text_color` (and `bg_color` if set) towards black by `alpha`."""

    bg_color: RGB | None = rich_text.bg_color
    if bg_color:
        bg_color = lerp_rgb(RGB.BLACK, bg_color, alpha)

    return RichText(
        rich_text.text,
        lerp_rgb(RGB.BLACK, rich_text.text_color, alpha),
        bg_color,
        rich_text.bold,
    )


def center_x(screen_width: int, text: str) -> int:
    return max(0, (screen_width - len(text)) // 2)


def create_buffer(width: int, height: int) -> ScreenBuffer:
    chars = np.full((height, width), " ", dtype="<U1")
    styles = np.empty((height, width), dtype=object)
    default_style: CellStyle = (RGB.WHITE, RGB.BLACK, False)
    for y in range(height):
        for x in range(width):
            styles[y, x] = default_style
    return ScreenBuffer(width, height, chars, styles)


def buffer_diff(screen: Screen) -> list[tuple[int, int, ScreenCell]]:
    old = screen.old_buffer
    new = screen.new_buffer

    mask_chars = old.chars != new.chars

    # numpy would try to broadcast the style tuples, compare them cell by cell instead
    style_cmp = np.frompyfunc(lambda a, b: a != b, 2, 1)
    mask_styles = style_cmp(old.styles, new.styles).astype(bool)

    ys, xs = np.nonzero(mask_chars | mask_styles)

    diffs = [(int(y), int(x), (str(new.chars[y, x]), new.styles[y, x])) for y, x in zip(ys, xs)]

    screen.old_buffer = ScreenBuffer(new.width, new.height, new.chars.copy(), new.styles.copy())
    screen.new_buffer = create_buffer(screen.width, screen.height)

    return diffs


def flush_diffs(term: Terminal, diffs: list[tuple[int, int, ScreenCell]]) -> None:
    output = []
    for y, x, (char, (fg, bg, bold)) in diffs:
        style_str = _make_style(term, fg, bg, bold)
        output.append(term.move_xy(x, y) + style_str + char + term.normal)

    sys.stdout.write("".join(output))
    sys.stdout.flush()


def create_fps_limiter(
    fps: float,
    poll_interval: float = 0.001,
    spin_reserve: float = 0.002,
) -> Callable[[], float]:
    """
    High-precision, drift-correcting frame limiter.
    Returns a callable that blocks until the next frame and returns the frame time.
    """
    target = 1.0 / float(fps)
    next_frame = time.perf_counter() + target

    def wait_for_next_frame() -> float:
        nonlocal next_frame
        target_time = next_frame
        now = time.perf_counter()

        # --- Sleep until close to target ---
        while True:
            remaining = target_time - now - spin_reserve
            if remaining <= 0:
                break
            time.sleep(min(poll_interval, remaining))
            now = time.perf_counter()

        # --- Spin for last couple ms for precision ---
        while time.perf_counter() < target_time:
            pass

        end = time.perf_counter()
        dt = end - (next_frame - target)

        # Schedule from absolute time, resync if we are very late
        next_frame = target_time + target
        if end > next_frame:
            next_frame = end + target

        return dt

    return wait_for_next_frame


def update_fps_counter(fps_counter: FPSCounter, dt: float) -> None:
    if dt <= 0.0:
        return
    inst = 1.0 / dt
    if fps_counter.ema <= 0.0:
        fps_counter.ema = inst
    else:
        fps_counter.ema = fps_counter.ema * (1.0 - fps_counter.alpha) + inst * fps_counter.alpha


def _make_style(term: Terminal, fg: RGB, bg: RGB, bold: bool) -> str:
    if not term.does_styling:
        return term.normal
    fg_str = term.color_rgb(*_rgb_to_rgb_int(fg))
    bg_str = term.on_color_rgb(*_rgb_to_rgb_int(bg))
    bold_str = term.bold if bold else ""
    return f"{term.normal}{bold_str}{fg_str}{bg_str}"


def _rgb_to_rgb_int(color: RGB) -> tuple[int, int, int]:
    arr = np.array((color.r, color.g, color.b), dtype=np.float64)
    scaled = np.clip(np.round(arr * 255.0), 0, 255).astype(np.int32)
    return int(scaled[0]), int(scaled[1]), int(scaled[2])


def print_at(screen: Screen, x: int, y: int, text: str | RichText | list[str | RichText]) -> None:
    """
    Writes text into `screen.new_buffer` at (x, y), clipping at the buffer edges.
    Segments without a `bg_color` keep the background already in the buffer.
    """
    buf: ScreenBuffer = screen.new_buffer

    if isinstance(text, str):
        segments = [RichText(text, RGB.WHITE)]
    elif isinstance(text, RichText):
        segments = [text]
    else:
        segments = [seg if isinstance(seg, RichText) else RichText(seg, RGB.WHITE) for seg in text]

    if not (0 <= y < buf.height):
        return

    px = x
    for seg in segments:
        for i, char in enumerate(seg.text):
            cx = px + i
            if cx < 0:
                continue
            if cx >= buf.width:
                break

            bg = seg.bg_color if seg.bg_color is not None else buf.styles[y, cx][1]

            buf.chars[y, cx] = char
            buf.styles[y, cx] = (seg.text_color, bg, seg.bold)

        px += len(seg.text)


def fill_screen_gradient(buffer: ScreenBuffer, top: RGB, bottom: RGB) -> None:
    """Fills the buffer with blank cells fading vertically from `top` to `bottom`."""
    buffer.chars[:, :] = " "
    for y in range(buffer.height):
        t: float = y / max(1, buffer.height - 1)
        style: CellStyle = (RGB.WHITE, lerp_rgb(top, bottom, t), False)
        for x in range(buffer.width):
            buffer.styles[y, x] = style
