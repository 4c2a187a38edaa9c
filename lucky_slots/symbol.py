from enum import IntEnum

from lucky_slots.ezterm import RGB, DrawCall, RichText

SYMBOL_TILE_WIDTH = 5
DEFAULT_TILE_BG_COLOR: RGB = RGB.WHITE * 0.95


class Symbol(IntEnum):
    APPLE = 1
    LEMON = 2
    CHERRY = 3
    GRAPES = 4
    DIAMOND = 5


# Single-cell glyphs, emoji would take two terminal cells
SYMBOL_STR: dict[Symbol, str] = {
    Symbol.APPLE: "●",
    Symbol.LEMON: "◖",
    Symbol.CHERRY: "♥",
    Symbol.GRAPES: "⁂",
    Symbol.DIAMOND: "◆",
}

SYMBOL_COLOR: dict[Symbol, RGB] = {
    Symbol.APPLE: RGB.RED * 0.8,
    Symbol.LEMON: RGB(0.85, 0.7, 0.0),
    Symbol.CHERRY: RGB(0.7, 0.0, 0.15),
    Symbol.GRAPES: RGB.PURPLE,
    Symbol.DIAMOND: RGB(0.0, 0.6, 0.85),
}

ALL_SYMBOLS: list[Symbol] = list(Symbol)


def render_symbol_tile(x: int, y: int, symbol: Symbol) -> list[DrawCall]:
    """Three rows, glyph in the middle of a white tile."""
    glyph_row: str = SYMBOL_STR[symbol].center(SYMBOL_TILE_WIDTH)
    blank_row: str = " " * SYMBOL_TILE_WIDTH
    color: RGB = SYMBOL_COLOR[symbol]

    return [
        DrawCall(x, y - 1, RichText(blank_row, color, DEFAULT_TILE_BG_COLOR)),
        DrawCall(x, y, RichText(glyph_row, color, DEFAULT_TILE_BG_COLOR, bold=True)),
        DrawCall(x, y + 1, RichText(blank_row, color, DEFAULT_TILE_BG_COLOR)),
    ]
