"""Whole-screen rendering tests."""
from lucky_slots.renderer import render_game


def _texts(ctx) -> list[str]:
    return [dc.rich_text.text.strip() for dc in render_game(ctx)]


def test_idle_screen(ctx):
    texts = _texts(ctx)

    assert "Lucky Slots" in texts
    assert "Credits: $1000" in texts
    assert "Spin! ($50)" in texts
    assert not any(t.startswith("You won") for t in texts)
    assert "Game Over" not in texts


def test_win_and_jackpot(ctx):
    ctx.machine.win_amount = 2500
    ctx.machine.show_jackpot = True

    texts = _texts(ctx)

    assert "You won $2500!" in texts
    assert "★ JACKPOT! ★" in texts


def test_game_over_panel(ctx):
    ctx.machine.credits = 0
    ctx.machine.game_over = True

    texts = _texts(ctx)

    assert "Game Over" in texts
    assert "Restart Game [r]" in texts


def test_spin_prompt_dims_when_unaffordable(ctx):
    ready = [dc for dc in render_game(ctx) if "Spin!" in dc.rich_text.text][0]
    ctx.machine.credits = 10
    dimmed = [dc for dc in render_game(ctx) if "Spin!" in dc.rich_text.text][0]

    assert dimmed.rich_text.text_color.r < ready.rich_text.text_color.r
