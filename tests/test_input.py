"""Key mapping and action resolution tests."""
import pytest
from blessed.keyboard import Keystroke

from lucky_slots.input import (
    Action,
    Input,
    get_action,
    map_input,
    resolve_action,
)
from lucky_slots.scheduler import tick_scheduler
from lucky_slots.slot_machine import create_slot_machine
from lucky_slots.symbol import Symbol


class TestMapInput:
    def test_space_spins(self):
        assert map_input(Keystroke(" ")) == Input.CONFIRM

    def test_enter_by_name(self):
        assert map_input(Keystroke("\n", code=343, name="KEY_ENTER")) == Input.CONFIRM

    def test_letters(self):
        assert map_input(Keystroke("r")) == Input.RESTART
        assert map_input(Keystroke("q")) == Input.QUIT

    def test_unmapped_key(self):
        assert map_input(Keystroke("x")) is None
        assert map_input(Keystroke("")) is None


class TestGetAction:
    def test_quit_is_always_available(self, ctx):
        assert get_action(ctx, Input.QUIT) == Action.QUIT_GAME

        ctx.machine.game_over = True
        assert get_action(ctx, Input.QUIT) == Action.QUIT_GAME

    def test_confirm_spins_when_ready(self, ctx):
        assert get_action(ctx, Input.CONFIRM) == Action.SPIN_REELS

    def test_confirm_ignored_without_credits(self, ctx):
        ctx.machine.credits = 10

        assert get_action(ctx, Input.CONFIRM) is None

    def test_confirm_ignored_while_spinning(self, ctx):
        ctx.machine.is_spinning = True

        assert get_action(ctx, Input.CONFIRM) is None

    def test_restart_only_on_game_over(self, ctx):
        assert get_action(ctx, Input.RESTART) is None

        ctx.machine.game_over = True

        assert get_action(ctx, Input.RESTART) == Action.RESTART_GAME
        assert get_action(ctx, Input.CONFIRM) == Action.RESTART_GAME


class TestResolveAction:
    def test_spin_starts_machine_and_animation(self, ctx, config):
        resolve_action(ctx, Action.SPIN_REELS, config)

        assert ctx.machine.is_spinning is True
        assert ctx.machine.credits == 950
        for col in ctx.reels_animation.columns:
            assert col.spin_time_remaining == config.spin_duration_sec

    def test_winning_spin_spawns_popup(self, ctx, config, fixed_rng):
        ctx.rng = fixed_rng(3, 3, 3)

        resolve_action(ctx, Action.SPIN_REELS, config)
        tick_scheduler(ctx.scheduler, config.spin_duration_sec)

        assert ctx.machine.reels == [Symbol.CHERRY] * 3
        assert [p.text.text for p in ctx.all_text_popups] == ["+$2500"]

    def test_losing_spin_spawns_no_popup(self, ctx, config, fixed_rng):
        ctx.rng = fixed_rng(1, 2, 3)

        resolve_action(ctx, Action.SPIN_REELS, config)
        tick_scheduler(ctx.scheduler, config.spin_duration_sec)

        assert ctx.all_text_popups == []

    def test_restart_resets_machine(self, ctx, config):
        ctx.machine.credits = 0
        ctx.machine.game_over = True
        ctx.machine.reels = [Symbol.DIAMOND, Symbol.LEMON, Symbol.GRAPES]

        resolve_action(ctx, Action.RESTART_GAME, config)

        assert ctx.machine == create_slot_machine()
        assert ctx.all_text_popups == []

    def test_quit_exits(self, ctx, config):
        with pytest.raises(SystemExit):
            resolve_action(ctx, Action.QUIT_GAME, config)
