"""Tests for keyboard-driven parameter adjustment."""

import pytest

from constants import (
    ACTION_CONNECT_DOWN, ACTION_CONNECT_UP, ACTION_EXIT, ACTION_FREEZE,
    ACTION_REVERSE, ACTION_SPEED_DOWN, ACTION_SPEED_UP, CONNECT_FORCE,
    CONNECT_FORCE_STEP, SPEED, SPEED_STEP
)
from controls import FrameInput, handle_keyboard_input


def held(*actions):
    return FrameInput(held=frozenset(actions))


def pressed(*actions):
    return FrameInput(just_pressed=frozenset(actions))


def test_no_input_changes_nothing(config):
    assert handle_keyboard_input(config, FrameInput()) is False
    assert config.connect_distance == CONNECT_FORCE
    assert config.speed_multiplier == SPEED
    assert config.frozen is False


def test_connect_distance_changes_every_held_frame(config):
    for _ in range(3):
        handle_keyboard_input(config, held(ACTION_CONNECT_UP))
    assert config.connect_distance == CONNECT_FORCE + 3 * CONNECT_FORCE_STEP

    handle_keyboard_input(config, held(ACTION_CONNECT_DOWN))
    assert config.connect_distance == CONNECT_FORCE + 2 * CONNECT_FORCE_STEP


def test_connect_distance_is_not_clamped(config):
    config.connect_distance = 1.0
    handle_keyboard_input(config, held(ACTION_CONNECT_DOWN))
    assert config.connect_distance == -1.0


def test_speed_changes_every_held_frame(config):
    handle_keyboard_input(config, held(ACTION_SPEED_UP))
    assert config.speed_multiplier == pytest.approx(SPEED + SPEED_STEP)

    handle_keyboard_input(config, held(ACTION_SPEED_DOWN))
    handle_keyboard_input(config, held(ACTION_SPEED_DOWN))
    assert config.speed_multiplier == pytest.approx(SPEED - SPEED_STEP)


def test_opposite_keys_cancel_out(config):
    handle_keyboard_input(config, held(ACTION_CONNECT_UP, ACTION_CONNECT_DOWN, ACTION_SPEED_UP, ACTION_SPEED_DOWN))
    assert config.connect_distance == CONNECT_FORCE
    assert config.speed_multiplier == pytest.approx(SPEED)


def test_reverse_flips_speed_sign(config):
    config.speed_multiplier = 1.5
    handle_keyboard_input(config, pressed(ACTION_REVERSE))
    assert config.speed_multiplier == -1.5
    handle_keyboard_input(config, pressed(ACTION_REVERSE))
    assert config.speed_multiplier == 1.5


def test_toggles_only_react_to_the_press_edge(config):
    for _ in range(4):
        handle_keyboard_input(config, held(ACTION_REVERSE, ACTION_FREEZE))
    assert config.speed_multiplier == SPEED
    assert config.frozen is False


def test_freeze_toggles(config):
    handle_keyboard_input(config, pressed(ACTION_FREEZE))
    assert config.frozen is True
    handle_keyboard_input(config, pressed(ACTION_FREEZE))
    assert config.frozen is False


def test_exit_requested_while_held(config):
    assert handle_keyboard_input(config, held(ACTION_EXIT)) is True


def test_exit_still_applies_other_adjustments(config):
    assert handle_keyboard_input(config, held(ACTION_EXIT, ACTION_CONNECT_UP)) is True
    assert config.connect_distance == CONNECT_FORCE + CONNECT_FORCE_STEP
