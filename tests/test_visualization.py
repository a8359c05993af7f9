"""Tests for the pygame visualizer, run on SDL's headless dummy driver."""

import os

# Must be set before pygame opens a display
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from constants import (
    ACTION_CLEAR, ACTION_EXIT, ACTION_FREEZE, ACTION_REVERSE, BACKGROUND_COLOR,
    INFO_TEXT_SIZE, LINE_COLOR
)
from controls import FrameInput
from simulation import format_status
from visualization import (
    EDGE_KEY_BINDINGS, HELD_KEY_BINDINGS, Visualizer, blend_line_color
)


@pytest.fixture
def visualizer():
    vis = Visualizer({"fullscreen": False, "window_width": 800, "window_height": 600})
    pygame.event.clear()
    yield vis
    vis.close()


def press(key):
    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=key, mod=0, unicode="", scancode=0))


def test_full_opacity_is_the_line_color():
    assert blend_line_color(1.0) == LINE_COLOR


def test_zero_opacity_is_the_background():
    assert blend_line_color(0.0) == BACKGROUND_COLOR


def test_half_opacity_is_midway():
    assert blend_line_color(0.5, (200, 100, 0), (0, 0, 0)) == (100, 50, 0)


def test_opacity_is_clamped():
    assert blend_line_color(2.0) == LINE_COLOR
    assert blend_line_color(-1.0) == BACKGROUND_COLOR


def test_key_bindings():
    assert EDGE_KEY_BINDINGS[pygame.K_SPACE] == ACTION_CLEAR
    assert EDGE_KEY_BINDINGS[pygame.K_r] == ACTION_REVERSE
    assert EDGE_KEY_BINDINGS[pygame.K_p] == ACTION_FREEZE
    assert HELD_KEY_BINDINGS[pygame.K_ESCAPE] == ACTION_EXIT
    assert not set(EDGE_KEY_BINDINGS) & set(HELD_KEY_BINDINGS)


class TestPollInput:

    def test_viewport_matches_the_window(self, visualizer):
        assert visualizer.viewport.half_extents == (400.0, 300.0)

    def test_no_events(self, visualizer):
        frame_input = visualizer.poll_input()

        assert isinstance(frame_input, FrameInput)
        assert frame_input.just_pressed == frozenset()

    def test_space_press_is_a_clear_edge(self, visualizer):
        press(pygame.K_SPACE)

        frame_input = visualizer.poll_input()

        assert ACTION_CLEAR in frame_input.just_pressed

    def test_edges_fire_only_on_the_frame_they_are_pressed(self, visualizer):
        press(pygame.K_r)
        press(pygame.K_p)

        first = visualizer.poll_input()
        second = visualizer.poll_input()

        assert first.just_pressed == frozenset({ACTION_REVERSE, ACTION_FREEZE})
        assert second.just_pressed == frozenset()

    def test_held_key_presses_are_not_edges(self, visualizer):
        press(pygame.K_i)
        press(pygame.K_ESCAPE)

        frame_input = visualizer.poll_input()

        assert frame_input.just_pressed == frozenset()

    def test_window_close_returns_none(self, visualizer):
        press(pygame.K_SPACE)
        pygame.event.post(pygame.event.Event(pygame.QUIT))

        assert visualizer.poll_input() is None

    def test_resize_updates_the_reflection_bounds(self, visualizer):
        pygame.event.post(pygame.event.Event(pygame.VIDEORESIZE, size=(1000, 500), w=1000, h=500))

        visualizer.poll_input()

        assert visualizer.viewport.half_extents == (500.0, 250.0)


def test_tick_returns_seconds(visualizer):
    dt = visualizer.tick(1000)
    assert dt >= 0.0


def test_draw_renders_lines_dots_and_status(visualizer, sim):
    sim.config.frozen = True
    for _ in range(2):
        sim.step(FrameInput(pointer_held=True, cursor=(400, 300)), 0.070)

    visualizer.draw(sim.particles, sim.connections, sim.status)

    assert tuple(visualizer.screen.get_at((400, 300)))[:3] != BACKGROUND_COLOR


def test_status_font_loads_at_the_scaled_size(visualizer, config):
    text = visualizer.font.render(format_status(config), True, (255, 255, 255))
    assert 0 < text.get_height() <= 2 * INFO_TEXT_SIZE
