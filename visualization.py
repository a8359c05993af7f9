# visualization.py
"""
Handles the window, input and drawing of the dots using Pygame.
"""
import logging
import pygame
from typing import Dict, Optional, Tuple

from particle import ParticleSystem
from viewport import Viewport
from controls import FrameInput
from simulation import Connections
from constants import (
    BACKGROUND_COLOR, DOT_COLOR, LINE_COLOR, FULLSCREEN, WINDOW_WIDTH,
    WINDOW_HEIGHT, WINDOW_TITLE, INFO_TEXT_PADDING, INFO_TEXT_FONT_SIZE,
    INFO_TEXT_COLOR, ACTION_CONNECT_UP, ACTION_CONNECT_DOWN, ACTION_SPEED_UP,
    ACTION_SPEED_DOWN, ACTION_REVERSE, ACTION_FREEZE, ACTION_CLEAR, ACTION_EXIT
)


# --- Data Contracts ---
#
# class Visualizer:
#   - __init__(self, vis_params: Optional[dict] = None):
#     - Inputs: the "visualization" section of config.json. Optional
#       keys: "fullscreen", "window_width", "window_height".
#     - Side Effects: Initializes Pygame and creates a display surface.
#     - Invariants: self.viewport always matches the current window size.
#
#   - poll_input(self) -> Optional[FrameInput]:
#     - Outputs: the key and pointer state for this frame, or None if
#       the window was closed.
#     - Side Effects: Drains the Pygame event queue. Resizes the viewport
#       when the window is resized.
#
#   - draw(self, particles, connections, status) -> None:
#     - Side Effects: Renders lines, dots and status text, then flips.

# Physical keys for each logical action. Held actions are read from the
# keyboard state, edge actions from KEYDOWN events.
HELD_KEY_BINDINGS: Dict[int, str] = {
    pygame.K_i: ACTION_CONNECT_UP,
    pygame.K_k: ACTION_CONNECT_DOWN,
    pygame.K_u: ACTION_SPEED_UP,
    pygame.K_j: ACTION_SPEED_DOWN,
    pygame.K_ESCAPE: ACTION_EXIT,
}
EDGE_KEY_BINDINGS: Dict[int, str] = {
    pygame.K_r: ACTION_REVERSE,
    pygame.K_p: ACTION_FREEZE,
    pygame.K_SPACE: ACTION_CLEAR,
}


def blend_line_color(alpha: float, color: Tuple[int, int, int] = LINE_COLOR,
                     background: Tuple[int, int, int] = BACKGROUND_COLOR) -> Tuple[int, int, int]:
    """
    Returns the line color faded towards the background by alpha.

    The display surface has no alpha channel, so opacity is baked into
    the RGB value instead.
    """
    alpha = min(max(alpha, 0.0), 1.0)
    return tuple(int(round(b + (c - b) * alpha)) for c, b in zip(color, background))


class Visualizer:
    """
    Owns the Pygame window: translates input and renders each frame.
    """
    def __init__(self, vis_params: Optional[dict] = None):
        """
        Initializes Pygame and the display window.
        """
        vis_params = vis_params or {}
        pygame.init()
        pygame.font.init()

        if vis_params.get('fullscreen', FULLSCREEN):
            display_info = pygame.display.Info()
            width, height = display_info.current_w, display_info.current_h
            self.screen = pygame.display.set_mode((width, height), pygame.FULLSCREEN)
        else:
            width = vis_params.get('window_width', WINDOW_WIDTH)
            height = vis_params.get('window_height', WINDOW_HEIGHT)
            self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)

        pygame.display.set_caption(WINDOW_TITLE)
        self.clock = pygame.time.Clock()
        self.viewport = Viewport(*self.screen.get_size())

        # Pygame falls back to its bundled font when None is given.
        self.font = pygame.font.SysFont(None, INFO_TEXT_FONT_SIZE)

        logging.info(f"Visualizer initialized with Pygame display ({width}x{height}).")

    def _read_cursor(self) -> Optional[Tuple[int, int]]:
        """The cursor position in window pixels, or None when it is elsewhere."""
        if not pygame.mouse.get_focused():
            return None
        return pygame.mouse.get_pos()

    def poll_input(self) -> Optional[FrameInput]:
        """
        Drains the event queue and samples the keyboard and mouse.

        Returns:
            Optional[FrameInput]: None if the window was closed.
        """
        just_pressed = set()
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logging.info("Quit event received. Shutting down visualizer.")
                return None

            if event.type == pygame.KEYDOWN and event.key in EDGE_KEY_BINDINGS:
                just_pressed.add(EDGE_KEY_BINDINGS[event.key])

            if event.type == pygame.VIDEORESIZE:
                self.viewport.resize(event.w, event.h)
                logging.info(f"Window resized to {self.viewport.width}x{self.viewport.height}.")

        keys = pygame.key.get_pressed()
        held = frozenset(action for key, action in HELD_KEY_BINDINGS.items() if keys[key])

        return FrameInput(
            held=held,
            just_pressed=frozenset(just_pressed),
            pointer_held=pygame.mouse.get_pressed()[0],
            cursor=self._read_cursor(),
        )

    def tick(self, fps: int) -> float:
        """Waits for the next frame and returns the elapsed time in seconds."""
        return self.clock.tick(fps) / 1000.0

    def _draw_connections(self, connections: Connections):
        to_window = self.viewport.world_to_window
        for start, end, alpha in zip(connections.starts, connections.ends, connections.alphas):
            pygame.draw.aaline(self.screen, blend_line_color(alpha), to_window(start), to_window(end))

    def _draw_dots(self, particles: ParticleSystem):
        to_window = self.viewport.world_to_window
        for pos, radius in zip(particles.positions, particles.radii):
            pygame.draw.circle(self.screen, DOT_COLOR, to_window(pos), float(radius))

    def _draw_status(self, status: str):
        text_surf = self.font.render(status, True, INFO_TEXT_COLOR)
        self.screen.blit(text_surf, (INFO_TEXT_PADDING, INFO_TEXT_PADDING))

    def draw(self, particles: ParticleSystem, connections: Connections, status: str):
        """
        Renders one frame: connection lines, dots on top, then the status text.
        """
        self.screen.fill(BACKGROUND_COLOR)
        self._draw_connections(connections)
        self._draw_dots(particles)
        self._draw_status(status)
        pygame.display.flip()

    def get_fps(self) -> float:
        return self.clock.get_fps()

    def close(self):
        """Shuts down Pygame."""
        pygame.font.quit()
        pygame.quit()
