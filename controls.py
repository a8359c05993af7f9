# controls.py
"""
Keyboard-driven adjustment of the simulation parameters.

The visualizer translates raw pygame state into a FrameInput once per
frame. handle_keyboard_input() applies the held and just-pressed actions
to a SimulationConfig and reports whether the user asked to quit.
"""
import logging
from typing import FrozenSet, NamedTuple, Optional, Tuple, TYPE_CHECKING

from constants import (
    ACTION_CONNECT_UP, ACTION_CONNECT_DOWN, ACTION_SPEED_UP, ACTION_SPEED_DOWN,
    ACTION_REVERSE, ACTION_FREEZE, ACTION_EXIT, CONNECT_FORCE_STEP, SPEED_STEP
)

if TYPE_CHECKING:
    from simulation import SimulationConfig

# --- Data Contracts ---
#
# class FrameInput(NamedTuple):
#   - held: logical actions whose key is currently down.
#   - just_pressed: logical actions whose key went down this frame.
#   - pointer_held: True while the primary mouse button is down.
#   - cursor: cursor position in window pixels, None when off-window.
#
# handle_keyboard_input(config, frame_input) -> bool:
#   - Side Effects: Mutates connect_distance, speed_multiplier and frozen
#     on config. No clamping is applied.
#   - Outputs: True if exit was requested.


class FrameInput(NamedTuple):
    held: FrozenSet[str] = frozenset()
    just_pressed: FrozenSet[str] = frozenset()
    pointer_held: bool = False
    cursor: Optional[Tuple[float, float]] = None


def handle_keyboard_input(config: "SimulationConfig", frame_input: FrameInput) -> bool:
    """
    Applies one frame of keyboard input to the config.

    Returns:
        bool: True if the user requested to exit.
    """
    held = frame_input.held
    just_pressed = frame_input.just_pressed

    # Continuous adjustments, applied every frame the key stays down
    if ACTION_CONNECT_UP in held:
        config.connect_distance += CONNECT_FORCE_STEP
    if ACTION_CONNECT_DOWN in held:
        config.connect_distance -= CONNECT_FORCE_STEP
    if ACTION_SPEED_UP in held:
        config.speed_multiplier += SPEED_STEP
    if ACTION_SPEED_DOWN in held:
        config.speed_multiplier -= SPEED_STEP

    # Toggles, edge-triggered
    if ACTION_REVERSE in just_pressed:
        config.speed_multiplier *= -1
        logging.info(f"Speed reversed. Speed multiplier is now {config.speed_multiplier:.2f}.")
    if ACTION_FREEZE in just_pressed:
        config.frozen = not config.frozen
        logging.info(f"Dots {'frozen' if config.frozen else 'running'}.")

    if ACTION_EXIT in held:
        logging.info("Exit requested from keyboard.")
        return True
    return False
