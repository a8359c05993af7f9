# simulation.py
"""
Handles the per-frame simulation of the dots.

This module defines the mutable SimulationConfig, the Numba kernels that
move, bounce and connect the dots, the rate-limited SpawnController and
the Simulation class that runs them in a fixed order once per frame.
"""
import logging
import numpy as np
from typing import Dict, Any, NamedTuple, Optional
from numba import jit

from particle import ParticleSystem
from viewport import Viewport
from controls import FrameInput, handle_keyboard_input
from utils import map_range
from constants import (
    CONNECT_FORCE, SPEED, DOT_SIZE, MIN_VEL, MAX_VEL, DRAG_SPAWN_INTERVAL,
    ACTION_CLEAR
)

# --- Data Contracts ---
#
# class SimulationConfig:
#   - Holds dot_radius, speed_multiplier, connect_distance, min_velocity,
#     max_velocity, spawn_interval, frozen and particle_count.
#   - from_params(params: Dict[str, Any]) builds one from the
#     "simulation_parameters" section of config.json, falling back to the
#     defaults in constants.py. Raises ValueError on invalid values.
#   - Invariants: particle_count == len(particles) between frames.
#
# apply_velocity(particles, config, dt) -> None:
#   - Side Effects: positions += velocities * speed_multiplier * dt unless
#     config.frozen. Velocities are never modified.
#
# apply_boundary_collision(particles, half_width, half_height) -> None:
#   - Side Effects: Per axis, a dot at or past an edge is clamped onto
#     the edge and that velocity component is negated.
#
# find_connections(particles, connect_distance) -> Connections:
#   - Outputs: one line per unordered pair (i < j) closer than
#     connect_distance, with alpha = 1 - d / connect_distance.
#
# class SpawnController:
#   - tick(...) -> Optional[int]: spawns at most one dot per
#     spawn_interval while the pointer is held. Returns the new index.
#
# class Simulation:
#   - step(self, frame_input: FrameInput, dt: float) -> bool:
#     - Side Effects: input -> clear -> spawn -> move -> bounce -> connect
#       -> status, in that order. Stores self.connections and self.status.
#     - Outputs: True if exit was requested this frame.


@jit(nopython=True)
def _apply_velocity_numba(positions, velocities, factor):
    """Numba-jitted explicit Euler step: p += v * factor."""
    for i in range(positions.shape[0]):
        positions[i, 0] += velocities[i, 0] * factor
        positions[i, 1] += velocities[i, 1] * factor


@jit(nopython=True)
def _apply_boundary_collision_numba(positions, velocities, half_width, half_height):
    """
    Numba-jitted edge reflection.

    Each axis is checked independently. The else-if keeps a single axis
    from flipping twice in one pass.
    """
    for i in range(positions.shape[0]):
        if positions[i, 0] >= half_width:
            velocities[i, 0] = -velocities[i, 0]
            positions[i, 0] = half_width
        elif positions[i, 0] <= -half_width:
            velocities[i, 0] = -velocities[i, 0]
            positions[i, 0] = -half_width

        if positions[i, 1] >= half_height:
            velocities[i, 1] = -velocities[i, 1]
            positions[i, 1] = half_height
        elif positions[i, 1] <= -half_height:
            velocities[i, 1] = -velocities[i, 1]
            positions[i, 1] = -half_height


@jit(nopython=True)
def _find_connections_numba(positions, connect_distance):
    """
    Numba-jitted brute-force proximity search.

    Every unordered pair is tested; there is no spatial index. Output
    buffers start small and double when full.
    """
    particle_count = positions.shape[0]
    capacity = 64
    pairs = np.empty((capacity, 2), dtype=np.int64)
    alphas = np.empty(capacity, dtype=np.float64)
    count = 0

    for i in range(particle_count):
        x_i = np.float64(positions[i, 0])
        y_i = np.float64(positions[i, 1])
        for j in range(i + 1, particle_count):
            dx = positions[j, 0] - x_i
            dy = positions[j, 1] - y_i
            dist = np.sqrt(dx * dx + dy * dy)

            if dist < connect_distance:
                if count == capacity:
                    capacity *= 2
                    grown_pairs = np.empty((capacity, 2), dtype=np.int64)
                    grown_alphas = np.empty(capacity, dtype=np.float64)
                    grown_pairs[:count] = pairs[:count]
                    grown_alphas[:count] = alphas[:count]
                    pairs = grown_pairs
                    alphas = grown_alphas

                pairs[count, 0] = i
                pairs[count, 1] = j
                alphas[count] = map_range(dist, 0.0, connect_distance, 1.0, 0.0)
                count += 1

    return pairs[:count].copy(), alphas[:count].copy()


class SimulationConfig:
    """
    The mutable parameters of a run, adjusted live from the keyboard.
    """
    def __init__(
        self,
        dot_radius: float = DOT_SIZE,
        speed_multiplier: float = SPEED,
        connect_distance: float = CONNECT_FORCE,
        min_velocity: float = MIN_VEL,
        max_velocity: float = MAX_VEL,
        spawn_interval: float = DRAG_SPAWN_INTERVAL,
        frozen: bool = False,
    ):
        self.dot_radius = float(dot_radius)
        self.speed_multiplier = float(speed_multiplier)
        self.connect_distance = float(connect_distance)
        self.min_velocity = float(min_velocity)
        self.max_velocity = float(max_velocity)
        self.spawn_interval = float(spawn_interval)
        self.frozen = bool(frozen)
        self.particle_count = 0

        self.validate()

    @classmethod
    def from_params(cls, params: Dict[str, Any]) -> "SimulationConfig":
        """Builds a config from the "simulation_parameters" section."""
        return cls(
            dot_radius=params.get('dot_radius', DOT_SIZE),
            speed_multiplier=params.get('speed_multiplier', SPEED),
            connect_distance=params.get('connect_distance', CONNECT_FORCE),
            min_velocity=params.get('min_velocity', MIN_VEL),
            max_velocity=params.get('max_velocity', MAX_VEL),
            spawn_interval=params.get('spawn_interval', DRAG_SPAWN_INTERVAL),
        )

    def validate(self):
        """Raises ValueError if the static parameters cannot produce a run."""
        errors = []
        if not self.min_velocity < self.max_velocity:
            errors.append(
                f"min_velocity ({self.min_velocity}) must be lower than "
                f"max_velocity ({self.max_velocity})"
            )
        if self.dot_radius <= 0:
            errors.append(f"dot_radius must be positive, got {self.dot_radius}")
        if self.spawn_interval < 0:
            errors.append(f"spawn_interval must not be negative, got {self.spawn_interval}")

        if errors:
            msg = "Configuration error: " + "; ".join(errors) + "."
            logging.critical(msg)
            raise ValueError(msg)

    def __repr__(self):
        return (
            f"SimulationConfig(dot_radius={self.dot_radius}, "
            f"speed_multiplier={self.speed_multiplier}, "
            f"connect_distance={self.connect_distance}, "
            f"velocity=[{self.min_velocity}, {self.max_velocity}), "
            f"spawn_interval={self.spawn_interval}, frozen={self.frozen}, "
            f"particle_count={self.particle_count})"
        )


class Connections(NamedTuple):
    """Line-draw requests produced by find_connections, in world coordinates."""
    starts: np.ndarray  # (M, 2)
    ends: np.ndarray    # (M, 2)
    alphas: np.ndarray  # (M,), in (0, 1]

    def __len__(self) -> int:
        return self.alphas.shape[0]


def apply_velocity(particles: ParticleSystem, config: SimulationConfig, dt: float):
    """Moves every dot along its velocity, unless the simulation is frozen."""
    if config.frozen:
        return
    _apply_velocity_numba(particles.positions, particles.velocities, config.speed_multiplier * dt)


def apply_boundary_collision(particles: ParticleSystem, half_width: float, half_height: float):
    """Bounces dots off the window edges. The dot radius is ignored."""
    _apply_boundary_collision_numba(
        particles.positions, particles.velocities,
        np.float32(half_width), np.float32(half_height)
    )


def find_connections(particles: ParticleSystem, connect_distance: float) -> Connections:
    """Returns a fading line for every pair of dots closer than connect_distance."""
    positions = particles.positions
    pairs, alphas = _find_connections_numba(positions, float(connect_distance))
    return Connections(
        starts=positions[pairs[:, 0]],
        ends=positions[pairs[:, 1]],
        alphas=alphas,
    )


def format_status(config: SimulationConfig) -> str:
    """The status line shown in the top-left corner of the window."""
    # Adding 0.0 turns a rounded -0.0 into 0.0
    speed = round(config.speed_multiplier, 2) + 0.0
    return (
        f"Dot (Click/Space): {config.particle_count} | "
        f"Connect Force (I/K): {config.connect_distance:.10g} | "
        f"Speed (U/J): {speed:.2f}"
    )


class SpawnController:
    """
    Spawns dots under the cursor while the primary button is held.

    Time is accumulated only while the button is down; once it reaches
    the spawn interval one dot is spawned and the accumulator restarts
    from zero, so two spawns are never closer than the interval.
    """
    def __init__(self):
        self.elapsed = 0.0

    def tick(
        self,
        frame_input: FrameInput,
        dt: float,
        config: SimulationConfig,
        particles: ParticleSystem,
        viewport: Viewport,
        rng: np.random.Generator,
    ) -> Optional[int]:
        if not frame_input.pointer_held:
            self.elapsed = 0.0
            return None

        self.elapsed += dt
        if self.elapsed < config.spawn_interval:
            return None
        self.elapsed = 0.0

        world_pos = viewport.window_to_world(frame_input.cursor)
        if world_pos is None:
            logging.debug("Spawn skipped: cursor is not over the window.")
            return None

        velocity = rng.uniform(config.min_velocity, config.max_velocity, size=2).astype(np.float32)
        # float32 rounding can land exactly on max_velocity
        velocity = np.minimum(velocity, np.nextafter(np.float32(config.max_velocity), np.float32(config.min_velocity)))

        index = particles.spawn(world_pos, velocity, config.dot_radius)
        config.particle_count += 1
        logging.debug(
            f"Dot {index} spawned at ({world_pos[0]:.1f}, {world_pos[1]:.1f}) "
            f"with velocity ({velocity[0]:.1f}, {velocity[1]:.1f})."
        )
        return index


class Simulation:
    """
    Runs one frame of the dots simulation in a fixed order.
    """
    def __init__(
        self,
        particles: ParticleSystem,
        config: SimulationConfig,
        viewport: Viewport,
        rng: np.random.Generator,
    ):
        """
        Initializes the simulation.

        Args:
            particles (ParticleSystem): The container of live dots.
            config (SimulationConfig): Live parameters, mutated by input.
            viewport (Viewport): The window/world mapping. Required.
            rng (np.random.Generator): Source for spawn velocities.
        """
        assert viewport is not None, "A viewport is required to run the simulation."

        self.particles = particles
        self.config = config
        self.viewport = viewport
        self.rng = rng
        self.spawner = SpawnController()
        self.frame = 0
        self.connections = find_connections(particles, config.connect_distance)
        self.status = format_status(config)

        logging.info(f"Simulation initialized: {config}")

    def clear(self):
        """Removes every dot and resets the count."""
        removed = self.particles.clear()
        self.config.particle_count = 0
        logging.info(f"Cleared {removed} dots.")

    def step(self, frame_input: FrameInput, dt: float) -> bool:
        """
        Executes one frame of the simulation.

        Args:
            frame_input (FrameInput): Key and pointer state for this frame.
            dt (float): Seconds elapsed since the previous frame.

        Returns:
            bool: True if exit was requested.
        """
        # 1. Keyboard adjustments
        exit_requested = handle_keyboard_input(self.config, frame_input)

        # 2. Clear on the frame the key goes down
        if ACTION_CLEAR in frame_input.just_pressed:
            self.clear()

        # 3. Drag spawning
        self.spawner.tick(frame_input, dt, self.config, self.particles, self.viewport, self.rng)

        # 4. Motion, then reflection against this frame's window size
        apply_velocity(self.particles, self.config, dt)
        half_width, half_height = self.viewport.half_extents
        apply_boundary_collision(self.particles, half_width, half_height)

        # 5. Proximity lines and status text
        self.connections = find_connections(self.particles, self.config.connect_distance)
        self.status = format_status(self.config)

        self.frame += 1
        return exit_requested
