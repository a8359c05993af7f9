# particle.py
"""
Manages the state of all dots in the simulation.

This module defines the ParticleSystem class, the single owner of every
live dot. Dot data (position, velocity, radius) is kept in NumPy arrays
addressed by index; the arrays grow on demand as dots are spawned and are
emptied all at once by clear().
"""
import logging
import numpy as np
from typing import Tuple

# --- Data Contracts ---
#
# class ParticleSystem:
#   - __init__(self, initial_capacity: int = 64):
#     - Side Effects: Allocates empty backing arrays.
#     - Invariants:
#       - self.positions is a float32 view of shape (N, 2).
#       - self.velocities is a float32 view of shape (N, 2).
#       - self.radii is a float32 view of shape (N,).
#       - N == len(self) == number of live dots.
#
#   - spawn(self, position, velocity, radius) -> int:
#     - Inputs: world position (x, y), velocity (vx, vy), visual radius.
#     - Outputs: the index of the new dot.
#     - Side Effects: Appends one dot, doubling capacity when full.
#
#   - clear(self) -> int:
#     - Outputs: the number of dots removed.
#     - Side Effects: Removes every dot. Capacity is kept.
#
# The views returned by positions/velocities/radii are only valid until the
# next spawn() or clear(). Callers must re-read them every frame instead of
# holding on to them.

class ParticleSystem:
    """
    A growable, index-addressed container for all dots.
    """
    def __init__(self, initial_capacity: int = 64):
        """
        Initializes an empty particle system.

        Args:
            initial_capacity (int): Number of dots to allocate room for
                before the first reallocation.
        """
        if initial_capacity < 1:
            raise ValueError(f"initial_capacity must be positive, got {initial_capacity}.")

        self._count = 0
        self._positions = np.zeros((initial_capacity, 2), dtype=np.float32)
        self._velocities = np.zeros((initial_capacity, 2), dtype=np.float32)
        self._radii = np.zeros(initial_capacity, dtype=np.float32)

        logging.debug(f"ParticleSystem initialized with capacity {initial_capacity}.")

    def __len__(self) -> int:
        return self._count

    @property
    def capacity(self) -> int:
        return self._positions.shape[0]

    @property
    def positions(self) -> np.ndarray:
        return self._positions[:self._count]

    @property
    def velocities(self) -> np.ndarray:
        return self._velocities[:self._count]

    @property
    def radii(self) -> np.ndarray:
        return self._radii[:self._count]

    def _grow(self):
        """Doubles the backing arrays, keeping the live dots."""
        new_capacity = self.capacity * 2
        positions = np.zeros((new_capacity, 2), dtype=np.float32)
        velocities = np.zeros((new_capacity, 2), dtype=np.float32)
        radii = np.zeros(new_capacity, dtype=np.float32)

        positions[:self._count] = self.positions
        velocities[:self._count] = self.velocities
        radii[:self._count] = self.radii

        self._positions, self._velocities, self._radii = positions, velocities, radii
        logging.debug(f"ParticleSystem capacity grown to {new_capacity}.")

    def spawn(self, position: Tuple[float, float], velocity: Tuple[float, float], radius: float) -> int:
        """Adds one dot and returns its index."""
        if self._count == self.capacity:
            self._grow()

        index = self._count
        self._positions[index] = position
        self._velocities[index] = velocity
        self._radii[index] = radius
        self._count += 1
        return index

    def clear(self) -> int:
        """Removes every dot. Returns how many were removed."""
        removed = self._count
        self._count = 0
        return removed
