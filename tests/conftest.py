"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import numpy as np
import pytest

# The modules live at the project root, next to main.py
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from particle import ParticleSystem
from simulation import Simulation, SimulationConfig
from viewport import Viewport


@pytest.fixture
def config():
    """A config with the default parameters."""
    return SimulationConfig()


@pytest.fixture
def particles():
    return ParticleSystem(initial_capacity=4)


@pytest.fixture
def viewport():
    """An 800x600 window, so the world spans [-400, 400] x [-300, 300]."""
    return Viewport(800, 600)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def sim(particles, config, viewport, rng):
    return Simulation(particles, config, viewport, rng)


@pytest.fixture
def sample_config():
    """Provide a sample run configuration, shaped like config.json."""
    return {
        "simulation_parameters": {
            "seed": 7,
            "dot_radius": 4.0,
            "connect_distance": 120.0,
            "min_velocity": -50.0,
            "max_velocity": 50.0,
        },
        "run_control": {"log_throttle_steps": 10},
        "logging": {"level": "DEBUG", "log_file": None},
    }
