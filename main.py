# main.py
"""
Main entry point for the Connected Dots display.

This script orchestrates the entire application lifecycle:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Opens the window and sets up the simulation.
4. Runs the frame loop until the user exits.
5. Handles clean shutdown.
"""
import logging
from utils import setup_logging, load_config, get_section
import numpy as np
import cProfile
import pstats
import io


def run(visualizer, sim, run_params, fps):
    """
    The frame loop. Each frame samples input, steps the simulation and
    draws the result; an exit request is honoured after the frame is drawn.
    """
    log_throttle = run_params.get('log_throttle_steps', 300) # 0 disables it
    max_steps = run_params.get('max_steps', 0) # 0 runs until the user quits

    running = True
    while running:
        dt = visualizer.tick(fps)

        frame_input = visualizer.poll_input()
        if frame_input is None:
            break

        exit_requested = sim.step(frame_input, dt)
        visualizer.draw(sim.particles, sim.connections, sim.status)
        if exit_requested:
            running = False

        # Hot loops must throttle logs
        if log_throttle and sim.frame % log_throttle == 0:
            logging.info(
                f"Frame {sim.frame} | Dots: {sim.config.particle_count} | "
                f"Lines: {len(sim.connections)} | FPS: {visualizer.get_fps():.1f}"
            )

        if max_steps and sim.frame >= max_steps:
            logging.info(f"Reached max_steps ({max_steps}). Stopping.")
            running = False


def main():
    """
    The main function to run the display.
    """
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config('config.json')
    except (OSError, ValueError) as e:
        print(f"FATAL: Could not load config.json. Error: {e}")
        return

    setup_logging(config)

    logging.info("--- Connected Dots Starting ---")

    sim_params = get_section(config, 'simulation_parameters')
    run_params = get_section(config, 'run_control')
    vis_params = get_section(config, 'visualization')

    from constants import FPS
    from particle import ParticleSystem
    from simulation import Simulation, SimulationConfig
    from visualization import Visualizer

    # --- Component Initialization ---
    # Validate the configuration before opening a window.
    sim_config = SimulationConfig.from_params(sim_params)

    # All randomness is controlled by a single seed; None seeds from the OS.
    seed = sim_params.get('seed')
    rng = np.random.default_rng(seed)
    logging.info(f"RNG initialized with seed: {seed}")

    visualizer = Visualizer(vis_params)
    particles = ParticleSystem()
    sim = Simulation(particles, sim_config, visualizer.viewport, rng)

    profiler = cProfile.Profile() if run_params.get('profile', False) else None

    if profiler:
        profiler.enable()
    try:
        run(visualizer, sim, run_params, vis_params.get('fps', FPS))
    finally:
        if profiler:
            profiler.disable()
        visualizer.close()
    logging.info("Frame loop finished.")

    if profiler:
        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        # Sort by cumulative time spent in the function
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20) # Print top 20 slowest functions
        logging.info(f"\n{s.getvalue()}")

    logging.info("--- Connected Dots Shutting Down ---")


if __name__ == "__main__":
    main()
