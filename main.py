# main.py
"""
Main entry point for the particle network.

This script orchestrates the application lifecycle:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Restores the saved theme and opens the window.
4. Populates the particle field and runs the render loop.
5. Handles clean shutdown.
"""
import logging
import sys
from typing import Any, Dict

import pygame

from utils import setup_logging, load_config, create_rng
from theme import Theme, ThemeState, ThemeStore, parse_theme


class ParticleNetworkApp:
    """
    Wires window events to the input bridge, the theme and the canvas size.
    """
    def __init__(self, visualizer, context, input_bridge):
        self.visualizer = visualizer
        self.context = context
        self.input_bridge = input_bridge

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Returns False when the application should exit."""
        if event.type == pygame.QUIT:
            logging.info("Quit event received.")
            return False

        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                logging.info("ESC key pressed.")
                return False
            if event.key == pygame.K_t:
                self.context.theme.toggle()

        elif event.type == pygame.MOUSEMOTION:
            self.input_bridge.on_pointer_move(*event.pos)

        elif event.type == pygame.MOUSEWHEEL:
            self.input_bridge.on_scroll()

        elif event.type == pygame.MOUSEBUTTONDOWN:
            if event.button == 1 and self.visualizer.toggle_button.contains(event.pos):
                self.context.theme.toggle()

        elif event.type == pygame.VIDEORESIZE:
            self.resize(event.w, event.h)

        elif event.type == pygame.WINDOWSIZECHANGED:
            self.resize(event.x, event.y)

        return True

    def resize(self, width: int, height: int) -> None:
        # A user resize arrives as both VIDEORESIZE and WINDOWSIZECHANGED
        if (width, height) == (self.context.width, self.context.height):
            return
        self.visualizer.resize(width, height)
        self.context.resize(width, height)

    def present(self) -> None:
        self.visualizer.present(self.context.theme)


def build_theme(theme_params: Dict[str, Any]) -> ThemeState:
    store = ThemeStore(theme_params.get('store_path', 'theme.json'))
    default = parse_theme(theme_params.get('default', Theme.DARK.value), Theme.DARK)
    return ThemeState.from_store(store, default)


def main() -> int:
    """
    Runs the particle network until the window is closed.
    """
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config('config.json')
    except Exception as e:
        print(f"FATAL: Could not load config.json. Error: {e}")
        return 1

    setup_logging(config)
    logging.info("--- Particle Network Starting ---")

    sim_params = config.get('simulation', {})
    vis_params = config.get('visualization', {})
    theme_params = config.get('theme', {})
    run_params = config.get('run_control', {})

    from particle import ParticleField
    from input_bridge import InputBridge
    from simulation import SimulationContext, PygameFrameScheduler, RenderLoop
    from visualization import Visualizer, RenderSurfaceError

    theme = build_theme(theme_params)

    try:
        visualizer = Visualizer(vis_params)
    except RenderSurfaceError as e:
        logging.critical(f"Aborting startup: {e}")
        return 1

    width, height = visualizer.size
    field = ParticleField(sim_params, create_rng(sim_params.get('seed')))
    context = SimulationContext(
        field, theme, width, height,
        reinitialize_on_resize=sim_params.get('reinitialize_on_resize', True)
    )
    input_bridge = InputBridge(context.pointer, field)

    app = ParticleNetworkApp(visualizer, context, input_bridge)
    scheduler = PygameFrameScheduler(
        app.handle_event, app.present, fps=vis_params.get('fps', 60)
    )
    render_loop = RenderLoop(context, visualizer.surface, scheduler, run_params)

    render_loop.initialize()
    render_loop.start()
    try:
        scheduler.run(max_frames=run_params.get('max_frames', 0))
    finally:
        render_loop.stop()
        visualizer.close()

    logging.info("--- Particle Network Shutting Down ---")
    return 0


if __name__ == "__main__":
    sys.exit(main())
