"""
Main application module for the zoom animation.

Contains the ZoomApp class which handles:
- Window setup and the frame clock
- Keyboard input (pause, diagnostics, quit)
- Blitting the latest rendered frame
"""

import logging

import pygame

from .renderer import ZoomRenderer

logger = logging.getLogger(__name__)

CAPTION = "Mandelbrot Zoom - Space to pause, P to print state, Esc to quit"


class ZoomApp:
    """
    Pygame front end for ZoomRenderer.

    The window is exactly one screen pixel per grid cell. Each tick
    renders a frame (unless paused) and shows the most recent image.
    """

    def __init__(self, config):
        self.config = config
        self.renderer = ZoomRenderer(config)

        # Pygame state (initialized in run())
        self.screen = None
        self.clock = None
        self.current_surface = None

        self.running = False

    def run(self):
        """Run the application main loop."""
        self._init_pygame()
        pygame.display.set_caption("Compiling (first run only)...")
        self.renderer.warmup()
        pygame.display.set_caption(CAPTION)

        self.running = True
        while self.running:
            self._handle_events()
            self._update()
            self._draw()
            self.clock.tick(self.config.fps)

        pygame.quit()

    def _init_pygame(self):
        """Initialize pygame and create the window."""
        pygame.init()
        self.screen = pygame.display.set_mode(
            (self.config.domain, self.config.range),
            pygame.DOUBLEBUF
        )
        self.clock = pygame.time.Clock()
        logger.info("Window %dx%d, %d iterations, %s evaluation",
                    self.config.domain, self.config.range,
                    self.config.iterations, self.config.strategy)

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event)

    def _handle_key(self, event):
        """Handle keyboard input."""
        if event.key == pygame.K_SPACE:
            self.renderer.toggle_pause()
        elif event.key == pygame.K_p:
            logger.info("\n%s", self.renderer.diagnostics())
        elif event.key == pygame.K_ESCAPE:
            self.running = False

    def _update(self):
        """Render the next frame if the animation is running."""
        max_frames = self.config.max_frames
        if max_frames is not None and self.renderer.frames_rendered >= max_frames:
            self.running = False
            return
        frame = self.renderer.render_frame()
        if frame is not None:
            # Grid rows are screen rows, so swap to pygame's (x, y) order
            self.current_surface = pygame.surfarray.make_surface(
                frame.to_rgb8().swapaxes(0, 1)
            )

    def _draw(self):
        """Draw the current frame."""
        if self.current_surface is None:
            self.screen.fill((0, 0, 0))
        else:
            self.screen.blit(self.current_surface, (0, 0))
        pygame.display.flip()


def run(config):
    """
    Run the zoom animation window.

    Args:
        config: ZoomConfig describing the run
    """
    app = ZoomApp(config)
    try:
        app.run()
    except KeyboardInterrupt:
        pygame.quit()
