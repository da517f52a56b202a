# renderer/preview.py
import logging
from typing import Optional
import pygame
from pathtracer.renderer.progressive import ProgressiveRenderer

logger = logging.getLogger(__name__)


class PreviewWindow:
    """
    Live window onto a ProgressiveRenderer. The renderer keeps sampling on
    its own thread; the window only ever reads the latest complete frame.
    """
    def __init__(self, renderer: ProgressiveRenderer, scale: int = 1, fps: int = 30,
                 title: str = "Path Tracer"):
        self.renderer = renderer
        self.scale = max(1, scale)
        self.fps = fps
        self.title = title

    def _handle_events(self) -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                return False
        return True

    def run(self, max_passes: Optional[int] = None):
        width, height = self.renderer.size
        pygame.init()
        try:
            screen = pygame.display.set_mode((width * self.scale, height * self.scale))
            pygame.display.set_caption(self.title)
            clock = pygame.time.Clock()
            font = pygame.font.Font(None, 24)

            self.renderer.start(max_passes)
            shown = -1
            running = True
            while running:
                running = self._handle_events()

                frame, passes = self.renderer.latest_frame()
                if passes != shown:
                    surface = pygame.image.frombuffer(frame, (width, height), "RGBA")
                    if self.scale != 1:
                        surface = pygame.transform.scale(surface, screen.get_size())
                    screen.blit(surface, (0, 0))
                    screen.blit(font.render(f"{passes} spp", True, (255, 255, 0)), (8, 8))
                    pygame.display.set_caption(f"{self.title} - {passes} spp")
                    pygame.display.flip()
                    shown = passes

                clock.tick(self.fps)
        finally:
            self.renderer.stop()
            pygame.quit()
        logger.info("Preview closed at %d samples per pixel", self.renderer.passes)
        return self.renderer.image()


def run_preview(renderer: ProgressiveRenderer, scale: int = 1, max_passes: Optional[int] = None,
                output: Optional[str] = None):
    """Show the render live until the window is closed, then optionally save the last frame."""
    image = PreviewWindow(renderer, scale=scale).run(max_passes)
    if output:
        image.save(output)
    return image
