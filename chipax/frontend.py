"""Pygame window for interactive CHIP-8 sessions."""

import pygame

from chipax.driver import FrameDriver
from chipax.rendering import chip8_display_to_rgb, create_color_scheme
from chipax.constants import SCREEN_WIDTH, SCREEN_HEIGHT

# COSMAC VIP keypad laid out on the left side of a QWERTY keyboard:
#   1 2 3 C      1 2 3 4
#   4 5 6 D  ->  Q W E R
#   7 8 9 E      A S D F
#   A 0 B F      Z X C V
KEY_MAP = {
    pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
    pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
    pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
    pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
}


class PygameFrontend:
    """Window, keyboard and frame pacing around a FrameDriver.

    Controls: ESC quits, P pauses, BACKSPACE resets the program.
    """

    def __init__(self, driver: FrameDriver, scale: int = 10, color_scheme: str = "classic"):
        self.driver = driver
        self.scale = scale
        self.palette = create_color_scheme(color_scheme)
        self.paused = False
        self.running = False

    def _handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_p:
                    self.paused = not self.paused
                    self.driver.logger.info("Paused" if self.paused else "Resumed")
                elif event.key == pygame.K_BACKSPACE:
                    self.driver.reset()
                    self.driver.logger.info("Reset")
                elif event.key in KEY_MAP:
                    self.driver.press_key(KEY_MAP[event.key])
            elif event.type == pygame.KEYUP:
                if event.key in KEY_MAP:
                    self.driver.release_key(KEY_MAP[event.key])

    def _draw(self, screen, display):
        frame = chip8_display_to_rgb(display, self.scale, self.palette)
        # surfarray expects (width, height, 3)
        surface = pygame.surfarray.make_surface(frame.transpose(1, 0, 2))
        screen.blit(surface, (0, 0))
        pygame.display.flip()

    def run(self, title: str = "CHIP-8"):
        """Run the interactive loop until the window is closed."""
        pygame.init()
        try:
            screen = pygame.display.set_mode((SCREEN_WIDTH * self.scale, SCREEN_HEIGHT * self.scale))
            pygame.display.set_caption(title)
            clock = pygame.time.Clock()

            self.running = True
            while self.running:
                clock.tick(self.driver.fps)
                self._handle_events()

                if self.paused or self.driver.halted:
                    display = self.driver.display
                else:
                    display = self.driver.run_frame()

                self._draw(screen, display)
        finally:
            pygame.quit()
