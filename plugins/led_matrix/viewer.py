"""
Interactive Pygame Viewer for the LED Matrix

Draws the matrix's published frame as a grid of round LEDs while the
render driver runs on its background thread, so the window shows
exactly what an external viewer polling snapshot() would see.

Controls:
  SPACE       Pause / Resume
  N / P       Next / previous preset
  R           Reset the current animation
  S           Save screenshot
  H           Toggle HUD overlay
  Q / ESC     Quit
"""

import os
import time

import pygame

from .driver import AnimationSlot, Renderer
from .matrix import LedMatrix
from .presets import PRESET_ORDER, build_animation, get_preset


BACKGROUND = (12, 12, 16)
UNLIT = (28, 26, 24)   # Dim LED body so the panel reads as hardware
HUD_TEXT = (180, 185, 195)


class Viewer:

    def __init__(self, window=640, width=32, height=32, start_preset="life",
                 animation=None):
        self.matrix = LedMatrix(width, height)
        self.preset_key = start_preset
        if animation is None:
            animation = build_animation(start_preset, width, height)
        self.slot = AnimationSlot(animation)
        self.renderer = Renderer(self.matrix, self.slot)

        self.pitch = max(2, window // max(width, height))
        self.canvas_w = self.pitch * width
        self.canvas_h = self.pitch * height
        self.show_hud = True
        self.running = True

    def _switch_preset(self, offset):
        idx = PRESET_ORDER.index(self.preset_key) if self.preset_key in PRESET_ORDER else 0
        key = PRESET_ORDER[(idx + offset) % len(PRESET_ORDER)]
        self.slot.swap(build_animation(key, self.matrix.width, self.matrix.height))
        self.preset_key = key
        print(f"[LED] Preset: {key}")

    def _draw_leds(self, screen):
        rgb = self.matrix.snapshot().to_array()
        radius = max(1, int(self.pitch * 0.42))
        half = self.pitch // 2
        screen.fill(BACKGROUND)
        for y in range(self.matrix.height):
            for x in range(self.matrix.width):
                color = tuple(int(c) for c in rgb[y, x])
                if color == (0, 0, 0):
                    color = UNLIT
                center = (x * self.pitch + half, y * self.pitch + half)
                pygame.draw.circle(screen, color, center, radius)

    def _draw_hud(self, screen, fps):
        preset = get_preset(self.preset_key)
        label = preset["name"] if preset else self.preset_key
        stats = self.slot.current.stats
        parts = [label, f"{fps:.0f} fps"]
        parts.extend(f"{k}={v:.1f}" if isinstance(v, float) else f"{k}={v}"
                     for k, v in stats.items())
        if self.renderer.paused:
            parts.append("PAUSED")
        text_surface = self.hud_font.render("  ".join(parts), True, HUD_TEXT)
        screen.blit(text_surface, (8, 6))

    def _save_screenshot(self):
        screenshots_dir = os.path.join(os.getcwd(), "screenshots")
        os.makedirs(screenshots_dir, exist_ok=True)
        timestamp = time.strftime("%Y%m%d_%H%M%S")
        path = os.path.join(screenshots_dir, f"led_{self.preset_key}_{timestamp}.png")
        self.matrix.snapshot().to_image(scale=self.pitch).save(path)
        print(f"[LED] Screenshot saved: {path}")

    def _handle_keydown(self, event):
        if event.key in (pygame.K_q, pygame.K_ESCAPE):
            self.running = False
        elif event.key == pygame.K_SPACE:
            self.renderer.paused = not self.renderer.paused
        elif event.key == pygame.K_n:
            self._switch_preset(1)
        elif event.key == pygame.K_p:
            self._switch_preset(-1)
        elif event.key == pygame.K_r:
            self.renderer.request_reset()
        elif event.key == pygame.K_s:
            self._save_screenshot()
        elif event.key == pygame.K_h:
            self.show_hud = not self.show_hud

    def run(self):
        """Main viewer loop."""
        pygame.init()
        screen = pygame.display.set_mode((self.canvas_w, self.canvas_h))
        pygame.display.set_caption("LED Matrix")
        clock = pygame.time.Clock()
        self.hud_font = pygame.font.SysFont("menlo", 13)

        self.renderer.start()
        try:
            while self.running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.running = False
                    elif event.type == pygame.KEYDOWN:
                        self._handle_keydown(event)

                self._draw_leds(screen)
                if self.show_hud:
                    self._draw_hud(screen, clock.get_fps())
                pygame.display.flip()
                clock.tick(60)
        finally:
            self.renderer.stop()
            pygame.quit()
