"""
Bouncing Ball Animation

A single white ball drifting across the matrix, reflecting off the
edges and leaving a short fading trail.

The trail holds the last few positions, newest first. The head is
drawn at full brightness and each older position is dimmer, so
trail[0] is always the brightest pixel and the current position is
always drawn.
"""

from collections import deque

from .animation_base import Animation


class Ball(Animation):

    animation_name = "ball"
    animation_label = "Bouncing Ball"

    def __init__(self, dx=1.5, dy=0.5, trail_length=5, delay_ms=60):
        """
        Args:
            dx, dy: Velocity in pixels per frame
            trail_length: Positions kept in the trail, newest included
            delay_ms: Delay returned after each frame
        """
        self.initial_velocity = (dx, dy)
        self.trail_length = trail_length
        self.delay_ms = delay_ms
        self.reset()

    def reset(self):
        self.x = 0.0
        self.y = 0.0
        self.dx, self.dy = self.initial_velocity
        self.trail = deque(maxlen=self.trail_length)

    def _advance(self, width, height):
        self.x += self.dx
        self.y += self.dy
        if self.x >= width - 1:
            self.x = width - 1
            self.dx = -self.dx
        elif self.x <= 0:
            self.x = 0
            self.dx = -self.dx
        if self.y >= height - 1:
            self.y = height - 1
            self.dy = -self.dy
        elif self.y <= 0:
            self.y = 0
            self.dy = -self.dy

    def render(self, matrix):
        self._advance(matrix.width, matrix.height)
        self.trail.appendleft((self.x, self.y))

        matrix.clear()
        step = 255 / self.trail_length
        # Draw oldest first so the head wins where the trail overlaps itself
        for i in reversed(range(len(self.trail))):
            x, y = self.trail[i]
            level = 255 - i * step
            matrix.set_pixel(int(x), int(y), level, level, level)
        return self.delay_ms

    @property
    def stats(self):
        return {"x": self.x, "y": self.y, "trail": len(self.trail)}
