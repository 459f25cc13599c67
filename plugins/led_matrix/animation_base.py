"""
Abstract Base Class for LED Matrix Animations

Every animation (Game of Life, bouncing ball, slideshow, ...) implements
this interface so the driver and viewer can run any of them
interchangeably.

An animation paints one frame per render() call and returns how long,
in milliseconds, that frame should be held. The driver never calls
render() on the same instance concurrently, so animations may keep
state between calls without locking.
"""

from abc import ABC, abstractmethod


class Animation(ABC):
    """Base class for LED matrix animations."""

    animation_name = ""   # e.g. "life", "ball"
    animation_label = ""  # e.g. "Game of Life"

    @abstractmethod
    def render(self, matrix):
        """Draw the next frame into matrix. Returns the hold delay in ms."""

    def reset(self):
        """Restart from a fresh state. Stateless animations ignore this."""

    @property
    def stats(self):
        """Return current animation statistics."""
        return {}
