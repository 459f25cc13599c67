"""
Render Driver - Animation Slot and Background Render Loop

The driver owns the matrix and the slot holding the active animation,
and runs the frame loop:

    delay = animation.render(matrix)
    matrix.commit()
    wait delay milliseconds, repeat

AnimationSlot lets another thread (viewer key handler, CLI, a future
upload endpoint) swap the active animation atomically. A swap takes
effect at the next frame; the in-flight render always runs to
completion on the animation it started with.
"""

import threading
import time


ERROR_BACKOFF_MS = 1000


class AnimationSlot:
    """Holds the active animation behind a lock."""

    def __init__(self, animation):
        self._check(animation)
        self._animation = animation
        self._lock = threading.Lock()

    @staticmethod
    def _check(animation):
        if not callable(getattr(animation, "render", None)):
            raise TypeError(f"{type(animation).__name__} has no render() method")

    @property
    def current(self):
        with self._lock:
            return self._animation

    def swap(self, animation):
        """Install a new animation. Returns the one it replaced."""
        self._check(animation)
        with self._lock:
            previous, self._animation = self._animation, animation
        return previous


class Renderer:
    """Runs the render/commit/wait loop for one matrix.

    Only the render thread calls render(), so no animation instance is
    ever rendered concurrently.
    """

    def __init__(self, matrix, slot):
        self.matrix = matrix
        self.slot = slot
        self.frames = 0
        self.paused = False
        self._stop = threading.Event()
        self._reset = threading.Event()
        self._thread = None

    def request_reset(self):
        """Reset the active animation before its next frame, on the render thread."""
        self._reset.set()

    def render_once(self):
        """Render and publish one frame. Returns the requested delay in ms."""
        animation = self.slot.current
        if self._reset.is_set():
            self._reset.clear()
            animation.reset()
        delay = animation.render(self.matrix)
        self.matrix.commit()
        self.frames += 1
        return delay

    def run(self):
        print("[LED] Render loop started")
        while not self._stop.is_set():
            if self.paused:
                self._stop.wait(0.05)
                continue
            start = time.perf_counter()
            try:
                delay = float(self.render_once())
            except Exception as e:
                print(f"[LED] Render error: {e}")
                delay = ERROR_BACKOFF_MS
            # Rendering time counts toward the hold
            elapsed = time.perf_counter() - start
            self._stop.wait(max(0.0, delay / 1000.0 - elapsed))
        print("[LED] Render loop stopped")

    def start(self):
        """Run the loop on a daemon thread."""
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self.run, daemon=True)
        self._thread.start()

    def stop(self, timeout=2.0):
        """Stop after the in-flight frame."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    @property
    def running(self):
        return self._thread is not None and self._thread.is_alive()
