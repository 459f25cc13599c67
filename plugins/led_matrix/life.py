"""
Game of Life Animation - Lineage Colors, Age Fading, Stagnation Reseed

Conway's B3/S23 rule on a toroidal grid, rendered as a slow crossfade
between generations:

- A cell's hue marks its lineage: a newborn takes the average hue of
  the three parents that caused its birth.
- A cell's saturation marks its age: older cells fade toward white.
- The board reseeds itself when it goes stagnant, either because
  nothing is alive or because the average age of the living has grown
  too large.

Each cycle is one instant generation step (held for a second so births
and deaths read clearly) followed by STEPS_PER_GENERATION short frames
interpolating every cell from its previous color to its new one.
"""

from collections import namedtuple

import numpy as np

from .animation_base import Animation
from .colors import (
    HSV, make_palette, clamp_hsv_array, hsv_to_rgb_array, interpolate_hsv_array,
)


STEPS_PER_GENERATION = 50   # Interpolation frames between generations
GENERATION_DELAY_MS = 1000  # Hold after computing a generation
STEP_DELAY_MS = 20          # Hold per interpolation frame
MAX_AVERAGE_AGE = 10        # Reseed once the living average exceeds this
FADE_AGES = 10              # Generations for a cell to fade to white
PALETTE_SIZE = 12
LIVE_PROBABILITY = 0.5      # Chance a cell starts alive on reseed

Cell = namedtuple("Cell", ["age", "live", "color", "last"])


def _neighbor_offsets():
    return [(dy, dx) for dy in (-1, 0, 1) for dx in (-1, 0, 1)
            if not (dy == 0 and dx == 0)]


def _sum_neighbors(field):
    """Sum each cell's 8 Moore neighbors using np.roll with periodic boundaries."""
    total = np.zeros_like(field)
    for dy, dx in _neighbor_offsets():
        total += np.roll(np.roll(field, dy, axis=0), dx, axis=1)
    return total


class Life(Animation):

    animation_name = "life"
    animation_label = "Game of Life"

    def __init__(self, width=32, height=32,
                 steps_per_generation=STEPS_PER_GENERATION,
                 generation_delay_ms=GENERATION_DELAY_MS,
                 step_delay_ms=STEP_DELAY_MS,
                 max_average_age=MAX_AVERAGE_AGE,
                 fade_ages=FADE_AGES,
                 palette_size=PALETTE_SIZE,
                 seed=None, rng=None):
        """
        Args:
            width, height: Grid dimensions (must match the matrix rendered into)
            steps_per_generation: Interpolation frames between generations
            generation_delay_ms: Delay returned after a generation step
            step_delay_ms: Delay returned after each interpolation frame
            max_average_age: Average age above which the board is stagnant
            fade_ages: Age span over which saturation drops from 1 to 0
            palette_size: Number of evenly spaced hues for reseeded cells
            seed: Integer seed for a private random generator
            rng: numpy Generator to use instead (overrides seed)
        """
        self.width = width
        self.height = height
        self.steps_per_generation = steps_per_generation
        self.generation_delay_ms = generation_delay_ms
        self.step_delay_ms = step_delay_ms
        self.max_average_age = max_average_age
        self.fade_ages = fade_ages
        self.palette = make_palette(palette_size)
        self.rng = rng if rng is not None else np.random.default_rng(seed)

        shape = (height, width)
        self.age = np.zeros(shape, dtype=np.int64)
        self.live = np.zeros(shape, dtype=bool)
        # Black, fully saturated red stands in for "no previous color"
        self.color = np.zeros(shape + (3,), dtype=np.float64)
        self.color[..., 1] = 1.0
        self.last = self.color.copy()

        self.countdown = 0
        self.generation = 0
        self.reseeds = 0
        self.seed()

    # --- Grid access ---

    def cell(self, x, y):
        """Return the cell at (x, y) as a Cell record."""
        return Cell(
            age=int(self.age[y, x]),
            live=bool(self.live[y, x]),
            color=HSV(*(float(c) for c in self.color[y, x])),
            last=HSV(*(float(c) for c in self.last[y, x])),
        )

    def cells(self):
        """All cells in index order x + y * width."""
        return [self.cell(x, y) for y in range(self.height) for x in range(self.width)]

    # --- Seeding ---

    def seed(self):
        """Replace every cell with a coin-flip: live with a palette hue, or dead.

        Each cell's outgoing color becomes its new last color so the next
        crossfade starts from what is on screen. Dead cells keep their hue
        (at zero value) for future births to inherit.
        """
        shape = (self.height, self.width)
        previous = self.color.copy()

        live = self.rng.random(shape) < LIVE_PROBABILITY
        picks = self.rng.integers(0, len(self.palette), size=shape)
        palette = np.array(self.palette, dtype=np.float64)

        color = np.empty_like(previous)
        color[live] = palette[picks[live]]
        color[~live, 0] = previous[~live, 0]
        color[~live, 1] = 1.0
        color[~live, 2] = 0.0

        # A newborn fading in from black takes its own hue, so the fade
        # does not sweep through the hue wheel from an arbitrary start.
        last = previous
        from_black = live & (previous[..., 2] == 0)
        last[from_black, 0] = color[from_black, 0]

        self.age[:] = 0
        self.live[:] = live
        self.color[:] = color
        self.last[:] = last

    def reset(self):
        self.seed()
        self.countdown = 0
        self.generation = 0

    def clear(self):
        """Kill every cell. The next generation step reseeds."""
        self.last[:] = self.color
        self.live[:] = False
        self.age[:] = 0
        self.color[..., 2] = 0.0
        self.countdown = 0

    # --- Simulation ---

    def step(self):
        """Advance one generation. Returns True if the board was reseeded."""
        live_count_field = _sum_neighbors(self.live.astype(np.int64))
        hue_sum = _sum_neighbors(np.where(self.live, self.color[..., 0], 0.0))

        two = live_count_field == 2
        three = live_count_field == 3
        counted = two | three
        born = three & ~self.live

        age = self.age.copy()
        live = self.live.copy()
        color = self.color.copy()
        last = self.color.copy()

        # Two neighbors hold state, three give birth or survive
        age[counted] += 1
        live[born] = True
        color[born, 0] = hue_sum[born] / 3.0
        color[born, 1] = 1.0
        color[born, 2] = 1.0

        dead = ~counted
        live[dead] = False
        age[dead] = 0
        color[dead, 2] = 0.0

        self.generation += 1

        age_sum = int(age[counted].sum())
        counted_cells = int(counted.sum())
        # age_sum == 0 must be checked first: it also covers counted_cells == 0
        if age_sum == 0 or age_sum / counted_cells > self.max_average_age:
            reason = "empty" if age_sum == 0 else f"avg age {age_sum / counted_cells:.1f}"
            print(f"[LED] Life stagnant at generation {self.generation} ({reason}), reseeding")
            self.reseeds += 1
            self.seed()
            return True

        self.age = age
        self.live = live
        self.color = color
        self.last = last
        return False

    def frame(self):
        """Current crossfade frame as a (height, width, 3) RGB float array."""
        saturation = 1.0 - (self.age - 1) / self.fade_ages

        start = np.stack([self.last[..., 0], saturation, self.last[..., 2]], axis=-1)
        end = np.stack([self.color[..., 0], saturation, self.color[..., 2]], axis=-1)

        progress = 1.0 - self.countdown / self.steps_per_generation
        hsv = interpolate_hsv_array(clamp_hsv_array(start), clamp_hsv_array(end), progress)
        return hsv_to_rgb_array(hsv)

    def render(self, matrix):
        if self.countdown == 0:
            self.step()
            self.countdown = self.steps_per_generation
            return self.generation_delay_ms

        matrix.blit(self.frame())
        self.countdown -= 1
        return self.step_delay_ms

    @property
    def stats(self):
        alive = int(self.live.sum())
        return {
            "generation": self.generation,
            "alive": alive,
            "alive_pct": alive / self.live.size * 100,
            "mean_age": float(self.age[self.live].mean()) if alive else 0.0,
            "reseeds": self.reseeds,
        }
