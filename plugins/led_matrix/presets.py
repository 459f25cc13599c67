"""
LED Matrix Animation Presets

Each preset names an animation type and the parameters known to look
good on a 32x32 panel. The "animation" field determines which class to
instantiate (life, ball, slides).
"""

from .ball import Ball
from .config import BallConfig, LifeConfig, SlidesConfig
from .life import Life
from .slides import Slideshow


PRESETS = {
    # =====================================================================
    # GAME OF LIFE
    # =====================================================================
    "life": {
        "animation": "life",
        "name": "Lineage Life",
        "description": "Conway's Life, hue by lineage, fading with age",
    },
    "life_brisk": {
        "animation": "life",
        "name": "Brisk Life",
        "description": "Shorter crossfades and hold, restless board",
        "steps_per_generation": 20, "generation_delay_ms": 400,
    },
    "life_pastel": {
        "animation": "life",
        "name": "Pastel Life",
        "description": "Cells wash out quickly, long-lived boards",
        "fade_ages": 4, "max_average_age": 20, "palette_size": 6,
    },
    # =====================================================================
    # BALL
    # =====================================================================
    "ball": {
        "animation": "ball",
        "name": "Bouncing Ball",
        "description": "Ball with a fading trail bouncing off the edges",
    },
    "ball_comet": {
        "animation": "ball",
        "name": "Comet",
        "description": "Fast ball with a long tail",
        "dx": 1.1, "dy": 0.7, "trail_length": 12, "delay_ms": 30,
    },
}

PRESET_ORDER = list(PRESETS.keys())

# Animation class and config model per animation type
ANIMATION_TYPES = {
    "life": (Life, LifeConfig),
    "ball": (Ball, BallConfig),
    "slides": (Slideshow, SlidesConfig),
}

_META_KEYS = {"animation", "name", "description"}


def get_preset(name):
    """Get a preset by name. Returns None if not found."""
    return PRESETS.get(name)


def list_presets():
    """Return list of (key, name, description) for presets."""
    return [(k, PRESETS[k]["name"], PRESETS[k]["description"]) for k in PRESET_ORDER]


def build_animation(preset, width=32, height=32, **overrides):
    """Instantiate the animation for a preset name or preset dict.

    overrides replace preset parameters. Raises KeyError for unknown
    presets and pydantic.ValidationError for out-of-range parameters.
    """
    if isinstance(preset, str):
        p = get_preset(preset)
        if p is None:
            raise KeyError(f"Unknown preset: {preset}")
    else:
        p = preset

    kind = p["animation"]
    if kind not in ANIMATION_TYPES:
        raise KeyError(f"Unknown animation type: {kind}")
    cls, model = ANIMATION_TYPES[kind]

    params = {k: v for k, v in p.items() if k not in _META_KEYS}
    params.update(overrides)
    config = model(**params)

    if kind == "life":
        return cls(width=width, height=height, **config.model_dump())
    if kind == "slides":
        return cls.from_file(config.path, width=width, height=height)
    return cls(**config.model_dump())
