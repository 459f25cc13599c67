"""
Animation and Matrix Configuration Models

pydantic models with bounded Fields. Presets are plain dicts; they are
validated through these models before an animation is built, so a bad
preset or CLI override fails with a ValidationError naming the field.
"""

from typing import Optional

from pydantic import BaseModel, Field

from . import life
from .matrix import DEFAULT_WIDTH, DEFAULT_HEIGHT


class MatrixConfig(BaseModel):
    width: int = Field(default=DEFAULT_WIDTH, ge=1, le=1024,
                       description="LED columns")
    height: int = Field(default=DEFAULT_HEIGHT, ge=1, le=1024,
                        description="LED rows")


class LifeConfig(BaseModel):
    steps_per_generation: int = Field(
        default=life.STEPS_PER_GENERATION, ge=1,
        description="Interpolation frames between generations",
    )
    generation_delay_ms: int = Field(
        default=life.GENERATION_DELAY_MS, ge=0,
        description="Hold after a generation step",
    )
    step_delay_ms: int = Field(
        default=life.STEP_DELAY_MS, ge=0,
        description="Hold per interpolation frame",
    )
    max_average_age: float = Field(
        default=life.MAX_AVERAGE_AGE, gt=0,
        description="Average age above which the board reseeds",
    )
    fade_ages: float = Field(
        default=life.FADE_AGES, gt=0,
        description="Generations for a cell to fade to white",
    )
    palette_size: int = Field(
        default=life.PALETTE_SIZE, ge=1, le=360,
        description="Evenly spaced hues used when reseeding",
    )
    seed: Optional[int] = Field(default=None, description="Random seed")


class BallConfig(BaseModel):
    dx: float = Field(default=1.5, ge=-16.0, le=16.0)
    dy: float = Field(default=0.5, ge=-16.0, le=16.0)
    trail_length: int = Field(default=5, ge=1, le=64)
    delay_ms: int = Field(default=60, ge=0)


class SlidesConfig(BaseModel):
    path: str = Field(description="Frame file to play")
