"""
Slideshow Animation and Frame-File Codec

A frame file is a JSON list of records:

    [{"duration": 120, "content": "<base64>"}, ...]

where duration is the hold time in milliseconds and content is a full
frame of row-major RGB triplets (3 bytes per pixel), base64 encoded.
Every frame must decode to exactly width * height pixels.

Malformed files fail at load time with FrameFormatError, never
mid-playback.
"""

import base64
import binascii
import json
from collections import namedtuple

import numpy as np

from .animation_base import Animation


Frame = namedtuple("Frame", ["duration", "pixels"])


class FrameFormatError(ValueError):
    """A frame file or frame record could not be decoded."""


def decode_frame_content(content, width, height):
    """Decode base64 frame content into a (height, width, 3) uint8 array."""
    try:
        raw = base64.b64decode(content, validate=True)
    except (binascii.Error, TypeError, ValueError) as e:
        raise FrameFormatError(f"Frame content is not valid base64: {e}") from e

    expected = width * height * 3
    if len(raw) != expected:
        raise FrameFormatError(
            f"Frame has {len(raw)} bytes, expected {expected} for {width}x{height}"
        )
    return np.frombuffer(raw, dtype=np.uint8).reshape(height, width, 3).copy()


def encode_frame(pixels, duration):
    """Encode a (height, width, 3) frame as a frame-file record."""
    pixels = np.clip(np.asarray(pixels), 0, 255).astype(np.uint8)
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError(f"Expected (height, width, 3) pixels, got shape {pixels.shape}")
    return {
        "duration": int(duration),
        "content": base64.b64encode(pixels.tobytes()).decode("ascii"),
    }


def parse_frames(records, width, height):
    """Validate decoded JSON records and return a list of Frames."""
    if not isinstance(records, list) or not records:
        raise FrameFormatError("Frame file must be a non-empty list of frames")

    frames = []
    for i, record in enumerate(records):
        if not isinstance(record, dict) or "duration" not in record or "content" not in record:
            raise FrameFormatError(f"Frame {i} must have 'duration' and 'content'")
        duration = record["duration"]
        if isinstance(duration, bool) or not isinstance(duration, int) or duration < 0:
            raise FrameFormatError(f"Frame {i} duration must be a non-negative integer")
        try:
            pixels = decode_frame_content(record["content"], width, height)
        except FrameFormatError as e:
            raise FrameFormatError(f"Frame {i}: {e}") from e
        frames.append(Frame(duration, pixels))
    return frames


def load_frames(source, width, height):
    """Load a frame file from a path or an open text file."""
    try:
        if hasattr(source, "read"):
            records = json.load(source)
        else:
            with open(source, encoding="utf-8") as f:
                records = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise FrameFormatError(f"Frame file is not valid JSON: {e}") from e
    return parse_frames(records, width, height)


def save_frames(frames, path):
    """Write (duration, pixels) pairs to a frame file."""
    records = [encode_frame(pixels, duration) for duration, pixels in frames]
    with open(path, "w", encoding="utf-8") as f:
        json.dump(records, f)
    return len(records)


class Slideshow(Animation):
    """Plays pre-rendered frames in order, looping, each for its own duration."""

    animation_name = "slides"
    animation_label = "Slideshow"

    def __init__(self, frames):
        if not frames:
            raise ValueError("Slideshow needs at least one frame")
        self.frames = list(frames)
        self.index = 0

    @classmethod
    def from_file(cls, path, width=32, height=32):
        return cls(load_frames(path, width, height))

    def reset(self):
        self.index = 0

    def render(self, matrix):
        frame = self.frames[self.index]
        matrix.blit(frame.pixels)
        self.index = (self.index + 1) % len(self.frames)
        return frame.duration

    @property
    def stats(self):
        return {"frame": self.index, "frames": len(self.frames)}
