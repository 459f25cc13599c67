"""
LED Matrix - Entry Point

Usage:
    python -m led_matrix [preset] [--size WxH] [--window N]
    python -m led_matrix [preset] --snap N
    python -m led_matrix [preset] --record N PATH
    python -m led_matrix --slides PATH

Examples:
    python -m led_matrix
    python -m led_matrix ball_comet --window 800
    python -m led_matrix life --snap 200
    python -m led_matrix life --record 500 life.json
    python -m led_matrix --slides life.json

Animations:
    life        - Game of Life with lineage hues and age fading
    ball        - Bouncing ball with a fading trail
    slides      - Playback of a recorded frame file

Use --list to see all available presets.
"""

import os
import sys

from .config import MatrixConfig
from .driver import AnimationSlot, Renderer
from .matrix import LedMatrix
from .presets import PRESET_ORDER, build_animation, list_presets
from .slides import save_frames


def _headless(animation, width, height, frames):
    """Render frames without waiting. Yields (delay, snapshot) per rendered frame."""
    matrix = LedMatrix(width, height)
    renderer = Renderer(matrix, AnimationSlot(animation))
    for _ in range(frames):
        delay = renderer.render_once()
        yield delay, matrix.snapshot()


def snap(animation, label, width, height, frames, scale=16):
    """Headless mode: render N frames, save the last as a PNG, exit."""
    screenshots_dir = os.path.join(os.getcwd(), "screenshots")
    os.makedirs(screenshots_dir, exist_ok=True)

    last = None
    for _, last in _headless(animation, width, height, frames):
        pass

    image = last.to_image(scale=scale)
    path = os.path.join(screenshots_dir, f"led_{label}.png")
    image.save(path)
    image.save(os.path.join(screenshots_dir, "latest.png"))
    print(f"[LED] Saved: {path}")


def record(animation, width, height, frames, path):
    """Headless mode: render N frames into a frame file."""
    rendered = ((delay, shot.to_array())
                for delay, shot in _headless(animation, width, height, frames))
    count = save_frames(rendered, path)
    print(f"[LED] Recorded {count} frames to {path}")


def main():
    preset = "life"
    width, height = 32, 32
    window = 640
    snap_frames = 0
    record_frames = 0
    record_path = None
    slides_path = None

    args = sys.argv[1:]
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--size" and i + 1 < len(args):
            parts = args[i + 1].lower().split("x")
            width, height = int(parts[0]), int(parts[1])
            i += 2
        elif arg == "--window" and i + 1 < len(args):
            window = int(args[i + 1])
            i += 2
        elif arg == "--snap" and i + 1 < len(args):
            snap_frames = int(args[i + 1])
            i += 2
        elif arg == "--record" and i + 2 < len(args):
            record_frames = int(args[i + 1])
            record_path = args[i + 2]
            i += 3
        elif arg == "--slides" and i + 1 < len(args):
            slides_path = args[i + 1]
            i += 2
        elif arg == "--list":
            print("\nAvailable presets:\n")
            for key, name, desc in list_presets():
                print(f"    {key:16s} {name:20s} {desc}")
            print()
            return
        elif arg in ("--help", "-h"):
            print(__doc__)
            return
        elif arg in PRESET_ORDER:
            preset = arg
            i += 1
        else:
            print(f"Unknown argument: {arg}")
            print("Use --list to see available presets")
            return

    size = MatrixConfig(width=width, height=height)
    width, height = size.width, size.height

    if slides_path is not None:
        label = "slides"
        animation = build_animation({"animation": "slides", "path": slides_path},
                                    width, height)
    else:
        label = preset
        animation = build_animation(preset, width, height)

    if snap_frames > 0:
        print(f"Headless snap mode: {label} @ {width}x{height}, {snap_frames} frames")
        snap(animation, label, width, height, snap_frames)
        return

    if record_frames > 0:
        print(f"Headless record mode: {label} @ {width}x{height}, {record_frames} frames")
        record(animation, width, height, record_frames, record_path)
        return

    from .viewer import Viewer

    print("Starting LED Matrix Viewer")
    print(f"  Animation: {label}")
    print(f"  Matrix: {width}x{height}")
    print(f"  Window: {window}px")
    print()

    viewer = Viewer(window=window, width=width, height=height,
                    start_preset=label, animation=animation)
    viewer.run()


if __name__ == "__main__":
    main()
