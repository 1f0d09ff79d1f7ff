"""Render one of the demo scenes to a PPM image.

Usage:
    lensray [options]
    python -m lensray [options]

Options:
    --scene NAME        Demo scene to render (default: three_spheres)
    --width WIDTH       Image width in pixels (default: scene setting)
    --samples SAMPLES   Samples per pixel (default: scene setting)
    --max-depth DEPTH   Maximum ray bounces (default: scene setting)
    --output OUTPUT     Output file path, '-' for stdout (default: image.ppm)
    --binary            Write binary P6 instead of plain P3
    --seed SEED         Random seed for a reproducible image
    --quiet             Suppress progress output

Example:
    lensray --scene random_spheres --width 200 --samples 20 --output final.ppm
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from collections.abc import Sequence
from contextlib import ExitStack
from pathlib import Path

import numpy as np

from lensray.output.ppm import PPMSink
from lensray.scene.presets import SCENES

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="lensray",
        description="Render a demo scene with the thin-lens camera.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--scene",
        choices=sorted(SCENES),
        default="three_spheres",
        help="Demo scene to render (default: three_spheres)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=None,
        help="Image width in pixels (default: scene setting)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=None,
        help="Number of samples per pixel (default: scene setting)",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Maximum number of ray bounces (default: scene setting)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="image.ppm",
        help="Output file path, '-' for stdout (default: image.ppm)",
    )
    parser.add_argument(
        "--binary",
        action="store_true",
        help="Write binary P6 instead of plain-text P3",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible output",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def render_scene(
    scene: str = "three_spheres",
    width: int | None = None,
    num_samples: int | None = None,
    max_depth: int | None = None,
    output_path: str = "image.ppm",
    binary: bool = False,
    seed: int | None = None,
    quiet: bool = False,
) -> Path | None:
    """Render a demo scene and write it as PPM.

    Args:
        scene: Name of a scene in SCENES.
        width: Image width override.
        num_samples: Samples per pixel override.
        max_depth: Bounce limit override.
        output_path: Output file path, or '-' for standard output.
        binary: Emit P6 instead of P3.
        seed: Seed for the random generator.
        quiet: If True, suppress progress output.

    Returns:
        Path to the written file, or None when writing to stdout.

    Raises:
        ValueError: If the scene name or a camera setting is invalid.
    """
    if scene not in SCENES:
        raise ValueError(f"Unknown scene '{scene}'. Available: {', '.join(sorted(SCENES))}")

    rng = np.random.default_rng(seed)
    world, camera = SCENES[scene](rng)

    if width is not None:
        camera.image_width = width
    if num_samples is not None:
        camera.samples_per_pixel = num_samples
    if max_depth is not None:
        camera.max_depth = max_depth

    # Fail before the output file is created
    camera.validate()

    if not quiet:
        print(
            f"Rendering '{scene}' ({camera.image_width}x{camera.image_height}, "
            f"{camera.samples_per_pixel} spp, {len(world)} objects)...",
            file=sys.stderr,
        )

    start_time = time.time()

    def progress_callback(current: int, target: int) -> None:
        if not quiet:
            print(
                f"\r  Scanlines remaining: {target - current} ",
                end="",
                file=sys.stderr,
                flush=True,
            )

    to_stdout = output_path == "-"
    with ExitStack() as stack:
        if to_stdout:
            stream = sys.stdout.buffer if binary else sys.stdout
        else:
            stream = stack.enter_context(open(output_path, "wb" if binary else "w"))
        camera.render(world, PPMSink(stream, binary=binary), rng=rng, callback=progress_callback)

    total_time = time.time() - start_time
    logger.info("Rendered %s in %.2fs", scene, total_time)

    if not quiet:
        print(file=sys.stderr)  # Newline after progress
        if not to_stdout:
            print(f"Saved to: {Path(output_path).absolute()}", file=sys.stderr)
        print(f"Total time: {total_time:.2f}s", file=sys.stderr)

    return None if to_stdout else Path(output_path)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        render_scene(
            scene=args.scene,
            width=args.width,
            num_samples=args.samples,
            max_depth=args.max_depth,
            output_path=args.output,
            binary=args.binary,
            seed=args.seed,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
