#!/usr/bin/env python3
"""Render the clipping demo frame to a PNG.

Pipeline:
    1. Load and validate resources (packaged defaults or --resources)
    2. Build the ClippedView (all dimension/string lookups happen here)
    3. Render the frame (or --only a subset of examples), --repeat times
    4. Save the bitmap atomically and hash it
    5. Optionally write a YAML manifest next to the image

Refactored architecture:
    - render_main(...) → dict
        * Callable function (used by tests)
        * Returns: {output_path, width, height, sha256, examples, manifest_path}
    - main(argv) → int exit code: 0 on success, 2 on configuration or argument errors

CLI:
    python scripts/render_clipping.py --output outputs/clipping.png
    python scripts/render_clipping.py --density 3 --only circular combined
    python scripts/render_clipping.py --list
    python scripts/render_clipping.py --background white --output outputs/clipping_white.png
    python scripts/render_clipping.py --resources my_values.yaml --manifest --json-logs
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from clippingapp import __version__
from clippingapp.demo import EXAMPLE_NAMES, ClippedView, ConfigError, Resources
from clippingapp.utils import color, fs, hashing
from clippingapp.utils.logging_config import (
    install_excepthook,
    pop_context,
    push_context,
    setup_logging,
)
from clippingapp.utils.profiler import TimerAccumulator

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = "outputs/clipping.png"


def render_main(
    output_path: str = DEFAULT_OUTPUT,
    resources_path: Optional[str] = None,
    density: Optional[float] = None,
    only: Optional[List[str]] = None,
    repeat: int = 1,
    write_manifest: bool = False,
    background: str = "transparent",
) -> Dict[str, Any]:
    """Render the demo frame and save it.

    Parameters
    ----------
    output_path : str
        Target PNG path (parent directories are created)
    resources_path : Optional[str]
        Resources YAML, default the packaged values
    density : Optional[float]
        Overrides the resources' dp → px factor
    only : Optional[List[str]]
        Example names to draw, default all
    repeat : int
        Number of renders (timing is averaged; the last frame is saved)
    write_manifest : bool
        Write <output stem>_manifest.yaml next to the image
    background : str
        Color under the frame ("#RRGGBB", "#AARRGGBB" or a color name)

    Returns
    -------
    Dict[str, Any]
        output_path, width, height, sha256, examples, mean_render_ms, manifest_path

    Raises
    ------
    ConfigError
        If resources are missing, invalid, or lack a required name
    ValueError
        If repeat < 1, only names an unknown example or background is not a color
    """
    if repeat < 1:
        raise ValueError(f"repeat must be >= 1, got {repeat}")
    background_color = color.parse_color(background)

    resources = Resources.load(resources_path, density=density)
    view = ClippedView(resources)

    timings = TimerAccumulator("render")
    bitmap = None
    for _ in range(repeat):
        with timings.measure():
            bitmap = view.draw_to_bitmap(only=only, background=background_color)
    logger.info(f"Rendered {repeat} frame(s): {timings}")

    out_path = Path(output_path)
    fs.atomic_save_image(bitmap, out_path)
    digest = hashing.sha256_array(bitmap)
    height, width = bitmap.shape[:2]
    examples = [e.name for e in view.examples if only is None or e.name in set(only)]
    logger.info(f"Saved {width}x{height} frame to {out_path} (sha256={digest[:12]})")

    manifest_path = None
    if write_manifest:
        manifest_path = out_path.with_name(f"{out_path.stem}_manifest.yaml")
        fs.atomic_yaml_dump({
            'schema': 'render.v1',
            'version': __version__,
            'resources': resources.source,
            'density': resources.density,
            'scaled_density': resources.scaled_density,
            'background': f"#{background_color:08X}",
            'examples': examples,
            'image': {
                'path': str(out_path),
                'width': int(width),
                'height': int(height),
                'sha256': digest,
            },
        }, manifest_path)
        logger.info(f"Manifest written to {manifest_path}")

    return {
        'output_path': str(out_path),
        'width': int(width),
        'height': int(height),
        'sha256': digest,
        'examples': examples,
        'mean_render_ms': timings.mean() * 1000.0,
        'manifest_path': str(manifest_path) if manifest_path else None,
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render the 2D clipping demo frame to a PNG"
    )
    parser.add_argument(
        "--resources",
        type=str,
        default=None,
        help="Resources YAML (default: packaged clippingapp/res/values.v1.yaml)",
    )
    parser.add_argument(
        "--density",
        type=float,
        default=None,
        help="Override the dp → px density",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=DEFAULT_OUTPUT,
        help=f"Output PNG path (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "--only",
        nargs="+",
        choices=EXAMPLE_NAMES,
        metavar="NAME",
        help="Render only these examples",
    )
    parser.add_argument(
        "--background",
        type=str,
        default="transparent",
        help="Color under the frame: #RRGGBB, #AARRGGBB or a name (default: transparent)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List example names in frame order and exit",
    )
    parser.add_argument(
        "--repeat",
        type=int,
        default=1,
        help="Render N times and report the mean render time",
    )
    parser.add_argument(
        "--manifest",
        action="store_true",
        help="Write <output>_manifest.yaml next to the image",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write logs to this file",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Write JSON lines to --log-file",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    if args.list:
        for name in EXAMPLE_NAMES:
            print(name)
        return 0

    setup_logging(
        log_level=args.log_level,
        log_file=args.log_file,
        json=args.json_logs,
        context={'app': 'render_clipping'},
    )
    install_excepthook()

    try:
        push_context(output=args.output)
        result = render_main(
            output_path=args.output,
            resources_path=args.resources,
            density=args.density,
            only=args.only,
            repeat=args.repeat,
            write_manifest=args.manifest,
            background=args.background,
        )
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return 2
    except ValueError as e:
        logger.error(f"Invalid argument: {e}")
        return 2
    finally:
        pop_context(['output'])

    print("\n=== Render Complete ===")
    print(f"Image: {result['output_path']} ({result['width']}x{result['height']})")
    print(f"SHA-256: {result['sha256']}")
    if result['manifest_path']:
        print(f"Manifest: {result['manifest_path']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
