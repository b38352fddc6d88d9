#!/usr/bin/env python3
"""Interactive single-sphere preview with keyboard camera control.

This script opens a window showing the ray-traced sphere and redraws it
whenever the camera moves.

Usage:
    python -m examples.interactive_sphere [options]

Options:
    --width WIDTH       Image width in pixels (default: 400, 16:9 aspect)
    --arch ARCH         Taichi backend: auto, gpu or cpu (default: auto)
    --legacy-rows       Count pixel rows down from 256 instead of height - 1
    --serial            Render the pixel loop on a single thread
    --static            Show one frame with Matplotlib instead of a window
    --log-level LEVEL   Logging level (default: WARNING)

Controls:
    - W: move the camera origin up
    - R: move the camera origin down
    - Escape: close the window
"""

from __future__ import annotations

import argparse
import logging
import platform
import sys
from pathlib import Path

# Ensure the project root is in the Python path for direct execution
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import taichi as ti  # noqa: E402

logger = logging.getLogger("examples.interactive_sphere")


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Interactive ray-traced sphere preview.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=400,
        help="Image width in pixels (default: 400)",
    )
    parser.add_argument(
        "--arch",
        choices=("auto", "gpu", "cpu"),
        default="auto",
        help="Taichi backend (default: auto)",
    )
    parser.add_argument(
        "--legacy-rows",
        action="store_true",
        help="Count pixel rows down from 256 instead of the image height",
    )
    parser.add_argument(
        "--serial",
        action="store_true",
        help="Render the pixel loop on a single thread",
    )
    parser.add_argument(
        "--static",
        action="store_true",
        help="Show a single frame with Matplotlib instead of a window",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Logging level (default: WARNING)",
    )
    return parser.parse_args()


def initialize_taichi(arch: str = "auto") -> str:
    """Initialize Taichi with the requested or best available backend.

    fast_math is disabled so every backend produces the same bytes for the
    same camera state.

    Returns:
        Name of the backend being used.
    """
    if arch == "cpu":
        ti.init(arch=ti.cpu, fast_math=False)
        return "CPU"

    if arch == "auto" and platform.system() == "Darwin":
        # macOS: prefer Metal
        try:
            ti.init(arch=ti.metal, fast_math=False)
            return "Metal (GPU)"
        except Exception:
            pass

    # Try generic GPU (CUDA on Linux/Windows, Vulkan as fallback)
    try:
        ti.init(arch=ti.gpu, fast_math=False)
        return "GPU"
    except Exception:
        if arch == "gpu":
            raise

    ti.init(arch=ti.cpu, fast_math=False)
    return "CPU"


def main() -> int:
    """Main entry point for the interactive sphere preview.

    Returns:
        Exit code (0 for success, non-zero for error).
    """
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    backend = initialize_taichi(args.arch)
    print(f"Taichi backend: {backend}")

    # Import after Taichi initialization
    from src.pixeltrace.camera.pinhole import LEGACY_ROW_ANCHOR, CameraConfig, setup_camera
    from src.pixeltrace.core.frame import FrameRenderer
    from src.pixeltrace.preview.display import show_preview
    from src.pixeltrace.preview.interactive import InteractivePreview

    try:
        camera = setup_camera(
            CameraConfig(
                image_width=args.width,
                row_anchor=LEGACY_ROW_ANCHOR if args.legacy_rows else None,
            )
        )
    except ValueError as e:
        logger.error("Invalid camera configuration: %s", e)
        return 1

    renderer = FrameRenderer(camera, parallel=not args.serial)

    if args.static:
        renderer.render()
        show_preview(renderer)
        return 0

    if not InteractivePreview.is_display_available():
        logger.error("No display available. Cannot open the preview window.")
        print("Use --static to show a single frame instead.")
        return 1

    print(f"Creating preview window ({camera.image_width}x{camera.image_height})...")
    preview = InteractivePreview(renderer)

    print("  - Hold W / R to move the camera up / down")
    print("  - Press Escape or close the window to exit")
    print()

    try:
        preview.run()
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
    except RuntimeError as e:
        # Window or surface failures end the process
        logger.error("Preview failed: %s", e)
        return 1
    finally:
        preview.close()

    print(f"Preview window closed after {renderer.frame_count} frames.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
