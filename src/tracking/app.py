"""
Interactive driver for the marker heading tracker.

Shows camera or still-image frames in an OpenCV window, takes the target from
the mouse, and exposes the interval tolerance as a trackbar that is saved to
the user configuration file when changed. The bundled defaults next to this
module are only ever read.

Usage:
    # Still image
    python -m src.tracking.app --image test-images/working.jpeg

    # Live camera
    python -m src.tracking.app --camera --device 0

    # Custom configuration file (created on first tolerance change)
    python -m src.tracking.app --camera --config my_tracker.yaml
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

import cv2

from src.tracking.config_loader import (
    TrackerConfig,
    get_default_config,
    load_config,
    save_config,
)
from src.tracking.frame_sources import (
    CameraFrameSource,
    ImageFrameSource,
    SourceUnavailableError,
)
from src.tracking.orchestrator import FrameOrchestrator, TickOutcome
from src.tracking.overlay import OverlayRenderer
from src.tracking.target_provider import TargetProvider

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

TOLERANCE_TRACKBAR = "Interval tol %"
EXIT_KEYS = (ord("q"), 27)
USER_CONFIG_PATH = Path.home() / ".marker-heading.yaml"


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Track a red/pink/green marker strip and steer it toward the mouse"
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--image", type=Path, help="Still image to analyse")
    source.add_argument("--camera", action="store_true", help="Use a live camera")
    parser.add_argument(
        "--device",
        type=int,
        default=None,
        help="Camera device index (default: camera.index from the configuration)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Configuration file (default: {USER_CONFIG_PATH})",
    )
    return parser.parse_args(argv)


def settings_path(config_arg: Optional[Path]) -> Path:
    """File that runtime adjustments are saved to. Never the bundled defaults."""
    return config_arg if config_arg is not None else USER_CONFIG_PATH


def resolve_config(config_path: Optional[Path]) -> TrackerConfig:
    """Load the given file if it exists, otherwise the bundled defaults."""
    if config_path is not None and config_path.exists():
        return load_config(config_path)
    return get_default_config()


def show_outcome(renderer: OverlayRenderer, outcome: TickOutcome) -> None:
    """Put the status of a skipped tick on screen in place of the last frame."""
    if not outcome.is_processed():
        renderer.render_status(outcome.message)


def run(
    orchestrator: FrameOrchestrator,
    renderer: OverlayRenderer,
    config_path: Path,
) -> None:
    """Tick until the window is closed or an exit key is pressed."""
    config = orchestrator.config
    window = config.display.window_name

    def on_mouse(event, x, y, flags, param):
        # HighGUI reports positions in frame coordinates
        if event == cv2.EVENT_MOUSEMOVE:
            orchestrator.targets.update(x, y)

    def on_tolerance(value):
        config.tolerance.interval_tolerance = value / 100
        logger.info(f"Interval tolerance set to {config.tolerance.interval_tolerance:.2f}")
        try:
            save_config(config, config_path)
        except OSError as e:
            logger.error(f"Could not save configuration to {config_path}: {e}")

    cv2.namedWindow(window, cv2.WINDOW_AUTOSIZE)
    cv2.setMouseCallback(window, on_mouse)
    cv2.createTrackbar(
        TOLERANCE_TRACKBAR,
        window,
        int(round(config.tolerance.interval_tolerance * 100)),
        100,
        on_tolerance,
    )

    last_message = None
    while True:
        outcome = orchestrator.tick()
        if outcome.message != last_message:
            logger.info(outcome.message)
            last_message = outcome.message

        show_outcome(renderer, outcome)
        if renderer.canvas is not None:
            cv2.imshow(window, renderer.canvas)

        key = cv2.waitKey(config.display.frame_delay_ms) & 0xFF
        if key in EXIT_KEYS:
            break
        if cv2.getWindowProperty(window, cv2.WND_PROP_VISIBLE) < 1:
            break

    cv2.destroyWindow(window)


def main(argv: Optional[list] = None) -> int:
    """Main entry point for the interactive tracker."""
    args = parse_args(argv)
    config_path = settings_path(args.config)
    config = resolve_config(config_path)

    renderer = OverlayRenderer(draw_status=config.display.draw_status)
    targets = TargetProvider()

    if args.image is not None:
        source = ImageFrameSource(args.image)
        try:
            source.get_frame()
        except SourceUnavailableError as e:
            logger.error(f"Image unavailable: {e}")
            return 1

        orchestrator = FrameOrchestrator(source, renderer, targets, config)
        try:
            run(orchestrator, renderer, config_path)
        finally:
            cv2.destroyAllWindows()
        return 0

    device = args.device if args.device is not None else config.camera.index
    camera = CameraFrameSource(
        index=device, width=config.camera.width, height=config.camera.height
    )
    try:
        camera.open()
        orchestrator = FrameOrchestrator(camera, renderer, targets, config)
        run(orchestrator, renderer, config_path)
    except SourceUnavailableError as e:
        logger.error(f"Camera unavailable: {e}")
        return 1
    finally:
        camera.release()
        cv2.destroyAllWindows()

    return 0


if __name__ == "__main__":
    sys.exit(main())
