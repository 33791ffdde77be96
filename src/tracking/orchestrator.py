"""
Frame orchestrator: one full pipeline pass per tick.

Each tick pulls a frame, detects markers, validates their geometry, computes
the heading when a target is known, and hands the results to a render sink.
The external driver decides when to tick; stopping is simply not calling
`tick()` again.

Stages:
1. Frame acquisition (skip the tick if the source is unavailable)
2. Marker detection
3. Geometric validation
4. Heading computation (only for a valid set with a target)
5. Rendering
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from src.common.types import PixelBuffer, Point
from src.markers.processor import MarkerDetector
from src.markers.types import MarkerSet
from src.orientation.geometric_validator import validate_markers
from src.orientation.heading import compute_heading
from src.orientation.types import HeadingResult, ValidationResult
from src.tracking.config_loader import TrackerConfig
from src.tracking.frame_sources import FrameSource, SourceUnavailableError
from src.tracking.target_provider import TargetProvider

logger = logging.getLogger(__name__)


class TickStatus(Enum):
    """What happened during a tick."""

    PROCESSED = "PROCESSED"
    SKIPPED = "SKIPPED"  # No frame available


@dataclass(frozen=True)
class TickContext:
    """
    Inputs for one pipeline pass, captured at the start of the tick.

    Attributes:
        target: Point to steer toward, None until the first input event.
        config: Configuration snapshot used for the whole pass.
    """

    target: Optional[Point]
    config: TrackerConfig


@dataclass
class TickOutcome:
    """
    Result of one tick.

    Attributes:
        status: PROCESSED or SKIPPED.
        message: Status line for the operator.
        markers: Detected markers (None if the tick was skipped).
        validation: Geometry verdict (None if the tick was skipped).
        heading: Steering correction (None unless valid and a target exists).
        target: Target used for this tick.
    """

    status: TickStatus
    message: str
    markers: Optional[MarkerSet] = None
    validation: Optional[ValidationResult] = None
    heading: Optional[HeadingResult] = None
    target: Optional[Point] = None

    def is_processed(self) -> bool:
        return self.status == TickStatus.PROCESSED


class RenderSink(Protocol):
    """Receives each processed frame together with its results."""

    def render(self, buffer: PixelBuffer, outcome: TickOutcome) -> None:
        ...


class NullRenderSink:
    """Render sink that discards everything."""

    def render(self, buffer: PixelBuffer, outcome: TickOutcome) -> None:
        pass


def process_frame(buffer: PixelBuffer, context: TickContext) -> TickOutcome:
    """
    Run detection, validation and heading on a single frame.

    Args:
        buffer: Frame in RGB(A) order.
        context: Target and configuration for this pass.

    Returns:
        TickOutcome with status PROCESSED.
    """
    markers = MarkerDetector(context.config.detection).detect(buffer)
    validation = validate_markers(markers, context.config.tolerance)

    if not validation.is_valid():
        return TickOutcome(
            status=TickStatus.PROCESSED,
            message=validation.get_error_message(),
            markers=markers,
            validation=validation,
            target=context.target,
        )

    if context.target is None:
        return TickOutcome(
            status=TickStatus.PROCESSED,
            message="Markers aligned, waiting for target.",
            markers=markers,
            validation=validation,
        )

    heading = compute_heading(markers, context.target)
    return TickOutcome(
        status=TickStatus.PROCESSED,
        message=heading.describe(),
        markers=markers,
        validation=validation,
        heading=heading,
        target=context.target,
    )


class FrameOrchestrator:
    """
    Drives the pipeline once per tick.

    Example:
        >>> orchestrator = FrameOrchestrator(ImageFrameSource("boat.jpg"))
        >>> orchestrator.targets.update(320, 40)
        >>> outcome = orchestrator.tick()
        >>> print(outcome.message)
    """

    def __init__(
        self,
        frame_source: FrameSource,
        render_sink: Optional[RenderSink] = None,
        target_provider: Optional[TargetProvider] = None,
        config: Optional[TrackerConfig] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            frame_source: Supplies one frame per tick.
            render_sink: Receives processed frames. Discards if None.
            target_provider: Source of the target point. A fresh provider
                with no target if None.
            config: Tracker configuration, may be modified between ticks.
                Uses defaults if None.
        """
        self.frame_source = frame_source
        self.render_sink = render_sink if render_sink is not None else NullRenderSink()
        self.targets = target_provider if target_provider is not None else TargetProvider()
        self.config = config if config is not None else TrackerConfig()
        self._skipping = False

    def snapshot_context(self) -> TickContext:
        """Capture target and configuration for the coming pass."""
        return TickContext(
            target=self.targets.current(),
            config=self.config.model_copy(deep=True),
        )

    def tick(self) -> TickOutcome:
        """
        Execute one full pipeline pass.

        Returns:
            TickOutcome. An unavailable frame yields a SKIPPED outcome and
            nothing is rendered.
        """
        context = self.snapshot_context()

        try:
            frame = self.frame_source.get_frame()
        except SourceUnavailableError as e:
            # Warn once per outage, the driver keeps ticking meanwhile
            if self._skipping:
                logger.debug(f"Tick skipped: {e}")
            else:
                logger.warning(f"Tick skipped: {e}")
                self._skipping = True
            return TickOutcome(
                status=TickStatus.SKIPPED,
                message=str(e),
                target=context.target,
            )

        if self._skipping:
            logger.info("Frames available again")
            self._skipping = False

        outcome = process_frame(frame, context)
        self.render_sink.render(frame, outcome)
        return outcome
