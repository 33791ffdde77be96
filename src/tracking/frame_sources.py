"""
Frame sources for the tracker.

A frame source hands out one RGB PixelBuffer per call to `get_frame` and
raises SourceUnavailableError when it cannot. Sources that hold a device
release it themselves; the pipeline never does.
"""

import logging
from pathlib import Path
from typing import Optional, Protocol, Union

import cv2

from src.common.types import PixelBuffer

logger = logging.getLogger(__name__)


class SourceUnavailableError(RuntimeError):
    """Raised when a frame source cannot supply a frame."""


class FrameSource(Protocol):
    """Anything that can supply the current frame."""

    def get_frame(self) -> PixelBuffer:
        ...


class ImageFrameSource:
    """
    Serves the same still image on every tick.

    The file is read on the first request and cached.

    Example:
        >>> source = ImageFrameSource(Path("test-images/working.jpeg"))
        >>> frame = source.get_frame()
    """

    def __init__(self, image_path: Union[str, Path]):
        self.image_path = Path(image_path)
        self._frame: Optional[PixelBuffer] = None

    def get_frame(self) -> PixelBuffer:
        if self._frame is None:
            image = cv2.imread(str(self.image_path), cv2.IMREAD_COLOR)
            if image is None:
                raise SourceUnavailableError(f"Cannot read image: {self.image_path}")
            self._frame = PixelBuffer.from_bgr(image)
            logger.info(
                f"Loaded still image {self.image_path.name} "
                f"({self._frame.width}x{self._frame.height})"
            )
        return self._frame


class CameraFrameSource:
    """
    Live frames from an OpenCV capture device.

    Use as a context manager so the device is released on every exit path.

    Example:
        >>> with CameraFrameSource(index=0) as camera:
        ...     frame = camera.get_frame()
    """

    def __init__(
        self,
        index: int = 0,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ):
        self.index = index
        self.width = width
        self.height = height
        self._capture: Optional[cv2.VideoCapture] = None

    @property
    def is_open(self) -> bool:
        return self._capture is not None and self._capture.isOpened()

    def open(self) -> None:
        """
        Open the capture device.

        Raises:
            SourceUnavailableError: If the device cannot be opened.
        """
        if self.is_open:
            return

        capture = cv2.VideoCapture(self.index)
        if not capture.isOpened():
            capture.release()
            raise SourceUnavailableError(f"Cannot open camera {self.index}")

        if self.width:
            capture.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
        if self.height:
            capture.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)

        self._capture = capture
        logger.info(f"Camera {self.index} started")

    def get_frame(self) -> PixelBuffer:
        if not self.is_open:
            raise SourceUnavailableError(f"Camera {self.index} is not open")

        ok, frame = self._capture.read()
        if not ok or frame is None:
            raise SourceUnavailableError(f"Camera {self.index} returned no frame")
        return PixelBuffer.from_bgr(frame)

    def release(self) -> None:
        """Release the capture device. Safe to call more than once."""
        if self._capture is not None:
            self._capture.release()
            self._capture = None
            logger.info(f"Camera {self.index} stopped")

    def __enter__(self) -> "CameraFrameSource":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
