"""Simple stereo waveform: buffered samples in, two polylines out.

Every render drains the sample buffer, reduces each channel to one peak
per column pair, and maps the peaks onto pixel coordinates:

  x = column * PIXELS_PER_SAMPLE
  y = half_y + trunc(peak * half_y)      half_y = height // PIXELS_PER_SAMPLE

A channel with fewer than two peaks (nothing new since the last frame)
is drawn as a flat centre line from x=0 to x=width.
"""

import logging
from dataclasses import dataclass, field

import numpy as np
from PIL import Image, ImageDraw

from sample_buffer import SampleBuffer
from visualization import Visualization
from waveform_processor import reduce

logger = logging.getLogger(__name__)

PIXELS_PER_SAMPLE = 2  # horizontal spacing, also the vertical half-scale divisor


@dataclass(frozen=True)
class StrokeStyle:
    color: tuple[int, int, int, int]  # RGBA
    width: float

    @property
    def pixel_width(self) -> int:
        """Line width rounded for the rasterizer, never thinner than 1 px."""
        return max(1, round(self.width))


LEFT_STROKE = StrokeStyle((0, 191, 255, 255), 1.0)   # deep sky blue
RIGHT_STROKE = StrokeStyle((255, 0, 0, 150), 0.5)    # translucent red


@dataclass
class WaveformGeometry:
    """Polylines for one frame, computed for a given surface size."""

    width: int
    height: int
    left: list[tuple[int, int]] = field(default_factory=list)
    right: list[tuple[int, int]] = field(default_factory=list)
    left_stroke: StrokeStyle = LEFT_STROKE
    right_stroke: StrokeStyle = RIGHT_STROKE

    @property
    def is_empty(self) -> bool:
        return not self.left and not self.right


def channel_points(samples: np.ndarray, width: int,
                   height: int) -> list[tuple[int, int]]:
    """Map one channel's decimated peaks onto display points.

    Args:
        samples: Decimated peaks, nominally -1..1
        width:   Surface width in pixels
        height:  Surface height in pixels

    Returns:
        list of (x, y) int tuples, always at least two points
    """
    half_y = height // PIXELS_PER_SAMPLE
    if len(samples) < 2:
        return [(0, half_y), (width, half_y)]

    xs = np.arange(len(samples)) * PIXELS_PER_SAMPLE
    with np.errstate(over="ignore", invalid="ignore"):
        offsets = np.asarray(samples, dtype=np.float32) * np.float32(half_y)
    # NaN sits on the centre line; anything past a full surface height
    # (including +/-inf) is pinned there so the int cast stays defined.
    offsets = np.nan_to_num(offsets, nan=0.0, posinf=height, neginf=-height)
    offsets = np.clip(offsets, -height, height)
    # astype(int) truncates toward zero
    ys = half_y + offsets.astype(int)
    return list(zip(xs.tolist(), ys.tolist()))


class SimpleWaveform(Visualization):
    """Two-channel peak waveform over the samples received since last draw."""

    def __init__(self, left_stroke: StrokeStyle = LEFT_STROKE,
                 right_stroke: StrokeStyle = RIGHT_STROKE):
        self._buffer = SampleBuffer()
        self._left_stroke = left_stroke
        self._right_stroke = right_stroke

    @property
    def pending(self) -> int:
        """Frames waiting for the next draw."""
        return len(self._buffer)

    def add_samples(self, left: float, right: float):
        self._buffer.add_samples(left, right)

    def add_block(self, left, right):
        """Append a block of frames, e.g. straight from an audio callback."""
        self._buffer.add_block(left, right)

    def geometry(self, width: int, height: int) -> WaveformGeometry:
        """Drain the buffer and compute both polylines for this frame."""
        batch = self._buffer.drain_and_clear()
        geom = WaveformGeometry(width, height,
                                left_stroke=self._left_stroke,
                                right_stroke=self._right_stroke)

        if width <= 0 or height <= 0:
            logger.debug("Surface %dx%d has no area, discarding %d frames",
                         width, height, len(batch.left))
            return geom

        target_count = width // PIXELS_PER_SAMPLE
        left_peaks = reduce(batch.left, target_count)
        right_peaks = reduce(batch.right, target_count)

        geom.left = channel_points(left_peaks, width, height)
        geom.right = channel_points(right_peaks, width, height)

        logger.debug("Drained %d frames into %d/%d peaks (L/R) at %dx%d",
                     len(batch.left), len(left_peaks), len(right_peaks),
                     width, height)
        return geom

    def draw(self, width: int, height: int) -> Image.Image:
        image = Image.new("RGBA", (max(width, 0), max(height, 0)))
        self.draw_into(image, width, height)
        return image

    def draw_into(self, surface: Image.Image, width: int, height: int):
        render_geometry(surface, self.geometry(width, height))


def render_geometry(surface: Image.Image, geom: WaveformGeometry):
    """Stroke the left polyline, then composite the right one over it.

    Each line is drawn on its own transparent layer and blended onto the
    surface, so the translucent right stroke tints the left one instead of
    replacing its pixels.
    """
    for line, stroke in ((geom.left, geom.left_stroke),
                         (geom.right, geom.right_stroke)):
        if not line:
            continue
        layer = Image.new("RGBA", surface.size)
        ImageDraw.Draw(layer).line(line, fill=stroke.color,
                                   width=stroke.pixel_width)
        if surface.mode == "RGBA":
            surface.alpha_composite(layer)
        else:
            surface.paste(layer, (0, 0), layer)
