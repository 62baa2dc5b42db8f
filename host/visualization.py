"""Base class for visualizations fed by a stereo sample stream."""

from abc import ABC, abstractmethod

from PIL import Image


class Visualization(ABC):
    """Producer side appends frames; renderer side draws and consumes them."""

    @abstractmethod
    def add_samples(self, left: float, right: float):
        """Accept one stereo frame.  Called from producer threads."""

    @abstractmethod
    def draw(self, width: int, height: int) -> Image.Image:
        """Render into a newly allocated image of ``width`` x ``height``."""

    @abstractmethod
    def draw_into(self, surface: Image.Image, width: int, height: int):
        """Render onto a caller-owned image."""
