"""Scroll-follow policy for the message viewport."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

NEAR_BOTTOM_THRESHOLD = 100


@dataclass(frozen=True)
class ScrollMetrics:
    scroll_top: float
    scroll_height: float
    client_height: float

    @property
    def distance_to_bottom(self) -> float:
        return self.scroll_height - self.scroll_top - self.client_height


def is_near_bottom(metrics: ScrollMetrics, threshold: float = NEAR_BOTTOM_THRESHOLD) -> bool:
    return metrics.distance_to_bottom < threshold


def jump_to_latest_visible(near_bottom: bool, log_size: int) -> bool:
    return not near_bottom and log_size > 0


class Viewport(ABC):
    """The scrollable message container, supplied by the presentation layer."""

    @abstractmethod
    def metrics(self) -> ScrollMetrics:
        ...

    @abstractmethod
    def scroll_to_end(self, smooth: bool = True) -> None:
        ...


class ScrollFollow:
    """Tracks whether the viewport is following the newest content."""

    def __init__(self, viewport: Viewport | None = None, threshold: float = NEAR_BOTTOM_THRESHOLD):
        self.viewport = viewport
        self.threshold = threshold
        self.near_bottom = True
        self._follow_next = True

    def on_scroll(self) -> bool:
        if self.viewport is not None:
            self.near_bottom = is_near_bottom(self.viewport.metrics(), self.threshold)
        return self.near_bottom

    def capture(self) -> None:
        """Sample the position right before the log or loading flag changes."""
        self._follow_next = self.on_scroll()

    def after_change(self) -> None:
        if self._follow_next and self.viewport is not None:
            self.viewport.scroll_to_end(smooth=True)
        self.on_scroll()

    def scroll_to_latest(self) -> None:
        if self.viewport is not None:
            self.viewport.scroll_to_end(smooth=True)
        self.on_scroll()

    def jump_visible(self, log_size: int) -> bool:
        return jump_to_latest_visible(self.near_bottom, log_size)
