"""
Rectangle selection state machine.

``SelectionController`` owns the single region of interest drawn by the user.  The
rectangle is tracked in display space (relative to the rendered image area) and
the image-space :class:`SelectionBox` is derived from it on demand so that it
always reflects the current display metrics.

The controller is UI-framework agnostic: bindings forward pointer positions in
container-local pixels to the ``on_pointer_*`` entry points and read immutable
snapshots back.
"""

from __future__ import annotations

import enum
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass

from .coordinate_mapper import CoordinateMapper, NormalizedPoint, PixelPoint
from .display_metrics import (
    EMPTY_CONTAINER,
    EMPTY_IMAGE,
    ContainerGeometry,
    DisplayMetrics,
    ImageDimensions,
    compute_display_metrics,
)

_LOGGER = logging.getLogger(__name__)


class SelectionState(enum.Enum):
    """Lifecycle of the rectangle owned by :class:`SelectionController`."""

    IDLE = "idle"
    DRAGGING = "dragging"
    COMMITTED = "committed"


@dataclass(frozen=True)
class Rectangle:
    """Display-space rectangle relative to the rendered image area."""

    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @classmethod
    def spanning(cls, x1: float, y1: float, x2: float, y2: float) -> Rectangle:
        """Return the bounding box of two corner points."""
        return cls(min(x1, x2), min(y1, y2), max(x1, x2), max(y1, y2))

    def scaled(self, factor_x: float, factor_y: float) -> Rectangle:
        return Rectangle(
            self.left * factor_x,
            self.top * factor_y,
            self.right * factor_x,
            self.bottom * factor_y,
        )


@dataclass(frozen=True)
class NormalizedBox:
    """Selection edges divided by the image dimensions."""

    top: float
    left: float
    right: float
    bottom: float
    width: float
    height: float


@dataclass(frozen=True)
class SelectionBox:
    """Image-space selection in whole pixels plus its normalised form."""

    top: int
    left: int
    right: int
    bottom: int
    width: int
    height: int
    normalized: NormalizedBox

    @property
    def is_empty(self) -> bool:
        """Return True for zero-area selections (a click without a drag)."""
        return self.width == 0 or self.height == 0

    @classmethod
    def from_rectangle(cls, rect: Rectangle, mapper: CoordinateMapper) -> SelectionBox:
        """Project *rect* through *mapper* onto the image pixel grid."""
        first = mapper.rendered_to_image(rect.left, rect.top)
        second = mapper.rendered_to_image(rect.right, rect.bottom)
        left = min(first.x, second.x)
        right = max(first.x, second.x)
        top = min(first.y, second.y)
        bottom = max(first.y, second.y)
        width = right - left
        height = bottom - top

        img_w = int(mapper.image.width)
        img_h = int(mapper.image.height)

        def _norm(value: int, size: int) -> float:
            return value / size if size > 0 else 0.0

        return cls(
            top=top,
            left=left,
            right=right,
            bottom=bottom,
            width=width,
            height=height,
            normalized=NormalizedBox(
                top=_norm(top, img_h),
                left=_norm(left, img_w),
                right=_norm(right, img_w),
                bottom=_norm(bottom, img_h),
                width=_norm(width, img_w),
                height=_norm(height, img_h),
            ),
        )


@dataclass(frozen=True)
class HoverReading:
    """Pixel and normalised coordinates under the pointer.

    ``pixel``/``normalized`` are ``None`` when the pointer is outside the rendered
    image or no image is loaded.
    """

    within_bounds: bool
    pixel: PixelPoint | None = None
    normalized: NormalizedPoint | None = None


OUTSIDE = HoverReading(within_bounds=False)


class SelectionController:
    """Drag state machine producing a single rectangular selection."""

    def __init__(
        self,
        *,
        on_selection_changed: Callable[[SelectionBox | None], None] | None = None,
        on_hover_changed: Callable[[HoverReading | None], None] | None = None,
    ) -> None:
        """Initialize the controller.

        Parameters
        ----------
        on_selection_changed:
            Called with the derived selection (or ``None``) whenever the
            rectangle is created, resized, committed or cleared.
        on_hover_changed:
            Called with the latest hover reading, ``None`` once the pointer left
            the surface.
        """
        self._on_selection_changed = on_selection_changed
        self._on_hover_changed = on_hover_changed
        self._lock = threading.RLock()

        self._image: ImageDimensions = EMPTY_IMAGE
        self._container: ContainerGeometry = EMPTY_CONTAINER
        self._metrics: DisplayMetrics = compute_display_metrics(self._image, self._container)

        self._selection_mode: bool = False
        self._state: SelectionState = SelectionState.IDLE
        self._anchor: tuple[float, float] = (0.0, 0.0)
        self._rect: Rectangle | None = None
        self._hover: HoverReading | None = None

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def image(self) -> ImageDimensions:
        return self._image

    @property
    def container(self) -> ContainerGeometry:
        return self._container

    @property
    def metrics(self) -> DisplayMetrics:
        return self._metrics

    @property
    def rectangle(self) -> Rectangle | None:
        return self._rect

    @property
    def hover(self) -> HoverReading | None:
        return self._hover

    def is_selection_mode(self) -> bool:
        """Return True when pointer-down starts a new rectangle."""
        return self._selection_mode

    def mapper(self) -> CoordinateMapper:
        """Return a mapper bound to the current image and display metrics."""
        with self._lock:
            return CoordinateMapper(self._image, self._metrics)

    def selection_box(self) -> SelectionBox | None:
        """Return the live selection while dragging or once committed."""
        with self._lock:
            if self._rect is None:
                return None
            return SelectionBox.from_rectangle(self._rect, self.mapper())

    def committed_selection(self) -> SelectionBox | None:
        """Return the selection only after the drag has finished."""
        with self._lock:
            if self._state is not SelectionState.COMMITTED:
                return None
            return self.selection_box()

    # ------------------------------------------------------------------
    # Collaborator inputs
    # ------------------------------------------------------------------
    def set_image(self, image: ImageDimensions) -> None:
        """Install the dimensions of a newly loaded image and reset the selection."""
        with self._lock:
            self._image = image
            self._metrics = compute_display_metrics(self._image, self._container)
            _LOGGER.debug("Image set to %dx%d", image.width, image.height)
            self._reset()

    def set_container(self, container: ContainerGeometry) -> None:
        """Update the display surface size, keeping the selected image region."""
        with self._lock:
            previous = self._metrics
            self._container = container
            self._metrics = compute_display_metrics(self._image, self._container)
            if self._rect is None or self._metrics == previous:
                return
            current = self._metrics
            # A collapsed surface keeps the last usable rectangle until it reappears.
            if min(
                previous.rendered_width,
                previous.rendered_height,
                current.rendered_width,
                current.rendered_height,
            ) <= 0.0:
                return
            factor_x = current.rendered_width / previous.rendered_width
            factor_y = current.rendered_height / previous.rendered_height
            self._rect = self._clamp_rect(self._rect.scaled(factor_x, factor_y))
            self._anchor = (self._anchor[0] * factor_x, self._anchor[1] * factor_y)
            self._notify_selection()

    # ------------------------------------------------------------------
    # Mode switching
    # ------------------------------------------------------------------
    def enter_selection_mode(self) -> None:
        with self._lock:
            self._selection_mode = True

    def exit_selection_mode(self) -> None:
        """Leave selection mode and discard any rectangle."""
        with self._lock:
            self._selection_mode = False
            self.clear()

    def set_selection_mode(self, enabled: bool) -> None:
        if enabled:
            self.enter_selection_mode()
        else:
            self.exit_selection_mode()

    # ------------------------------------------------------------------
    # Pointer entry points
    # ------------------------------------------------------------------
    def on_pointer_down(self, pointer_x: float, pointer_y: float) -> bool:
        """Start a new rectangle at the pointer.

        Returns
        -------
        bool:
            True if a drag started, False when the event was ignored.
        """
        with self._lock:
            if not self._selection_mode or not self._image.is_valid():
                return False
            mapper = self.mapper()
            if not mapper.is_within_rendered_bounds(pointer_x, pointer_y):
                return False
            anchor = mapper.relative_position(pointer_x, pointer_y)
            self._anchor = anchor
            self._rect = Rectangle(anchor[0], anchor[1], anchor[0], anchor[1])
            self._transition(SelectionState.DRAGGING)
            self._notify_selection()
            return True

    def on_pointer_move(self, pointer_x: float, pointer_y: float) -> None:
        """Update the hover readout and, while dragging, grow the rectangle."""
        with self._lock:
            mapper = self.mapper()
            self._update_hover(mapper, pointer_x, pointer_y)
            if self._state is not SelectionState.DRAGGING:
                return
            current_x, current_y = mapper.clamp_to_rendered(pointer_x, pointer_y)
            anchor_x, anchor_y = self._anchor
            rect = self._clamp_rect(Rectangle.spanning(anchor_x, anchor_y, current_x, current_y))
            self._rect = rect
            self._notify_selection()

    def on_pointer_up(self) -> None:
        with self._lock:
            if self._state is SelectionState.DRAGGING:
                self._transition(SelectionState.COMMITTED)
                self._notify_selection()

    def on_pointer_leave(self) -> None:
        """Finalise an active drag and hide the hover readout."""
        with self._lock:
            self.on_pointer_up()
            if self._hover is not None:
                self._hover = None
                if self._on_hover_changed is not None:
                    self._on_hover_changed(None)

    def clear(self) -> None:
        """Discard the rectangle and return to idle."""
        with self._lock:
            had_rect = self._rect is not None
            self._rect = None
            self._transition(SelectionState.IDLE)
            if had_rect:
                self._notify_selection()

    # ------------------------------------------------------------------
    # Internal utilities
    # ------------------------------------------------------------------
    def _reset(self) -> None:
        self._hover = None
        self.clear()

    def _transition(self, state: SelectionState) -> None:
        if state is not self._state:
            _LOGGER.debug("Selection %s -> %s", self._state.value, state.value)
            self._state = state

    def _clamp_rect(self, rect: Rectangle) -> Rectangle:
        max_w = self._metrics.rendered_width
        max_h = self._metrics.rendered_height
        return Rectangle(
            max(0.0, min(max_w, rect.left)),
            max(0.0, min(max_h, rect.top)),
            max(0.0, min(max_w, rect.right)),
            max(0.0, min(max_h, rect.bottom)),
        )

    def _update_hover(self, mapper: CoordinateMapper, pointer_x: float, pointer_y: float) -> None:
        if self._image.is_valid() and mapper.is_within_rendered_bounds(pointer_x, pointer_y):
            pixel = mapper.to_image_point(pointer_x, pointer_y)
            reading = HoverReading(True, pixel, mapper.to_normalized_point(pixel))
        else:
            reading = OUTSIDE
        if reading == self._hover:
            return
        self._hover = reading
        if self._on_hover_changed is not None:
            self._on_hover_changed(reading)

    def _notify_selection(self) -> None:
        if self._on_selection_changed is not None:
            self._on_selection_changed(self.selection_box())


__all__ = [
    "HoverReading",
    "NormalizedBox",
    "OUTSIDE",
    "Rectangle",
    "SelectionBox",
    "SelectionController",
    "SelectionState",
]
