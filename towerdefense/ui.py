"""Widgets: labels, clickable buttons, value sliders and audio settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

Color = tuple[int, int, int, int]


def compute_image_size(
    bitmap_width: float, bitmap_height: float, width: float, height: float
) -> tuple[float, float]:
    """Return the drawn size of an image; a zero dimension follows the bitmap's aspect ratio."""
    if width == 0 and height == 0:
        return float(bitmap_width), float(bitmap_height)
    if width == 0:
        if bitmap_height == 0:
            raise ValueError("bitmap height must be non-zero")
        return bitmap_width * height / bitmap_height, float(height)
    if height == 0:
        if bitmap_width == 0:
            raise ValueError("bitmap width must be non-zero")
        return float(width), bitmap_height * width / bitmap_width
    return float(width), float(height)


@dataclass
class Label:
    """A piece of static text placed on screen."""

    text: str
    font: str
    font_size: int
    x: float
    y: float
    color: Color = (0, 0, 0, 255)
    anchor_x: float = 0.0
    anchor_y: float = 0.0


@dataclass
class Button:
    """A rectangular clickable button that swaps image while hovered."""

    image: str
    image_in: str
    x: float
    y: float
    width: float
    height: float
    anchor_x: float = 0.0
    anchor_y: float = 0.0
    on_click: Optional[Callable[[], None]] = None
    enabled: bool = True
    mouse_in: bool = False

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("button size must be positive")

    @property
    def current_image(self) -> str:
        """Image shown now: the hover image only while hovered and enabled."""
        return self.image_in if self.mouse_in and self.enabled else self.image

    def contains(self, mx: float, my: float) -> bool:
        """Whether a screen point lies inside the button's rectangle."""
        left = self.x - self.anchor_x * self.width
        top = self.y - self.anchor_y * self.height
        return left <= mx < left + self.width and top <= my < top + self.height

    def on_mouse_down(self, button: int, mx: float, my: float) -> None:
        """Fire the click callback on a primary press over an enabled button."""
        if button & 1 and self.mouse_in and self.enabled and self.on_click:
            self.on_click()

    def on_mouse_move(self, mx: float, my: float) -> None:
        """Track whether the pointer is over the button."""
        self.mouse_in = self.contains(mx, my)


class Slider(Button):
    """A horizontal bar with a draggable handle holding a value in [0, 1]."""

    minimum = 0.0
    maximum = 1.0

    def __init__(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        on_value_changed: Optional[Callable[[float], None]] = None,
        handle_width: float = 20,
        handle_height: float = 20,
    ) -> None:
        if width <= 0:
            raise ValueError("slider width must be positive")
        super().__init__(
            image="stage-select/slider.png",
            image_in="stage-select/slider-blue.png",
            x=x + width,
            y=y + height / 2,
            width=handle_width,
            height=handle_height,
            anchor_x=0.5,
            anchor_y=0.5,
        )
        self.bar_x = x
        self.bar_y = y
        self.bar_width = width
        self.bar_height = height
        self.on_value_changed = on_value_changed
        self.down = False
        self._value = 0.0

    @property
    def value(self) -> float:
        return self._value

    def set_value(self, value: float) -> None:
        """Clamp and store a value, move the handle, and report the change."""
        value = min(max(value, self.minimum), self.maximum)
        self._value = value
        ratio = (value - self.minimum) / (self.maximum - self.minimum)
        self.x = self.bar_x + ratio * self.bar_width
        if self.on_value_changed:
            self.on_value_changed(value)

    def on_mouse_down(self, button: int, mx: float, my: float) -> None:
        """Start dragging on a primary press over the handle."""
        if button & 1 and self.mouse_in:
            self.down = True

    def on_mouse_up(self, button: int, mx: float, my: float) -> None:
        """Stop dragging."""
        self.down = False

    def on_mouse_move(self, mx: float, my: float) -> None:
        """Update hover state and, while dragging, follow the pointer along the bar."""
        super().on_mouse_move(mx, my)
        if self.down:
            clamped = min(max(float(mx), self.bar_x), self.bar_x + self.bar_width)
            self.set_value((clamped - self.bar_x) / self.bar_width)


@dataclass
class AudioSettings:
    """Music and sound-effect volumes set from the settings screen."""

    bgm_volume: float = 1.0
    sfx_volume: float = 1.0
    on_bgm_volume_change: Optional[Callable[[float], None]] = field(default=None, repr=False)

    def set_bgm_volume(self, value: float) -> None:
        """Apply a new music volume to the playing track and remember it."""
        if self.on_bgm_volume_change:
            self.on_bgm_volume_change(value)
        self.bgm_volume = value

    def set_sfx_volume(self, value: float) -> None:
        """Remember a new sound-effect volume."""
        self.sfx_volume = value