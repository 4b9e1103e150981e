"""Scale factors derived from pixel dimensions.

Both curves use a sub-linear exponent so text stays legible on very small and
very large screens instead of tracking the pixel size one-to-one.  The 0.35
floor stops extreme aspect ratios from shrinking everything to nothing.
"""

from __future__ import annotations

from typing import Callable

from safety_dashboard.core.proportions import clamp

BASE_VIEWPORT = (1920, 1080)
ROOT_BASE_UNIT = 16.0
ROOT_MIN = 14.0
ROOT_MAX = 24.0
ROOT_EXPONENT = 0.45

PANEL_REFERENCE = (540, 320)
PANEL_MIN = 0.68
PANEL_MAX = 1.18
PANEL_EXPONENT = 0.42

SCALE_FLOOR = 0.35
HYSTERESIS = 0.02

UI_SCALE_MIN = 0.8
UI_SCALE_MAX = 1.4
UI_SCALE_STEP = 0.05


def root_scale(width: float, height: float) -> float:
    """Base font size in px for the whole screen."""
    scale = min(width / BASE_VIEWPORT[0], height / BASE_VIEWPORT[1])
    return clamp(ROOT_BASE_UNIT * max(scale, SCALE_FLOOR) ** ROOT_EXPONENT, ROOT_MIN, ROOT_MAX)


def panel_scale(width: float, height: float) -> float:
    """Typography multiplier for a single slot; 1.0 at the reference size."""
    ratio = min(width / PANEL_REFERENCE[0], height / PANEL_REFERENCE[1])
    return clamp(max(ratio, SCALE_FLOOR) ** PANEL_EXPONENT, PANEL_MIN, PANEL_MAX)


def scaled_px(
    base: float, scale: float, minimum: float | None = None, maximum: float | None = None
) -> float:
    low = base * 0.8 if minimum is None else minimum
    high = base * 1.35 if maximum is None else maximum
    return clamp(base * scale, low, high)


def clamp_ui_scale(value: float) -> float:
    return clamp(value, UI_SCALE_MIN, UI_SCALE_MAX)


def step_ui_scale(current: float, steps: int) -> float:
    return clamp_ui_scale(round(current + steps * UI_SCALE_STEP, 2))


class ScaleTracker:
    """Remembers the last applied factor per container.

    A freshly derived factor only replaces the remembered one when it moved
    by more than *threshold*; smaller wobbles keep the previous value.
    """

    def __init__(
        self,
        derive: Callable[[float, float], float],
        initial: float,
        threshold: float = HYSTERESIS,
    ) -> None:
        self._derive = derive
        self._initial = initial
        self._threshold = threshold
        self._factors: dict[str, float] = {}

    def get(self, container_id: str) -> float:
        return self._factors.get(container_id, self._initial)

    def update(self, container_id: str, width: float, height: float) -> float:
        previous = self.get(container_id)
        candidate = self._derive(width, height)
        if abs(candidate - previous) > self._threshold:
            self._factors[container_id] = candidate
            return candidate
        return previous
