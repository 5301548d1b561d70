"""
core/adjust.py

Brightness/contrast remapping for on-screen display only. Nothing here is
ever fed back into the transform/mix/reconstruct pipeline.

  factor = 259 * (contrast + 255) / (255 * (259 - contrast))
  p'     = clamp(factor * (p - 128) + 128 + brightness, 0, 255)
"""

from typing import Tuple
import numpy as np

ADJUST_MIN = -100.0
ADJUST_MAX = 100.0
DRAG_SENSITIVITY = 0.5


def _check_range(name: str, value: float) -> float:
    value = float(value)
    if not (ADJUST_MIN <= value <= ADJUST_MAX):
        raise ValueError(f"{name} must be within [{ADJUST_MIN:g}, {ADJUST_MAX:g}], got {value}.")
    return value


def contrast_factor(contrast: float) -> float:
    contrast = _check_range("contrast", contrast)
    return (259.0 * (contrast + 255.0)) / (255.0 * (259.0 - contrast))


def adjust_brightness_contrast(raster: np.ndarray, brightness: float, contrast: float) -> np.ndarray:
    """
    Return an adjusted uint8 copy of `raster`; the input is left untouched.
    brightness and contrast must both lie in [-100, 100].
    """
    brightness = _check_range("brightness", brightness)
    factor = contrast_factor(contrast)
    px = np.asarray(raster, dtype=np.float64)
    out = factor * (px - 128.0) + 128.0 + brightness
    return np.rint(np.clip(out, 0.0, 255.0)).astype(np.uint8)


class BrightnessContrast:
    """
    Display adjustment state for one viewport.
    Values are clamped to [-100, 100]. apply() always works from the raster it
    is given, so repeated adjustments never compound.
    """

    def __init__(self, brightness: float = 0.0, contrast: float = 0.0):
        self.brightness = 0.0
        self.contrast = 0.0
        self.set(brightness, contrast)

    @staticmethod
    def _clamp(value: float) -> float:
        return max(ADJUST_MIN, min(ADJUST_MAX, float(value)))

    def set(self, brightness: float, contrast: float) -> Tuple[float, float]:
        self.brightness = self._clamp(brightness)
        self.contrast = self._clamp(contrast)
        return self.brightness, self.contrast

    def nudge(self, d_brightness: float = 0.0, d_contrast: float = 0.0) -> Tuple[float, float]:
        return self.set(self.brightness + d_brightness, self.contrast + d_contrast)

    def drag(self, dx: float, dy: float) -> Tuple[float, float]:
        """Pointer drag: right raises contrast, up (negative dy) raises brightness."""
        return self.nudge(d_brightness=-dy * DRAG_SENSITIVITY, d_contrast=dx * DRAG_SENSITIVITY)

    def reset(self):
        self.brightness = 0.0
        self.contrast = 0.0

    @property
    def is_identity(self) -> bool:
        return self.brightness == 0.0 and self.contrast == 0.0

    def apply(self, raster: np.ndarray) -> np.ndarray:
        if self.is_identity:
            return np.asarray(raster, dtype=np.uint8).copy()
        return adjust_brightness_contrast(raster, self.brightness, self.contrast)
