"""
core/filters.py

Frequency-region masks over a DC-centered (fftshifted) spectrum.

A region is a centered rectangle whose half-extents are
  half_w = floor(fft_width  * size_percent / 100 / 2)
  half_h = floor(fft_height * size_percent / 100 / 2)
around the DC cell (fft_height // 2, fft_width // 2). An INNER mask keeps the
rectangle (low frequencies), an OUTER mask keeps its complement.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

import numpy as np


class RegionKind(str, Enum):
    INNER = "inner"
    OUTER = "outer"


@dataclass(frozen=True)
class RegionSpec:
    enabled: bool = False
    kind: Union[RegionKind, str] = RegionKind.INNER
    size_percent: float = 30.0

    def __post_init__(self):
        try:
            kind = RegionKind(str(getattr(self.kind, "value", self.kind)).lower())
        except ValueError:
            raise ValueError(f"Unknown region kind '{self.kind}'. Choose 'inner' or 'outer'.") from None
        object.__setattr__(self, "kind", kind)
        size = float(self.size_percent)
        if not (0.0 <= size <= 100.0):
            raise ValueError(f"size_percent must be within [0, 100], got {size}.")
        object.__setattr__(self, "size_percent", size)


# --- Center & extents ---
def region_center(shape: Tuple[int, int]) -> Tuple[int, int]:
    """
    (row, col) of the DC cell after fftshift: (M // 2, N // 2).
    """
    M, N = shape
    return (M // 2, N // 2)


def region_half_extents(shape: Tuple[int, int], size_percent: float) -> Tuple[int, int]:
    """(half_h, half_w) of the centered rectangle for a given size percentage."""
    M, N = shape
    frac = float(size_percent) / 100.0
    half_h = int(math.floor(M * frac / 2.0))
    half_w = int(math.floor(N * frac / 2.0))
    return half_h, half_w


def _inside_rect(shape: Tuple[int, int], size_percent: float) -> np.ndarray:
    M, N = shape
    cy, cx = region_center(shape)
    half_h, half_w = region_half_extents(shape, size_percent)
    dy = np.abs(np.arange(M).reshape(M, 1) - cy)
    dx = np.abs(np.arange(N).reshape(1, N) - cx)
    return (dx <= half_w) & (dy <= half_h)


# --- Mask builder ---
def build_region_mask(shape: Tuple[int, int], spec: RegionSpec) -> np.ndarray:
    """
    Boolean inclusion mask of shape (fft_height, fft_width).
    size_percent == 0 describes an empty rectangle: INNER keeps nothing and
    OUTER keeps everything. The `enabled` flag is not consulted here.
    """
    M, N = shape
    if M <= 0 or N <= 0:
        raise ValueError("Mask shape must be positive.")
    if spec.size_percent == 0.0:
        inside = np.zeros(shape, dtype=bool)
    else:
        inside = _inside_rect(shape, spec.size_percent)
    if spec.kind is RegionKind.INNER:
        return inside
    return ~inside


def active_region_mask(shape: Tuple[int, int], region: Optional[RegionSpec]) -> Optional[np.ndarray]:
    """Mask for an enabled region, or None when no masking applies."""
    if region is None or not region.enabled:
        return None
    return build_region_mask(shape, region)
