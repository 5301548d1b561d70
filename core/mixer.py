"""
core/mixer.py

Combine several DC-centered spectra into one.

Two modes:
- MAGNITUDE_PHASE: magnitudes are a weighted linear sum; phases are combined
  as a weighted circular mean, atan2(sum w*sin(phase), sum w*cos(phase)), so
  angles near +pi and -pi average to ~pi rather than 0.
- REAL_IMAGINARY: plain weighted sum of the complex values (real and
  imaginary parts independently).

Weights are non-negative, positional to the buffer list and normalized to
sum to 1 (uniform when they sum to 0). An optional region mask zeroes the
excluded cells of the result. Mixing always runs on the full-precision
complex data, never on 8-bit display components.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from .errors import DimensionMismatchError, NoSourcesError
from .filters import RegionSpec, active_region_mask
from .spectrum import SpectrumBuffer

logger = logging.getLogger(__name__)


class MixMode(str, Enum):
    MAGNITUDE_PHASE = "magnitude-phase"
    REAL_IMAGINARY = "real-imaginary"


@dataclass(frozen=True)
class MixSpec:
    mode: Union[MixMode, str] = MixMode.MAGNITUDE_PHASE
    weights: Tuple[float, ...] = field(default_factory=tuple)

    def __post_init__(self):
        try:
            mode = MixMode(str(getattr(self.mode, "value", self.mode)).lower())
        except ValueError:
            raise ValueError(
                f"Unknown mix mode '{self.mode}'. Choose 'magnitude-phase' or 'real-imaginary'."
            ) from None
        object.__setattr__(self, "mode", mode)
        object.__setattr__(self, "weights", tuple(float(w) for w in self.weights))


def normalize_weights(weights: Sequence[float], n_sources: Optional[int] = None) -> np.ndarray:
    """
    Normalize weights to sum to 1.

    If n_sources is given the weights are length-matched to it: missing
    weights count as 0 and extra weights are ignored. An all-zero vector
    becomes uniform 1/N. Negative or non-finite weights raise ValueError.
    """
    w = np.asarray(list(weights), dtype=np.float64)
    if n_sources is not None:
        if w.size != n_sources:
            logger.warning("Got %d weights for %d sources; length-matching.", w.size, n_sources)
        matched = np.zeros(n_sources, dtype=np.float64)
        k = min(n_sources, w.size)
        matched[:k] = w[:k]
        w = matched
    if w.size == 0:
        raise NoSourcesError("Cannot normalize an empty weight vector.")
    if not np.all(np.isfinite(w)):
        raise ValueError("Weights must be finite.")
    if np.any(w < 0):
        raise ValueError("Weights must be non-negative.")
    total = float(w.sum())
    if total == 0.0:
        return np.full(w.size, 1.0 / w.size)
    return w / total


def _select_sources(
    buffers: Sequence[Optional[SpectrumBuffer]], weights: Sequence[float]
) -> Tuple[List[SpectrumBuffer], List[float]]:
    """Drop empty (None) slots along with the weight in the same position."""
    weights = list(weights)
    kept, kept_w = [], []
    for i, buf in enumerate(buffers):
        if buf is None:
            continue
        kept.append(buf)
        kept_w.append(weights[i] if i < len(weights) else 0.0)
    if len(weights) != len(buffers):
        logger.warning("Got %d weights for %d slots; length-matching.", len(weights), len(buffers))
    return kept, kept_w


def _check_dimensions(buffers: Sequence[SpectrumBuffer]) -> Tuple[int, int]:
    width, height = buffers[0].width, buffers[0].height
    for i, buf in enumerate(buffers[1:], start=1):
        if buf.width != width or buf.height != height:
            raise DimensionMismatchError(
                f"All sources must share the same size: source 0 is {width}x{height}, "
                f"source {i} is {buf.width}x{buf.height}."
            )
    return width, height


def mix_magnitude_phase(stack: np.ndarray, weights: np.ndarray) -> np.ndarray:
    """Weighted magnitude sum with a circular mean of phase. stack: (N, H, W) complex."""
    active = weights != 0
    stack = stack[active]
    w = weights[active].reshape(-1, 1, 1)
    mag = np.abs(stack)
    phase = np.angle(stack)
    mixed_mag = np.sum(mag * w, axis=0)
    sum_cos = np.sum(np.cos(phase) * w, axis=0)
    sum_sin = np.sum(np.sin(phase) * w, axis=0)
    mixed_phase = np.arctan2(sum_sin, sum_cos)
    return mixed_mag * np.cos(mixed_phase) + 1j * (mixed_mag * np.sin(mixed_phase))


def mix_real_imaginary(stack: np.ndarray, weights: np.ndarray) -> np.ndarray:
    """Weighted sum of real and imaginary parts. stack: (N, H, W) complex."""
    w = weights.reshape(-1, 1, 1)
    return np.sum(stack * w, axis=0)


def mix(
    buffers: Sequence[Optional[SpectrumBuffer]],
    spec: MixSpec,
    region: Optional[RegionSpec] = None,
) -> SpectrumBuffer:
    """
    Mix spectra into one shifted, padded SpectrumBuffer.

    buffers may contain None for empty slots; weights stay positional.
    Raises NoSourcesError when nothing is left to mix and
    DimensionMismatchError when sources differ in size.
    """
    sources, raw_weights = _select_sources(buffers, spec.weights)
    if not sources:
        raise NoSourcesError("No images with FFT data to mix.")
    width, height = _check_dimensions(sources)
    weights = normalize_weights(raw_weights, n_sources=len(sources))

    stack = np.stack([b.data for b in sources], axis=0)
    logger.info(
        "Mixing %d source(s) in %s mode, weights=%s", len(sources), spec.mode.value,
        np.round(weights, 4).tolist(),
    )
    if spec.mode is MixMode.MAGNITUDE_PHASE:
        mixed = mix_magnitude_phase(stack, weights)
    else:
        mixed = mix_real_imaginary(stack, weights)

    mask = active_region_mask(mixed.shape, region)
    if mask is not None:
        mixed = np.where(mask, mixed, 0.0 + 0.0j)
        logger.debug(
            "Region mask %s %.0f%% keeps %d/%d cells",
            region.kind.value, region.size_percent, int(mask.sum()), mask.size,
        )

    return SpectrumBuffer(data=mixed, width=width, height=height)
