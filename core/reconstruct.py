"""
core/reconstruct.py

Inverse path: centered spectrum -> 8-bit grayscale raster.

  1) ifftshift (undo the centering)
  2) separable inverse FFT (columns, then rows)
  3) keep the real part of the top-left width x height block
  4) min-max rescale to 0..255 with rounding and clamping

A spectrum whose output has no finite range (e.g. all-zero after masking)
becomes a flat mid-gray image. That is a valid result, so it is logged
rather than raised.
"""

import logging
import numpy as np

from .fft_engine import compute_ifft, crop_top_left, ifft_shift
from .spectrum import MID_GRAY, SpectrumBuffer

logger = logging.getLogger(__name__)


def normalize_to_uint8(values: np.ndarray) -> np.ndarray:
    """
    Linear rescale of `values` to 0..255 (rounded, clamped).
    Zero or non-finite range -> every pixel 128.
    """
    values = np.asarray(values, dtype=np.float64)
    if values.size == 0:
        return np.zeros(values.shape, dtype=np.uint8)
    # single linear pass for min and max
    vmin = float(values.min())
    vmax = float(values.max())
    rng = vmax - vmin
    if rng == 0.0 or not np.isfinite(rng):
        logger.warning(
            "Degenerate output range (min=%s, max=%s); filling with gray %d.", vmin, vmax, MID_GRAY
        )
        return np.full(values.shape, MID_GRAY, dtype=np.uint8)
    scaled = (values - vmin) / rng * 255.0
    return np.clip(np.rint(scaled), 0, 255).astype(np.uint8)


def reconstruct_real(spectrum: SpectrumBuffer, suppress_warning: bool = True) -> np.ndarray:
    """Spatial-domain float image (real part, cropped to original size), before normalization."""
    G = ifft_shift(spectrum.data)
    spatial = compute_ifft(G, suppress_warning=suppress_warning)
    return crop_top_left(spatial, spectrum.height, spectrum.width)


def reconstruct(spectrum: SpectrumBuffer, suppress_warning: bool = True) -> np.ndarray:
    """
    Reconstruct a uint8 raster of shape (height, width) from a mixed spectrum.
    """
    real = reconstruct_real(spectrum, suppress_warning=suppress_warning)
    out = normalize_to_uint8(real)
    logger.debug(
        "Reconstructed %dx%d raster (min=%d, max=%d, mean=%.2f)",
        spectrum.width, spectrum.height, int(out.min()), int(out.max()), float(out.mean()),
    )
    return out
