"""
core/spectrum.py

Forward transform of a grayscale raster into a centered, padded spectrum,
plus the display components derived from it.

Pipeline (transform):
  1) choose fft size = next power of two >= raster size (minimum 2)
  2) zero-pad the raster, top-left aligned
  3) separable forward FFT (rows, then columns)
  4) fftshift (center DC)
  5) keep the shifted complex array plus the original width/height

Display components (magnitude, phase, real, imaginary) are computed over the
full padded spectrum and cropped back to the top-left width x height block.
Magnitude is shown as log(1 + |F|). Everything is min-max scaled to 0..255,
with a flat mid-gray result when the data has no range.
"""

import logging
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .errors import InvalidInputError
from .fft_engine import (
    compute_fft,
    crop_top_left,
    fft_shift,
    magnitude_spectrum,
    pad_to_power_of_two,
    padded_shape,
)
from .adjust import adjust_brightness_contrast

logger = logging.getLogger(__name__)

COMPONENTS = ("magnitude", "phase", "real", "imaginary")
MID_GRAY = 128


@dataclass(frozen=True, eq=False)
class SpectrumBuffer:
    """
    Shifted (DC-centered) complex spectrum of one padded image.

    data   : complex128 array of shape (fft_height, fft_width), read-only
    width  : original (pre-padding) image width
    height : original (pre-padding) image height
    """

    data: np.ndarray
    width: int
    height: int

    def __post_init__(self):
        if self.data.ndim != 2:
            raise ValueError("SpectrumBuffer data must be 2D.")
        expected = padded_shape(self.height, self.width)
        if self.data.shape != expected:
            raise ValueError(
                f"SpectrumBuffer shape {self.data.shape} does not match padded size {expected} "
                f"for a {self.width}x{self.height} image."
            )
        arr = np.array(self.data, dtype=np.complex128, copy=True)
        arr.setflags(write=False)
        object.__setattr__(self, "data", arr)

    @property
    def fft_width(self) -> int:
        return self.data.shape[1]

    @property
    def fft_height(self) -> int:
        return self.data.shape[0]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.data.shape

    def interleaved(self) -> np.ndarray:
        """Flat [re0, im0, re1, im1, ...] view in row-major order (length fft_w*fft_h*2)."""
        out = np.empty(self.data.size * 2, dtype=np.float64)
        flat = self.data.ravel()
        out[0::2] = flat.real
        out[1::2] = flat.imag
        return out

    @classmethod
    def from_interleaved(cls, values: np.ndarray, width: int, height: int) -> "SpectrumBuffer":
        """Rebuild a buffer from the flat interleaved layout."""
        fft_h, fft_w = padded_shape(height, width)
        values = np.asarray(values, dtype=np.float64)
        if values.size != fft_w * fft_h * 2:
            raise ValueError(
                f"Interleaved length {values.size} does not match {fft_w}x{fft_h}x2."
            )
        data = (values[0::2] + 1j * values[1::2]).reshape(fft_h, fft_w)
        return cls(data=data, width=int(width), height=int(height))


def transform(raster: np.ndarray) -> SpectrumBuffer:
    """
    Forward transform of a grayscale raster (H x W) into a SpectrumBuffer.
    Raises InvalidInputError for empty rasters and ValueError for non-2D input.
    The raster itself is never modified.
    """
    raster = np.asarray(raster)
    if raster.ndim != 2:
        raise ValueError("transform expects a 2D grayscale array.")
    H, W = raster.shape
    if H == 0 or W == 0:
        raise InvalidInputError(f"Cannot transform an empty raster ({W}x{H}).")

    padded = pad_to_power_of_two(raster.astype(np.float64))
    F = compute_fft(padded)
    F_shifted = fft_shift(F)
    logger.debug("Forward FFT %dx%d -> padded %dx%d", W, H, padded.shape[1], padded.shape[0])
    return SpectrumBuffer(data=F_shifted, width=W, height=H)


def normalize_for_display(data: np.ndarray) -> np.ndarray:
    """
    Min-max scale to uint8 with floor rounding.
    Data without a (finite) range becomes flat mid-gray.
    """
    data = np.asarray(data, dtype=np.float64)
    if data.size == 0:
        return np.zeros(data.shape, dtype=np.uint8)
    vmin = float(np.min(data))
    vmax = float(np.max(data))
    rng = vmax - vmin
    if rng == 0.0 or not np.isfinite(rng):
        return np.full(data.shape, MID_GRAY, dtype=np.uint8)
    scaled = np.floor((data - vmin) / rng * 255.0)
    return np.clip(scaled, 0, 255).astype(np.uint8)


def component(buffer: SpectrumBuffer, name: str) -> np.ndarray:
    """Raw (float) component over the full padded spectrum."""
    name = name.lower()
    F = buffer.data
    if name == "magnitude":
        return np.abs(F)
    if name == "phase":
        return np.angle(F)
    if name == "real":
        return np.real(F).copy()
    if name == "imaginary":
        return np.imag(F).copy()
    raise ValueError(f"Unknown component '{name}'. Choose one of {', '.join(COMPONENTS)}.")


def component_display(
    buffer: SpectrumBuffer,
    name: str,
    brightness: float = 0,
    contrast: float = 0,
) -> np.ndarray:
    """
    8-bit display image of one component, cropped to the original size.
    Magnitude is log-scaled before normalization. Brightness/contrast are
    applied afterwards and only when nonzero.
    """
    name = name.lower()
    if name == "magnitude":
        full = magnitude_spectrum(buffer.data, log=True)
    else:
        full = component(buffer, name)
    cropped = crop_top_left(full, buffer.height, buffer.width)
    display = normalize_for_display(cropped)
    if brightness != 0 or contrast != 0:
        return adjust_brightness_contrast(display, brightness, contrast)
    return display
