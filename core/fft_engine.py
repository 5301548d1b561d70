'''
FFT engine helpers.

Functions:
- next_power_of_two: smallest power of two >= n (minimum 2)
- pad_to_power_of_two: zero-pad a 2D array, top-left aligned
- crop_top_left: undo the padding
- compute_fft: separable 2D FFT (rows, then columns)
- compute_ifft: separable inverse 2D FFT (columns, then rows), returns real part
- fft_shift / ifft_shift: move DC to the center and back
- magnitude_spectrum: log-scaled magnitude for visualization
'''

import numpy as np
import warnings
from typing import Tuple


def next_power_of_two(n: int) -> int:
    """Smallest power of two >= n. Values <= 1 map to 2."""
    n = int(n)
    if n <= 1:
        return 2
    return 1 << (n - 1).bit_length()


def padded_shape(height: int, width: int) -> Tuple[int, int]:
    """(fft_height, fft_width) for an image of the given size."""
    return next_power_of_two(height), next_power_of_two(width)


def pad_to_power_of_two(image: np.ndarray) -> np.ndarray:
    """
    Zero-pad a 2D array up to power-of-two dimensions.
    The source occupies the top-left corner; new cells are 0.
    """
    if image.ndim != 2:
        raise ValueError("pad_to_power_of_two expects a 2D array.")
    H, W = image.shape
    fft_h, fft_w = padded_shape(H, W)
    padded = np.zeros((fft_h, fft_w), dtype=np.float64)
    padded[:H, :W] = image
    return padded


def crop_top_left(data: np.ndarray, height: int, width: int) -> np.ndarray:
    """Take the top-left height x width block (same alignment as the padding)."""
    return data[:height, :width]


def compute_fft(image: np.ndarray) -> np.ndarray:
    """
    Separable 2D FFT of a single-channel array: 1D FFT of every row, then of
    every column of the row-transformed result.
    Raises ValueError for non-2D inputs.
    """
    if image.ndim != 2:
        raise ValueError("compute_fft expects a 2D grayscale array.")
    rows = np.fft.fft(np.asarray(image, dtype=np.float64), axis=1)
    return np.fft.fft(rows, axis=0)


def compute_ifft(F: np.ndarray, imag_tol: float = 1e-6, suppress_warning: bool = True) -> np.ndarray:
    """
    Separable inverse 2D FFT (columns first, then rows); returns the real part.
    The imaginary part is discarded, not folded into a magnitude.
    Warns if the imaginary part is larger than imag_tol relative to the real range.
    """
    if F.ndim != 2:
        raise ValueError("compute_ifft expects a 2D frequency-domain array.")
    cols = np.fft.ifft(F, axis=0)
    img_back = np.fft.ifft(cols, axis=1)
    if not suppress_warning:
        imag_max = float(np.max(np.abs(np.imag(img_back))))
        scale = max(float(np.max(np.abs(np.real(img_back)))), 1.0)
        if imag_max > imag_tol * scale:
            warnings.warn(
                f"Inverse FFT has non-negligible imaginary component (max abs = {imag_max}). "
                "Returning real part but consider checking your frequency-domain input.",
                RuntimeWarning
            )
    return np.real(img_back)


def fft_shift(F: np.ndarray) -> np.ndarray:
    """
    Move the value at (x, y) to ((x + W//2) % W, (y + H//2) % H), centering DC.
    """
    H, W = F.shape
    return np.roll(F, shift=(H // 2, W // 2), axis=(0, 1))


def ifft_shift(Fs: np.ndarray) -> np.ndarray:
    """Inverse of fft_shift (center -> origin)."""
    H, W = Fs.shape
    return np.roll(Fs, shift=(-(H // 2), -(W // 2)), axis=(0, 1))


def magnitude_spectrum(F: np.ndarray, log: bool = True) -> np.ndarray:
    """
    Return magnitude spectrum for visualization.
    If log is True, returns log(1 + |F|).
    """
    mag = np.abs(F)
    if log:
        return np.log1p(mag)
    return mag
