# io_utils/image_handler.py
"""
Image read/write helpers using Pillow.

Functions:
- read_image(path) -> (array, meta); array is (H x W) or (H x W x 3), alpha kept in meta
- read_grayscale(path) -> (H x W) uint8 raster via the luminosity formula
- save_image(path, array) -> writes image
- detect_is_color(array) -> bool
"""

from PIL import Image
import pillow_avif  # noqa: F401  registers the AVIF codec with Pillow
import numpy as np
from typing import Tuple

from core.preprocessing import rgb_to_gray


def read_image(path: str) -> Tuple[np.ndarray, dict]:
    """
    Read an image from `path` and return (array, meta).
    - Returns RGB arrays of shape (H,W,3) or grayscale (H,W).
    - Meta contains mode and size. If image has alpha, meta includes 'has_alpha' and meta['alpha'] as a separate array.
    """
    with Image.open(path) as img:
        mode = img.mode
        if mode in ("RGBA", "LA") or ("transparency" in img.info):
            arr = np.asarray(img.convert("RGBA"))
            meta = {"mode": "RGBA", "size": img.size, "has_alpha": True, "alpha": arr[..., 3]}
            return arr[..., :3], meta
        if mode.startswith("RGB") or mode in ("P", "CMYK", "YCbCr") or path.lower().endswith(".avif"):
            arr = np.asarray(img.convert("RGB"))
            return arr, {"mode": "RGB", "size": img.size, "has_alpha": False}
        if mode in ("I;16", "I;16B", "I;16L", "I", "F"):
            # high bit depth: keep the values, caller decides how to scale
            arr = np.asarray(img)
            return arr, {"mode": mode, "size": img.size, "has_alpha": False}
        arr = np.asarray(img.convert("L"))
        return arr, {"mode": "L", "size": img.size, "has_alpha": False}


def _stretch_to_uint8(arr: np.ndarray) -> np.ndarray:
    a = np.nan_to_num(arr.astype(np.float64))
    vmin, vmax = float(a.min()), float(a.max())
    if vmax <= vmin:
        return np.zeros(a.shape, dtype=np.uint8)
    return np.clip((a - vmin) / (vmax - vmin) * 255.0, 0, 255).astype(np.uint8)


def read_grayscale(path: str) -> np.ndarray:
    """
    Read any supported image as an (H, W) uint8 raster.
    Color goes through 0.299R + 0.587G + 0.114B; high bit depth rasters are
    min-max stretched to 0..255.
    """
    arr, meta = read_image(path)
    if arr.ndim == 3:
        return rgb_to_gray(arr)
    if arr.dtype != np.uint8:
        return _stretch_to_uint8(arr)
    return arr.copy()


def save_image(path: str, array: np.ndarray):
    """
    Save an image array to `path`. Accepts HxW (grayscale) or HxWx3 (RGB).
    Casts floats to uint8 by clipping to 0..255.
    """
    if not (array.ndim == 2 or (array.ndim == 3 and array.shape[2] == 3)):
        raise ValueError("save_image expects HxW or HxWx3 array.")

    if np.issubdtype(array.dtype, np.floating):
        arr = np.clip(array, 0.0, 255.0).astype(np.uint8)
    else:
        arr = np.clip(array, 0, 255).astype(np.uint8)

    Image.fromarray(arr).save(path)
    return path


def detect_is_color(array: np.ndarray) -> bool:
    return array.ndim == 3 and array.shape[2] == 3
