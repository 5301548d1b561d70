"""
core/preprocessing.py

Loader-side helpers that get arbitrary images into mixable rasters:
- rgb_to_gray: luminosity grayscale (0.299 R + 0.587 G + 0.114 B)
- resize_nearest: nearest-neighbour resample
- common_size / unify_sizes: shrink every input to the smallest loaded size

Sources passed to one mix must share a size; these helpers are how callers
get there.
"""

from typing import Sequence, Tuple, List
import numpy as np

from .errors import InvalidInputError

LUMA_WEIGHTS = (0.299, 0.587, 0.114)


def rgb_to_gray(image: np.ndarray) -> np.ndarray:
    """
    Convert HxWx3 (or HxWx4, alpha ignored) to HxW uint8.
    2D input is returned as a uint8 copy.
    """
    arr = np.asarray(image)
    if arr.ndim == 2:
        return np.clip(arr, 0, 255).astype(np.uint8)
    if arr.ndim != 3 or arr.shape[2] < 3:
        raise ValueError("rgb_to_gray expects an HxW or HxWx3 array.")
    rgb = arr[..., :3].astype(np.float64)
    gray = rgb @ np.asarray(LUMA_WEIGHTS)
    return np.clip(np.rint(gray), 0, 255).astype(np.uint8)


def resize_nearest(raster: np.ndarray, width: int, height: int) -> np.ndarray:
    """
    Nearest-neighbour resize: src = floor(dst * src_size / dst_size).
    """
    if raster.ndim != 2:
        raise ValueError("resize_nearest expects a 2D array.")
    width, height = int(width), int(height)
    if width <= 0 or height <= 0:
        raise InvalidInputError(f"Invalid target size {width}x{height}.")
    H, W = raster.shape
    if H == 0 or W == 0:
        raise InvalidInputError("Cannot resize an empty raster.")
    if (H, W) == (height, width):
        return raster.copy()
    src_x = np.floor(np.arange(width) * (W / width)).astype(np.intp)
    src_y = np.floor(np.arange(height) * (H / height)).astype(np.intp)
    return raster[src_y[:, None], src_x[None, :]]


def common_size(rasters: Sequence[np.ndarray]) -> Tuple[int, int]:
    """(width, height): minimum width and minimum height over all rasters."""
    rasters = [r for r in rasters if r is not None]
    if not rasters:
        raise InvalidInputError("No rasters to size.")
    width = min(int(r.shape[1]) for r in rasters)
    height = min(int(r.shape[0]) for r in rasters)
    return width, height


def unify_sizes(rasters: Sequence[np.ndarray]) -> List[np.ndarray]:
    """Resize every raster to common_size(rasters). None entries are passed through."""
    width, height = common_size(rasters)
    return [None if r is None else resize_nearest(r, width, height) for r in rasters]
