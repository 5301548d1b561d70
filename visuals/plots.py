"""
visuals/plots.py

Saving and plotting utilities for spectrum components, region masks and
mix comparisons.

APIs:
- plot_component(buffer, name, out_path=None, brightness=0, contrast=0)
- plot_region_mask(mask, out_path=None)
- plot_region_overlay(display, region, out_path=None, title=None)
- compare_and_save(inputs, output, out_path=None, titles=None)

Notes:
- This module uses matplotlib. It does not modify core behavior.
- If out_path is None, functions return the array or matplotlib Figure (caller can save or display).
"""

from typing import Optional, Sequence
import os
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle
from PIL import Image

from core.filters import RegionKind, RegionSpec
from core.spectrum import SpectrumBuffer, component_display

INNER_COLOR = "#00ff00"
OUTER_COLOR = "#ff0000"


# Helper to ensure outdir exists
def _ensure_outdir(out_path: Optional[str]):
    if out_path is None:
        return None
    d = os.path.dirname(out_path)
    if d:
        os.makedirs(d, exist_ok=True)
    return out_path


def _save_raw_array_image(out_path: Optional[str], arr: np.ndarray):
    """
    Save a numeric 2D array as a raw grayscale PNG. No Matplotlib involved.
    uint8 data is written as-is; anything else is min-max mapped to 0..255.
    """
    if out_path is None:
        return None
    _ensure_outdir(out_path)

    a = np.asarray(arr)
    if a.dtype != np.uint8:
        a = a.astype(np.float64)
        amin = float(np.nanmin(a))
        amax = float(np.nanmax(a))
        if np.isfinite(amin) and np.isfinite(amax) and amax > amin:
            a = (a - amin) / (amax - amin) * 255.0
        else:
            a = np.zeros_like(a)
        a = np.clip(a, 0, 255).astype(np.uint8)

    Image.fromarray(a).save(out_path)
    return out_path


def plot_component(
    buffer: SpectrumBuffer,
    name: str,
    out_path: Optional[str] = None,
    brightness: float = 0,
    contrast: float = 0,
):
    """
    8-bit display of one spectrum component (magnitude/phase/real/imaginary),
    cropped to the source size. Saved as raw PNG when out_path is given,
    otherwise returned as an array.
    """
    disp = component_display(buffer, name, brightness=brightness, contrast=contrast)
    if out_path is not None:
        return _save_raw_array_image(out_path, disp)
    return disp


def plot_region_mask(mask: np.ndarray, out_path: Optional[str] = None):
    """Boolean mask as black/white image (white = kept)."""
    img = np.where(np.asarray(mask, dtype=bool), 255, 0).astype(np.uint8)
    if out_path is not None:
        return _save_raw_array_image(out_path, img)
    return img


def plot_region_overlay(
    display: np.ndarray,
    region: RegionSpec,
    out_path: Optional[str] = None,
    title: Optional[str] = None,
):
    """
    Draw the region rectangle (size% of the shown image, centered) over a
    component display. Green for inner, red for outer.
    """
    h, w = display.shape[:2]
    fig, ax = plt.subplots(figsize=(5, 5 * h / max(w, 1)))
    ax.imshow(display, cmap="gray", interpolation="nearest", vmin=0, vmax=255)
    if region is not None and region.enabled:
        rect_w = w * region.size_percent / 100.0
        rect_h = h * region.size_percent / 100.0
        color = INNER_COLOR if region.kind is RegionKind.INNER else OUTER_COLOR
        ax.add_patch(Rectangle(
            ((w - rect_w) / 2.0 - 0.5, (h - rect_h) / 2.0 - 0.5), rect_w, rect_h,
            fill=False, edgecolor=color, linewidth=2,
        ))
        ax.text(2, 2, f"{region.kind.value.upper()} {region.size_percent:g}%",
                color=color, fontsize=9, va="top")
    if title:
        ax.set_title(title)
    ax.axis("off")

    if out_path:
        _ensure_outdir(out_path)
        fig.savefig(out_path, bbox_inches="tight")
        plt.close(fig)
        return out_path
    return fig


def compare_and_save(
    inputs: Sequence[np.ndarray],
    output: np.ndarray,
    out_path: Optional[str] = None,
    titles: Optional[Sequence[str]] = None,
):
    """
    Inputs (left, one column each) | Mixed output (right).
    """
    n = len(inputs) + 1
    fig, axs = plt.subplots(1, n, figsize=(4 * n, 4))
    axs = np.atleast_1d(axs)
    if titles is None:
        titles = [f"Input {i + 1}" for i in range(len(inputs))] + ["Mixed"]

    for ax, img, title in zip(axs, list(inputs) + [output], titles):
        ax.imshow(img, cmap="gray", interpolation="nearest", vmin=0, vmax=255)
        ax.set_title(title)
        ax.axis("off")

    if out_path:
        _ensure_outdir(out_path)
        fig.savefig(out_path, dpi=150, bbox_inches="tight", pad_inches=0.05)
        plt.close(fig)
        return out_path
    return fig
