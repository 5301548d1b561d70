# visuals/__init__.py
"""
Visual helpers for the Fourier image mixer.
Provides plotting and export utilities used by GUI/CLI.
"""
from .plots import (
    plot_component,
    plot_region_mask,
    plot_region_overlay,
    compare_and_save,
)
__all__ = [
    "plot_component",
    "plot_region_mask",
    "plot_region_overlay",
    "compare_and_save",
]
