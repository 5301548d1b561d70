"""
Core package init for the Fourier image mixer.
Exposes public modules for import in tests, scripts and the GUI.
"""
__all__ = [
    "errors",
    "fft_engine",
    "spectrum",
    "filters",
    "mixer",
    "reconstruct",
    "adjust",
    "preprocessing",
    "pipeline",
]
