"""
core/pipeline.py

End-to-end mixing of grayscale rasters:
  1) forward transform every raster (padded, fftshifted)
  2) build the optional region mask
  3) mix spectra under the given mode and weights
  4) inverse transform and normalize to uint8

API:
- transform_all(rasters) -> list of SpectrumBuffer (None slots preserved)
- mix_spectra(spectra, mix_spec, region=None) -> uint8 raster
- mix_rasters(rasters, mix_spec, region=None, return_intermediates=False)

In an interactive front end the spectra are computed once per loaded image
and only mix_spectra() re-runs when weights, mode or region change.

If return_intermediates=True, mix_rasters returns (output, intermediates)
where intermediates has keys: 'spectra', 'weights', 'mask', 'mixed', 'real'.
"""

import logging
from typing import Any, List, Optional, Sequence

import numpy as np

from .filters import RegionSpec, active_region_mask
from .mixer import MixSpec, mix, normalize_weights
from .reconstruct import normalize_to_uint8, reconstruct_real
from .spectrum import SpectrumBuffer, transform

logger = logging.getLogger(__name__)


def transform_all(rasters: Sequence[Optional[np.ndarray]]) -> List[Optional[SpectrumBuffer]]:
    """Forward transform each raster; empty (None) slots stay None."""
    return [None if r is None else transform(r) for r in rasters]


def _mix_and_reconstruct(spectra, mix_spec, region):
    mixed = mix(spectra, mix_spec, region)
    real = reconstruct_real(mixed)
    return mixed, real, normalize_to_uint8(real)


def mix_spectra(
    spectra: Sequence[Optional[SpectrumBuffer]],
    mix_spec: MixSpec,
    region: Optional[RegionSpec] = None,
) -> np.ndarray:
    """Mix already-transformed spectra and reconstruct the output raster."""
    _mixed, _real, out = _mix_and_reconstruct(spectra, mix_spec, region)
    return out


def mix_rasters(
    rasters: Sequence[Optional[np.ndarray]],
    mix_spec: MixSpec,
    region: Optional[RegionSpec] = None,
    *,
    return_intermediates: bool = False,
) -> Any:
    """
    Mix grayscale rasters (all the same size) in the frequency domain.
    Returns the uint8 output, or (output, intermediates) on request.
    """
    spectra = transform_all(rasters)
    mixed, real, out = _mix_and_reconstruct(spectra, mix_spec, region)

    if return_intermediates:
        present = [s for s in spectra if s is not None]
        weights_in = [w for s, w in zip(spectra, mix_spec.weights) if s is not None]
        intermediates = {
            "spectra": spectra,
            "weights": normalize_weights(weights_in, n_sources=len(present)),
            "mask": active_region_mask(mixed.shape, region),
            "mixed": mixed,
            "real": real,
        }
        return out, intermediates
    return out
