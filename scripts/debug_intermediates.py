"""
Print numeric diagnostics for one mix: Hermitian symmetry of the spectra,
imaginary residual after the inverse transform, and round-trip fidelity.

Run from project root:
python -m scripts.debug_intermediates
"""
import numpy as np

from io_utils.image_handler import read_grayscale
from core.fft_engine import ifft_shift
from core.filters import RegionSpec
from core.mixer import MixSpec
from core.pipeline import mix_rasters
from core.preprocessing import unify_sizes

# --- Config ---
IMG_PATHS = ["data/image_1.png", "data/image_2.png"]
MODE = "magnitude-phase"
WEIGHTS = [0.5, 0.5]
REGION = RegionSpec(enabled=True, kind="inner", size_percent=40)


def hermitian_ok(Fs):
    """Shifted spectrum of a real image: F[k] == conj(F[-k]) about the DC cell."""
    M, N = Fs.shape
    i_idx = (-np.arange(M)) % M
    j_idx = (-np.arange(N)) % N
    F = ifft_shift(Fs)
    return np.allclose(F, np.conj(F[i_idx[:, None], j_idx[None, :]]), atol=1e-6 * max(np.abs(F).max(), 1.0))


rasters = unify_sizes([read_grayscale(p) for p in IMG_PATHS])
out, inter = mix_rasters(rasters, MixSpec(MODE, WEIGHTS), REGION, return_intermediates=True)

print("\n=== DEBUG INTERMEDIATES ===")
for i, spec in enumerate(inter["spectra"]):
    print(f"source {i}: {spec.width}x{spec.height} padded to {spec.fft_width}x{spec.fft_height}, "
          f"Hermitian? {hermitian_ok(spec.data)}")
print("normalized weights:", inter["weights"])
if inter["mask"] is not None:
    print(f"mask keeps {int(inter['mask'].sum())}/{inter['mask'].size} cells")
print("mixed spectrum Hermitian?", hermitian_ok(inter["mixed"].data))

spatial = np.fft.ifft2(ifft_shift(inter["mixed"].data))
print(f"max imag after inverse FFT: {np.max(np.abs(np.imag(spatial))):.6g}")
print(f"output range: [{out.min()}, {out.max()}], mean {out.mean():.2f}")

# single source, weight 1, no region: should reproduce the input up to scaling
single = mix_rasters([rasters[0]], MixSpec(MODE, [1.0]))
corr = np.corrcoef(rasters[0].ravel().astype(float), single.ravel().astype(float))[0, 1]
print(f"round-trip Pearson r: {corr:.6f}")
print("============================\n")
