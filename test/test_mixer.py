import numpy as np
import pytest
from core.errors import DimensionMismatchError, NoSourcesError
from core.filters import RegionSpec, build_region_mask
from core.mixer import MixMode, MixSpec, mix, normalize_weights
from core.spectrum import SpectrumBuffer, transform

def _const_buffer(value, size=2):
    return SpectrumBuffer(data=np.full((size, size), value, dtype=complex), width=size, height=size)

def test_normalize_weights_sums_to_one():
    rng = np.random.default_rng(0)
    for _ in range(20):
        w = rng.random(4) * 10
        assert np.isclose(normalize_weights(w).sum(), 1.0)

def test_normalize_weights_zero_is_uniform():
    assert np.allclose(normalize_weights([0, 0, 0, 0]), [0.25] * 4)

def test_normalize_weights_length_matching():
    assert np.allclose(normalize_weights([2.0], n_sources=3), [1.0, 0.0, 0.0])
    assert np.allclose(normalize_weights([1, 1, 1, 1], n_sources=2), [0.5, 0.5])
    assert np.allclose(normalize_weights([], n_sources=2), [0.5, 0.5])

def test_normalize_weights_validation():
    with pytest.raises(ValueError):
        normalize_weights([1.0, -0.5])
    with pytest.raises(ValueError):
        normalize_weights([1.0, np.nan])
    with pytest.raises(NoSourcesError):
        normalize_weights([])

def test_mix_spec_modes():
    assert MixSpec("Magnitude-Phase", [1]).mode is MixMode.MAGNITUDE_PHASE
    assert MixSpec(MixMode.REAL_IMAGINARY, [1]).mode is MixMode.REAL_IMAGINARY
    with pytest.raises(ValueError):
        MixSpec("polar", [1])

def test_mix_no_sources():
    with pytest.raises(NoSourcesError):
        mix([], MixSpec("magnitude-phase", []))
    with pytest.raises(NoSourcesError):
        mix([None, None], MixSpec("magnitude-phase", [1, 1]))

def test_mix_dimension_mismatch():
    # both pad to 8x8 but differ in original size
    a = transform(np.random.rand(5, 5))
    b = transform(np.random.rand(6, 6))
    with pytest.raises(DimensionMismatchError):
        mix([a, b], MixSpec("real-imaginary", [1, 1]))

def test_phase_circular_mean_across_wraparound():
    a = _const_buffer(np.exp(1j * np.deg2rad(179.0)))
    b = _const_buffer(np.exp(-1j * np.deg2rad(179.0)))
    out = mix([a, b], MixSpec("magnitude-phase", [0.5, 0.5]))
    phase = np.angle(out.data)
    assert np.allclose(np.abs(np.abs(phase) - np.pi), 0, atol=1e-9)
    assert np.allclose(np.abs(out.data), 1.0)

def test_magnitude_is_weighted_sum():
    a = transform(np.random.rand(8, 8))
    b = transform(np.random.rand(8, 8))
    out = mix([a, b], MixSpec("magnitude-phase", [3, 1]))
    assert np.allclose(np.abs(out.data), 0.75 * np.abs(a.data) + 0.25 * np.abs(b.data))

def test_real_imaginary_is_weighted_sum():
    a = transform(np.random.rand(6, 10))
    b = transform(np.random.rand(6, 10))
    out = mix([a, b], MixSpec("real-imaginary", [1, 3]))
    assert np.allclose(out.data, 0.25 * a.data + 0.75 * b.data)
    assert (out.width, out.height) == (10, 6)

def test_single_source_passthrough_both_modes():
    a = transform(np.random.rand(8, 8))
    for mode in ("magnitude-phase", "real-imaginary"):
        out = mix([a], MixSpec(mode, [1.0]))
        assert np.allclose(out.data, a.data)

def test_zero_weight_and_empty_slots():
    a = transform(np.random.rand(8, 8))
    b = transform(np.random.rand(8, 8))
    out = mix([a, None, b], MixSpec("magnitude-phase", [1.0, 5.0, 0.0]))
    assert np.allclose(out.data, a.data)

def test_region_mask_zeroes_excluded_cells():
    a = transform(np.random.rand(16, 16))
    b = transform(np.random.rand(16, 16))
    spec = MixSpec("real-imaginary", [0.5, 0.5])
    region = RegionSpec(True, "inner", 25)
    full = mix([a, b], spec)
    masked = mix([a, b], spec, region)
    keep = build_region_mask(full.shape, region)
    assert np.all(masked.data[~keep] == 0)
    assert np.allclose(masked.data[keep], full.data[keep])

def test_disabled_region_is_ignored():
    a = transform(np.random.rand(8, 8))
    spec = MixSpec("magnitude-phase", [1.0])
    assert np.array_equal(mix([a], spec, RegionSpec(False, "inner", 0)).data, mix([a], spec).data)

def test_mix_leaves_sources_unchanged():
    a = transform(np.random.rand(8, 8))
    before = a.data.copy()
    mix([a, a], MixSpec("magnitude-phase", [0.2, 0.8]), RegionSpec(True, "outer", 30))
    assert np.array_equal(a.data, before)
