import numpy as np
import pytest
from core.filters import (
    RegionKind, RegionSpec, region_center, region_half_extents,
    build_region_mask, active_region_mask
)

def test_region_center_matches_fftshift_dc():
    assert region_center((8, 16)) == (4, 8)
    F = np.zeros((8, 16))
    F[0, 0] = 1
    assert np.fft.fftshift(F)[region_center((8, 16))] == 1

def test_half_extents_floor():
    assert region_half_extents((8, 16), 50) == (2, 4)
    assert region_half_extents((8, 16), 30) == (1, 2)   # 1.2 -> 1, 2.4 -> 2
    assert region_half_extents((256, 512), 100) == (128, 256)

def test_inner_mask_rectangle():
    L = build_region_mask((8, 16), RegionSpec(True, RegionKind.INNER, 50))
    assert L.shape == (8, 16)
    assert L.dtype == bool
    assert L.sum() == 5 * 9
    assert np.all(L[2:7, 4:13])

def test_small_region_keeps_only_center():
    L = build_region_mask((8, 8), RegionSpec(True, "inner", 10))
    assert L.sum() == 1
    assert L[4, 4]

def test_inner_full_size_is_all_true():
    for shape in [(2, 2), (8, 16), (64, 32)]:
        assert np.all(build_region_mask(shape, RegionSpec(True, "inner", 100)))
        assert not np.any(build_region_mask(shape, RegionSpec(True, "outer", 100)))

def test_zero_size_is_empty_rectangle():
    assert not np.any(build_region_mask((16, 16), RegionSpec(True, "inner", 0)))
    assert np.all(build_region_mask((16, 16), RegionSpec(True, "outer", 0)))

def test_inner_outer_are_complements():
    for shape in [(2, 2), (4, 8), (32, 16), (128, 64)]:
        for size in [0, 1, 10, 25, 33.3, 50, 75, 99, 100]:
            inner = build_region_mask(shape, RegionSpec(True, "inner", size))
            outer = build_region_mask(shape, RegionSpec(True, "outer", size))
            assert np.array_equal(inner, ~outer)

def test_region_spec_validation():
    with pytest.raises(ValueError):
        RegionSpec(True, "inner", 150)
    with pytest.raises(ValueError):
        RegionSpec(True, "inner", -1)
    with pytest.raises(ValueError):
        RegionSpec(True, "middle", 10)
    assert RegionSpec(True, "OUTER", 20).kind is RegionKind.OUTER

def test_active_region_mask_disabled():
    assert active_region_mask((8, 8), None) is None
    assert active_region_mask((8, 8), RegionSpec(False, "inner", 10)) is None
    assert active_region_mask((8, 8), RegionSpec(True, "inner", 100)).all()
