import numpy as np
import pytest
from core.fft_engine import (
    next_power_of_two, padded_shape, pad_to_power_of_two, crop_top_left,
    compute_fft, compute_ifft, fft_shift, ifft_shift, magnitude_spectrum
)

def test_next_power_of_two():
    cases = {0: 2, 1: 2, 2: 2, 3: 4, 4: 4, 5: 8, 255: 256, 256: 256, 257: 512, 300: 512}
    for n, expected in cases.items():
        assert next_power_of_two(n) == expected

def test_padded_size_is_smallest_power_of_two():
    for n in range(1, 600):
        p = next_power_of_two(n)
        assert p & (p - 1) == 0
        assert p >= n
        assert p == 2 or p // 2 < n

def test_padded_shape_order():
    assert padded_shape(200, 300) == (256, 512)

def test_pad_top_left_and_crop():
    img = np.arange(15, dtype=float).reshape(3, 5)
    padded = pad_to_power_of_two(img)
    assert padded.shape == (4, 8)
    assert np.array_equal(padded[:3, :5], img)
    assert np.all(padded[3:, :] == 0) and np.all(padded[:, 5:] == 0)
    assert np.array_equal(crop_top_left(padded, 3, 5), img)

def test_fft_input_validation():
    arr = np.zeros((16, 16, 3))
    with pytest.raises(ValueError):
        compute_fft(arr)
    with pytest.raises(ValueError):
        compute_ifft(np.zeros(8, dtype=complex))

def test_separable_fft_matches_fft2():
    img = np.random.rand(16, 32)
    assert np.allclose(compute_fft(img), np.fft.fft2(img))

def test_fft_ifft_roundtrip():
    img = np.random.rand(64, 32)
    back = compute_ifft(compute_fft(img))
    assert back.shape == img.shape
    assert np.allclose(img, back, atol=1e-10)

def test_ifft_warns_on_large_imaginary_part():
    F = np.full((4, 4), 1j)
    with pytest.warns(RuntimeWarning):
        compute_ifft(F, suppress_warning=False)

def test_shift_moves_dc_to_center():
    F = np.zeros((8, 16), dtype=complex)
    F[0, 0] = 5.0
    Fs = fft_shift(F)
    assert Fs[4, 8] == 5.0
    assert np.allclose(Fs, np.fft.fftshift(F))

def test_shift_formula_and_inverse():
    H, W = 4, 8
    F = np.random.rand(H, W) + 1j * np.random.rand(H, W)
    Fs = fft_shift(F)
    for y in range(H):
        for x in range(W):
            assert Fs[(y + H // 2) % H, (x + W // 2) % W] == F[y, x]
    assert np.array_equal(ifft_shift(Fs), F)

def test_magnitude_spectrum_basic():
    F = compute_fft(np.random.rand(32, 32))
    mag = magnitude_spectrum(F, log=True)
    assert mag.shape == F.shape
    assert np.all(mag >= 0)
    assert np.allclose(magnitude_spectrum(F, log=False), np.abs(F))
