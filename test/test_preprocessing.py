import numpy as np
import pytest
from core.errors import InvalidInputError
from core.preprocessing import rgb_to_gray, resize_nearest, common_size, unify_sizes

def test_rgb_to_gray_luminosity():
    img = np.zeros((1, 4, 3), dtype=np.uint8)
    img[0, 0] = (255, 0, 0)
    img[0, 1] = (0, 255, 0)
    img[0, 2] = (0, 0, 255)
    img[0, 3] = (255, 255, 255)
    gray = rgb_to_gray(img)
    assert gray.shape == (1, 4)
    assert gray.dtype == np.uint8
    assert gray.tolist() == [[76, 150, 29, 255]]

def test_rgb_to_gray_ignores_alpha_and_passes_gray():
    rgba = np.full((2, 2, 4), 100, dtype=np.uint8)
    rgba[..., 3] = 0
    assert np.all(rgb_to_gray(rgba) == 100)
    gray = np.arange(4, dtype=np.uint8).reshape(2, 2)
    assert np.array_equal(rgb_to_gray(gray), gray)
    with pytest.raises(ValueError):
        rgb_to_gray(np.zeros((2, 2, 2)))

def test_resize_nearest_down_and_up():
    img = np.arange(16, dtype=np.uint8).reshape(4, 4)
    assert np.array_equal(resize_nearest(img, 2, 2), img[::2, ::2])
    small = np.array([[1, 2], [3, 4]], dtype=np.uint8)
    big = resize_nearest(small, 4, 4)
    assert np.array_equal(big, np.repeat(np.repeat(small, 2, axis=0), 2, axis=1))
    assert resize_nearest(img, 3, 2).shape == (2, 3)

def test_resize_invalid_size():
    with pytest.raises(InvalidInputError):
        resize_nearest(np.zeros((4, 4)), 0, 4)

def test_common_size_and_unify():
    a = np.zeros((10, 40), dtype=np.uint8)
    b = np.zeros((30, 20), dtype=np.uint8)
    assert common_size([a, None, b]) == (20, 10)
    out = unify_sizes([a, None, b])
    assert out[1] is None
    assert out[0].shape == out[2].shape == (10, 20)
    with pytest.raises(InvalidInputError):
        common_size([None])
