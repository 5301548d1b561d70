import numpy as np
import pytest
from core.adjust import BrightnessContrast, adjust_brightness_contrast, contrast_factor

def test_identity_adjustment():
    img = (np.random.rand(8, 8) * 255).astype(np.uint8)
    out = adjust_brightness_contrast(img, 0, 0)
    assert np.array_equal(out, img)
    assert out is not img

def test_contrast_factor_formula():
    assert np.isclose(contrast_factor(0), 1.0)
    assert np.isclose(contrast_factor(50), 259 * 305 / (255 * 209))
    assert contrast_factor(-100) < 1.0 < contrast_factor(100)

def test_brightness_and_clamp():
    img = np.array([[0, 10, 250]], dtype=np.uint8)
    out = adjust_brightness_contrast(img, 50, 0)
    assert out.tolist() == [[50, 60, 255]]
    out = adjust_brightness_contrast(img, -100, 0)
    assert out.tolist() == [[0, 0, 150]]

def test_contrast_pivots_on_mid_gray():
    img = np.array([[128, 100, 156]], dtype=np.uint8)
    out = adjust_brightness_contrast(img, 0, 100)
    assert out[0, 0] == 128
    assert out[0, 1] < 100 and out[0, 2] > 156

def test_range_validation():
    img = np.zeros((2, 2), dtype=np.uint8)
    with pytest.raises(ValueError):
        adjust_brightness_contrast(img, 101, 0)
    with pytest.raises(ValueError):
        adjust_brightness_contrast(img, 0, -150)

def test_input_not_mutated():
    img = (np.random.rand(8, 8) * 255).astype(np.uint8)
    before = img.copy()
    adjust_brightness_contrast(img, 30, 40)
    assert np.array_equal(img, before)

def test_state_clamps_and_drags():
    bc = BrightnessContrast()
    bc.nudge(d_brightness=250, d_contrast=-250)
    assert (bc.brightness, bc.contrast) == (100.0, -100.0)
    bc.reset()
    assert bc.is_identity
    bc.drag(dx=10, dy=-20)
    assert (bc.brightness, bc.contrast) == (10.0, 5.0)

def test_state_apply_does_not_compound():
    img = (np.random.rand(8, 8) * 255).astype(np.uint8)
    bc = BrightnessContrast(20, 10)
    first = bc.apply(img)
    second = bc.apply(img)
    assert np.array_equal(first, second)
    assert np.array_equal(first, adjust_brightness_contrast(img, 20, 10))
