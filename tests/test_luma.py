import math

import numpy as np
import pytest

from dualpng.services.luma import (
	LUMA_B,
	LUMA_G,
	LUMA_R,
	LUMA_SHIFT,
	luma,
	luma_array,
	scale_brightness,
	scale_brightness_array,
	validate_brightness,
)


def test_coefficients_sum_to_one_in_fixed_point():
	assert LUMA_R + LUMA_G + LUMA_B == 1 << LUMA_SHIFT


@pytest.mark.parametrize(
	"rgb, expected",
	[
		((0, 0, 0), 0),
		((255, 255, 255), 255),
		((100, 100, 100), 100),
		((200, 200, 200), 200),
		((255, 0, 0), 76),
		((0, 255, 0), 149),
		((0, 0, 255), 29),
	],
)
def test_luma_known_values(rgb, expected):
	assert luma(*rgb) == expected


def test_luma_is_bounded():
	levels = list(range(0, 256, 15)) + [255]
	for r in levels:
		for g in levels:
			for b in levels:
				assert 0 <= luma(r, g, b) <= 255


def test_luma_array_matches_scalar():
	rng = np.random.default_rng(7)
	arr = rng.integers(0, 256, size=(9, 11, 4), dtype=np.uint8)
	gray = luma_array(arr)
	assert gray.dtype == np.uint8
	assert gray.shape == (9, 11)
	for y in range(9):
		for x in range(11):
			r, g, b = (int(v) for v in arr[y, x, :3])
			assert gray[y, x] == luma(r, g, b)


def test_luma_array_rejects_flat_input():
	with pytest.raises(ValueError):
		luma_array(np.zeros((4, 4), dtype=np.uint8))


@pytest.mark.parametrize(
	"gray, brightness, expected",
	[
		(100, 0.5, 50),
		(101, 0.5, 50),
		(200, 1.0, 200),
		(255, 2.0, 255),
		(130, 2.0, 255),
		(0, 3.0, 0),
		(7, 0.0, 0),
		(255, 1e308, 255),
		(1, 1e308, 255),
	],
)
def test_scale_brightness(gray, brightness, expected):
	assert scale_brightness(gray, brightness) == expected


@pytest.mark.parametrize("brightness", [0.0, 0.25, 0.5, 1.0, 1.7, 3.0])
def test_scale_brightness_is_clamped_floor_and_vectorizes(brightness):
	grays = np.arange(256, dtype=np.uint8).reshape(16, 16)
	scaled = scale_brightness_array(grays, brightness)
	assert scaled.dtype == np.uint8
	for g in range(256):
		expected = min(255, math.floor(g * brightness))
		assert scale_brightness(g, brightness) == expected
		assert scaled.flat[g] == expected
		assert 0 <= expected <= 255


def test_validate_brightness_accepts_non_negative():
	assert validate_brightness(0, "black") == 0.0
	assert validate_brightness("0.75", "white") == 0.75


@pytest.mark.parametrize("value", [-0.1, float("nan"), float("inf"), "bright", None])
def test_validate_brightness_rejects(value):
	with pytest.raises(ValueError, match="black brightness"):
		validate_brightness(value, "black")
