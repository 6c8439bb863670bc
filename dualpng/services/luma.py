from __future__ import annotations

import math

import numpy as np

# BT.601 luma weights in 16-bit fixed point; they sum to 1 << 16
LUMA_R = 19595
LUMA_G = 38469
LUMA_B = 7472
LUMA_SHIFT = 16

DEFAULT_BLACK_BRIGHTNESS = 0.5
DEFAULT_WHITE_BRIGHTNESS = 1.0


def luma(red: int, green: int, blue: int) -> int:
	"""Integer luminance in [0,255] of an 8-bit RGB triple."""
	return (int(red) * LUMA_R + int(green) * LUMA_G + int(blue) * LUMA_B) >> LUMA_SHIFT


def scale_brightness(gray: int, brightness: float) -> int:
	"""Scale a gray level by brightness, truncate, saturate at 255."""
	return int(math.floor(min(gray * brightness, 255.0)))


def luma_array(rgb: np.ndarray) -> np.ndarray:
	"""
	Vectorized luma of an [H,W,>=3] uint8 array (RGB in the first three channels).
	Returns [H,W] uint8, bit-identical to luma() per pixel.
	"""
	if rgb.ndim != 3 or rgb.shape[2] < 3:
		raise ValueError("Expected HxWx3 or HxWx4 array")
	r = rgb[..., 0].astype(np.uint32)
	g = rgb[..., 1].astype(np.uint32)
	b = rgb[..., 2].astype(np.uint32)
	return ((r * LUMA_R + g * LUMA_G + b * LUMA_B) >> LUMA_SHIFT).astype(np.uint8)


def scale_brightness_array(gray: np.ndarray, brightness: float) -> np.ndarray:
	scaled = np.floor(gray.astype(np.float64) * float(brightness))
	return np.minimum(scaled, 255.0).astype(np.uint8)


def validate_brightness(value: float, role: str) -> float:
	"""Brightness multipliers must be finite and non-negative."""
	try:
		b = float(value)
	except (TypeError, ValueError):
		raise ValueError(f"{role} brightness must be a number, got {value!r}") from None
	if not math.isfinite(b) or b < 0:
		raise ValueError(f"{role} brightness must be a finite value >= 0, got {value!r}")
	return b
