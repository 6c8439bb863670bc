from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image

from dualpng.services.canvas import Canvas
from dualpng.services.errors import PathLike
from dualpng.services.image_utils import load_raster, save_png
from dualpng.services.luma import (
	DEFAULT_BLACK_BRIGHTNESS,
	DEFAULT_WHITE_BRIGHTNESS,
	luma_array,
	scale_brightness_array,
	validate_brightness,
)
from dualpng.services.rasterizer import Rasterizer

logger = logging.getLogger(__name__)


def checkerboard_mask(width: int, height: int) -> np.ndarray:
	"""[H,W] bool, True where (x + y) is even: the cells taken from the black image."""
	ys, xs = np.indices((height, width))
	return (xs + ys) % 2 == 0


def pack_canvases(
	black_canvas: Canvas,
	white_canvas: Canvas,
	black_brightness: float = DEFAULT_BLACK_BRIGHTNESS,
	white_brightness: float = DEFAULT_WHITE_BRIGHTNESS,
) -> Canvas:
	"""
	Interleave two same-size canvases into one alpha-encoded canvas.

	Even cells come from the black canvas and become (0,0,0, 255 - scaled);
	odd cells come from the white canvas and become (255,255,255, scaled), where
	scaled = min(255, floor(luma * brightness)).
	"""
	if black_canvas.size != white_canvas.size:
		raise ValueError(f"Canvas sizes differ: {black_canvas.size} vs {white_canvas.size}")
	black_brightness = validate_brightness(black_brightness, "black")
	white_brightness = validate_brightness(white_brightness, "white")
	width, height = black_canvas.size
	is_black = checkerboard_mask(width, height)

	black_scaled = scale_brightness_array(luma_array(black_canvas.pixels), black_brightness)
	white_scaled = scale_brightness_array(luma_array(white_canvas.pixels), white_brightness)

	out = np.empty((height, width, 4), dtype=np.uint8)
	out[..., :3] = np.where(is_black, 0, 255).astype(np.uint8)[..., np.newaxis]
	out[..., 3] = np.where(is_black, 255 - black_scaled, white_scaled)
	return Canvas.from_array(out)


def pack(
	black_raster: Image.Image,
	white_raster: Image.Image,
	black_brightness: float = DEFAULT_BLACK_BRIGHTNESS,
	white_brightness: float = DEFAULT_WHITE_BRIGHTNESS,
	rasterizer: Optional[Rasterizer] = None,
) -> Image.Image:
	"""
	Combine two rasters into one RGBA raster of size
	(max of widths, max of heights). Each input is aspect-fit into that size first.
	"""
	black_brightness = validate_brightness(black_brightness, "black")
	white_brightness = validate_brightness(white_brightness, "white")
	width = max(black_raster.width, white_raster.width)
	height = max(black_raster.height, white_raster.height)
	logger.info(
		"Packing %dx%d black + %dx%d white into %dx%d (brightness %.3g/%.3g)",
		black_raster.width, black_raster.height,
		white_raster.width, white_raster.height,
		width, height, black_brightness, white_brightness,
	)
	black_canvas = Canvas.create_from(black_raster, width, height, rasterizer)
	white_canvas = Canvas.create_from(white_raster, width, height, rasterizer)
	packed = pack_canvases(black_canvas, white_canvas, black_brightness, white_brightness)
	return packed.to_raster()


def pack_files(
	black_path: PathLike,
	white_path: PathLike,
	output_path: PathLike,
	black_brightness: float = DEFAULT_BLACK_BRIGHTNESS,
	white_brightness: float = DEFAULT_WHITE_BRIGHTNESS,
	rasterizer: Optional[Rasterizer] = None,
) -> Path:
	"""Decode both inputs, pack them and write the result as PNG. Returns the written path."""
	black = load_raster(black_path, "black")
	white = load_raster(white_path, "white")
	packed = pack(black, white, black_brightness, white_brightness, rasterizer)
	out = save_png(packed, output_path)
	logger.info("Saved packed image to %s", out)
	return out
