from __future__ import annotations

import logging
from typing import Dict

import cv2
import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)

PILLOW_FILTERS: Dict[str, int] = {
	"nearest": Image.NEAREST,
	"bilinear": Image.BILINEAR,
	"bicubic": Image.BICUBIC,
	"lanczos": Image.LANCZOS,
	"area": Image.BOX,
}

OPENCV_FILTERS: Dict[str, int] = {
	"nearest": cv2.INTER_NEAREST,
	"bilinear": cv2.INTER_LINEAR,
	"bicubic": cv2.INTER_CUBIC,
	"lanczos": cv2.INTER_LANCZOS4,
	"area": cv2.INTER_AREA,
}


class Rasterizer:
	"""
	Draws a source raster scaled to width x height.
	render() returns premultiplied RGBA uint8 [height, width, 4]; placing the
	result inside a canvas is the caller's job.
	"""

	name = "base"

	def render(self, source: Image.Image, width: int, height: int) -> np.ndarray:
		raise NotImplementedError


class PillowRasterizer(Rasterizer):
	name = "pillow"

	def __init__(self, resample: str = "lanczos") -> None:
		self.resample = _lookup(PILLOW_FILTERS, resample)

	def render(self, source: Image.Image, width: int, height: int) -> np.ndarray:
		# RGBa is Pillow's premultiplied mode, so filtering never bleeds hidden colour
		img = source.convert("RGBA").convert("RGBa")
		if img.size != (width, height):
			img = img.resize((width, height), self.resample)
		return np.frombuffer(img.tobytes(), dtype=np.uint8).reshape(height, width, 4).copy()


class OpenCVRasterizer(Rasterizer):
	name = "opencv"

	def __init__(self, resample: str = "area") -> None:
		self.interpolation = _lookup(OPENCV_FILTERS, resample)

	def render(self, source: Image.Image, width: int, height: int) -> np.ndarray:
		arr = np.asarray(source.convert("RGBA")).astype(np.float32)
		alpha = arr[..., 3:4] / 255.0
		arr[..., :3] *= alpha
		if (arr.shape[1], arr.shape[0]) != (width, height):
			arr = cv2.resize(arr, (width, height), interpolation=self.interpolation)
		return (np.clip(arr, 0.0, 255.0) + 0.5).astype(np.uint8)


RASTERIZERS = {
	PillowRasterizer.name: PillowRasterizer,
	OpenCVRasterizer.name: OpenCVRasterizer,
}


def _lookup(table: Dict[str, int], name: str) -> int:
	key = name.strip().lower()
	if key not in table:
		raise ValueError(f"Unknown resample filter '{name}'. Choose from: " + ", ".join(sorted(table)))
	return table[key]


def get_rasterizer(name: str = "pillow", resample: str = "lanczos") -> Rasterizer:
	key = name.strip().lower()
	cls = RASTERIZERS.get(key)
	if cls is None:
		raise ValueError(f"Unknown rasterizer '{name}'. Choose from: " + ", ".join(sorted(RASTERIZERS)))
	logger.debug("Using %s rasterizer with %s filter", key, resample)
	return cls(resample)
