from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
from PIL import Image

from dualpng.services.errors import CanvasAllocationError, CanvasMaterializationError
from dualpng.services.geometry import aspect_fit
from dualpng.services.luma import luma
from dualpng.services.rasterizer import PillowRasterizer, Rasterizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Pixel:
	alpha: int
	red: int
	green: int
	blue: int

	@property
	def gray(self) -> int:
		return luma(self.red, self.green, self.blue)


class Canvas:
	"""
	Fixed-size RGBA pixel buffer, origin top-left, backed by a uint8 [H,W,4] array.
	Every coordinate holds a pixel; unwritten pixels are (0,0,0,0).
	"""

	def __init__(self, pixels: np.ndarray) -> None:
		self._pixels = pixels

	@classmethod
	def create(cls, width: int, height: int) -> "Canvas":
		if width <= 0 or height <= 0:
			raise ValueError(f"Canvas size must be positive, got {width}x{height}")
		try:
			pixels = np.zeros((height, width, 4), dtype=np.uint8)
		except MemoryError:
			raise CanvasAllocationError(f"cannot allocate {width}x{height} RGBA buffer") from None
		return cls(pixels)

	@classmethod
	def create_from(
		cls,
		source: Image.Image,
		width: int,
		height: int,
		rasterizer: Optional[Rasterizer] = None,
	) -> "Canvas":
		"""
		Allocate a width x height canvas and draw source into its aspect-fit rectangle.
		Pixels outside that rectangle keep the zero pixel.
		"""
		canvas = cls.create(width, height)
		rasterizer = rasterizer or PillowRasterizer()
		rect = aspect_fit(source.width, source.height, width, height)
		left, top, right, bottom = rect.to_pixel_box(width, height)
		logger.debug(
			"Placing %dx%d source at (%d,%d)-(%d,%d) in %dx%d canvas",
			source.width, source.height, left, top, right, bottom, width, height,
		)
		drawn = rasterizer.render(source, right - left, bottom - top)
		canvas._pixels[top:bottom, left:right, :] = drawn
		return canvas

	@classmethod
	def from_array(cls, array: np.ndarray) -> "Canvas":
		if array.ndim != 3 or array.shape[2] != 4:
			raise ValueError("Expected HxWx4 RGBA array")
		if array.shape[0] <= 0 or array.shape[1] <= 0:
			raise ValueError("Canvas size must be positive")
		return cls(np.array(array, dtype=np.uint8, copy=True))

	@property
	def width(self) -> int:
		return int(self._pixels.shape[1])

	@property
	def height(self) -> int:
		return int(self._pixels.shape[0])

	@property
	def size(self):
		return (self.width, self.height)

	@property
	def pixels(self) -> np.ndarray:
		view = self._pixels.view()
		view.flags.writeable = False
		return view

	def _check_bounds(self, x: int, y: int) -> None:
		if not (0 <= x < self.width and 0 <= y < self.height):
			raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} canvas")

	def get(self, x: int, y: int) -> Pixel:
		self._check_bounds(x, y)
		r, g, b, a = (int(v) for v in self._pixels[y, x])
		return Pixel(alpha=a, red=r, green=g, blue=b)

	def set(self, x: int, y: int, pixel: Pixel) -> None:
		self._check_bounds(x, y)
		self._pixels[y, x] = (pixel.red, pixel.green, pixel.blue, pixel.alpha)

	def to_raster(self) -> Image.Image:
		try:
			return Image.fromarray(np.ascontiguousarray(self._pixels).copy())
		except (ValueError, TypeError, MemoryError) as e:
			raise CanvasMaterializationError(f"cannot materialize {self.width}x{self.height} image: {e}") from e
