from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class PlacementRect:
	x: float
	y: float
	width: float
	height: float

	def to_pixel_box(self, canvas_width: int, canvas_height: int) -> Tuple[int, int, int, int]:
		"""
		Snap to whole pixels as (left, top, right, bottom), right/bottom exclusive.
		Edges are rounded half up and clamped to the canvas; the box is never empty.
		"""
		left = _clamp(_round_half_up(self.x), 0, canvas_width - 1)
		top = _clamp(_round_half_up(self.y), 0, canvas_height - 1)
		right = _clamp(_round_half_up(self.x + self.width), left + 1, canvas_width)
		bottom = _clamp(_round_half_up(self.y + self.height), top + 1, canvas_height)
		return left, top, right, bottom


def _round_half_up(v: float) -> int:
	return int(math.floor(v + 0.5))


def _clamp(v: int, lo: int, hi: int) -> int:
	return max(lo, min(hi, v))


def scale_to_aspect_fit(sw: float, sh: float, dw: float, dh: float) -> float:
	# match widths first; fall back to heights when the scaled height overflows
	s = dw / sw
	if sh * s <= dh:
		return s
	return dh / sh


def aspect_fit(sw: float, sh: float, dw: float, dh: float) -> PlacementRect:
	"""
	Largest rectangle with the source aspect ratio that fits inside the destination,
	centered on both axes. All four sizes must be > 0; zero sizes are a caller error.
	"""
	s = scale_to_aspect_fit(sw, sh, dw, dh)
	w = sw * s
	h = sh * s
	return PlacementRect(x=dw / 2.0 - w / 2.0, y=dh / 2.0 - h / 2.0, width=w, height=h)
