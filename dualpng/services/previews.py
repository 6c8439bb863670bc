from __future__ import annotations

from pathlib import Path
from typing import Dict

import numpy as np
from PIL import Image

from dualpng.services.image_utils import save_png
from dualpng.services.luma import luma_array

BACKGROUNDS: Dict[str, int] = {"black": 0, "white": 255}


def composite_over(raster: Image.Image, background: str) -> Image.Image:
	"""
	Composite an RGBA raster over an opaque solid background and return it as gray ("L").
	out = c * a + bg * (1 - a), rounded, then reduced to luma.
	"""
	if background not in BACKGROUNDS:
		raise ValueError(f"Unknown background '{background}'. Choose from: " + ", ".join(sorted(BACKGROUNDS)))
	bg = float(BACKGROUNDS[background])
	arr = np.asarray(raster.convert("RGBA")).astype(np.float32)
	a = arr[..., 3:4] / 255.0
	rgb = arr[..., :3] * a + bg * (1.0 - a)
	u8 = (np.clip(rgb, 0.0, 255.0) + 0.5).astype(np.uint8)
	return Image.fromarray(luma_array(u8))


def write_previews(raster: Image.Image, preview_dir: Path, stem: str) -> Dict[str, str]:
	out = {}
	for name in BACKGROUNDS:
		path = save_png(composite_over(raster, name), preview_dir / f"{stem}_on_{name}.png")
		out[name] = str(path)
	return out
