from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from PIL import Image, UnidentifiedImageError

from dualpng.services.errors import (
	DecodeError,
	OutputCreateError,
	OutputFinalizeError,
	PathLike,
	SourceAccessError,
	UnrecognizedImageError,
)

logger = logging.getLogger(__name__)

SUPPORTED_IMAGE_EXTS = {".jpg", ".jpeg", ".png", ".gif", ".bmp", ".tif", ".tiff", ".webp"}


def load_raster(path: PathLike, role: str) -> Image.Image:
	"""
	Read and decode frame 0 of the image at path as an RGBA raster.
	Raises SourceAccessError when the file cannot be read at all, otherwise
	whatever decode_raster raises.
	"""
	p = Path(path)
	try:
		with p.open("rb") as f:
			data = f.read()
	except OSError as e:
		raise SourceAccessError(e.strerror or str(e), role=role, path=p) from e
	return decode_raster(data, role, path=p)


def decode_raster(data: bytes, role: str, path: Optional[PathLike] = None) -> Image.Image:
	try:
		img = Image.open(io.BytesIO(data))
	except UnidentifiedImageError as e:
		raise UnrecognizedImageError("not a recognizable image", role=role, path=path) from e
	except OSError as e:
		raise DecodeError(f"cannot decode image header: {e}", role=role, path=path) from e
	except Image.DecompressionBombError as e:
		raise DecodeError(str(e), role=role, path=path) from e
	try:
		img.seek(0)
	except EOFError as e:
		raise DecodeError("no frame at index 0", role=role, path=path) from e
	try:
		img.load()
		rgba = img.convert("RGBA")
	except (OSError, EOFError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
		raise DecodeError(f"cannot decode image data: {e}", role=role, path=path) from e
	rgba.info["source_format"] = img.format
	rgba.info["source_mode"] = img.mode
	logger.debug("Decoded %s image: %s %s %dx%d", role, img.format, img.mode, img.width, img.height)
	return rgba


def describe_raster(img: Image.Image, filename: str) -> Dict[str, Any]:
	return {
		"filename": filename,
		"format": img.info.get("source_format"),
		"mode": img.info.get("source_mode", img.mode),
		"width": img.width,
		"height": img.height,
	}


def encode_png(raster: Image.Image) -> bytes:
	buf = io.BytesIO()
	try:
		raster.save(buf, format="PNG", optimize=True)
	except (OSError, ValueError) as e:
		raise OutputFinalizeError(f"cannot encode PNG: {e}", role="output") from e
	return buf.getvalue()


def save_png(raster: Image.Image, out_path: PathLike) -> Path:
	"""
	Write raster as PNG. Either the whole file is written or nothing is left behind.
	"""
	p = Path(out_path)
	try:
		p.parent.mkdir(parents=True, exist_ok=True)
		f = p.open("wb")
	except OSError as e:
		raise OutputCreateError(e.strerror or str(e), role="output", path=p) from e
	try:
		with f:
			raster.save(f, format="PNG", optimize=True)
	except (OSError, ValueError) as e:
		p.unlink(missing_ok=True)
		raise OutputFinalizeError(f"cannot write PNG: {e}", role="output", path=p) from e
	return p
