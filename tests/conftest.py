from __future__ import annotations

import io

import numpy as np
import pytest
from PIL import Image


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
	"""Point DUALPNG_DATA_DIR at a per-test directory."""
	d = tmp_path / "data"
	monkeypatch.setenv("DUALPNG_DATA_DIR", str(d))
	return d


@pytest.fixture
def make_solid():
	def _make(color, size, mode="RGB") -> Image.Image:
		return Image.new(mode, size, color)

	return _make


@pytest.fixture
def make_noise():
	def _make(size, seed=0, mode="RGB") -> Image.Image:
		w, h = size
		rng = np.random.default_rng(seed)
		channels = len(mode)
		arr = rng.integers(0, 256, size=(h, w, channels), dtype=np.uint8)
		return Image.fromarray(arr)

	return _make


@pytest.fixture
def to_png_bytes():
	def _encode(img: Image.Image, fmt: str = "PNG") -> bytes:
		buf = io.BytesIO()
		img.save(buf, format=fmt)
		return buf.getvalue()

	return _encode


@pytest.fixture
def scenario_pair(make_solid):
	"""Uniform gray (100) black input and gray (200) white input, same size."""
	return make_solid((100, 100, 100), (6, 4)), make_solid((200, 200, 200), (6, 4))
