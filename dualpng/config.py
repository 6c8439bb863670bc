from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dualpng.services.luma import DEFAULT_BLACK_BRIGHTNESS, DEFAULT_WHITE_BRIGHTNESS

ENV_PREFIX = "DUALPNG_"

DEFAULT_DATA_DIR = "data"
DEFAULT_RASTERIZER = "pillow"
DEFAULT_RESAMPLE = "lanczos"
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
	data_dir: Path
	rasterizer: str
	resample: str
	black_brightness: float
	white_brightness: float
	log_level: str

	@property
	def input_dir(self) -> Path:
		return self.data_dir / "input"

	@property
	def output_dir(self) -> Path:
		return self.data_dir / "output"

	@property
	def preview_dir(self) -> Path:
		return self.data_dir / "previews"

	@property
	def jobs_dir(self) -> Path:
		return self.data_dir / "jobs"


def _env(name: str, default: str) -> str:
	value = os.environ.get(ENV_PREFIX + name, "").strip()
	return value or default


def _env_float(name: str, default: float) -> float:
	raw = _env(name, "")
	if not raw:
		return default
	try:
		return float(raw)
	except ValueError:
		raise ValueError(f"{ENV_PREFIX}{name} must be a number, got {raw!r}") from None


def load_settings() -> Settings:
	"""
	Read settings from DUALPNG_* environment variables.
	Called per use so that jobs and tests pick up the current environment.
	"""
	return Settings(
		data_dir=Path(_env("DATA_DIR", DEFAULT_DATA_DIR)),
		rasterizer=_env("RASTERIZER", DEFAULT_RASTERIZER).lower(),
		resample=_env("RESAMPLE", DEFAULT_RESAMPLE).lower(),
		black_brightness=_env_float("BLACK_BRIGHTNESS", DEFAULT_BLACK_BRIGHTNESS),
		white_brightness=_env_float("WHITE_BRIGHTNESS", DEFAULT_WHITE_BRIGHTNESS),
		log_level=_env("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
	)


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
	logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
	logging.getLogger("dualpng").setLevel(level.upper())
