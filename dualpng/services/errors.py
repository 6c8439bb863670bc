from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Union

PathLike = Union[str, Path]


class PackError(Exception):
	"""
	Base class for every failure surfaced by the packing flow.
	Carries the stage that failed and, when known, which input (role) and path.
	"""

	kind = "pack_error"
	stage = "pack"

	def __init__(self, message: str, role: Optional[str] = None, path: Optional[PathLike] = None) -> None:
		self.message = message
		self.role = role
		self.path = str(path) if path is not None else None
		super().__init__(self._format())

	def _format(self) -> str:
		parts = [f"[{self.stage}]"]
		if self.role:
			parts.append(f"{self.role} image")
		if self.path:
			parts.append(f"({self.path})")
		return " ".join(parts) + f": {self.message}"

	def to_dict(self) -> Dict[str, Any]:
		return {
			"error": self.kind,
			"stage": self.stage,
			"role": self.role,
			"path": self.path,
			"message": self.message,
		}


class SourceAccessError(PackError):
	kind = "source_inaccessible"
	stage = "acquire"


class UnrecognizedImageError(PackError):
	kind = "unrecognized_image"
	stage = "acquire"


class DecodeError(PackError):
	kind = "decode_failed"
	stage = "decode"


class CanvasAllocationError(PackError):
	kind = "canvas_allocation_failed"
	stage = "canvas"


class CanvasMaterializationError(PackError):
	kind = "canvas_materialization_failed"
	stage = "canvas"


class OutputTargetError(PackError):
	kind = "output_failed"
	stage = "output"


class OutputCreateError(OutputTargetError):
	kind = "output_create_failed"


class OutputFinalizeError(OutputTargetError):
	kind = "output_finalize_failed"
