from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Any, Dict, List

from dualpng.config import load_settings
from dualpng.services.errors import PackError
from dualpng.services.image_utils import describe_raster, load_raster, save_png
from dualpng.services.packer import pack
from dualpng.services.previews import write_previews
from dualpng.services.rasterizer import get_rasterizer
from dualpng.services.status_store import write_status

logger = logging.getLogger(__name__)

ROLES = ("black", "white")


def run_pipeline(
	job_id: str,
	files_meta: List[Dict[str, Any]],
	black_brightness: float,
	white_brightness: float,
	previews: bool = True,
) -> None:
	"""
	Background job: save the two uploads, decode, pack, write the PNG (and previews).
	files_meta holds one {"role", "filename", "data"} entry per role.
	Progress and failures are recorded in the job status file.
	"""
	settings = load_settings()
	status: Dict[str, Any] = {"job_id": job_id}
	try:
		# 1) Save originals to <data>/input/<job_id>/<role>_<filename>
		status.update({"status": "saving", "step": "Save Images"})
		write_status(job_id, status)
		in_dir = settings.input_dir / job_id
		in_dir.mkdir(parents=True, exist_ok=True)
		saved: Dict[str, Path] = {}
		for fm in files_meta:
			name = Path(fm["filename"]).name
			p = in_dir / f"{fm['role']}_{name}"
			with p.open("wb") as f:
				f.write(fm["data"])
			saved[fm["role"]] = p

		# 2) Decode both inputs
		status.update({"status": "decoding", "step": "Decode Images"})
		write_status(job_id, status)
		rasters = {role: load_raster(saved[role], role) for role in ROLES}
		status["inputs"] = {role: describe_raster(rasters[role], saved[role].name) for role in ROLES}

		# 3) Pack
		status.update({
			"status": "packing",
			"step": "Pack Images",
			"black_brightness": black_brightness,
			"white_brightness": white_brightness,
		})
		write_status(job_id, status)
		rasterizer = get_rasterizer(settings.rasterizer, settings.resample)
		packed = pack(rasters["black"], rasters["white"], black_brightness, white_brightness, rasterizer)

		# 4) Encode PNG (+ previews over black/white)
		status.update({"status": "encoding", "step": "Encode PNG"})
		write_status(job_id, status)
		out_path = save_png(packed, settings.output_dir / job_id / "packed.png")
		if previews:
			preview_dir = settings.preview_dir / job_id
			try:
				status["previews"] = write_previews(packed, preview_dir, "packed")
			except PackError:
				# no partial output left behind
				out_path.unlink(missing_ok=True)
				shutil.rmtree(preview_dir, ignore_errors=True)
				raise
		status["output"] = str(out_path)
		status["size"] = {"width": packed.width, "height": packed.height}

		# 5) Complete
		status.update({"status": "completed", "step": "Done"})
		write_status(job_id, status)
		logger.info("Job %s completed: %s", job_id, out_path)
	except PackError as e:
		logger.error("Job %s failed: %s", job_id, e)
		status.update({"status": "error", "error": str(e), **_error_fields(e)})
		write_status(job_id, status)
	except Exception as e:
		logger.exception("Job %s crashed", job_id)
		status.update({"status": "error", "error": str(e), "kind": "internal_error"})
		write_status(job_id, status)
		raise


def _error_fields(e: PackError) -> Dict[str, Any]:
	return {"kind": e.kind, "stage": e.stage, "role": e.role}
