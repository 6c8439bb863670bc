from __future__ import annotations

from datetime import datetime
from pathlib import Path
import uuid
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, File, Form, HTTPException, UploadFile
from fastapi.responses import FileResponse

from dualpng.routers.pack_images import resolve_brightness
from dualpng.services.pack_pipeline import run_pipeline
from dualpng.services.status_store import read_status, write_status


router = APIRouter(prefix="/pipeline", tags=["upload"])


def _slugify(text: str) -> str:
	return "".join(ch if (ch.isalnum() or ch in ("-", "_")) else "-" for ch in text).strip("-_").lower()


@router.post("/upload", summary="Upload a black and a white image and pack them in the background")
async def upload(
	background_tasks: BackgroundTasks,
	black: UploadFile = File(...),
	white: UploadFile = File(...),
	black_brightness: Optional[float] = Form(None),
	white_brightness: Optional[float] = Form(None),
	previews: bool = Form(True),
):
	b, w = resolve_brightness(black_brightness, white_brightness)
	files_meta = []
	for role, f in (("black", black), ("white", white)):
		data = await f.read()
		files_meta.append({"role": role, "filename": f.filename or f"{role}.png", "data": data})
	# Human-readable job_id: "<black_filename_stem>_<ddmmyyyy>_<random>"
	first_stem = _slugify(Path(files_meta[0]["filename"]).stem) or "job"
	date_str = datetime.now().strftime("%d%m%Y")
	job_id = f"{first_stem}_{date_str}_{uuid.uuid4().hex[:8]}"
	write_status(job_id, {"job_id": job_id, "status": "queued", "step": "Queued"})
	background_tasks.add_task(run_pipeline, job_id, files_meta, b, w, previews)
	return {
		"job_id": job_id,
		"status": "queued",
		"filenames": {m["role"]: m["filename"] for m in files_meta},
		"black_brightness": b,
		"white_brightness": w,
		"status_endpoint": f"/pipeline/status/{job_id}",
		"result_endpoint": f"/pipeline/result/{job_id}",
	}


@router.get("/status/{job_id}", summary="Get pipeline status")
def status(job_id: str):
	return read_status(job_id)


@router.get("/result/{job_id}", summary="Get pipeline results")
def result(job_id: str):
	data = read_status(job_id)
	if data.get("status") != "completed":
		return {"job_id": job_id, "status": data.get("status"), "message": "not completed yet"}
	return {
		"job_id": job_id,
		"inputs": data.get("inputs", {}),
		"size": data.get("size"),
		"output": data.get("output"),
		"previews": data.get("previews", {}),
		"image_endpoint": f"/pipeline/result/{job_id}/image",
	}


@router.get("/result/{job_id}/image", summary="Download the packed PNG")
def result_image(job_id: str):
	data = read_status(job_id)
	output = data.get("output")
	if data.get("status") != "completed" or not output or not Path(output).is_file():
		raise HTTPException(status_code=404, detail="packed image not available")
	return FileResponse(output, media_type="image/png")
