from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from dualpng.config import load_settings
from dualpng.services.errors import PackError
from dualpng.services.image_utils import decode_raster, encode_png
from dualpng.services.luma import validate_brightness
from dualpng.services.packer import pack
from dualpng.services.rasterizer import get_rasterizer


router = APIRouter(tags=["pack"])

# failures caused by what the client sent
CLIENT_STAGES = {"acquire", "decode"}


def resolve_brightness(black: Optional[float], white: Optional[float]):
	"""Fill in configured defaults and validate; invalid values become HTTP 422."""
	settings = load_settings()
	try:
		b = validate_brightness(settings.black_brightness if black is None else black, "black")
		w = validate_brightness(settings.white_brightness if white is None else white, "white")
	except ValueError as e:
		raise HTTPException(status_code=422, detail={"error": "invalid_brightness", "message": str(e)})
	return b, w


def pack_error_to_http(e: PackError) -> HTTPException:
	code = 422 if e.stage in CLIENT_STAGES else 500
	return HTTPException(status_code=code, detail=e.to_dict())


def _pack_bytes(black_name: str, black_data: bytes, white_name: str, white_data: bytes, black_brightness: float, white_brightness: float) -> bytes:
	settings = load_settings()
	black = decode_raster(black_data, "black", path=black_name)
	white = decode_raster(white_data, "white", path=white_name)
	rasterizer = get_rasterizer(settings.rasterizer, settings.resample)
	packed = pack(black, white, black_brightness, white_brightness, rasterizer)
	return encode_png(packed)


@router.post("/pack", summary="Pack a black and a white image into one PNG", response_class=Response)
async def pack_images(
	black: UploadFile = File(...),
	white: UploadFile = File(...),
	black_brightness: Optional[float] = Form(None),
	white_brightness: Optional[float] = Form(None),
):
	b, w = resolve_brightness(black_brightness, white_brightness)
	black_data = await black.read()
	white_data = await white.read()
	try:
		png = await run_in_threadpool(
			_pack_bytes,
			black.filename or "black",
			black_data,
			white.filename or "white",
			white_data,
			b,
			w,
		)
	except PackError as e:
		raise pack_error_to_http(e)
	return Response(content=png, media_type="image/png")
