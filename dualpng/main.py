from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dualpng.config import configure_logging, load_settings
from dualpng.routers.pack_images import router as pack_router
from dualpng.routers.upload_images import router as upload_router


def create_app() -> FastAPI:
	settings = load_settings()
	configure_logging(settings.log_level)

	app = FastAPI(title="DualPNG - Black/White Image Packer", version="0.1.0")

	# CORS (adjust origins in production)
	app.add_middleware(
		CORSMiddleware,
		allow_origins=["*"],
		allow_credentials=False,
		allow_methods=["*"],
		allow_headers=["*"],
	)

	@app.get("/health", tags=["health"])
	def health():
		return {"status": "ok"}

	# Routers
	app.include_router(pack_router)
	app.include_router(upload_router)

	return app


app = create_app()


if __name__ == "__main__":
	# Local dev server: uvicorn dualpng.main:app --reload
	import uvicorn

	uvicorn.run("dualpng.main:app", host="0.0.0.0", port=8000, reload=True)
