import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from tubely.config import get_settings
from tubely.errors import register_exception_handlers
from tubely.routers import auth, uploads, videos
from tubely.services.assets import ensure_assets_dir

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Tubely API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Thumbnails are served straight from disk
app.mount("/assets", StaticFiles(directory=ensure_assets_dir(settings)), name="assets")

app.include_router(auth.router)
app.include_router(videos.router)
app.include_router(uploads.router)


@app.get("/")
def root():
    return {"message": "Tubely API", "docs": "/docs"}
