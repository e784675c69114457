"""FastAPI app with flyer API routes and rendered image hosting"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from flyerkit.config import get_settings
from flyerkit.errors import FlyerConfigurationError
from flyerkit.routes import router
from flyerkit.services.fonts import load_fonts

logger = logging.getLogger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Warm the font cache on startup."""
    logger.info("Starting flyer service...")
    try:
        await load_fonts(settings)
        logger.info("Fonts loaded")
    except FlyerConfigurationError as e:
        logger.error(f"Font warm-up failed, renders will retry: {e}")

    yield

    logger.info("Shutting down...")


app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Health check
@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(router, prefix="/api")

images_dir = Path(settings.output_dir)
images_dir.mkdir(exist_ok=True, parents=True)
app.mount("/images", StaticFiles(directory=str(images_dir)), name="images")
