"""
API routes for the flyer generator.
"""

import asyncio
import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field

from flyerkit.config import get_settings
from flyerkit.errors import FlyerConfigurationError
from flyerkit.models import FlyerInput, FlyerMode, TemplateKey
from flyerkit.services.flyer_generator import FlyerGenerator, get_flyer_generator
from flyerkit.templates import list_presets, list_template_keys, suggest_preset

logger = logging.getLogger(__name__)

router = APIRouter()


# Request/Response Models

class FlyerRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    theme: str = Field(..., min_length=2)
    date_time_text: str = Field(..., min_length=2, alias="dateTime")
    location: Optional[str] = ""
    template_key: TemplateKey = Field("elegant", alias="templateKey")
    preset_id: Optional[str] = Field(None, alias="presetId")
    dress_code: Optional[str] = Field("", alias="dressCode")
    note: Optional[str] = ""
    description: Optional[str] = ""
    tagline: Optional[str] = ""
    palette: Optional[List[str]] = None
    mode: FlyerMode = FlyerMode.CLASSIC

    def to_input(self) -> FlyerInput:
        return FlyerInput(
            theme=self.theme,
            date_time_text=self.date_time_text,
            location=self.location,
            template_key=self.template_key,
            preset_id=self.preset_id,
            dress_code=self.dress_code,
            note=self.note,
            description=self.description,
            tagline=self.tagline,
            palette=tuple(self.palette or ()),
        )


class FlyerResponse(BaseModel):
    pngPath: str
    pdfPath: str
    pngUrl: str
    pdfUrl: str
    mode: FlyerMode


class CopyRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    theme: str = Field(..., min_length=2)
    dress_code: Optional[str] = Field("", alias="dressCode")
    note: Optional[str] = ""


class CopyResponse(BaseModel):
    description: str
    descriptions: List[str]
    taglines: List[str]
    palette: List[str]


class PresetResponse(BaseModel):
    id: str
    label: str
    subtitle: str
    template: str
    palette: List[str]


def get_generator() -> FlyerGenerator:
    return get_flyer_generator()


def save_flyer_files(png: bytes, pdf: bytes, output_dir: str) -> tuple:
    """Write PNG and PDF side by side; returns their paths."""
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    stem = f"{datetime.now().strftime('%Y%m%d%H%M%S')}-{uuid.uuid4().hex[:8]}-flyer"
    png_path = directory / f"{stem}.png"
    pdf_path = directory / f"{stem}.pdf"
    png_path.write_bytes(png)
    pdf_path.write_bytes(pdf)
    return png_path, pdf_path


# ============================================
# FLYERS
# ============================================

@router.post("/flyer/generate", response_model=FlyerResponse)
async def generate_flyer(request: FlyerRequest, generator: FlyerGenerator = Depends(get_generator)):
    """Render a flyer and store the PNG and PDF."""
    try:
        result = await generator.generate(request.to_input(), request.mode)
    except FlyerConfigurationError as e:
        logger.error(f"Flyer generation unavailable: {e}")
        raise HTTPException(status_code=503, detail=f"Flyer rendering is unavailable, try again later: {e}")

    png_path, pdf_path = await asyncio.to_thread(
        save_flyer_files, result.png, result.pdf, get_settings().output_dir
    )
    logger.info(f"Saved flyer {png_path.name} ({result.mode.value})")
    return FlyerResponse(
        pngPath=str(png_path),
        pdfPath=str(pdf_path),
        pngUrl=f"/images/{png_path.name}",
        pdfUrl=f"/images/{pdf_path.name}",
        mode=result.mode,
    )


@router.post("/flyer/copy", response_model=CopyResponse)
async def flyer_copy(request: CopyRequest, generator: FlyerGenerator = Depends(get_generator)):
    """Suggest description, taglines and palette for a theme."""
    copy = await generator.suggest_copy(request.theme, request.dress_code or "", request.note or "")
    return CopyResponse(**copy.to_dict())


# ============================================
# PRESETS
# ============================================

@router.get("/flyer/presets", response_model=List[PresetResponse])
def get_presets():
    return list_presets()


@router.get("/flyer/templates")
def get_template_keys():
    return {"templates": list_template_keys()}


@router.get("/flyer/presets/suggest", response_model=PresetResponse)
def get_suggested_preset(
    theme: str = Query(..., min_length=1),
    dress_code: Optional[str] = Query(None, alias="dressCode"),
    note: Optional[str] = None,
):
    """Best keyword match for an event; the first preset when nothing matches."""
    preset = suggest_preset(theme, dress_code, note)
    return PresetResponse(
        id=preset.id,
        label=preset.label,
        subtitle=preset.subtitle,
        template=preset.template_key,
        palette=list(preset.palette),
    )
