from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import List


class Settings(BaseSettings):
    openai_api_key: str = ""  # Set via OPENAI_API_KEY env var
    openai_copy_model: str = "gpt-4o-mini"
    openai_image_model: str = "gpt-image-1"
    openai_image_size: str = "1024x1536"
    supplier_timeout_seconds: float = 45.0

    # Flyer text
    brand_label: str = "Community Event"
    closing_line: str = "Let's celebrate together!"

    # Assets
    logo_image_path: str = "assets/logo.png"
    preset_assets_dir: str = "assets/flyer-assets"
    font_dir: str = "assets/fonts"

    # Extra local font candidates, searched before the built-in lists
    body_font_paths: List[str] = []
    display_font_paths: List[str] = []
    script_font_paths: List[str] = []

    # Network fallback for the Body font (primary + mirror)
    font_urls: List[str] = [
        "https://raw.githubusercontent.com/google/fonts/main/ofl/montserrat/Montserrat%5Bwght%5D.ttf",
        "https://cdn.jsdelivr.net/gh/google/fonts@main/ofl/montserrat/Montserrat%5Bwght%5D.ttf",
    ]
    font_fetch_timeout_seconds: float = 20.0

    output_dir: str = "generated_images"

    host: str = "0.0.0.0"
    port: int = 8000

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
