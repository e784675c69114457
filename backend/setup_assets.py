#!/usr/bin/env python3
"""
Setup script to download flyer fonts and prepare the assets directories.
Run this before starting the server.
"""

import urllib.request
from pathlib import Path

from flyerkit.config import get_settings
from flyerkit.layout_profiles import REFERENCE_CONFIGS

settings = get_settings()

FONTS_DIR = Path(settings.font_dir)
PRESETS_DIR = Path(settings.preset_assets_dir)
LOGO_PATH = Path(settings.logo_image_path)

GOOGLE_FONTS = "https://raw.githubusercontent.com/google/fonts/main/ofl"
FONT_FILES = {
    "Montserrat[wght].ttf": f"{GOOGLE_FONTS}/montserrat/Montserrat%5Bwght%5D.ttf",
    "DancingScript[wght].ttf": f"{GOOGLE_FONTS}/dancingscript/DancingScript%5Bwght%5D.ttf",
}


def setup_directories():
    """Create required directories."""
    print("Creating directories...")
    FONTS_DIR.mkdir(parents=True, exist_ok=True)
    PRESETS_DIR.mkdir(parents=True, exist_ok=True)
    Path(settings.output_dir).mkdir(parents=True, exist_ok=True)
    print("✓ Directories created")


def download_fonts():
    """Download the Montserrat and Dancing Script variable fonts."""
    for name, url in FONT_FILES.items():
        dest_path = FONTS_DIR / name
        if dest_path.exists():
            print(f"✓ {name} already exists, skipping download")
            continue

        print(f"Downloading {name}...")
        try:
            urllib.request.urlretrieve(url, dest_path)
            print(f"✓ Installed {name}")
        except OSError as e:
            print(f"✗ Failed to download {name}: {e}")
            print(f"  Please download it manually and place it in: {FONTS_DIR}")


def check_assets() -> bool:
    """Report which fonts, logo and preset backgrounds are present."""
    print("\nAsset Status:")

    missing_fonts = [name for name in FONT_FILES if not (FONTS_DIR / name).exists()]
    for name in FONT_FILES:
        print(f"{'✗' if name in missing_fonts else '✓'} {name}")

    if LOGO_PATH.exists():
        print("✓ logo found")
    else:
        print(f"✗ logo MISSING ({LOGO_PATH}); the header renders without a brand mark")

    missing_backgrounds = []
    for preset_id, config in REFERENCE_CONFIGS.items():
        if not (PRESETS_DIR / config.background).exists():
            missing_backgrounds.append(preset_id)
    if missing_backgrounds:
        print(f"✗ {len(missing_backgrounds)} preset backgrounds MISSING in {PRESETS_DIR}:")
        for preset_id in missing_backgrounds:
            print(f"  → {preset_id}: {REFERENCE_CONFIGS[preset_id].background}")
        print("  These presets render with the generative template instead.")
    else:
        print("✓ All preset backgrounds found")

    return not missing_fonts and LOGO_PATH.exists() and not missing_backgrounds


def main():
    print("=" * 50)
    print("Flyer Generator - Asset Setup")
    print("=" * 50)
    print()

    setup_directories()
    download_fonts()

    all_ready = check_assets()

    print()
    print("=" * 50)
    if all_ready:
        print("✓ All assets ready! You can start the server.")
    else:
        print("⚠ Some assets are missing.")
        print("  The server will still work using system fonts and generative layouts.")
    print("=" * 50)


if __name__ == "__main__":
    main()
