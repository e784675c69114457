"""
Error taxonomy for flyer generation.

Configuration failures abort a render. Supplier failures are absorbed by the
generator and replaced with local fallbacks.
"""


class FlyerError(Exception):
    """Base class for all flyer engine errors."""


class FlyerConfigurationError(FlyerError):
    """A resource the renderer cannot work without is unavailable."""


class FontUnavailableError(FlyerConfigurationError):
    """The Body font could not be resolved locally or over the network."""


class RasterizerUnavailableError(FlyerConfigurationError):
    """Pillow was built without the FreeType backend."""


class SupplierError(FlyerError):
    """An external copy or artwork supplier failed."""


class CopySupplierError(SupplierError):
    pass


class ArtworkSupplierError(SupplierError):
    pass


class ReferenceAssetMissingError(FlyerError):
    """A reference preset's background image could not be read."""

    def __init__(self, preset_id: str, path: str):
        super().__init__(f"Background asset for preset '{preset_id}' not found at {path}")
        self.preset_id = preset_id
        self.path = path
