"""
core/errors.py

Errors raised by the mixing pipeline. All derive from ValueError so callers
that already guard against bad arguments keep working.
"""


class MixerError(ValueError):
    """Base class for pipeline errors."""


class InvalidInputError(MixerError):
    """Raster is empty (zero width or height) or otherwise unusable."""


class NoSourcesError(MixerError):
    """A mix was requested with no spectra to combine."""


class DimensionMismatchError(MixerError):
    """Sources passed to a single mix differ in width/height."""
