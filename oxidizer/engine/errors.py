"""Error taxonomy for the oxidizer.

A run either succeeds and writes one complete file, or fails with one of
these before any output exists.
"""


class OxidizerError(Exception):
    """Base class for every error the oxidizer raises on purpose."""


class ConfigurationError(OxidizerError, ValueError):
    """Invalid run parameters (passes, intensity, level/texture token, ...)."""


class DecodingError(OxidizerError):
    """The input file could not be opened or decoded."""


class EncodingError(OxidizerError):
    """The output file could not be written."""
