"""
errors.py
-------------------------------------
Failures raised by the precipitation band pipeline.

Every stage fails fast; nothing here is caught inside the pipeline, so
the first error halts the run and outputs already written stay on disk.
"""


class PrecipBandError(Exception):
    """Base class for all pipeline errors."""


class NotFoundError(PrecipBandError, FileNotFoundError):
    """An input path does not exist."""


class FormatError(PrecipBandError, ValueError):
    """An input file exists but cannot be parsed as raster/vector data."""


class CrsMismatchError(PrecipBandError, ValueError):
    """Raster and boundary are not expressed in the same CRS."""


class InvalidClassificationError(PrecipBandError, ValueError):
    """Threshold table is empty, unordered, overlapping or uses bad codes."""


class NonLinearUnitError(PrecipBandError, ValueError):
    """Area requested on a grid whose CRS uses angular units."""


class OutputExistsError(PrecipBandError, FileExistsError):
    """Destination exists and the export policy is 'error'."""
