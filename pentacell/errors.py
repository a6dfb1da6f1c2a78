"""
Error taxonomy for pentacell.

Every error derives from ``PentacellError``, itself a ``ValueError``, so
callers that already guard argument errors with ``except ValueError`` keep
working.
"""


class PentacellError(ValueError):
    """Base class for all pentacell failures."""


class OutOfRangeCoordinate(PentacellError):
    """Longitude/latitude outside [-180, 180] x [-90, 90] or not finite."""


class InvalidResolution(PentacellError):
    """Resolution outside the addressable range, or pointing the wrong way."""


class InvalidCell(PentacellError):
    """Cell identifier is zero or does not match the bit layout."""


class EncodingError(PentacellError):
    """Inconsistent (base_cell, resolution, path) passed to the encoder."""
