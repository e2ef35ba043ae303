class CurveError(ValueError):
    """Base class for errors raised by the subdivision curve code."""

class InvalidConfig(CurveError):
    """A curve configuration value could not be interpreted (unknown scheme,
    non-integer degree or resolution, and so forth)."""

class DegenerateInput(CurveError):
    """The control points cannot define a curve at all (e.g. there are none)."""

class EmptyCurveQuery(CurveError):
    """A geometric query was made against a curve with fewer than two samples."""
