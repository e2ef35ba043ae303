import numpy

from . import influence

def project_drag(weights, delta, spread_width, control_points):
    """Convert a drag of a point on the curve into new control point positions.

    The spread_width control points with the most influence over the dragged
    location (according to its weight map) each move by delta / S, where S is
    the sum of their weights. So dragging a location that depends entirely on
    one control point moves that point by exactly delta, while a location
    shared between several points moves each of them further, to compensate for
    each having only part of the influence.

    Parameters:
        weights: weight map of the dragged location, e.g. from
            SubdivisionCurve.closest_point().weights
        delta: (dx, dy) displacement of the dragged location.
        spread_width: maximum number of control points to move (>= 1).
        control_points: (n, 2) array of current control point positions.

    Returns: dict mapping each moved control index to its new position.
    """
    if spread_width < 1:
        raise ValueError('spread_width must be at least 1, not {}.'.format(spread_width))
    if not weights:
        raise ValueError('Cannot drag a location with an empty weight map.')
    control_points = numpy.asarray(control_points, dtype=float)
    count = min(spread_width, len(weights), len(control_points))
    moving = influence.dominant_indices(weights, count)
    total = sum(weights[k] for k in moving)
    if total == 0:
        raise ValueError('Cannot drag a location whose dominant weights sum to zero.')
    step = numpy.asarray(delta, dtype=float) / total
    return {k: control_points[k] + step for k in moving}
