import collections
import logging

import numpy

from . import arclength
from . import drag
from . import geometry
from . import influence
from . import schemes
from . import weights
from .errors import DegenerateInput, EmptyCurveQuery

logger = logging.getLogger(__name__)

CurveLocation = collections.namedtuple('CurveLocation', ('point', 'u', 'index', 't', 'weights', 'distance'))
CurveLocation.__doc__ = """A location on a subdivided curve.

Fields:
    point: (x, y) position of the location.
    u: arclength parameter of the location, in [0, 1].
    index: index of the fine sample starting the segment the location is on.
    t: fractional position of the location along that segment.
    weights: weight map of the location over the control points.
    distance: distance to the query point for closest_point(); None for eval_at().
"""

class SubdivisionCurve:
    """A curve defined by control points and refined by a subdivision scheme.

    The curve keeps, for every fine sample, the weights with which each
    control point contributes to it. When a few control points move, only the
    samples they influence are recomputed (see adjust_points() and move_point()).

    Example:
        curve = SubdivisionCurve([(50, 0), (-87, 350), (180, 590), (503, 590)],
            scheme='dyn-levin', resolution=4)
        hit = curve.closest_point((120, 400))
        moved = curve.move_point(hit, (5, -3), spread_width=2)
        control_polygon.adjust_points(moved) # another curve with the same points
        polyline = curve.fine_points
    """
    def __init__(self, points, config=None, **changes):
        """Parameters:
            points: control points, array-like of shape (n, 2) with n >= 1.
            config: CurveConfig to use; if None, the defaults of CurveConfig.
            **changes: CurveConfig fields (scheme, degree, resolution, open,
                tension) overriding those in config.
        """
        self._config = schemes.make_config(config, **changes)
        self._points = _check_points(points)
        self._arclength = None
        self.subdivide()

    @property
    def config(self):
        return self._config

    @property
    def points(self):
        """Copy of the (n, 2) array of control points."""
        return self._points.copy()

    @property
    def fine_samples(self):
        """Tuple of FineSample objects making up the subdivided curve."""
        return tuple(self._fine)

    @property
    def fine_points(self):
        """(m, 2) array of the positions of the fine samples."""
        return numpy.array([sample.point for sample in self._fine])

    @property
    def fine_weights(self):
        return [dict(sample.weights) for sample in self._fine]

    @property
    def influence_ranges(self):
        """Dict mapping each control index to the list of (first, last) ranges
        of fine samples it influences."""
        return {k: list(r) for k, r in self._influence_ranges.items()}

    @property
    def arclength_table(self):
        if self._arclength is None:
            if len(self._fine) < 2:
                raise EmptyCurveQuery('Curve has {} fine sample(s); at least two are required.'.format(len(self._fine)))
            self._arclength = arclength.ArclengthTable(self.fine_points)
        return self._arclength

    @property
    def length(self):
        return self.arclength_table.total_length

    def set_points(self, points):
        """Replace the control points.

        If the number of points is unchanged, the existing weight maps are
        reused to recompute the fine samples; otherwise the curve is
        subdivided from scratch."""
        points = _check_points(points)
        same = len(points) == len(self._points)
        self._points = points
        if same:
            self.recalculate()
        else:
            self.subdivide()

    def set_config(self, **changes):
        """Change one or more CurveConfig fields.

        The curve is subdivided again only if the change matters to the active
        scheme (degree only affects B-splines, tension only Catmull-Rom curves).

        Returns: True if the curve was subdivided again."""
        new = schemes.make_config(self._config, **changes)
        old = self._config
        self._config = new
        if new == old:
            return False
        logger.debug('curve config changed from %s to %s', old, new)
        resubdivide = (new.scheme != old.scheme or new.resolution != old.resolution or new.open != old.open
            or (new.scheme is schemes.Scheme.BSPLINE and new.degree != old.degree)
            or (new.scheme is schemes.Scheme.CATMULL_ROM and new.tension != old.tension))
        if resubdivide:
            self.subdivide()
        return resubdivide

    def subdivide(self):
        """Rebuild all fine samples from the control points."""
        samples = weights.identity_samples(self._points)
        if len(samples) < 3:
            logger.debug('%d control point(s): using raw polyline', len(samples))
        self._fine = schemes.subdivide(samples, self._config)
        self._influence_ranges = influence.find_influence_ranges(self._fine)
        self._arclength = None
        logger.debug('subdivided %d control points into %d samples (%s)',
            len(self._points), len(self._fine), self._config.scheme.value)

    def recalculate(self, start=None, stop=None):
        """Recompute the positions of fine samples start through stop (inclusive)
        from the current control points.

        The whole curve is recomputed if start or stop are None. Catmull-Rom
        samples are regenerated from their provenance, since their weights
        depend on the control point positions; all other samples reuse their
        weight maps."""
        last = len(self._fine) - 1
        start = 0 if start is None else max(start, 0)
        stop = last if stop is None else min(stop, last)
        windowed = None
        if self._config.scheme is schemes.Scheme.CATMULL_ROM:
            identity = weights.identity_samples(self._points)
            windowed = schemes.catmull_rom_windows(identity, self._config.open)
        for i in range(start, stop + 1):
            sample = self._fine[i]
            if windowed is not None and sample.provenance is not None:
                window_start, local_t = sample.provenance
                self._fine[i] = schemes.catmull_rom_sample(windowed, window_start, local_t, self._config.tension)
            else:
                point = weights.weighted_position(sample.weights, self._points)
                self._fine[i] = sample._replace(point=point)
        self._arclength = None

    def adjust_points(self, position_map):
        """Move some control points and recompute only the affected samples.

        Parameters:
            position_map: dict mapping control indices to new (x, y) positions,
                e.g. as returned by move_point() on a curve sharing the same
                control points.

        Returns: list of (first, last) ranges of fine samples recomputed.
        """
        n = len(self._points)
        for k in position_map:
            if not 0 <= k < n:
                raise IndexError('Control point index {} out of range for {} points.'.format(k, n))
        positions = {k: numpy.asarray(p, dtype=float) for k, p in position_map.items()}
        for k, position in positions.items():
            if position.shape != (2,):
                raise ValueError('New position for control point {} must have shape (2,), not {}.'.format(k, position.shape))
        for k, position in positions.items():
            self._points[k] = position
        ranges = influence.range_for_indices(self._influence_ranges, position_map, len(self._fine))
        for start, stop in ranges:
            self.recalculate(start, stop)
        self._arclength = None
        logger.debug('adjusted control points %s; recalculated %s', sorted(position_map), ranges)
        return ranges

    def move_point(self, hit, delta, spread_width=1):
        """Drag a location on the curve by delta.

        Parameters:
            hit: CurveLocation from closest_point() or eval_at(); only its
                weights are used.
            delta: (dx, dy) displacement.
            spread_width: number of most-influential control points to move.

        Returns: dict mapping the moved control indices to their new positions,
            for applying to companion curves with adjust_points().
        """
        position_map = drag.project_drag(hit.weights, delta, spread_width, self._points)
        self.adjust_points(position_map)
        return position_map

    def closest_point(self, point):
        """Find the location on the curve closest to a given point.

        Returns: CurveLocation."""
        table = self.arclength_table
        index, t, closest, distance = geometry.closest_point_on_polyline(point, self.fine_points)
        return CurveLocation(point=closest, u=table.parameter_at(index, t), index=index, t=t,
            weights=self._blend(index, t), distance=distance)

    def eval_at(self, u):
        """Return the CurveLocation at arclength parameter u (clamped to [0, 1])."""
        table = self.arclength_table
        u = min(max(float(u), 0.0), 1.0)
        if table.degenerate:
            sample = self._fine[0]
            return CurveLocation(point=sample.point.copy(), u=0.0, index=0, t=0.0,
                weights=dict(sample.weights), distance=None)
        index, t = table.fine_location(u)
        point = geometry.lerp(self._fine[index].point, self._fine[index+1].point, t)
        return CurveLocation(point=point, u=u, index=index, t=t, weights=self._blend(index, t), distance=None)

    def resample(self, num_points):
        """Return num_points points spaced evenly by arclength along the curve."""
        return self.arclength_table.resample(num_points)

    def _blend(self, index, t):
        return weights.blend_weights(self._fine[index].weights, self._fine[index+1].weights, t)

def _check_points(points):
    points = numpy.array(points, dtype=float)
    if points.size == 0:
        raise DegenerateInput('At least one control point is required.')
    if points.ndim != 2 or points.shape[1] != 2:
        raise DegenerateInput('Control points must have shape (n, 2), not {}.'.format(points.shape))
    return points
