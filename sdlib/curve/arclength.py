import numpy

from . import geometry
from .errors import EmptyCurveQuery

class ArclengthTable:
    """Arclength parametrization of a polyline.

    Adjacent duplicate points are dropped before the parametrization is built,
    so that every bracketing interval found by a lookup has non-zero length.

    Attributes:
        points: (m, 2) array of the deduplicated points.
        cumulative: normalized cumulative length at each deduplicated point,
            running from 0 to 1 (all zeros if the polyline has zero length).
        total_length: total length of the polyline.
        indices: for each deduplicated point, the index in the original
            polyline of the last point in its run of duplicates.
        fine_cumulative: normalized cumulative length at every point of the
            original polyline, duplicates included.
    """
    def __init__(self, polyline):
        polyline = numpy.asarray(polyline, dtype=float)
        if len(polyline) < 2:
            raise EmptyCurveQuery('An arclength table needs at least two points, got {}.'.format(len(polyline)))
        self.points, self.indices = geometry.filter_dup_points(polyline)
        lengths = geometry.cumulative_distances(polyline, unit=False)
        self.total_length = lengths[-1]
        self.fine_cumulative = geometry.cumulative_distances(polyline, unit=True)
        self.cumulative = self.fine_cumulative[self.indices]

    def __len__(self):
        return len(self.points)

    @property
    def degenerate(self):
        """True if all the points coincide."""
        return len(self.points) < 2

    def locate(self, u):
        """Find the interval of the deduplicated table that contains u.

        Returns: (i, fraction) such that u lies a given fraction of the way
        from points[i] to points[i+1]. For a degenerate table, (0, 0.0)."""
        if self.degenerate:
            return 0, 0.0
        u = min(max(u, 0), 1)
        if u >= 1:
            return len(self.points) - 2, 1.0
        i = int(numpy.searchsorted(self.cumulative, u, side='right')) - 1
        i = min(max(i, 0), len(self.points) - 2)
        start, stop = self.cumulative[i:i+2]
        return i, float((u - start) / (stop - start))

    def nearest_index(self, u):
        """Return the index of the deduplicated point nearest to u."""
        i, fraction = self.locate(u)
        return i + 1 if fraction > 0.5 else i

    def fine_location(self, u):
        """Map u onto the original (non-deduplicated) polyline.

        Returns: (index, t) such that the point at u lies a fraction t of the
        way from polyline[index] to polyline[index+1]."""
        if self.degenerate:
            return 0, 0.0
        u = min(max(u, 0), 1)
        cumulative = self.fine_cumulative
        # side='right' lands on the last of a run of duplicates, so the
        # bracketing segment has non-zero length except at the very end.
        index = int(numpy.searchsorted(cumulative, u, side='right')) - 1
        index = min(max(index, 0), len(cumulative) - 2)
        start, stop = cumulative[index:index+2]
        if stop == start:
            return index, 1.0
        return index, float(min(max((u - start) / (stop - start), 0), 1))

    def parameter_at(self, index, t):
        """Return the arclength value of the point a fraction t of the way
        along segment index of the original polyline."""
        start, stop = self.fine_cumulative[index:index+2]
        return float((1 - t) * start + t * stop)

    def point_at(self, u):
        if self.degenerate:
            return self.points[0].copy()
        i, fraction = self.locate(u)
        return geometry.lerp(self.points[i], self.points[i+1], fraction)

    def resample(self, num_points):
        """Return num_points points equally spaced by arclength along the polyline."""
        if self.degenerate:
            return numpy.repeat(self.points[:1], num_points, axis=0)
        sample_positions = numpy.linspace(0, 1, num_points)
        x = numpy.interp(sample_positions, self.cumulative, self.points[:,0])
        y = numpy.interp(sample_positions, self.cumulative, self.points[:,1])
        return numpy.transpose([x,y])
