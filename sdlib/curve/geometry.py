import numpy

def dot(a, b):
    """Dot product of two 2d vectors (or of each row of two (n,2) arrays)."""
    return (numpy.asarray(a) * numpy.asarray(b)).sum(axis=-1)

def distance_squared(a, b):
    """Squared distance between two points (or between each row of two arrays)."""
    diff = numpy.asarray(a, dtype=float) - numpy.asarray(b, dtype=float)
    return (diff**2).sum(axis=-1)

def lerp(a, b, t):
    """Linear interpolation (1-t)*a + t*b."""
    return (1 - t) * numpy.asarray(a, dtype=float) + t * numpy.asarray(b, dtype=float)

def cumulative_distances(points, unit=True):
    """Return cumulative distances along a polyline.

    Parameters:
    points: array of shape (n,m) consisting of n points in m dimensions
    unit: if True, return distances divided by total length of the curve,
          if False, return actual arc lengths. A curve of zero total length
          yields all zeros in either case."""
    points = numpy.asarray(points, dtype=float)
    segment_lengths = numpy.sqrt(((points[:-1] - points[1:])**2).sum(axis=1))
    distances = numpy.concatenate([[0], numpy.add.accumulate(segment_lengths)])
    if unit and distances[-1] > 0:
        distances /= distances[-1]
    return distances

def filter_dup_points(points):
    """Return a polyline with no adjacent duplicate or near-duplicate points.

    Returns: (points_out, indices) where indices[i] is the index in the input
    of the last point in the run of duplicates that points_out[i] stands for. Each
    run is represented by its last point, so points_out[i] == points[indices[i]].
    """
    points = numpy.asarray(points, dtype=float)
    points_out = [points[0]]
    indices = [0]
    run_start = points[0]
    for i, point in enumerate(points[1:], start=1):
        if numpy.allclose(point, run_start):
            points_out[-1] = point
            indices[-1] = i
        else:
            run_start = point
            points_out.append(point)
            indices.append(i)
    return numpy.array(points_out), numpy.array(indices)

def closest_point_to_line_segments(point, lines_start, lines_end):
    """Given a point and a set of line segments (specified by starting
    and ending points), return the point on each line segment that is closest to the
    given point, and the parametric position along each line of that point.

    Zero-length segments report their starting point at parametric position 0."""
    v = lines_end - lines_start
    w = point - lines_start
    c1 = (v*w).sum(axis=1)
    c2 = (v*v).sum(axis=1)
    fractional_positions = numpy.zeros_like(c1)
    numpy.divide(c1, c2, out=fractional_positions, where=c2 > 0)
    fractional_positions = fractional_positions.clip(0, 1)
    closest_points = lines_start + fractional_positions[:,numpy.newaxis]*v
    return closest_points, fractional_positions

def project_onto_segment(point, start, end):
    """Project a point onto a single line segment.

    Returns: (closest_point, t, distance) where t in [0, 1] is the parametric
    position of closest_point along the segment."""
    start = numpy.asarray(start, dtype=float)[numpy.newaxis]
    end = numpy.asarray(end, dtype=float)[numpy.newaxis]
    closest, t = closest_point_to_line_segments(numpy.asarray(point, dtype=float), start, end)
    return closest[0], t[0], numpy.sqrt(distance_squared(point, closest[0]))

def closest_point_on_polyline(point, points):
    """Return the segment of a polyline nearest the given point.

    If several segments are equally close, the first one wins.

    Returns: (index, t, closest_point, distance), where the closest point
    lies on the segment from points[index] to points[index+1] at parametric
    position t."""
    point = numpy.asarray(point, dtype=float)
    points = numpy.asarray(points, dtype=float)
    closest_points, fractions = closest_point_to_line_segments(point, points[:-1], points[1:])
    distances_squared = ((point - closest_points)**2).sum(axis=1)
    index = int(distances_squared.argmin())
    return index, float(fractions[index]), closest_points[index], float(numpy.sqrt(distances_squared[index]))
