"""Curve subdivision schemes.

Each scheme refines a sequence of FineSample objects (see weights.py) into a
denser sequence approximating a smooth curve. Every new sample is an affine
combination of existing samples, formed with weights.combine(), so the weight
map of each output sample records exactly how it depends on the original
control points.

Three schemes are provided:
 - B-spline: uniform B-splines of any degree >= 2 via the Lane-Riesenfeld
   algorithm (midpoint insertion followed by repeated averaging). Approximating.
 - Dyn-Levin: the four-point interpolating scheme. Existing samples are never
   moved; each pass inserts one new sample per edge.
 - Catmull-Rom: centripetal-style Catmull-Rom splines evaluated with the
   Barry-Goldman pyramid, where knot spacing is |Pj - Pi|**tension. As the
   blend weights depend on segment lengths, samples record the window and
   parameter they came from (their 'provenance') so they can be regenerated
   when the control points move.

Use subdivide(points, config) to run the scheme selected by a CurveConfig.
"""

import collections
import enum
import numbers

import numpy

from . import weights
from .errors import InvalidConfig

class Scheme(enum.Enum):
    BSPLINE = 'bspline'
    DYN_LEVIN = 'dyn-levin'
    CATMULL_ROM = 'catmull-rom'

CurveConfig = collections.namedtuple('CurveConfig', ('scheme', 'degree', 'resolution', 'open', 'tension'),
    defaults=(Scheme.BSPLINE, 2, 5, True, 0.5))

def parse_scheme(scheme):
    """Return the Scheme for a Scheme member or its string value."""
    if isinstance(scheme, Scheme):
        return scheme
    try:
        return Scheme(scheme)
    except ValueError:
        names = ', '.join(repr(s.value) for s in Scheme)
        raise InvalidConfig('Unknown subdivision scheme {!r}: must be one of {}.'.format(scheme, names)) from None

def _as_int(name, value):
    if (isinstance(value, bool) or not isinstance(value, numbers.Real) or not numpy.isfinite(value)
            or int(value) != value):
        raise InvalidConfig('{} must be an integer, not {!r}.'.format(name, value))
    return int(value)

def make_config(config=None, **changes):
    """Return a validated CurveConfig.

    Parameters:
        config: CurveConfig to start from, or None for the defaults.
        **changes: fields to replace.

    Degree is clamped to a minimum of 2 and tension to the range [0, 1], so
    that interactive edits are never rejected for being slightly out of range.
    Other bad values raise InvalidConfig.
    """
    if config is None:
        config = CurveConfig()
    unknown = set(changes) - set(CurveConfig._fields)
    if unknown:
        raise InvalidConfig('Unknown curve configuration field(s): {}.'.format(', '.join(sorted(unknown))))
    config = config._replace(**changes)
    scheme = parse_scheme(config.scheme)
    degree = max(2, _as_int('degree', config.degree))
    resolution = _as_int('resolution', config.resolution)
    if resolution < 0:
        raise InvalidConfig('resolution must be non-negative, not {}.'.format(resolution))
    if isinstance(config.tension, bool) or not isinstance(config.tension, numbers.Real) or numpy.isnan(config.tension):
        raise InvalidConfig('tension must be a number, not {!r}.'.format(config.tension))
    tension = min(max(float(config.tension), 0.0), 1.0)
    return CurveConfig(scheme, degree, resolution, bool(config.open), tension)

def subdivide(samples, config):
    """Refine a list of FineSamples with the scheme described by a CurveConfig.

    Fewer than three samples are returned unchanged. Closed curves end with a
    copy of their first sample."""
    samples = list(samples)
    if len(samples) < 3:
        return samples
    if config.scheme is Scheme.BSPLINE:
        fine = bspline(samples, config.degree, config.resolution, config.open)
    elif config.scheme is Scheme.DYN_LEVIN:
        fine = dyn_levin(samples, config.resolution, config.open)
    elif config.scheme is Scheme.CATMULL_ROM:
        fine = catmull_rom(samples, config.resolution, config.open, config.tension)
    else:
        raise InvalidConfig('Unknown subdivision scheme {!r}.'.format(config.scheme))
    if not config.open:
        fine.append(fine[0])
    return fine

def bspline(samples, degree, resolution, open):
    """Lane-Riesenfeld subdivision for a uniform B-spline of the given degree.

    Open curves are clamped: the end edges are never split and the end samples
    never move."""
    odd = degree % 2 == 1
    loops = (degree - (1 if odd else 2)) // 2
    fine = list(samples)
    for _ in range(resolution):
        fine = _split_edges(fine, open)
        if not odd:
            fine = _average(fine, open)
        for _ in range(loops):
            fine = _smooth(fine, open)
    return fine

def _split_edges(fine, open):
    n = len(fine)
    if open:
        out = [fine[0]]
        for j in range(1, n-2):
            out.append(fine[j])
            out.append(weights.combine([(0.5, fine[j]), (0.5, fine[j+1])]))
        out.extend(fine[-2:])
    else:
        out = []
        for j in range(n):
            out.append(fine[j])
            out.append(weights.combine([(0.5, fine[j]), (0.5, fine[(j+1)%n])]))
    return out

def _average(fine, open):
    n = len(fine)
    averaged = [weights.combine([(0.5, fine[j]), (0.5, fine[(j+1)%n])]) for j in range(n - (1 if open else 0))]
    if open:
        return [fine[0]] + averaged + [fine[-1]]
    return averaged

def _smooth(fine, open):
    n = len(fine)
    smoothed = [weights.combine([(0.25, fine[j]), (0.5, fine[(j+1)%n]), (0.25, fine[(j+2)%n])])
        for j in range(n - (2 if open else 0))]
    if open:
        start = [fine[0], weights.combine([(0.75, fine[0]), (0.25, fine[1])])]
        end = [weights.combine([(0.25, fine[-2]), (0.75, fine[-1])]), fine[-1]]
        return start + smoothed + end
    return smoothed

# mask applied to samples i-1, i, i+1, i+2 to insert a point between i and i+1
DYN_LEVIN_MASK = (-1/16, 9/16, 9/16, -1/16)
# one-sided masks for open curves, applied from the end sample inward
DYN_LEVIN_BOUNDARY_MASK = (1/3, 15/16, -1/3, 1/16)
QUADRATIC_BOUNDARY_MASK = (3/8, 3/4, -1/8)

def dyn_levin(samples, resolution, open):
    """Dyn-Levin four-point interpolating subdivision.

    Each pass keeps every existing sample and inserts a new one after it (except
    after the last sample of an open curve)."""
    fine = list(samples)
    for _ in range(resolution):
        n = len(fine)
        out = []
        for i in range(n - (1 if open else 0)):
            out.append(fine[i])
            if open and i == 0:
                out.append(_dyn_levin_boundary(fine[:4]))
            elif open and i == n - 2:
                out.append(_dyn_levin_boundary(fine[::-1][:4]))
            else:
                neighbors = [fine[(i+k)%n] for k in (-1, 0, 1, 2)]
                out.append(weights.combine(zip(DYN_LEVIN_MASK, neighbors)))
        if open:
            out.append(fine[-1])
        fine = out
    return fine

def _dyn_levin_boundary(inward):
    # inward runs from the end sample toward the interior; a three-sample
    # curve has no fourth sample for the cubic mask.
    mask = DYN_LEVIN_BOUNDARY_MASK if len(inward) == 4 else QUADRATIC_BOUNDARY_MASK
    return weights.combine(zip(mask, inward))

def catmull_rom(samples, resolution, open, tension):
    """Catmull-Rom subdivision with 2**resolution steps per segment.

    Open curves get their end samples doubled so that the first and last
    segments have tangent anchors."""
    if resolution == 0:
        return list(samples)
    windowed = catmull_rom_windows(samples, open)
    steps = 2**resolution
    fine = []
    for start in range(len(windowed) - (3 if open else 0)):
        for i in range(0 if start == 0 else 1, steps + 1):
            fine.append(catmull_rom_sample(windowed, start, i / steps, tension))
    return fine

def catmull_rom_windows(samples, open):
    """Return the sample sequence over which Catmull-Rom windows are taken."""
    samples = list(samples)
    if open:
        return samples[:1] + samples + samples[-1:]
    return samples

def catmull_rom_sample(windowed, start, local_t, tension):
    """Evaluate the Catmull-Rom segment between windowed[start+1] and
    windowed[start+2] at fractional position local_t.

    Indices wrap around, for closed curves. The resulting FineSample has
    provenance (start, local_t)."""
    n = len(windowed)
    p0, p1, p2, p3 = [windowed[(start + k) % n] for k in range(4)]
    def knot(t, pi, pj):
        return numpy.sqrt(((pj.point - pi.point)**2).sum())**tension + t
    t0 = 0
    t1 = knot(t0, p0, p1)
    t2 = knot(t1, p1, p2)
    t3 = knot(t2, p2, p3)
    t = t1 + (t2 - t1) * local_t
    def interp(ta, tb, a, b):
        if tb - ta == 0:
            return a
        return weights.combine([((tb - t) / (tb - ta), a), ((t - ta) / (tb - ta), b)])
    a1 = interp(t0, t1, p0, p1)
    a2 = interp(t1, t2, p1, p2)
    a3 = interp(t2, t3, p2, p3)
    b1 = interp(t0, t2, a1, a2)
    b2 = interp(t1, t3, a2, a3)
    c = interp(t1, t2, b1, b2)
    # coincident points can drop a window member from the combination; keep it
    # as a zero weight so it still counts as influencing this sample.
    structural = {k: 0.0 for p in (p0, p1, p2, p3) for k in p.weights}
    structural.update(c.weights)
    return c._replace(weights=structural, provenance=(start, local_t))
