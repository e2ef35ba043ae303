"""Algebra over weight maps.

A weight map is a dict from control-point index to the coefficient with which
that control point contributes to a sample of the subdivided curve. Every
subdivision step is an affine combination of existing samples, so combining
samples combines their weight maps in exactly the same way, and the weights of
every sample sum to one.
"""

import collections

import numpy

FineSample = collections.namedtuple('FineSample', ('point', 'weights', 'provenance'), defaults=(None,))

def identity_samples(points):
    """Return one FineSample per control point, each depending only on itself."""
    return [FineSample(numpy.array(point, dtype=float), {i: 1.0}) for i, point in enumerate(points)]

def scale_weights(factor, weights):
    return {k: factor * w for k, w in weights.items()}

def add_weights(a, b):
    """Sum two weight maps; keys from either map are kept."""
    out = dict(a)
    for k, w in b.items():
        out[k] = out.get(k, 0) + w
    return out

def blend_weights(a, b, t):
    """Return the weight map of the point a fraction t of the way from a to b."""
    return add_weights(scale_weights(1 - t, a), scale_weights(t, b))

def weight_sum(weights):
    return sum(weights.values())

def combine(terms, provenance=None):
    """Form an affine combination of fine samples.

    Parameters:
        terms: sequence of (factor, FineSample) pairs.
        provenance: value to store in the provenance field of the result.

    Returns: a FineSample whose point and weight map are the same combination
    of the input points and weight maps."""
    point = numpy.zeros(2)
    weights = {}
    for factor, sample in terms:
        point = point + factor * sample.point
        for k, w in sample.weights.items():
            weights[k] = weights.get(k, 0) + factor * w
    return FineSample(point, weights, provenance)

def weighted_position(weights, control_points):
    """Evaluate a weight map against the current control point positions."""
    point = numpy.zeros(2)
    for k, w in weights.items():
        point = point + w * control_points[k]
    return point
