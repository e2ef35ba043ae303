"""Influence of control points over the samples of a subdivided curve.

A control point influences a fine sample if it appears in that sample's weight
map. Because subdivision masks are local, each control point influences one
contiguous run of samples (or, for closed curves, a run at each end of the
sample sequence). These runs bound the part of the curve that has to be
recomputed when a control point moves.
"""

def find_influence_ranges(samples):
    """Find the runs of fine samples influenced by each control point.

    Parameters:
        samples: sequence of FineSample objects.

    Returns: dict mapping each control index to a list of (first, last)
        inclusive index ranges into samples, in increasing order.
    """
    ranges = {}
    started = {}
    previous = {}
    for i, sample in enumerate(samples):
        for k in sample.weights:
            if k not in started:
                started[k] = i
        for k in previous:
            if k not in sample.weights:
                ranges.setdefault(k, []).append((started.pop(k), i - 1))
        previous = sample.weights
    for k in previous:
        ranges.setdefault(k, []).append((started.pop(k), len(samples) - 1))
    return ranges

def merge_ranges(ranges, length):
    """Clamp (first, last) ranges to [0, length-1] and merge any that overlap
    or abut. Returns a sorted list of disjoint ranges."""
    merged = []
    for first, last in sorted(ranges):
        first = max(first, 0)
        last = min(last, length - 1)
        if first > last:
            continue
        if merged and first <= merged[-1][1] + 1:
            merged[-1] = (merged[-1][0], max(merged[-1][1], last))
        else:
            merged.append((first, last))
    return merged

def range_for_indices(influence_ranges, indices, length):
    """Return the merged ranges of fine samples influenced by any of the given
    control indices."""
    ranges = []
    for k in indices:
        ranges.extend(influence_ranges.get(k, []))
    return merge_ranges(ranges, length)

def dominant_indices(weights, count):
    """Return up to count control indices, ordered from highest to lowest weight.

    Ties keep the order of the weight map."""
    ranked = sorted(weights, key=weights.get, reverse=True)
    return ranked[:count]
