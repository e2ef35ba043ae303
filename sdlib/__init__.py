'''
# sdlib

Python modules for interactive editing of subdivision curves.

The library does no drawing and no event handling: it takes control points and
pointer positions in, and hands polylines and control point moves back to
whatever presentation layer is in use.

Curve
-----
Functions and classes for subdivision curves, approximated as series of points (polylines).
 - curve.subdivision\_curve: subdivide control points with a B-spline, Dyn-Levin, or Catmull-Rom scheme; query closest points and arclength positions; drag the curve and recompute only what moved.
 - curve.schemes: the subdivision schemes themselves, and their configuration.
 - curve.session: pointer-drag state for a curve and its companion curves.
 - curve.arclength: arclength parametrization and uniform resampling of polylines.
 - curve.geometry: basic algorithms for polyline curves.

'''
