'''
Curve
-----
Subdivision curves: dense polylines refined from a few control points, which
remember how much each control point contributes to every sample so that they
can be edited interactively.
 - curve.subdivision_curve: the SubdivisionCurve class, which owns the control points and the subdivided curve, answers closest-point and arclength queries, and applies drags.
 - curve.schemes: the B-spline (Lane-Riesenfeld), Dyn-Levin four-point, and Catmull-Rom subdivision schemes, and the CurveConfig type that selects between them.
 - curve.session: DragSession, which tracks pointer-drag state for a curve and any companion curves sharing its control points.
 - curve.arclength: arclength parametrization of a polyline.
 - curve.influence: which samples of a subdivided curve each control point influences.
 - curve.drag: converting a drag of a point on the curve into control point moves.
 - curve.geometry: basic algorithms for polyline curves.
 - curve.weights: arithmetic on the weight maps that link samples to control points.
 - curve.errors: exceptions raised by the above.
 '''
