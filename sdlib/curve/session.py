import numpy

class DragSession:
    """Interaction state for dragging a subdivision curve with a pointer.

    A presentation layer owns one DragSession and forwards pointer events to
    it. The primary curve is the one that is hit-tested and dragged; companion
    curves share its control points (for example the control polygon, drawn as
    a resolution-0 curve) and receive the same control point moves.

    Example:
        polygon = SubdivisionCurve(points, resolution=0)
        smooth = SubdivisionCurve(points, resolution=5)
        session = DragSession(smooth, companions=[polygon], spread_width=2)
        session.press((120, 400))
        session.drag((125, 397))
        session.release()
    """
    def __init__(self, curve, companions=(), spread_width=1):
        if spread_width < 1:
            raise ValueError('spread_width must be at least 1, not {}.'.format(spread_width))
        self.curve = curve
        self.companions = list(companions)
        self.spread_width = spread_width
        self.dragging = False
        self.last_pointer = None
        self.hit = None

    @property
    def curves(self):
        return [self.curve] + self.companions

    def hover(self, pointer):
        """Return the location on the primary curve closest to the pointer."""
        return self.curve.closest_point(pointer)

    def press(self, pointer):
        """Start dragging the curve location nearest the pointer.

        Returns: the CurveLocation that will be dragged."""
        self.hit = self.curve.closest_point(pointer)
        self.last_pointer = numpy.array(pointer, dtype=float)
        self.dragging = True
        return self.hit

    def drag(self, pointer):
        """Move the location captured by press() along with the pointer.

        Returns: dict of new control point positions, or None if no drag is
        in progress."""
        if not self.dragging:
            return None
        pointer = numpy.array(pointer, dtype=float)
        delta = pointer - self.last_pointer
        self.last_pointer = pointer
        position_map = self.curve.move_point(self.hit, delta, self.spread_width)
        for companion in self.companions:
            companion.adjust_points(position_map)
        return position_map

    def release(self):
        self.dragging = False
        self.hit = None

    def set_points(self, points):
        for curve in self.curves:
            curve.set_points(points)

    def adjust_points(self, position_map):
        for curve in self.curves:
            curve.adjust_points(position_map)
