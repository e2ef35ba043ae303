import numpy
import pytest
from numpy.testing import assert_allclose

from sdlib.curve import schemes
from sdlib.curve import weights
from sdlib.curve.errors import InvalidConfig

SQUARE = [(0, 0), (0, 10), (10, 10), (10, 0)]
ZIGZAG = [(50, 0), (-87, 350), (180, 590), (503, 590), (742, 350), (550, 0)]

ALL_CONFIGS = [
    schemes.CurveConfig(schemes.Scheme.BSPLINE, degree, 3, open, 0.5)
        for degree in (2, 3, 4, 5) for open in (True, False)
] + [
    schemes.CurveConfig(schemes.Scheme.DYN_LEVIN, 2, 3, open, 0.5) for open in (True, False)
] + [
    schemes.CurveConfig(schemes.Scheme.CATMULL_ROM, 2, 3, open, tension)
        for tension in (0, 0.5, 1) for open in (True, False)
]

def _fine(points, config):
    return schemes.subdivide(weights.identity_samples(points), config)

def _fine_points(points, config):
    return numpy.array([sample.point for sample in _fine(points, config)])

def test_make_config_defaults():
    config = schemes.make_config()
    assert config == schemes.CurveConfig(schemes.Scheme.BSPLINE, 2, 5, True, 0.5)

def test_make_config_normalizes():
    config = schemes.make_config(scheme='dyn-levin', degree=1, tension=1.5)
    assert config.scheme is schemes.Scheme.DYN_LEVIN
    assert config.degree == 2
    assert config.tension == 1
    assert schemes.make_config(tension=-3).tension == 0
    assert schemes.make_config(resolution=3.0).resolution == 3

@pytest.mark.parametrize('changes', [
    dict(scheme='bezier'),
    dict(resolution=-1),
    dict(degree=2.5),
    dict(tension='high'),
    dict(smoothness=3),
    dict(resolution=float('inf')),
    dict(degree=float('nan')),
])
def test_make_config_rejects(changes):
    with pytest.raises(InvalidConfig):
        schemes.make_config(**changes)

def test_bspline_one_pass_by_hand():
    config = schemes.CurveConfig(schemes.Scheme.BSPLINE, 2, 1, True, 0.5)
    expected = [(0, 0), (0, 5), (2.5, 10), (7.5, 10), (10, 5), (10, 0)]
    assert_allclose(_fine_points(SQUARE, config), expected)

def test_bspline_open_keeps_endpoints():
    for degree in (2, 3, 4, 5):
        config = schemes.CurveConfig(schemes.Scheme.BSPLINE, degree, 4, True, 0.5)
        fine = _fine_points(ZIGZAG, config)
        assert_allclose(fine[0], ZIGZAG[0])
        assert_allclose(fine[-1], ZIGZAG[-1])

@pytest.mark.parametrize('config', ALL_CONFIGS)
def test_weights_sum_to_one(config):
    for sample in _fine(ZIGZAG, config):
        assert weights.weight_sum(sample.weights) == pytest.approx(1, abs=1e-9)

@pytest.mark.parametrize('config', [c for c in ALL_CONFIGS if c.scheme is not schemes.Scheme.CATMULL_ROM])
def test_affine_invariance(config):
    angle = 0.7
    transform = 2.5 * numpy.array([[numpy.cos(angle), -numpy.sin(angle)], [numpy.sin(angle), numpy.cos(angle)]])
    offset = numpy.array([13, -4])
    points = numpy.array(ZIGZAG, dtype=float)
    moved = points @ transform.T + offset
    assert_allclose(_fine_points(moved, config), _fine_points(points, config) @ transform.T + offset, atol=1e-8)

@pytest.mark.parametrize('open', [True, False])
def test_dyn_levin_interpolates(open):
    for resolution in range(4):
        coarse = _fine_points(ZIGZAG, schemes.CurveConfig(schemes.Scheme.DYN_LEVIN, 2, resolution, open, 0.5))
        fine = _fine_points(ZIGZAG, schemes.CurveConfig(schemes.Scheme.DYN_LEVIN, 2, resolution + 1, open, 0.5))
        assert len(fine) == 2 * len(coarse) - 1
        assert_allclose(fine[::2], coarse)

def test_dyn_levin_three_points():
    points = [(0, 0), (1, 1), (2, 0)]
    fine = _fine_points(points, schemes.CurveConfig(schemes.Scheme.DYN_LEVIN, 2, 1, True, 0.5))
    # a parabola through the three points
    assert_allclose(fine, [(0, 0), (0.5, 0.75), (1, 1), (1.5, 0.75), (2, 0)])

def test_dyn_levin_boundary_mask():
    points = [(0, 0), (1, 0), (2, 0), (3, 6)]
    fine = _fine_points(points, schemes.CurveConfig(schemes.Scheme.DYN_LEVIN, 2, 1, True, 0.5))
    first = _fine(points, schemes.CurveConfig(schemes.Scheme.DYN_LEVIN, 2, 1, True, 0.5))[1]
    assert first.weights == pytest.approx({0: 1/3, 1: 15/16, 2: -1/3, 3: 1/16})
    assert_allclose(fine[1], (15/16 - 2/3 + 3/16, 6/16))

@pytest.mark.parametrize('scheme', list(schemes.Scheme))
def test_closed_curves_end_at_start(scheme):
    for resolution in range(4):
        config = schemes.CurveConfig(scheme, 3, resolution, False, 0.5)
        fine = _fine(SQUARE, config)
        assert_allclose(fine[-1].point, fine[0].point)
        assert fine[-1].weights == fine[0].weights

def test_fewer_than_three_points_unchanged():
    for scheme in schemes.Scheme:
        for open in (True, False):
            config = schemes.CurveConfig(scheme, 2, 4, open, 0.5)
            assert_allclose(_fine_points([(0, 0), (1, 1)], config), [(0, 0), (1, 1)])
            assert_allclose(_fine_points([(3, 4)], config), [(3, 4)])

def test_catmull_rom_passes_through_control_points():
    config = schemes.CurveConfig(schemes.Scheme.CATMULL_ROM, 2, 2, True, 0.5)
    fine = _fine(SQUARE, config)
    assert len(fine) == 13
    assert_allclose([sample.point for sample in fine[::4]], SQUARE, atol=1e-9)
    assert fine[0].provenance == (0, 0)
    assert fine[5].provenance == (1, 0.25)
    assert all(sample.provenance is not None for sample in fine)

def test_catmull_rom_sample_regenerates():
    config = schemes.CurveConfig(schemes.Scheme.CATMULL_ROM, 2, 3, False, 0.8)
    fine = _fine(ZIGZAG, config)
    windowed = schemes.catmull_rom_windows(weights.identity_samples(ZIGZAG), open=False)
    for sample in fine:
        again = schemes.catmull_rom_sample(windowed, *sample.provenance, tension=0.8)
        assert_allclose(again.point, sample.point)
        assert again.weights == pytest.approx(sample.weights)

def test_catmull_rom_tension_changes_shape():
    points = [(0, 0), (1, 0), (10, 5), (11, 5)]
    uniform = _fine_points(points, schemes.CurveConfig(schemes.Scheme.CATMULL_ROM, 2, 3, True, 0))
    chordal = _fine_points(points, schemes.CurveConfig(schemes.Scheme.CATMULL_ROM, 2, 3, True, 1))
    assert uniform.shape == chordal.shape
    assert not numpy.allclose(uniform, chordal)

def test_catmull_rom_resolution_zero_is_raw():
    config = schemes.CurveConfig(schemes.Scheme.CATMULL_ROM, 2, 0, True, 0.5)
    fine = _fine(SQUARE, config)
    assert_allclose([sample.point for sample in fine], SQUARE)
    assert all(sample.provenance is None for sample in fine)
