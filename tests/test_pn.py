import random
from math import pi, cosh, sinh, inf

import pytest

from metricgeom import rn
from metricgeom import pn
from metricgeom.pn import EUCLIDEAN, ELLIPTIC, HYPERBOLIC

## unit tests for metricgeom pn.py

METRICS = [EUCLIDEAN, ELLIPTIC, HYPERBOLIC]


def _randpoints(count, seed, spread=0.3):
    """random finite points, inside hyperbolic space for spread < 0.57"""
    rng = random.Random(seed)
    return [[rng.uniform(-spread, spread) for _ in range(3)] + [rng.uniform(0.8, 1.5)]
            for _ in range(count)]


class TestHomogeneous:
    """dehomogenization and the metric form"""

    def test_dehomogenize(self):
        assert pn.dehomogenize([2.0, 4.0, 6.0, 2.0]) == [1.0, 2.0, 3.0, 1.0]
        # ideal points and near-ideal points are left alone
        assert pn.dehomogenize([1.0, 2.0, 3.0, 0.0]) == [1.0, 2.0, 3.0, 0.0]
        assert pn.dehomogenize([1.0, 2.0, 3.0, 1e-12]) == [1.0, 2.0, 3.0, 1e-12]

    def test_dehomogenize_idempotent(self):
        for p in _randpoints(20, 1, 10.0):
            once = pn.dehomogenize(p)
            assert pn.dehomogenize(once) == once

    def test_homogenize(self):
        assert pn.homogenize([1, 2, 3]) == [1, 2, 3, 1.0]
        assert pn.affineCoordinates([2.0, 4.0, 6.0, 2.0]) == [1.0, 2.0, 3.0]

    def test_inner_product(self):
        u = [1, 2, 3, 4]
        v = [1, 1, 1, 1]
        assert pn.innerProduct(u, v, EUCLIDEAN) == 6.0
        assert pn.innerProduct(u, v, ELLIPTIC) == 10.0
        assert pn.innerProduct(u, v, HYPERBOLIC) == 2.0
        # plain ints are metrics too
        assert pn.innerProduct(u, v, -1) == 2.0

    def test_bad_metric(self):
        with pytest.raises(ValueError):
            pn.innerProduct([1, 0], [1, 0], 2)
        with pytest.raises(rn.DimensionError):
            pn.innerProduct([1, 0, 0], [1, 0], ELLIPTIC)

    def test_normalize(self):
        assert pn.normalize([0.0, 0.0, 0.0, 2.0], HYPERBOLIC) == [0.0, 0.0, 0.0, 1.0]
        assert pn.normalize([3.0, 4.0, 0.0, 7.0], EUCLIDEAN) == pytest.approx([0.6, 0.8, 0.0, 1.4])
        # points on the absolute have zero norm and are unchanged
        assert pn.normalize([1.0, 0.0, 0.0, 1.0], HYPERBOLIC) == [1.0, 0.0, 0.0, 1.0]
        v = [0.0, 3.0, 0.0, 4.0]
        pn.normalize(v, ELLIPTIC, v)
        assert v == pytest.approx([0.0, 0.6, 0.0, 0.8])
        assert pn.norm(pn.setToLength([1.0, 1.0, 0.0, 3.0], 2.0, ELLIPTIC), ELLIPTIC) == \
            pytest.approx(2.0)

    def test_valid_coordinate(self):
        assert pn.isValidCoordinate([0, 0, 0, 1], HYPERBOLIC)
        assert not pn.isValidCoordinate([2, 0, 0, 1], HYPERBOLIC)
        assert not pn.isValidCoordinate([0, 0, 0, 0], ELLIPTIC)
        assert pn.isValidCoordinate([1, 0, 0, 0], EUCLIDEAN)


class TestDistance:
    """metric distances and angles"""

    def test_euclidean(self):
        assert pn.distanceBetween([0, 0, 0, 1], [3, 4, 0, 1], EUCLIDEAN) == 5.0
        assert pn.distanceBetween([0, 0, 0, 2], [6, 8, 0, 2], EUCLIDEAN) == 5.0
        assert pn.distanceBetween([0, 0, 0, 1], [1, 0, 0, 0], EUCLIDEAN) == inf

    def test_elliptic(self):
        d = pn.distanceBetween([0, 0, 0, 1], [1, 0, 0, 0], ELLIPTIC)
        assert d == pytest.approx(pi/2)

    def test_hyperbolic(self):
        q = [sinh(1.5), 0.0, 0.0, cosh(1.5)]
        assert pn.distanceBetween([0, 0, 0, 1], q, HYPERBOLIC) == pytest.approx(1.5)
        # scale does not matter
        q2 = rn.times(-3.0, q)
        assert pn.distanceBetween([0, 0, 0, 2], q2, HYPERBOLIC) == pytest.approx(1.5)

    @pytest.mark.parametrize('metric', METRICS)
    def test_symmetric(self, metric):
        pts = _randpoints(8, 2)
        for p in pts:
            assert pn.distanceBetween(p, p, metric) == 0.0
            for q in pts:
                assert pn.distanceBetween(p, q, metric) == pn.distanceBetween(q, p, metric)

    def test_angle(self):
        assert pn.angleBetween([1, 0, 0, 0], [0, 1, 0, 0], EUCLIDEAN) == pytest.approx(pi/2)
        assert pn.angleBetween([1, 0, 0, 0], [0, 0, 0, 0], ELLIPTIC) == inf


class TestGeodesics:
    """dragging, interpolation, and tangent spaces"""

    def test_drag_euclidean(self):
        assert pn.dragTowards([0, 0, 0, 1], [5, 0, 0, 1], 2.0, EUCLIDEAN) == [2.0, 0.0, 0.0, 1.0]
        assert pn.dragTowards([0, 0, 0, 2], [10, 0, 0, 2], 2.0, EUCLIDEAN) == [2.0, 0.0, 0.0, 1.0]
        # an ideal target is a direction
        assert pn.dragTowards([1, 1, 1, 1], [0, 0, 3, 0], 2.0, EUCLIDEAN) == [1.0, 1.0, 3.0, 1.0]

    def test_drag_hyperbolic(self):
        r = pn.dragTowards([0, 0, 0, 1], [1, 0, 0, 2], 0.5, HYPERBOLIC)
        assert r == pytest.approx([sinh(0.5), 0.0, 0.0, cosh(0.5)])
        assert pn.distanceBetween([0, 0, 0, 1], r, HYPERBOLIC) == pytest.approx(0.5)

    def test_drag_onto_hyperboloid(self):
        # the target is on the absolute
        r = pn.dragTowards([0, 0, 0, 1], [1, 0, 0, 1], 1.0, HYPERBOLIC)
        assert r == pytest.approx([sinh(1.0), 0.0, 0.0, cosh(1.0)])
        assert pn.distanceBetween([0, 0, 0, 1], r, HYPERBOLIC) == pytest.approx(1.0)

    def test_drag_from_ideal_point(self):
        assert pn.dragTowards([1, 0, 0, 0], [0, 0, 0, 1], 1.0, EUCLIDEAN) == [1, 0, 0, 0]

    def test_drag_stays_on_geodesic(self):
        p0 = [0.3, 0.0, 0.0, 1.0]
        p1 = [0.0, 0.4, 0.0, 1.0]
        for metric in (ELLIPTIC, HYPERBOLIC):
            r = pn.dragTowards(p0, p1, 0.3, metric)
            assert pn.distanceBetween(p0, r, metric) == pytest.approx(0.3)
            assert pn.distanceBetween(p0, r, metric) + pn.distanceBetween(r, p1, metric) == \
                pytest.approx(pn.distanceBetween(p0, p1, metric))

    def test_drag_elliptic(self):
        r = pn.dragTowards([0, 0, 0, 1], [0, 1, 0, 0], pi/2, ELLIPTIC)
        assert r == pytest.approx([0.0, 1.0, 0.0, 0.0], abs=1e-12)

    def test_interpolation_euclidean(self):
        mid = pn.linearInterpolation([0, 0, 0, 1], [2, 4, 6, 2], 0.5, EUCLIDEAN)
        assert mid == [0.5, 1.0, 1.5, 1.0]

    @pytest.mark.parametrize('metric', [ELLIPTIC, HYPERBOLIC])
    def test_interpolation_constant_speed(self, metric):
        p, q = _randpoints(2, 3)
        d = pn.distanceBetween(p, q, metric)
        for t in (0.0, 0.25, 0.5, 1.0):
            r = pn.linearInterpolation(p, q, t, metric)
            assert pn.distanceBetween(p, r, metric) == pytest.approx(t*d, abs=1e-9)

    def test_tangent_euclidean(self):
        t = pn.projectToTangentSpace([1, 2, 3, 1], [4, 5, 6, 2], EUCLIDEAN)
        assert t == [2.0, 1.0, 0.0, 0.0]
        t = pn.projectToTangentSpace([2, 4, 6, 2], [1, 1, 1, 1], EUCLIDEAN)
        assert t[3] == 0.0
        assert t == [0.0, -1.0, -2.0, 0.0]

    @pytest.mark.parametrize('metric', [ELLIPTIC, HYPERBOLIC])
    def test_tangent_orthogonal(self, metric):
        p, v = _randpoints(2, 4)
        t = pn.projectToTangentSpace(p, v, metric)
        assert pn.innerProduct(p, t, metric) == pytest.approx(0.0, abs=1e-12)

    def test_project_onto(self):
        assert pn.projectOnto([0, 0, 0, 1], [1, 2, 3, 4], HYPERBOLIC) == [0.0, 0.0, 0.0, 4.0]
        assert pn.projectOntoComplement([0, 0, 0, 1], [1, 2, 3, 4], HYPERBOLIC) == \
            [1.0, 2.0, 3.0, 0.0]
        assert pn.projectOnto([0, 0, 0, 0], [1, 2, 3, 4], ELLIPTIC) == [0.0, 0.0, 0.0, 0.0]


class TestDuality:
    """polarity and bisectors"""

    def test_polarize_plane(self):
        p = [1, 2, 3, 4]
        assert pn.polarizePlane(p, EUCLIDEAN) == [1, 2, 3, 0]
        assert pn.polarizePlane(p, ELLIPTIC) == [1, 2, 3, 4]
        assert pn.polarizePlane(p, HYPERBOLIC) == [1, 2, 3, -4]
        for metric in (ELLIPTIC, HYPERBOLIC):
            assert pn.polarizePoint(pn.polarizePlane(p, metric), metric) == p
        q = [1, 2, 3, 1]
        assert pn.polarizePlane(q, EUCLIDEAN) == [1, 2, 3, 0]
        assert pn.polarizePlane(q, ELLIPTIC) == [1, 2, 3, 1]
        assert pn.polarizePlane(q, HYPERBOLIC) == [1, 2, 3, -1]

    def test_bisector_euclidean(self):
        plane = pn.perpendicularBisector([0, 0, 0, 1], [2, 0, 0, 1], EUCLIDEAN)
        assert plane == [2.0, 0.0, 0.0, -2.0]

    @pytest.mark.parametrize('metric', [ELLIPTIC, HYPERBOLIC])
    def test_bisector_equidistant(self, metric):
        p, q = _randpoints(2, 5)
        plane = pn.perpendicularBisector(p, q, metric)
        mid = pn.linearInterpolation(p, q, 0.5, metric)
        assert rn.innerProduct(plane, mid) == pytest.approx(0.0, abs=1e-12)
        assert rn.innerProduct(plane, q) > 0.0 > rn.innerProduct(plane, p)

    def test_mid_plane(self):
        assert pn.midPlane([2, 0, 0, 0], [0, 1, 0, 0], EUCLIDEAN) == [1.0, 1.0, 0.0, 0.0]

    def test_projective_plane(self):
        line = pn.lineFromPoints([0, 0, 1], [1, 0, 1])
        assert line == [0, 1, 0]
        assert pn.pointFromLines([1, 0, 0], [0, 1, 0]) == [0, 0, 1]
        with pytest.raises(rn.DimensionError):
            pn.lineFromPoints([0, 0, 0, 1], [1, 0, 0, 1])


class TestPointSets:

    def test_centroid_euclidean(self):
        c = pn.centroid([[0, 0, 0, 1], [2, 0, 0, 1], [0, 2, 0, 2]], EUCLIDEAN)
        assert c == pytest.approx([2.0/3.0, 1.0/3.0, 0.0, 1.0])

    def test_centroid_hyperbolic(self):
        c = pn.centroid([[0.5, 0, 0, 1], [-0.5, 0, 0, 1]], HYPERBOLIC)
        assert c == pytest.approx([0.0, 0.0, 0.0, 1.0])
        with pytest.raises(ValueError):
            pn.centroid([], HYPERBOLIC)

    def test_bounds(self):
        pts = [[0, 0, 0, 1], [2, 4, 6, 2], [1, 1, 1, 0]]
        assert pn.calculateBounds(pts) == [[0.0, 0.0, 0.0], [1.0, 2.0, 3.0]]
        with pytest.raises(ValueError):
            pn.calculateBounds([[1, 0, 0, 0]])


class TestIsometries:

    @pytest.mark.parametrize('metric', METRICS)
    def test_identity_and_scale(self, metric):
        assert pn.isIsometry(rn.identityMatrix(4), metric)
        assert pn.isIsometry(rn.diagonalMatrix([2, 2, 2, 2]), metric)
        assert not pn.isIsometry(rn.diagonalMatrix([1, 2, 1, 1]), metric)

    @pytest.mark.parametrize('metric', METRICS)
    def test_orthonormalize(self, metric):
        rng = random.Random(6)
        m = [x + rng.uniform(-0.05, 0.05) for x in rn.identityMatrix(4)]
        assert not pn.isIsometry(m, metric)
        fixed = pn.orthonormalizeMatrix(m, metric)
        assert pn.isIsometry(fixed, metric)


class TestDelegates:

    def test_delegates(self):
        assert pn.manhattanNorm([1, -2, 3, -4]) == 10
        assert pn.manhattanNormDistance([1, 2], [3, 4]) == 4
        assert pn.abs([-1, 2]) == [1, 2]
        assert pn.isZero([0.0, 1e-12])
        basis = pn.completeBasis([[1, 0, 0, 0]], rng=random.Random(1))
        assert len(basis) == 4
