## metric-generic projective geometry for metricgeom: one family of
## homogeneous-coordinate formulas for Euclidean, elliptic, and
## hyperbolic space

## Copyright (c) 2026 metricgeom contributors
## All rights reserved

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""metric-generic projective geometry for **metricgeom**

====================
OVERVIEW
====================

The metricgeom.pn module re-expresses the fundamental operations of
real projective n-space, normalization, distance, interpolation,
tangent spaces, and point/hyperplane duality, so that a single
formula covers the three classical constant-curvature geometries.

metrics
=======

The geometry is selected by an integer *metric*, one of the
``Metric`` constants: ::

   EUCLIDEAN  =  0
   ELLIPTIC   =  1
   HYPERBOLIC = -1

The metric is the coefficient of the homogeneous (last) coordinate in
the bilinear form ::

   <u,v>_m = u[0]*v[0] + ... + u[n-2]*v[n-2] + m*u[n-1]*v[n-1]

Every metric-aware function in this module is built from that form.
The metric is always passed explicitly; mixing metrics between two
points handed to the same call is a caller error and is not detected.

points and hyperplanes
======================

A point of projective n-space is an (n+1)-vector, defined up to a
nonzero scalar multiple.  A point with last coordinate 0 is an ideal
point (a point at infinity) and is never divided by.

A hyperplane is dually an (n+1)-vector ``[A, B, ..., D]``; the point
``x`` lies on it when ``A*x[0] + ... + D*x[n] == 0``.

The *absolute quadric* of a geometry is the set of points fixed by
every isometry.  It is never materialized; its role in duality is
played by ``polarize()``, which applies ``diag(1, ..., 1, m)``.

In the Euclidean case the form is degenerate.  Tangent vectors at a
finite point are the ideal points (last coordinate 0), and the polar
of a finite point is a direction.

"""

from math import *
from enum import IntEnum
import logging

import mpmath as mpm

import metricgeom.rn as rn
from metricgeom.rn import DEHOMOGENIZE_TOLERANCE, TOLERANCE, DimensionError

logger = logging.getLogger(__name__)


class Metric(IntEnum):
    """sign of the homogeneous term of the metric bilinear form"""
    HYPERBOLIC = -1
    EUCLIDEAN = 0
    ELLIPTIC = 1


HYPERBOLIC = Metric.HYPERBOLIC
EUCLIDEAN = Metric.EUCLIDEAN
ELLIPTIC = Metric.ELLIPTIC

## working precision, in decimal digits, for non-Euclidean distances
DISTANCE_DPS = 30


def _metric(metric):
    try:
        return Metric(metric)
    except ValueError:
        raise ValueError('bad metric: {}'.format(metric)) from None

def _samelength(u, v):
    if len(u) != len(v):
        raise DimensionError('points must have the same length: {} and {}'.format(
            len(u), len(v)))
    return len(u)

def _isideal(v):
    return fabs(v[-1]) <= DEHOMOGENIZE_TOLERANCE

## pick the representative of q on the same side of p, so that
## <p,q>/<p,p> is not negative.  For hyperbolic points this is the same
## sheet of the hyperboloid, for elliptic points the nearer antipode.
def _alignsign(p, q, m):
    pp = innerProduct(p, p, m)
    if pp != 0.0 and innerProduct(p, q, m)/pp < 0.0:
        return rn.negate(q)
    return q


## homogeneous coordinates
## -----------------------

def dehomogenize(src, dst=None):
    """scale ``src`` so that its last coordinate is 1.  If that coordinate
    is within ``DEHOMOGENIZE_TOLERANCE`` of zero the point is treated as
    already lying at infinity and is left unchanged."""
    w = src[-1]
    if fabs(w) > DEHOMOGENIZE_TOLERANCE:
        return rn.copy([x/w for x in src[:-1]] + [1.0], dst)
    return rn.copy(src, dst)

def homogenize(src, dst=None):
    """append a homogeneous coordinate of 1"""
    return rn.copy(list(src) + [1.0], dst)

def affineCoordinates(src, dst=None):
    """dehomogenize and drop the homogeneous coordinate"""
    return rn.copy(dehomogenize(src)[:-1], dst)


## the metric form and norms
## -------------------------

def innerProduct(u, v, metric):
    """the metric bilinear form `<u,v>_m`"""
    m = _metric(metric)
    n = _samelength(u, v)
    return rn.innerProduct(u, v, n-1) + m*u[n-1]*v[n-1]

def normSquared(v, metric):
    return innerProduct(v, v, metric)

def norm(v, metric):
    """`sqrt(|<v,v>_m|)`"""
    return sqrt(fabs(innerProduct(v, v, metric)))

def normalize(src, metric, dst=None):
    """scale ``src`` by a positive factor so that `|<v,v>_m| == 1`.  A
    vector of zero norm is returned unchanged."""
    return setToLength(src, 1.0, metric, dst)

def setToLength(src, length, metric, dst=None):
    nrm = norm(src, metric)
    if nrm == 0.0:
        logger.debug('setToLength: zero-norm vector %s left unchanged', src)
        return rn.copy(src, dst)
    return rn.times(length/nrm, src, dst)

def isValidCoordinate(v, metric):
    """is ``v`` a usable point: inside the absolute for hyperbolic
    space, nonzero otherwise"""
    m = _metric(metric)
    if m == HYPERBOLIC:
        return innerProduct(v, v, m) < 0.0
    return any(x != 0 for x in v)


## angles and distances
## --------------------

def angleBetween(u, v, metric):
    """angle between two hyperplanes (or vectors) with respect to the
    metric form, or infinity if either has zero norm"""
    uu = innerProduct(u, u, metric)
    vv = innerProduct(v, v, metric)
    if uu == 0.0 or vv == 0.0:
        return inf
    f = innerProduct(u, v, metric)/sqrt(fabs(uu*vv))
    return acos(min(1.0, max(-1.0, f)))

def _mpform(u, v, m):
    ip = mpm.mpf(0)
    for i in range(len(u) - 1):
        ip += mpm.mpf(u[i])*mpm.mpf(v[i])
    return ip + m*mpm.mpf(u[-1])*mpm.mpf(v[-1])

## The geodesic distance between two points.  Euclidean distance is
## measured between the dehomogenized points.  Elliptic and hyperbolic
## distances are the arccos and arccosh of the normalized form ratio
## <p,q>/sqrt|<p,p><q,q>|, evaluated at DISTANCE_DPS digits because
## acosh() of a ratio near 1 loses half the available precision.
def distanceBetween(p, q, metric):
    """metric distance between the homogeneous points ``p`` and ``q``"""
    m = _metric(metric)
    _samelength(p, q)
    if rn.equals(p, q):
        return 0.0
    if m == EUCLIDEAN:
        if _isideal(p) or _isideal(q):
            return inf
        return rn.euclideanDistance(affineCoordinates(p), affineCoordinates(q))
    with mpm.workdps(DISTANCE_DPS):
        pp = _mpform(p, p, m)
        qq = _mpform(q, q, m)
        denom = mpm.sqrt(mpm.fabs(pp*qq))
        if denom == 0:
            return inf
        ratio = _mpform(p, q, m)/denom
        if m == ELLIPTIC:
            ratio = min(mpm.mpf(1), max(mpm.mpf(-1), ratio))
            return float(mpm.acos(ratio))
        ratio = mpm.fabs(ratio)
        if ratio <= 1:
            return 0.0
        return float(mpm.acosh(ratio))


## geodesics
## ---------

## Constant-speed interpolation along the geodesic from p1 (t=0) to
## p2 (t=1).  t is not clamped, so values outside [0,1] extrapolate.
def linearInterpolation(p1, p2, t, metric, dst=None):
    """point at fraction ``t`` of the metric arc length from ``p1`` to ``p2``"""
    m = _metric(metric)
    _samelength(p1, p2)
    if m == EUCLIDEAN:
        if _isideal(p1) or _isideal(p2):
            return rn.linearCombination(1.0 - t, p1, t, p2, dst)
        return rn.linearCombination(1.0 - t, dehomogenize(p1), t, dehomogenize(p2), dst)

    np1 = normalize(p1, m)
    np2 = _alignsign(np1, normalize(p2, m), m)
    d = distanceBetween(np1, np2, m)
    if d < TOLERANCE:
        return rn.copy(np1, dst)
    if m == ELLIPTIC:
        s = sin(d)
        if fabs(s) < TOLERANCE:
            logger.debug('linearInterpolation: antipodal points, no unique geodesic')
            return rn.copy(np1, dst)
        c1 = sin((1.0 - t)*d)/s
        c2 = sin(t*d)/s
    else:
        s = sinh(d)
        c1 = sinh((1.0 - t)*d)/s
        c2 = sinh(t*d)/s
    return rn.linearCombination(c1, np1, c2, np2, dst)

## Move a metric distance `length` from p0 along the geodesic toward
## p1.  In Euclidean space this is p0 + length*normalize(p1 - p0); in
## elliptic and hyperbolic space it is the exponential map
## cos(L) p0 + sin(L) t, resp. cosh(L) p0 + sinh(L) t, where t is the
## unit tangent at p0 pointing at p1.
def dragTowards(p0, p1, length, metric, dst=None):
    """the point a metric distance ``length`` from ``p0`` toward ``p1``"""
    m = _metric(metric)
    _samelength(p0, p1)
    if m == EUCLIDEAN:
        if _isideal(p0):
            logger.debug('dragTowards: ideal starting point %s left unchanged', p0)
            return rn.copy(p0, dst)
        start = dehomogenize(p0)
        if _isideal(p1):
            direction = list(p1[:-1]) + [0.0]
        else:
            direction = rn.subtract(dehomogenize(p1), start)
        direction = normalize(direction, m)
        return rn.linearCombination(1.0, start, length, direction, dst)

    np0 = normalize(p0, m)
    if innerProduct(np0, np0, m) == 0.0:
        logger.debug('dragTowards: null starting point %s left unchanged', p0)
        return rn.copy(p0, dst)
    tangent = projectToTangentSpace(np0, _alignsign(np0, p1, m), m)
    tn = norm(tangent, m)
    if tn == 0.0:
        return rn.copy(np0, dst)
    if m == ELLIPTIC:
        c, s = cos(length), sin(length)
    else:
        c, s = cosh(length), sinh(length)
    return rn.linearCombination(c, np0, s/tn, tangent, dst)

def projectToTangentSpace(point, vector, metric, dst=None):
    """remove the component of ``vector`` along ``point``.  For elliptic
    and hyperbolic metrics the result is orthogonal to ``point`` under
    the metric form.  For the Euclidean metric it is an ideal point:
    its last coordinate is exactly zero."""
    m = _metric(metric)
    _samelength(point, vector)
    if m == EUCLIDEAN:
        if _isideal(point):
            result = list(vector)
        else:
            result = rn.linearCombination(1.0, vector, -vector[-1]/point[-1], point)
        result[-1] = 0.0
        return rn.copy(result, dst)
    pp = innerProduct(point, point, m)
    if pp == 0.0:
        logger.debug('projectToTangentSpace: null point %s, vector unchanged', point)
        return rn.copy(vector, dst)
    return rn.linearCombination(1.0, vector, -innerProduct(point, vector, m)/pp, point, dst)

def projectOnto(master, victim, metric, dst=None):
    """projection of ``victim`` onto the span of ``master`` under the
    metric form; zero if ``master`` is null"""
    _samelength(master, victim)
    pp = innerProduct(master, master, metric)
    if pp == 0.0:
        return rn.copy([0.0]*len(master), dst)
    return rn.times(innerProduct(master, victim, metric)/pp, master, dst)

def projectOntoComplement(master, victim, metric, dst=None):
    return rn.subtract(victim, projectOnto(master, victim, metric), dst)


## duality
## -------

## polarity with respect to the absolute quadric: apply
## diag(1, ..., 1, m).  For m = +1 or -1 the map is its own inverse.
## For the Euclidean metric it sends a point to a direction and a
## hyperplane to its (ideal) normal direction.
def polarize(src, metric, dst=None):
    m = _metric(metric)
    result = list(src)
    result[-1] = m*src[-1]
    return rn.copy(result, dst)

def polarizePlane(point, metric, dst=None):
    """coordinates of the polar hyperplane of ``point``"""
    return polarize(point, metric, dst)

def polarizePoint(plane, metric, dst=None):
    """the pole of ``plane``, inverse of ``polarizePlane()``"""
    return polarize(plane, metric, dst)

## The hyperplane of points equidistant from p1 and p2, oriented so it
## is positive on the side of p2.  Points coincide -> zero vector.
def perpendicularBisector(p1, p2, metric, dst=None):
    """perpendicular bisector of the segment from ``p1`` to ``p2``"""
    m = _metric(metric)
    _samelength(p1, p2)
    if m == EUCLIDEAN:
        a = affineCoordinates(p1)
        b = affineCoordinates(p2)
        direction = rn.subtract(b, a)
        mid = rn.linearCombination(0.5, a, 0.5, b)
        return rn.copy(direction + [-rn.innerProduct(direction, mid)], dst)
    np1 = normalize(p1, m)
    np2 = _alignsign(np1, normalize(p2, m), m)
    return polarizePlane(rn.subtract(np2, np1), m, dst)

def midPlane(plane1, plane2, metric, dst=None):
    """hyperplane bisecting the angle between two hyperplanes"""
    _samelength(plane1, plane2)
    return rn.add(normalize(plane1, metric), normalize(plane2, metric), dst)


## point sets
## ----------

def centroid(points, metric, dst=None):
    """metric centroid of a list of points"""
    m = _metric(metric)
    if not points:
        raise ValueError('cannot compute the centroid of an empty point list')
    if m == EUCLIDEAN:
        return rn.average([dehomogenize(p) for p in points], dst)
    first = normalize(points[0], m)
    total = [0.0]*len(first)
    for p in points:
        total = rn.add(total, _alignsign(first, normalize(p, m), m))
    return normalize(total, m, dst)

def calculateBounds(points):
    """``[mins, maxs]`` of the affine coordinates of the finite points in
    ``points``; ideal points are skipped"""
    finite = [affineCoordinates(p) for p in points if not _isideal(p)]
    if not finite:
        raise ValueError('no finite points to bound')
    return rn.calculateBounds(finite)


## the projective plane
## --------------------

def lineFromPoints(p1, p2, dst=None):
    """line of the projective plane through two points"""
    if len(p1) != 3 or len(p2) != 3:
        raise DimensionError('bad points for projective plane: {} {}'.format(p1, p2))
    return rn.crossProduct(p1, p2, dst)

def pointFromLines(l1, l2, dst=None):
    """intersection of two lines of the projective plane"""
    if len(l1) != 3 or len(l2) != 3:
        raise DimensionError('bad lines for projective plane: {} {}'.format(l1, l2))
    return rn.crossProduct(l1, l2, dst)


## isometries
## ----------

def _column(m, n, j):
    return [m[i*n + j] for i in range(n)]

## Gram-Schmidt on the columns of m.  Elliptic and hyperbolic matrices
## are processed starting with the last column, the image of the
## origin, using the metric form.  Euclidean matrices are scaled so the
## bottom-right entry is 1, the linear block is orthonormalized, and
## the bottom row is reset to [0, ..., 0, 1].
def orthonormalizeMatrix(m, metric, dst=None):
    """nearest-by-construction isometry of the given metric"""
    mm = _metric(metric)
    n = rn._order(m)
    if mm == EUCLIDEAN:
        w = m[-1]
        src = rn.times(1.0/w, m) if fabs(w) > DEHOMOGENIZE_TOLERANCE else list(m)
        cols = []
        for j in range(n-1):
            c = _column(src, n, j)[:-1]
            for prev in cols:
                c = rn.projectOntoComplement(c, prev)
            cols.append(rn.normalize(c))
        result = list(src)
        for j, c in enumerate(cols):
            for i in range(n-1):
                result[i*n + j] = c[i]
        for j in range(n-1):
            result[(n-1)*n + j] = 0.0
        result[-1] = 1.0
        return rn.copy(result, dst)

    order = [n-1] + list(range(n-1))
    done = {}
    for j in order:
        c = _column(m, n, j)
        for prev in done.values():
            c = projectOntoComplement(prev, c, mm)
        done[j] = normalize(c, mm)
    result = [0.0]*(n*n)
    for j, c in done.items():
        for i in range(n):
            result[i*n + j] = c[i]
    return rn.copy(result, dst)

def isIsometry(m, metric, tol=TOLERANCE):
    """does ``m`` preserve the absolute quadric, up to a scale factor"""
    mm = _metric(metric)
    n = rn._order(m)
    cols = [_column(m, n, j) for j in range(n)]
    if mm == EUCLIDEAN:
        w = m[-1]
        if fabs(w) <= tol:
            return False
        for j in range(n-1):
            if fabs(m[(n-1)*n + j]) > tol*fabs(w):
                return False
        for i in range(n-1):
            for j in range(n-1):
                g = rn.innerProduct(cols[i], cols[j], n-1)/(w*w)
                if fabs(g - (1.0 if i == j else 0.0)) > tol:
                    return False
        return True
    lam = innerProduct(cols[-1], cols[-1], mm)/mm
    if lam <= tol:
        return False
    for i in range(n):
        for j in range(n):
            q = 0.0 if i != j else (1.0 if i < n-1 else float(mm))
            if fabs(innerProduct(cols[i], cols[j], mm) - lam*q) > tol*lam:
                return False
    return True


## metric-independent conveniences
## -------------------------------

def completeBasis(partial, dst=None, rng=None):
    """see ``metricgeom.rn.completeBasis()``"""
    return rn.completeBasis(partial, dst, rng)

def isZero(v, tol=TOLERANCE):
    return rn.isZero(v, tol)

def manhattanNorm(v):
    return rn.manhattanNorm(v)

def manhattanNormDistance(u, v):
    return rn.manhattanNormDistance(u, v)

def abs(src, dst=None):
    return rn.abs(src, dst)
