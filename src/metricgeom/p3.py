## three-dimensional projective geometry for metricgeom: lines,
## planes, camera matrices, and isometries of the three metrics

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

"""three-dimensional projective geometry for **metricgeom**

Points and planes of projective 3-space are 4-vectors, matrices are
flat row-major 16-lists acting on column vectors, so a Euclidean
translation occupies indices 3, 7, and 11.

Lines are stored as Plücker coordinates, the six 2x2 minors ::

   (01, 02, 03, 12, 13, 23)

of the 2x4 matrix whose rows are two points on the line.

The camera builders (``perspectiveMatrix()``, ``orthographicMatrix()``,
``lookAt()``) and the rotation builders are Euclidean only.  The
isometry builders (``makeTranslationMatrix()``,
``makeReflectionMatrix()``, ``makeRotationMatrixAboutLine()`` and
those built from them) take a metric and work for all three
geometries.  All angles are in radians.

``factorMatrix()`` splits a matrix into a metric translation, a
rotation and a diagonal stretch, and ``composeMatrixFromFactors()``
puts the pieces back together.

"""

from math import *
import logging
from dataclasses import dataclass

import metricgeom.rn as rn
import metricgeom.pn as pn
import metricgeom.quat as quat
from metricgeom.rn import DimensionError
from metricgeom.pn import EUCLIDEAN, ELLIPTIC, HYPERBOLIC

logger = logging.getLogger(__name__)

EPS = 1e-10

originP3 = [0.0, 0.0, 0.0, 1.0]
xaxis = [1.0, 0.0, 0.0, 0.0]
yaxis = [0.0, 1.0, 0.0, 0.0]
zaxis = [0.0, 0.0, 1.0, 0.0]

## index pairs of the Plücker coordinates
_PLUCKER = ((0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3))


def _point(p):
    if len(p) == 3:
        return pn.homogenize(p)
    if len(p) != 4:
        raise DimensionError('bad point for projective 3-space: {}'.format(p))
    return list(p)

def _matrix(m):
    if len(m) != 16:
        raise DimensionError('bad 4x4 matrix of length {}'.format(len(m)))
    return m


## lines
## -----

def lineFromPoints(p1, p2, dst=None):
    """Plücker coordinates of the line through two points"""
    a = pn.dehomogenize(_point(p1))
    b = pn.dehomogenize(_point(p2))
    return rn.copy([a[i]*b[j] - a[j]*b[i] for i, j in _PLUCKER], dst)

## the Plücker pairing of two lines is the determinant of the 4x4
## matrix of the four defining points, expanded in complementary minors
def pluckerPairing(l1, l2):
    if len(l1) != 6 or len(l2) != 6:
        raise DimensionError('bad Plücker coordinates: {} {}'.format(l1, l2))
    return (l1[0]*l2[5] - l1[1]*l2[4] + l1[2]*l2[3] +
            l1[3]*l2[2] - l1[4]*l2[1] + l1[5]*l2[0])

def linesIntersect(l1, l2, tol=EPS):
    """are the two lines coplanar"""
    return fabs(pluckerPairing(l1, l2)) < tol

def lineIntersectPlane(p1, p2, plane, dst=None):
    """homogeneous point where the line through ``p1`` and ``p2`` meets
    ``plane``.  A line lying in the plane gives the zero vector."""
    if len(plane) != 4:
        raise DimensionError('bad plane: {}'.format(plane))
    a = _point(p1)
    b = _point(p2)
    k1 = rn.innerProduct(a, plane)
    k2 = rn.innerProduct(b, plane)
    if k1 == 0.0 and k2 == 0.0:
        logger.debug('lineIntersectPlane: line lies in the plane')
    return rn.linearCombination(k2, a, -k1, b, dst)


## planes and points
## -----------------

## The row orthogonal to the three given rows, from the cofactors of a
## completed basis.  Works for ideal points and for planes alike.
def _joinrows(r1, r2, r3):
    return rn.completeBasis([r1, r2, r3])[3]

def planeFromPoints(p1, p2, p3, dst=None):
    """plane through three points, oriented by the right-hand rule on
    ``p1``, ``p2``, ``p3``.  Collinear points give the zero vector."""
    a, b, c = _point(p1), _point(p2), _point(p3)
    if pn._isideal(a) or pn._isideal(b) or pn._isideal(c):
        return rn.negate(_joinrows(a, b, c), dst)
    a, b, c = pn.dehomogenize(a), pn.dehomogenize(b), pn.dehomogenize(c)
    normal = rn.crossProduct(rn.subtract(b, a), rn.subtract(c, a))
    return rn.copy(normal + [-rn.innerProduct(normal, a, 3)], dst)

def pointFromPlanes(pl1, pl2, pl3, dst=None):
    """homogeneous point common to three planes"""
    for pl in (pl1, pl2, pl3):
        if len(pl) != 4:
            raise DimensionError('bad plane: {}'.format(pl))
    return rn.copy(_joinrows(pl1, pl2, pl3), dst)

def areCollinear(p0, p1, p2, tol=EPS):
    """do the three points lie on a common line"""
    return rn.isZero(planeFromPoints(p0, p1, p2), tol)

## Weights [w0, w1] with p == w0 p0 + w1 p1 as homogeneous vectors.  A
## point off the line is first replaced by the foot of the plane through
## it perpendicular to the line, rescaled to p's homogeneous coordinate.
def barycentricCoordinates(p0, p1, p, dst=None):
    """barycentric weights of ``p`` with respect to ``p0`` and ``p1``"""
    a, b, x = _point(p0), _point(p1), _point(p)
    if not areCollinear(a, b, x, rn.TOLERANCE):
        normal = rn.subtract(pn.affineCoordinates(a), pn.affineCoordinates(b))
        plane = normal + [-rn.innerProduct(normal, pn.affineCoordinates(x))]
        foot = lineIntersectPlane(a, b, plane)
        if pn._isideal(foot):
            raise ValueError('bad line for barycentric coordinates: {} {}'.format(p0, p1))
        x = rn.times(x[3]/foot[3], foot)
    for i in range(3):
        for j in range(i + 1, 4):
            det = a[i]*b[j] - a[j]*b[i]
            if fabs(det) > rn.TOLERANCE:
                w0 = (b[j]*x[i] - b[i]*x[j])/det
                w1 = (a[i]*x[j] - a[j]*x[i])/det
                return rn.copy([w0, w1], dst)
    raise ValueError('bad dependent points for barycentric coordinates: {} {}'.format(p0, p1))

def planeParallelToPassingThrough(direction, point, dst=None):
    """a plane through ``point`` that contains the direction ``direction``"""
    other = [0.0, 1.0, 0.0] if fabs(direction[0]) > fabs(direction[1]) else [1.0, 0.0, 0.0]
    normal = rn.normalize(rn.crossProduct(direction, other))
    p = pn.affineCoordinates(point) if len(point) == 4 else list(point)
    return rn.copy(normal + [-rn.innerProduct(normal, p, 3)], dst)


## camera matrices
## ---------------

def perspectiveMatrix(fovy, aspect, near, far, dst=None):
    """perspective projection, ``fovy`` the full vertical field of view"""
    f = 1.0/tan(fovy/2.0)
    nf = 1.0/(near - far)
    m = [0.0]*16
    m[0] = f/aspect
    m[5] = f
    m[10] = (far + near)*nf
    m[11] = 2.0*far*near*nf
    m[14] = -1.0
    return rn.copy(m, dst)

def orthographicMatrix(left, right, bottom, top, near, far, dst=None):
    m = rn.identityMatrix(4)
    m[0] = 2.0/(right - left)
    m[5] = 2.0/(top - bottom)
    m[10] = -2.0/(far - near)
    m[3] = -(right + left)/(right - left)
    m[7] = -(top + bottom)/(top - bottom)
    m[11] = -(far + near)/(far - near)
    return rn.copy(m, dst)

def lookAt(eye, center, up, dst=None):
    """view matrix carrying ``eye`` to the origin, looking down -z
    toward ``center``"""
    e = pn.affineCoordinates(eye) if len(eye) == 4 else list(eye)
    c = pn.affineCoordinates(center) if len(center) == 4 else list(center)
    z = rn.normalize(rn.subtract(e, c))
    x = rn.normalize(rn.crossProduct(up, z))
    y = rn.crossProduct(z, x)
    return rn.copy(x + [-rn.innerProduct(x, e)] +
                   y + [-rn.innerProduct(y, e)] +
                   z + [-rn.innerProduct(z, e)] +
                   [0.0, 0.0, 0.0, 1.0], dst)


## Euclidean rotations and scaling
## -------------------------------

def rotationMatrix(axis, angle, dst=None):
    """rotation by ``angle`` about ``axis`` through the origin"""
    if len(axis) < 3:
        raise DimensionError('bad rotation axis: {}'.format(axis))
    u = rn.normalize(list(axis[:3]))
    if rn.isZero(u, 0.0):
        logger.debug('rotationMatrix: zero axis, returning identity')
        return rn.copy(rn.identityMatrix(4), dst)
    c = cos(angle)
    s = sin(angle)
    v = 1.0 - c
    x, y, z = u
    return rn.copy([x*x*v + c,   x*y*v - z*s, x*z*v + y*s, 0.0,
                    y*x*v + z*s, y*y*v + c,   y*z*v - x*s, 0.0,
                    z*x*v - y*s, z*y*v + x*s, z*z*v + c,   0.0,
                    0.0,         0.0,         0.0,         1.0], dst)

def makeRotationMatrixX(angle, dst=None):
    return rotationMatrix(xaxis, angle, dst)

def makeRotationMatrixY(angle, dst=None):
    return rotationMatrix(yaxis, angle, dst)

def makeRotationMatrixZ(angle, dst=None):
    return rotationMatrix(zaxis, angle, dst)

def makeRotationMatrix(fromVector, toVector, dst=None):
    """rotation fixing the origin that carries the direction of
    ``fromVector`` to that of ``toVector``"""
    v1 = rn.normalize(list(fromVector[:3]))
    v2 = rn.normalize(list(toVector[:3]))
    cosangle = min(1.0, max(-1.0, rn.innerProduct(v1, v2)))
    axis = rn.crossProduct(v1, v2)
    if rn.isZero(axis, EPS):
        if cosangle > 0.0:
            return rn.copy(rn.identityMatrix(4), dst)
        # opposite directions: half turn about any perpendicular axis
        other = [0.0, 1.0, 0.0] if fabs(v1[0]) > fabs(v1[1]) else [1.0, 0.0, 0.0]
        return rotationMatrix(rn.crossProduct(v1, other), pi, dst)
    return rotationMatrix(axis, acos(cosangle), dst)

def makeScaleMatrix(sx, sy=None, sz=None, dst=None):
    """scale by ``sx`` uniformly, or by ``sx``, ``sy``, ``sz`` per axis"""
    if sy is None:
        sy = sx
    if sz is None:
        sz = sx
    return rn.diagonalMatrix([sx, sy, sz, 1.0], dst)


## isometries of the three metrics
## -------------------------------

## The isometry that moves the origin to `point` along the geodesic
## joining them.  With the point normalized to x = point[:3], w =
## point[3] (w = 1 for Euclidean space, |<p,p>| = 1 and w >= 0
## otherwise) the matrix is
##
##    [ I - m x x^T/(1+w)    x ]
##    [      -m x^T          w ]
def makeTranslationMatrix(point, metric, dst=None):
    """translation taking the origin to ``point``"""
    m = pn._metric(metric)
    p = _point(point)
    if m == EUCLIDEAN:
        if pn._isideal(p):
            raise ValueError('bad ideal point for Euclidean translation: {}'.format(point))
        p = pn.dehomogenize(p)
    else:
        pp = pn.innerProduct(p, p, m)
        if m == HYPERBOLIC and pp >= 0.0:
            raise ValueError('bad point outside hyperbolic space: {}'.format(point))
        if pp == 0.0:
            raise ValueError('bad zero point for translation: {}'.format(point))
        p = pn.normalize(p, m)
        if p[3] < 0.0:
            p = rn.negate(p)
    x = p[:3]
    w = p[3]
    k = m/(1.0 + w)
    result = rn.identityMatrix(4)
    for i in range(3):
        for j in range(3):
            result[i*4 + j] -= k*x[i]*x[j]
        result[i*4 + 3] = x[i]
        result[12 + i] = -m*x[i]
    result[15] = w
    return rn.copy(result, dst)

## Reflection in a plane: R = I - 2 P plane^T / (plane . P) where P is
## the pole of the plane.  A plane incident with its own pole has no
## reflection and gives the identity.
def makeReflectionMatrix(plane, metric, dst=None):
    """reflection in ``plane``"""
    if len(plane) != 4:
        raise DimensionError('bad plane: {}'.format(plane))
    pole = pn.polarizePoint(plane, metric)
    d = rn.innerProduct(plane, pole)
    if fabs(d) < EPS:
        logger.debug('makeReflectionMatrix: degenerate plane %s, returning identity', plane)
        return rn.copy(rn.identityMatrix(4), dst)
    result = rn.identityMatrix(4)
    for i in range(4):
        for j in range(4):
            result[i*4 + j] -= 2.0*pole[i]*plane[j]/d
    return rn.copy(result, dst)

def makeRotationMatrixAboutLine(p1, p2, angle, metric, dst=None):
    """rotation by ``angle`` about the line through ``p1`` and ``p2``"""
    t = makeTranslationMatrix(p1, metric)
    q = rn.applyLinear(rn.inverse(t), _point(p2))
    return rn.conjugateByMatrix(rotationMatrix(q[:3], angle), t, dst)

## The translation along the geodesic through fromPoint and toPoint
## carrying the first to the second: move fromPoint to the origin, build
## the translation from there, and conjugate back.
def makeTranslationMatrix2(fromPoint, toPoint, metric, dst=None):
    """translation taking ``fromPoint`` to ``toPoint``"""
    tp = makeTranslationMatrix(fromPoint, metric)
    toprime = rn.applyLinear(rn.inverse(tp), _point(toPoint))
    return rn.conjugateByMatrix(makeTranslationMatrix(toprime, metric), tp, dst)

def makeScrewMotionMatrix(p1, p2, angle, metric, dst=None):
    """translation from ``p1`` to ``p2`` combined with a rotation by
    ``angle`` about the line joining them"""
    t = makeTranslationMatrix2(p1, p2, metric)
    r = makeRotationMatrixAboutLine(p1, p2, angle, metric)
    return rn.timesMatrix(t, r, dst)

## World-to-camera matrix for a camera at fromPoint looking at toPoint:
## fromPoint goes to the origin, toPoint onto the negative z axis, then
## the result is rolled by roll about the view axis.
def makeLookatMatrix(fromPoint, toPoint, roll, metric, dst=None):
    tm1 = rn.inverse(makeTranslationMatrix(fromPoint, metric))
    newto = rn.applyLinear(tm1, _point(toPoint))
    if newto[3] < 0.0:
        newto = rn.negate(newto)
    if rn.isZero(newto[:3], EPS):
        logger.debug('makeLookatMatrix: target coincides with eye %s', fromPoint)
        result = tm1
    else:
        result = rn.timesMatrix(makeRotationMatrix(newto[:3], [0.0, 0.0, -1.0]), tm1)
    if roll != 0.0:
        result = rn.timesMatrix(makeRotationMatrixZ(roll), result)
    return rn.copy(result, dst)

## Strip the translational part of src at point: result fixes point
## and agrees with src up to a translation of the image.
def extractOrientationMatrix(src, point, metric, dst=None):
    """``T(point) T(src point)^-1 src``, which fixes ``point``"""
    _matrix(src)
    p = _point(point)
    image = rn.applyLinear(src, p)
    tp = makeTranslationMatrix(p, metric)
    ti = makeTranslationMatrix(image, metric)
    return rn.timesMatrix(rn.timesMatrix(tp, rn.inverse(ti)), src, dst)

def getTransformedAbsolute(m, metric):
    """polar plane of the image of the origin under ``m``"""
    mm = pn._metric(metric)
    _matrix(m)
    if mm == EUCLIDEAN:
        return [0.0, 0.0, 0.0, m[15]]
    return [m[3], m[7], m[11], mm*m[15]]


## factoring
## ---------

@dataclass(frozen=True)
class MatrixFactors:
    """the pieces of ``T R SR S`` returned by :func:`factorMatrix`.
    ``translation`` is the image of the origin, the rotations are
    quaternions and ``stretch`` is the diagonal of ``S``."""

    translation: list
    rotation: list
    stretchRotation: list
    stretch: list
    isFlipped: bool

## Split m into a metric translation T, a rotation R, and a diagonal
## stretch S.  The stretch rotation SR is always the identity: only the
## diagonal of the symmetric polar factor is kept, so a shear is lost.
def factorMatrix(m, metric):
    """factor ``m`` as ``T R SR S``"""
    _matrix(m)
    translation = rn.applyLinear(m, originP3)
    if pn._metric(metric) == EUCLIDEAN and pn._isideal(translation):
        raise ValueError('bad translation vector: {}'.format(translation))
    t = makeTranslationMatrix(translation, metric)
    tmp = rn.timesMatrix(rn.inverse(t), m)
    if tmp[15] != 0.0:
        tmp = rn.times(1.0/tmp[15], tmp)
    m3 = rn.extractSubmatrix(tmp, 0, 2, 0, 2)
    flipped = rn.determinant(m3) < 0.0
    if flipped:
        m3 = rn.negate(m3)
    q3, s3 = rn.polarDecompose(m3)
    return MatrixFactors(translation=translation,
                         rotation=quat.quaternionFromRotationMatrix(q3),
                         stretchRotation=list(quat.identity),
                         stretch=[s3[0], s3[4], s3[8]],
                         isFlipped=flipped)

def composeMatrixFromFactors(translation, rotation, stretchRotation, stretch,
                             isFlipped, metric, dst=None):
    """inverse of :func:`factorMatrix`"""
    t = makeTranslationMatrix(translation, metric)
    r = quat.rotationMatrixFromQuaternion(rotation)
    sr = quat.rotationMatrixFromQuaternion(stretchRotation)
    sign = -1.0 if isFlipped else 1.0
    s = rn.diagonalMatrix([sign*stretch[0], sign*stretch[1], sign*stretch[2], 1.0])
    return rn.timesMatrix(t, rn.timesMatrix(r, rn.timesMatrix(sr, s)), dst)
