## quaternion arithmetic for metricgeom

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

"""quaternions for **metricgeom**

A quaternion is a 4-list ``[re, i, j, k]``.  Unit quaternions
represent rotations of Euclidean 3-space; the matrices produced here
are 4x4 row-major, in the same layout as ``metricgeom.p3``.

"""

from math import *
import logging

import metricgeom.rn as rn
from metricgeom.rn import DimensionError

logger = logging.getLogger(__name__)

identity = [1.0, 0.0, 0.0, 0.0]


def _check(q):
    if len(q) != 4:
        raise DimensionError('bad quaternion: {}'.format(q))
    return q

def add(a, b, dst=None):
    return rn.add(_check(a), _check(b), dst)

def subtract(a, b, dst=None):
    return rn.subtract(_check(a), _check(b), dst)

def scale(factor, q, dst=None):
    return rn.times(factor, _check(q), dst)

## Hamilton product
def times(a, b, dst=None):
    """quaternion product `a b`"""
    _check(a)
    _check(b)
    return rn.copy([a[0]*b[0] - a[1]*b[1] - a[2]*b[2] - a[3]*b[3],
                    a[0]*b[1] + a[1]*b[0] + a[2]*b[3] - a[3]*b[2],
                    a[0]*b[2] - a[1]*b[3] + a[2]*b[0] + a[3]*b[1],
                    a[0]*b[3] + a[1]*b[2] - a[2]*b[1] + a[3]*b[0]], dst)

def conjugate(q, dst=None):
    _check(q)
    return rn.copy([q[0], -q[1], -q[2], -q[3]], dst)

def lengthSquared(q):
    return rn.euclideanNormSquared(_check(q))

def length(q):
    return sqrt(lengthSquared(q))

def invert(q, dst=None):
    """multiplicative inverse; the zero quaternion raises
    ``ZeroDivisionError``"""
    l2 = lengthSquared(q)
    if l2 == 0.0:
        raise ZeroDivisionError('cannot invert the zero quaternion')
    return rn.times(1.0/l2, conjugate(q), dst)

def normalize(q, dst=None):
    return rn.normalize(_check(q), dst)

def re(q):
    return _check(q)[0]

def im(q):
    return list(_check(q)[1:])


## rotations
## ---------

def quaternionFromAxisAngle(axis, angle):
    """unit quaternion for a rotation by ``angle`` radians about ``axis``"""
    u = rn.normalize(list(axis[:3]))
    if rn.isZero(u, 0.0):
        logger.debug('quaternionFromAxisAngle: zero axis, returning identity')
        return list(identity)
    s = sin(angle/2.0)
    return [cos(angle/2.0), s*u[0], s*u[1], s*u[2]]

def rotationMatrixFromQuaternion(q, dst=None):
    """4x4 rotation matrix of the (normalized) quaternion ``q``"""
    w, x, y, z = normalize(q)
    return rn.copy([1.0 - 2.0*(y*y + z*z), 2.0*(x*y - w*z), 2.0*(x*z + w*y), 0.0,
                    2.0*(x*y + w*z), 1.0 - 2.0*(x*x + z*z), 2.0*(y*z - w*x), 0.0,
                    2.0*(x*z - w*y), 2.0*(y*z + w*x), 1.0 - 2.0*(x*x + y*y), 0.0,
                    0.0, 0.0, 0.0, 1.0], dst)

## Shepperd's method: branch on the largest of the trace and the
## diagonal entries to keep the square root well away from zero
def quaternionFromRotationMatrix(m):
    """unit quaternion of a 3x3 or 4x4 rotation matrix, with
    non-negative real part"""
    n = rn._order(m)
    if n not in (3, 4):
        raise DimensionError('bad rotation matrix of order {}'.format(n))
    r = [[m[i*n + j] for j in range(3)] for i in range(3)]
    tr = r[0][0] + r[1][1] + r[2][2]
    if tr > 0.0:
        s = 2.0*sqrt(tr + 1.0)
        q = [0.25*s, (r[2][1] - r[1][2])/s, (r[0][2] - r[2][0])/s, (r[1][0] - r[0][1])/s]
    elif r[0][0] > r[1][1] and r[0][0] > r[2][2]:
        s = 2.0*sqrt(1.0 + r[0][0] - r[1][1] - r[2][2])
        q = [(r[2][1] - r[1][2])/s, 0.25*s, (r[0][1] + r[1][0])/s, (r[0][2] + r[2][0])/s]
    elif r[1][1] > r[2][2]:
        s = 2.0*sqrt(1.0 + r[1][1] - r[0][0] - r[2][2])
        q = [(r[0][2] - r[2][0])/s, (r[0][1] + r[1][0])/s, 0.25*s, (r[1][2] + r[2][1])/s]
    else:
        s = 2.0*sqrt(1.0 + r[2][2] - r[0][0] - r[1][1])
        q = [(r[1][0] - r[0][1])/s, (r[0][2] + r[2][0])/s, (r[1][2] + r[2][1])/s, 0.25*s]
    if q[0] < 0.0:
        q = rn.negate(q)
    return normalize(q)
