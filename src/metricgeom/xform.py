## matrix object and transformation builders for metricgeom

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

from math import *
import metricgeom.rn as rn
import metricgeom.p3 as p3
from metricgeom.pn import EUCLIDEAN

## A Matrix wraps the flat row-major list used throughout metricgeom,
## held in self.m, so that the functional layer and the object layer
## share one representation.  Vectors passed to mul() are column
## vectors.  When the transpose flag is set, get/set and the row and
## column accessors read the stored list as its transpose; self.m
## itself is never rearranged.


def _isgoodnum(x):
    return (not isinstance(x, bool)) and isinstance(x, (int, float)) and isfinite(x)

def _isvect(x):
    return isinstance(x, (tuple, list)) and all(_isgoodnum(y) for y in x)


class Matrix:
    """square transformation matrix acting on homogeneous coordinates"""

    def __init__(self, a=None, trans=False):
        self.n = 4
        self.m = rn.identityMatrix(4)

        if isinstance(a, Matrix):
            self.n = a.n
            self.m = a.flat()

        elif isinstance(a, (tuple, list)):
            if a and isinstance(a[0], (tuple, list)):
                n = len(a)
                for row in a:
                    if len(row) != n:
                        raise ValueError('bad non-square rows in matrix initialization: {}'.format(a))
                flat = [x for row in a for x in row]
            else:
                n = rn._order(a)
                flat = list(a)
            for x in flat:
                if not _isgoodnum(x):
                    raise ValueError('bad element in matrix initialization: {}'.format(x))
            self.n = n
            self.m = [float(x) for x in flat]

        elif a is not None:
            raise ValueError('bad thing used in attempt to initialize matrix: {}'.format(a))
        self.trans = trans

    def __repr__(self):
        return "Matrix({},{})".format(
            [self.m[i*self.n:(i+1)*self.n] for i in range(self.n)], self.trans)

    def _index(self, i, j):
        if i < 0 or i >= self.n or j < 0 or j >= self.n:
            raise ValueError('bad index: {},{}'.format(i, j))
        if self.trans:
            return j*self.n + i
        return i*self.n + j

    def flat(self):
        """row-major flat list of the matrix as seen through the
        transpose flag"""
        if self.trans:
            return rn.transpose(self.m)
        return list(self.m)

    #return value indexed by i,j
    def get(self, i, j):
        return self.m[self._index(i, j)]

    #set value indexed by i,j
    def set(self, i, j, x):
        if not _isgoodnum(x):
            raise ValueError('bad value passed to set: {}'.format(x))
        self.m[self._index(i, j)] = x

    def getrow(self, i):
        if i < 0 or i >= self.n:
            raise ValueError('bad row passed to getrow: {}'.format(i))
        return [self.get(i, j) for j in range(self.n)]

    def getcol(self, j):
        if j < 0 or j >= self.n:
            raise ValueError('bad column passed to getcol: {}'.format(j))
        return [self.get(i, j) for i in range(self.n)]

    def setrow(self, i, x):
        if not _isvect(x) or len(x) != self.n:
            raise ValueError('bad non-vector passed to setrow: {}'.format(x))
        if i < 0 or i >= self.n:
            raise ValueError('bad row index passed to setrow: {}'.format(i))
        for j in range(self.n):
            self.set(i, j, x[j])

    def setcol(self, j, x):
        if not _isvect(x) or len(x) != self.n:
            raise ValueError('bad non-vector passed to setcol: {}'.format(x))
        if j < 0 or j >= self.n:
            raise ValueError('bad column index passed to setcol: {}'.format(j))
        for i in range(self.n):
            self.set(i, j, x[i])

    # matrix multiply.  If x is a matrix, compute MX.  If x is a
    # vector, compute Mx, dehomogenizing when x omits the homogeneous
    # coordinate.  If x is a scalar, compute xM.  Respects the
    # transpose flag.

    def mul(self, x):
        if isinstance(x, Matrix):
            if x.n != self.n:
                raise ValueError('bad matrix order in mul(): {} vs {}'.format(x.n, self.n))
            return Matrix(rn.timesMatrix(self.flat(), x.flat()))
        elif _isvect(x):
            return rn.matrixTimesVector(self.flat(), x)
        elif _isgoodnum(x):
            return Matrix(rn.times(x, self.flat()))

        raise ValueError('bad thing passed to mul(): {}'.format(x))

    def inverse(self):
        return Matrix(rn.inverse(self.flat()))

    def determinant(self):
        return rn.determinant(self.m)


# return the generalized 4x4 arbitrary axis rotation matrix, angle in
# degrees
def Rotation(axis, angle, inverse=False):
    if rn.euclideanNorm(axis[:3]) < p3.EPS:
        raise ValueError('zero-length rotation axis not allowed')
    if inverse:
        angle *= -1.0
    return Matrix(p3.rotationMatrix(axis, radians(angle % 360.0)))

## translation along the geodesic from the origin to point.  A 3-vector
## is a Euclidean displacement.
def Translation(point, metric=EUCLIDEAN, inverse=False):
    if len(point) == 3:
        point = list(point) + [1.0]
    T = Matrix(p3.makeTranslationMatrix(point, metric))
    if inverse:
        return T.inverse()
    return T

def Reflection(plane, metric=EUCLIDEAN):
    return Matrix(p3.makeReflectionMatrix(plane, metric))

def Scale(x, y=None, z=None, inverse=False):
    if _isgoodnum(x):
        sx = x
        if _isgoodnum(y) and _isgoodnum(z):
            sy = y
            sz = z
        else:
            sy = sz = x
    elif _isvect(x) and len(x) >= 3:
        sx, sy, sz = x[0], x[1], x[2]
    else:
        raise ValueError('bad scaling values passed to Scale')

    if inverse:
        sx = 1.0/sx
        sy = 1.0/sy
        sz = 1.0/sz

    return Matrix(p3.makeScaleMatrix(sx, sy, sz))
