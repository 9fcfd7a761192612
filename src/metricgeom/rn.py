## generic real vector space operations on flat vectors and row-major
## square matrices for metricgeom

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

"""generic linear algebra for **metricgeom**

====================
OVERVIEW
====================

The metricgeom.rn module is the leaf layer of the kernel.  It knows
nothing about geometry or metrics; it provides dimension-agnostic
operations on vectors and square matrices.

vectors
=======

Vectors are ordinary Python lists of numbers, *e.g.* ``[x, y, z, w]``.
The dimension is implicit in the length.  No distinction is made
between points and directions; by convention the *last* slot is the
homogeneous coordinate when a vector is interpreted projectively.

matrices
========

A matrix of order n is a flat list of ``n*n`` numbers in row-major
order, so that entry `(i, j)` lives at index ``i*n + j``.  Matrices act
on column vectors, ``M v``.

destination buffers
===================

Every function that produces a vector or matrix accepts an optional
keyword ``dst``.  If ``dst`` is ``None`` a new list is returned.
Otherwise the result is written into ``dst`` and ``dst`` is returned;
its length must match the result exactly.  Results are always computed
into a temporary first, so ``dst`` may be one of the inputs.

errors
======

Incompatible operand shapes raise ``DimensionError``, a subclass of
``ValueError``.  Degenerate inputs (normalizing a zero vector, a
near-zero homogeneous coordinate) are not errors: the input is left
unchanged.

"""

from math import *
import builtins
import logging
import random

logger = logging.getLogger(__name__)

## constants
## ---------

## default tolerance for zero tests
TOLERANCE = 1e-8

## homogeneous coordinates smaller than this in magnitude are treated
## as already lying at infinity, and are never divided by
DEHOMOGENIZE_TOLERANCE = 1e-10

## pivots below this fraction of the largest matrix entry make a matrix
## singular for the purposes of inverse()
SINGULAR_TOLERANCE = 1e-14


class DimensionError(ValueError):
    """operand shapes are incompatible with the requested operation"""


## internal helpers
## ----------------

def _order(m):
    """order of the square matrix ``m`` stored as a flat list"""
    n = int(round(sqrt(len(m))))
    if n*n != len(m):
        raise DimensionError('bad non-square matrix of length {}'.format(len(m)))
    return n

def _store(dst, result):
    if dst is None:
        return result
    if len(dst) != len(result):
        raise DimensionError('bad destination length {}, expected {}'.format(
            len(dst), len(result)))
    for i, x in enumerate(result):
        dst[i] = x
    return dst

def _storerows(dst, rows):
    if dst is None:
        return rows
    if len(dst) != len(rows):
        raise DimensionError('bad destination row count {}, expected {}'.format(
            len(dst), len(rows)))
    for i, row in enumerate(rows):
        _store(dst[i], row)
    return dst

## elementwise operations tolerate a length difference of one, in
## which case the shorter vector is the affine part of the longer
def _pairlength(a, b):
    d = len(a) - len(b)
    if d < -1 or d > 1:
        raise DimensionError('bad vector lengths: {} and {}'.format(len(a), len(b)))
    return builtins.min(len(a), len(b))

def _samelength(a, b):
    if len(a) != len(b):
        raise DimensionError('vectors must have the same length: {} and {}'.format(
            len(a), len(b)))
    return len(a)


## operations on vectors
## ---------------------

def copy(src, dst=None):
    """copy ``src``, into ``dst`` if given"""
    return _store(dst, list(src))

def add(a, b, dst=None):
    """elementwise `a + b`"""
    n = _pairlength(a, b)
    return _store(dst, [a[i] + b[i] for i in range(n)])

def subtract(a, b, dst=None):
    """elementwise `a - b`"""
    n = _pairlength(a, b)
    return _store(dst, [a[i] - b[i] for i in range(n)])

def times(factor, src, dst=None):
    """vector ``src`` times scalar ``factor``"""
    return _store(dst, [factor*x for x in src])

def negate(src, dst=None):
    return _store(dst, [-x for x in src])

def abs(src, dst=None):
    """elementwise absolute value.  NOTE: shadows the builtin within
    this module; scalar code here uses ``fabs()``"""
    return _store(dst, [fabs(x) for x in src])

## elementwise max and min over the common length.  Like abs(), these
## shadow the builtins within this module.
def max(a, b, dst=None):
    n = _pairlength(a, b)
    return _store(dst, [a[i] if a[i] >= b[i] else b[i] for i in range(n)])

def min(a, b, dst=None):
    n = _pairlength(a, b)
    return _store(dst, [a[i] if a[i] <= b[i] else b[i] for i in range(n)])

def linearCombination(a, aVec, b, bVec, dst=None):
    """`a*aVec + b*bVec`"""
    n = _samelength(aVec, bVec)
    return _store(dst, [a*aVec[i] + b*bVec[i] for i in range(n)])

## Euclidean dot product.  If ``n`` is given only the first ``n``
## terms are summed.
def innerProduct(u, v, n=None):
    """Euclidean inner product of ``u`` and ``v``"""
    if n is None:
        n = _pairlength(u, v)
    elif len(u) < n or len(v) < n:
        raise DimensionError('vectors not long enough for {} terms'.format(n))
    ip = 0.0
    for i in range(n):
        ip += u[i]*v[i]
    return ip

def crossProduct(u, v, dst=None):
    """cross product of the first three coordinates of ``u`` and ``v``"""
    if len(u) < 3 or len(v) < 3:
        raise DimensionError('bad vectors for cross product: lengths {} and {}'.format(
            len(u), len(v)))
    return _store(dst, [u[1]*v[2] - u[2]*v[1],
                        u[2]*v[0] - u[0]*v[2],
                        u[0]*v[1] - u[1]*v[0]])

def euclideanNormSquared(v):
    return innerProduct(v, v)

def euclideanNorm(v):
    return sqrt(innerProduct(v, v))

def euclideanDistanceSquared(u, v):
    return euclideanNormSquared(subtract(u, v))

def euclideanDistance(u, v):
    return sqrt(euclideanDistanceSquared(u, v))

def manhattanNorm(v):
    """sum of absolute values"""
    total = 0.0
    for x in v:
        total += fabs(x)
    return total

def manhattanNormDistance(u, v):
    return manhattanNorm(subtract(u, v))

def maxNorm(v):
    """largest absolute value"""
    return builtins.max((fabs(x) for x in v), default=0.0)

def maxNormDistance(u, v):
    return maxNorm(subtract(u, v))

## the angle between two vectors, or infinity if either is zero
def euclideanAngle(u, v):
    _samelength(u, v)
    uu = innerProduct(u, u)
    vv = innerProduct(v, v)
    if uu == 0.0 or vv == 0.0:
        return inf
    f = innerProduct(u, v)/sqrt(fabs(uu*vv))
    return acos(builtins.min(1.0, builtins.max(-1.0, f)))

def setEuclideanNorm(length, src, dst=None):
    """scale ``src`` to Euclidean length ``length``.  A zero vector is
    returned unchanged."""
    nrm = euclideanNorm(src)
    if nrm == 0.0:
        logger.debug('setEuclideanNorm: zero vector left unchanged')
        return copy(src, dst)
    return times(length/nrm, src, dst)

def normalize(src, dst=None):
    """scale ``src`` to unit Euclidean length, leaving a zero vector unchanged"""
    return setEuclideanNorm(1.0, src, dst)

## orthogonal projection of src onto the line spanned by fixed.  A zero
## fixed vector spans nothing, and the projection is zero.
def projectOnto(src, fixed, dst=None):
    d = innerProduct(fixed, fixed)
    if d == 0.0:
        logger.debug('projectOnto: zero vector spans nothing')
        return _store(dst, [0.0]*len(fixed))
    return times(innerProduct(fixed, src)/d, fixed, dst)

def projectOntoComplement(src, fixed, dst=None):
    """component of ``src`` orthogonal to ``fixed``"""
    return subtract(src, projectOnto(src, fixed), dst)

def equals(u, v, tol=0.0):
    """are ``u`` and ``v`` the same to within ``tol`` in every coordinate"""
    if len(u) != len(v):
        return False
    for i in range(len(u)):
        if fabs(u[i] - v[i]) > tol:
            return False
    return True

def isZero(v, tol=TOLERANCE):
    for x in v:
        if fabs(x) > tol:
            return False
    return True

def isNan(v):
    for x in v:
        if isnan(x):
            return True
    return False

def average(vlist, dst=None):
    """average of a list of vectors of equal length"""
    if not vlist:
        raise ValueError('cannot average an empty list of vectors')
    n = len(vlist[0])
    total = [0.0]*n
    for v in vlist:
        _samelength(total, v)
        for i in range(n):
            total[i] += v[i]
    return times(1.0/len(vlist), total, dst)

def barycentricTriangleInterp(corners, weights, dst=None):
    """weighted sum of three corner vectors"""
    if len(corners) != 3 or len(weights) != 3:
        raise DimensionError('bad triangle: {} corners, {} weights'.format(
            len(corners), len(weights)))
    n = len(corners[0])
    result = [0.0]*n
    for c, w in zip(corners, weights):
        _samelength(result, c)
        for i in range(n):
            result[i] += w*c[i]
    return _store(dst, result)

## Interpolate over the quad with bottom edge vb..cb and top edge
## vt..ct.  u runs from the v edge to the c edge, v from bottom to top.
def bilinearInterpolation(u, v, vb, vt, cb, ct, dst=None):
    vv = linearCombination(1.0 - u, vb, u, vt)
    cc = linearCombination(1.0 - u, cb, u, ct)
    return linearCombination(1.0 - v, vv, v, cc, dst)

## cubic Bezier combination of end points v0, v1 and control points
## t0, t1 at parameter t
def bezierCombination(t, v0, t0, t1, v1, dst=None):
    s = 1.0 - t
    c0 = s*s*s
    c1 = 3.0*s*s*t
    c2 = 3.0*s*t*t
    c3 = t*t*t
    n = _samelength(v0, v1)
    _samelength(t0, t1)
    _samelength(v0, t0)
    return _store(dst, [c0*v0[i] + c1*t0[i] + c2*t1[i] + c3*v1[i]
                        for i in range(n)])

def calculateBounds(vlist):
    """compute ``[mins, maxs]``, the coordinatewise bounds of a list of vectors"""
    if not vlist:
        raise ValueError('cannot bound an empty list of vectors')
    n = len(vlist[0])
    lo = [inf]*n
    hi = [-inf]*n
    for v in vlist:
        _samelength(lo, v)
        if isNan(v):
            raise ValueError('bad nan coordinate in bounds calculation: {}'.format(v))
        for i in range(n):
            lo[i] = builtins.min(lo[i], v[i])
            hi[i] = builtins.max(hi[i], v[i])
    return [lo, hi]

## the plane with normal plane[:3] passing through point
def planeParallelToPassingThrough(plane, point, dst=None):
    """plane parallel to ``plane`` passing through ``point``"""
    result = [plane[0], plane[1], plane[2], -innerProduct(plane, point, 3)]
    return _store(dst, result)

def toString(v, fmt='{:g}'):
    return '\t'.join(fmt.format(x) for x in v)

def matrixToString(m, fmt='{:g}'):
    n = _order(m)
    return '\n'.join(toString(m[i*n:(i+1)*n], fmt) for i in range(n)) + '\n'


## operations on matrices
## ----------------------

def identityMatrix(n):
    """order ``n`` identity matrix"""
    return [1.0 if i == j else 0.0 for i in range(n) for j in range(n)]

def setIdentityMatrix(m):
    """overwrite ``m`` with the identity, in place"""
    return _store(m, identityMatrix(_order(m)))

def isIdentityMatrix(m, tol=TOLERANCE):
    return equals(m, identityMatrix(_order(m)), tol)

def isSpecialMatrix(m, tol=TOLERANCE):
    """true if the determinant of ``m`` is plus or minus one"""
    return fabs(fabs(determinant(m)) - 1.0) < tol

def diagonalMatrix(entries, dst=None):
    n = len(entries)
    result = [0.0]*(n*n)
    for i in range(n):
        result[i*n + i] = entries[i]
    return _store(dst, result)

## The permutation matrix P with (P v)[i] == v[perm[i]], which is to
## say row i holds a single 1 in column perm[i]
def permutationMatrix(perm, dst=None):
    """permutation matrix selecting coordinate ``perm[i]`` into slot ``i``"""
    n = len(perm)
    if sorted(perm) != list(range(n)):
        raise ValueError('bad permutation: {}'.format(perm))
    result = [0.0]*(n*n)
    for i in range(n):
        result[i*n + perm[i]] = 1.0
    return _store(dst, result)

def transpose(src, dst=None):
    n = _order(src)
    return _store(dst, [src[j*n + i] for i in range(n) for j in range(n)])

def trace(m):
    n = _order(m)
    t = 0.0
    for i in range(n):
        t += m[i*n + i]
    return t

def timesMatrix(a, b, dst=None):
    """matrix product `a b`"""
    if len(a) != len(b):
        raise DimensionError('matrices must be the same size: {} and {}'.format(
            len(a), len(b)))
    n = _order(a)
    result = [0.0]*(n*n)
    for i in range(n):
        for j in range(n):
            s = 0.0
            for k in range(n):
                s += a[i*n + k]*b[k*n + j]
            result[i*n + j] = s
    return _store(dst, result)

def conjugateByMatrix(m, c, dst=None):
    """`c m c^-1`"""
    return timesMatrix(timesMatrix(c, m), inverse(c), dst)

def bilinearForm(m, u, v):
    """`u^T m v`"""
    n = _order(m)
    if len(u) != n or len(v) != n:
        raise DimensionError('bad vectors of length {} and {} for order {} form'.format(
            len(u), len(v), n))
    total = 0.0
    for i in range(n):
        for j in range(n):
            total += u[i]*m[i*n + j]*v[j]
    return total

## Matrix-vector products.  applyLinear() treats v as a full vector of
## the matrix's order.  applyProjective() treats v as the affine part
## of a homogeneous vector with an implicit trailing 1, and
## dehomogenizes the product.  matrixTimesVector() infers which one
## is meant from the sizes.

def applyLinear(m, v, dst=None):
    """`M v` for a vector whose length equals the matrix order"""
    n = _order(m)
    if len(v) != n:
        raise DimensionError('bad vector length {} for matrix of order {}'.format(
            len(v), n))
    result = [0.0]*n
    for i in range(n):
        s = 0.0
        for j in range(n):
            s += m[i*n + j]*v[j]
        result[i] = s
    return _store(dst, result)

def applyProjective(m, v, dst=None):
    """`M [v, 1]`, dehomogenized and with the last slot dropped"""
    n = _order(m)
    if len(v) != n - 1:
        raise DimensionError('bad affine vector length {} for matrix of order {}'.format(
            len(v), n))
    full = applyLinear(m, list(v) + [1.0])
    w = full[-1]
    if fabs(w) > DEHOMOGENIZE_TOLERANCE:
        result = [x/w for x in full[:-1]]
    else:
        logger.debug('applyProjective: image lies at infinity, not dehomogenized')
        result = full[:-1]
    return _store(dst, result)

def matrixTimesVector(m, v, dst=None):
    """`M v`, with implicit dehomogenization when the matrix order is
    one more than the vector length"""
    n = _order(m)
    if len(v) == n:
        return applyLinear(m, v, dst)
    elif len(v) == n - 1:
        return applyProjective(m, v, dst)
    raise DimensionError('bad vector length {} for matrix of order {}'.format(len(v), n))

def matrixTimesVectors(m, vlist, dst=None):
    """apply ``m`` to every vector in ``vlist``"""
    results = [matrixTimesVector(m, v) for v in vlist]
    return _storerows(dst, results)

## the square block of rows t..b and columns l..r, inclusive
def extractSubmatrix(src, l, r, t, b):
    if r - l != b - t:
        raise DimensionError('bad submatrix bounds: (b-t) must equal (r-l)')
    n = _order(src)
    if l < 0 or t < 0 or r >= n or b >= n:
        raise DimensionError('bad submatrix bounds {} for order {}'.format(
            (l, r, t, b), n))
    return [src[i*n + j] for i in range(t, b+1) for j in range(l, r+1)]

## delete one row and one column
def submatrix(m, row, column, dst=None):
    """the order n-1 matrix left after deleting ``row`` and ``column``"""
    n = _order(m)
    if row < 0 or row >= n or column < 0 or column >= n:
        raise DimensionError('bad row/column {},{} for order {}'.format(row, column, n))
    result = [m[i*n + j] for i in range(n) if i != row
              for j in range(n) if j != column]
    return _store(dst, result)

def _smalldeterminant(m, n):
    if n == 1:
        return m[0]
    if n == 2:
        return m[0]*m[3] - m[1]*m[2]
    if n == 3:
        return m[0]*(m[4]*m[8] - m[5]*m[7]) \
            - m[1]*(m[3]*m[8] - m[5]*m[6]) \
            + m[2]*(m[3]*m[7] - m[4]*m[6])
    ## order 4: complementary 2x2 minors of rows 0,1 and rows 2,3
    s0 = m[0]*m[5] - m[1]*m[4]
    s1 = m[0]*m[6] - m[2]*m[4]
    s2 = m[0]*m[7] - m[3]*m[4]
    s3 = m[1]*m[6] - m[2]*m[5]
    s4 = m[1]*m[7] - m[3]*m[5]
    s5 = m[2]*m[7] - m[3]*m[6]
    c5 = m[10]*m[15] - m[11]*m[14]
    c4 = m[9]*m[15] - m[11]*m[13]
    c3 = m[9]*m[14] - m[10]*m[13]
    c2 = m[8]*m[15] - m[11]*m[12]
    c1 = m[8]*m[14] - m[10]*m[12]
    c0 = m[8]*m[13] - m[9]*m[12]
    return s0*c5 - s1*c4 + s2*c3 + s3*c2 - s4*c1 + s5*c0

def determinant(m):
    """determinant, closed form up to order 4 and Laplace expansion
    along the first row above that"""
    n = _order(m)
    if n == 0:
        raise DimensionError('bad empty matrix')
    if n <= 4:
        return _smalldeterminant(m, n)
    det = 0.0
    subm = [0.0]*((n-1)*(n-1))
    for j in range(n):
        term = m[j]*determinant(submatrix(m, 0, j, dst=subm))
        det += term if j % 2 == 0 else -term
    return det

def cofactorMatrix(m):
    n = _order(m)
    if n == 1:
        return [1.0]
    return [(1.0 if (i + j) % 2 == 0 else -1.0)*determinant(submatrix(m, i, j))
            for i in range(n) for j in range(n)]

def adjugate(m):
    """transposed cofactor matrix, so that `adj(M) M = det(M) I`"""
    return transpose(cofactorMatrix(m))

## Gauss-Jordan elimination with partial pivoting
def inverse(m, dst=None):
    """matrix inverse; raises ``ValueError`` for a singular matrix"""
    n = _order(m)
    scale = maxNorm(m)
    a = [list(m[i*n:(i+1)*n]) + [1.0 if i == j else 0.0 for j in range(n)]
         for i in range(n)]
    for col in range(n):
        piv = builtins.max(range(col, n), key=lambda r: fabs(a[r][col]))
        if scale == 0.0 or fabs(a[piv][col]) <= SINGULAR_TOLERANCE*scale:
            raise ValueError('bad singular matrix passed to inverse: {}'.format(list(m)))
        if piv != col:
            a[col], a[piv] = a[piv], a[col]
        p = a[col][col]
        rowc = [x/p for x in a[col]]
        a[col] = rowc
        for r in range(n):
            if r == col:
                continue
            f = a[r][col]
            if f != 0.0:
                a[r] = [x - f*y for x, y in zip(a[r], rowc)]
    return _store(dst, [a[i][n + j] for i in range(n) for j in range(n)])

## Polar decomposition m = q s with q orthogonal and s symmetric, by
## the averaging iteration q <- (q + q^-T)/2 starting from m.  The
## iteration stops after POLAR_ITERATIONS steps or once successive
## iterates agree to POLAR_TOLERANCE.
POLAR_ITERATIONS = 20
POLAR_TOLERANCE = 1e-11

def polarDecompose(m, q=None, s=None):
    """return ``(q, s)`` with ``q`` orthogonal, ``s`` symmetric and
    ``m == q s``.  ``m`` must be invertible."""
    old = list(m)
    for _ in range(POLAR_ITERATIONS):
        new = times(0.5, add(old, transpose(inverse(old))))
        done = equals(new, old, POLAR_TOLERANCE)
        old = new
        if done:
            break
    else:
        logger.debug('polarDecompose: no convergence after %d iterations',
                     POLAR_ITERATIONS)
    stretch = timesMatrix(transpose(old), m)
    return _store(q, old), _store(s, stretch)

## Extend k independent n-vectors (k < n) to a basis of R^n.  The
## missing rows are first filled with arbitrary numbers; then each
## missing row i is replaced by its signed cofactors,
## (-1)^(i+j) det(basis with row i and column j deleted), which by the
## cofactor expansion identity is orthogonal to every other row.
def completeBasis(partial, dst=None, rng=None):
    """complete the rows of ``partial`` to a full basis, returned as a
    list of rows"""
    if not partial:
        raise DimensionError('bad empty partial basis')
    dim = len(partial[0])
    size = len(partial)
    for row in partial:
        if len(row) != dim:
            raise DimensionError('bad ragged partial basis: {}'.format(partial))
    if size >= dim:
        raise DimensionError('bad partial basis: {} vectors of dimension {}'.format(
            size, dim))
    if rng is None:
        rng = random
    basis = [0.0]*(dim*dim)
    for i in range(size):
        basis[i*dim:(i+1)*dim] = list(partial[i])
    for i in range(size, dim):
        for j in range(dim):
            basis[i*dim + j] = rng.random()
    for i in range(size, dim):
        newrow = [(1.0 if (i + j) % 2 == 0 else -1.0)*determinant(submatrix(basis, i, j))
                  for j in range(dim)]
        basis[i*dim:(i+1)*dim] = newrow
    return _storerows(dst, [basis[i*dim:(i+1)*dim] for i in range(dim)])
