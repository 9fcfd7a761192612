import pytest
from metricgeom.xform import *
from metricgeom.pn import EUCLIDEAN, ELLIPTIC, HYPERBOLIC
import metricgeom.pn as pn
## unit tests for metricgeom xform.py

class TestXform:
    """unit tests for metricgeom matrix operations"""

    def test_matrix(self):
        foo = Matrix([1,2,3,4,5,6,7,8,9,10,11,12,13,14,15,16])
        fooT = Matrix(foo,True)
        bar = Matrix([[1,0,0,1],[0,1,0,1],[0,0,1,1],[0,0,0,1]])
        baz = [1,2,3,1]
        I = Matrix()
        a = 10.0
        assert(I.mul(bar).m == bar.m)
        assert(I.mul(foo).m == foo.m)
        assert(I.mul(fooT).m == fooT.mul(I).m)
        assert(I.mul(I).m == I.m)
        assert(foo.mul(bar).m == [1,2,3,10,5,6,7,26,9,10,11,42,13,14,15,58])
        assert(foo.mul(baz) == [18, 46, 74, 102])
        assert(foo.mul(a).m == [10.0,20.0,30.0,40.0,
                                50.0,60.0,70.0,80.0,
                                90.0,100.0,110.0,120.0,
                                130.0,140.0,150.0,160.0])
        assert(I.mul(baz) == baz)
        ## a vector without its homogeneous coordinate is dehomogenized
        assert(foo.mul([1,2,3]) == pytest.approx([18.0/102.0, 46.0/102.0, 74.0/102.0]))
        ## a 3x3 matrix is a projective map of the plane: a 2-vector
        ## gets an implicit homogeneous coordinate
        C = Matrix([[1,0,2],[0,1,3],[0,0,1]])
        assert(C.n == 3)
        assert(C.mul([1,1]) == [3.0,4.0])
        assert(C.mul([1,1,1]) == [3.0,4.0,1.0])
        assert(C.mul(C).getcol(2) == [4.0,6.0,1.0])

    def test_transpose(self):
        foo = Matrix([1,2,3,4,5,6,7,8,9,10,11,12,13,14,15,16])
        fooT = Matrix(foo,True)
        assert(fooT.get(0,1) == 5)
        assert(fooT.getrow(0) == [1,5,9,13])
        assert(fooT.getcol(0) == [1,2,3,4])
        fooT.set(0,1,-1)
        assert(foo.get(0,1) == 2)
        assert(fooT.m[4] == -1)
        fooT.setrow(3,[0,0,0,1])
        assert(fooT.getrow(3) == [0,0,0,1])
        assert(fooT.getcol(3) == [13,14,15,1])
        assert(foo.getcol(3) == [4,8,12,16])

    def test_order(self):
        m = Matrix([[2,0],[0,4]])
        assert(m.n == 2)
        assert(m.determinant() == 8.0)
        assert(m.inverse().m == [0.5,0.0,0.0,0.25])
        assert(m.mul([1,1]) == [2.0,4.0])
        with pytest.raises(ValueError):
            m.mul(Matrix())

    def test_bad_values(self):
        with pytest.raises(ValueError):
            Matrix([1,2,3])
        with pytest.raises(ValueError):
            Matrix([[1,2],[3]])
        with pytest.raises(ValueError):
            Matrix([True,0,0,1])
        with pytest.raises(ValueError):
            Matrix('abcd')
        m = Matrix()
        with pytest.raises(ValueError):
            m.get(4,0)
        with pytest.raises(ValueError):
            m.set(0,0,float('nan'))
        with pytest.raises(ValueError):
            m.setrow(0,[1,2,3])
        with pytest.raises(ValueError):
            m.mul('x')

    def test_builders(self):
        R = Rotation([0,0,1],90)
        assert(R.mul([1,0,0,1]) == pytest.approx([0,1,0,1]))
        assert(R.mul(Rotation([0,0,1],90,inverse=True)).m == pytest.approx(Matrix().m))
        with pytest.raises(ValueError):
            Rotation([0,0,0],45)

        T = Translation([1,2,3])
        assert(T.mul([0,0,0,1]) == [1.0,2.0,3.0,1.0])
        assert(Translation([1,2,3],inverse=True).mul([1,2,3,1]) == pytest.approx([0,0,0,1]))

        S = Scale(2)
        assert(S.mul([1,1,1,1]) == [2.0,2.0,2.0,1.0])
        assert(Scale(1,2,3).mul([1,1,1]) == [1.0,2.0,3.0])
        assert(Scale([2,4,8],inverse=True).mul([2,4,8]) == [1.0,1.0,1.0])
        with pytest.raises(ValueError):
            Scale('big')

        F = Reflection([1,0,0,0])
        assert(F.mul([1,2,3,1]) == [-1.0,2.0,3.0,1.0])

    @pytest.mark.parametrize('metric', [EUCLIDEAN, ELLIPTIC, HYPERBOLIC])
    def test_metric_builders(self, metric):
        T = Translation([0.1,0.2,-0.3,1.0], metric)
        assert(pn.isIsometry(T.m, metric))
        F = Reflection([0,1,0,-0.1], metric)
        assert(pn.isIsometry(F.mul(T).m, metric))
