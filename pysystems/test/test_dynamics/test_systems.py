# external imports
import unittest
import numpy as np
import sympy

# internal inputs
from pysystems.geometry.polyhedron import Polyhedron
from pysystems.dynamics.errors import InvalidSystemClassError, ShapeMismatchError
from pysystems.dynamics import systems
from pysystems.dynamics.systems import (
    AbstractSystem, ContinuousSystem, DiscreteSystem, register_system_type, complementary_type,
    LinearContinuousSystem, LinearControlContinuousSystem, AffineContinuousSystem, AffineControlContinuousSystem,
    NoisyLinearControlContinuousSystem, ConstrainedLinearControlContinuousSystem,
    NoisyConstrainedLinearControlContinuousSystem, LinearControlDiscreteSystem
    )

# all the built-in continuous-time systems
CONTINUOUS_SYSTEMS = [
    systems.LinearContinuousSystem,
    systems.LinearControlContinuousSystem,
    systems.AffineContinuousSystem,
    systems.AffineControlContinuousSystem,
    systems.NoisyLinearControlContinuousSystem,
    systems.ConstrainedLinearContinuousSystem,
    systems.ConstrainedLinearControlContinuousSystem,
    systems.ConstrainedAffineContinuousSystem,
    systems.ConstrainedAffineControlContinuousSystem,
    systems.NoisyConstrainedLinearControlContinuousSystem
    ]

class TestSystems(unittest.TestCase):

    def test_intialization(self):

        # positional and keyword arguments
        A = np.ones((3,3))
        B = np.ones((3,2))
        c = np.ones(3)
        S = AffineControlContinuousSystem(A, B, c)
        self.assertIs(S.A, A)
        self.assertIs(S.B, B)
        self.assertIs(S.c, c)
        S = AffineControlContinuousSystem(A, c=c, B=B)
        self.assertIs(S.c, c)
        self.assertEqual((S.nx, S.nu, S.nw), (3, 2, 0))

        # wrong number of arguments
        self.assertRaises(TypeError, AffineControlContinuousSystem, A, B)
        self.assertRaises(TypeError, AffineControlContinuousSystem, A, B, c, c)
        self.assertRaises(TypeError, AffineControlContinuousSystem, A, B, c, B=B)
        self.assertRaises(TypeError, LinearContinuousSystem, A, X=None)

        # wrong initializations
        self.assertRaises(ShapeMismatchError, LinearContinuousSystem, np.ones((3,2)))
        self.assertRaises(ShapeMismatchError, LinearControlContinuousSystem, A, np.ones((4,1)))
        self.assertRaises(ShapeMismatchError, AffineContinuousSystem, A, np.ones(4))
        self.assertRaises(ShapeMismatchError, AffineContinuousSystem, A, np.ones((3,1)))
        self.assertRaises(ShapeMismatchError, NoisyLinearControlContinuousSystem, A, B, np.ones((2,2)))

        # missing terms passed as None
        self.assertRaises(ShapeMismatchError, LinearControlContinuousSystem, A, None)
        self.assertRaises(ShapeMismatchError, NoisyLinearControlContinuousSystem, A, B, D=None)
        self.assertRaises(ShapeMismatchError, AffineContinuousSystem, A, c=None)
        self.assertRaises(ShapeMismatchError, LinearContinuousSystem, None)

    def test_sets(self):

        # polyhedral sets with right dimensions
        A = np.ones((2,2))
        B = np.ones((2,1))
        D = np.ones((2,3))
        X = Polyhedron.from_bounds(-np.ones(2), np.ones(2))
        U = Polyhedron.from_bounds(-np.ones(1), np.ones(1))
        W = Polyhedron.from_bounds(-np.ones(3), np.ones(3))
        S = NoisyConstrainedLinearControlContinuousSystem(A, B, D, X, U, W)
        self.assertEqual((S.nx, S.nu, S.nw), (2, 1, 3))
        self.assertEqual(S.dynamics_terms(), [('A', A), ('B', B), ('D', D)])
        self.assertEqual(S.structural_fields(), [('X', X), ('U', U), ('W', W)])

        # wrong dimensions
        self.assertRaises(ShapeMismatchError, NoisyConstrainedLinearControlContinuousSystem, A, B, D, X, W, U)
        self.assertRaises(ShapeMismatchError, ConstrainedLinearControlContinuousSystem, A, B, U, U)

        # sets of other types are not checked
        S = ConstrainedLinearControlContinuousSystem(A, B, 'X', 'U')
        self.assertEqual(S.structural_fields(), [('X', 'X'), ('U', 'U')])

    def test_immutable(self):

        S = LinearControlContinuousSystem(np.eye(2), np.ones((2,1)))
        with self.assertRaises(AttributeError):
            S.A = np.zeros((2,2))
        with self.assertRaises(AttributeError):
            S.c = np.zeros(2)

    def test_domain(self):

        S = LinearContinuousSystem(np.eye(2))
        self.assertTrue(S.is_continuous())
        self.assertFalse(S.is_discrete())
        S = LinearControlDiscreteSystem(np.eye(2), np.ones((2,1)))
        self.assertTrue(S.is_discrete())
        self.assertFalse(S.is_continuous())
        self.assertTrue(repr(S).startswith('LinearControlDiscreteSystem(A='))

    def test_complementary_type(self):

        for cls in CONTINUOUS_SYSTEMS:

            # same name with discrete in place of continuous
            cls_d = complementary_type(cls)
            self.assertTrue(issubclass(cls_d, DiscreteSystem))
            self.assertEqual(cls_d.__name__, cls.__name__.replace('Continuous', 'Discrete'))
            self.assertEqual(cls_d.terms, cls.terms)
            self.assertEqual(cls_d.sets, cls.sets)

            # round trip
            self.assertIs(complementary_type(cls_d), cls)

        # neither continuous nor discrete
        self.assertRaises(InvalidSystemClassError, complementary_type, AbstractSystem)
        self.assertRaises(InvalidSystemClassError, complementary_type, np.ndarray)
        self.assertRaises(InvalidSystemClassError, complementary_type, 'LinearContinuousSystem')

        # without counterpart
        class NoisyContinuousSystem(ContinuousSystem):
            terms = ('A', 'D')
        self.assertRaises(InvalidSystemClassError, complementary_type, NoisyContinuousSystem)

    def test_register_system_type(self):

        # new pair of systems
        @register_system_type
        class NoisyAffineContinuousSystem(ContinuousSystem):
            terms = ('A', 'c', 'D')
        @register_system_type
        class NoisyAffineDiscreteSystem(DiscreteSystem):
            terms = ('A', 'c', 'D')
        self.assertIs(complementary_type(NoisyAffineContinuousSystem), NoisyAffineDiscreteSystem)
        self.assertIs(complementary_type(NoisyAffineDiscreteSystem), NoisyAffineContinuousSystem)
        S = NoisyAffineContinuousSystem(np.eye(2), np.ones(2), np.ones((2,1)))
        self.assertEqual((S.nx, S.nu, S.nw), (2, 0, 1))

        # registering twice the same class is fine, a different class is not
        register_system_type(NoisyAffineContinuousSystem)
        class OtherLinearContinuousSystem(ContinuousSystem):
            terms = ('A',)
        self.assertRaises(ValueError, register_system_type, OtherLinearContinuousSystem)

        # no domain
        class UnknownSystem(AbstractSystem):
            terms = ('A',)
        self.assertRaises(InvalidSystemClassError, register_system_type, UnknownSystem)

    def test_from_symbolic(self):

        # symbolic affine system
        x = sympy.Matrix(sympy.symbols('x1 x2'))
        u = sympy.Matrix([sympy.Symbol('u')])
        x_dot = sympy.Matrix([x[1], u[0] - 1])
        S = AffineControlContinuousSystem.from_symbolic(x, u, x_dot)
        np.testing.assert_array_almost_equal(S.A, np.array([[0., 1.],[0., 0.]]))
        np.testing.assert_array_almost_equal(S.B, np.array([[0.],[1.]]))
        np.testing.assert_array_almost_equal(S.c, np.array([0., -1.]))

        # linear system with offset
        self.assertRaises(ValueError, LinearControlContinuousSystem.from_symbolic, x, u, x_dot)
        x_dot = sympy.Matrix([x[1], u[0]])
        S = LinearControlContinuousSystem.from_symbolic(x, u, x_dot)
        self.assertIsInstance(S, LinearControlContinuousSystem)
        np.testing.assert_array_almost_equal(S.B, np.array([[0.],[1.]]))

if __name__ == '__main__':
    unittest.main()
