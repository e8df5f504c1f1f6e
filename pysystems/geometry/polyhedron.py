# external imports
import numpy as np

class Polyhedron(object):
    """
    Set {x in R^n | A x <= b, C x = d}, used as state set X, input set U, or noise set W of a system.
    Discretization passes it unchanged to the discrete-time system, only its dimension n is checked against the system size.
    """

    def __init__(self, A, b, C=None, d=None):
        """
        Arguments
        ----------
        A : numpy.ndarray
            Left-hand side of the inequalities.
        b : numpy.ndarray
            Right-hand side of the inequalities.
        C : numpy.ndarray
            Left-hand side of the equalities (no equalities if None).
        d : numpy.ndarray
            Right-hand side of the equalities (no equalities if None).
        """

        # no equalities
        if (C is None) != (d is None):
            raise ValueError('missing C or d.')
        if C is None:
            C = np.zeros((0, A.shape[1]))
            d = np.zeros(0)

        # rows and columns
        for E, f in [(A, b), (C, d)]:
            if f.ndim != 1 or E.shape[0] != f.size:
                raise ValueError('each row of the constraint matrices needs one entry of the right-hand side vectors.')
        if C.shape[1] != A.shape[1]:
            raise ValueError('A and C must have the same number of columns.')

        self.A = A
        self.b = b
        self.C = C
        self.d = d

    @property
    def dimension(self):
        return self.A.shape[1]

    @staticmethod
    def from_bounds(x_min, x_max):
        """
        Box {x | x_min <= x <= x_max}, e.g. the input bounds of an actuator.
        """

        if x_min.shape != x_max.shape or x_min.ndim != 1:
            raise ValueError('the bounds must be vectors of the same size.')
        I = np.eye(x_min.size)

        return Polyhedron(np.vstack((I, -I)), np.concatenate((x_max, -x_min)))
