# external imports
import numpy as np
import scipy.sparse as sp
import sympy
from sympy.polys.matrices import DomainMatrix

# internal imports
from pysystems.dynamics.errors import ShapeMismatchError

def check_affine_system(A, B=None, c=None, D=None, h=None):
    """
    Check that the terms A, B, c, and D of an affine system dx/dt = A x + B u + c + D w have compatible sizes.
    The terms set to None are not checked.

    Arguments
    ----------
    A : numpy.ndarray or scipy.sparse matrix
        State transition matrix.
    B : numpy.ndarray or scipy.sparse matrix
        Input to state map.
    c : numpy.ndarray
        Offset term.
    D : numpy.ndarray or scipy.sparse matrix
        Noise to state map.
    h : float
        Discretization time step.
    """

    # A square matrix
    if len(A.shape) != 2 or A.shape[0] != A.shape[1]:
        raise ShapeMismatchError('A must be a square matrix.')

    # equal number of rows for A and B
    if B is not None:
        if len(B.shape) != 2 or A.shape[0] != B.shape[0]:
            raise ShapeMismatchError('A and B must have the same number of rows.')

    # check c
    if c is not None:
        if sp.issparse(c) or c.ndim != 1:
            raise ShapeMismatchError('c must be a 1-dimensional array.')
        if A.shape[0] != c.size:
            raise ShapeMismatchError('A and c must have the same number of rows.')

    # equal number of rows for A and D
    if D is not None:
        if len(D.shape) != 2 or A.shape[0] != D.shape[0]:
            raise ShapeMismatchError('A and D must have the same number of rows.')

    # check h
    if h is not None:
        if h < 0:
            raise ValueError('the time step h must be positive.')

def matrix_rank(A, tol=None):
    """
    Rank of the matrix A.
    For integer, boolean, and object (e.g. fractions.Fraction or sympy numbers) entries the rank is computed exactly over the rationals.
    For floating point entries the rank is the number of singular values larger than tol, with the numpy default tol = S.max() * max(A.shape) * eps.

    Arguments
    ----------
    A : numpy.ndarray or scipy.sparse matrix
        Matrix whose rank has to be computed.
    tol : float
        Threshold below which singular values are considered zero (floating point matrices only).

    Returns
    ----------
    rank : int
        Rank of A.
    """

    # sparse matrices are densified
    if sp.issparse(A):
        A = A.toarray()
    A = np.asarray(A)

    # empty matrix
    if A.size == 0:
        return 0

    # exact rank
    if A.dtype.kind == 'b':
        A = A.astype(int)
    if A.dtype.kind in 'iuO':
        # elimination over QQ (or over the field of the entries)
        M = DomainMatrix.from_Matrix(sympy.Matrix(A.tolist()))
        return int(M.to_field().rank())

    return int(np.linalg.matrix_rank(A, tol))

def is_invertible(A, tol=None):
    """
    Returns True if the square matrix A has full rank (see matrix_rank()).
    """
    return matrix_rank(A, tol) == A.shape[0]

def get_state_transition_matrices(x, u, x_dot):
    """
    Extracts from the symbolic expression of the state time derivative the matrices A, B, and c.

    Arguments
    ----------
    x : sympy matrix filled with sympy symbols
        Symbolic state of the system.
    u : sympy matrix filled with sympy symbols
        Symbolic input of the system.
    x_dot : sympy matrix filled with sympy symbolic affine expressions
        Symbolic value of the state time derivative.

    Returns
    ----------
    A : numpy.ndarray
        State transition matrix.
    B : numpy.ndarray
        Input to state map.
    c : numpy.ndarray
        Offset term.
    """

    # state transition matrices
    A = np.array(x_dot.jacobian(x)).astype(np.float64)
    B = np.array(x_dot.jacobian(u)).astype(np.float64)

    # offset term
    origin = {xi:0 for xi in x}
    origin.update({ui:0 for ui in u})
    c = np.array(x_dot.subs(origin)).astype(np.float64).flatten()

    return A, B, c
