# external imports
import numpy as np
import scipy.sparse as sp
import scipy.sparse.linalg as spla
from scipy.linalg import expm

# internal imports
from pysystems.dynamics.errors import UnknownAlgorithmError
from pysystems.dynamics.utils import check_affine_system

# discretization algorithms accepted by discretize_affine()
ALGORITHMS = ('exact', 'euler')

# names of the dynamics terms, in the order the kernel expects them
TERMS = ('A', 'B', 'c', 'D')

def explicit_euler(A, B, c, D, h):
    """
    Discretizes the continuous-time affine system dx/dt = A x + B u + c + D w approximating x(t+h) with x(t) + h dx/dt(t).
    Valid for any A, also singular.

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

    Returns
    ----------
    A_d : numpy.ndarray or scipy.sparse matrix
        Discrete-time state transition matrix.
    B_d : numpy.ndarray or scipy.sparse matrix
        Discrete-time input to state map.
    c_d : numpy.ndarray
        Discrete-time offset term.
    D_d : numpy.ndarray or scipy.sparse matrix
        Discrete-time noise to state map.
    """

    # check inputs
    check_affine_system(A, B, c, D, h)

    # identity of the same type of A
    n = A.shape[0]
    if sp.issparse(A):
        I = sp.identity(n, dtype=A.dtype, format=A.format)
    else:
        I = np.eye(n, dtype=A.dtype)

    # discretize
    A_d = I + A*h
    B_d = B*h
    c_d = c*h
    D_d = D*h

    return A_d, B_d, c_d, D_d

def exact_discretization(A, B, c, D, h):
    """
    Assuming the input u and the noise w constant in the time step, it returns the exact discretization of the affine system dx/dt = A x + B u + c + D w.

    Math
    ----------
    Solving the differential equation, we have
    x(h) = exp(A h) x(0) + int_0^h exp(A (h - t)) (B u + c + D w) dt.
    With A invertible, int_0^h exp(A (h - t)) dt = A^-1 (exp(A h) - I) =: M, hence
    x(h) = A_d x(0) + B_d u + c_d + D_d w,
    where
    A_d := exp(A h),
    B_d := M B,
    c_d := M c,
    D_d := M D.

    Arguments
    ----------
    A : numpy.ndarray or scipy.sparse matrix
        State transition matrix (must be invertible).
    B : numpy.ndarray or scipy.sparse matrix
        Input to state map.
    c : numpy.ndarray
        Offset term.
    D : numpy.ndarray or scipy.sparse matrix
        Noise to state map.
    h : float
        Discretization time step.

    Returns
    ----------
    A_d : numpy.ndarray or scipy.sparse matrix
        Discrete-time state transition matrix.
    B_d : numpy.ndarray or scipy.sparse matrix
        Discrete-time input to state map.
    c_d : numpy.ndarray
        Discrete-time offset term.
    D_d : numpy.ndarray or scipy.sparse matrix
        Discrete-time noise to state map.
    """

    # check inputs
    check_affine_system(A, B, c, D, h)
    n = A.shape[0]

    # sparse state matrix
    if sp.issparse(A):
        A = A.tocsc().astype(float)
        A_d = spla.expm(A*h)
        M = spla.inv(A).dot(A_d - sp.identity(n, format='csc'))

    # dense state matrix (singular A raises numpy.linalg.LinAlgError)
    else:
        A = np.asarray(A, dtype=complex if np.iscomplexobj(A) else float)
        A_d = expm(A*h)
        M = np.linalg.inv(A).dot(A_d - np.eye(n))
        B = _dense(B)
        D = _dense(D)

    # apply the integration factor to the affine terms
    B_d = M.dot(B)
    c_d = M.dot(c)
    D_d = M.dot(D)

    return A_d, B_d, c_d, D_d

def _dense(X):
    """
    Returns X as a numpy.ndarray.
    """
    if sp.issparse(X):
        return X.toarray()
    return X

def discretize_affine(A, B, c, D, h, algorithm='exact'):
    """
    Discretizes the affine system dx/dt = A x + B u + c + D w with the given algorithm.

    Arguments
    ----------
    A, B, c, D : numpy.ndarray or scipy.sparse matrix
        Terms of the continuous-time system (see exact_discretization()).
    h : float
        Discretization time step.
    algorithm : str
        Discretization algorithm: 'exact', or 'euler'.

    Returns
    ----------
    A_d, B_d, c_d, D_d : numpy.ndarray or scipy.sparse matrix
        Terms of the discrete-time system.
    """

    if algorithm == 'exact':
        return exact_discretization(A, B, c, D, h)
    elif algorithm == 'euler':
        return explicit_euler(A, B, c, D, h)
    raise UnknownAlgorithmError('unknown discretization algorithm ' + str(algorithm) + '.')

def zero_terms(A):
    """
    Zero stand-ins for the terms B, c, and D of a system with state matrix A.
    B and D have as many rows as A and no columns, c is a vector of zeros.
    They have the same element type of A, and B and D are sparse if A is.

    Arguments
    ----------
    A : numpy.ndarray or scipy.sparse matrix
        State transition matrix.

    Returns
    ----------
    zeros : dict
        Zero values with keys 'B', 'c', 'D'.
    """

    n = A.shape[0]
    if sp.issparse(A):
        M = sp.csr_matrix((n, 0), dtype=A.dtype)
    else:
        M = np.zeros((n, 0), dtype=A.dtype)

    return {'B': M, 'c': np.zeros(n, dtype=A.dtype), 'D': M}

def discretize_terms(terms, h, algorithm='exact'):
    """
    Discretizes a system that has only a subset of the terms A, B, c, D.
    The missing terms are replaced with zeros, the full system is discretized, and only the terms that were given are returned.

    Arguments
    ----------
    terms : list of (str, numpy.ndarray)
        Names and values of the terms of the continuous-time system, the first one must be 'A'.
    h : float
        Discretization time step.
    algorithm : str
        Discretization algorithm: 'exact', or 'euler'.

    Returns
    ----------
    terms_d : list of (str, numpy.ndarray)
        Names and values of the discrete-time terms, in the same order as terms.
    """

    # check names
    terms = list(terms)
    names = [name for name, _ in terms]
    if not names or names[0] != 'A':
        raise ValueError('the first term must be the state matrix A.')
    if len(set(names)) != len(names):
        raise ValueError('repeated terms ' + str(names) + '.')
    for name in names:
        if name not in TERMS:
            raise ValueError('unknown term ' + str(name) + '.')

    # fill the missing terms with zeros
    values = dict(terms)
    A = values['A']
    full = zero_terms(A)
    full.update(values)

    # discretize and keep only the given terms
    values_d = dict(zip(TERMS, discretize_affine(*[full[t] for t in TERMS], h=h, algorithm=algorithm)))

    return [(name, values_d[name]) for name in names]
