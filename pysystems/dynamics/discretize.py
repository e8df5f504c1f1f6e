# external imports
import logging

# internal imports
from pysystems.dynamics.errors import UnknownAlgorithmError, InvalidSystemClassError
from pysystems.dynamics.utils import check_affine_system, matrix_rank
from pysystems.dynamics.discretization_methods import ALGORITHMS, discretize_terms
from pysystems.dynamics.systems import AbstractSystem, complementary_type

logger = logging.getLogger(__name__)

# algorithm used when none is specified: chosen from the rank of A
DEFAULT_ALGORITHM = 'default'

def select_algorithm(A, tol=None):
    """
    Returns 'exact' if the state matrix A is invertible, 'euler' otherwise.
    See matrix_rank() for how the rank is computed.

    Arguments
    ----------
    A : numpy.ndarray or scipy.sparse matrix
        State transition matrix.
    tol : float
        Threshold for the singular values of floating point matrices.
    """

    rank = matrix_rank(A, tol)
    algorithm = 'exact' if rank == A.shape[0] else 'euler'
    logger.debug('rank of A is %d of %d, using %s discretization', rank, A.shape[0], algorithm)

    return algorithm

def discretize(system, h, algorithm=DEFAULT_ALGORITHM):
    """
    Discretizes the continuous-time affine system dx/dt = A x + B u + c + D w (any subset of B, c, D) with time step h.
    The sets of the system are passed to the discrete-time system unchanged.

    Math
    ----------
    If A is invertible the exact discretization is
    A_d = exp(A h), B_d = M B, c_d = M c, D_d = M D, with M = A^-1 (A_d - I),
    otherwise the explicit Euler approximation is
    A_d = I + h A, B_d = h B, c_d = h c, D_d = h D.

    Arguments
    ----------
    system : instance of ContinuousSystem
        Continuous-time system.
    h : float
        Discretization time step (nonnegative).
    algorithm : str
        Discretization algorithm: 'default' (exact if A is invertible, euler otherwise), 'exact', or 'euler'.

    Returns
    ----------
    system_d : instance of DiscreteSystem
        Discrete-time counterpart of system.
    """

    # check inputs
    if algorithm != DEFAULT_ALGORITHM and algorithm not in ALGORITHMS:
        raise UnknownAlgorithmError('unknown discretization algorithm ' + str(algorithm) + '.')
    if not isinstance(system, AbstractSystem) or not system.is_continuous():
        raise InvalidSystemClassError('only continuous-time systems can be discretized, got ' + type(system).__name__ + '.')
    terms = system.dynamics_terms()
    sets = system.structural_fields()
    values = dict(terms)
    check_affine_system(values['A'], values.get('B'), values.get('c'), values.get('D'), h)

    # choose the algorithm
    if algorithm == DEFAULT_ALGORITHM:
        algorithm = select_algorithm(values['A'])
    logger.debug('discretizing %s with h = %s and %s algorithm', type(system).__name__, h, algorithm)

    # discretize and build the discrete-time system
    discrete_type = complementary_type(type(system))
    terms_d = discretize_terms(terms, h, algorithm)

    return discrete_type(*[v for _, v in terms_d] + [v for _, v in sets])
