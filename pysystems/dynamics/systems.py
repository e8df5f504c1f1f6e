# external imports
import numpy as np

# internal imports
from pysystems.geometry.polyhedron import Polyhedron
from pysystems.dynamics.errors import InvalidSystemClassError, ShapeMismatchError
from pysystems.dynamics.utils import check_affine_system, get_state_transition_matrices

# time domains of a system
DOMAINS = ('continuous', 'discrete')

# registered system classes, keys are (domain, terms, sets)
_system_types = {}

class AbstractSystem(object):
    """
    Affine system with state matrix A, optional terms B, c, D, and optional sets X, U, W.
    Subclasses declare:
    domain, 'continuous' or 'discrete';
    terms, the names of the dynamics terms (A first, then a subset of B, c, D);
    sets, the names of the state, input, and noise sets (a subset of X, U, W).
    The instances are immutable.
    """

    domain = None
    terms = ('A',)
    sets = ()

    def __init__(self, *args, **kwargs):
        """
        Initializes the system.
        The arguments are the terms followed by the sets, in the order declared by the class, and can be passed also by name.
        """

        # match arguments and fields
        fields = self.terms + self.sets
        if len(args) > len(fields):
            raise TypeError(type(self).__name__ + ' takes ' + str(len(fields)) + ' arguments ' + str(fields) + '.')
        values = dict(zip(fields, args))
        for name, value in kwargs.items():
            if name not in fields or name in values:
                raise TypeError('unexpected or repeated argument ' + str(name) + '.')
            values[name] = value
        missing = [f for f in fields if f not in values]
        if missing:
            raise TypeError('missing arguments ' + str(missing) + '.')

        # check inputs
        for name in self.terms:
            if values[name] is None:
                raise ShapeMismatchError('the term ' + name + ' of ' + type(self).__name__ + ' cannot be None.')
        check_affine_system(values['A'], values.get('B'), values.get('c'), values.get('D'))

        # store inputs
        for name in fields:
            object.__setattr__(self, name, values[name])

        # system size
        object.__setattr__(self, 'nx', values['A'].shape[0])
        object.__setattr__(self, 'nu', values['B'].shape[1] if 'B' in values else 0)
        object.__setattr__(self, 'nw', values['D'].shape[1] if 'D' in values else 0)

        # check sets
        dimensions = {'X': self.nx, 'U': self.nu, 'W': self.nw}
        for name in self.sets:
            S = values[name]
            if isinstance(S, Polyhedron) and S.dimension != dimensions[name]:
                raise ShapeMismatchError('the set ' + name + ' must have dimension ' + str(dimensions[name]) + '.')

    def __setattr__(self, name, value):
        raise AttributeError('systems are immutable, cannot set ' + str(name) + '.')

    def __repr__(self):
        fields = ', '.join(f + '=' + repr(getattr(self, f)) for f in self.terms + self.sets)
        return type(self).__name__ + '(' + fields + ')'

    def dynamics_terms(self):
        """
        Returns the list of (name, value) of the dynamics terms, in the declared order.
        """
        return [(name, getattr(self, name)) for name in self.terms]

    def structural_fields(self):
        """
        Returns the list of (name, value) of the sets, in the declared order.
        """
        return [(name, getattr(self, name)) for name in self.sets]

    def is_continuous(self):
        return self.domain == 'continuous'

    def is_discrete(self):
        return self.domain == 'discrete'

class ContinuousSystem(AbstractSystem):
    """
    Continuous-time system dx/dt = A x (+ B u) (+ c) (+ D w).
    """

    domain = 'continuous'

class DiscreteSystem(AbstractSystem):
    """
    Discrete-time system x(t+1) = A x(t) (+ B u(t)) (+ c) (+ D w(t)).
    """

    domain = 'discrete'

    @classmethod
    def from_continuous(cls, system, h, algorithm='default'):
        """
        Instantiates a discrete-time system discretizing a continuous-time one (see discretize()).

        Arguments
        ----------
        system : instance of ContinuousSystem
            Continuous-time system whose counterpart is cls.
        h : float
            Discretization time step.
        algorithm : str
            Discretization algorithm: 'default', 'exact', or 'euler'.
        """

        # avoid circular import
        from pysystems.dynamics.discretize import discretize

        S = discretize(system, h, algorithm)
        if not isinstance(S, cls):
            raise InvalidSystemClassError(type(system).__name__ + ' does not discretize to ' + cls.__name__ + '.')

        return S

def register_system_type(cls):
    """
    Registers a system class, so that its continuous or discrete counterpart can be found by complementary_type().
    Returns the class itself, hence it can be used as a class decorator.

    Arguments
    ----------
    cls : subclass of AbstractSystem
        System class to be registered.
    """

    if cls.domain not in DOMAINS:
        raise InvalidSystemClassError(cls.__name__ + ' is neither discrete nor continuous.')
    key = (cls.domain, tuple(cls.terms), tuple(cls.sets))
    if _system_types.get(key, cls) is not cls:
        raise ValueError('a system class with ' + str(key) + ' is already registered: ' + _system_types[key].__name__ + '.')
    _system_types[key] = cls

    return cls

def complementary_type(cls):
    """
    Returns the discrete-time counterpart of a continuous-time system class and vice versa.
    The counterpart has the same terms and the same sets.

    Arguments
    ----------
    cls : subclass of AbstractSystem
        Registered system class.

    Returns
    ----------
    complementary_cls : subclass of AbstractSystem
        Registered system class of the other domain.
    """

    # find the other domain
    if not (isinstance(cls, type) and issubclass(cls, AbstractSystem)):
        raise InvalidSystemClassError(str(cls) + ' is not a system class.')
    if cls.domain == 'continuous':
        domain = 'discrete'
    elif cls.domain == 'discrete':
        domain = 'continuous'
    else:
        raise InvalidSystemClassError(cls.__name__ + ' is neither discrete nor continuous.')

    # lookup
    key = (domain, tuple(cls.terms), tuple(cls.sets))
    if key not in _system_types:
        raise InvalidSystemClassError('no ' + domain + '-time counterpart registered for ' + cls.__name__ + '.')

    return _system_types[key]

# continuous-time systems

@register_system_type
class LinearContinuousSystem(ContinuousSystem):
    """
    Continuous-time linear system dx/dt = A x.
    """
    terms = ('A',)

@register_system_type
class LinearControlContinuousSystem(ContinuousSystem):
    """
    Continuous-time linear system dx/dt = A x + B u.
    """
    terms = ('A', 'B')

    @staticmethod
    def from_symbolic(x, u, x_dot):
        """
        Instatiates a LinearControlContinuousSystem starting from the symbolic value of the state time derivative.

        Arguments
        ----------
        x : sympy matrix filled with sympy symbols
            Symbolic state of the system.
        u : sympy matrix filled with sympy symbols
            Symbolic input of the system.
        x_dot : sympy matrix filled with sympy symbolic linear expressions
            Symbolic value of the state time derivative.
        """

        # state transition matrices
        A, B, c = get_state_transition_matrices(x, u, x_dot)

        # check that offset setm is zero
        if not np.allclose(c, np.zeros(x.shape[0])):
            raise ValueError('the given system has a non zero offset.')

        return LinearControlContinuousSystem(A, B)

@register_system_type
class AffineContinuousSystem(ContinuousSystem):
    """
    Continuous-time affine system dx/dt = A x + c.
    """
    terms = ('A', 'c')

@register_system_type
class AffineControlContinuousSystem(ContinuousSystem):
    """
    Continuous-time affine system dx/dt = A x + B u + c.
    """
    terms = ('A', 'B', 'c')

    @staticmethod
    def from_symbolic(x, u, x_dot):
        """
        Instatiates an AffineControlContinuousSystem starting from the symbolic value of the state time derivative.
        See LinearControlContinuousSystem.from_symbolic() for the arguments.
        """
        return AffineControlContinuousSystem(*get_state_transition_matrices(x, u, x_dot))

@register_system_type
class NoisyLinearControlContinuousSystem(ContinuousSystem):
    """
    Continuous-time linear system dx/dt = A x + B u + D w, with w noise.
    """
    terms = ('A', 'B', 'D')

@register_system_type
class ConstrainedLinearContinuousSystem(ContinuousSystem):
    """
    Continuous-time linear system dx/dt = A x, with x in X.
    """
    terms = ('A',)
    sets = ('X',)

@register_system_type
class ConstrainedLinearControlContinuousSystem(ContinuousSystem):
    """
    Continuous-time linear system dx/dt = A x + B u, with x in X and u in U.
    """
    terms = ('A', 'B')
    sets = ('X', 'U')

@register_system_type
class ConstrainedAffineContinuousSystem(ContinuousSystem):
    """
    Continuous-time affine system dx/dt = A x + c, with x in X.
    """
    terms = ('A', 'c')
    sets = ('X',)

@register_system_type
class ConstrainedAffineControlContinuousSystem(ContinuousSystem):
    """
    Continuous-time affine system dx/dt = A x + B u + c, with x in X and u in U.
    """
    terms = ('A', 'B', 'c')
    sets = ('X', 'U')

@register_system_type
class NoisyConstrainedLinearControlContinuousSystem(ContinuousSystem):
    """
    Continuous-time linear system dx/dt = A x + B u + D w, with x in X, u in U, and w in W.
    """
    terms = ('A', 'B', 'D')
    sets = ('X', 'U', 'W')

# discrete-time systems

@register_system_type
class LinearDiscreteSystem(DiscreteSystem):
    """
    Discrete-time linear system x(t+1) = A x(t).
    """
    terms = ('A',)

@register_system_type
class LinearControlDiscreteSystem(DiscreteSystem):
    """
    Discrete-time linear system x(t+1) = A x(t) + B u(t).
    """
    terms = ('A', 'B')

@register_system_type
class AffineDiscreteSystem(DiscreteSystem):
    """
    Discrete-time affine system x(t+1) = A x(t) + c.
    """
    terms = ('A', 'c')

@register_system_type
class AffineControlDiscreteSystem(DiscreteSystem):
    """
    Discrete-time affine system x(t+1) = A x(t) + B u(t) + c.
    """
    terms = ('A', 'B', 'c')

@register_system_type
class NoisyLinearControlDiscreteSystem(DiscreteSystem):
    """
    Discrete-time linear system x(t+1) = A x(t) + B u(t) + D w(t), with w noise.
    """
    terms = ('A', 'B', 'D')

@register_system_type
class ConstrainedLinearDiscreteSystem(DiscreteSystem):
    """
    Discrete-time linear system x(t+1) = A x(t), with x(t) in X.
    """
    terms = ('A',)
    sets = ('X',)

@register_system_type
class ConstrainedLinearControlDiscreteSystem(DiscreteSystem):
    """
    Discrete-time linear system x(t+1) = A x(t) + B u(t), with x(t) in X and u(t) in U.
    """
    terms = ('A', 'B')
    sets = ('X', 'U')

@register_system_type
class ConstrainedAffineDiscreteSystem(DiscreteSystem):
    """
    Discrete-time affine system x(t+1) = A x(t) + c, with x(t) in X.
    """
    terms = ('A', 'c')
    sets = ('X',)

@register_system_type
class ConstrainedAffineControlDiscreteSystem(DiscreteSystem):
    """
    Discrete-time affine system x(t+1) = A x(t) + B u(t) + c, with x(t) in X and u(t) in U.
    """
    terms = ('A', 'B', 'c')
    sets = ('X', 'U')

@register_system_type
class NoisyConstrainedLinearControlDiscreteSystem(DiscreteSystem):
    """
    Discrete-time linear system x(t+1) = A x(t) + B u(t) + D w(t), with x(t) in X, u(t) in U, and w(t) in W.
    """
    terms = ('A', 'B', 'D')
    sets = ('X', 'U', 'W')
