class UnknownAlgorithmError(ValueError):
    """
    Raised when a discretization algorithm is not recognized.
    """
    pass

class InvalidSystemClassError(TypeError):
    """
    Raised when a system class is neither continuous nor discrete, or when it has no registered counterpart.
    """
    pass

class ShapeMismatchError(ValueError):
    """
    Raised when the terms (or the sets) of a system have sizes which are incoherent with the state matrix A.
    """
    pass
