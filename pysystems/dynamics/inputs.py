# external imports
from itertools import islice, repeat

class ConstantInput(object):
    """
    Input that remains constant in time.
    Iterating over it yields U forever.
    """

    def __init__(self, U):
        """
        Arguments
        ----------
        U : any
            Value (or set) of the input.
        """
        self.U = U

    def __iter__(self):
        return repeat(self.U)

    @property
    def eltype(self):
        return type(self.U)

    def nextinput(self, n=1):
        """
        Returns an iterator over the first n elements of this input, i.e. n copies of U.

        Arguments
        ----------
        n : int
            Number of desired elements.
        """
        return repeat(self.U, n)

class VaryingInput(object):
    """
    Input that may vary with time.
    Iterating over it yields the elements of U in order, its length is the length of U.
    """

    def __init__(self, U):
        """
        Arguments
        ----------
        U : list
            Sequence of values (or sets) of the input.
        """
        self.U = U

    def __iter__(self):
        return iter(self.U)

    def __len__(self):
        return len(self.U)

    @property
    def eltype(self):
        types = set(type(u) for u in self.U)
        return types.pop() if len(types) == 1 else object

    def nextinput(self, n=1):
        """
        Returns an iterator over the first n elements of this input.
        If n exceeds the length of the input, all the elements are returned.

        Arguments
        ----------
        n : int
            Number of desired elements.
        """
        return islice(self.U, n)

def nextinput(input, n=1):
    """
    Returns an iterator over the first n elements of a ConstantInput or a VaryingInput.
    """
    return input.nextinput(n)
