
class DimensionMismatch(ValueError):
    """The operand of a matrix-vector product does not match the matrix."""


class IndexOutOfRange(IndexError):
    """A matrix index lies outside the current bounds, or is negative."""
