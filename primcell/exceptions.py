class PrimCellError(Exception):
    def __init__(self, message, value=None):
        self.value = value
        Exception.__init__(self, message)


class PrimitiveSearchError(PrimCellError):
    """Base class for failures that can be recovered from by retrying the
    primitive cell search with a smaller tolerance.
    """
    pass


class TranslationNotFoundError(PrimitiveSearchError):
    """Indicates that a consistent group of pure translations could not be
    established.
    """
    pass


class BasisNotFoundError(PrimitiveSearchError):
    """Indicates that no three translation vectors span a lattice with the
    expected volume.
    """
    pass


class LatticeReductionError(PrimitiveSearchError):
    """For errors in the Delaunay reduction of a lattice.
    """
    pass


class TrimError(PrimitiveSearchError):
    """Indicates that the atoms could not be fitted into a smaller lattice.
    """
    pass


class PrimitiveCellNotFoundError(PrimCellError):
    """Raised when no primitive cell was found within the allowed number of attempts.
    """
    pass
