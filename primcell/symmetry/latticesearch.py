"""
Search for the lattice of the primitive cell among the pure translations of a
structure.
"""
import itertools
import logging
from collections import namedtuple

import numpy as np

import primcell.geometry
from primcell.data import constants
from primcell.exceptions import BasisNotFoundError, PrimitiveSearchError
from primcell.symmetry.delaunay import delaunay_reduce
from primcell.symmetry.translations import refine_pure_translations
from primcell.symmetry.trim import trim_cell

LOG = logging.getLogger(__name__)


class SearchContext(namedtuple("SearchContext", ["tolerance", "angle_tolerance", "attempt"])):
    """The state that is carried between the attempts of an iterative search.
    A new context is created for each attempt instead of modifying the old
    one.
    """
    __slots__ = ()

    def decayed(self):
        """Returns the context for the next attempt with a reduced tolerance.
        """
        return self._replace(
            tolerance=self.tolerance * constants.REDUCE_RATE,
            attempt=self.attempt + 1,
        )


def get_primitive_cell(cell, translations, tolerance, angle_tolerance):
    """Finds the primitive cell that is spanned by the given pure
    translations.

    Args:
        cell(Cell): The original cell.
        translations(np.ndarray): The pure translations of the cell, identity
            first.
        tolerance(float): Position tolerance in relative coordinates.
        angle_tolerance(float): Angle tolerance in degrees, negative for the
            default.

    Returns:
        Cell: The primitive cell with a Delaunay reduced lattice.
        np.ndarray: Index of the primitive cell atom for each original atom.
    """
    try:
        prim_lattice, _ = search_primitive_lattice(
            cell,
            translations,
            tolerance,
            angle_tolerance
        )
        smallest_lattice = delaunay_reduce(prim_lattice, tolerance)

        # Fit atoms into new primitive cell
        return trim_cell(smallest_lattice, cell, tolerance)
    except PrimitiveSearchError as e:
        LOG.warning("Primitive cell could not be found: %s", e)
        raise


def search_primitive_lattice(cell, translations, tolerance, angle_tolerance):
    """Searches three pure translations that span the primitive lattice. If
    no such vectors are found, the translations are refined with a gradually
    reduced tolerance and the search is repeated.

    Args:
        cell(Cell): The original cell.
        translations(np.ndarray): The pure translations of the cell, identity
            first.
        tolerance(float): Position tolerance in relative coordinates.
        angle_tolerance(float): Angle tolerance in degrees, negative for the
            default.

    Returns:
        np.ndarray: The primitive lattice with lattice vectors as rows.
        int: The number of pure translations that span the lattice.

    Raises:
        BasisNotFoundError: If the primitive lattice was not found within the
            allowed number of attempts.
    """
    translations = np.array(translations, dtype=np.float64).reshape((-1, 3))
    context = SearchContext(tolerance, angle_tolerance, 0)

    while context.attempt < constants.NUM_ATTEMPT:
        multi = len(translations)
        vectors = get_translation_candidates(translations)

        # Lattice of primitive cell is found among pure translation vectors
        try:
            prim_lattice = get_primitive_lattice_vectors(
                vectors,
                cell.lattice,
                context.tolerance
            )
        except BasisNotFoundError:
            translations = refine_pure_translations(
                cell,
                translations,
                context.tolerance,
                context.angle_tolerance
            )
            LOG.warning(
                "Tolerance is reduced to %f (%d), num_pure_trans = %d",
                context.tolerance, context.attempt, len(translations)
            )
            context = context.decayed()
        else:
            return prim_lattice, multi

    raise BasisNotFoundError(
        "Primitive lattice vectors could not be found in {} attempts."
        .format(constants.NUM_ATTEMPT)
    )


def get_translation_candidates(translations):
    """Returns the vectors that are tried as primitive lattice vectors: the
    pure translations without the identity, followed by the lattice vectors
    of the original cell.

    Args:
        translations(np.ndarray): Pure translations, identity first.

    Returns:
        np.ndarray: The candidate vectors in relative coordinates.
    """
    translations = np.asarray(translations, dtype=np.float64).reshape((-1, 3))
    return np.vstack((translations[1:], np.eye(3)))


def get_primitive_lattice_vectors(vectors, lattice, tolerance):
    """Finds the first triplet of candidate vectors whose volume is the
    volume of the original lattice divided by the number of pure
    translations.

    The triplets are visited in lexicographic index order and the first
    matching one is used. The candidates contain the non-identity pure
    translations and three lattice vectors, so the number of pure
    translations is the number of candidates minus two.

    Args:
        vectors(np.ndarray): Candidate vectors in relative coordinates.
        lattice(np.ndarray): The original lattice with vectors as rows.
        tolerance(float): Triplets with a smaller volume are ignored.

    Returns:
        np.ndarray: The primitive lattice with lattice vectors as rows.

    Raises:
        BasisNotFoundError: If no triplet has the correct volume.
    """
    vectors = np.asarray(vectors, dtype=np.float64)
    size = len(vectors)
    multi = size - 2
    initial_volume = primcell.geometry.get_volume(lattice)
    cart_vectors = primcell.geometry.to_cartesian(lattice, vectors)

    min_vectors = None
    for i, j, k in itertools.combinations(range(size), 3):
        volume = primcell.geometry.get_volume(cart_vectors[[i, j, k]])
        if volume > tolerance and int(np.rint(initial_volume / volume)) == multi:
            min_vectors = vectors[[i, j, k]]
            break

    if min_vectors is None:
        raise BasisNotFoundError(
            "Primitive lattice vectors could not be found.", value=multi
        )

    # The original lattice vectors have to be integer combinations of the
    # primitive ones. If they are, the noise in the found vectors is removed
    # by recalculating them from the integer matrix.
    relative_lattice = min_vectors
    inv_mat_int = primcell.geometry.get_nint_matrix(np.linalg.inv(min_vectors))
    if abs(primcell.geometry.get_int_determinant(inv_mat_int)) == multi:
        relative_lattice = np.linalg.inv(inv_mat_int.astype(np.float64))
    else:
        LOG.warning("Primitive lattice cleaning is incomplete.")

    return np.dot(relative_lattice, lattice)
