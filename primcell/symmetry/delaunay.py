import logging

import numpy as np
import spglib
from spglib.error import SpglibError

import primcell.geometry
from primcell.core.cell import Cell
from primcell.core.lattice import Lattice
from primcell.exceptions import LatticeReductionError

LOG = logging.getLogger(__name__)


def delaunay_reduce(lattice, tolerance):
    """Returns the Delaunay reduced basis of the given lattice as calculated
    by spglib.

    Args:
        lattice(np.ndarray): 3x3 matrix with lattice vectors as rows.
        tolerance(float): Tolerance used in the reduction.

    Returns:
        np.ndarray: The reduced lattice with lattice vectors as rows.

    Raises:
        LatticeReductionError: If the lattice is singular or spglib fails to
            reduce it.
    """
    lattice = np.array(lattice, dtype=np.float64)
    if Lattice(lattice).is_singular(tolerance):
        raise LatticeReductionError(
            "Cannot reduce a lattice with a vanishing volume.", value=lattice
        )
    try:
        reduced = spglib.delaunay_reduce(lattice, eps=tolerance)
    except (RuntimeError, SpglibError):
        raise LatticeReductionError(
            "Spglib error in the Delaunay reduction. Please check the given "
            "lattice.", value=lattice
        )
    if reduced is None:
        raise LatticeReductionError(
            "Spglib could not find the Delaunay reduced lattice.", value=lattice
        )

    return np.array(reduced, dtype=np.float64)


def get_cell_with_smallest_lattice(cell, tolerance):
    """Used to express the given cell in its Delaunay reduced lattice. The
    order and types of the atoms are kept, only the lattice and the relative
    positions change.

    Args:
        cell(Cell): The cell to transform.
        tolerance(float): Tolerance for the reduction and for wrapping the
            positions into the new cell.

    Returns:
        Cell: The cell with the reduced lattice.
    """
    min_lattice = delaunay_reduce(cell.lattice, tolerance)
    positions = primcell.geometry.change_basis(
        cell.positions,
        cell.lattice,
        min_lattice,
    )
    positions = primcell.geometry.get_wrapped_positions(positions, tolerance)
    LOG.debug("Cell with %d atoms expressed in the reduced lattice", cell.size)

    return Cell(min_lattice, positions, cell.types)
