import logging

import networkx as nx
import numpy as np

import primcell.geometry
from primcell.core.cell import Cell
from primcell.data import constants
from primcell.exceptions import TrimError

LOG = logging.getLogger(__name__)


def trim_cell(new_lattice, cell, tolerance):
    """Fits the atoms of a cell into a smaller lattice. Atoms that end up on
    top of each other in the smaller lattice are merged into one.

    Args:
        new_lattice(np.ndarray): The smaller lattice with lattice vectors as
            rows. The lattice of the given cell has to be a supercell of it.
        cell(Cell): The cell whose atoms are fitted.
        tolerance(float): Maximum distance in relative coordinates of the new
            lattice for two atoms to be merged.

    Returns:
        Cell: The trimmed cell.
        np.ndarray: For each atom in the given cell, the index of the atom in
            the trimmed cell that it was merged into.

    Raises:
        TrimError: If the atoms cannot be consistently fitted into the new
            lattice.
    """
    new_lattice = np.array(new_lattice, dtype=np.float64)
    new_volume = primcell.geometry.get_volume(new_lattice)
    if new_volume <= tolerance:
        raise TrimError("The new lattice has a vanishing volume.")

    ratio = int(np.rint(cell.volume / new_volume))
    if ratio < 1 or cell.size % ratio != 0:
        raise TrimError(
            "The volume ratio {} is not compatible with {} atoms."
            .format(ratio, cell.size),
            value=ratio
        )

    # The original lattice has to be an integer combination of the new one
    supercell_matrix = np.dot(cell.lattice, np.linalg.inv(new_lattice))
    if not primcell.geometry.is_int_matrix(supercell_matrix, tolerance):
        raise TrimError(
            "The original lattice is not a supercell of the new lattice.",
            value=supercell_matrix
        )

    positions = primcell.geometry.change_basis(cell.positions, cell.lattice, new_lattice)
    positions = primcell.geometry.get_wrapped_positions(positions, tolerance)

    groups = None
    trim_tolerance = tolerance
    for attempt in range(constants.NUM_ATTEMPT):
        groups = _get_overlap_groups(positions, cell.types, trim_tolerance)
        if all(len(group) == ratio for group in groups):
            break
        trim_tolerance *= constants.REDUCE_RATE
        LOG.debug(
            "Inconsistent overlap of atoms, trim tolerance reduced to %g (%d)",
            trim_tolerance, attempt
        )
    else:
        raise TrimError(
            "Could not find {} overlapping copies for every atom in the new "
            "lattice.".format(ratio),
            value=ratio
        )

    mapping = np.empty(cell.size, dtype=int)
    trimmed_positions = []
    trimmed_types = []
    for i_group, group in enumerate(groups):
        mapping[group] = i_group
        reference = positions[group[0]]
        shifts = primcell.geometry.get_mic_vectors(positions[group] - reference)
        trimmed_positions.append(reference + shifts.mean(axis=0))
        trimmed_types.append(cell.types[group[0]])
    trimmed_positions = primcell.geometry.get_wrapped_positions(
        np.array(trimmed_positions),
        tolerance
    )

    return Cell(new_lattice, trimmed_positions, trimmed_types), mapping


def _get_overlap_groups(positions, types, tolerance):
    """Groups the atoms that are on top of each other. The groups are ordered
    by their smallest atom index and each group is sorted.
    """
    dist = primcell.geometry.get_distance_matrix(positions, positions)
    overlap = (dist <= tolerance) & (types[:, None] == types[None, :])

    graph = nx.Graph()
    graph.add_nodes_from(range(len(positions)))
    i, j = np.where(np.triu(overlap, k=1))
    graph.add_edges_from(zip(i.tolist(), j.tolist()))

    groups = [sorted(component) for component in nx.connected_components(graph)]
    groups.sort(key=lambda group: group[0])

    return groups
