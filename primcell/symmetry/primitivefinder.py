import logging

import chronic
import numpy as np
from ase import Atoms

from primcell.core.cell import Cell
from primcell.core.lattice import Lattice
from primcell.data import constants
from primcell.exceptions import PrimitiveSearchError, PrimitiveCellNotFoundError
from primcell.symmetry.delaunay import get_cell_with_smallest_lattice
from primcell.symmetry.latticesearch import SearchContext, get_primitive_cell
from primcell.symmetry.translations import find_pure_translations

LOG = logging.getLogger(__name__)


class Primitive(object):
    """The result of a primitive cell search.

    The record is created empty for an original cell with a known number of
    atoms and filled in one go with populate() once a primitive cell has been
    accepted.

    Attributes:
        size(int): Number of atoms in the original cell.
        cell(Cell): The primitive cell, None until populated.
        mapping_table(np.ndarray): For each atom in the original cell, the
            index of the corresponding atom in the primitive cell. Unset
            entries are -1.
        transformation_matrix(np.ndarray): Matrix T for which
            cell.lattice = T . original_lattice, lattice vectors as rows.
        tolerance(float): The position tolerance with which the primitive
            cell was found.
        angle_tolerance(float): The angle tolerance with which the primitive
            cell was found.
    """
    def __init__(self, size):
        self.size = size
        self.cell = None
        self.mapping_table = np.full(size, -1, dtype=int)
        self.transformation_matrix = np.zeros((3, 3))
        self.tolerance = 0
        self.angle_tolerance = -1.0

    def populate(self, cell, mapping_table, original_lattice, tolerance, angle_tolerance):
        """Stores an accepted primitive cell.

        Args:
            cell(Cell): The primitive cell.
            mapping_table(sequence of int): Index of the primitive cell atom
                for each original atom.
            original_lattice(np.ndarray): Lattice of the original cell.
            tolerance(float): The position tolerance that was used.
            angle_tolerance(float): The angle tolerance that was used.
        """
        mapping_table = np.array(mapping_table, dtype=int)
        if mapping_table.shape != (self.size,):
            raise ValueError(
                "The mapping table should have {} entries, got {}."
                .format(self.size, len(mapping_table))
            )
        self.cell = cell
        self.mapping_table = mapping_table
        self.transformation_matrix = Lattice(original_lattice).get_transformation_to(cell.lattice)
        self.tolerance = tolerance
        self.angle_tolerance = angle_tolerance

    def get_system(self):
        """
        Returns:
            ASE.Atoms: The primitive cell as a periodic system, or None if the
            record has not been populated.
        """
        if self.cell is None:
            return None
        return self.cell.to_atoms()


def find_primitive(cell, symprec=constants.SYMMETRY_TOL, angle_tolerance=constants.ANGLE_TOLERANCE):
    """Finds the primitive cell of the given cell.

    The pure translations of the cell are searched first. If the identity is
    the only one, the cell is already primitive and only its lattice is
    reduced. Otherwise the primitive lattice is searched among the
    translations and the atoms are fitted into it. If any of the steps fail,
    the whole search is repeated with a reduced tolerance.

    Args:
        cell(Cell): The cell to inspect.
        symprec(float): Position tolerance in relative coordinates.
        angle_tolerance(float): Angle tolerance in degrees. A negative value
            means that the default of the symmetry routines is used.

    Returns:
        Primitive: The primitive cell, the mapping from the original atoms to
        the primitive ones and the transformation between the lattices.

    Raises:
        PrimitiveCellNotFoundError: If no primitive cell could be found with
            any of the tried tolerances.
    """
    if symprec <= 0:
        raise ValueError("The tolerance should be positive, got {}.".format(symprec))

    primitive = Primitive(cell.size)
    context = SearchContext(symprec, angle_tolerance, 0)

    while context.attempt < constants.NUM_ATTEMPT:
        LOG.debug("Primitive cell search, attempt %d (tolerance=%g)", context.attempt, context.tolerance)
        try:
            prim_cell, mapping_table = _search(cell, context)
        except PrimitiveSearchError as e:
            context = context.decayed()
            LOG.warning("Reduce tolerance to %f: %s", context.tolerance, e)
        else:
            primitive.populate(
                prim_cell,
                mapping_table,
                cell.lattice,
                context.tolerance,
                context.angle_tolerance
            )
            return primitive

    raise PrimitiveCellNotFoundError(
        "Primitive cell could not be found in {} attempts."
        .format(constants.NUM_ATTEMPT),
        value=context.tolerance
    )


def _search(cell, context):
    """Single attempt of the primitive cell search with the tolerance of the
    given context.
    """
    with chronic.Timer("find_pure_translations"):
        translations = find_pure_translations(cell, context.tolerance)

    if len(translations) == 1:
        with chronic.Timer("get_cell_with_smallest_lattice"):
            prim_cell = get_cell_with_smallest_lattice(cell, context.tolerance)
        return prim_cell, np.arange(cell.size)

    with chronic.Timer("get_primitive_cell"):
        return get_primitive_cell(
            cell,
            translations,
            context.tolerance,
            context.angle_tolerance
        )


class PrimitiveFinder(object):
    """Used to find the primitive cell of a periodic system. The results are
    calculated lazily and cached until a new system is set.
    """
    def __init__(self, system=None, symprec=None, angle_tolerance=None):
        """
        Args:
            system(Cell or ASE.Atoms): The system to inspect. ASE.Atoms have
                to be periodic in all three directions.
            symprec(float): The position tolerance in relative coordinates.
            angle_tolerance(float): The angle tolerance in degrees, negative
                for the default.
        """
        self._cell = None
        self.reset()
        if symprec is None:
            self.symprec = constants.SYMMETRY_TOL
        else:
            self.symprec = symprec
        if angle_tolerance is None:
            self.angle_tolerance = constants.ANGLE_TOLERANCE
        else:
            self.angle_tolerance = angle_tolerance

        if system is not None:
            self.set_system(system)

    def set_system(self, system):
        """Sets a new system for analysis.
        """
        self.reset()
        if isinstance(system, Atoms):
            pbc = system.get_pbc()
            if not np.all(pbc):
                raise ValueError(
                    "The primitive cell is only defined for systems that are "
                    "periodic in all three directions."
                )
            system = Cell.from_atoms(system)
        self._cell = system

    def reset(self):
        """Used to reset all the cached values.
        """
        self._primitive = None
        self._pure_translations = None

    def get_primitive(self):
        """
        Returns:
            Primitive: The result record of the primitive cell search.
        """
        if self._primitive is not None:
            return self._primitive
        if self._cell is None:
            raise ValueError("No system has been set for the analysis.")

        self._primitive = find_primitive(self._cell, self.symprec, self.angle_tolerance)
        return self._primitive

    def get_primitive_cell(self):
        """
        Returns:
            Cell: The primitive cell.
        """
        return self.get_primitive().cell

    def get_primitive_system(self):
        """
        Returns:
            ASE.Atoms: The primitive cell as a periodic system.
        """
        return self.get_primitive().get_system()

    def get_mapping_table(self):
        """
        Returns:
            np.ndarray: For each atom in the original system, the index of the
            corresponding atom in the primitive cell.
        """
        return np.array(self.get_primitive().mapping_table)

    def get_transformation_matrix(self):
        """
        Returns:
            np.ndarray: Matrix T for which primitive_lattice = T .
            original_lattice, lattice vectors as rows.
        """
        return np.array(self.get_primitive().transformation_matrix)

    def get_tolerance(self):
        """
        Returns:
            float: The position tolerance with which the primitive cell was
            found. Can be smaller than the requested one.
        """
        return self.get_primitive().tolerance

    def get_angle_tolerance(self):
        return self.get_primitive().angle_tolerance

    def get_pure_translations(self):
        """
        Returns:
            np.ndarray: The pure translations of the original system, found
            with the tolerance that produced the primitive cell.
        """
        if self._cell is None:
            raise ValueError("No system has been set for the analysis.")
        if self._pure_translations is None:
            self._pure_translations = find_pure_translations(
                self._cell,
                self.get_tolerance()
            )
        return self._pure_translations
