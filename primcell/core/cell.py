from ase import Atoms
import numpy as np

from primcell.core.lattice import Lattice


class Cell(object):
    """A periodic unit cell: lattice vectors, relative atomic positions and
    integer type labels.

    The arrays are copied on construction and set read-only, so a Cell can be
    shared between the different stages of the primitive cell search without
    being modified.
    """
    def __init__(self, lattice, positions, types):
        """
        Args:
            lattice(sequence): 3x3 matrix where each row is a lattice vector.
            positions(sequence): Relative positions of the atoms, one row per
                atom.
            types(sequence of int): The type label of each atom.
        """
        lattice = np.array(lattice, dtype=np.float64)
        positions = np.array(positions, dtype=np.float64)
        types = np.array(types, dtype=int)

        if lattice.shape != (3, 3):
            raise ValueError(
                "The lattice should be a 3x3 matrix, got shape {}."
                .format(lattice.shape)
            )
        if positions.ndim == 1 and positions.size == 3:
            positions = positions[None, :]
        if positions.ndim != 2 or positions.shape[1] != 3:
            raise ValueError(
                "The given positions are not compatible. Please provide "
                "positions as rows of a two-dimensional array."
            )
        types = types.reshape(-1)
        if len(types) != len(positions):
            raise ValueError(
                "Got {} positions but {} types.".format(len(positions), len(types))
            )
        if len(types) == 0:
            raise ValueError("A cell should contain at least one atom.")

        for array in (lattice, positions, types):
            array.setflags(write=False)

        self._lattice = lattice
        self._positions = positions
        self._types = types

    @staticmethod
    def from_atoms(atoms):
        """Creates a Cell object from ASE.Atoms object. The atomic numbers are
        used as type labels.
        """
        return Cell(
            atoms.get_cell()[:],
            atoms.get_scaled_positions(wrap=False),
            atoms.get_atomic_numbers(),
        )

    def to_atoms(self):
        """Transforms this cell into ASE.Atoms. The type labels are
        interpreted as atomic numbers.

        Returns:
            ASE.Atoms: Periodic system corresponding to this cell.
        """
        return Atoms(
            numbers=self._types,
            cell=self._lattice,
            scaled_positions=self._positions,
            pbc=True,
        )

    @property
    def lattice(self):
        return self._lattice

    @property
    def positions(self):
        return self._positions

    @property
    def types(self):
        return self._types

    @property
    def size(self):
        return len(self._types)

    def __len__(self):
        return self.size

    def get_lattice(self):
        """
        Returns:
            Lattice: The lattice of this cell.
        """
        return Lattice(self._lattice)

    @property
    def volume(self):
        return self.get_lattice().volume

    def __repr__(self):
        return "Cell(size={}, volume={:.6f})".format(self.size, self.volume)
