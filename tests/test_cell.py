import numpy as np
import pytest

from primcell import Cell, Lattice
from conftest import create_nacl, create_bcc_cell


def test_from_atoms():
    nacl = create_nacl(cubic=True)
    cell = Cell.from_atoms(nacl)
    assert cell.size == len(nacl) == 8
    assert np.array_equal(cell.types, nacl.get_atomic_numbers())
    assert np.allclose(cell.lattice, nacl.get_cell()[:])
    assert cell.volume == pytest.approx(nacl.get_volume())

    atoms = cell.to_atoms()
    assert np.allclose(atoms.get_positions(), nacl.get_positions())
    assert atoms.get_chemical_formula() == nacl.get_chemical_formula()
    assert np.all(atoms.get_pbc())


def test_read_only():
    cell = create_bcc_cell()
    with pytest.raises(ValueError):
        cell.positions[0, 0] = 0.1
    with pytest.raises(ValueError):
        cell.lattice[0, 0] = 2

    # Modifying the input does not affect the cell
    lattice = np.eye(3)
    cell = Cell(lattice, [[0, 0, 0]], [1])
    lattice[0, 0] = 5
    assert cell.lattice[0, 0] == 1


def test_single_position():
    cell = Cell(np.eye(3), [0.1, 0.2, 0.3], [6])
    assert cell.size == 1
    assert cell.positions.shape == (1, 3)


@pytest.mark.parametrize("lattice, positions, types", [
    pytest.param(np.eye(2), [[0, 0, 0]], [1], id="lattice shape"),
    pytest.param(np.eye(3), [[0, 0]], [1], id="position shape"),
    pytest.param(np.eye(3), [[0, 0, 0], [0.5, 0.5, 0.5]], [1], id="type count"),
    pytest.param(np.eye(3), np.zeros((0, 3)), [], id="empty"),
])
def test_invalid(lattice, positions, types):
    with pytest.raises(ValueError):
        Cell(lattice, positions, types)


def test_lattice():
    lattice = Lattice([[2, 0, 0], [1, 2, 0], [0, 0, 3]])
    assert lattice.volume == pytest.approx(12)
    assert not lattice.is_singular(1e-5)
    assert Lattice([[1, 0, 0], [2, 0, 0], [0, 0, 1]]).is_singular(1e-5)

    other = np.array([[1, 2, 0], [2, 0, 0], [0, 0, 3]])
    transform = lattice.get_transformation_to(other)
    assert np.allclose(np.dot(transform, lattice.matrix), other)
