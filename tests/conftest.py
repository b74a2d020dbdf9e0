import numpy as np
import ase.build

from primcell import Cell


def create_simple_cubic(a=3.0):
    cell = Cell(
        lattice=a*np.eye(3),
        positions=[[0, 0, 0]],
        types=[1],
    )
    return cell


def create_bcc_cell(a=1.0):
    cell = Cell(
        lattice=a*np.eye(3),
        positions=[
            [0, 0, 0],
            [0.5, 0.5, 0.5],
        ],
        types=[1, 1],
    )
    return cell


def create_cscl_supercell():
    """A 2x1x1 supercell of a CsCl-type cell with two atoms.
    """
    cell = Cell(
        lattice=np.diag([2.0, 1.0, 1.0]),
        positions=[
            [0.0, 0.0, 0.0],
            [0.25, 0.5, 0.5],
            [0.5, 0.0, 0.0],
            [0.75, 0.5, 0.5],
        ],
        types=[55, 17, 55, 17],
    )
    return cell


def create_split_chain(delta=0.01):
    """Three atoms of the same type in a cubic cell, where the last atom has
    been displaced by delta from its ideal position at 2/3.
    """
    cell = Cell(
        lattice=3*np.eye(3),
        positions=[
            [0, 0, 0],
            [1/3, 0, 0],
            [2/3 + delta, 0, 0],
        ],
        types=[1, 1, 1],
    )
    return cell


def create_si(cubic=True):
    system = ase.build.bulk(
        'Si',
        crystalstructure='diamond',
        a=5.430710,
        cubic=cubic,
    )
    return system


def create_fe(cubic=True):
    system = ase.build.bulk(
        'Fe',
        crystalstructure='bcc',
        a=2.834,
        cubic=cubic,
    )
    return system


def create_cu(cubic=True):
    system = ase.build.bulk(
        'Cu',
        crystalstructure='fcc',
        a=3.6,
        cubic=cubic,
    )
    return system


def create_nacl(cubic=True):
    system = ase.build.bulk(
        'NaCl',
        crystalstructure='rocksalt',
        a=5.64,
        cubic=cubic,
    )
    return system


def rattle(atoms, std=0.001):
    atoms_copy = atoms.copy()
    atoms_copy.rattle(std, seed=7)
    return atoms_copy
