from primcell.core.cell import Cell
from primcell.core.lattice import Lattice
