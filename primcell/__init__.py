from primcell.core.cell import Cell
from primcell.core.lattice import Lattice
from primcell.symmetry.primitivefinder import Primitive, PrimitiveFinder, find_primitive
from primcell import geometry
