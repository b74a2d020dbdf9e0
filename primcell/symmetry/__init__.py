from primcell.symmetry.primitivefinder import Primitive, PrimitiveFinder, find_primitive
