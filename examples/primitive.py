import logging

from ase.build import bulk

from primcell import PrimitiveFinder

logging.basicConfig(level=logging.WARNING)

# Prepare a geometry to be analyzed
nacl = bulk("NaCl", "rocksalt", a=5.64, cubic=True).repeat([2, 1, 1])
nacl.rattle(stdev=0.001, seed=42)

# Setup the finder
finder = PrimitiveFinder(nacl, symprec=1e-3)

# Get the primitive system as an ase.Atoms-object
prim = finder.get_primitive_system()

mapping = finder.get_mapping_table()
transform = finder.get_transformation_matrix()
tolerance = finder.get_tolerance()
n_translations = len(finder.get_pure_translations())

print("Number of atoms, original: {}".format(len(nacl)))
print("Number of atoms, primitive: {}".format(len(prim)))
print("Number of pure translations: {}".format(n_translations))
print("Mapping from original to primitive atoms: {}".format(mapping))
print("Transformation matrix:\n{}".format(transform))
print("Tolerance used: {}".format(tolerance))
