import sys
from setuptools import setup, find_packages

# Check python version
if sys.version_info[:2] < (3, 0):
    raise RuntimeError("Python version >= 3.0 required.")

if __name__ == "__main__":
    setup(name="primcell",
        version="0.1.0",
        description=(
            "primcell is a python package for finding the primitive cell of "
            "a periodic atomistic system."
        ),
        long_description=(
            "primcell is a python package for finding the primitive cell of "
            "a periodic atomistic system by searching the pure translations "
            "of the structure for the smallest lattice that reproduces it."
        ),
        license="Apache License 2.0",
        classifiers=[
            "Development Status :: 3 - Alpha",
            "Intended Audience :: Developers",
            "Topic :: Scientific/Engineering :: Physics",
            "License :: OSI Approved :: Apache Software License",
            "Programming Language :: Python",
            "Programming Language :: Python :: 3",
            "Programming Language :: Python :: 3 :: Only",
        ],
        keywords='atoms structure materials science crystal primitive cell',
        packages=find_packages(exclude=["tests", "tests.*", "examples"]),
        install_requires=[
            "numpy",
            "ase",
            "spglib>=2.5.0",
            "networkx>=2.4",
            "chronic",
        ],
        extras_require={
            "test": ["pytest"],
        },
        python_requires=">=3.7",
    )
