import numpy as np


class Lattice(object):
    """
    A lattice object. Essentially a matrix with conversion matrices. Each row
    of the matrix is one lattice vector.
    """
    def __init__(self, matrix):
        """
        Create a lattice from any sequence of 9 numbers. Note that the sequence
        is assumed to be read one row at a time. Each row represents one
        lattice vector.

        Args:
            matrix: Sequence of numbers in any form. Examples of acceptable
                input.
                i) An actual numpy array.
                ii) [[1, 0, 0], [0, 1, 0], [0, 0, 1]]
                iii) [1, 0, 0 , 0, 1, 0, 0, 0, 1]
                Each row should correspond to a lattice vector.
        """
        m = np.array(matrix, dtype=np.float64).reshape((3, 3))
        self._matrix = m
        self._inv_matrix = None

    @property
    def matrix(self):
        """Copy of matrix representing the Lattice"""
        return np.copy(self._matrix)

    @property
    def inv_matrix(self):
        """
        Inverse of lattice matrix.
        """
        if self._inv_matrix is None:
            self._inv_matrix = np.linalg.inv(self._matrix)
        return self._inv_matrix

    @property
    def determinant(self):
        """Signed determinant of the lattice matrix. Negative for left-handed
        lattices.
        """
        return np.linalg.det(self._matrix)

    @property
    def volume(self):
        """
        Volume of the unit cell.
        """
        return abs(self.determinant)

    def get_transformation_to(self, other):
        """Returns the matrix T for which other = T . self, with lattice
        vectors as rows.

        Args:
            other(Lattice or np.ndarray): The target lattice.

        Returns:
            np.ndarray: 3x3 transformation matrix.
        """
        if isinstance(other, Lattice):
            other = other.matrix
        return np.dot(np.asarray(other, dtype=np.float64), self.inv_matrix)

    def is_singular(self, tolerance):
        """Tells whether the volume of the lattice is not larger than the
        given tolerance.
        """
        return self.volume <= tolerance
