"""
Set of geometry and matrix utilities used by the primitive cell search. All
lattices are given as 3x3 arrays where each row is one lattice vector.
"""
import numpy as np

from primcell.data import constants


def get_wrapped_positions(scaled_pos, precision=constants.WRAP_PRECISION):
    """Wrap the given relative positions so that each element in the array
    is within the half-closed interval [0, 1)

    By wrapping values near 1 to 0 we will have a consistent way of
    presenting systems.

    Args:
        scaled_pos(np.ndarray): Relative positions. Not modified.
        precision(float): Values closer than this to zero or unity are set to
            zero.

    Returns:
        np.ndarray: The wrapped positions.
    """
    scaled_pos = np.array(scaled_pos, dtype=np.float64)
    scaled_pos %= 1

    abs_zero = np.absolute(scaled_pos)
    abs_unity = np.absolute(abs_zero-1)

    near_zero = np.where(abs_zero < precision)
    near_unity = np.where(abs_unity < precision)

    scaled_pos[near_unity] = 0
    scaled_pos[near_zero] = 0

    return scaled_pos


def get_mic_vectors(scaled_vectors):
    """Returns the minimum image versions of the given relative vectors, i.e.
    each component is shifted into the interval [-0.5, 0.5].

    Args:
        scaled_vectors(np.ndarray): Vectors in the cell basis. The last axis
            should have length 3.

    Returns:
        np.ndarray: The minimum image vectors.
    """
    scaled_vectors = np.asarray(scaled_vectors, dtype=np.float64)
    return scaled_vectors - np.rint(scaled_vectors)


def get_displacement_tensor(pos1, pos2, mic=True):
    """Given two arrays of relative positions, calculates the 3D displacement
    tensor between the positions.

    The displacement tensor is a matrix where the entry A[i, j, :] is the
    vector pos1[i] - pos2[j], i.e. the vector from pos2 to pos1.

    Args:
        pos1(np.ndarray): 2D array of relative positions
        pos2(np.ndarray): 2D array of relative positions
        mic(boolean): Whether to return the displacement to the nearest
            periodic copy

    Returns:
        np.ndarray: 3D displacement tensor
    """
    pos1 = np.asarray(pos1, dtype=np.float64).reshape((-1, 3))
    pos2 = np.asarray(pos2, dtype=np.float64).reshape((-1, 3))
    disp_tensor = pos1[:, None, :] - pos2[None, :, :]
    if mic:
        disp_tensor = get_mic_vectors(disp_tensor)

    return disp_tensor


def get_distance_matrix(pos1, pos2, mic=True):
    """Calculates the matrix of distances between two sets of relative
    positions. The distances are measured in fractional units of the cell.

    Args:
        pos1(np.ndarray): 2D array of relative positions
        pos2(np.ndarray): 2D array of relative positions
        mic (bool): Whether to apply minimum image convention for the
            distances.

    Returns:
        np.ndarray: A :math:`N_{1} \\times N_{2}` matrix of distances.
    """
    disp_tensor = get_displacement_tensor(pos1, pos2, mic)
    return np.linalg.norm(disp_tensor, axis=2)


def change_basis(scaled_positions, old_basis, new_basis):
    """Transform relative coordinates given in one lattice into relative
    coordinates in another lattice.

    Args:
        scaled_positions(np.ndarray): Positions relative to old_basis.
        old_basis(np.ndarray): Lattice vectors as rows.
        new_basis(np.ndarray): Lattice vectors as rows.

    Returns:
        np.ndarray: Relative positions in the new basis
    """
    trans_mat = np.dot(old_basis, np.linalg.inv(new_basis))
    return np.dot(scaled_positions, trans_mat)


def to_cartesian(cell, scaled_positions, wrap=False):
    """Used to transform a set of relative positions to the cartesian basis
    defined by the given cell.

    Args:
        cell (numpy.ndarray): 3x3 array with lattice vectors as rows.
        scaled_positions (numpy.ndarray): The positions to transform. These
            positions should have a shape of [n, 3], where n is the number of
            positions.
        wrap (bool): Whether the positions should be wrapped inside the cell.

    Returns:
        numpy.ndarray: The cartesian positions
    """
    scaled_positions = _as_rows(scaled_positions)
    if wrap:
        scaled_positions = get_wrapped_positions(scaled_positions)

    return np.dot(scaled_positions, cell)


def get_volume(lattice):
    """Returns the absolute volume spanned by the rows of the given matrix.
    """
    return abs(np.linalg.det(lattice))


def get_nint_matrix(matrix):
    """Rounds the given matrix to the nearest integer matrix.

    Returns:
        np.ndarray: Integer matrix.
    """
    return np.rint(matrix).astype(int)


def get_int_determinant(matrix):
    """Exact determinant for a 3x3 integer matrix.
    """
    m = [[int(x) for x in row] for row in matrix]
    return (
        m[0][0] * (m[1][1] * m[2][2] - m[1][2] * m[2][1])
        - m[0][1] * (m[1][0] * m[2][2] - m[1][2] * m[2][0])
        + m[0][2] * (m[1][0] * m[2][1] - m[1][1] * m[2][0])
    )


def is_int_matrix(matrix, precision):
    """Tells whether all elements of the matrix are within the given precision
    from an integer.
    """
    matrix = np.asarray(matrix, dtype=np.float64)
    return bool(np.all(np.abs(matrix - np.rint(matrix)) <= precision))


def _as_rows(positions):
    """Force 1D to 2D and check shape.
    """
    positions = np.array(positions, dtype=np.float64)
    shape = positions.shape
    if len(shape) == 1:
        positions = positions[None, :]
        shape = positions.shape
    if len(shape) != 2 or shape[1] != 3:
        raise ValueError(
            "The given positions are not compatible. Please provide positions "
            "as rows of a two-dimensional array."
        )
    return positions
