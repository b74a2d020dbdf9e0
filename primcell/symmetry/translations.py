"""
Routines for finding the pure translations of a periodic structure, i.e. the
symmetry operations with an identity rotation that map every atom onto an atom
of the same type.
"""
import logging

import numpy as np

import primcell.geometry
from primcell.exceptions import TranslationNotFoundError

LOG = logging.getLogger(__name__)


def find_pure_translations(cell, tolerance):
    """Finds the group of pure translations of the given cell.

    The candidate translations are the vectors from the first atom of the
    least common type to every atom of the same type. A candidate is accepted
    if it maps every atom on top of an atom of the same type.

    Args:
        cell(Cell): The cell to inspect.
        tolerance(float): Maximum distance in relative coordinates for two
            positions to be considered the same.

    Returns:
        np.ndarray: The pure translations in relative coordinates as rows. The
        identity translation is always the first one.

    Raises:
        TranslationNotFoundError: If the number of found translations does not
            divide the number of atoms.
    """
    types = cell.types
    positions = cell.positions

    # The type with the smallest number of atoms produces the smallest number
    # of candidates. Ties are resolved by the order of appearance.
    _, first_indices, counts = np.unique(types, return_index=True, return_counts=True)
    order = np.argsort(first_indices)
    origin_index = first_indices[order[np.argmin(counts[order])]]
    origin_type = types[origin_index]

    candidate_indices = np.where(types == origin_type)[0]
    candidates = positions[candidate_indices] - positions[origin_index]
    candidates = primcell.geometry.get_wrapped_positions(candidates, tolerance)

    same_type = _get_same_type_mask(types)
    translations = [
        t for t in candidates if _is_overlap_all_atoms(positions, same_type, t, tolerance)
    ]
    translations = np.array(translations).reshape((-1, 3))
    LOG.debug("Found %d pure translations", len(translations))

    _check_multiplicity(cell, translations)

    return translations


def refine_pure_translations(cell, translations, tolerance, angle_tolerance):
    """Re-validates a set of pure translations with the given tolerance and
    drops the ones that no longer map the structure onto itself.

    Args:
        cell(Cell): The cell to inspect.
        translations(np.ndarray): Candidate translations as rows.
        tolerance(float): Maximum distance in relative coordinates for two
            positions to be considered the same.
        angle_tolerance(float): Angle tolerance in degrees, negative for the
            default. The rotational part of a pure translation is the identity,
            which is compatible with any lattice, so this does not filter
            anything.

    Returns:
        np.ndarray: The remaining translations, identity first.

    Raises:
        TranslationNotFoundError: If the number of remaining translations does
            not divide the number of atoms.
    """
    translations = np.asarray(translations, dtype=np.float64).reshape((-1, 3))
    positions = cell.positions
    same_type = _get_same_type_mask(cell.types)

    refined = [np.zeros(3)]
    for t in translations:
        if np.linalg.norm(primcell.geometry.get_mic_vectors(t)) <= tolerance:
            continue
        if _is_overlap_all_atoms(positions, same_type, t, tolerance):
            refined.append(np.array(t))
    refined = np.array(refined)

    LOG.debug(
        "Refined pure translations from %d to %d (tolerance=%g, angle_tolerance=%g)",
        len(translations), len(refined), tolerance, angle_tolerance
    )
    _check_multiplicity(cell, refined)

    return refined


def _get_same_type_mask(types):
    return types[:, None] == types[None, :]


def _is_overlap_all_atoms(positions, same_type, translation, tolerance):
    shifted = positions + translation
    dist = primcell.geometry.get_distance_matrix(shifted, positions)
    overlap = (dist <= tolerance) & same_type
    return bool(np.all(np.any(overlap, axis=1)))


def _check_multiplicity(cell, translations):
    multi = len(translations)
    if multi == 0 or cell.size % multi != 0:
        raise TranslationNotFoundError(
            "Finding pure translations failed: {} translations found for {} "
            "atoms.".format(multi, cell.size),
            value=multi
        )
