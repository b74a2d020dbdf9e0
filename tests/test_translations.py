import numpy as np
import pytest

from primcell import Cell
from primcell.exceptions import TranslationNotFoundError
from primcell.symmetry.translations import (
    find_pure_translations,
    refine_pure_translations,
)
from conftest import (
    create_bcc_cell,
    create_cu,
    create_si,
    create_nacl,
    create_split_chain,
    create_cscl_supercell,
)


@pytest.mark.parametrize("cell, n_translations", [
    pytest.param(create_bcc_cell(), 2, id="bcc"),
    pytest.param(Cell.from_atoms(create_cu(cubic=True)), 4, id="fcc"),
    pytest.param(Cell.from_atoms(create_si(cubic=True)), 4, id="diamond, cubic"),
    pytest.param(Cell.from_atoms(create_si(cubic=False)), 1, id="diamond, primitive"),
    pytest.param(Cell.from_atoms(create_nacl(cubic=True)), 4, id="rocksalt, cubic"),
    pytest.param(create_cscl_supercell(), 2, id="supercell"),
])
def test_find(cell, n_translations):
    translations = find_pure_translations(cell, 1e-5)
    assert translations.shape == (n_translations, 3)
    assert np.allclose(translations[0], 0)
    assert np.all(translations >= 0)
    assert np.all(translations < 1)
    # Every found translation survives a re-validation
    refined = refine_pure_translations(cell, translations, 1e-5, -1.0)
    assert np.allclose(refined, translations)


def test_find_bcc():
    translations = find_pure_translations(create_bcc_cell(), 1e-5)
    assert np.allclose(translations[1], [0.5, 0.5, 0.5])


def test_find_inconsistent():
    """Two translations are found for three atoms when the tolerance allows
    one displaced atom to match but not the other.
    """
    cell = create_split_chain(delta=0.01)
    with pytest.raises(TranslationNotFoundError):
        find_pure_translations(cell, 0.015)

    translations = find_pure_translations(cell, 0.005)
    assert len(translations) == 1


def test_refine():
    cell = create_bcc_cell()
    candidates = np.array([
        [0, 0, 0],
        [0.5, 0.5, 0.5],
        [0.5, 0, 0],
    ])
    refined = refine_pure_translations(cell, candidates, 1e-5, -1.0)
    assert refined.shape == (2, 3)
    assert np.allclose(refined[0], 0)
    assert np.allclose(refined[1], [0.5, 0.5, 0.5])


def test_refine_tolerance():
    """Translations that are valid only with a larger tolerance are
    dropped.
    """
    cell = create_split_chain(delta=0.01)
    candidates = np.array([[0, 0, 0], [1/3, 0, 0]])
    refined = refine_pure_translations(cell, candidates, 0.005, 5.0)
    assert refined.shape == (1, 3)


def test_refine_inconsistent():
    cell = Cell.from_atoms(create_si(cubic=True))
    translations = find_pure_translations(cell, 1e-5)
    with pytest.raises(TranslationNotFoundError):
        refine_pure_translations(cell, translations[:3], 1e-5, -1.0)
