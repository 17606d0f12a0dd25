import sys
import os

# Add the parent directory to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from clueboard.clue_paths import clue_borders, create_clue_paths
from clueboard.entities import Position
from clueboard.levels import LEVELS
from data.test_data import CAT_ASSET, TEST_CATALOG


def test_explicit_asset_path_is_kept():
    assert create_clue_paths(TEST_CATALOG["cat"], "ignored") == {"1A": CAT_ASSET}


def test_paths_are_numbered_in_catalog_order():
    paths = create_clue_paths(LEVELS["homophones"], "assets/clues")
    assert paths == {
        "1A": "assets/clues/homophones/clue1.png",
        "2A": "assets/clues/homophones/clue2.png",
        "3A": "assets/clues/homophones/clue3.png",
    }


def test_clue_borders_face_letter_cells():
    grid = TEST_CATALOG["nav"].grid
    assert clue_borders(grid, Position(1, 3)) == {"left", "right"}
    assert clue_borders(grid, Position(0, 0)) == {"right"}
    assert clue_borders(grid, Position(3, 0)) == {"right"}


def test_non_clue_cells_have_no_borders():
    grid = TEST_CATALOG["nav"].grid
    assert clue_borders(grid, Position(0, 1)) == frozenset()
    assert clue_borders(grid, Position(9, 9)) == frozenset()
