"""
Level catalog: the built-in puzzles plus parsing for level records.

A level record looks like::

    {
        "id": "easylevel",
        "title": "Getting Started",
        "secondaryTitle": "Tap a picture for a hint",
        "grid": [[{"clue": "1A"}, {"letter": "C"}, {"empty": True}], ...],
        "clues": {"1A": {"answer": "CAT", "assetPath": "https://..."}},
    }
"""
import json
import logging
from typing import Any, Optional

from .entities import Cell, ClueInfo, Grid, Level
from .errors import CatalogError, UnknownLevel

logger = logging.getLogger(__name__)

_E = {"empty": True}


def _clue(clue_id: str) -> dict[str, str]:
    return {"clue": clue_id}


def _word(word: str) -> list[dict[str, str]]:
    return [{"letter": ch} for ch in word]


LEVEL_RECORDS: list[dict[str, Any]] = [
    {
        "id": "easylevel",
        "title": "Getting Started",
        "secondaryTitle": "Tap a picture for a hint",
        "grid": [
            [_E, _E, _clue("1D"), _E, _E, _E],
            [_clue("2A"), *_word("OWL"), _E, _E],
            [_E, _E, {"letter": "E"}, _E, _E, _E],
            [_clue("3A"), *_word("EBB"), _E, _E],
        ],
        "clues": {
            "1D": {"answer": "WEB"},
            "2A": {"answer": "OWL"},
            "3A": {"answer": "EBB"},
        },
    },
    {
        "id": "colorsandshapes",
        "title": "Colors and Shapes",
        "grid": [
            [_E, _clue("1D"), _E, _E, _E, _E],
            [_clue("2A"), *_word("RED"), _E, _E],
            [_E, {"letter": "O"}, _E, _E, _E, _E],
            [_clue("3A"), *_word("STAR"), _E],
            [_E, {"letter": "E"}, _E, _E, _E, _E],
        ],
        "clues": {
            "1D": {"answer": "ROSE"},
            "2A": {"answer": "RED"},
            "3A": {"answer": "STAR"},
        },
    },
    {
        "id": "cliches",
        "title": "Cliches",
        "secondaryTitle": "Picture the phrase",
        "grid": [
            [_clue("1A"), *_word("COLD"), _E],
            [_E, _E, _E, _E, _E, _E],
            [_clue("2A"), *_word("FEET"), _E],
        ],
        "clues": {
            "1A": {"answer": "COLD"},
            "2A": {"answer": "FEET"},
        },
    },
    {
        "id": "homophones",
        "title": "Homophones",
        "grid": [
            [_clue("1A"), *_word("PAIR"), _E],
            [_clue("2A"), *_word("PEAR"), _E],
            [_clue("3A"), *_word("PARE"), _E],
        ],
        "clues": {
            "1A": {"answer": "PAIR"},
            "2A": {"answer": "PEAR"},
            "3A": {"answer": "PARE"},
        },
    },
]


def cell_from_record(raw: Any, row: int, col: int) -> Cell:
    where = f"cell {row}-{col}"
    if not isinstance(raw, dict):
        raise CatalogError(f"{where}: expected an object, got {type(raw).__name__}")
    tags = [tag for tag in ("letter", "clue", "empty") if tag in raw]
    if len(tags) != 1:
        raise CatalogError(f"{where}: expected exactly one of letter/clue/empty, got {sorted(raw)}")

    tag = tags[0]
    if tag == "letter":
        letter = raw["letter"]
        if not isinstance(letter, str) or len(letter) != 1:
            raise CatalogError(f"{where}: letter must be a single character, got {letter!r}")
        return Cell.letter_cell(letter)
    if tag == "clue":
        clue_id = raw["clue"]
        if not isinstance(clue_id, str) or not clue_id:
            raise CatalogError(f"{where}: clue id must be a non-empty string, got {clue_id!r}")
        return Cell.clue_cell(clue_id)
    return Cell.empty_cell()


def level_from_record(record: dict[str, Any]) -> Level:
    """
    Build a Level from a catalog record, validating every cell.

    Raises:
        CatalogError: if the record or any of its cells is malformed.
    """
    try:
        level_id = record["id"]
        title = record["title"]
        raw_grid = record["grid"]
    except (KeyError, TypeError) as e:
        raise CatalogError(f"Level record missing required field: {e}") from e

    if not isinstance(raw_grid, list) or not all(isinstance(row, list) for row in raw_grid):
        raise CatalogError(f"Level {level_id!r}: grid must be a list of rows")

    rows = [
        [cell_from_record(raw, r, c) for c, raw in enumerate(raw_row)]
        for r, raw_row in enumerate(raw_grid)
    ]

    clues: dict[str, ClueInfo] = {}
    for clue_id, meta in (record.get("clues") or {}).items():
        if not isinstance(meta, dict):
            raise CatalogError(f"Level {level_id!r}: clue {clue_id!r} must be an object")
        clues[clue_id] = ClueInfo(
            answer=str(meta.get("answer", "")).upper(),
            asset_path=meta.get("assetPath"),
        )

    return Level(
        level_id=level_id,
        title=title,
        grid=Grid(rows),
        clues=clues,
        secondary_title=record.get("secondaryTitle"),
    )


def build_catalog(records: list[dict[str, Any]]) -> dict[str, Level]:
    catalog: dict[str, Level] = {}
    for record in records:
        level = level_from_record(record)
        if level.id in catalog:
            raise CatalogError(f"Duplicate level id: {level.id!r}")
        catalog[level.id] = level
    return catalog


def load_catalog_file(path: str) -> dict[str, Level]:
    """Load a JSON list of level records from disk."""
    with open(path, 'r') as f:
        records = json.load(f)
    if not isinstance(records, list):
        raise CatalogError(f"{path}: expected a JSON list of level records")
    catalog = build_catalog(records)
    logger.info(f"Loaded {len(catalog)} levels from {path}")
    return catalog


def get_level(catalog: dict[str, Level], level_id: str) -> Level:
    level = catalog.get(level_id)
    if level is None:
        raise UnknownLevel(level_id)
    return level


def level_choices(catalog: Optional[dict[str, Level]] = None) -> list[tuple[str, str]]:
    """(id, title) pairs in catalog order, for a level picker."""
    catalog = LEVELS if catalog is None else catalog
    return [(level.id, level.title) for level in catalog.values()]


LEVELS: dict[str, Level] = build_catalog(LEVEL_RECORDS)
