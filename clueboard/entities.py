from enum import Enum
from typing import NamedTuple, Optional, Mapping, Iterator


class Position(NamedTuple):
    """
    A (row, col) address on the grid. Tuples give us equality, hashing and
    row-major ordering for free.
    """
    row: int
    col: int

    @property
    def key(self) -> str:
        # Storage and HTTP form, kept compatible with the "row-col" keys already on devices
        return f"{self.row}-{self.col}"

    @classmethod
    def parse(cls, key: str) -> "Position":
        """
        Parse a "row-col" key back into a Position.

        Raises:
            ValueError: if the key is not two non-negative integers joined by '-'.
        """
        parts = str(key).split('-')
        if len(parts) != 2 or not all(p.isdigit() for p in parts):
            raise ValueError(f"Malformed position key: {key!r}")
        return cls(int(parts[0]), int(parts[1]))

    def shifted(self, drow: int, dcol: int) -> "Position":
        return Position(self.row + drow, self.col + dcol)


def as_position(value: "Position | tuple[int, int] | str") -> Position:
    """Accept a Position, a (row, col) pair or a "row-col" key."""
    if isinstance(value, Position):
        return value
    if isinstance(value, str):
        return Position.parse(value)
    row, col = value
    return Position(int(row), int(col))


class CellKind(Enum):
    LETTER = 'letter'
    CLUE = 'clue'
    EMPTY = 'empty'


# Side name -> (drow, dcol)
SIDES: dict[str, tuple[int, int]] = {
    'top': (-1, 0),
    'right': (0, 1),
    'bottom': (1, 0),
    'left': (0, -1),
}


class Cell:
    def __init__(self, kind: CellKind, letter: Optional[str] = None, clue_id: Optional[str] = None):
        """
        Represents a single cell of a level grid.

        Args:
            kind: Letter, clue or empty.
            letter: The expected letter (uppercase) for letter cells.
            clue_id: The clue identifier for clue cells.
        """
        self.kind = kind
        self.letter = letter
        self.clue_id = clue_id

    @classmethod
    def letter_cell(cls, letter: str) -> "Cell":
        return cls(CellKind.LETTER, letter=letter.upper())

    @classmethod
    def clue_cell(cls, clue_id: str) -> "Cell":
        return cls(CellKind.CLUE, clue_id=clue_id)

    @classmethod
    def empty_cell(cls) -> "Cell":
        return cls(CellKind.EMPTY)

    @property
    def is_letter(self) -> bool:
        return self.kind is CellKind.LETTER

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return (self.kind, self.letter, self.clue_id) == (other.kind, other.letter, other.clue_id)

    def __repr__(self) -> str:
        if self.kind is CellKind.LETTER:
            return f"Cell(letter={self.letter!r})"
        if self.kind is CellKind.CLUE:
            return f"Cell(clue={self.clue_id!r})"
        return "Cell(empty)"


class ClueInfo:
    def __init__(self, answer: str, asset_path: Optional[str] = None):
        """
        Metadata for one clue of a level.

        Args:
            answer: The expected answer text.
            asset_path: Location of the hint image, if the level names one explicitly.
        """
        self.answer = answer
        self.asset_path = asset_path


class Grid:
    def __init__(self, rows: list[list[Cell]]):
        """
        Wrap the rows of a level into an addressable grid.
        Rows may be ragged; anything past the end of a row is out of bounds.
        """
        self.cells: list[list[Cell]] = rows

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return max((len(row) for row in self.cells), default=0)

    def in_bounds(self, position: Position) -> bool:
        row, col = position
        return 0 <= row < len(self.cells) and 0 <= col < len(self.cells[row])

    def classify(self, position: Position) -> Optional[Cell]:
        """
        Return the cell at the given position, or None when it falls outside the grid.
        """
        if not self.in_bounds(position):
            return None
        return self.cells[position.row][position.col]

    def neighbor(self, position: Position, side: str) -> Optional[Position]:
        drow, dcol = SIDES[side]
        candidate = position.shifted(drow, dcol)
        return candidate if self.in_bounds(candidate) else None

    def positions(self) -> Iterator[tuple[Position, Cell]]:
        for r, row in enumerate(self.cells):
            for c, cell in enumerate(row):
                yield Position(r, c), cell

    def letter_positions(self) -> list[Position]:
        return [pos for pos, cell in self.positions() if cell.is_letter]

    def find_clue(self, clue_id: str) -> Optional[Position]:
        for pos, cell in self.positions():
            if cell.kind is CellKind.CLUE and cell.clue_id == clue_id:
                return pos
        return None

    def display_cell_char(self, position: Position, guesses: Mapping[Position, str]) -> str:
        """
        Return the display character for a cell: '#' for clue cells, '.' for empty cells,
        the player's guess if present, or '*' as a placeholder for an unfilled letter cell.
        """
        cell = self.classify(position)
        if cell is None or cell.kind is CellKind.EMPTY:
            return '.'
        if cell.kind is CellKind.CLUE:
            return '#'
        return guesses.get(position) or '*'

    def render(self, guesses: Mapping[Position, str]) -> list[str]:
        return [
            ' '.join(self.display_cell_char(Position(r, c), guesses) for c in range(len(row)))
            for r, row in enumerate(self.cells)
        ]


class Level:
    def __init__(
        self,
        level_id: str,
        title: str,
        grid: Grid,
        clues: dict[str, ClueInfo],
        secondary_title: Optional[str] = None,
    ):
        """
        One complete puzzle definition. Treated as read-only once loaded.

        Args:
            level_id: Catalog key, also used to namespace persisted progress.
            title: Title shown above the board.
            grid: The addressable cell grid.
            clues: Clue id -> clue metadata, in catalog order.
            secondary_title: Optional subtitle.
        """
        self.id = level_id
        self.title = title
        self.secondary_title = secondary_title
        self.grid = grid
        self.clues = clues

    def __repr__(self) -> str:
        return f"Level({self.id!r}, {self.grid.rows}x{self.grid.cols}, {len(self.clues)} clues)"
