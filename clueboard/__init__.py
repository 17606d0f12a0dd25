from .board import GameBoard
from .engine import FocusDirection, FocusOutcome, PuzzleSession, SubmitResult
from .entities import Cell, CellKind, ClueInfo, Grid, Level, Position
from .errors import (
    CatalogError,
    ClueboardError,
    InvalidCell,
    NoActiveLevel,
    StorageUnavailable,
    UnknownClue,
    UnknownLevel,
)
from .levels import LEVELS
from .navigation import FocusController, NavigationMode, RecordingFocusController
from .storage import JsonFileStore, KeyValueStore, MemoryStore
