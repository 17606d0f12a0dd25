import logging
from enum import Enum
from typing import Callable, NamedTuple, Optional

from .entities import Cell, Level, Position
from .errors import InvalidCell

logger = logging.getLogger(__name__)


class FocusDirection(Enum):
    ACROSS = 'across'
    DOWN = 'down'


class FocusOutcome(Enum):
    BLURRED = 'blurred'    # locked cell, the presentation layer must drop focus
    EDITABLE = 'editable'


class SubmitResult(NamedTuple):
    accepted: bool
    became_correct: bool


class PuzzleSession:
    def __init__(
        self,
        level: Level,
        guesses: Optional[dict[Position, str]] = None,
        correct_answers: Optional[dict[Position, str]] = None,
        clear_on_focus: bool = True,
        on_change: Optional[Callable[["PuzzleSession"], None]] = None,
    ):
        """
        Mutable play state for one level. A fresh session is built on every level
        selection, so direction and last-updated position always start from scratch.

        Args:
            level: The level being played.
            guesses: Loaded guesses, position -> uppercase char.
            correct_answers: Loaded locked answers, position -> char.
            clear_on_focus: Remove an editable cell's guess when it receives focus.
            on_change: Called after every change to guesses or correct answers.
        """
        self.level = level
        self.guesses: dict[Position, str] = dict(guesses or {})
        self.correct_answers: dict[Position, str] = dict(correct_answers or {})
        self.direction = FocusDirection.ACROSS
        self.last_updated: Optional[Position] = None
        self.clear_on_focus = clear_on_focus
        self.on_change = on_change

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change(self)

    def letter_cell(self, position: Position) -> Cell:
        """
        Return the letter cell at position.

        Raises:
            InvalidCell: if the position is outside the grid or not a letter cell.
        """
        cell = self.level.grid.classify(position)
        if cell is None:
            raise InvalidCell(position, "outside the grid")
        if not cell.is_letter:
            raise InvalidCell(position, f"{cell.kind.value} cell")
        return cell

    def is_locked(self, position: Position) -> bool:
        return position in self.correct_answers

    def current_guess(self, position: Position) -> Optional[str]:
        return self.guesses.get(position)

    def is_solved(self) -> bool:
        return all(pos in self.correct_answers for pos in self.level.grid.letter_positions())

    def submit_letter(self, position: Position, text: Optional[str]) -> SubmitResult:
        """
        Write the player's entry into a letter cell.

        Only the last character of text is kept, uppercased. An empty entry clears the cell.
        Matching the expected letter locks the cell for the rest of the session.
        """
        cell = self.letter_cell(position)
        if self.is_locked(position):
            logger.info(f"Input change attempted on locked cell at position {position.key}. Ignored.")
            return SubmitResult(False, False)

        letter = (str(text) if text else '').upper()[-1:]
        if not letter:
            return SubmitResult(self.clear_letter(position), False)

        logger.info(f"User entered the letter {letter} at position {position.key}")
        self.guesses[position] = letter
        became_correct = letter == cell.letter
        if became_correct:
            self.correct_answers[position] = letter
            logger.info(f"Correct answer entered at position {position.key}. Cell is now locked.")
        self.last_updated = position
        self._changed()
        return SubmitResult(True, became_correct)

    def clear_letter(self, position: Position) -> bool:
        self.letter_cell(position)
        if self.is_locked(position):
            logger.info(f"Clear attempted on locked cell at position {position.key}. Ignored.")
            return False
        if self.guesses.pop(position, None) is not None:
            self._changed()
        return True

    def reset(self) -> None:
        self.guesses = {}
        self.correct_answers = {}
        logger.info(f"Level {self.level.id!r} erased. Letters cleared.")
        self._changed()

    def shift_direction_towards(self, position: Position) -> FocusDirection:
        """
        Let the player's last manual move pick the auto-advance axis: a tap on another
        row means they are working down, a tap on another column means across.
        """
        if self.last_updated is not None:
            if position.row != self.last_updated.row:
                if self.direction is not FocusDirection.DOWN:
                    logger.debug("Shifting focus down due to manual entry")
                self.direction = FocusDirection.DOWN
            elif position.col != self.last_updated.col:
                if self.direction is not FocusDirection.ACROSS:
                    logger.debug("Shifting focus across due to manual entry")
                self.direction = FocusDirection.ACROSS
        return self.direction

    def focus_requested(self, position: Position) -> FocusOutcome:
        self.letter_cell(position)
        self.shift_direction_towards(position)

        if self.is_locked(position):
            logger.debug(f"Focus attempted on locked cell at position {position.key}. Blurring.")
            return FocusOutcome.BLURRED

        if self.clear_on_focus and self.guesses.pop(position, None) is not None:
            self._changed()
        return FocusOutcome.EDITABLE
