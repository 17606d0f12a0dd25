import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from .engine import FocusDirection, PuzzleSession
from .entities import Grid, Position

logger = logging.getLogger(__name__)


class NavigationMode(Enum):
    FORWARD = 1
    BACKWARD = -1


class FocusController(ABC):
    """Whatever owns the on-screen inputs. Navigation only decides where focus goes."""

    @abstractmethod
    def focus(self, position: Position) -> None:
        ...

    @abstractmethod
    def blur(self, position: Position) -> None:
        ...


class RecordingFocusController(FocusController):
    def __init__(self):
        self.focused: Optional[Position] = None
        self.blurred: Optional[Position] = None
        self.history: list[tuple[str, Position]] = []

    def focus(self, position: Position) -> None:
        self.focused = position
        self.history.append(('focus', position))

    def blur(self, position: Position) -> None:
        self.blurred = position
        if self.focused == position:
            self.focused = None
        self.history.append(('blur', position))

    def reset(self) -> None:
        self.focused = None
        self.blurred = None
        self.history.clear()


def next_letter_position(
    grid: Grid,
    position: Position,
    direction: FocusDirection,
    mode: NavigationMode = NavigationMode.FORWARD,
) -> Optional[Position]:
    """
    Walk from position along the active axis to the next letter cell, stepping over
    clue and empty cells. Lock state is not considered here.

    Returns:
        The letter cell reached, or None when the walk leaves the grid (no wraparound).
    """
    dr, dc = (0, 1) if direction is FocusDirection.ACROSS else (1, 0)
    step = mode.value
    candidate = position.shifted(dr * step, dc * step)
    # Short rows are gaps in a ragged grid, not its edge
    while 0 <= candidate.row < grid.rows and 0 <= candidate.col < grid.cols:
        cell = grid.classify(candidate)
        if cell is not None and cell.is_letter:
            return candidate
        candidate = candidate.shifted(dr * step, dc * step)
    return None


def move_focus(
    session: PuzzleSession,
    position: Position,
    controller: FocusController,
    mode: NavigationMode = NavigationMode.FORWARD,
) -> Optional[Position]:
    target = next_letter_position(session.level.grid, position, session.direction, mode)
    if target is None:
        logger.debug(f"No letter cell {mode.name.lower()} of {position.key} going {session.direction.value}")
        return None
    controller.focus(target)
    return target


def move_focus_and_delete(
    session: PuzzleSession,
    position: Position,
    controller: FocusController,
) -> Optional[Position]:
    """
    Backspace behaviour: step focus back one letter cell and remove the guess there,
    unless that cell is already locked.
    """
    target = move_focus(session, position, controller, NavigationMode.BACKWARD)
    if target is not None and not session.is_locked(target):
        session.clear_letter(target)
    return target
