import logging
from typing import Any, Optional

from .clue_paths import clue_borders, create_clue_paths
from .config import Settings
from .engine import FocusOutcome, PuzzleSession, SubmitResult
from .entities import CellKind, Level, Position, as_position
from .errors import InvalidCell, NoActiveLevel, UnknownClue
from .levels import LEVELS, get_level, load_catalog_file
from .navigation import (
    FocusController,
    NavigationMode,
    RecordingFocusController,
    move_focus,
    move_focus_and_delete,
)
from .progress import ProgressStore
from .storage import JsonFileStore, KeyValueStore

logger = logging.getLogger(__name__)

BACKSPACE = 'Backspace'


class GameBoard:
    def __init__(
        self,
        store: KeyValueStore,
        catalog: Optional[dict[str, Level]] = None,
        focus_controller: Optional[FocusController] = None,
        asset_base_url: str = 'assets/clues',
        clear_on_focus: bool = True,
    ):
        """
        The command surface the presentation layer talks to. Owns at most one
        PuzzleSession at a time and keeps its progress saved.

        Must be driven from inside a running asyncio event loop: saves are scheduled
        on it as background tasks.

        Args:
            store: Key-value store for progress.
            catalog: Level id -> Level; defaults to the built-in levels.
            focus_controller: Receives focus/blur requests for letter cells.
            asset_base_url: Root under which clue images without an explicit path live.
            clear_on_focus: Remove a cell's guess when it receives focus.
        """
        self.catalog = LEVELS if catalog is None else catalog
        self.progress = ProgressStore(store)
        self.focus_controller = focus_controller or RecordingFocusController()
        self.asset_base_url = asset_base_url
        self.clear_on_focus = clear_on_focus
        self.session: Optional[PuzzleSession] = None
        self.clue_paths: dict[str, str] = {}
        self._load_generation = 0

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        store: Optional[KeyValueStore] = None,
        focus_controller: Optional[FocusController] = None,
    ) -> "GameBoard":
        catalog = load_catalog_file(settings.catalog_path) if settings.catalog_path else None
        return cls(
            store if store is not None else JsonFileStore(settings.storage_path),
            catalog=catalog,
            focus_controller=focus_controller,
            asset_base_url=settings.asset_base_url,
            clear_on_focus=settings.clear_on_focus,
        )

    @property
    def level(self) -> Optional[Level]:
        return self.session.level if self.session else None

    def _require_session(self) -> PuzzleSession:
        if self.session is None:
            raise NoActiveLevel()
        return self.session

    def _on_change(self, session: PuzzleSession) -> None:
        self.progress.schedule_save(session)

    async def select_level(self, level_id: str) -> Optional[PuzzleSession]:
        """
        Start a fresh session for level_id with its saved progress.

        Input is refused until the load finishes. If another level is selected while
        this one is still loading, this load is discarded and None is returned.
        """
        level = get_level(self.catalog, level_id)
        self._load_generation += 1
        generation = self._load_generation
        self.session = None
        self.clue_paths = {}
        logger.info(f"Level selected: {level.id!r} ({level.title})")

        await self.progress.flush()
        guesses, correct = await self.progress.load(level)
        if generation != self._load_generation:
            logger.info(f"Discarding stale progress load for level {level.id!r}")
            return None

        self.session = PuzzleSession(
            level,
            guesses,
            correct,
            clear_on_focus=self.clear_on_focus,
            on_change=self._on_change,
        )
        self.clue_paths = create_clue_paths(level, self.asset_base_url)
        for line in level.grid.render(self.session.guesses):
            logger.debug(line)
        return self.session

    def _position(self, position: Any) -> Position:
        try:
            return as_position(position)
        except (ValueError, TypeError) as e:
            raise InvalidCell(position, str(e)) from e

    def _focus_landed(self, target: Optional[Position]) -> None:
        # A programmatic focus goes through the same handler as a tap
        if target is not None:
            self.focus_requested(target)

    def submit_letter(self, position: Any, char: Optional[str]) -> SubmitResult:
        session = self._require_session()
        pos = self._position(position)
        if not char:
            accepted = session.clear_letter(pos)
            if accepted:
                self._focus_landed(move_focus_and_delete(session, pos, self.focus_controller))
            return SubmitResult(accepted, False)

        result = session.submit_letter(pos, char)
        if result.accepted:
            self._focus_landed(move_focus(session, pos, self.focus_controller, NavigationMode.FORWARD))
        return result

    def clear_letter(self, position: Any) -> bool:
        return self._require_session().clear_letter(self._position(position))

    def key_pressed(self, position: Any, key: str) -> bool:
        """Handle a raw key event; only Backspace does anything beyond text input."""
        session = self._require_session()
        pos = self._position(position)
        if key != BACKSPACE:
            return False
        if not session.clear_letter(pos):
            return False
        self._focus_landed(move_focus_and_delete(session, pos, self.focus_controller))
        return True

    def focus_requested(self, position: Any) -> FocusOutcome:
        pos = self._position(position)
        outcome = self._require_session().focus_requested(pos)
        if outcome is FocusOutcome.BLURRED:
            self.focus_controller.blur(pos)
        return outcome

    def activate_clue(self, clue_id: str) -> str:
        """
        Return the hint image location for a tapped clue. The clue's grid position
        counts as a manual move for the focus-direction heuristic.
        """
        session = self._require_session()
        path = self.clue_paths.get(clue_id)
        if path is None:
            raise UnknownClue(clue_id)
        logger.info(f"User tapped clue {clue_id}")
        clue_position = session.level.grid.find_clue(clue_id)
        if clue_position is not None:
            session.shift_direction_towards(clue_position)
        return path

    async def reset_level(self) -> None:
        """Erase all guesses and locked answers for the current level, in memory and in storage."""
        session = self._require_session()
        session.reset()
        # Queued in the same step as the reset, so saves made after it land after the delete
        self.progress.schedule_clear(session.level.id)
        await self.progress.flush()

    async def flush(self) -> None:
        await self.progress.flush()

    def snapshot(self) -> dict[str, Any]:
        session = self._require_session()
        level = session.level
        grid_state: list[list[dict[str, Any]]] = []
        for r, row in enumerate(level.grid.cells):
            grid_row: list[dict[str, Any]] = []
            for c, cell in enumerate(row):
                pos = Position(r, c)
                entry: dict[str, Any] = {'position': pos.key, 'kind': cell.kind.value}
                if cell.kind is CellKind.LETTER:
                    entry['guess'] = session.current_guess(pos)
                    entry['locked'] = session.is_locked(pos)
                elif cell.kind is CellKind.CLUE:
                    entry['clue'] = cell.clue_id
                    entry['borders'] = sorted(clue_borders(level.grid, pos))
                grid_row.append(entry)
            grid_state.append(grid_row)

        return {
            'level': {
                'id': level.id,
                'title': level.title,
                'secondary_title': level.secondary_title,
            },
            'direction': session.direction.value,
            'last_updated': session.last_updated.key if session.last_updated else None,
            'solved': session.is_solved(),
            'grid': grid_state,
        }
