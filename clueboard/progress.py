"""
Per-level progress persistence.

Guesses and locked answers are stored as two JSON objects keyed by level id:

    guesses-{levelId}         {"0-1": "C", "0-2": "X"}
    correctAnswers-{levelId}  {"0-1": "C"}

Every save writes the full mappings, so the last write for a level always holds
the latest state.
"""
import asyncio
import json
import logging
from typing import Optional

from .engine import PuzzleSession
from .entities import Level, Position
from .errors import StorageUnavailable
from .storage import KeyValueStore

logger = logging.getLogger(__name__)


def guesses_key(level_id: str) -> str:
    return f"guesses-{level_id}"


def correct_answers_key(level_id: str) -> str:
    return f"correctAnswers-{level_id}"


def serialize_mapping(mapping: dict[Position, str]) -> str:
    return json.dumps({pos.key: value for pos, value in sorted(mapping.items())})


def deserialize_mapping(raw: Optional[str], level: Level, label: str) -> dict[Position, str]:
    """
    Parse a stored mapping, dropping anything that does not fit the level's grid.
    Corrupt or missing data yields an empty mapping.
    """
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        # A file store can hand back any JSON value, not only strings
        logger.warning(f"Discarding corrupt {label} for level {level.id!r}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Discarding {label} for level {level.id!r}: expected an object, got {type(data).__name__}")
        return {}

    mapping: dict[Position, str] = {}
    for key, value in data.items():
        try:
            pos = Position.parse(key)
        except ValueError:
            continue
        cell = level.grid.classify(pos)
        if cell is None or not cell.is_letter:
            continue
        if not isinstance(value, str) or len(value) != 1:
            continue
        mapping[pos] = value.upper()

    if len(mapping) != len(data):
        logger.warning(f"Dropped {len(data) - len(mapping)} invalid {label} entries for level {level.id!r}")
    return mapping


class ProgressStore:
    def __init__(self, store: KeyValueStore):
        self.store = store
        self._write_lock: Optional[asyncio.Lock] = None
        self._pending: set[asyncio.Task] = set()

    @property
    def write_lock(self) -> asyncio.Lock:
        # Created on first use so it belongs to the running loop
        if self._write_lock is None:
            self._write_lock = asyncio.Lock()
        return self._write_lock

    async def load(self, level: Level) -> tuple[dict[Position, str], dict[Position, str]]:
        """
        Load (guesses, correct_answers) for a level. Storage failures are not fatal:
        the level simply starts blank.
        """
        try:
            raw_guesses = await self.store.get(guesses_key(level.id))
            raw_correct = await self.store.get(correct_answers_key(level.id))
        except StorageUnavailable as e:
            logger.warning(f"Could not load progress for level {level.id!r}, starting blank: {e}")
            return {}, {}

        guesses = deserialize_mapping(raw_guesses, level, "guesses")
        correct = {
            pos: level.grid.classify(pos).letter
            for pos, value in deserialize_mapping(raw_correct, level, "correct answers").items()
            if value == level.grid.classify(pos).letter
        }
        # A locked cell always shows its letter
        guesses.update(correct)
        logger.info(f"Progress loaded for level {level.id!r}: {len(guesses)} guesses, {len(correct)} correct")
        return guesses, correct

    async def save(self, level_id: str, guesses: str, correct: str) -> None:
        async with self.write_lock:
            try:
                await self.store.set(guesses_key(level_id), guesses)
                await self.store.set(correct_answers_key(level_id), correct)
            except StorageUnavailable as e:
                logger.error(f"Failed to save progress for level {level_id!r}: {e}")

    def _track(self, coro) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    def schedule_save(self, session: PuzzleSession) -> asyncio.Task:
        """
        Snapshot the session now and write it in the background. Writes are queued on
        one lock, so they reach the store in the order they were scheduled.
        """
        return self._track(
            self.save(
                session.level.id,
                serialize_mapping(session.guesses),
                serialize_mapping(session.correct_answers),
            )
        )

    def schedule_clear(self, level_id: str) -> asyncio.Task:
        """Queue the deletion of a level's keys behind the saves already scheduled."""
        return self._track(self.clear(level_id))

    async def clear(self, level_id: str) -> None:
        async with self.write_lock:
            try:
                await self.store.delete(guesses_key(level_id))
                await self.store.delete(correct_answers_key(level_id))
            except StorageUnavailable as e:
                logger.error(f"Failed to clear stored progress for level {level_id!r}: {e}")

    async def flush(self) -> None:
        """Wait for every scheduled save to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending))
