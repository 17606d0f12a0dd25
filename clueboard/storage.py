"""
Asynchronous key-value stores for saved progress.

Every store raises StorageUnavailable when its I/O fails; callers decide whether
that is fatal.
"""
import asyncio
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from typing import Optional

from .errors import StorageUnavailable

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    async def delete(self, key: str) -> None:
        ...


class MemoryStore(KeyValueStore):
    def __init__(self, data: Optional[dict[str, str]] = None):
        self.data: dict[str, str] = dict(data or {})
        self.fail = False  # flip on to simulate an outage

    def _check(self) -> None:
        if self.fail:
            raise StorageUnavailable("memory store is unavailable")

    async def get(self, key: str) -> Optional[str]:
        self._check()
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._check()
        self.data[key] = value

    async def delete(self, key: str) -> None:
        self._check()
        self.data.pop(key, None)


class JsonFileStore(KeyValueStore):
    def __init__(self, path: str):
        """
        Keep every key in one JSON object on disk.

        Args:
            path: Location of the JSON file; created on first write.
        """
        self.path = os.path.abspath(path)
        self._lock = asyncio.Lock()

    def _read(self) -> dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, 'r') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return data

    def _write(self, data: dict[str, str]) -> None:
        directory = os.path.dirname(self.path)
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, suffix='.tmp')
        try:
            with os.fdopen(fd, 'w') as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def _update(self, key: str, value: Optional[str]) -> None:
        data = self._read()
        if value is None:
            if key not in data:
                return
            del data[key]
        else:
            data[key] = value
        self._write(data)

    async def _run(self, func, *args):
        try:
            async with self._lock:
                return await asyncio.to_thread(func, *args)
        except (OSError, ValueError) as e:
            logger.error(f"Storage I/O failed on {self.path}: {e}")
            raise StorageUnavailable(str(e)) from e

    async def get(self, key: str) -> Optional[str]:
        data = await self._run(self._read)
        return data.get(key)

    async def set(self, key: str, value: str) -> None:
        await self._run(self._update, key, value)

    async def delete(self, key: str) -> None:
        await self._run(self._update, key, None)
