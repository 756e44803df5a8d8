"""
Single-writer store for the JSON timeline file.

The timeline is one JSON array on disk. Every append is a full
read-modify-write, so all appends go through one asyncio.Lock per store;
the API layer shares a single store instance per process.
"""

import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os

from core.exceptions import TimelineWriteError
from core.logging import get_logger
from schemas.timeline import TimelineEntry
from utils.filesystem import ensure_dir

logger = get_logger(__name__)


class TimelineStore:
    """
    Append-only access to the timeline file.

    Read policy: a missing, unreadable or non-array file is an empty
    timeline. The next append then replaces whatever was on disk.
    Write policy: whole-file replace through a temp file and os.replace.
    """

    FILE_MODE = 0o644  # readable by a static server running as another user

    def __init__(self, timeline_path: Path | str) -> None:
        self.timeline_path = Path(timeline_path)
        self._lock = asyncio.Lock()

    async def _load(self) -> list[dict[str, Any]]:
        try:
            async with aiofiles.open(self.timeline_path, "r", encoding="utf-8") as f:
                content = await f.read()
        except FileNotFoundError:
            # First run, file is created by the first append
            return []
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(
                f"Timeline file {self.timeline_path} unreadable ({e}); starting from empty timeline"
            )
            return []

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            logger.warning(
                f"Timeline file {self.timeline_path} is not valid JSON ({e}); "
                "starting from empty timeline"
            )
            return []

        if not isinstance(data, list):
            logger.warning(
                f"Timeline file {self.timeline_path} holds {type(data).__name__}, "
                "expected a list; starting from empty timeline"
            )
            return []

        return data

    async def _write(self, entries: list[dict[str, Any]]) -> None:
        payload = json.dumps(entries, indent=2, ensure_ascii=False)

        try:
            ensure_dir(self.timeline_path.parent)
            temp_fd, temp_path = tempfile.mkstemp(
                dir=self.timeline_path.parent, prefix=".tmp_", suffix=".json"
            )
            os.close(temp_fd)

            try:
                async with aiofiles.open(temp_path, "w", encoding="utf-8") as f:
                    await f.write(payload)
                os.chmod(temp_path, self.FILE_MODE)
                os.replace(temp_path, self.timeline_path)
            finally:
                if Path(temp_path).exists():
                    await aiofiles.os.remove(temp_path)

        except OSError as e:
            raise TimelineWriteError(str(self.timeline_path), str(e)) from e

    async def read_all(self) -> list[dict[str, Any]]:
        """Return the persisted entries in insertion order"""
        async with self._lock:
            return await self._load()

    async def append(self, entry: TimelineEntry) -> int:
        """
        Append one entry and persist the whole timeline.

        Returns:
            int: Number of entries in the timeline after the append

        Raises:
            TimelineWriteError: If the file could not be rewritten
        """
        async with self._lock:
            entries = await self._load()
            entries.append(entry.model_dump())
            await self._write(entries)

        logger.info(
            f"Appended timeline entry for {entry.username!r} ({len(entries)} total)"
        )
        return len(entries)
