from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable, Coroutine
from pathlib import Path
from typing import Any

from watchfiles import awatch

from fragment_key.core.languages import is_supported_file

logger = logging.getLogger(__name__)

_IGNORED_DIRECTORIES = frozenset({"node_modules", ".git"})

OnChange = Callable[[set[Path]], Coroutine[Any, Any, None]]


def _is_watched_file(path: Path) -> bool:
    return is_supported_file(path) and not _IGNORED_DIRECTORIES.intersection(path.parts)


class WatchfilesWatcher:
    """Watch a source tree and hand batches of changed JSX files to ``on_change``.

    ``debounce`` is the number of milliseconds watchfiles groups changes for;
    an editor save and the rewrite that follows it usually land in separate batches.
    """

    def __init__(
        self,
        directory: str | Path,
        on_change: OnChange,
        accept: Callable[[Path], bool] = _is_watched_file,
        debounce: int = 1600,
    ) -> None:
        self._directory = Path(directory)
        self._on_change = on_change
        self._accept = accept
        self._debounce = debounce
        self._task: asyncio.Task[None] | None = None
        self.batches = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        if self._task is not None:
            return
        self._task = asyncio.create_task(self._watch())
        logger.info("Watching %s for JSX changes", self._directory)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Stopped watching %s after %d batch(es)", self._directory, self.batches)

    async def wait(self) -> None:
        if self._task is not None:
            await self._task

    async def _watch(self) -> None:
        async for changes in awatch(self._directory, debounce=self._debounce):
            paths = {Path(p) for _, p in changes if self._accept(Path(p))}
            if not paths:
                continue
            self.batches += 1
            logger.debug("Batch %d: %d changed file(s)", self.batches, len(paths))
            try:
                await self._on_change(paths)
            except Exception:
                logger.exception("Failed to process changes under %s", self._directory)
