"""
FileWatcher - regenerate documents when they change.

Polls each watched file on a fixed interval and re-runs the callback for
files whose modification time falls within a short window before now.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Callable, Iterable, List, Optional

import structlog

logger = structlog.get_logger(__name__)


class FileWatcher:
    """
    Polling file watcher.

    Attributes:
        paths: Files to watch
        callback: Called with the path of each recently modified file
        interval: Seconds between polls
        recency_window: A file modified less than this many seconds ago is
            considered changed

    Example:
        ```python
        watcher = FileWatcher([Path("hello.py.lit")], on_change, interval=1.0)
        watcher.run()  # until Ctrl-C
        ```
    """

    def __init__(
        self,
        paths: Iterable[Path],
        callback: Callable[[Path], None],
        interval: float = 1.0,
        recency_window: float = 2.0,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be > 0, got {interval}")
        if recency_window <= 0:
            raise ValueError(f"recency_window must be > 0, got {recency_window}")

        self.paths: List[Path] = [Path(p) for p in paths]
        self.callback = callback
        self.interval = interval
        self.recency_window = recency_window
        self._clock = clock
        self._sleep = sleep

    def changed_files(self) -> List[Path]:
        """Files modified within the recency window."""
        now = self._clock()
        changed: List[Path] = []
        for path in self.paths:
            try:
                modified = path.stat().st_mtime
            except FileNotFoundError:
                logger.warning("watched_file_missing", file_path=str(path))
                continue
            if now - modified < self.recency_window:
                changed.append(path)
        return changed

    def poll(self) -> List[Path]:
        """Run the callback for every changed file; return those files."""
        changed = self.changed_files()
        for path in changed:
            logger.info("watched_file_changed", file_path=str(path))
            self.callback(path)
        return changed

    def run(self, max_polls: Optional[int] = None) -> int:
        """
        Poll until interrupted or ``max_polls`` polls have run.

        Returns:
            Number of polls performed.
        """
        polls = 0
        logger.info(
            "watch_started",
            files=[str(p) for p in self.paths],
            interval=self.interval,
        )
        try:
            while max_polls is None or polls < max_polls:
                self.poll()
                polls += 1
                if max_polls is None or polls < max_polls:
                    self._sleep(self.interval)
        except KeyboardInterrupt:
            logger.info("watch_interrupted", polls=polls)
        return polls
