"""
Tail and follow a log file by polling it.

The follower remembers the byte offset it has read up to and, on each poll,
emits whatever was appended since. A shrinking file or a new inode (logrotate)
restarts reading from the beginning.
"""

import logging
import os
import time
from collections import deque
from pathlib import Path
from typing import Callable, Iterator, List, Optional

logger = logging.getLogger(__name__)


def read_last_lines(path: Path, count: Optional[int]) -> List[str]:
    """Return the last `count` lines of a file (all of them for None), without trailing newlines."""
    if count is not None and count <= 0:
        return []
    with open(path, encoding="utf-8", errors="replace") as f:
        return [line.rstrip("\n") for line in deque(f, maxlen=count)]


class LogFollower:
    """Poll-and-diff follower for a single log file."""

    def __init__(self, path: Path, interval: float = 1.0, sleep: Callable[[float], None] = time.sleep):
        self.path = Path(path)
        self.interval = interval
        self._sleep = sleep
        self._offset = 0
        self._inode: Optional[int] = None
        self._pending = b""

    def seek_end(self) -> None:
        """Start following from the current end of the file."""
        st = os.stat(self.path)
        self._offset = st.st_size
        self._inode = st.st_ino
        self._pending = b""

    def poll(self) -> List[str]:
        """Return complete lines appended since the previous poll."""
        try:
            st = os.stat(self.path)
        except FileNotFoundError:
            # Rotated away and not recreated yet
            return []

        if st.st_ino != self._inode or st.st_size < self._offset:
            logger.debug(f"{self.path} was rotated or truncated, reading from start")
            self._inode = st.st_ino
            self._offset = 0
            self._pending = b""

        if st.st_size == self._offset:
            return []

        with open(self.path, "rb") as f:
            f.seek(self._offset)
            data = f.read()
        self._offset += len(data)

        data = self._pending + data
        *complete, self._pending = data.split(b"\n")
        return [line.decode("utf-8", errors="replace") for line in complete]

    def follow(self) -> Iterator[str]:
        """Yield new lines forever, sleeping `interval` between polls."""
        while True:
            yield from self.poll()
            self._sleep(self.interval)
