from __future__ import annotations

import os
import threading
from typing import Dict, Optional, Tuple

from playbook.errors import SourceUnavailableError
from playbook.logger import logger
from playbook.partition.text import parse
from playbook.staging.html import RenderConfig, render

# (st_mtime_ns, st_size) of the source when it was rendered
_Stamp = Tuple[int, int]


class RenderCache:
    """Keeps the rendered HTML of playbook sources, re-rendering a source only when its
    modification time or size changed.

    Rendering itself is pure; this is an optimisation for callers that serve the same file
    repeatedly.
    """

    def __init__(self, config: Optional[RenderConfig] = None, encoding: Optional[str] = None):
        self._config = config
        self._encoding = encoding
        self._entries: Dict[str, Tuple[_Stamp, str]] = {}
        self._lock = threading.Lock()

    def get(self, path: str) -> str:
        """Returns the HTML of the playbook at `path`, rendering it when the cached copy is stale.

        Raises `SourceUnavailableError` when `path` cannot be read.
        """
        key = os.path.abspath(path)
        stamp = _stamp(key)

        with self._lock:
            cached = self._entries.get(key)
        if cached is not None and cached[0] == stamp:
            logger.debug(f"Render cache hit for {path}")
            return cached[1]

        html = render(parse(key, encoding=self._encoding), config=self._config)
        with self._lock:
            self._entries[key] = (stamp, html)
        return html

    def invalidate(self, path: Optional[str] = None) -> None:
        """Drops the entry of `path`, or every entry when `path` is None."""
        with self._lock:
            if path is None:
                self._entries.clear()
            else:
                self._entries.pop(os.path.abspath(path), None)

    def __contains__(self, path: str) -> bool:
        with self._lock:
            return os.path.abspath(path) in self._entries


def _stamp(path: str) -> _Stamp:
    try:
        stat = os.stat(path)
    except OSError as error:
        raise SourceUnavailableError(path, reason=error.strerror or str(error)) from error
    return stat.st_mtime_ns, stat.st_size
