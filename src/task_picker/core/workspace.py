# src/task_picker/core/workspace.py

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class LocalWorkspace:
    """
    Workspace opened from a local path.

    A directory is a single-root workspace; a workspace file (listing several roots)
    is multi-root. No workspace at all counts as single-root.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path).expanduser() if path else None

    @property
    def is_multi_root(self) -> bool:
        if self.path is None:
            return False
        try:
            return self.path.exists() and not self.path.is_dir()
        except OSError:
            logger.warning("Cannot stat workspace path %s", self.path, exc_info=True)
            return False
