# src/task_picker/core/labels.py

"""
Display helpers for task sources and scopes.

Sources and scopes are opaque strings: usually `file://` URIs or plain paths,
sometimes a provider id (e.g. "npm"). Helpers accept all three.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from urllib.parse import unquote, urlparse


def uri_path(uri: str) -> str:
    """Path component of a URI (`file:///ws/a` -> `/ws/a`); plain strings pass through."""
    parsed = urlparse(uri)
    if parsed.scheme and parsed.path:
        return unquote(parsed.path)
    return uri


def uri_display_name(uri: str) -> str:
    """Last path segment (`file:///ws/.theia/tasks.json` -> `tasks.json`)."""
    path = uri_path(uri).rstrip("/")
    return PurePosixPath(path).name or path


class PathLabelProvider:
    """LabelProvider for local paths: long name is the full path with $HOME shortened to ~."""

    def __init__(self, home: str | Path | None = None) -> None:
        self._home = str(Path(home) if home is not None else Path.home()).rstrip("/")

    def get_long_name(self, uri: str) -> str:
        path = uri_path(uri)
        if self._home and (path == self._home or path.startswith(self._home + "/")):
            return "~" + path[len(self._home):]
        return path
